"""
First-guess cache.

The opening guess is the most expensive thing the solver computes (one
selector pass over the whole dictionary against itself), so it is kept
between runs. Anything that can load and store one word will do.

Entries carry a key naming the scoring settings they were computed
under, so a guess picked with another metric or duplicate-letter policy
isn't reused.
"""

import logging
import os
from typing import Dict, Optional

from .errors import CacheReadFailure

logger = logging.getLogger(__name__)


class FirstGuessCache:
    """Load/store a single precomputed opening guess."""

    def load(self, key: str) -> Optional[str]:
        """Return the word cached under ``key``, or None if there isn't one."""
        raise NotImplementedError

    def store(self, word: str, key: str) -> None:
        raise NotImplementedError


class MemoryFirstGuessCache(FirstGuessCache):
    """Holds entries in a dict. A word given up front matches any key."""

    def __init__(self, word: Optional[str] = None):
        self.word = word
        self.entries: Dict[str, str] = {}
        self.stores = 0

    def load(self, key: str) -> Optional[str]:
        return self.entries.get(key, self.word)

    def store(self, word: str, key: str) -> None:
        self.entries[key] = word
        self.word = word
        self.stores += 1


class FileFirstGuessCache(FirstGuessCache):
    """
    The word on the first line of a text file, its key on the second.

    An empty or missing file means no entry. A file holding just a word
    is trusted whatever the key.
    """

    def __init__(self, path: str):
        self.path = path

    def load(self, key: str) -> Optional[str]:
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                lines = [line.strip() for line in f.read().strip().splitlines()]
        except (OSError, UnicodeDecodeError) as e:
            raise CacheReadFailure(f"Couldn't read first-guess cache '{self.path}': {e}") from e

        if not lines:
            return None
        word = lines[0]
        if len(lines) > 2 or len(word.split()) != 1 or not word.isalpha():
            raise CacheReadFailure(f"First-guess cache '{self.path}' is malformed: {lines[0][:40]!r}")
        if len(lines) == 2 and lines[1] != key:
            logger.info("First-guess cache '%s' is for '%s', not '%s'", self.path, lines[1], key)
            return None
        return word.upper()

    def store(self, word: str, key: str) -> None:
        with open(self.path, 'w', encoding='utf-8') as f:
            f.write(f"{word}\n{key}\n")
        logger.info("Wrote first guess %s to %s", word, self.path)
