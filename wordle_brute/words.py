"""Word-list loading and normalisation."""

import logging
from typing import Iterable, List

from .errors import EmptyDictionary, MalformedWord, MissingDictionaryFile
from .feedback import ALPHABET, WORD_LENGTH

logger = logging.getLogger(__name__)


def normalize_word(raw: str, word_length: int = WORD_LENGTH,
                   alphabet: str = ALPHABET) -> str:
    """Strip and uppercase ``raw``; raise MalformedWord if it doesn't fit."""
    word = raw.strip().upper()
    if len(word) != word_length:
        raise MalformedWord(f"'{word}' is not {word_length} letters long")
    bad = [c for c in word if c not in alphabet]
    if bad:
        raise MalformedWord(f"'{word}' has letters outside the alphabet: {''.join(bad)}")
    return word


def normalize_words(raw_words: Iterable[str], word_length: int = WORD_LENGTH,
                    alphabet: str = ALPHABET, strict: bool = False,
                    source: str = '<words>') -> List[str]:
    """
    Normalise a list of words into a dictionary.

    Blank entries are ignored and duplicates collapse. The result is sorted,
    which fixes the order every tie-break in the solver depends on.

    Malformed entries are skipped with a warning, or raise MalformedWord
    when ``strict`` is set.
    """
    seen = set()
    skipped = 0
    for lineno, raw in enumerate(raw_words, 1):
        if not raw.strip():
            continue
        try:
            seen.add(normalize_word(raw, word_length, alphabet))
        except MalformedWord as e:
            if strict:
                raise MalformedWord(f"{source}:{lineno}: {e}") from None
            logger.warning("Skipping %s:%d: %s", source, lineno, e)
            skipped += 1

    if not seen:
        raise EmptyDictionary(f"No {word_length}-letter words in {source}")
    if skipped:
        logger.warning("Skipped %d malformed entries in %s", skipped, source)
    return sorted(seen)


def load_words(filepath: str, word_length: int = WORD_LENGTH,
               alphabet: str = ALPHABET, strict: bool = False) -> List[str]:
    """Load word list from file, one word per line."""
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            lines = f.readlines()
    except OSError as e:
        raise MissingDictionaryFile(f"Couldn't read word list '{filepath}': {e}") from e

    words = normalize_words(lines, word_length, alphabet, strict, source=filepath)
    logger.info("Loaded %d words from %s", len(words), filepath)
    return words
