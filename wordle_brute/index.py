"""
Pattern Index
=============

Precomputes the feedback of every (guess, candidate) pair in the
dictionary once, then groups candidates by (guess, pattern) so a
partition is a slice lookup rather than a scan.

Row ``g`` of ``matrix`` holds guess ``g``'s pattern against every word.
``order[g]`` lists word indices stably sorted by that pattern and
``offsets[g, p]:offsets[g, p + 1]`` is the slice of ``order[g]`` that
produces pattern ``p``. Within a slice indices stay ascending.
"""

import logging
import os
import time
import zipfile
from typing import FrozenSet, Iterable, List, Sequence, Union

import numpy as np
from numba import jit

from .errors import CacheReadFailure, UnknownWord
from .feedback import (ALPHABET, compute_feedback_matrix, n_patterns,
                       words_to_chars)

logger = logging.getLogger(__name__)

Guess = Union[str, int]


def _npz_path(path: str) -> str:
    return path if path.endswith('.npz') else path + '.npz'


@jit(nopython=True, cache=True)
def compute_partition_offsets(feedback_matrix: np.ndarray, n_pat: int) -> np.ndarray:
    """Start offset of each pattern's group in every stably-sorted row."""
    n_rows, n_cols = feedback_matrix.shape
    offsets = np.zeros((n_rows, n_pat + 1), dtype=np.int32)
    for i in range(n_rows):
        for j in range(n_cols):
            offsets[i, feedback_matrix[i, j] + 1] += 1
        for p in range(n_pat):
            offsets[i, p + 1] += offsets[i, p]
    return offsets


class PatternIndex:
    """Read-only feedback matrix plus per-guess partitions of the dictionary."""

    def __init__(self, words: Sequence[str], matrix: np.ndarray,
                 alphabet: str = ALPHABET, label_all_dupes: bool = False):
        self.words = tuple(words)
        self.word_to_idx = {w: i for i, w in enumerate(self.words)}
        self.word_length = len(self.words[0])
        self.alphabet = alphabet
        self.label_all_dupes = label_all_dupes
        self.n_words = len(self.words)
        self.n_patterns = n_patterns(self.word_length)

        self.matrix = matrix
        self.order = np.argsort(matrix, axis=1, kind='stable').astype(np.int32)
        self.offsets = compute_partition_offsets(matrix, self.n_patterns)
        for arr in (self.matrix, self.order, self.offsets):
            arr.setflags(write=False)

    @classmethod
    def build(cls, words: Sequence[str], alphabet: str = ALPHABET,
              label_all_dupes: bool = False) -> 'PatternIndex':
        """Compute the full |D| x |D| feedback matrix and index it."""
        chars = words_to_chars(words, alphabet)
        logger.info("Precomputing feedback matrix (%d x %d)...", len(words), len(words))
        start = time.time()
        matrix = compute_feedback_matrix(chars, chars, len(alphabet), label_all_dupes)
        elapsed = time.time() - start
        logger.info("Done in %.1fs", elapsed)
        return cls(words, matrix, alphabet, label_all_dupes)

    # ------------------------------------------------------------------
    # persistence
    # ------------------------------------------------------------------

    def save(self, path: str) -> None:
        """Write the feedback matrix to an .npz file."""
        np.savez_compressed(_npz_path(path),
                            words=np.array(self.words),
                            matrix=self.matrix,
                            alphabet=np.array(self.alphabet),
                            label_all_dupes=np.array(self.label_all_dupes))
        logger.info("Saved feedback matrix to %s", path)

    @classmethod
    def load(cls, path: str, words: Sequence[str], alphabet: str = ALPHABET,
             label_all_dupes: bool = False) -> 'PatternIndex':
        """
        Load a matrix written by :meth:`save`.

        Raises CacheReadFailure if the file can't be read or was built for a
        different word list, alphabet or duplicate-letter policy.
        """
        try:
            with np.load(_npz_path(path), allow_pickle=False) as data:
                saved_words = [str(w) for w in data['words']]
                matrix = np.array(data['matrix'])
                saved_alphabet = str(data['alphabet'])
                saved_dupes = bool(data['label_all_dupes'])
        except (OSError, KeyError, ValueError, EOFError, zipfile.BadZipFile) as e:
            raise CacheReadFailure(f"Couldn't read matrix cache '{path}': {e}") from e

        if saved_words != list(words):
            raise CacheReadFailure(f"Matrix cache '{path}' was built for another word list")
        if saved_alphabet != alphabet or saved_dupes != label_all_dupes:
            raise CacheReadFailure(f"Matrix cache '{path}' was built with other settings")
        if matrix.shape != (len(words), len(words)):
            raise CacheReadFailure(f"Matrix cache '{path}' has shape {matrix.shape}")
        logger.info("Loaded feedback matrix from %s", path)
        return cls(words, matrix, alphabet, label_all_dupes)

    # ------------------------------------------------------------------
    # lookups
    # ------------------------------------------------------------------

    def index_of(self, word: Guess) -> int:
        if isinstance(word, (int, np.integer)):
            if not 0 <= word < self.n_words:
                raise UnknownWord(f"Word index {word} out of range")
            return int(word)
        idx = self.word_to_idx.get(word.upper())
        if idx is None:
            raise UnknownWord(f"'{word}' is not in the dictionary")
        return idx

    def indices_of(self, words: Union[np.ndarray, Iterable[str]]) -> np.ndarray:
        """Sorted index array for a collection of words (or indices)."""
        if isinstance(words, np.ndarray):
            return np.unique(words.astype(np.int32))
        return np.unique(np.array([self.index_of(w) for w in words], dtype=np.int32))

    def feedback(self, guess: Guess, answer: Guess) -> int:
        """Packed pattern of ``guess`` against ``answer``."""
        return int(self.matrix[self.index_of(guess), self.index_of(answer)])

    def partition_indices(self, guess_idx: int, pattern: int) -> np.ndarray:
        """Indices of every word that gives ``pattern`` against the guess."""
        if not 0 <= pattern < self.n_patterns:
            return np.zeros(0, dtype=np.int32)
        lo = self.offsets[guess_idx, pattern]
        hi = self.offsets[guess_idx, pattern + 1]
        return self.order[guess_idx, lo:hi]

    def partition(self, guess: Guess, pattern: int) -> FrozenSet[str]:
        """Words that would produce ``pattern`` against ``guess``."""
        members = self.partition_indices(self.index_of(guess), pattern)
        return frozenset(self.words[i] for i in members)

    def count_matching(self, guess: Guess, pattern: int,
                       candidates: Union[np.ndarray, Iterable[str]]) -> int:
        """Size of partition(guess, pattern) intersected with the candidates."""
        members = self.partition_indices(self.index_of(guess), pattern)
        cands = self.indices_of(candidates)
        return int(np.intersect1d(members, cands, assume_unique=True).size)

    def filter(self, guess_idx: int, pattern: int, candidates: np.ndarray) -> np.ndarray:
        """Candidates consistent with seeing ``pattern`` after the guess."""
        members = self.partition_indices(guess_idx, pattern)
        return np.intersect1d(members, candidates, assume_unique=True).astype(np.int32)

    def to_words(self, indices: Iterable[int]) -> List[str]:
        return [self.words[i] for i in indices]

    @staticmethod
    def exists(path: str) -> bool:
        return os.path.exists(_npz_path(path))
