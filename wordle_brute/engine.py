"""
Solver engine.

One ``Engine`` per process holds everything the games share: the
dictionary, its pattern index, the opening guess and the guess policy.
None of it changes once built, so any number of games can read it.
"""

import logging
import time
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .cache import FileFirstGuessCache, FirstGuessCache
from .errors import CacheReadFailure, ConfigError
from .feedback import ALPHABET, WORD_LENGTH, decode_pattern
from .game import Game
from .index import PatternIndex
from .selector import METRICS, select_guess
from .words import load_words, normalize_words

if TYPE_CHECKING:
    from .config import Config

logger = logging.getLogger(__name__)

POOLS = ('dictionary', 'candidates')


class Engine:
    """
    Greedy Wordle solver over a single dictionary.

    Guess pool policy:
    - 'dictionary': every round may guess any dictionary word
    - 'candidates': later rounds guess only from the remaining candidates,
      except the rounds listed in ``full_pool_rounds``
    """

    def __init__(self, words: Sequence[str], word_length: int = WORD_LENGTH,
                 alphabet: str = ALPHABET, label_all_dupes: bool = False,
                 pool: str = 'dictionary', full_pool_rounds: Iterable[int] = (),
                 metric: str = 'total',
                 first_guess_cache: Optional[FirstGuessCache] = None,
                 index: Optional[PatternIndex] = None):
        if pool not in POOLS:
            raise ConfigError(f"Unknown guess pool '{pool}', expected one of {POOLS}")
        if metric not in METRICS:
            raise ConfigError(f"Unknown metric '{metric}', expected one of {METRICS}")

        self.words = tuple(normalize_words(words, word_length, alphabet, strict=True))
        self.word_length = word_length
        self.alphabet = alphabet
        self.label_all_dupes = label_all_dupes
        self.pool = pool
        self.full_pool_rounds = frozenset(full_pool_rounds)
        self.metric = metric
        self.first_guess_cache = first_guess_cache

        if index is None:
            index = PatternIndex.build(self.words, alphabet, label_all_dupes)
        elif index.words != self.words:
            raise ValueError("Pattern index was built for a different word list")
        self.index = index

        self.all_indices = np.arange(self.n_words, dtype=np.int32)
        self.all_indices.setflags(write=False)
        self._first_guess_idx: Optional[int] = None

    @property
    def cache_key(self) -> str:
        """Settings the opening guess depends on."""
        dupes = 'all' if self.label_all_dupes else 'standard'
        return f"metric={self.metric} dupes={dupes}"

    @classmethod
    def from_config(cls, config: 'Config') -> 'Engine':
        """Load the word list and caches named by ``config``."""
        words = load_words(config.DICTIONARY_PATH, config.WORD_LENGTH,
                           config.ALPHABET, strict=config.STRICT)

        index = None
        matrix_path = config.MATRIX_CACHE_PATH
        if matrix_path and PatternIndex.exists(matrix_path):
            try:
                index = PatternIndex.load(matrix_path, words, config.ALPHABET,
                                          config.LABEL_ALL_DUPES)
            except CacheReadFailure as e:
                logger.warning("%s; rebuilding", e)

        cache = FileFirstGuessCache(config.CACHE_PATH) if config.CACHE_PATH else None
        engine = cls(words,
                     word_length=config.WORD_LENGTH,
                     alphabet=config.ALPHABET,
                     label_all_dupes=config.LABEL_ALL_DUPES,
                     pool=config.POOL,
                     full_pool_rounds=config.FULL_POOL_ROUNDS,
                     metric=config.METRIC,
                     first_guess_cache=cache,
                     index=index)

        if matrix_path and index is None:
            try:
                engine.index.save(matrix_path)
            except OSError as e:
                logger.warning("Couldn't store feedback matrix: %s", e)
        return engine

    @property
    def n_words(self) -> int:
        return len(self.words)

    # ------------------------------------------------------------------
    # guess selection
    # ------------------------------------------------------------------

    @property
    def first_guess_idx(self) -> int:
        if self._first_guess_idx is None:
            self._first_guess_idx = self._setup_first_guess()
        return self._first_guess_idx

    @property
    def first_guess(self) -> str:
        return self.words[self.first_guess_idx]

    def _setup_first_guess(self) -> int:
        """Use the cached opening guess if it fits this dictionary, else compute it."""
        cached = None
        if self.first_guess_cache is not None:
            try:
                cached = self.first_guess_cache.load(self.cache_key)
            except CacheReadFailure as e:
                logger.warning("%s; recomputing first guess", e)

        if cached is not None:
            idx = self.index.word_to_idx.get(cached.upper())
            if idx is not None:
                logger.info("Using cached first guess: %s", cached)
                return idx
            logger.warning("Cached first guess '%s' not in dictionary, recomputing", cached)

        logger.info("Computing best first guess over %d words...", self.n_words)
        start = time.time()
        idx = select_guess(self.index, self.all_indices, self.all_indices, self.metric)
        logger.info("Best first guess: %s (%.1fs)", self.words[idx], time.time() - start)

        if self.first_guess_cache is not None:
            try:
                self.first_guess_cache.store(self.words[idx], self.cache_key)
            except OSError as e:
                logger.warning("Couldn't store first guess: %s", e)
        return idx

    def guess_pool(self, candidates: np.ndarray, round_number: int) -> np.ndarray:
        """Words allowed as the guess for this round."""
        if self.pool == 'dictionary' or round_number in self.full_pool_rounds:
            return self.all_indices
        return candidates

    def best_guess(self, candidates: np.ndarray, round_number: int = 2) -> int:
        """Index of the selector's choice for this round's candidate set."""
        return select_guess(self.index, self.guess_pool(candidates, round_number),
                            candidates, self.metric)

    def suggest(self, candidates: Iterable[str], round_number: int = 2) -> str:
        """Best next guess given the words still possible."""
        return self.words[self.best_guess(self.index.indices_of(candidates), round_number)]

    # ------------------------------------------------------------------
    # games
    # ------------------------------------------------------------------

    def evaluate(self, guess: str, target: str) -> Tuple[int, ...]:
        """Per-position feedback read from the precomputed matrix."""
        return decode_pattern(self.index.feedback(guess, target), self.word_length)

    def new_game(self, target: str) -> Game:
        return Game(self, target)

    def solve(self, target: str, verbose: bool = False) -> Tuple[int, List[str]]:
        """
        Solve for a given target word.

        Returns:
            (num_guesses, list_of_guesses)
        """
        game = self.new_game(target)
        game.run(verbose=verbose)
        return game.n_guesses, game.guesses
