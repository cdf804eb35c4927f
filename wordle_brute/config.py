"""
Configuration settings for the solver and benchmark.
Read from environment variables, with a .env file loaded if present.
Command-line flags override these in cli.py.
"""

import os
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

from .engine import POOLS
from .errors import ConfigError
from .feedback import ALPHABET, WORD_LENGTH
from .selector import METRICS

# Load environment variables from .env file if present
load_dotenv()

_TRUE = ('1', 'true', 'yes', 'on')
_FALSE = ('0', 'false', 'no', 'off', '')


class Config:
    """Configuration class for solver settings."""

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        env = os.environ if env is None else env

        self.DICTIONARY_PATH = env.get('WORDLE_DICTIONARY', 'words.txt')
        # empty string disables the cache
        self.CACHE_PATH = env.get('WORDLE_CACHE', 'first_guess.txt') or None
        self.MATRIX_CACHE_PATH = env.get('WORDLE_MATRIX_CACHE') or None

        self.SAMPLE = self._get_int(env, 'WORDLE_SAMPLE', None)
        self.SEED = self._get_int(env, 'WORDLE_SEED', 42)
        self.LABEL_ALL_DUPES = self._get_bool(env, 'WORDLE_LABEL_ALL_DUPES', False)
        self.VERBOSE = self._get_bool(env, 'WORDLE_VERBOSE', False)
        self.STRICT = self._get_bool(env, 'WORDLE_STRICT', False)

        self.POOL = env.get('WORDLE_POOL', 'dictionary')
        self.FULL_POOL_ROUNDS = self._get_rounds(env, 'WORDLE_FULL_POOL_ROUNDS')
        self.METRIC = env.get('WORDLE_METRIC', 'total')

        self.WORD_LENGTH = self._get_int(env, 'WORDLE_WORD_LENGTH', WORD_LENGTH)
        self.ALPHABET = env.get('WORDLE_ALPHABET', ALPHABET).upper()

        self.validate()

    @staticmethod
    def _get_int(env: Mapping[str, str], key: str, default: Optional[int]) -> Optional[int]:
        value = env.get(key)
        if value is None or value.strip() == '':
            return default
        try:
            return int(value)
        except ValueError:
            raise ConfigError(f"{key} must be an integer, got '{value}'") from None

    @staticmethod
    def _get_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
        value = env.get(key)
        if value is None:
            return default
        value = value.strip().lower()
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        raise ConfigError(f"{key} must be a boolean, got '{value}'")

    @staticmethod
    def _get_rounds(env: Mapping[str, str], key: str) -> Tuple[int, ...]:
        value = env.get(key, '')
        try:
            return tuple(int(r) for r in value.replace(',', ' ').split())
        except ValueError:
            raise ConfigError(f"{key} must be a list of round numbers, got '{value}'") from None

    def validate(self) -> None:
        """Validate that every setting is usable."""
        if not self.DICTIONARY_PATH:
            raise ConfigError("WORDLE_DICTIONARY must name a word-list file")
        if self.SAMPLE is not None and self.SAMPLE <= 0:
            raise ConfigError(f"Sample size must be positive, got {self.SAMPLE}")
        if self.POOL not in POOLS:
            raise ConfigError(f"Guess pool must be one of {POOLS}, got '{self.POOL}'")
        if self.METRIC not in METRICS:
            raise ConfigError(f"Metric must be one of {METRICS}, got '{self.METRIC}'")
        if self.WORD_LENGTH is None or self.WORD_LENGTH <= 0:
            raise ConfigError(f"Word length must be positive, got {self.WORD_LENGTH}")
        if not self.ALPHABET or len(set(self.ALPHABET)) != len(self.ALPHABET):
            raise ConfigError("Alphabet must be a non-empty string of distinct letters")
        if any(r < 1 for r in self.FULL_POOL_ROUNDS):
            raise ConfigError(f"Round numbers start at 1, got {self.FULL_POOL_ROUNDS}")
