"""Exceptions raised by the solver, the loaders and the benchmark driver."""


class WordleError(Exception):
    """Base class for every error this package raises on purpose."""


class MissingDictionaryFile(WordleError, FileNotFoundError):
    """The word-list file is absent or unreadable."""


class EmptyDictionary(WordleError, ValueError):
    """The word list contained no usable words."""


class MalformedWord(WordleError, ValueError):
    """A word has the wrong length or a letter outside the alphabet."""


class UnknownWord(WordleError, ValueError):
    """A target or guess that is not in the dictionary."""


class CacheReadFailure(WordleError):
    """A cache file exists but can't be used. Callers recompute."""


class ConfigError(WordleError, ValueError):
    """Invalid configuration value."""


class InvariantViolation(WordleError, RuntimeError):
    """Internal defect: the solver reached a state that should be impossible."""
