import pytest

from wordle_brute.cache import MemoryFirstGuessCache
from wordle_brute.engine import Engine

TOY_WORDS = ["CRANE", "SLATE", "TRACE", "PLATE", "GRAPE"]

SMALL_WORDS = [
    "arise", "adieu", "alone", "angle", "apple", "baker", "basic", "beach", "beast", "belly",
    "brave", "candy", "cater", "chair", "crane", "cream", "crown", "eagle", "fancy", "flame",
    "glare", "grain", "grape", "graph", "great", "heart", "linen", "magma", "major", "maple",
    "ocean", "plant", "pride", "primo", "quiet", "raise", "ratio", "slate", "stare", "trace",
    "erase", "speed", "eerie", "mamma", "jazzy",
]


@pytest.fixture
def toy_engine():
    return Engine(TOY_WORDS, first_guess_cache=MemoryFirstGuessCache())


@pytest.fixture(scope="session")
def small_engine():
    return Engine(SMALL_WORDS)
