import numpy as np
import pytest

from wordle_brute.errors import InvariantViolation
from wordle_brute.feedback import encode_pattern, evaluate
from wordle_brute.index import PatternIndex
from wordle_brute.selector import score_guesses, select_guess

from .conftest import SMALL_WORDS, TOY_WORDS


@pytest.fixture(scope="module")
def toy_index():
    return PatternIndex.build(sorted(TOY_WORDS))


@pytest.fixture(scope="module")
def small_index():
    return PatternIndex.build(sorted(w.upper() for w in SMALL_WORDS))


def brute_force_score(index, guess, candidates):
    words = index.to_words(candidates)
    return sum(index.count_matching(guess, encode_pattern(evaluate(guess, answer)), words)
               for answer in words)


def test_scores_match_definition(small_index):
    candidates = np.array([0, 3, 5, 8, 13, 21, 34], dtype=np.int32)
    guesses = np.arange(small_index.n_words, dtype=np.int32)
    totals, worst = score_guesses(small_index.matrix, guesses, candidates, small_index.n_patterns)
    for g in guesses:
        assert totals[g] == brute_force_score(small_index, small_index.words[g], candidates)
        largest = max(len(small_index.filter(g, p, candidates))
                      for p in range(small_index.n_patterns))
        assert worst[g] == largest


def test_toy_first_guess(toy_index):
    everything = np.arange(toy_index.n_words, dtype=np.int32)
    # PLATE splits the toy dictionary into singletons, everything else leaves a pair
    assert toy_index.words[select_guess(toy_index, everything, everything)] == "PLATE"
    assert toy_index.words[select_guess(toy_index, everything, everything, 'worst')] == "PLATE"


def test_tie_prefers_candidate(toy_index):
    everything = np.arange(toy_index.n_words, dtype=np.int32)
    candidates = toy_index.indices_of(["PLATE", "SLATE"])
    # GRAPE, PLATE and SLATE all separate the pair; GRAPE comes first but can't be the answer
    assert toy_index.words[select_guess(toy_index, everything, candidates)] == "PLATE"


def test_tie_without_candidates_takes_first(toy_index):
    candidates = toy_index.indices_of(["PLATE", "SLATE"])
    pool = toy_index.indices_of(["CRANE", "TRACE"])
    assert toy_index.words[select_guess(toy_index, pool, candidates)] == "CRANE"


def test_single_candidate_is_chosen(small_index):
    everything = np.arange(small_index.n_words, dtype=np.int32)
    for word in ("MAGMA", "JAZZY", "ERASE"):
        candidates = small_index.indices_of([word])
        assert small_index.words[select_guess(small_index, everything, candidates)] == word


def test_pool_order_does_not_matter(small_index):
    everything = np.arange(small_index.n_words, dtype=np.int32)
    candidates = everything[::3]
    assert select_guess(small_index, everything, candidates) == \
        select_guess(small_index, everything[::-1], candidates)


def test_empty_inputs_are_defects(toy_index):
    everything = np.arange(toy_index.n_words, dtype=np.int32)
    empty = np.zeros(0, dtype=np.int32)
    with pytest.raises(InvariantViolation):
        select_guess(toy_index, empty, everything)
    with pytest.raises(InvariantViolation):
        select_guess(toy_index, everything, empty)


def test_unknown_metric(toy_index):
    everything = np.arange(toy_index.n_words, dtype=np.int32)
    with pytest.raises(ValueError):
        select_guess(toy_index, everything, everything, 'entropy')
