"""
Guess Selection
===============

Greedy choice of the next guess. For a guess ``g`` and candidate set ``C``
the score is

    sum over answers a in C of |{c in C : fb(g, c) == fb(g, a)}|

i.e. for every answer that could be true, how many candidates would still
look the same after guessing ``g``. Grouping by pattern this is the sum of
squared partition sizes, so one pass over ``C`` per guess is enough.
Lower is better.
"""

from typing import Tuple

import numpy as np
from numba import jit

from .errors import InvariantViolation
from .index import PatternIndex

METRICS = ('total', 'worst')


@jit(nopython=True, cache=True)
def score_guesses(feedback_matrix: np.ndarray, guesses: np.ndarray,
                  candidates: np.ndarray, n_pat: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Score every guess in ``guesses`` against the candidate set.

    Returns:
        (totals, worst): sum of squared partition sizes and the largest
        partition size, one entry per guess
    """
    n = guesses.shape[0]
    totals = np.zeros(n, dtype=np.int64)
    worst = np.zeros(n, dtype=np.int64)
    sizes = np.zeros(n_pat, dtype=np.int64)

    for k in range(n):
        row = feedback_matrix[guesses[k]]
        for c in candidates:
            sizes[row[c]] += 1

        total = 0
        largest = 0
        for c in candidates:
            s = sizes[row[c]]
            if s > 0:
                total += s * s
                if s > largest:
                    largest = s
                # zero as we go so each partition is counted once
                sizes[row[c]] = 0

        totals[k] = total
        worst[k] = largest

    return totals, worst


def select_guess(index: PatternIndex, guess_pool: np.ndarray,
                 candidates: np.ndarray, metric: str = 'total') -> int:
    """
    Pick the guess that leaves the fewest candidates indistinguishable.

    Args:
        index: the dictionary's pattern index
        guess_pool: word indices allowed as guesses
        candidates: word indices still consistent with the feedback so far
        metric: 'total' ranks by summed partition sizes; 'worst' ranks by
            the largest partition first and breaks ties on the total

    Guesses are visited in ascending index (dictionary) order. A guess that
    ties the current best only replaces it when the best is not a candidate
    and the new guess is, so a candidate wins any tie it takes part in and
    the earliest tied guess wins otherwise.

    Returns:
        Word index of the chosen guess
    """
    if len(guess_pool) == 0:
        raise InvariantViolation("select_guess called with an empty guess pool")
    if len(candidates) == 0:
        raise InvariantViolation("select_guess called with no candidates")
    if metric not in METRICS:
        raise ValueError(f"Unknown metric '{metric}', expected one of {METRICS}")

    pool = np.unique(np.asarray(guess_pool, dtype=np.int32))
    cands = np.unique(np.asarray(candidates, dtype=np.int32))

    totals, worst = score_guesses(index.matrix, pool, cands, index.n_patterns)
    if metric == 'worst':
        keys = worst * (int(totals.max()) + 1) + totals
    else:
        keys = totals

    tied = pool[keys == keys.min()]
    is_candidate = np.isin(tied, cands, assume_unique=True)
    if is_candidate.any():
        return int(tied[np.argmax(is_candidate)])
    return int(tied[0])
