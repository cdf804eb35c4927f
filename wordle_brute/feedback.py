"""
Feedback Evaluation
===================

Scores a guess against a target the way Wordle does. Each position gets
GRAY (0), YELLOW (1) or GREEN (2); a whole pattern is packed into one
integer as base-3 digits with position 0 least significant, so for
five-letter words patterns run 0..242 and 242 is all green.

Greens are claimed first. Only the letters left over after the greens
can turn a misplaced guess letter yellow, so guessing SPEED against
CRANE marks one E yellow and the other gray.
"""

import string
from typing import Sequence, Tuple

import numpy as np
from numba import jit, prange


# ============================================================================
# CONSTANTS
# ============================================================================

GRAY = 0
YELLOW = 1
GREEN = 2

WORD_LENGTH = 5
ALPHABET = string.ascii_uppercase

PATTERN_CHARS = 'BYG'
EMOJI = ['⬛', '🟨', '🟩']


def n_patterns(word_length: int = WORD_LENGTH) -> int:
    """Number of distinct patterns for words of this length (3^L)."""
    return 3 ** word_length


def all_green(word_length: int = WORD_LENGTH) -> int:
    """Packed pattern of a correct guess (242 for five letters)."""
    return n_patterns(word_length) - 1


def pattern_dtype(word_length: int = WORD_LENGTH) -> np.dtype:
    """Smallest unsigned dtype that holds every packed pattern."""
    count = n_patterns(word_length)
    if count <= 256:
        return np.dtype(np.uint8)
    if count <= 65536:
        return np.dtype(np.uint16)
    return np.dtype(np.int32)


# ============================================================================
# NUMBA-ACCELERATED FEEDBACK COMPUTATION
# ============================================================================

@jit(nopython=True, cache=True)
def compute_feedback(guess: np.ndarray, answer: np.ndarray,
                     n_letters: int, label_all_dupes: bool) -> int:
    """
    Compute Wordle feedback for a guess against an answer.

    Args:
        guess: shape (L,) array of letter codes (indices into the alphabet)
        answer: shape (L,) array of letter codes
        n_letters: size of the alphabet
        label_all_dupes: if set, letter counts are never consumed, so every
            guessed letter that occurs anywhere in the answer is yellow

    Returns:
        Packed feedback pattern (0 .. 3^L - 1)
    """
    n = guess.shape[0]
    feedback = np.zeros(n, dtype=np.int32)
    answer_counts = np.zeros(n_letters, dtype=np.int32)

    # Count letters in answer
    for i in range(n):
        answer_counts[answer[i]] += 1

    # First pass: mark greens
    for i in range(n):
        if guess[i] == answer[i]:
            feedback[i] = GREEN
            if not label_all_dupes:
                answer_counts[guess[i]] -= 1

    # Second pass: mark yellows from what the greens left over
    for i in range(n):
        if feedback[i] == GRAY:
            c = guess[i]
            if answer_counts[c] > 0:
                feedback[i] = YELLOW
                if not label_all_dupes:
                    answer_counts[c] -= 1

    pattern = 0
    multiplier = 1
    for i in range(n):
        pattern += feedback[i] * multiplier
        multiplier *= 3
    return pattern


@jit(nopython=True, parallel=True, cache=True)
def _fill_feedback_matrix(guess_chars: np.ndarray, answer_chars: np.ndarray,
                          n_letters: int, label_all_dupes: bool,
                          out: np.ndarray) -> None:
    n_guesses = guess_chars.shape[0]
    n_answers = answer_chars.shape[0]

    for i in prange(n_guesses):
        for j in range(n_answers):
            out[i, j] = compute_feedback(guess_chars[i], answer_chars[j],
                                         n_letters, label_all_dupes)


def compute_feedback_matrix(guess_chars: np.ndarray, answer_chars: np.ndarray,
                            n_letters: int = len(ALPHABET),
                            label_all_dupes: bool = False) -> np.ndarray:
    """
    Compute feedback for all guess/answer pairs.

    Args:
        guess_chars: shape (n_guesses, L) array of letter codes
        answer_chars: shape (n_answers, L) array of letter codes

    Returns:
        shape (n_guesses, n_answers) feedback matrix
    """
    word_length = guess_chars.shape[1]
    out = np.zeros((guess_chars.shape[0], answer_chars.shape[0]),
                   dtype=pattern_dtype(word_length))
    _fill_feedback_matrix(guess_chars, answer_chars, n_letters,
                          label_all_dupes, out)
    return out


# ============================================================================
# WORD / PATTERN CONVERSION
# ============================================================================

def word_to_chars(word: str, alphabet: str = ALPHABET) -> np.ndarray:
    """Convert one word to its letter-code array."""
    try:
        return np.array([alphabet.index(c) for c in word], dtype=np.int32)
    except ValueError:
        raise ValueError(f"'{word}' has letters outside the alphabet") from None


def words_to_chars(words: Sequence[str], alphabet: str = ALPHABET) -> np.ndarray:
    """Convert equal-length words to a (n_words, L) letter-code array."""
    length = len(words[0]) if words else 0
    arr = np.zeros((len(words), length), dtype=np.int32)
    for i, w in enumerate(words):
        arr[i] = word_to_chars(w, alphabet)
    return arr


def encode_pattern(codes: Sequence[int]) -> int:
    """Pack per-position codes into a single integer."""
    pattern = 0
    multiplier = 1
    for code in codes:
        if code not in (GRAY, YELLOW, GREEN):
            raise ValueError(f"Invalid feedback code: {code}")
        pattern += code * multiplier
        multiplier *= 3
    return pattern


def decode_pattern(pattern: int, word_length: int = WORD_LENGTH) -> Tuple[int, ...]:
    """Unpack an integer pattern into per-position codes."""
    if not 0 <= pattern < n_patterns(word_length):
        raise ValueError(f"Pattern {pattern} out of range for length {word_length}")
    codes = []
    for _ in range(word_length):
        codes.append(pattern % 3)
        pattern //= 3
    return tuple(codes)


def pattern_to_string(pattern: int, word_length: int = WORD_LENGTH) -> str:
    """Convert integer pattern to a string such as 'BBYGG'."""
    return ''.join(PATTERN_CHARS[c] for c in decode_pattern(pattern, word_length))


def pattern_to_emoji(pattern: int, word_length: int = WORD_LENGTH) -> str:
    """Convert feedback pattern to emoji string."""
    return ''.join(EMOJI[c] for c in decode_pattern(pattern, word_length))


def evaluate(guess: str, target: str, label_all_dupes: bool = False,
             alphabet: str = ALPHABET) -> Tuple[int, ...]:
    """
    Per-position feedback for ``guess`` against ``target``.

    >>> evaluate('SLATE', 'CRANE')
    (0, 0, 2, 0, 2)
    """
    guess = guess.upper()
    target = target.upper()
    if len(guess) != len(target):
        raise ValueError(f"Length mismatch: '{guess}' vs '{target}'")
    pattern = compute_feedback(word_to_chars(guess, alphabet),
                               word_to_chars(target, alphabet),
                               len(alphabet), label_all_dupes)
    return decode_pattern(int(pattern), len(guess))
