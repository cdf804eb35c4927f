"""
Wordle Brute - Greedy Wordle Solver
===================================

Plays every word of a dictionary by always guessing the word that leaves
the fewest candidates indistinguishable, then reports how many guesses
that took.
"""

__version__ = "1.0.0"

from .feedback import GRAY, YELLOW, GREEN, evaluate
from .index import PatternIndex
from .selector import select_guess
from .game import Game, GameState, Turn
from .engine import Engine
from .benchmark import benchmark, print_results, sample_targets, summarize
from .words import load_words
