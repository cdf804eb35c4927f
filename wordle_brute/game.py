"""
Game Simulation
===============

Plays one game against a known target: guess, read the feedback, keep
only the candidates that would have produced it, repeat until the guess
is the target.

    START --start()--> GUESSING --step() hits target--> SOLVED
"""

from enum import Enum
from typing import TYPE_CHECKING, List, NamedTuple, Optional

import numpy as np

from .errors import InvariantViolation
from .feedback import pattern_to_emoji, pattern_to_string

if TYPE_CHECKING:
    from .engine import Engine


class GameState(Enum):
    START = 'start'
    GUESSING = 'guessing'
    SOLVED = 'solved'


class Turn(NamedTuple):
    number: int
    guess: str
    pattern: int
    candidates_before: int
    candidates_after: int


class Game:
    """A single simulated game. Owns its candidate set; the engine is shared."""

    def __init__(self, engine: 'Engine', target: str):
        self.engine = engine
        self.target_idx = engine.index.index_of(target)
        self.target = engine.words[self.target_idx]

        self.state = GameState.START
        self.candidates: Optional[np.ndarray] = None
        self.turns: List[Turn] = []

    @property
    def n_guesses(self) -> int:
        return len(self.turns)

    @property
    def guesses(self) -> List[str]:
        return [t.guess for t in self.turns]

    @property
    def candidate_words(self) -> List[str]:
        if self.candidates is None:
            return list(self.engine.words)
        return self.engine.index.to_words(self.candidates)

    def start(self) -> None:
        if self.state is not GameState.START:
            raise InvariantViolation(f"Game for {self.target} already started")
        self.candidates = np.arange(self.engine.n_words, dtype=np.int32)
        self.state = GameState.GUESSING

    def step(self) -> Turn:
        """Make one guess and narrow the candidates."""
        if self.state is GameState.START:
            self.start()
        elif self.state is GameState.SOLVED:
            raise InvariantViolation(f"Game for {self.target} is already solved")

        number = self.n_guesses + 1
        if number > self.engine.n_words:
            raise InvariantViolation(
                f"No solution for {self.target} after {self.engine.n_words} guesses")

        if number == 1:
            guess_idx = self.engine.first_guess_idx
        else:
            guess_idx = self.engine.best_guess(self.candidates, number)

        index = self.engine.index
        pattern = int(index.matrix[guess_idx, self.target_idx])
        before = len(self.candidates)

        if guess_idx == self.target_idx:
            self.candidates = np.array([self.target_idx], dtype=np.int32)
            self.state = GameState.SOLVED
        else:
            remaining = index.filter(guess_idx, pattern, self.candidates)
            if len(remaining) >= before or self.target_idx not in remaining:
                raise InvariantViolation(
                    f"Guess {index.words[guess_idx]} didn't narrow {before} candidates "
                    f"soundly for {self.target}")
            self.candidates = remaining

        turn = Turn(number, index.words[guess_idx], pattern, before, len(self.candidates))
        self.turns.append(turn)
        return turn

    def run(self, verbose: bool = False) -> int:
        """Play to the end and return the number of guesses used."""
        while self.state is not GameState.SOLVED:
            turn = self.step()
            if verbose:
                fb_str = pattern_to_emoji(turn.pattern, self.engine.word_length)
                fb_code = pattern_to_string(turn.pattern, self.engine.word_length)
                print(f"  Guess #{turn.number}: {turn.guess} {fb_str} {fb_code} "
                      f"({turn.candidates_before} -> {turn.candidates_after} candidates)")
                if 1 < turn.candidates_after <= 10:
                    print(f"        remaining: {self.candidate_words}")
        if verbose:
            print(f"  The word was: {self.target}. Found it in {self.n_guesses} guesses!")
        return self.n_guesses
