"""
Move providers.

A MoveProvider is asked for a move by the turn controller whenever its
player is to move. Computer policies answer immediately; HumanInput answers
with whatever position was submitted from outside, or None while it waits.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
import random

from .errors import NoLegalMovesError
from .position import Position


class MoveProvider(ABC):
    """Source of moves for one player"""

    is_interactive = False

    @abstractmethod
    def choose_move(self, legal_moves: Sequence[Position]) -> Optional[Position]:
        """
        Pick a move.

        Args:
            legal_moves: Legal moves for the player to move, row-major order

        Returns:
            The chosen position, or None if the provider has nothing to play yet
        """

    def get_name(self) -> str:
        return self.__class__.__name__


class RandomPolicy(MoveProvider):
    """Uniform-random choice among the legal moves"""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self.rng = random.Random(seed)

    def choose_move(self, legal_moves: Sequence[Position]) -> Position:
        if not legal_moves:
            raise NoLegalMovesError("Cannot choose a move from an empty legal-move set")
        return self.rng.choice(list(legal_moves))


class FirstLegalPolicy(MoveProvider):
    """Always plays the first legal move (deterministic)"""

    def choose_move(self, legal_moves: Sequence[Position]) -> Position:
        if not legal_moves:
            raise NoLegalMovesError("Cannot choose a move from an empty legal-move set")
        return legal_moves[0]


class HumanInput(MoveProvider):
    """Holds the position a human submitted until the controller asks for it"""

    is_interactive = True

    def __init__(self):
        self.pending: Optional[Position] = None

    def submit(self, position: Position):
        self.pending = position

    def choose_move(self, legal_moves: Sequence[Position]) -> Optional[Position]:
        move, self.pending = self.pending, None
        return move


PROVIDERS = {
    "human": HumanInput,
    "random": RandomPolicy,
    "first": FirstLegalPolicy,
}


def make_provider(kind: str, seed: Optional[int] = None) -> MoveProvider:
    """Create a provider from its config name"""
    if kind not in PROVIDERS:
        raise ValueError(f"Unknown move provider: {kind!r}")
    if kind == "random":
        return RandomPolicy(seed)
    return PROVIDERS[kind]()
