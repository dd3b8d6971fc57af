from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Position:
    """Grid coordinate: x is the column, y is the row"""
    x: int
    y: int

    def __add__(self, other: 'Position') -> 'Position':
        return Position(self.x + other.x, self.y + other.y)

    def as_move(self) -> dict:
        """Wire form used by the HTTP layer ({"r": row, "c": col})"""
        return {"r": self.y, "c": self.x}


# Unit direction vectors (y grows downwards)
UP = Position(0, -1)
DOWN = Position(0, 1)
LEFT = Position(-1, 0)
RIGHT = Position(1, 0)
UP_LEFT = Position(-1, -1)
UP_RIGHT = Position(1, -1)
DOWN_LEFT = Position(-1, 1)
DOWN_RIGHT = Position(1, 1)

# Default flip directions (no diagonals)
CARDINAL: Tuple[Position, ...] = (DOWN, LEFT, UP, RIGHT)

# All eight directions (standard Othello)
COMPASS: Tuple[Position, ...] = CARDINAL + (UP_LEFT, UP_RIGHT, DOWN_LEFT, DOWN_RIGHT)

DIRECTION_SETS = {
    "cardinal": CARDINAL,
    "compass": COMPASS,
}

# Returned when raw input maps outside the grid
INVALID_POSITION = Position(-1, -1)
