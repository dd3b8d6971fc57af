from typing import FrozenSet, List, Optional, Sequence, Tuple
import copy

from .position import CARDINAL, Position

# Constants
EMPTY = 0
BLACK = 1
WHITE = -1
DRAW = 0

# Plies restricted to the centre square
OPENING_PLIES = 4

Grid = Tuple[Tuple[int, ...], ...]


class Board:
    """Othello board engine.

    The grid is stored row-major (``grid[y][x]``). Legal moves for the player
    to move are cached after every mutation, so ``is_legal_move`` never sees a
    stale set.
    """

    def __init__(self, width: int = 8, height: int = 8,
                 directions: Sequence[Position] = CARDINAL,
                 standard_start: bool = False):
        if width < 2 or height < 2:
            raise ValueError("Board must be at least 2x2")
        self.width = width
        self.height = height
        self.directions = tuple(directions)
        self.standard_start = standard_start
        self.grid: List[List[int]] = []
        self.move_count = 0
        self.legal_for = BLACK
        self._moves: List[Position] = []
        self._move_set: FrozenSet[Position] = frozenset()
        self.reset()

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]], move_count: int = OPENING_PLIES,
                  to_move: int = BLACK, **kwargs) -> 'Board':
        """Build a board from explicit rows (mostly for tests)"""
        height = len(rows)
        width = len(rows[0]) if rows else 0
        if any(len(r) != width for r in rows):
            raise ValueError("Rows must all have the same length")
        for row in rows:
            for cell in row:
                if cell not in (EMPTY, BLACK, WHITE):
                    raise ValueError(f"Invalid cell: {cell!r}")
        board = cls(width, height, **kwargs)
        board.grid = [list(r) for r in rows]
        board.move_count = move_count
        board.update_legal_moves(to_move)
        return board

    def copy(self) -> 'Board':
        """Create a deep copy of the board"""
        new_board = copy.copy(self)
        new_board.grid = copy.deepcopy(self.grid)
        new_board._moves = list(self._moves)
        return new_board

    def reset(self):
        """Clear the grid, zero the move counter and recompute moves for Black"""
        self.grid = [[EMPTY for _ in range(self.width)] for _ in range(self.height)]
        if self.standard_start:
            cx, cy = self.width // 2, self.height // 2
            self.grid[cy - 1][cx - 1] = WHITE
            self.grid[cy][cx] = WHITE
            self.grid[cy - 1][cx] = BLACK
            self.grid[cy][cx - 1] = BLACK
        self.move_count = 0
        self.update_legal_moves(BLACK)

    def in_bounds(self, position: Position) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def cell(self, position: Position) -> int:
        if not self.in_bounds(position):
            raise IndexError(f"Out of bounds: {position}")
        return self.grid[position.y][position.x]

    def center_cells(self) -> List[Position]:
        """The four centre cells in row-major order"""
        mx, my = self.width // 2 - 1, self.height // 2 - 1
        return [Position(x, y) for y in (my, my + 1) for x in (mx, mx + 1)]

    def in_opening(self) -> bool:
        """True while the first plies are restricted to the centre"""
        return not self.standard_start and self.move_count < OPENING_PLIES

    def legal_moves(self, color: int) -> List[Position]:
        """Legal moves for ``color`` in row-major order. Does not touch the cache."""
        if self.in_opening():
            return [p for p in self.center_cells() if self.grid[p.y][p.x] == EMPTY]

        moves = []
        for y in range(self.height):
            for x in range(self.width):
                if self.grid[y][x] == EMPTY and self._has_flip(Position(x, y), color):
                    moves.append(Position(x, y))
        return moves

    def _has_flip(self, position: Position, color: int) -> bool:
        return any(self.flip_run(position, color, d) for d in self.directions)

    def update_legal_moves(self, color: int):
        """Recompute and cache the legal moves for ``color``"""
        self._moves = self.legal_moves(color)
        self._move_set = frozenset(self._moves)
        self.legal_for = color

    @property
    def current_moves(self) -> Tuple[Position, ...]:
        """Cached legal moves for ``legal_for``"""
        return tuple(self._moves)

    def is_legal_move(self, position: Position) -> bool:
        return position in self._move_set

    def flip_run(self, position: Position, color: int, direction: Position) -> List[Position]:
        """Opponent pieces bracketed between ``position`` and a ``color`` piece.

        Empty when the walk leaves the grid or hits an empty cell first.
        """
        opponent = -color
        run = []
        pos = position + direction
        while self.in_bounds(pos) and self.grid[pos.y][pos.x] == opponent:
            run.append(pos)
            pos = pos + direction

        if not self.in_bounds(pos) or self.grid[pos.y][pos.x] != color:
            return []
        return run

    def flips_for_move(self, position: Position, color: int) -> List[Position]:
        """All pieces that flip if ``color`` plays at ``position``"""
        flips = []
        for direction in self.directions:
            flips.extend(self.flip_run(position, color, direction))
        return flips

    def apply_move(self, position: Position, color: int) -> List[Position]:
        """Place a piece for ``color``, flip every bracketed run and hand the
        legal-move cache to the opponent.

        The caller must check ``is_legal_move`` first: the move is not
        re-validated here and an illegal position corrupts the game state.
        Returns the flipped positions.
        """
        self.grid[position.y][position.x] = color
        flips = self.flips_for_move(position, color)
        for p in flips:
            self.grid[p.y][p.x] = color
        self.move_count += 1
        self.update_legal_moves(-color)
        return flips

    def count(self) -> Tuple[int, int]:
        """Return (black_count, white_count)"""
        black_count = sum(1 for row in self.grid for cell in row if cell == BLACK)
        white_count = sum(1 for row in self.grid for cell in row if cell == WHITE)
        return black_count, white_count

    def empty_count(self) -> int:
        black_count, white_count = self.count()
        return self.width * self.height - black_count - white_count

    def winner(self, count_empty_as_undecided: bool = True) -> Optional[int]:
        """Return winner: 1 (Black), -1 (White), 0 (Draw), or None (undecided).

        With ``count_empty_as_undecided`` False the raw counts decide even while
        empty cells remain (both players are out of moves).
        """
        if count_empty_as_undecided and self.empty_count() > 0:
            return None

        black_count, white_count = self.count()
        if black_count == white_count:
            return DRAW
        return BLACK if black_count > white_count else WHITE

    def snapshot(self) -> Grid:
        """Immutable copy of the grid"""
        return tuple(tuple(row) for row in self.grid)

    def get_legal_grid(self) -> List[List[int]]:
        """Grid showing cached legal moves (1 for legal, 0 for illegal)"""
        legal_grid = [[0 for _ in range(self.width)] for _ in range(self.height)]
        for move in self._moves:
            legal_grid[move.y][move.x] = 1
        return legal_grid

    def __str__(self) -> str:
        symbols = {EMPTY: ".", BLACK: "B", WHITE: "W"}
        lines = ["".join(symbols[cell] for cell in row) for row in self.grid]
        black_count, white_count = self.count()
        lines.append(f"B={black_count} W={white_count} moves={self.move_count}")
        return "\n".join(lines)
