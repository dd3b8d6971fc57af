"""
Turn controller.

Drives one game: asks the engine for legal moves, gets a move from the
provider of the player to move, applies it and moves the state machine on.
A player without legal moves passes; when neither player can move the game
ends and the raw piece counts decide the result.
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple
import copy
import logging

from .board import BLACK, DRAW, WHITE, Board
from .config import GameConfig
from .position import DIRECTION_SETS, Position
from .selector import HumanInput, MoveProvider, RandomPolicy, make_provider

logger = logging.getLogger(__name__)


class GameState(Enum):
    BLACK_TURN = "black_turn"
    WHITE_TURN = "white_turn"
    DRAW = "draw"
    BLACK_WINS = "black_wins"
    WHITE_WINS = "white_wins"


STATUS_TEXT = {
    GameState.BLACK_TURN: "Black Player Turn",
    GameState.WHITE_TURN: "White Player Turn",
    GameState.DRAW: "Draw! Press R.",
    GameState.BLACK_WINS: "Black Player Wins! Press R.",
    GameState.WHITE_WINS: "White Player Wins! Press R.",
}

TURN_STATES = {BLACK: GameState.BLACK_TURN, WHITE: GameState.WHITE_TURN}
RESULT_STATES = {BLACK: GameState.BLACK_WINS, WHITE: GameState.WHITE_WINS, DRAW: GameState.DRAW}

COLOR_NAMES = {BLACK: "Black", WHITE: "White"}


class Game:
    """One game session: a board, a provider per color and the turn state"""

    def __init__(self, board: Board, providers: Optional[Dict[int, MoveProvider]] = None,
                 seed: Optional[int] = None):
        self.board = board
        self.providers = providers or {BLACK: HumanInput(), WHITE: HumanInput()}
        # Used for ai_move when the side to move has no computer provider
        self.fallback = RandomPolicy(seed)
        self.history: List[Tuple[Position, int]] = []
        self.state = GameState.BLACK_TURN
        self.transition(BLACK)

    @classmethod
    def from_config(cls, config: GameConfig) -> 'Game':
        """Human plays Black, ``config.opponent`` plays White"""
        board = Board(
            config.width,
            config.height,
            directions=DIRECTION_SETS[config.directions],
            standard_start=config.standard_start,
        )
        providers = {
            BLACK: HumanInput(),
            WHITE: make_provider(config.opponent, config.seed),
        }
        return cls(board, providers, seed=config.seed)

    @property
    def to_move(self) -> Optional[int]:
        """Color whose turn it is, None once the game is over"""
        if self.state == GameState.BLACK_TURN:
            return BLACK
        if self.state == GameState.WHITE_TURN:
            return WHITE
        return None

    @property
    def is_over(self) -> bool:
        return self.to_move is None

    @property
    def status(self) -> str:
        return STATUS_TEXT[self.state]

    @property
    def last_move(self) -> Optional[Position]:
        return self.history[-1][0] if self.history else None

    def transition(self, next_color: int):
        """Hand the turn to ``next_color``.

        If it has no legal move the other color keeps playing; if neither can
        move the game ends on the raw counts.
        """
        for candidate in (next_color, -next_color):
            self.board.update_legal_moves(candidate)
            if self.board.current_moves:
                if candidate != next_color:
                    logger.info("%s has no legal moves and passes", COLOR_NAMES[next_color])
                self.state = TURN_STATES[candidate]
                return

        result = self.board.winner(False)
        self.state = RESULT_STATES[result]
        black_count, white_count = self.board.count()
        logger.info("Game over: %s (black=%d white=%d)", self.status, black_count, white_count)

    def play_turn(self, position: Position) -> bool:
        """Play ``position`` for the color to move.

        Returns False, leaving the game unchanged, if the game is over or the
        position is not a legal move (this includes INVALID_POSITION).
        """
        color = self.to_move
        if color is None or not self.board.is_legal_move(position):
            logger.debug("Rejected move %s in state %s", position, self.state.name)
            return False

        flips = self.board.apply_move(position, color)
        self.history.append((position, color))
        logger.info("%s played (%d, %d) flipping %d", COLOR_NAMES[color], position.x, position.y, len(flips))
        self.transition(-color)
        return True

    def preview(self, position: Position) -> Tuple['Game', List[Position]]:
        """Play ``position`` on a copy of the game.

        Returns the copy, with the turn already handed over, and the flipped
        positions. The caller checks the move is legal first.
        """
        trial = copy.copy(self)
        trial.board = self.board.copy()
        trial.history = list(self.history)
        color = trial.to_move
        flips = trial.board.apply_move(position, color)
        trial.history.append((position, color))
        trial.transition(-color)
        return trial, flips

    def run(self) -> int:
        """Let providers play until a human is needed or the game ends.

        Returns the number of plies played.
        """
        plies = 0
        while not self.is_over:
            provider = self.providers[self.to_move]
            move = provider.choose_move(self.board.current_moves)
            if move is None or not self.play_turn(move):
                break
            plies += 1
        return plies

    def submit(self, position: Position) -> bool:
        """Queue a human move for the color to move, then run the turns it unlocks.

        Returns False if the color to move isn't human or the move was rejected.
        """
        if self.is_over:
            return False
        provider = self.providers[self.to_move]
        if not isinstance(provider, HumanInput):
            return False

        provider.submit(position)
        move_count = self.board.move_count
        self.run()
        return self.board.move_count > move_count

    def computer_move(self) -> Optional[Position]:
        """Play one computer move for the color to move.

        Uses the color's own provider if it is a computer policy, otherwise a
        random policy. Returns the move, or None if the game is over.
        """
        if self.is_over:
            return None
        provider = self.providers[self.to_move]
        if provider.is_interactive:
            provider = self.fallback
        move = provider.choose_move(self.board.current_moves)
        self.play_turn(move)
        return move

    def restart(self):
        """Reset the board and give the first turn back to Black"""
        self.board.reset()
        self.history = []
        for provider in self.providers.values():
            if isinstance(provider, HumanInput):
                provider.pending = None
        self.transition(BLACK)
