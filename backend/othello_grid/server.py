from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from collections import OrderedDict
from typing import List, Optional
import logging
import uuid

from .config import GameConfig, load_config
from .errors import IllegalMoveError, InvalidPositionError, SessionNotFoundError
from .game import Game
from .position import Position

logger = logging.getLogger(__name__)

app = FastAPI(title="Othello Grid Engine")

# Enable CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins for local dev
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Defaults for new sessions; read from othello.json on first use unless
# __main__ has already set them
default_config: Optional[GameConfig] = None

# Most sessions kept at once; the least recently used one is dropped first
MAX_SESSIONS = 256

# Each session owns its game exclusively; ordered by last use
sessions: "OrderedDict[str, Game]" = OrderedDict()


class Move(BaseModel):
    r: int
    c: int


class NewGameRequest(BaseModel):
    width: Optional[int] = None
    height: Optional[int] = None
    directions: Optional[str] = None
    standard_start: Optional[bool] = None
    opponent: Optional[str] = None
    seed: Optional[int] = None


class GameStateModel(BaseModel):
    session_id: str
    grid: List[List[int]]
    width: int
    height: int
    to_move: Optional[int]
    state: str
    status: str
    black: int
    white: int
    legal: List[List[int]]
    legal_moves: List[Move]
    move_count: int
    terminal: bool
    winner: Optional[int]
    last_move: Optional[Move] = None


class PreviewResponse(BaseModel):
    valid: bool
    flips: List[Move] = []
    state: Optional[GameStateModel] = None


def get_default_config() -> GameConfig:
    global default_config
    if default_config is None:
        default_config = load_config()
    return default_config


def _position(move: Move) -> Position:
    """Convert a wire move to a grid Position"""
    return Position(int(move.c), int(move.r))


def _wire(position: Position) -> Move:
    return Move(**position.as_move())


def _get_game(session_id: str) -> Game:
    try:
        game = sessions[session_id]
    except KeyError:
        raise SessionNotFoundError(session_id) from None
    sessions.move_to_end(session_id)
    return game


def _store_game(session_id: str, game: Game):
    sessions[session_id] = game
    while len(sessions) > MAX_SESSIONS:
        dropped, _ = sessions.popitem(last=False)
        logger.info("Dropped idle session %s", dropped)


@app.exception_handler(SessionNotFoundError)
async def session_not_found(request: Request, exc: SessionNotFoundError):
    return JSONResponse(status_code=404, content={"detail": f"Unknown session: {exc.args[0]}"})


def _check_move(game: Game, position: Position):
    """Reject moves the engine must never see"""
    if not game.board.in_bounds(position):
        raise InvalidPositionError(f"Position {position.as_move()} is off the board")
    if game.is_over:
        raise IllegalMoveError("Game is over")
    if not game.board.is_legal_move(position):
        raise IllegalMoveError(f"Invalid move: {position.as_move()}")


def _move_error(game: Game, position: Position, error: Exception) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail={
            "error": str(error),
            "requested": position.as_move(),
            "to_move": game.to_move,
            "legal": [m.as_move() for m in game.board.current_moves],
        },
    )


def board_to_state(session_id: str, game: Game) -> GameStateModel:
    """Convert a game to GameStateModel"""
    board = game.board
    black_count, white_count = board.count()
    last_mv = game.last_move
    return GameStateModel(
        session_id=session_id,
        grid=[list(row) for row in board.snapshot()],
        width=board.width,
        height=board.height,
        to_move=game.to_move,
        state=game.state.value,
        status=game.status,
        black=black_count,
        white=white_count,
        legal=board.get_legal_grid(),
        legal_moves=[_wire(m) for m in board.current_moves],
        move_count=board.move_count,
        terminal=game.is_over,
        winner=board.winner(False) if game.is_over else None,
        last_move=_wire(last_mv) if last_mv else None,
    )


@app.post("/sessions")
async def new_game(request: Optional[NewGameRequest] = None):
    """Start a new game session"""
    overrides = request.model_dump(exclude_none=True) if request else {}
    try:
        config = GameConfig(**{**get_default_config().model_dump(), **overrides})
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    session_id = uuid.uuid4().hex
    game = Game.from_config(config)
    game.run()
    _store_game(session_id, game)
    logger.info("Created session %s (%dx%d, opponent=%s)", session_id, config.width, config.height, config.opponent)
    return board_to_state(session_id, game)


@app.get("/sessions/{session_id}")
async def get_state(session_id: str):
    """Get current game state"""
    return board_to_state(session_id, _get_game(session_id))


@app.post("/sessions/{session_id}/preview", response_model=PreviewResponse)
async def preview_move(session_id: str, move: Move):
    """Preview a move without committing it"""
    game = _get_game(session_id)
    position = _position(move)
    try:
        _check_move(game, position)
    except (InvalidPositionError, IllegalMoveError):
        return PreviewResponse(valid=False)

    preview_game, flips = game.preview(position)
    return PreviewResponse(
        valid=True,
        flips=[_wire(p) for p in flips],
        state=board_to_state(session_id, preview_game),
    )


@app.post("/sessions/{session_id}/move")
async def make_move(session_id: str, move: Move):
    """Commit a human move; computer replies are played before returning"""
    game = _get_game(session_id)
    position = _position(move)
    try:
        _check_move(game, position)
    except (InvalidPositionError, IllegalMoveError) as e:
        raise _move_error(game, position, e)

    if not game.submit(position):
        raise HTTPException(status_code=400, detail="Side to move is not played by a human")
    return board_to_state(session_id, game)


@app.post("/sessions/{session_id}/ai_move")
async def ai_move(session_id: str):
    """Random move for the side to move"""
    game = _get_game(session_id)
    if game.is_over:
        raise HTTPException(status_code=400, detail="Game is over")

    game.computer_move()
    game.run()
    return board_to_state(session_id, game)


@app.post("/sessions/{session_id}/restart")
async def restart(session_id: str):
    """Reset the board of an existing session"""
    game = _get_game(session_id)
    game.restart()
    game.run()
    return board_to_state(session_id, game)


@app.delete("/sessions/{session_id}")
async def end_session(session_id: str):
    _get_game(session_id)
    del sessions[session_id]
    return {"deleted": True}


@app.get("/info")
async def get_info():
    """Get engine information"""
    return {
        "engine": "Random move selection",
        "sessions": len(sessions),
        "default_config": get_default_config().model_dump(),
    }
