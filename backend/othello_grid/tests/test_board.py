import pytest

from othello_grid.board import BLACK, DRAW, EMPTY, WHITE, Board
from othello_grid.position import COMPASS, DOWN, INVALID_POSITION, LEFT, RIGHT, UP, Position
from othello_grid.selector import RandomPolicy

CENTER = [Position(3, 3), Position(4, 3), Position(3, 4), Position(4, 4)]
STANDARD_OPENINGS = {Position(3, 2), Position(2, 3), Position(5, 4), Position(4, 5)}


def test_new_board_is_empty_with_center_moves():
    b = Board()
    assert b.count() == (0, 0)
    assert b.move_count == 0
    assert b.legal_for == BLACK
    assert list(b.current_moves) == CENTER


def test_too_small_board_rejected():
    with pytest.raises(ValueError):
        Board(1, 8)


def test_opening_gate_excludes_occupied_center_cells():
    b = Board()
    flips = b.apply_move(Position(3, 3), BLACK)
    assert flips == []
    assert b.move_count == 1
    assert b.legal_for == WHITE
    assert list(b.current_moves) == CENTER[1:]
    # The gate ignores the player
    assert b.legal_moves(BLACK) == b.legal_moves(WHITE)


def test_opening_gate_is_counter_based(empty_rows):
    rows = empty_rows()
    rows[3][3] = BLACK
    rows[3][4] = WHITE
    rows[4][3] = WHITE
    rows[4][4] = BLACK
    rows[2][4] = BLACK
    # Centre is full but the counter still says opening: nothing is legal
    b = Board.from_rows(rows, move_count=2)
    assert b.legal_moves(BLACK) == []
    b = Board.from_rows(rows, move_count=4)
    assert b.legal_moves(BLACK) != []


def test_odd_sized_board_center():
    b = Board(5, 7)
    assert b.center_cells() == [Position(1, 2), Position(2, 2), Position(1, 3), Position(2, 3)]


def test_flip_run_bracketed(empty_rows):
    rows = empty_rows()
    rows[3][4] = WHITE
    rows[3][5] = WHITE
    rows[3][6] = BLACK
    b = Board.from_rows(rows)
    assert b.flip_run(Position(3, 3), BLACK, RIGHT) == [Position(4, 3), Position(5, 3)]
    assert b.flip_run(Position(3, 3), BLACK, LEFT) == []


def test_flip_run_off_grid_is_empty(empty_rows):
    rows = empty_rows()
    for x in range(1, 8):
        rows[0][x] = WHITE
    b = Board.from_rows(rows)
    assert b.flip_run(Position(0, 0), BLACK, RIGHT) == []


def test_flip_run_empty_terminated_is_empty(empty_rows):
    rows = empty_rows()
    rows[5][2] = WHITE
    rows[6][2] = WHITE
    b = Board.from_rows(rows)
    assert b.flip_run(Position(2, 4), BLACK, DOWN) == []


def test_flip_run_own_piece_first_is_empty(empty_rows):
    rows = empty_rows()
    rows[3][2] = BLACK
    rows[2][2] = BLACK
    b = Board.from_rows(rows)
    assert b.flip_run(Position(2, 4), BLACK, UP) == []


def test_flips_for_move_combines_directions(empty_rows):
    rows = empty_rows()
    rows[4][3] = WHITE
    rows[4][2] = BLACK
    rows[5][4] = WHITE
    rows[6][4] = BLACK
    b = Board.from_rows(rows)
    assert set(b.flips_for_move(Position(4, 4), BLACK)) == {Position(3, 4), Position(4, 5)}


def test_diagonals_only_with_compass(empty_rows):
    rows = empty_rows()
    rows[2][2] = BLACK
    rows[3][3] = WHITE
    cardinal = Board.from_rows(rows)
    compass = Board.from_rows(rows, directions=COMPASS)

    assert Position(4, 4) not in cardinal.legal_moves(BLACK)
    assert compass.legal_moves(BLACK) == [Position(4, 4)]
    assert compass.flips_for_move(Position(4, 4), BLACK) == [Position(3, 3)]


@pytest.mark.parametrize("directions", ["cardinal", "compass"])
def test_standard_opening(directions):
    kwargs = {"directions": COMPASS} if directions == "compass" else {}
    b = Board(standard_start=True, **kwargs)
    assert b.count() == (2, 2)
    assert set(b.legal_moves(BLACK)) == STANDARD_OPENINGS
    assert set(b.current_moves) == STANDARD_OPENINGS

    for move in STANDARD_OPENINGS:
        trial = b.copy()
        flips = trial.apply_move(move, BLACK)
        assert len(flips) == 1
        assert trial.move_count == 1
        assert trial.count() == (4, 1)
    # The copies left the source board alone
    assert b.count() == (2, 2)
    assert b.move_count == 0


def test_apply_move_updates_counts_and_cache(empty_rows):
    rows = empty_rows()
    rows[3][4] = WHITE
    rows[3][5] = BLACK
    rows[4][3] = WHITE
    rows[5][3] = BLACK
    b = Board.from_rows(rows)
    assert b.is_legal_move(Position(3, 3))

    flips = b.apply_move(Position(3, 3), BLACK)
    assert set(flips) == {Position(4, 3), Position(3, 4)}
    assert b.count() == (5, 0)
    assert b.move_count == 5
    assert b.legal_for == WHITE
    assert b.current_moves == ()


def test_random_play_properties():
    """Plays a full random game checking the engine invariants on every ply"""
    b = Board()
    policy = RandomPolicy(seed=7)
    color = BLACK
    center = set(b.center_cells())

    while True:
        moves = b.legal_moves(color)
        if not moves:
            color = -color
            moves = b.legal_moves(color)
            if not moves:
                break
            b.update_legal_moves(color)

        for m in moves:
            assert b.cell(m) == EMPTY
        if b.move_count < 4:
            assert set(moves) <= center

        move = policy.choose_move(b.current_moves)
        assert b.is_legal_move(move)
        mine, theirs = (b.count() if color == BLACK else b.count()[::-1])
        occupied = sum(b.count())
        flips = b.flips_for_move(move, color)
        for p in flips:
            assert b.cell(p) == -color

        b.apply_move(move, color)
        mine_after, theirs_after = (b.count() if color == BLACK else b.count()[::-1])
        assert mine_after == mine + 1 + len(flips)
        assert theirs_after == theirs - len(flips)
        assert sum(b.count()) == occupied + 1
        color = -color

    assert b.winner(False) in (BLACK, WHITE, DRAW)


def test_is_legal_move_rejects_invalid_position():
    b = Board()
    assert not b.is_legal_move(INVALID_POSITION)
    assert not b.is_legal_move(Position(0, 0))


def test_winner_full_board_draw(empty_rows):
    rows = empty_rows()
    for y in range(8):
        rows[y] = [BLACK] * 8 if y < 4 else [WHITE] * 8
    b = Board.from_rows(rows)
    assert b.winner(True) == DRAW
    assert b.winner(False) == DRAW


def test_winner_full_board_majority():
    rows = [[WHITE] * 8 for _ in range(8)]
    rows[0] = [BLACK] * 8
    b = Board.from_rows(rows)
    assert b.winner(True) == WHITE
    rows = [[BLACK] * 8 for _ in range(8)]
    rows[7][7] = WHITE
    assert Board.from_rows(rows).winner(True) == BLACK


def test_winner_with_empties(empty_rows):
    rows = empty_rows()
    rows[0][0] = WHITE
    rows[0][1] = WHITE
    rows[0][2] = BLACK
    b = Board.from_rows(rows)
    assert b.winner(True) is None
    assert b.winner(False) == WHITE
    rows[0][3] = BLACK
    assert Board.from_rows(rows).winner(False) == DRAW


def test_reset_returns_to_initial_state():
    b = Board()
    policy = RandomPolicy(seed=1)
    for _ in range(4):
        b.apply_move(policy.choose_move(b.current_moves), b.legal_for)
    assert b.move_count == 4

    b.reset()
    assert b.winner(True) is None
    assert b.move_count == 0
    assert b.count() == (0, 0)
    assert list(b.current_moves) == CENTER
    assert b.legal_for == BLACK


def test_snapshots_are_read_only():
    b = Board()
    snap = b.snapshot()
    assert isinstance(snap, tuple) and all(isinstance(row, tuple) for row in snap)
    moves = b.current_moves
    assert isinstance(moves, tuple)

    legal = b.get_legal_grid()
    legal[0][0] = 1
    assert not b.is_legal_move(Position(0, 0))


def test_from_rows_validation():
    with pytest.raises(ValueError):
        Board.from_rows([[0, 0], [0]])
    with pytest.raises(ValueError):
        Board.from_rows([[0, 2], [0, 0]])
