import pytest

from conftest import fill_row, keep_order, place_active
from falling_blocks.game import engine
from falling_blocks.game.pieces import TETROMINO_KEYS, TetrominoType as T, Vector2D
from falling_blocks.game.rules import BOARD_HEIGHT, BOARD_WIDTH, SOFT_DROP_POINTS
from falling_blocks.game.state import GameStatus, RotationDirection


def test_initial_state(state):
    assert state.playfield.grid.shape == (BOARD_HEIGHT, BOARD_WIDTH)
    assert not state.playfield.grid.any()
    assert state.active_piece is not None
    assert state.active_piece.kind == T.I
    assert state.active_piece.position == Vector2D(3, -2)
    assert state.active_piece.rotation == 0
    assert len(state.queue) >= 5
    assert state.status == GameStatus.IDLE
    assert state.level == 1
    assert state.score == 0
    assert state.hold is None
    assert state.can_hold


def test_initial_state_keeps_best_score():
    state = engine.create_initial_state(150, random_source=keep_order)
    assert state.best_score == 150


def test_reset_state_keeps_identity(state):
    state.score = 50
    state.playfield.grid[19, :] = 1
    state.status = GameStatus.OVER

    same = state
    engine.reset_state(state, 300)

    assert state is same
    assert state.score == 0
    assert state.best_score == 300
    assert not state.playfield.grid.any()
    assert state.status == GameStatus.IDLE
    assert state.active_piece is not None


def test_get_piece_blocks(state):
    assert engine.get_piece_blocks(state.active_piece) == [Vector2D(x, -1) for x in range(3, 7)]


# Moving


def test_move_left_when_free(state):
    assert engine.try_move(state, Vector2D(-1, 0))
    assert state.active_piece.position.x == 2


def test_move_into_wall_fails_without_change(state):
    piece = place_active(state, T.I, 0, 5)
    assert not engine.try_move(state, (-1, 0))
    assert state.active_piece is piece


def test_move_into_occupied_cell_fails(state):
    piece = place_active(state, T.I, 3, 5)
    state.playfield.grid[6, 7] = int(T.Z)
    assert not engine.try_move(state, (1, 0))
    assert state.active_piece is piece


def test_move_below_floor_fails(state):
    piece = place_active(state, T.I, 3, 18)
    assert not engine.try_move(state, (0, 1))
    assert state.active_piece is piece


def test_move_above_board_is_allowed(state):
    assert engine.try_move(state, (0, -1))
    assert state.active_piece.position.y == -3


def test_move_without_active_piece(state):
    state.active_piece = None
    assert not engine.try_move(state, (1, 0))


# Dropping


def test_soft_drop_scores_one_point(state):
    assert engine.soft_drop(state)
    assert state.active_piece.position.y == -1
    assert state.score == SOFT_DROP_POINTS


def test_soft_drop_on_floor_does_nothing(state):
    place_active(state, T.I, 3, 18)
    assert not engine.soft_drop(state)
    assert state.score == 0


def test_hard_drop_on_empty_board(state):
    distance = engine.hard_drop(state)

    assert distance == 20
    assert state.score == 40
    assert state.playfield.grid[19, 3:7].tolist() == [int(T.I)] * 4
    assert state.playfield.filled_cells() == [(x, 19) for x in range(3, 7)]
    assert state.active_piece.kind == T.O
    assert len(state.queue) == 5


def test_hard_drop_without_movement_still_locks(state):
    place_active(state, T.I, 3, 18)
    assert engine.hard_drop(state) == 0
    assert state.score == 0
    assert state.playfield.grid[19, 3:7].all()


def test_tick_moves_down(state):
    assert engine.tick(state)
    assert state.active_piece.position.y == -1
    assert state.score == 0


def test_tick_locks_when_blocked(state):
    place_active(state, T.I, 3, 18)
    assert engine.tick(state)
    assert state.playfield.grid[19, 3:7].all()
    assert state.active_piece.kind == T.O


def test_tick_without_active_piece(state):
    state.active_piece = None
    assert not engine.tick(state)


# Rotation


def test_rotate_uses_first_fitting_kick(state):
    place_active(state, T.T, 4, 10)
    state.playfield.grid[10, 5] = 1

    assert engine.try_rotate(state, RotationDirection.CW)

    # (+1, 0) fits as well, but (-1, 0) comes first
    assert state.active_piece.rotation == 1
    assert state.active_piece.position == Vector2D(3, 10)


def test_rotate_skips_blocked_kicks_in_order(state):
    place_active(state, T.T, 4, 10)
    state.playfield.grid[10, 5] = 1
    state.playfield.grid[10, 4] = 1

    assert engine.try_rotate(state, "cw")
    assert state.active_piece.position == Vector2D(5, 10)


def test_rotate_ccw_and_half_turn(state):
    place_active(state, T.T, 4, 10)
    assert engine.try_rotate(state, RotationDirection.CCW)
    assert state.active_piece.rotation == 3
    assert state.active_piece.position == Vector2D(4, 10)

    assert engine.try_rotate(state, RotationDirection.HALF_TURN)
    assert state.active_piece.rotation == 1
    assert state.active_piece.position == Vector2D(4, 10)


def test_rotate_fails_when_no_kick_fits(state):
    piece = place_active(state, T.T, 4, 10)
    state.playfield.grid[:, :] = 1
    for block in piece.blocks():
        state.playfield.grid[block.y, block.x] = 0

    assert not engine.try_rotate(state, RotationDirection.CW)
    assert state.active_piece is piece


def test_i_piece_uses_its_own_kicks(state):
    place_active(state, T.I, 7, 5, rotation=1)

    assert engine.try_rotate(state, RotationDirection.CW)

    # The basic table would have settled for (-1, 0)
    assert state.active_piece.rotation == 2
    assert state.active_piece.position == Vector2D(5, 5)


def test_o_piece_rotation_keeps_cells(state):
    piece = place_active(state, T.O, 4, 4)
    assert engine.try_rotate(state, RotationDirection.CW)
    assert set(state.active_piece.blocks()) == set(piece.blocks())


def test_rotate_rejects_unknown_direction(state):
    with pytest.raises(ValueError):
        engine.try_rotate(state, "sideways")


# Line clears and scoring


@pytest.mark.parametrize("count, base", [(1, 100), (2, 300), (3, 500), (4, 800)])
def test_line_clear_scoring(state, count, base):
    for row in range(BOARD_HEIGHT - count, BOARD_HEIGHT):
        fill_row(state, row, except_columns=(5,))
    place_active(state, T.I, 3, -2, rotation=1)
    state.level = 2

    distance = engine.hard_drop(state)

    assert distance == 18
    assert state.score == distance * 2 + base * 2
    assert state.last_cleared_lines == count
    assert state.lines == count
    # Leftover I cells shifted down; everything else is gone
    assert state.playfield.filled_cells() == [(5, row) for row in range(16 + count, 20)]


def test_lock_without_clear_records_zero(state):
    state.last_cleared_lines = 3
    engine.hard_drop(state)
    assert state.last_cleared_lines == 0
    assert state.lines == 0


def test_level_up_after_ten_lines(state):
    state.lines = 9
    fill_row(state, 19, except_columns=(3, 4, 5, 6))

    engine.hard_drop(state)

    assert state.lines == 10
    assert state.level == 2
    assert state.score == 140


def test_best_score_follows_score(state):
    fill_row(state, 19, except_columns=(3, 4, 5, 6))
    engine.hard_drop(state)
    assert state.best_score == state.score == 140


def test_best_score_is_not_lowered():
    state = engine.create_initial_state(10_000, random_source=keep_order)
    engine.hard_drop(state)
    assert state.best_score == 10_000


# Hold


def test_hold_stashes_and_spawns_next(state):
    assert engine.hold_piece(state)
    assert state.hold == T.I
    assert state.active_piece.kind == T.O
    assert not state.can_hold


def test_hold_twice_fails(state):
    assert engine.hold_piece(state)
    active = state.active_piece
    assert not engine.hold_piece(state)
    assert state.hold == T.I
    assert state.active_piece is active


def test_hold_into_empty_slot_stays_locked_until_lock(state):
    assert engine.hold_piece(state)
    # The fresh piece came from the queue, yet hold stays disabled
    assert state.active_piece.kind == T.O
    assert not state.can_hold

    assert not engine.hold_piece(state)
    assert state.hold == T.I
    assert state.active_piece.kind == T.O

    engine.hard_drop(state)
    assert state.can_hold


def test_hold_swaps_after_lock(state):
    engine.hold_piece(state)
    engine.hard_drop(state)
    assert state.can_hold
    assert state.active_piece.kind == T.T

    assert engine.hold_piece(state)
    assert state.hold == T.T
    assert state.active_piece.kind == T.I
    assert state.active_piece.rotation == 0
    assert state.active_piece.position == Vector2D(3, -2)


def test_hold_swap_collision_ends_game(state):
    state.hold = T.T
    state.playfield.grid[0, 4] = 1

    assert not engine.hold_piece(state)
    assert state.status == GameStatus.OVER
    assert state.active_piece is None


def test_hold_spawn_failure_ends_game(state):
    state.queue.insert(0, T.T)
    state.playfield.grid[0, 4] = 1

    assert not engine.hold_piece(state)
    assert state.hold == T.I
    assert state.status == GameStatus.OVER
    assert state.active_piece is None


def test_hold_without_active_piece(state):
    state.active_piece = None
    assert not engine.hold_piece(state)


# Spawning and the queue


def test_spawn_collision_installs_piece_and_reports_failure(state):
    state.queue.insert(0, T.T)
    state.playfield.grid[0, 4] = 1
    state.can_hold = False

    assert not engine.spawn_next_piece(state)
    assert state.active_piece.kind == T.T
    assert state.active_piece.position == Vector2D(3, -2)
    assert not state.can_hold


def test_spawn_reenables_hold(state):
    state.can_hold = False
    assert engine.spawn_next_piece(state)
    assert state.can_hold


def test_spawn_refills_empty_queue(state):
    state.queue = []
    assert engine.spawn_next_piece(state)
    assert state.active_piece.kind == T.I
    assert len(state.queue) == 6


def test_queue_is_consumed_in_bag_order(state):
    kinds = [state.active_piece.kind]
    for _ in range(13):
        engine.spawn_next_piece(state)
        kinds.append(state.active_piece.kind)
    assert kinds == list(TETROMINO_KEYS) * 2


def test_every_bag_window_holds_each_type_once():
    import random

    state = engine.create_initial_state(0, random_source=random.Random(7).random)
    kinds = [state.active_piece.kind]
    for _ in range(27):
        engine.spawn_next_piece(state)
        kinds.append(state.active_piece.kind)
    for start in range(0, 28, 7):
        assert sorted(kinds[start:start + 7]) == sorted(TETROMINO_KEYS)


def test_lock_ends_game_when_next_piece_cannot_spawn(state):
    place_active(state, T.O, 0, 18)
    state.queue.insert(0, T.T)
    state.playfield.grid[0, 4] = 1

    assert engine.tick(state)
    assert state.status == GameStatus.OVER
    assert state.active_piece is None


def test_lock_above_board_is_block_out(state):
    place_active(state, T.T, 3, -2)
    state.playfield.grid[1, 4] = 1

    assert not engine.tick(state)

    assert state.block_out
    assert state.playfield.grid[0, 4] == int(T.T)
    # Next piece still fits entirely above the board
    assert state.active_piece.kind == T.O
    assert state.status == GameStatus.IDLE


# Ghost


def test_ghost_on_empty_board(state):
    before = state.active_piece
    assert engine.calculate_ghost_blocks(state) == [Vector2D(x, 19) for x in range(3, 7)]
    assert state.active_piece is before


def test_ghost_rests_on_blocks(state):
    state.playfield.grid[10, 4] = 1
    assert engine.calculate_ghost_blocks(state) == [Vector2D(x, 9) for x in range(3, 7)]


def test_ghost_without_active_piece(state):
    state.active_piece = None
    assert engine.calculate_ghost_blocks(state) == []


def test_drop_interval_passthrough():
    assert engine.get_drop_interval(0) == 1000
    assert engine.get_drop_interval(3) == 618
    assert engine.get_drop_interval(12) == 64
