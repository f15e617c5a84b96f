"""State transitions of the falling-block engine.

Every operation takes the single ``GameState`` aggregate and mutates it in
place. Illegal moves, blocked rotations and failed spawns are ordinary
outcomes reported through the return value; nothing here raises for them.
"""

from __future__ import annotations

import random
from dataclasses import fields
from typing import List, Optional, Sequence, Tuple, Union

from .grid import GameGrid
from .pieces import TetrominoType, Vector2D
from .randomizer import RandomSource, create_bag
from .rules import (
    QUEUE_MIN_LENGTH,
    SPAWN_POSITION_X,
    SPAWN_POSITION_Y,
    ScoringRules,
    level_for_lines,
)
from .rules import get_drop_interval as _get_drop_interval
from .state import ActivePiece, GameState, GameStatus, RotationDirection


Offset = Union[Vector2D, Tuple[int, int]]

BASIC_KICKS: Tuple[Vector2D, ...] = (
    Vector2D(0, 0),
    Vector2D(-1, 0),
    Vector2D(1, 0),
    Vector2D(0, -1),
    Vector2D(-1, -1),
    Vector2D(1, -1),
)

I_KICKS: Tuple[Vector2D, ...] = (
    Vector2D(0, 0),
    Vector2D(-2, 0),
    Vector2D(1, 0),
    Vector2D(-2, -1),
    Vector2D(1, 2),
)

DOWN = Vector2D(0, 1)


def create_empty_playfield() -> GameGrid:
    return GameGrid()


def create_initial_state(
    best_score: int = 0,
    random_source: RandomSource = random.random,
    rules: Optional[ScoringRules] = None,
) -> GameState:
    state = GameState(
        playfield=create_empty_playfield(),
        queue=create_bag(random_source),
        best_score=best_score,
        rules=rules or ScoringRules(),
        random_source=random_source,
    )
    spawn_next_piece(state)
    return state


def reset_state(state: GameState, best_score: int = 0) -> None:
    """Replace every field of ``state`` with a fresh game, keeping its identity."""
    fresh = create_initial_state(best_score, random_source=state.random_source, rules=state.rules)
    for f in fields(GameState):
        setattr(state, f.name, getattr(fresh, f.name))


def get_drop_interval(level: int) -> int:
    return _get_drop_interval(level)


def get_piece_blocks(piece: ActivePiece) -> List[Vector2D]:
    return piece.blocks()


def can_place_piece(piece: ActivePiece, playfield: GameGrid) -> bool:
    return playfield.can_place(piece.blocks())


def _ensure_queue(state: GameState) -> None:
    while len(state.queue) < QUEUE_MIN_LENGTH:
        state.queue.extend(create_bag(state.random_source))


def _create_active_piece(kind: TetrominoType) -> ActivePiece:
    return ActivePiece(kind, 0, Vector2D(SPAWN_POSITION_X, SPAWN_POSITION_Y))


def spawn_next_piece(state: GameState) -> bool:
    """Pop the front of the queue into play.

    On collision the piece is still installed but False is returned so the
    caller can end the game.
    """
    _ensure_queue(state)
    piece = _create_active_piece(state.queue.pop(0))
    state.active_piece = piece
    if not can_place_piece(piece, state.playfield):
        return False
    state.can_hold = True
    return True


def hold_piece(state: GameState) -> bool:
    if state.active_piece is None or not state.can_hold:
        return False

    current = state.active_piece.kind
    held = state.hold
    state.can_hold = False
    if held is not None:
        replacement = _create_active_piece(held)
        if not can_place_piece(replacement, state.playfield):
            state.status = GameStatus.OVER
            state.active_piece = None
            return False
        state.hold = current
        state.active_piece = replacement
        return True

    state.hold = current
    spawned = spawn_next_piece(state)
    # Spawning re-enables hold; only a lock may do that here
    state.can_hold = False
    if not spawned:
        state.active_piece = None
        state.status = GameStatus.OVER
    return spawned


def try_move(state: GameState, offset: Offset) -> bool:
    if state.active_piece is None:
        return False
    dx, dy = offset
    candidate = state.active_piece.moved(dx, dy)
    if can_place_piece(candidate, state.playfield):
        state.active_piece = candidate
        return True
    return False


def try_rotate(state: GameState, direction: Union[RotationDirection, str]) -> bool:
    """Rotate with kicks; the first kick that fits wins, in table order."""
    if state.active_piece is None:
        return False
    direction = RotationDirection(direction)

    piece = state.active_piece
    next_rotation = (piece.rotation + direction.delta) % 4
    kicks: Sequence[Vector2D] = I_KICKS if piece.kind == TetrominoType.I else BASIC_KICKS
    for kick in kicks:
        candidate = piece.rotated(next_rotation, kick)
        if can_place_piece(candidate, state.playfield):
            state.active_piece = candidate
            return True
    return False


def soft_drop(state: GameState) -> bool:
    moved = try_move(state, DOWN)
    if moved:
        state.score += state.rules.soft_drop_points
    return moved


def hard_drop(state: GameState) -> int:
    """Drop to the floor, score the distance and lock. Returns the distance."""
    if state.active_piece is None:
        return 0
    distance = 0
    while try_move(state, DOWN):
        distance += 1
    state.score += state.rules.hard_drop_bonus(distance)
    _lock_piece(state)
    return distance


def tick(state: GameState) -> bool:
    """One gravity step.

    Returns False when there is no active piece, or when the piece locked
    above the visible board.
    """
    if state.active_piece is None:
        return False
    if try_move(state, DOWN):
        return True
    return _lock_piece(state)


def calculate_ghost_blocks(state: GameState) -> List[Vector2D]:
    if state.active_piece is None:
        return []
    ghost = state.active_piece
    while can_place_piece(ghost.moved(0, 1), state.playfield):
        ghost = ghost.moved(0, 1)
    return ghost.blocks()


def _lock_piece(state: GameState) -> bool:
    piece = state.active_piece
    if piece is None:
        return False

    result = state.playfield.place(piece.blocks(), int(piece.kind))
    state.block_out = result.block_out

    cleared = result.lines_cleared
    state.last_cleared_lines = cleared
    if cleared > 0:
        state.score += state.rules.score_for_lines(cleared, state.level)
        state.lines += cleared
        state.level = level_for_lines(state.lines)
    if state.score > state.best_score:
        state.best_score = state.score

    if not spawn_next_piece(state):
        state.status = GameStatus.OVER
        state.active_piece = None
    return not result.block_out
