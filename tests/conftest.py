from __future__ import annotations

import pytest

from falling_blocks.game import engine
from falling_blocks.game.pieces import TetrominoType, Vector2D
from falling_blocks.game.state import ActivePiece, GameState


def keep_order() -> float:
    # floor(x * (i + 1)) == i for every swap, so bags come out as I O T S Z J L
    return 0.999999


def fill_row(state: GameState, row: int, except_columns=(), kind: TetrominoType = TetrominoType.Z) -> None:
    for x in range(state.playfield.width):
        if x not in except_columns:
            state.playfield.grid[row, x] = int(kind)


def place_active(state: GameState, kind: TetrominoType, x: int, y: int, rotation: int = 0) -> ActivePiece:
    piece = ActivePiece(kind, rotation, Vector2D(x, y))
    state.active_piece = piece
    return piece


@pytest.fixture
def state() -> GameState:
    return engine.create_initial_state(0, random_source=keep_order)
