from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from .engine import calculate_ghost_blocks
from .pieces import TetrominoType
from .rules import BOARD_WIDTH, BUFFER_ROWS, VISIBLE_ROWS
from .state import GameState


@dataclass(frozen=True)
class RenderCell:
    value: Optional[TetrominoType]
    is_active: bool = False
    is_ghost: bool = False


@dataclass(frozen=True)
class GameStatistics:
    score: int
    best_score: int
    level: int
    lines: int
    last_cleared_lines: int


def build_visible_matrix(state: GameState, ghost_enabled: bool = True) -> List[List[RenderCell]]:
    """Rows to display, including the buffer rows above the board.

    Display row ``r`` shows board row ``r - BUFFER_ROWS``. The active piece
    is drawn over everything; the ghost only over empty cells.
    """
    active: Dict[Tuple[int, int], TetrominoType] = {}
    ghost: Dict[Tuple[int, int], TetrominoType] = {}
    if state.active_piece is not None:
        kind = state.active_piece.kind
        for block in state.active_piece.blocks():
            active[(block.x, block.y)] = kind
        if ghost_enabled:
            for block in calculate_ghost_blocks(state):
                ghost[(block.x, block.y)] = kind

    rows: List[List[RenderCell]] = []
    for display_row in range(VISIBLE_ROWS):
        board_row = display_row - BUFFER_ROWS
        cells: List[RenderCell] = []
        for x in range(BOARD_WIDTH):
            key = (x, board_row)
            if key in active:
                cells.append(RenderCell(active[key], is_active=True))
                continue
            value: Optional[TetrominoType] = None
            if board_row >= 0:
                raw = int(state.playfield.grid[board_row, x])
                value = TetrominoType(raw) if raw else None
            if key in ghost and value is None:
                cells.append(RenderCell(ghost[key], is_ghost=True))
                continue
            cells.append(RenderCell(value))
        rows.append(cells)
    return rows


def overlay_board(state: GameState) -> np.ndarray:
    """Playfield copy with the active piece written as negative type values."""
    board = state.playfield.clone_state()
    if state.active_piece is not None:
        value = -int(state.active_piece.kind)
        for block in state.active_piece.blocks():
            if state.playfield.is_inside(block.x, block.y):
                board[block.y, block.x] = value
    return board


def queue_preview(state: GameState, count: int = 5) -> List[TetrominoType]:
    return list(state.queue[:count])


def statistics(state: GameState, best_score: Optional[int] = None) -> GameStatistics:
    best = state.best_score if best_score is None else max(best_score, state.best_score)
    return GameStatistics(
        score=state.score,
        best_score=best,
        level=state.level,
        lines=state.lines,
        last_cleared_lines=state.last_cleared_lines,
    )
