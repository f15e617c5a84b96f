from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

import numpy as np

from .rules import BOARD_HEIGHT, BOARD_WIDTH


Coordinate = Tuple[int, int]


@dataclass
class PlacementResult:
    lines_cleared: int
    block_out: bool


class GameGrid:
    """Fixed-size playfield.

    The grid uses 0 for empty cells and the ``TetrominoType`` value of the
    locked piece for filled cells. Row 0 is the top visible row; negative
    rows are the hidden space above the board.
    """

    def __init__(self, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        for x, y in cells:
            if x < 0 or x >= self.width:
                return False
            if y >= self.height:
                return False
            # Above the board is always open
            if y < 0:
                continue
            if self.grid[y, x] != 0:
                return False
        return True

    def place(self, cells: Iterable[Coordinate], value: int) -> PlacementResult:
        """Commit cells with ``value``, clear full lines and report the result.

        Cells above the board are not stored; any such cell flags a block out.
        """
        block_out = False
        for x, y in cells:
            if y < 0:
                block_out = True
                continue
            self.grid[y, x] = value
        lines = self._clear_full_lines()
        return PlacementResult(lines_cleared=lines, block_out=block_out)

    def _clear_full_lines(self) -> int:
        full_rows = np.where(np.all(self.grid != 0, axis=1))[0]
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        # Remove full rows and add empty rows at the top
        remaining = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, remaining))
        return num

    def filled_cells(self) -> List[Coordinate]:
        ys, xs = np.nonzero(self.grid)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
