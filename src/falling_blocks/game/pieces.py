from __future__ import annotations

from enum import IntEnum
from typing import Dict, List, NamedTuple, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


class Vector2D(NamedTuple):
    x: int
    y: int


TETROMINO_KEYS: Tuple[TetrominoType, ...] = tuple(TetrominoType)

Rotation = Tuple[Vector2D, Vector2D, Vector2D, Vector2D]


def _blocks(*coords: Tuple[int, int]) -> Rotation:
    return tuple(Vector2D(x, y) for x, y in coords)  # type: ignore[return-value]


# Offsets are (column, row) inside a 4x4 box; row grows downwards.
# All four states are tabulated so kicks see the exact placement of each one.
ROTATIONS: Dict[TetrominoType, Tuple[Rotation, Rotation, Rotation, Rotation]] = {
    TetrominoType.I: (
        _blocks((0, 1), (1, 1), (2, 1), (3, 1)),
        _blocks((2, 0), (2, 1), (2, 2), (2, 3)),
        _blocks((0, 2), (1, 2), (2, 2), (3, 2)),
        _blocks((1, 0), (1, 1), (1, 2), (1, 3)),
    ),
    TetrominoType.O: (
        _blocks((1, 0), (2, 0), (1, 1), (2, 1)),
        _blocks((1, 0), (2, 0), (1, 1), (2, 1)),
        _blocks((1, 0), (2, 0), (1, 1), (2, 1)),
        _blocks((1, 0), (2, 0), (1, 1), (2, 1)),
    ),
    TetrominoType.T: (
        _blocks((0, 1), (1, 1), (2, 1), (1, 2)),
        _blocks((1, 0), (1, 1), (1, 2), (2, 1)),
        _blocks((0, 1), (1, 1), (2, 1), (1, 0)),
        _blocks((1, 0), (1, 1), (1, 2), (0, 1)),
    ),
    TetrominoType.S: (
        _blocks((1, 1), (2, 1), (0, 2), (1, 2)),
        _blocks((1, 0), (1, 1), (2, 1), (2, 2)),
        _blocks((1, 1), (2, 1), (0, 2), (1, 2)),
        _blocks((1, 0), (1, 1), (2, 1), (2, 2)),
    ),
    TetrominoType.Z: (
        _blocks((0, 1), (1, 1), (1, 2), (2, 2)),
        _blocks((2, 0), (1, 1), (2, 1), (1, 2)),
        _blocks((0, 1), (1, 1), (1, 2), (2, 2)),
        _blocks((2, 0), (1, 1), (2, 1), (1, 2)),
    ),
    TetrominoType.J: (
        _blocks((0, 1), (0, 2), (1, 2), (2, 2)),
        _blocks((1, 0), (2, 0), (1, 1), (1, 2)),
        _blocks((0, 1), (1, 1), (2, 1), (2, 2)),
        _blocks((1, 0), (1, 1), (0, 2), (1, 2)),
    ),
    TetrominoType.L: (
        _blocks((2, 1), (0, 2), (1, 2), (2, 2)),
        _blocks((1, 0), (1, 1), (1, 2), (2, 2)),
        _blocks((0, 1), (0, 2), (1, 1), (2, 1)),
        _blocks((0, 0), (1, 0), (1, 1), (1, 2)),
    ),
}


def rotation_blocks(kind: TetrominoType, rotation: int) -> Rotation:
    """Local block offsets of ``kind`` in rotation state ``rotation`` (0..3)."""
    return ROTATIONS[kind][rotation % 4]


def shape_mask(kind: TetrominoType, rotation: int = 0) -> np.ndarray:
    """Trimmed 0/1 mask of a rotation state, used for previews."""
    blocks = rotation_blocks(kind, rotation)
    min_x = min(b.x for b in blocks)
    min_y = min(b.y for b in blocks)
    w = max(b.x for b in blocks) - min_x + 1
    h = max(b.y for b in blocks) - min_y + 1
    mask = np.zeros((h, w), dtype=np.int8)
    for b in blocks:
        mask[b.y - min_y, b.x - min_x] = 1
    return mask


def absolute_blocks(kind: TetrominoType, rotation: int, origin: Vector2D) -> List[Vector2D]:
    return [Vector2D(b.x + origin.x, b.y + origin.y) for b in rotation_blocks(kind, rotation)]
