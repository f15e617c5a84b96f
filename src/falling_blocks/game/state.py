from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from .grid import GameGrid
from .pieces import TetrominoType, Vector2D, absolute_blocks
from .randomizer import RandomSource
from .rules import ScoringRules


class GameStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


class RotationDirection(str, Enum):
    CW = "cw"
    CCW = "ccw"
    HALF_TURN = "180"

    @property
    def delta(self) -> int:
        if self is RotationDirection.HALF_TURN:
            return 2
        return 1 if self is RotationDirection.CW else -1


@dataclass(frozen=True)
class ActivePiece:
    """The falling piece. Transitions build a new instance instead of mutating."""

    kind: TetrominoType
    rotation: int
    position: Vector2D

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return replace(self, position=Vector2D(self.position.x + dx, self.position.y + dy))

    def rotated(self, rotation: int, kick: Vector2D) -> "ActivePiece":
        return ActivePiece(self.kind, rotation % 4, Vector2D(self.position.x + kick.x, self.position.y + kick.y))

    def blocks(self) -> List[Vector2D]:
        return absolute_blocks(self.kind, self.rotation, self.position)


@dataclass
class GameState:
    playfield: GameGrid
    queue: List[TetrominoType]
    active_piece: Optional[ActivePiece] = None
    hold: Optional[TetrominoType] = None
    can_hold: bool = True
    score: int = 0
    best_score: int = 0
    level: int = 1
    lines: int = 0
    last_cleared_lines: int = 0
    status: GameStatus = GameStatus.IDLE
    # Set by the most recent lock when part of the piece stayed above the board
    block_out: bool = False
    rules: ScoringRules = field(default_factory=ScoringRules)
    random_source: RandomSource = field(default=random.random, repr=False, compare=False)
