"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- TetrominoType, ROTATIONS: Piece set and pre-tabulated rotation states
- create_bag: 7-bag randomizer with an injectable random source
- GameGrid: Playfield, placement rule and line clearing
- ScoringRules: Scoring table and drop bonuses
- GameState, ActivePiece: The mutable game aggregate
- engine: State transitions (spawn, move, rotate, drop, hold, tick)
- FallingBlocksGame: Session controller driven by a host clock
"""

from . import engine
from .core import Action, FallingBlocksGame, GameConfig
from .grid import GameGrid
from .pieces import ROTATIONS, TETROMINO_KEYS, TetrominoType, Vector2D
from .randomizer import create_bag
from .rules import ScoringRules, get_drop_interval
from .state import ActivePiece, GameState, GameStatus, RotationDirection

__all__ = [
    "engine",
    "Action",
    "FallingBlocksGame",
    "GameConfig",
    "GameGrid",
    "ROTATIONS",
    "TETROMINO_KEYS",
    "TetrominoType",
    "Vector2D",
    "create_bag",
    "ScoringRules",
    "get_drop_interval",
    "ActivePiece",
    "GameState",
    "GameStatus",
    "RotationDirection",
]
