from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, List, Optional

from falling_blocks.settings import Settings

from . import engine
from .pieces import TetrominoType, Vector2D
from .state import GameState, GameStatus, RotationDirection
from .view import GameStatistics, RenderCell, build_visible_matrix, queue_preview, statistics


class Action(IntEnum):
    NONE = 0
    MOVE_LEFT = 1
    MOVE_RIGHT = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    ROTATE_CW = 5
    ROTATE_CCW = 6
    ROTATE_180 = 7
    HOLD = 8
    PAUSE = 9
    RESUME = 10


@dataclass
class GameConfig:
    random_seed: Optional[int] = None
    queue_preview_length: int = 5


class FallingBlocksGame:
    """Headless session: owns one GameState and drives it from a host clock.

    The host calls ``advance`` with the elapsed milliseconds of each frame
    and ``handle_action`` for player input.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        settings: Optional[Settings] = None,
        best_score: int = 0,
        on_best_score: Optional[Callable[[int], None]] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.settings = settings or Settings()
        self.rng = random.Random(self.config.random_seed)
        self.best_score = best_score
        self.on_best_score = on_best_score
        self.state: GameState = engine.create_initial_state(best_score, random_source=self.rng.random)
        self._accumulator = 0.0

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def is_idle(self) -> bool:
        return self.state.status == GameStatus.IDLE

    @property
    def is_running(self) -> bool:
        return self.state.status == GameStatus.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.state.status == GameStatus.PAUSED

    @property
    def is_game_over(self) -> bool:
        return self.state.status == GameStatus.OVER

    def start(self) -> None:
        engine.reset_state(self.state, self.state.best_score)
        self.state.status = GameStatus.RUNNING
        self._accumulator = 0.0

    def pause(self) -> None:
        if self.state.status == GameStatus.RUNNING:
            self.state.status = GameStatus.PAUSED

    def resume(self) -> None:
        if self.state.status == GameStatus.PAUSED:
            self.state.status = GameStatus.RUNNING

    def reset(self) -> None:
        engine.reset_state(self.state, max(self.state.best_score, self.best_score))
        self.state.status = GameStatus.IDLE
        self._accumulator = 0.0

    def handle_action(self, action: Action) -> bool:
        if action == Action.PAUSE:
            was_running = self.is_running
            self.pause()
            return was_running
        if action == Action.RESUME:
            was_paused = self.is_paused
            self.resume()
            return was_paused
        if not self.is_running:
            return False

        state = self.state
        acted = False
        if action == Action.MOVE_LEFT:
            acted = engine.try_move(state, Vector2D(-1, 0))
        elif action == Action.MOVE_RIGHT:
            acted = engine.try_move(state, Vector2D(1, 0))
        elif action == Action.SOFT_DROP:
            acted = engine.soft_drop(state)
            self._accumulator = 0.0
        elif action == Action.HARD_DROP:
            if self.settings.hard_drop_enabled:
                engine.hard_drop(state)
                self._accumulator = 0.0
                acted = True
        elif action == Action.ROTATE_CW:
            acted = engine.try_rotate(state, RotationDirection.CW)
        elif action == Action.ROTATE_CCW:
            acted = engine.try_rotate(state, RotationDirection.CCW)
        elif action == Action.ROTATE_180:
            acted = engine.try_rotate(state, RotationDirection.HALF_TURN)
        elif action == Action.HOLD:
            acted = engine.hold_piece(state)
            self._accumulator = 0.0

        self._after_transition()
        return acted

    def tick(self) -> bool:
        if not self.is_running:
            return False
        result = engine.tick(self.state)
        self._after_transition()
        return result

    def advance(self, elapsed_ms: float) -> int:
        """Accumulate host time and fire at most one gravity tick."""
        if not self.is_running:
            return 0
        self._accumulator += elapsed_ms
        if self._accumulator < engine.get_drop_interval(self.state.level):
            return 0
        self._accumulator = 0.0
        self.tick()
        return 1

    def _after_transition(self) -> None:
        state = self.state
        if state.block_out and state.status != GameStatus.OVER:
            state.status = GameStatus.OVER
            state.active_piece = None
        if state.best_score > self.best_score:
            self.best_score = state.best_score
            if self.on_best_score is not None:
                self.on_best_score(self.best_score)

    def ghost_blocks(self) -> List[Vector2D]:
        if not self.settings.ghost_piece_enabled:
            return []
        return engine.calculate_ghost_blocks(self.state)

    def visible_matrix(self) -> List[List[RenderCell]]:
        return build_visible_matrix(self.state, ghost_enabled=self.settings.ghost_piece_enabled)

    def queue_preview(self) -> List[TetrominoType]:
        return queue_preview(self.state, self.config.queue_preview_length)

    def statistics(self) -> GameStatistics:
        return statistics(self.state, self.best_score)
