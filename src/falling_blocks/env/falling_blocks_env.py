from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Action, FallingBlocksGame, GameConfig
from falling_blocks.game.pieces import TetrominoType
from falling_blocks.game.rules import BOARD_HEIGHT, BOARD_WIDTH
from falling_blocks.game.view import build_visible_matrix, overlay_board


PLAYER_ACTIONS = (
    Action.NONE,
    Action.MOVE_LEFT,
    Action.MOVE_RIGHT,
    Action.SOFT_DROP,
    Action.HARD_DROP,
    Action.ROTATE_CW,
    Action.ROTATE_CCW,
    Action.ROTATE_180,
    Action.HOLD,
)

PALETTE = {
    0: (20, 20, 26),
    TetrominoType.I: (125, 231, 249),
    TetrominoType.O: (249, 232, 111),
    TetrominoType.T: (195, 139, 255),
    TetrominoType.S: (125, 250, 159),
    TetrominoType.Z: (255, 125, 125),
    TetrominoType.J: (134, 155, 255),
    TetrominoType.L: (255, 180, 109),
}

N_TYPES = len(TetrominoType)


class FallingBlocksEnv(gym.Env):
    """Single-player environment: each step applies one action, then gravity.

    Reward is the change in engine score. The episode terminates when the
    game is over.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        queue_length: int = 5,
        max_steps: Optional[int] = None,
    ) -> None:
        super().__init__()
        self.render_mode = render_mode
        self.queue_length = int(queue_length)
        self.max_steps = max_steps
        self.game = FallingBlocksGame(GameConfig(queue_preview_length=self.queue_length))

        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-N_TYPES, high=N_TYPES, shape=(BOARD_HEIGHT, BOARD_WIDTH), dtype=np.int8),
                "queue": spaces.Box(low=0, high=N_TYPES, shape=(self.queue_length,), dtype=np.int8),
                "hold": spaces.Discrete(N_TYPES + 1),
                "can_hold": spaces.Discrete(2),
            }
        )
        self.action_space = spaces.Discrete(len(PLAYER_ACTIONS))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        state = self.game.state
        queue = np.zeros((self.queue_length,), dtype=np.int8)
        for i, kind in enumerate(self.game.queue_preview()):
            queue[i] = int(kind)
        return {
            "board": overlay_board(state).astype(np.int8),
            "queue": queue,
            "hold": int(state.hold) if state.hold is not None else 0,
            "can_hold": int(state.can_hold),
        }

    def _get_info(self) -> Dict[str, Any]:
        stats = self.game.statistics()
        return {
            "score": stats.score,
            "lines": stats.lines,
            "level": stats.level,
            "last_cleared_lines": stats.last_cleared_lines,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        game_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.game = FallingBlocksGame(GameConfig(random_seed=game_seed, queue_preview_length=self.queue_length))
        self.game.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        index = int(action)
        if not 0 <= index < len(PLAYER_ACTIONS):
            raise ValueError(f"Invalid action {action!r}")

        score_before = self.game.state.score
        self.game.handle_action(PLAYER_ACTIONS[index])
        self.game.tick()
        self._steps += 1

        reward = float(self.game.state.score - score_before)
        terminated = self.game.is_game_over
        truncated = self.max_steps is not None and self._steps >= self.max_steps and not terminated
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        matrix = build_visible_matrix(self.game.state, ghost_enabled=self.game.settings.ghost_piece_enabled)
        cell = 12
        h, w = len(matrix), len(matrix[0])
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y, row in enumerate(matrix):
            for x, rc in enumerate(row):
                color = PALETTE[rc.value] if rc.value is not None else PALETTE[0]
                if rc.is_ghost:
                    color = tuple(c // 3 for c in color)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
