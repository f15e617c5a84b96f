from __future__ import annotations

from dataclasses import dataclass


BOARD_WIDTH = 10
BOARD_HEIGHT = 20
BUFFER_ROWS = 1
VISIBLE_ROWS = BOARD_HEIGHT + BUFFER_ROWS

SPAWN_POSITION_X = 3
SPAWN_POSITION_Y = -2

QUEUE_MIN_LENGTH = 5
LINES_PER_LEVEL = 10

# Gravity interval in milliseconds, index 0 is level 1
LEVEL_SPEEDS_MS = (1000, 793, 618, 473, 355, 262, 190, 135, 94, 64)
MAX_LEVEL = len(LEVEL_SPEEDS_MS)

SOFT_DROP_POINTS = 1
HARD_DROP_POINTS = 2


@dataclass(frozen=True)
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    soft_drop_points: int = SOFT_DROP_POINTS
    hard_drop_points: int = HARD_DROP_POINTS

    def score_for_lines(self, lines: int, level: int = 1) -> int:
        if 1 <= lines <= len(self.line_clear_scores):
            return self.line_clear_scores[lines - 1] * level
        return 0

    def hard_drop_bonus(self, distance: int) -> int:
        return max(0, distance) * self.hard_drop_points


def get_drop_interval(level: int) -> int:
    """Gravity interval for ``level``; out-of-table levels clamp to the ends."""
    if level <= 0:
        return LEVEL_SPEEDS_MS[0]
    if level > len(LEVEL_SPEEDS_MS):
        return LEVEL_SPEEDS_MS[-1]
    return LEVEL_SPEEDS_MS[level - 1]


def level_for_lines(total_lines: int) -> int:
    return max(1, min(MAX_LEVEL, total_lines // LINES_PER_LEVEL + 1))
