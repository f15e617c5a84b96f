from __future__ import annotations

from typing import List, Optional, Tuple

import pygame

from falling_blocks.game import FallingBlocksGame, TetrominoType
from falling_blocks.game.pieces import shape_mask
from falling_blocks.game.view import RenderCell


TETROMINO_COLORS = {
    TetrominoType.I: "#7de7f9",
    TetrominoType.O: "#f9e86f",
    TetrominoType.T: "#c38bff",
    TetrominoType.S: "#7dfa9f",
    TetrominoType.Z: "#ff7d7d",
    TetrominoType.J: "#869bff",
    TetrominoType.L: "#ffb46d",
}

BACKGROUND = (10, 10, 14)
EMPTY = (30, 30, 36)
TEXT = (230, 230, 235)


def _color_for_cell(cell: RenderCell) -> Tuple[int, int, int]:
    if cell.value is None:
        return EMPTY
    color = pygame.Color(TETROMINO_COLORS[cell.value])
    if cell.is_ghost:
        return (color.r // 3, color.g // 3, color.b // 3)
    return (color.r, color.g, color.b)


class Renderer:
    def __init__(self, cell_size: int = 28, margin: int = 20, side_panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.side_panel_w = side_panel_cells * cell_size
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, rows: int, cols: int) -> Tuple[int, int]:
        width = self.margin * 3 + cols * self.cell_size + self.side_panel_w
        height = self.margin * 2 + rows * self.cell_size
        return width, height

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        return self._font

    def _draw_matrix(self, screen: pygame.Surface, matrix: List[List[RenderCell]]) -> None:
        for y, row in enumerate(matrix):
            for x, cell in enumerate(row):
                rect = pygame.Rect(
                    self.margin + x * self.cell_size,
                    self.margin + y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(screen, _color_for_cell(cell), rect)

    def _draw_piece(self, screen: pygame.Surface, kind: TetrominoType, x0: int, y0: int, cell: int) -> None:
        mask = shape_mask(kind)
        color = pygame.Color(TETROMINO_COLORS[kind])
        for py in range(mask.shape[0]):
            for px in range(mask.shape[1]):
                if mask[py, px]:
                    pygame.draw.rect(screen, color, pygame.Rect(x0 + px * cell, y0 + py * cell, cell - 1, cell - 1))

    def _draw_text(self, screen: pygame.Surface, text: str, x: int, y: int) -> int:
        surf = self.font.render(text, True, TEXT)
        screen.blit(surf, (x, y))
        return y + surf.get_height() + 4

    def _draw_side_panel(self, screen: pygame.Surface, game: FallingBlocksGame, cols: int) -> None:
        x0 = self.margin * 2 + cols * self.cell_size
        y = self.margin
        small = self.cell_size // 2

        y = self._draw_text(screen, "HOLD", x0, y)
        if game.state.hold is not None:
            self._draw_piece(screen, game.state.hold, x0, y, small)
        y += small * 3

        y = self._draw_text(screen, "NEXT", x0, y)
        for kind in game.queue_preview():
            self._draw_piece(screen, kind, x0, y, small)
            y += small * 3

        stats = game.statistics()
        y += small
        for line in (
            f"Score {stats.score}",
            f"Best  {stats.best_score}",
            f"Level {stats.level}",
            f"Lines {stats.lines}",
        ):
            y = self._draw_text(screen, line, x0, y)

    def _draw_overlay(self, screen: pygame.Surface, text: str) -> None:
        font = pygame.font.SysFont(None, 32)
        surf = font.render(text, True, (255, 255, 255))
        rect = surf.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2))
        screen.blit(surf, rect)

    def draw(self, screen: pygame.Surface, game: FallingBlocksGame) -> None:
        matrix = game.visible_matrix()
        screen.fill(BACKGROUND)
        self._draw_matrix(screen, matrix)
        self._draw_side_panel(screen, game, len(matrix[0]))
        if game.is_idle:
            self._draw_overlay(screen, "Press Enter to start")
        elif game.is_paused:
            self._draw_overlay(screen, "Paused")
        elif game.is_game_over:
            self._draw_overlay(screen, "Game Over - Enter to restart")
        pygame.display.flip()
