from __future__ import annotations

import argparse

import pygame

from falling_blocks.game import FallingBlocksGame, GameConfig
from falling_blocks.game.rules import BOARD_WIDTH, VISIBLE_ROWS
from falling_blocks.settings import SettingsStore
from .controls import HostCommand, apply_host_command, build_control_bindings, create_key_map, normalize_key
from .renderer import Renderer


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--settings-dir", type=str, default=None)
    p.add_argument("--fps", type=int, default=60)
    return p


def run(seed: int | None = None, cell_size: int = 28, settings_dir: str | None = None, fps: int = 60) -> None:
    store = SettingsStore(settings_dir)
    settings = store.load_settings()
    game = FallingBlocksGame(
        GameConfig(random_seed=seed),
        settings=settings,
        best_score=store.load_best_score(),
        on_best_score=store.save_best_score,
    )
    key_map = create_key_map(build_control_bindings(swap_jk=settings.jk_rotation_reversed))

    pygame.init()
    try:
        clock = pygame.time.Clock()
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size(VISIBLE_ROWS, BOARD_WIDTH))
        pygame.display.set_caption("Falling Blocks")

        running = True
        while running:
            elapsed = clock.tick(fps)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    action = key_map.get(normalize_key(pygame.key.name(event.key)))
                    if action is None:
                        continue
                    if isinstance(action, HostCommand):
                        apply_host_command(action, game)
                        if action == HostCommand.TOGGLE_JK:
                            key_map = create_key_map(build_control_bindings(swap_jk=game.settings.jk_rotation_reversed))
                    else:
                        game.handle_action(action)

            game.advance(elapsed)
            renderer.draw(screen, game)
    finally:
        store.save_settings(game.settings)
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    run(seed=args.seed, cell_size=args.cell_size, settings_dir=args.settings_dir, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
