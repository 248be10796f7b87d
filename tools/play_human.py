"""
Human Play Mode
================

Play the endless runner interactively in a pygame window.

Controls:
    - Space: Jump (restart after game over)
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--fps FPS] [--scale SCALE] [--config PATH]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from endless_runner.runner_core.clock import MonotonicClock
from endless_runner.runner_core.config_loader import GameConfig, load_config
from endless_runner.runner_core.game import CoreGame
from endless_runner.runner_core.persistence import make_store


class HumanPlayer:
    """
    Frame driver for human play.

    Calls CoreGame.on_frame() with the monotonic clock reading once per
    display frame and forwards Space to the jump-or-restart command.
    """

    def __init__(
        self,
        config: GameConfig,
        seed: Optional[int] = None,
        target_fps: Optional[int] = None,
        scale: float = 1.0
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for human play mode")

        from endless_runner.runner_core.render_pygame import PygameRenderer

        self._config = config
        self._target_fps = target_fps or config.render.fps
        self._window_size = (
            int(config.field.width * scale),
            int(config.field.height * scale)
        )

        pygame.init()
        self._renderer = PygameRenderer(config)
        self._game = CoreGame(config=config, seed=seed, store=make_store(config))
        self._clock = MonotonicClock()
        self._frame_limiter = pygame.time.Clock()
        self._running = True
        self._announced_game_over = False

    def run(self) -> int:
        """Run the game loop. Returns last score."""
        print("=== Endless Runner ===")
        print("Space to jump (and to restart after a crash), ESC to quit")
        print(f"Best score so far: {self._game.best_score}")
        print()

        while self._running:
            self._handle_events()

            result = self._game.on_frame(self._clock.now_ms())
            if result.game_over and not self._announced_game_over:
                self._announced_game_over = True
                suffix = " (new best!)" if result.new_best else ""
                print(f"GAME OVER - Score: {self._game.score}{suffix}")

            self._renderer.render_to_screen(
                self._game.get_render_data(), *self._window_size
            )
            self._frame_limiter.tick(self._target_fps)

        self._renderer.close()
        pygame.quit()
        return self._game.score

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key == pygame.K_SPACE:
                    if self._game.handle_input(self._clock.now_ms()) == "restart":
                        self._announced_game_over = False
                        print("\n=== Game Restarted ===\n")


def main():
    parser = argparse.ArgumentParser(description="Play the endless runner interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--fps", type=int, default=None, help="Target FPS (default: from config)")
    parser.add_argument("--scale", type=float, default=1.0, help="Window scale factor")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        config = load_config(args.config)
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            target_fps=args.fps,
            scale=args.scale
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except (ImportError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
