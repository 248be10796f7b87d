"""
Pygame Renderer
===============

Draws CoreGame.get_render_data() with pygame: sky and ground, scrolling star
field, entities, shield ring, UI text and the game-over overlay.
Supports both display mode (human play) and headless RGB output.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from endless_runner.runner_core.config_loader import GameConfig, get_config


class PygameRenderer:
    """
    Renderer for the runner field.

    Everything is drawn in field coordinates onto a field-sized canvas, then
    scaled to the requested output size.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameRenderer")

        if config is None:
            config = get_config()

        self._config = config
        self._star_count = config.render.star_count

        if not pygame.get_init():
            pygame.init()

        # Display surface (created on demand)
        self._screen: Optional[pygame.Surface] = None
        self._screen_size: Optional[Tuple[int, int]] = None

        self._canvas = pygame.Surface((config.field.width, config.field.height))

        pygame.font.init()
        self._font = pygame.font.Font(None, 26)
        self._font_large = pygame.font.Font(None, 52)
        self._font_medium = pygame.font.Font(None, 32)

        self._sky_color = (135, 206, 235)
        self._ground_color = (107, 94, 84)
        self._star_color = (204, 204, 204)
        self._text_color = (255, 255, 255)
        self._shield_color = (255, 255, 255, 180)
        self._overlay_color = (0, 0, 0, 120)

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render to RGB array (for agent observation).

        Args:
            render_data: Data from CoreGame.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        surface = pygame.Surface((width, height))
        self._render_to_surface(surface, render_data)
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def render_to_screen(
        self,
        render_data: Dict[str, Any],
        window_width: Optional[int] = None,
        window_height: Optional[int] = None
    ) -> None:
        """
        Render to pygame window.

        Args:
            render_data: Data from CoreGame.get_render_data().
            window_width: Window width. Field width if None.
            window_height: Window height. Field height if None.
        """
        size = (
            window_width or self._config.field.width,
            window_height or self._config.field.height
        )
        if self._screen is None or self._screen_size != size:
            self._screen = pygame.display.set_mode(size)
            self._screen_size = size
            pygame.display.set_caption("Endless Runner")

        self._render_to_surface(self._screen, render_data)
        pygame.display.flip()

    def _render_to_surface(
        self,
        surface: pygame.Surface,
        render_data: Dict[str, Any]
    ) -> None:
        """Render game state to a pygame surface."""
        canvas = self._canvas
        self._draw_background(canvas, render_data)

        for obstacle in render_data["obstacles"]:
            self._draw_box(canvas, obstacle)
        for powerup in render_data["powerups"]:
            self._draw_box(canvas, powerup)
        self._draw_player(canvas, render_data["player"])

        self._draw_ui(canvas, render_data)
        if render_data["game_over"]:
            self._draw_game_over(canvas, render_data)

        if surface.get_size() == canvas.get_size():
            surface.blit(canvas, (0, 0))
        else:
            pygame.transform.smoothscale(canvas, surface.get_size(), surface)

    def _draw_background(self, canvas: pygame.Surface, render_data: Dict[str, Any]) -> None:
        width = render_data["field_width"]
        height = render_data["field_height"]
        ground_y = int(render_data["ground_y"])

        canvas.fill(self._sky_color, pygame.Rect(0, 0, width, ground_y))
        canvas.fill(self._ground_color, pygame.Rect(0, ground_y, width, height - ground_y))

        # Stars wrap around the field as the offset decreases
        offset = render_data["background_offset"]
        for i in range(self._star_count):
            star_x = int((i * 50 + offset) % width)
            star_y = (i * 20) % ground_y
            pygame.draw.circle(canvas, self._star_color, (star_x, star_y), 1)

    def _draw_box(self, canvas: pygame.Surface, entity: Dict[str, Any]) -> None:
        rect = pygame.Rect(
            int(entity["x"]), int(entity["y"]),
            int(entity["width"]), int(entity["height"])
        )
        pygame.draw.rect(canvas, entity["color"], rect)

    def _draw_player(self, canvas: pygame.Surface, player: Dict[str, Any]) -> None:
        self._draw_box(canvas, player)
        if player["shielded"]:
            radius = int(player["width"])
            ring = pygame.Surface((radius * 2 + 4, radius * 2 + 4), pygame.SRCALPHA)
            pygame.draw.circle(ring, self._shield_color, (radius + 2, radius + 2), radius, 4)
            center_x = int(player["x"] + player["width"] / 2)
            center_y = int(player["y"] + player["height"] / 2)
            canvas.blit(ring, (center_x - radius - 2, center_y - radius - 2))

    def _draw_ui(self, canvas: pygame.Surface, render_data: Dict[str, Any]) -> None:
        """Draw score, best score and active modifier labels."""
        width = render_data["field_width"]

        score_surface = self._font.render(f"Score: {render_data['score']}", True, self._text_color)
        canvas.blit(score_surface, (10, 12))

        best_surface = self._font.render(f"High Score: {render_data['best_score']}", True, self._text_color)
        canvas.blit(best_surface, (width - 10 - best_surface.get_width(), 12))

        y = 12
        for text, color in render_data["modifier_labels"]:
            label = self._font.render(text, True, color)
            canvas.blit(label, ((width - label.get_width()) // 2, y))
            y += 25

    def _draw_game_over(self, canvas: pygame.Surface, render_data: Dict[str, Any]) -> None:
        width = render_data["field_width"]
        height = render_data["field_height"]

        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill(self._overlay_color)
        canvas.blit(overlay, (0, 0))

        title, *lines = render_data["game_over_lines"]
        title_surface = self._font_large.render(title, True, self._text_color)
        canvas.blit(title_surface, ((width - title_surface.get_width()) // 2, height // 2 - 60))

        y = height // 2 - 10
        for line in lines:
            line_surface = self._font_medium.render(line, True, self._text_color)
            canvas.blit(line_surface, ((width - line_surface.get_width()) // 2, y))
            y += 40

    def close(self) -> None:
        """Clean up pygame resources."""
        if self._screen is not None:
            pygame.display.quit()
            self._screen = None
            self._screen_size = None
