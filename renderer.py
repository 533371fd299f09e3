#!/usr/bin/env python
"""
False-colour rendering of the membrane with Pygame.

Positive displacement is drawn red, negative blue; saturation and lightness grow
with log(|u| + 1) so small ripples stay visible next to a fresh tap.

Classes:
    Renderer: Pygame window that draws the field, the drum rim, the pin and status text.
"""

import numpy as np
import pygame
import matplotlib.colors as mcolors


def displacement_to_rgb(field: np.ndarray, interior: np.ndarray, log_max: float) -> np.ndarray:
    """
    Maps displacements to RGB via a log-scaled HSL colour.
    Args:
        field (np.ndarray): Displacement grid, shape (W, H).
        interior (np.ndarray): Boolean mask; cells outside are black.
        log_max (float): log(value + 1) that maps to full saturation.
    Returns: np.ndarray: uint8 array of shape (W, H, 3).
    """
    if log_max <= 0:
        log_max = 1.0
    log_val = np.log(np.abs(field) + 1)
    sat = np.clip(log_val / log_max, 0, 1)
    light = np.clip(log_val / log_max * 0.95, 0, 1)
    hue = np.where(field < 0, 240 / 360, 0.0)

    # HSL -> HSV
    value = light + sat * np.minimum(light, 1 - light)
    sat_v = np.where(value > 0, 2 * (1 - light / np.where(value > 0, value, 1)), 0.0)

    hsv = np.stack([hue, np.clip(sat_v, 0, 1), np.clip(value, 0, 1)], axis=-1)
    rgb = mcolors.hsv_to_rgb(hsv)
    rgb[~interior] = 0.0
    return (rgb * 255).astype(np.uint8)


def grid_ellipse(cx: float, cy: float, radius: float, cell_size) -> pygame.Rect:
    """
    Bounding rectangle, in pixels, of a circle given in grid units. Each axis is
    scaled by its own cell size, so non-square windows get an ellipse.
    """
    sx, sy = cell_size
    return pygame.Rect(int(round((cx - radius) * sx)), int(round((cy - radius) * sy)),
                       int(round(2 * radius * sx)), int(round(2 * radius * sy)))


class Renderer:
    """
    Attributes:
        window_size (tuple): Size of the drawing area in pixels.
        cell_size (tuple): Pixels per grid cell along x and y.
        log_max (float): Colour scale reference, fixed from the largest pulse amplitude.
    """

    PANEL_HEIGHT = 70

    def __init__(self, membrane, window_size=(600, 600)):
        pygame.init()
        self.membrane = membrane
        self.window_size = window_size
        self.screen = pygame.display.set_mode((window_size[0], window_size[1] + self.PANEL_HEIGHT))
        pygame.display.set_caption("Drum Membrane")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont('Arial', 16)

        mask = membrane.mask
        self.cell_size = (window_size[0] / mask.width, window_size[1] / mask.height)
        self.log_max = np.log(membrane.config.max_pulse_amplitude + 1) or 1.0
        self._surface = None
        self._surface_version = None

    def to_grid(self, pos):
        """Converts a pixel position to grid indices."""
        return int(pos[0] // self.cell_size[0]), int(pos[1] // self.cell_size[1])

    def field_surface(self) -> pygame.Surface:
        """Field surface, rebuilt only when the field store has changed."""
        store = self.membrane.store
        if self._surface_version != store.version:
            rgb = displacement_to_rgb(store.current, self.membrane.mask.interior, self.log_max)
            # surfarray expects (width, height, 3), which is the grid layout already.
            surface = pygame.surfarray.make_surface(rgb)
            self._surface = pygame.transform.scale(surface, self.window_size)
            self._surface_version = store.version
        return self._surface

    def render(self, status: str, fps: int = 60):
        drum = self.membrane
        mask = drum.mask
        self.screen.fill((0, 0, 0))
        self.screen.blit(self.field_surface(), (0, 0))

        pygame.draw.ellipse(self.screen, (0, 255, 0),
                            grid_ellipse(mask.center[0], mask.center[1], mask.radius, self.cell_size), 2)

        pin = drum.pin_position()
        if pin is not None:
            px, py, radius = pin
            pygame.draw.ellipse(self.screen, (255, 255, 255),
                                grid_ellipse(px + 0.5, py + 0.5, max(radius + 0.5, 1.0), self.cell_size), 1)

        params = drum.params
        lines = [
            status,
            f"Tap strength: {params.pulse_amplitude:.0f}   Press strength: {params.press_strength:.0f}",
            "[R] reset  [T] toggle pin  [Up/Down] tap  [Left/Right] press",
        ]
        for k, line in enumerate(lines):
            text = self.font.render(line, True, (230, 230, 230))
            self.screen.blit(text, (10, self.window_size[1] + 4 + 20 * k))

        pygame.display.flip()
        self.clock.tick(fps)
