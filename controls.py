# controls.py
"""
Keyboard/window glue between Pygame events and the rain controller.

Translates window resizes, key presses and quit requests into MatrixRain
inputs, and draws the FPS readout and the color indicator over each frame.
"""
import logging
import pygame
from typing import Callable, Optional
from constants import (
    QUALITY_LEVELS, THEMES, HUD_FONT_SIZE, HUD_MARGIN, HUD_TEXT_COLOR,
    HUD_BACKGROUND_ALPHA, COLOR_INDICATOR_SIZE
)
from host import FrameHost
from rain import MatrixRain

# --- Data Contracts ---
#
# class ControlSurface:
#   - __init__(self, rain: MatrixRain, host: FrameHost, surface_provider=None):
#     - Inputs:
#       - rain: The controller receiving the inputs.
#       - host: Used to defer resize rebuilds to the next frame callback.
#       - surface_provider: Returns the current visible surface. Defaults to
#         pygame.display.get_surface.
#
#   - handle_event(self, event: pygame.event.Event) -> bool:
#     - Outputs: False when the user asked to quit, True otherwise.
#     - Invariants: At most one resize rebuild is pending at any time.
#
#   - draw_overlay(self, surface: pygame.Surface) -> None:
#     - Side Effects: Draws the FPS text and the color indicator.

SPEED_UP_KEYS = (pygame.K_UP, pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS)
SPEED_DOWN_KEYS = (pygame.K_DOWN, pygame.K_MINUS, pygame.K_KP_MINUS)
QUALITY_KEYS = {
    pygame.K_1: QUALITY_LEVELS[0],
    pygame.K_2: QUALITY_LEVELS[1],
    pygame.K_3: QUALITY_LEVELS[2],
    pygame.K_4: QUALITY_LEVELS[3],
}
RESIZE_EVENTS = (pygame.VIDEORESIZE, pygame.WINDOWSIZECHANGED)


def next_in(options: list, current: str) -> str:
    return options[(options.index(current) + 1) % len(options)]


class ControlSurface:
    """
    Event handling and HUD for a MatrixRain running in a Pygame window.
    """
    def __init__(self, rain: MatrixRain, host: FrameHost,
                 surface_provider: Optional[Callable[[], pygame.Surface]] = None):
        pygame.font.init()
        self.rain = rain
        self.host = host
        self.surface_provider = surface_provider or pygame.display.get_surface
        self.resize_pending = False
        self._last_panel_rect: Optional[pygame.Rect] = None

        try:
            self.font = pygame.font.SysFont("Segoe UI", HUD_FONT_SIZE, bold=True)
        except pygame.error:
            logging.warning("Segoe UI font not found, falling back to default sans-serif.")
            self.font = pygame.font.SysFont(None, HUD_FONT_SIZE, bold=True)

    # --- Inputs ---

    def request_resize(self) -> bool:
        """
        Schedules a grid rebuild on the next frame callback.

        Returns:
            bool: False if a rebuild was already pending.
        """
        if self.resize_pending:
            return False
        self.resize_pending = True
        self.host.request_frame(self._apply_resize)
        return True

    def _apply_resize(self, timestamp: float) -> None:
        self.resize_pending = False
        surface = self.surface_provider()
        width, height = surface.get_size()
        logging.info(f"Window resized to {width}x{height}.")
        self.rain.resize(width, height, screen=surface)

    def cycle_quality(self) -> str:
        quality = next_in(QUALITY_LEVELS, self.rain.state.quality)
        self.rain.set_quality(quality)
        return quality

    def cycle_theme(self) -> str:
        theme = next_in(THEMES, self.rain.state.theme)
        self.rain.set_theme(theme)
        return theme

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.QUIT:
            logging.info("Quit event received. Stopping animation.")
            self.rain.stop()
            return False

        if event.type in RESIZE_EVENTS:
            self.request_resize()
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Stopping animation.")
                self.rain.stop()
                return False
            if event.key in SPEED_UP_KEYS:
                self.rain.speed_up()
            elif event.key in SPEED_DOWN_KEYS:
                self.rain.speed_down()
            elif event.key in QUALITY_KEYS:
                self.rain.set_quality(QUALITY_KEYS[event.key])
            elif event.key == pygame.K_q:
                self.cycle_quality()
            elif event.key == pygame.K_t:
                self.cycle_theme()
        return True

    # --- Outputs ---

    def draw_overlay(self, surface: pygame.Surface) -> None:
        """Draws the FPS readout with the color indicator to its right."""
        text = self.rain.fps_text or "FPS: --"
        text_surf = self.font.render(text, True, HUD_TEXT_COLOR)
        text_rect = text_surf.get_rect(topleft=(HUD_MARGIN, HUD_MARGIN))

        panel_rect = pygame.Rect(
            0, 0,
            text_rect.width + COLOR_INDICATOR_SIZE + HUD_MARGIN * 3,
            max(text_rect.height, COLOR_INDICATOR_SIZE) + HUD_MARGIN * 2,
        )
        # The panel is translucent: put back the frame underneath first so
        # repeated overlays between drawn frames do not stack up.
        self._restore_frame(surface, panel_rect)
        self._last_panel_rect = panel_rect

        panel = pygame.Surface(panel_rect.size, pygame.SRCALPHA)
        panel.fill((0, 0, 0, HUD_BACKGROUND_ALPHA))
        surface.blit(panel, panel_rect)
        surface.blit(text_surf, text_rect)

        color = pygame.Color(self.rain.color)
        indicator = pygame.Rect(0, 0, COLOR_INDICATOR_SIZE, COLOR_INDICATOR_SIZE)
        indicator.midleft = (text_rect.right + HUD_MARGIN, text_rect.centery)
        pygame.draw.rect(surface, color, indicator, border_radius=3)
        pygame.draw.rect(surface, color, indicator.inflate(4, 4), 1, border_radius=4)

    def _restore_frame(self, surface: pygame.Surface, panel_rect: pygame.Rect) -> None:
        frame = self.rain.renderer.buffer
        if frame is None:
            return
        area = panel_rect
        if self._last_panel_rect is not None:
            area = area.union(self._last_panel_rect)
        surface.blit(frame, area, area=area)
