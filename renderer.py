# renderer.py
"""
Draws frames of the rain effect using Pygame.

Each frame is composed on an off-screen buffer (fade, then glyphs) and then
copied onto the visible surface in one blit, so the partially faded
intermediate state is never shown.
"""
import logging
import pygame
import numpy as np
from typing import Dict, List, Optional, Tuple
from constants import BACKGROUND_COLOR, GLYPHS, GLYPH_COUNT, GLYPH_FONT_NAMES
from grid import ColumnGrid
from registry import get_active_color, get_quality_params
from state import RainState

# --- Data Contracts ---
#
# class FrameRenderer:
#   - __init__(self, state: RainState, grid: ColumnGrid, rng: np.random.Generator):
#     - Inputs:
#       - state: Shared rain state (theme, active quality).
#       - grid: The column grid that is drawn and advanced each frame.
#       - rng: Source of the per-column glyph choice.
#     - Side Effects: Initializes the Pygame font module.
#
#   - render_frame(self, timestamp: float, target: pygame.Surface) -> str:
#     - Outputs: The glyph color used for this frame.
#     - Side Effects: Fades and draws onto the off-screen buffer, advances
#       every grid column by one row, and overwrites all of `target`.


class FrameRenderer:
    """
    Renders one animation tick onto a buffer and composites it.
    """
    def __init__(self, state: RainState, grid: ColumnGrid, rng: np.random.Generator):
        pygame.font.init()
        self.state = state
        self.grid = grid
        self.rng = rng
        self.glyph_size = grid.glyph_size

        self.buffer: Optional[pygame.Surface] = None
        self.fade_surface: Optional[pygame.Surface] = None
        self._fade_alpha: Optional[int] = None

        self._font: Optional[pygame.font.Font] = None
        # Pre-rendered glyph images keyed by color string.
        self._glyph_cache: Dict[str, List[pygame.Surface]] = {}

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            # SysFont never fails, it quietly falls back to the default font,
            # which has no Katakana glyphs.
            path = pygame.font.match_font(GLYPH_FONT_NAMES)
            if path is None:
                logging.warning(
                    f"None of the glyph fonts ({GLYPH_FONT_NAMES}) are installed. "
                    "Falling back to the default Pygame font; glyphs may render as boxes."
                )
            self._font = pygame.font.Font(path, self.glyph_size)
        return self._font

    def glyph_position(self, column: int, drop: int) -> Tuple[int, int]:
        """
        Top-left blit position for a glyph whose baseline sits on row `drop`.
        """
        return (
            int(column * self.grid.column_width),
            int(drop) * self.glyph_size - self.font.get_ascent(),
        )

    def ensure_buffer(self, size: Tuple[int, int]) -> pygame.Surface:
        """
        Returns a buffer matching `size`, recreating it if the size changed.
        """
        if self.buffer is None or self.buffer.get_size() != size:
            self.buffer = pygame.Surface(size)
            self.buffer.fill(BACKGROUND_COLOR)
            self.fade_surface = pygame.Surface(size, pygame.SRCALPHA)
            self._fade_alpha = None
            logging.debug(f"Frame buffer (re)created at {size[0]}x{size[1]}.")
        return self.buffer

    def _fade_layer(self, trail_alpha: float) -> pygame.Surface:
        alpha = int(round(trail_alpha * 255))
        if alpha != self._fade_alpha:
            r, g, b = BACKGROUND_COLOR
            self.fade_surface.fill((r, g, b, alpha))
            self._fade_alpha = alpha
        return self.fade_surface

    def glyphs_for(self, color: str) -> List[pygame.Surface]:
        """Pre-renders the alphabet in `color` the first time it is needed."""
        glyphs = self._glyph_cache.get(color)
        if glyphs is None:
            logging.debug(f"Pre-rendering {GLYPH_COUNT} glyphs in {color}.")
            pg_color = pygame.Color(color)
            glyphs = [self.font.render(ch, True, pg_color) for ch in GLYPHS]
            self._glyph_cache[color] = glyphs
        return glyphs

    def render_frame(self, timestamp: float, target: pygame.Surface) -> str:
        """
        Draws one frame and copies it onto `target`.
        """
        buffer = self.ensure_buffer(target.get_size())

        # 1. Fade the previous frames. Partial occlusion is what leaves trails.
        trail_alpha = get_quality_params(self.state.active_quality).trail_alpha
        buffer.blit(self._fade_layer(trail_alpha), (0, 0))

        # 2. Glyphs are drawn fully opaque in the theme color.
        color = get_active_color(self.state.theme, timestamp)
        glyphs = self.glyphs_for(color)

        # 3. One random glyph at the head of each drop, then advance the drops.
        grid = self.grid
        choices = self.rng.integers(0, GLYPH_COUNT, size=grid.columns)
        for x in range(grid.columns):
            buffer.blit(glyphs[choices[x]], self.glyph_position(x, grid.drops[x]))
        grid.advance_all()

        # 4. Replace the visible content wholesale.
        target.blit(buffer, (0, 0))
        return color
