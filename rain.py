# rain.py
"""
The controller object that owns and wires the whole rain effect.

MatrixRain holds the single RainState and the seeded random generator, and
passes them by reference to the column grid, frame renderer, auto-quality
controller and scheduler. The control surface talks only to this class.
"""
import logging
import pygame
import numpy as np
from typing import Any, Callable, Dict, Optional
from grid import ColumnGrid
from host import FrameHost
from quality import AutoQualityController
from registry import get_active_color
from renderer import FrameRenderer
from scheduler import AnimationScheduler
from state import RainState

# --- Data Contracts ---
#
# class MatrixRain:
#   - __init__(self, screen, host, params=None, on_fps=None, on_color=None):
#     - Inputs:
#       - screen: The visible pygame.Surface drawn on.
#       - host: FrameHost driving the scheduler.
#       - params: The "rain" section of config.json.
#         - "seed": Optional[int]
#         - "speed_ms", "quality", "theme": see RainState.
#       - on_fps: Receives "FPS: <n>" at most once per FPS window.
#       - on_color: Receives the glyph color after every drawn frame.
#     - Side Effects: Builds the grid for the screen's current size.
#
#   - resize / set_quality: Rebuild the grid from scratch.
#   - set_theme / speed_up / speed_down: Apply from the next drawn frame.


class MatrixRain:
    """
    Owns the rain state and every component that reads or mutates it.
    """
    def __init__(self, screen: pygame.Surface, host: FrameHost,
                 params: Optional[Dict[str, Any]] = None,
                 on_fps: Optional[Callable[[str], None]] = None,
                 on_color: Optional[Callable[[str], None]] = None):
        params = params if params is not None else {}
        self.state = RainState(params)

        # All randomness (glyph choice and drop resets) comes from one seed.
        self.seed = params.get('seed')
        self.rng = np.random.default_rng(self.seed)

        self.screen = screen
        self.on_fps = on_fps
        self.on_color = on_color
        self.fps_text = ""
        self.color = get_active_color(self.state.theme, 0)

        self.grid = ColumnGrid(self.rng)
        self.renderer = FrameRenderer(self.state, self.grid, self.rng)
        self.auto_controller = AutoQualityController(self.state, on_change=self._on_auto_quality)
        self.scheduler = AnimationScheduler(
            host, self.state, self.draw_frame, self.auto_controller, on_fps=self._publish_fps
        )

        width, height = screen.get_size()
        self.resize(width, height)
        logging.info(
            f"MatrixRain initialized (seed={self.seed}, quality='{self.state.quality}', "
            f"theme='{self.state.theme}', speed={self.state.speed}ms)."
        )

    # --- Inputs ---

    def resize(self, width: int, height: int, screen: Optional[pygame.Surface] = None) -> None:
        """Adopts new surface dimensions and rebuilds the grid."""
        if screen is not None:
            self.screen = screen
        self.state.width = width
        self.state.height = height
        self.rebuild()

    def rebuild(self) -> None:
        state = self.state
        self.grid.rebuild(state.width, state.height, state.active_quality)
        self.renderer.ensure_buffer((state.width, state.height))

    def set_quality(self, quality: str) -> None:
        self.state.select_quality(quality)
        logging.info(f"Quality set to '{quality}' (active: '{self.state.active_quality}').")
        self.rebuild()

    def set_theme(self, theme: str) -> None:
        self.state.select_theme(theme)
        logging.info(f"Theme set to '{theme}'.")

    def speed_up(self) -> int:
        speed = self.state.speed_up()
        logging.info(f"Frame interval decreased to {speed}ms.")
        return speed

    def speed_down(self) -> int:
        speed = self.state.speed_down()
        logging.info(f"Frame interval increased to {speed}ms.")
        return speed

    # --- Lifecycle ---

    def start(self, now: float) -> None:
        self.scheduler.start(now)

    def stop(self) -> None:
        self.scheduler.stop()

    # --- Frame + outputs ---

    def draw_frame(self, timestamp: float) -> None:
        self.color = self.renderer.render_frame(timestamp, self.screen)
        if self.on_color is not None:
            self.on_color(self.color)

    def _publish_fps(self, text: str) -> None:
        self.fps_text = text
        if self.on_fps is not None:
            self.on_fps(text)

    def _on_auto_quality(self, quality: str) -> None:
        self.rebuild()
