# state.py
"""
Holds the mutable state shared by every part of the rain effect.

A single RainState instance is owned by the MatrixRain controller and handed
by reference to the scheduler, renderer and auto-quality controller. All of
them run on the same thread, so no locking is done here.
"""
import logging
from typing import Any, Dict, Optional
from constants import (
    DEFAULT_SPEED_MS, MIN_FRAME_MS, MAX_FRAME_MS, SPEED_STEP_MS,
    QUALITY_AUTO
)
from registry import validate_quality, validate_theme

# --- Data Contracts ---
#
# class RainState:
#   - __init__(self, params: Optional[Dict[str, Any]] = None):
#     - Inputs:
#       - params: the "rain" section of config.json.
#         - "speed_ms": int
#         - "quality": str, one of high/medium/low/auto
#         - "theme": str
#     - Side Effects: Validates the quality and theme names.
#     - Invariants:
#       - MIN_FRAME_MS <= self.speed <= MAX_FRAME_MS.
#       - self.auto_quality is never "auto".
#       - self.active_quality == self.quality unless self.quality is "auto".


def clamp_speed(speed: int) -> int:
    return max(MIN_FRAME_MS, min(MAX_FRAME_MS, speed))


class RainState:
    """
    Selected settings plus the frame timing bookkeeping of the animation.
    """
    def __init__(self, params: Optional[Dict[str, Any]] = None):
        params = params if params is not None else {}

        speed = params.get('speed_ms', DEFAULT_SPEED_MS)
        if isinstance(speed, bool) or not isinstance(speed, int):
            msg = f"Configuration error: speed_ms must be an integer, got {speed!r}."
            logging.error(msg)
            raise ValueError(msg)
        self.speed = clamp_speed(speed)
        if self.speed != speed:
            logging.warning(f"speed_ms {speed} clamped to {self.speed}.")

        self.quality = validate_quality(params.get('quality', 'high'))
        # Effective level while in auto mode; starts at "high" like a fresh page.
        self.auto_quality = self.quality if self.quality != QUALITY_AUTO else 'high'
        self.theme = validate_theme(params.get('theme', 'matrix'))

        # Surface dimensions, set by the first resize.
        self.width = 0
        self.height = 0

        # Frame timing, all in milliseconds on the host clock.
        self.last_frame_time = 0.0
        self.fps_window_start = 0.0
        self.fps_frames = 0
        self.last_auto_adjust = 0.0

    @property
    def active_quality(self) -> str:
        return self.auto_quality if self.quality == QUALITY_AUTO else self.quality

    def speed_up(self) -> int:
        """Shortens the minimum frame interval by one step."""
        self.speed = max(MIN_FRAME_MS, self.speed - SPEED_STEP_MS)
        return self.speed

    def speed_down(self) -> int:
        """Lengthens the minimum frame interval by one step."""
        self.speed = min(MAX_FRAME_MS, self.speed + SPEED_STEP_MS)
        return self.speed

    def select_quality(self, quality: str) -> None:
        self.quality = validate_quality(quality)
        if quality != QUALITY_AUTO:
            self.auto_quality = quality

    def select_theme(self, theme: str) -> None:
        self.theme = validate_theme(theme)
