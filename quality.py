# quality.py
"""
Closed-loop controller that trades column density for frame rate.

When the user selects "auto", the measured frame rate is compared against
fixed thresholds and the active quality is moved up or down. A gap between
the medium and high thresholds leaves the quality untouched, and a cooldown
limits how often it may change.
"""
import logging
from typing import Callable, Optional
from constants import (
    AUTO_ADJUST_COOLDOWN_MS, AUTO_FPS_LOW, AUTO_FPS_MEDIUM, AUTO_FPS_HIGH
)
from state import RainState

# --- Data Contracts ---
#
# class AutoQualityController:
#   - __init__(self, state: RainState, on_change: Callable[[str], None]):
#     - Inputs:
#       - state: Shared rain state; only state.auto_quality and
#         state.last_auto_adjust are written.
#       - on_change: Called with the new active quality after a change,
#         used to rebuild the column grid.
#
#   - evaluate(self, fps: float, timestamp: float) -> str:
#     - Outputs: The active quality after evaluation.
#     - Invariants: The active quality changes at most once per
#       AUTO_ADJUST_COOLDOWN_MS when callers respect is_due().


def target_quality(fps: float, current: str) -> str:
    """
    Maps a frame rate to a quality level, checked in priority order.
    """
    if fps < AUTO_FPS_LOW:
        return 'low'
    if fps < AUTO_FPS_MEDIUM:
        return 'medium'
    if fps > AUTO_FPS_HIGH:
        return 'high'
    return current


class AutoQualityController:
    """
    Hysteretic threshold controller for the auto quality mode.
    """
    def __init__(self, state: RainState, on_change: Optional[Callable[[str], None]] = None,
                 cooldown_ms: float = AUTO_ADJUST_COOLDOWN_MS):
        self.state = state
        self.on_change = on_change
        self.cooldown_ms = cooldown_ms

    def is_due(self, timestamp: float) -> bool:
        return timestamp - self.state.last_auto_adjust >= self.cooldown_ms

    def evaluate(self, fps: float, timestamp: float) -> str:
        """
        Picks the active quality for the measured frame rate.

        Args:
            fps (float): Frame rate measured over the last window.
            timestamp (float): Current host time in milliseconds.

        Returns:
            str: The active quality, changed or not.
        """
        current = self.state.auto_quality
        target = target_quality(fps, current)
        if target != current:
            logging.info(f"Auto quality: {fps:.0f} FPS, switching '{current}' -> '{target}'.")
            self.state.auto_quality = target
            self.state.last_auto_adjust = timestamp
            if self.on_change is not None:
                self.on_change(target)
        return self.state.auto_quality
