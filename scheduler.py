# scheduler.py
"""
Drives the repeating animation tick.

This module defines the AnimationScheduler class, which re-registers itself
with a frame host every tick, only draws when at least `speed` milliseconds
have passed since the last drawn frame, and publishes the measured frame
rate once per FPS window.
"""
import logging
import math
from enum import Enum
from typing import Callable, Optional
from constants import FPS_INTERVAL_MS, QUALITY_AUTO
from host import FrameHost
from quality import AutoQualityController
from state import RainState

# --- Data Contracts ---
#
# class AnimationScheduler:
#   - __init__(self, host, state, draw, auto_controller, on_fps=None):
#     - Inputs:
#       - host: FrameHost handing out frame callbacks.
#       - state: Shared rain state (speed, quality, timing fields).
#       - draw: Called with the tick timestamp for every drawn frame.
#       - auto_controller: Consulted at the end of an FPS window while the
#         selected quality is "auto".
#       - on_fps: Receives the "FPS: <n>" readout.
#
#   - tick(self, timestamp: float) -> None:
#     - Side Effects: May draw, publish FPS, change the active quality.
#       Registers the next tick unless stopped.
#     - Invariants: Two drawn frames are never closer than state.speed ms.


class SchedulerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


def compute_fps(frames: int, window_ms: float) -> Optional[int]:
    """
    Rounds frames-per-second over a window, or None for an empty window.
    """
    if window_ms <= 0:
        return None
    return int(math.floor(frames * 1000 / window_ms + 0.5))


def format_fps(fps: int) -> str:
    return f"FPS: {fps}"


class AnimationScheduler:
    """
    Frame-rate governor and FPS accumulator on top of a frame host.
    """
    def __init__(self, host: FrameHost, state: RainState, draw: Callable[[float], None],
                 auto_controller: AutoQualityController,
                 on_fps: Optional[Callable[[str], None]] = None,
                 fps_interval_ms: float = FPS_INTERVAL_MS):
        self.host = host
        self.state = state
        self.draw = draw
        self.auto_controller = auto_controller
        self.on_fps = on_fps
        self.fps_interval_ms = fps_interval_ms

        self.status = SchedulerState.IDLE
        self.frames_drawn = 0
        self.last_fps: Optional[int] = None
        self._handle: Optional[int] = None

    @property
    def running(self) -> bool:
        return self.status is SchedulerState.RUNNING

    def start(self, now: float) -> None:
        """
        Opens the first FPS window at `now` and registers the first tick.
        """
        if self.status is not SchedulerState.IDLE:
            logging.warning(f"Scheduler already {self.status.value}; start() ignored.")
            return
        self.state.fps_window_start = now
        self.state.fps_frames = 0
        self.status = SchedulerState.RUNNING
        self._handle = self.host.request_frame(self.tick)
        logging.info(f"Animation started at {now:.0f}ms with a {self.state.speed}ms frame interval.")

    def stop(self) -> None:
        """Cancels the pending tick. The scheduler cannot be restarted."""
        if self._handle is not None:
            self.host.cancel_frame(self._handle)
            self._handle = None
        if self.status is SchedulerState.RUNNING:
            logging.info(f"Animation stopped after {self.frames_drawn} drawn frames.")
        self.status = SchedulerState.STOPPED

    def tick(self, timestamp: float) -> None:
        self._handle = None
        if not self.running:
            return

        state = self.state
        if timestamp - state.last_frame_time >= state.speed:
            state.last_frame_time = timestamp
            self.draw(timestamp)
            state.fps_frames += 1
            self.frames_drawn += 1
            if timestamp - state.fps_window_start >= self.fps_interval_ms:
                self._close_fps_window(timestamp)

        # draw() may have stopped the animation.
        if self.running:
            self._handle = self.host.request_frame(self.tick)

    def _close_fps_window(self, timestamp: float) -> None:
        state = self.state
        fps = compute_fps(state.fps_frames, timestamp - state.fps_window_start)
        if fps is not None:
            self.last_fps = fps
            logging.debug(f"{state.fps_frames} frames in window -> {fps} FPS.")
            if self.on_fps is not None:
                self.on_fps(format_fps(fps))
            if state.quality == QUALITY_AUTO and self.auto_controller.is_due(timestamp):
                self.auto_controller.evaluate(fps, timestamp)
        state.fps_window_start = timestamp
        state.fps_frames = 0
