# host.py
"""
Frame-callback hosts that drive the animation.

A host hands out one-shot frame callbacks, the way a browser's
requestAnimationFrame does: callbacks registered during a dispatch run on
the following dispatch, never the current one. FrameHost is the plain,
clock-less queue (the tests drive it with explicit timestamps);
PygameFrameHost runs it off a Pygame event loop.
"""
import logging
import pygame
from typing import Callable, Dict, Optional
from constants import DEFAULT_FPS_CAP

# Forward reference for type hinting to avoid circular import
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from controls import ControlSurface

FrameCallback = Callable[[float], None]

# --- Data Contracts ---
#
# class FrameHost:
#   - request_frame(self, callback: FrameCallback) -> int:
#     - Outputs: A handle that can be passed to cancel_frame().
#   - cancel_frame(self, handle: int) -> None:
#     - Side Effects: The callback will not run. Unknown handles are ignored.
#   - dispatch(self, timestamp: float) -> int:
#     - Outputs: The number of callbacks run.
#     - Invariants: Callbacks run in registration order, each to completion.


class FrameHost:
    """
    Ordered queue of one-shot frame callbacks.
    """
    def __init__(self):
        self._callbacks: Dict[int, FrameCallback] = {}
        # Callbacks of the dispatch in progress, still cancellable.
        self._due: Dict[int, FrameCallback] = {}
        self._next_handle = 1

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._callbacks.pop(handle, None)
        self._due.pop(handle, None)

    def dispatch(self, timestamp: float) -> int:
        """
        Runs every callback that was pending when the dispatch began.
        """
        self._due, self._callbacks = self._callbacks, {}
        ran = 0
        while self._due:
            handle = next(iter(self._due))
            callback = self._due.pop(handle)
            callback(timestamp)
            ran += 1
        return ran


class PygameFrameHost(FrameHost):
    """
    Dispatches frame callbacks once per iteration of a Pygame event loop.
    """
    def __init__(self, fps_cap: int = DEFAULT_FPS_CAP):
        """
        Args:
            fps_cap (int): Upper bound on loop iterations per second, the
                stand-in for the display refresh rate. Non-positive values
                fall back to DEFAULT_FPS_CAP.
        """
        super().__init__()
        self.clock = pygame.time.Clock()
        if fps_cap <= 0:
            logging.warning(f"fps_cap {fps_cap} would leave the loop unthrottled; using {DEFAULT_FPS_CAP}.")
            fps_cap = DEFAULT_FPS_CAP
        self.fps_cap = fps_cap
        self.running = False

    def now(self) -> float:
        return float(pygame.time.get_ticks())

    def run(self, sink: Optional["ControlSurface"] = None, max_cycles: int = 0,
            on_cycle: Optional[Callable[[int], None]] = None) -> int:
        """
        Runs the loop until nothing is pending, the sink asks to quit, or
        max_cycles (if non-zero) iterations have passed.

        Returns:
            int: The number of loop iterations performed.
        """
        self.running = True
        cycles = 0
        while self.running and self.pending:
            if sink is not None:
                for event in pygame.event.get():
                    if not sink.handle_event(event):
                        self.stop()
                        break
                if not self.running:
                    break

            self.dispatch(self.now())
            if sink is not None:
                sink.draw_overlay(pygame.display.get_surface())
            pygame.display.flip()
            self.clock.tick(self.fps_cap)

            cycles += 1
            if on_cycle is not None:
                on_cycle(cycles)
            if max_cycles and cycles >= max_cycles:
                logging.info(f"Reached max_frames ({max_cycles}). Stopping animation.")
                self.running = False
        return cycles

    def stop(self) -> None:
        """Ends the loop after the current iteration."""
        self.running = False
