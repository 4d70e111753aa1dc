# grid.py
"""
Manages the per-column drop positions of the rain effect.

This module defines the ColumnGrid class, which derives the column layout
from the surface width and the active quality, and stores one integer drop
position (in rows) per column in a NumPy array.
"""
import logging
import numpy as np
from numba import jit
from typing import Optional, Tuple
from constants import FONT_SIZE, DENSITY_STEP_PX, DROP_RESET_THRESHOLD, DROP_START_ROW
from registry import get_quality_params

# --- Data Contracts ---
#
# class ColumnGrid:
#   - __init__(self, rng: np.random.Generator, glyph_size: int = FONT_SIZE):
#     - Inputs:
#       - rng: The generator used for every reset trial.
#       - glyph_size: Pixel size of one glyph cell.
#     - Side Effects: None until rebuild() is called.
#
#   - rebuild(self, width: int, height: int, quality: str) -> np.ndarray:
#     - Outputs: The new drop array.
#     - Side Effects: Replaces self.drops with a fresh array of
#       column_count(width, quality) entries, all DROP_START_ROW.
#     - Invariants: Same inputs give the same column count.
#
#   - advance(self, column: int) -> Tuple[int, bool]:
#     - Outputs: (new position, whether the drop was reset).
#     - Invariants: A drop is only reset once it is below the bottom edge,
#       and then only when an independent uniform draw exceeds
#       DROP_RESET_THRESHOLD. Otherwise the position grows by one.


def density_scale(width: int) -> int:
    """Coarse responsive step: one extra column width per DENSITY_STEP_PX."""
    return max(1, width // DENSITY_STEP_PX)


def column_width(width: int, quality: str, glyph_size: int = FONT_SIZE) -> float:
    return glyph_size * density_scale(width) * get_quality_params(quality).column_scale


def column_count(width: int, quality: str, glyph_size: int = FONT_SIZE) -> int:
    return int(width // column_width(width, quality, glyph_size))


@jit(nopython=True)
def _advance_drops_numba(drops, trials, glyph_height, surface_height, reset_threshold):
    """
    Numba-jitted pass that advances every drop by one row.

    trials holds one uniform draw per column; a column past the bottom edge
    restarts from the top when its draw exceeds reset_threshold.
    Returns the number of columns that restarted.
    """
    resets = 0
    for i in range(drops.shape[0]):
        if drops[i] * glyph_height > surface_height and trials[i] > reset_threshold:
            drops[i] = 0
            resets += 1
        drops[i] += 1
    return resets


class ColumnGrid:
    """
    The column layout and drop positions for the current surface.
    """
    def __init__(self, rng: np.random.Generator, glyph_size: int = FONT_SIZE):
        """
        Args:
            rng (np.random.Generator): Source of the reset trials.
            glyph_size (int): Pixel size of a glyph cell.
        """
        self.rng = rng
        self.glyph_size = glyph_size
        self.width = 0
        self.height = 0
        self.quality: Optional[str] = None
        self.column_width = float(glyph_size)
        self.drops = np.zeros(0, dtype=np.int64)

    @property
    def columns(self) -> int:
        return self.drops.shape[0]

    def rebuild(self, width: int, height: int, quality: str) -> np.ndarray:
        """
        Recreates the drop array for new dimensions or a new active quality.
        """
        self.width = width
        self.height = height
        self.quality = quality
        self.column_width = column_width(width, quality, self.glyph_size)
        count = int(width // self.column_width)
        self.drops = np.full(count, DROP_START_ROW, dtype=np.int64)

        logging.info(
            f"Column grid rebuilt: {count} columns of {self.column_width:g}px "
            f"for {width}x{height} at '{quality}' quality."
        )
        return self.drops

    def is_below_surface(self, column: int) -> bool:
        return self.drops[column] * self.glyph_size > self.height

    def advance(self, column: int) -> Tuple[int, bool]:
        """
        Moves one drop down by a row, possibly restarting it first.
        """
        did_reset = False
        # The trial is only drawn once the drop has left the surface.
        if self.is_below_surface(column) and self.rng.random() > DROP_RESET_THRESHOLD:
            self.drops[column] = 0
            did_reset = True
        self.drops[column] += 1
        return int(self.drops[column]), did_reset

    def advance_all(self) -> int:
        """
        Advances every column once, with one independent trial per column.

        Returns:
            int: How many columns restarted from the top.
        """
        trials = self.rng.random(self.columns)
        resets = _advance_drops_numba(
            self.drops, trials, self.glyph_size, self.height, DROP_RESET_THRESHOLD
        )
        return int(resets)
