# registry.py
"""
Static lookup tables for render quality and color themes.

Maps named quality levels to their rendering parameters and named themes
to the color that should be drawn at a given moment.
"""
import logging
from typing import NamedTuple
from constants import (
    QUALITY_SETTINGS, QUALITY_AUTO, THEME_SETTINGS, THEME_CYCLE, CYCLE_STEP_MS
)

# --- Data Contracts ---
#
# get_quality_params(quality: str) -> QualityParams:
#   - Inputs: one of "high", "medium", "low" (never "auto").
#   - Outputs: (column_scale, trail_alpha).
#   - Invariants: lower quality has a larger column_scale and trail_alpha.
#
# get_active_color(theme: str, timestamp: float) -> str:
#   - Inputs: a theme name and a frame timestamp in milliseconds.
#   - Outputs: a "#rrggbb" color string. The cycle theme steps through its
#     palette every CYCLE_STEP_MS, without interpolation.


class QualityParams(NamedTuple):
    column_scale: float
    trail_alpha: float


def validate_quality(quality: str, allow_auto: bool = True) -> str:
    """Returns the quality name unchanged, or raises ValueError if unknown."""
    if quality in QUALITY_SETTINGS or (allow_auto and quality == QUALITY_AUTO):
        return quality
    msg = f"Unknown quality level '{quality}'. Expected one of {sorted(QUALITY_SETTINGS)} or '{QUALITY_AUTO}'."
    logging.error(msg)
    raise ValueError(msg)


def validate_theme(theme: str) -> str:
    """Returns the theme name unchanged, or raises ValueError if unknown."""
    if theme in THEME_SETTINGS:
        return theme
    msg = f"Unknown theme '{theme}'. Expected one of {list(THEME_SETTINGS)}."
    logging.error(msg)
    raise ValueError(msg)


def get_quality_params(quality: str) -> QualityParams:
    settings = QUALITY_SETTINGS[validate_quality(quality, allow_auto=False)]
    return QualityParams(settings['column_scale'], settings['trail_alpha'])


def get_active_color(theme: str, timestamp: float) -> str:
    """
    Resolves the glyph color for a theme at a point in time.

    Single-color themes ignore the timestamp. The cycle theme picks
    palette[floor(timestamp / CYCLE_STEP_MS) mod len(palette)].
    """
    settings = THEME_SETTINGS[validate_theme(theme)]
    if theme == THEME_CYCLE:
        palette = settings['colors']
        index = int(timestamp // CYCLE_STEP_MS) % len(palette)
        return palette[index]
    return settings['color']
