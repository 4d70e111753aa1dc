# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They are
fundamental to the effect itself, such as glyph metrics, frame pacing
limits, and the quality/theme tables, and are not part of the
user-facing configuration in config.json.
"""

# Visualization settings
# Default window size used when not running fullscreen.
DEFAULT_WINDOW_SIZE = (1200, 700)
BACKGROUND_COLOR = (0, 0, 0) # Black

# --- Glyphs ---
# Pixel size of one glyph cell (both column and row height at full density).
FONT_SIZE = 20
# The alphabet is a contiguous run of code points (Katakana block).
GLYPH_CODE_POINT_START = 0x30A0
GLYPH_COUNT = 96
GLYPHS = [chr(GLYPH_CODE_POINT_START + i) for i in range(GLYPH_COUNT)]
# Font names tried in order; pygame falls back to its default font.
GLYPH_FONT_NAMES = "notosanscjkjp,notosansmonocjkjp,msgothic,ipagothic,monospace"

# --- Grid ---
# Surface width per density step. Columns widen by one step per 1200px.
DENSITY_STEP_PX = 1200
# A drop past the bottom edge restarts when a uniform draw exceeds this.
DROP_RESET_THRESHOLD = 0.975
# Drops start one row below the top edge.
DROP_START_ROW = 1

# --- Frame pacing (milliseconds) ---
DEFAULT_SPEED_MS = 50
MIN_FRAME_MS = 16
MAX_FRAME_MS = 200
SPEED_STEP_MS = 10
FPS_INTERVAL_MS = 500
# Host loop iterations per second, standing in for the display refresh.
DEFAULT_FPS_CAP = 60

# --- Auto quality ---
AUTO_ADJUST_COOLDOWN_MS = 1500
# Below LOW -> low, below MEDIUM -> medium, above HIGH -> high.
# Rates between MEDIUM and HIGH leave the active quality alone.
AUTO_FPS_LOW = 30
AUTO_FPS_MEDIUM = 45
AUTO_FPS_HIGH = 55

# --- Quality levels ---
QUALITY_AUTO = "auto"
QUALITY_SETTINGS = {
    "high": {"column_scale": 1.0, "trail_alpha": 0.05},
    "medium": {"column_scale": 1.5, "trail_alpha": 0.06},
    "low": {"column_scale": 2.0, "trail_alpha": 0.08},
}
# Selection order, best first. Used by the quality cycle key.
QUALITY_LEVELS = ["high", "medium", "low", QUALITY_AUTO]

# --- Themes ---
THEME_CYCLE = "cycle"
CYCLE_STEP_MS = 200
THEME_SETTINGS = {
    "matrix": {"color": "#00ff00"},
    "cyber": {"color": "#00f6ff"},
    "blue": {"color": "#3a7bff"},
    "amber": {"color": "#ffb000"},
    "ice": {"color": "#9bf7ff"},
    THEME_CYCLE: {"colors": ["#00ff00", "#00f6ff", "#ffb000", "#ff4d4d", "#9bf7ff"]},
}
THEMES = list(THEME_SETTINGS)

# --- HUD ---
HUD_FONT_SIZE = 18
HUD_MARGIN = 10
HUD_TEXT_COLOR = (230, 230, 230)
HUD_BACKGROUND_ALPHA = 160
COLOR_INDICATOR_SIZE = 16
