# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They are the
defaults for every setting; `config.json` may override the ones that are
part of the visual's configuration.
"""

# Window settings
SCREEN_WIDTH = 1600
SCREEN_HEIGHT = 900
WINDOW_TITLE = "Dots"
VSYNC = False
# Frame cap passed to pygame's clock. 0 means uncapped.
MAX_FPS = 0
TICKS_PER_SECOND = 60
# Upper bound on simulation ticks run between two frames, so a slow frame
# does not snowball into an ever growing backlog.
MAX_TICKS_PER_FRAME = 5
QUIT_KEY = "escape"

# Simulation settings
POINTS_COUNT = 200
SPEED = 0.2

# Rendering settings
CONNECT_DISTANCE = 100.0
# Extra reach for lines between a particle and the cursor.
CURSOR_EXTRA_DISTANCE = 30.0
DOT_RADIUS = 1.5
# Number of sort-order neighbours tested per particle by the windowed strategy.
PAIR_WINDOW = 50
PAIR_STRATEGY = "windowed"
STROKE_POLICY = "linear_falloff"

# Divisor of the linear falloff stroke policy: |d / 100 - 1|.
LINEAR_FALLOFF_SCALE = 100.0
LINEAR_FALLOFF_MAX_WIDTH = 0.5
INVERSE_DISTANCE_FACTOR = 0.2
INVERSE_DISTANCE_MAX_WIDTH = 1.0
# Distances are clamped to this before any division.
MIN_STROKE_DISTANCE = 1e-6

BACKGROUND_COLOR = (0, 0, 0)
DOT_COLOR = (255, 255, 255)
LINE_COLOR = (255, 255, 255)
TEXT_COLOR = (255, 255, 255)
TEXT_POSITION = (10, 10)
FONT_SIZE = 18

# Logging
LOG_THROTTLE_TICKS = 600
