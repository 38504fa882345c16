import os

# --- Display ---
WIDTH = 800
HEIGHT = 400
FPS = 60
MAX_FRAME_MS = 100          # clamp stalls before they reach the session

# --- Timing ---
FRAME_MS = 16.0             # nominal frame; all motion is scaled by elapsed/FRAME_MS
MIN_FRAME_MS = 0.0          # frame throttle (0 = every tick advances)

# --- Character / physics ---
CHARACTER_X = 50
CHARACTER_W = 30
CHARACTER_H = 30
GROUND_Y = HEIGHT           # y of the ground surface
GRAVITY = 0.8               # added to vy once per nominal frame
JUMP_STRENGTH = 14.0
DOUBLE_JUMP_FACTOR = 0.9    # second jump impulse = JUMP_STRENGTH * factor
MAX_JUMP_HEIGHT = JUMP_STRENGTH ** 2 / (2 * GRAVITY)

# --- Obstacles ---
SPAWN_X = WIDTH             # obstacles enter at the right edge
MIN_OBSTACLE_DISTANCE = 300.0
MOVING_AMPLITUDE = 30.0     # px up/down around the base line
MOVING_OMEGA = 3.0          # rad/s
ON_RAMP_SCORE = 3.0         # only standard obstacles below this score
ANTI_REPEAT_RUN = 3         # same kind this many times in a row -> excluded once

# Width (px) and height as a fraction of MAX_JUMP_HEIGHT
OBSTACLE_GEOMETRY = {
    "standard": {"width": 20, "height_frac": 0.35},
    "tall": {"width": 20, "height_frac": 0.60},
    "low": {"width": 60, "height_frac": 0.20},
    "moving": {"width": 24, "height_frac": 0.30},
}
# Order in which kinds are unlocked as the difficulty level rises
KIND_UNLOCK_ORDER = ("standard", "tall", "low", "moving")

# --- Modes ---
# speed: px per nominal frame; frequency: obstacles per second.
# level_every: score points per difficulty level (None = never levels up).
MODES = {
    "classic": {
        "gate": "distance",
        "speed": 4.0, "max_speed": 4.0, "speed_gain": 0.0,
        "frequency": 1.0, "max_frequency": 1.0, "frequency_gain": 0.0,
        "level_every": None, "max_kinds": 1,
    },
    "marathon": {
        "gate": "time",
        "speed": 4.0, "max_speed": 9.0, "speed_gain": 0.05,
        "frequency": 0.6, "max_frequency": 1.3, "frequency_gain": 0.01,
        "level_every": 15.0, "max_kinds": 4,
    },
    "challenge": {
        "gate": "time",
        "speed": 5.0, "max_speed": 12.0, "speed_gain": 0.12,
        "frequency": 0.8, "max_frequency": 1.6, "frequency_gain": 0.03,
        "level_every": 8.0, "max_kinds": 4,
    },
}
DEFAULT_MODE = "classic"
MAX_SCROLL_SPEED = max(m["max_speed"] for m in MODES.values())

# --- Menu layout (logical coordinates) ---
BUTTON_W = 180
BUTTON_H = 44
BUTTON_GAP = 14
MENU_TOP = 120

# --- Persistence ---
HIGHSCORE_FILE = os.environ.get(
    "JUMPRUNNER_HIGHSCORE_FILE",
    os.path.join(os.path.expanduser("~"), ".jumprunner_highscores.json"),
)

# --- Colors (RGB) ---
COLOR_BG = (236, 240, 245)
COLOR_FG = (20, 24, 32)
COLOR_GROUND = (120, 128, 140)
COLOR_CHARACTER = (40, 90, 220)
COLOR_BUTTON = (40, 60, 90)
COLOR_BUTTON_EDGE = (90, 130, 180)
COLOR_BUTTON_TXT = (220, 235, 255)
COLOR_OBSTACLES = {
    "standard": (220, 50, 60),
    "tall": (170, 30, 40),
    "low": (235, 120, 40),
    "moving": (150, 60, 200),
}
