# --- Display ---
WIDTH = 400
HEIGHT = 600
FPS = 60
CAPTION = "Flappy Pipes"

# --- World / Physics ---
GRAVITY_Y = 600.0           # bird gravity (px/s^2, +down)
FLAP_VELOCITY = 300.0       # upward impulse applied on flap (px/s)
PIPE_VELOCITY_X = -200.0    # shared scroll speed of the pipe pool (px/s)
MAX_FRAME_DT = 1.0 / 30.0   # clamp stalls

# --- Bird ---
BIRD_START_X = WIDTH / 10
BIRD_START_Y = HEIGHT / 2
BIRD_W = 34
BIRD_H = 24

# --- Pipes ---
PIPES_TO_RENDER = 4         # pairs in the pool (8 bodies)
PIPE_W = 52
PIPE_H = HEIGHT             # tall enough to always cover the screen edge
PIPE_EDGE_MARGIN = 20       # min distance between the gap and the top/bottom edge

# --- Difficulty ---
# name -> (pipe_distance_range, pipe_opening_range), both inclusive
DIFFICULTY_ORDER = ("easy", "normal", "hard")
DIFFICULTY_TABLE = {
    "easy":   ((300, 350), (150, 200)),
    "normal": ((280, 330), (140, 190)),
    "hard":   ((250, 310), (120, 170)),
}
DIFFICULTY_THRESHOLDS = {3: "normal", 6: "hard"}   # score -> level reached at that score

# --- Timers ---
RESTART_DELAY_MS = 1000
COUNTDOWN_START = 3
COUNTDOWN_INTERVAL_MS = 1000
FADE_IN_MS = 300

# --- Storage ---
BEST_SCORE_KEY = "bestScore"
STORAGE_PATH_DEFAULT = "~/.flappy_pipes.json"
SEED_DEFAULT = 12345

# --- HUD ---
SCORE_POS = (16, 16)
BEST_SCORE_POS = (16, 52)
PAUSE_BUTTON_SIZE = 32
PAUSE_BUTTON_MARGIN = 10
FONT_NAME = "jetbrainsmono"

# --- Colors (RGB) ---
COLOR_BG = (113, 197, 207)
COLOR_FG = (0, 0, 0)
COLOR_TITLE = (255, 255, 255)
COLOR_BIRD = (250, 200, 40)
COLOR_HIT = (255, 0, 0)
COLOR_PIPE = (83, 160, 52)
COLOR_PIPE_EDGE = (40, 90, 30)
COLOR_MENU = (255, 255, 255)
COLOR_MENU_HOVER = (255, 214, 10)
COLOR_OVERLAY = (0, 0, 0, 120)

# --- Env ---
SIM_FPS = 60
FRAME_SKIP_DEFAULT = 4
TIME_LIMIT_S = 60.0
