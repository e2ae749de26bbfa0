"""
config.py — Shared constants for the entire application.
No logic beyond environment lookups, no imports from internal modules.
"""

import os
import sys
from pathlib import Path

# ── Grid ──────────────────────────────────────────────────────────
COLS, ROWS      = 20, 20
MIN_CELLS       = 10
MAX_CELLS       = 30          # the board never grows past 30 cells per axis
CELL            = 24

# ── Window ────────────────────────────────────────────────────────
PANEL_H         = 60
MARGIN          = 10
FPS             = 60

# ── Colors ────────────────────────────────────────────────────────
BG          = (0,   0,   0)
GRID_COL    = (30,  41,  59)
SNAKE_COL   = (74,  222, 128)
SNAKE_DIM   = (20,  83,  45)
FOOD_COL    = (239, 68,  68)
SCORE_HOT   = (250, 204, 21)
UI_COL      = (148, 163, 184)
BLACK       = (0,   0,   0)
PANEL_BG    = (12,  12,  20)
BORDER_COL  = (26,  26,  62)

# ── Gameplay ──────────────────────────────────────────────────────
START_LENGTH      = 3
POINTS_PER_FOOD   = 10
BASE_INTERVAL_MS  = 100
SPEED_STEP_MS     = 5
SCORE_PER_SPEEDUP = 50
MIN_INTERVAL_MS   = 50
SWIPE_THRESHOLD   = 30

# ── Effects ───────────────────────────────────────────────────────
PARTICLE_FOOD_COUNT = 12
SHAKE_MS            = 500

# ── Audio ─────────────────────────────────────────────────────────
AUDIO_RATE     = 22050
AUDIO_CHANNELS = 1

# ── Game Phases ───────────────────────────────────────────────────
PHASE_IDLE    = "idle"
PHASE_RUNNING = "running"
PHASE_PAUSED  = "paused"
PHASE_OVER    = "over"

# ── Persistence ───────────────────────────────────────────────────
HIGHSCORE_KEY = "snakeHighScore"


def _default_data_dir() -> Path:
    """Platform-appropriate user data directory for the high score."""
    if sys.platform.startswith("win"):
        base = Path(os.getenv("LOCALAPPDATA") or Path.home() / "AppData" / "Local")
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share")
    return base / "gridsnake"


DATA_DIR       = Path(os.getenv("GRIDSNAKE_DATA_DIR") or _default_data_dir())
HIGHSCORE_FILE = Path(os.getenv("GRIDSNAKE_HIGHSCORE_FILE") or DATA_DIR / "highscore.json")

# Optional background loop; the game runs silently without it.
MUSIC_PATH = Path(__file__).resolve().parent / "song.mp3"
