# app/config.py
import os
from pathlib import Path

APP_NAME = "SyntaxRush"

DATA_DIR = Path(os.environ.get("SYNTAXRUSH_DATA_DIR", "data"))
DB_PATH = DATA_DIR / "syntaxrush.db"
LOG_FILE = "app.log"

# Session driver
TICK_MS = 1000
GOAL_MINUTES = 30
LEARNING_RATE = 0.1  # placeholder shown in the UI, not estimated from data

# Leaderboard
LEADERBOARD_KEY = "leaderboard"
LEADERBOARD_SIZE = 10

# Uploads
UPLOAD_EXTENSIONS = {
    ".js": "javascript",
    ".py": "python",
    ".java": "java",
    ".cpp": "cpp",
}

# Backend shim
PORT = int(os.environ.get("PORT", "5000"))
