# config.py
# Paths and environment-driven settings shared by the API, the loader and the logger.

import os
from pathlib import Path

# === Base project path ===
PROJECT_ROOT = Path(__file__).resolve().parent

# === Data ===
DATA_DIR = Path(os.getenv("DATA_DIR", str(PROJECT_ROOT / "data")))
UNITS_FILE = Path(os.getenv("UNITS_FILE", str(DATA_DIR / "units.json")))

# === Logging ===
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_PATH = Path(os.environ["LOG_PATH"]) if os.getenv("LOG_PATH") else None  # No file log unless asked for.

# === Calendar ===
WEEKDAYS = ("MON", "TUE", "WED", "THU", "FRI")
