import os
from pathlib import Path

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Machine-local store (one file per key)
DATA_DIR = os.getenv("DATA_DIR", str(Path.home() / ".chrono_sync"))

WORK_START_TIME = os.getenv("WORK_START_TIME", "09:00")
WORK_HOURS_REQUIRED = int(os.getenv("WORK_HOURS_REQUIRED", "8"))

# Leave empty to run with the built-in fallback tips
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", os.getenv("API_KEY", ""))
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
TIP_TIMEOUT_SECONDS = float(os.getenv("TIP_TIMEOUT_SECONDS", "10"))

SESSION_TICKER_ENABLED = bool(int(os.getenv("SESSION_TICKER_ENABLED", "1")))
TICK_INTERVAL_SECONDS = float(os.getenv("TICK_INTERVAL_SECONDS", "1"))
ALARM_SOUND_URL = os.getenv(
    "ALARM_SOUND_URL",
    "https://assets.mixkit.co/sfx/preview/mixkit-alarm-digital-clock-beep-989.mp3",
)

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True
