import os
import tempfile

SECRET_KEY = "test-secret"

DATA_DIR = os.getenv("DATA_DIR", os.path.join(tempfile.gettempdir(), "chrono_sync_test"))

WORK_START_TIME = "09:00"
WORK_HOURS_REQUIRED = 8

GEMINI_API_KEY = ""
GEMINI_MODEL = "gemini-2.5-flash"
TIP_TIMEOUT_SECONDS = 1.0

# Tests drive the timer through the API instead of a background thread
SESSION_TICKER_ENABLED = False
TICK_INTERVAL_SECONDS = 1.0
ALARM_SOUND_URL = ""

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True
