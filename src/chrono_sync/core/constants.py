"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

WORK_START_TIME = "09:00"
WORK_HOURS_REQUIRED = 8
TICK_INTERVAL_SECONDS = 1.0
ANALYSIS_WINDOW = 10

DEFAULT_THEME = "indigo"
ALARM_SOUND_URL = "https://assets.mixkit.co/sfx/preview/mixkit-alarm-digital-clock-beep-989.mp3"

GEMINI_MODEL = "gemini-2.5-flash"
GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
DEFAULT_TIP_TIMEOUT_SECONDS = 10

# Logical store keys.
KEY_USER = "chrono_user"
KEY_RECORDS = "chrono_records"
KEY_SESSION = "chrono_current_session"
KEY_ALARMED_SESSION = "chrono_alarmed_session"
KEY_THEME = "chrono_theme_pref"
KEY_DARK_MODE = "chrono_dark_mode"

# Profile handed out on first sign-in; the email comes from the login form.
DEFAULT_PROFILE = {
    "name": "Alex Sterling",
    "phone": "+1 (555) 0123-4567",
    "department": "Engineering",
    "position": "Senior Frontend Engineer",
    "avatar_url": "https://picsum.photos/200/200",
}
