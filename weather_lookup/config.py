# ABOUTME: Environment-driven settings for the weather lookup core.
# ABOUTME: Loads .env once and exposes API, HTTP, display and logging options as module constants.

import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


OPENWEATHER_API_KEY = os.environ.get("OPENWEATHER_API_KEY", "")
OPENWEATHER_BASE_URL = os.environ.get("OPENWEATHER_BASE_URL", "https://api.openweathermap.org/")
HTTP_TIMEOUT_SECONDS = float(os.environ.get("HTTP_TIMEOUT_SECONDS", "10"))

# The upstream app shows temp_min as the "current" temperature. Kept as the
# default until product decides; set to false to show main.temp instead.
CURRENT_TEMP_FROM_MIN = _env_flag("CURRENT_TEMP_FROM_MIN", True)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
