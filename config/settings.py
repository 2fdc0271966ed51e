"""Django settings for the RSVP tracker.

There is no database and no HTTP surface; Django provides configuration,
timezone handling, logging setup and management commands.
"""

import os
from pathlib import Path


def env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "rsvp-tracker-insecure-dev-key")
DEBUG = env_bool("DJANGO_DEBUG")

INSTALLED_APPS = [
    "rest_framework",
    "rsvps",
]

DATABASES = {}

USE_TZ = True
TIME_ZONE = "UTC"

REST_FRAMEWORK = {
    "DATETIME_FORMAT": "iso-8601",
    "DATETIME_INPUT_FORMATS": ["iso-8601"],
}

# RSVP storage
RSVP_STORAGE_DIR = os.environ.get("RSVP_STORAGE_DIR", str(Path.cwd() / "data"))
RSVP_DATA_FILE = "rsvp-data.json"

# Count every event's Yes responses against each event's capacity.
RSVP_SYSTEM_WIDE_CAPACITY = env_bool("RSVP_SYSTEM_WIDE_CAPACITY")

RSVP_CLEANUP_MAX_AGE_DAYS = int(os.environ.get("RSVP_CLEANUP_MAX_AGE_DAYS", "30"))

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "[{levelname}] {name}: {message}", "style": "{"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "rsvps": {
            "handlers": ["console"],
            "level": os.environ.get("RSVP_LOG_LEVEL", "INFO"),
        },
    },
}
