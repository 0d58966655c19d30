"""
Django settings for the wordgame project.

Only what the game needs is configured: the ``game`` app, logging, and the
default wordlist location. There is no database; sessions live in memory
for the lifetime of a single ``play`` command.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "wordgame-insecure-local-key")

DEBUG = os.getenv("DJANGO_DEBUG", "0") in ("1", "true", "yes", "on")

ALLOWED_HOSTS = []

INSTALLED_APPS = [
    "game.apps.GameConfig",
]

DATABASES = {}

USE_TZ = True

# Wordlist used when ``play`` is run without ``--wordlist``. Relative paths
# resolve against the working directory, like any command-line path.
GAME_WORDLIST_PATH = os.getenv("GAME_WORDLIST_PATH", "word-list-5.txt")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(message)s"},
    },
    "handlers": {
        "stderr": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "formatter": "plain",
        },
    },
    "loggers": {
        "game": {
            "handlers": ["stderr"],
            "level": os.getenv("GAME_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
