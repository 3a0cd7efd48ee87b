# firetourneys/test_settings.py
from .settings import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Argon2 is deliberately slow; tests create lots of users.
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# No manifest during tests; collectstatic never runs.
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "firetourneys-tests",
    }
}

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

TOURNAMENT_FEED_KEEPALIVE_SECONDS = 0.05
TOURNAMENT_FEED_MAX_SECONDS = 0.2

# Project loggers propagate to the root so pytest's caplog sees them
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "loggers": {name: {"level": "DEBUG", "propagate": True} for name in PROJECT_LOGGERS},
}
