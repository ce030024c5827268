"""Django settings for the test suite.

SQLite in memory, local-memory caches, authentication off (tests patch it)
and logging muted.
"""

import os

os.environ.setdefault("DJANGO_SKIP_LOGGING_SETUP", "1")

from django.db.models.signals import class_prepared  # noqa: E402

from .settings import *  # noqa: E402, F403

DEBUG = False

DATABASES = {"default": {"ENGINE": "django.db.backends.sqlite3", "NAME": ":memory:"}}

CACHES = {
    "default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"},
    "dismissals": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "dismissals-test",
        "TIMEOUT": None,
    },
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

OAUTH2_INTROSPECTION_ENABLED = False
JWT_SECRET = "test-jwt-secret"

LOGGING_CONFIG = "logging.config.dictConfig"
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"null": {"class": "logging.NullHandler"}},
    "root": {"handlers": ["null"], "level": "CRITICAL"},
    "loggers": {
        name: {"handlers": ["null"], "level": "CRITICAL", "propagate": False}
        for name in ("django", "feed")
    },
}


def _manage_schema_in_tests(sender, **_kwargs):
    # The feed tables belong to another service; create them for the test DB.
    sender._meta.managed = True


class_prepared.connect(_manage_schema_in_tests)
