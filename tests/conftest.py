"""Pytest configuration and shared fixtures."""

import os

import django
from django.core.cache import caches

import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "feed_service.settings_test")
django.setup()

from feed.constants import DISMISSAL_CACHE_ALIAS  # noqa: E402


@pytest.fixture(autouse=True)
def empty_dismissal_cache():
    """Dismissals are per-process state in tests; start every test without any."""
    caches[DISMISSAL_CACHE_ALIAS].clear()
    yield
    caches[DISMISSAL_CACHE_ALIAS].clear()
