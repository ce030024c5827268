"""ASGI config for the notification feed service."""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "feed_service.settings")

application = get_asgi_application()
