"""Django application configuration for the feed app."""

from django.apps import AppConfig

import structlog

logger = structlog.get_logger(__name__)


class FeedConfig(AppConfig):
    """Configuration class for the feed application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "feed"
    verbose_name = "Notification feed"

    def ready(self) -> None:
        """Log app initialization."""
        logger.info("Notification feed app ready")
