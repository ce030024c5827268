"""Health checks for the database and the dismissal overlay cache."""

import time
from collections.abc import Callable

from django.core.cache import caches
from django.db import connection
from django.db.utils import OperationalError

import structlog

from feed.constants import DISMISSAL_CACHE_ALIAS
from feed.enums import HealthStatus
from feed.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)

logger = structlog.get_logger(__name__)

HEALTH_PROBE_KEY = "__feed_health_check__"


class _CachedCheck:
    """Runs a dependency check at most once per TTL window."""

    def __init__(self, check: Callable[[], DependencyHealth], ttl_seconds: float):
        self.check = check
        self.ttl_seconds = ttl_seconds
        self.result: DependencyHealth | None = None
        self.checked_at = 0.0

    def __call__(self) -> DependencyHealth:
        now = time.time()
        if self.result is not None and (now - self.checked_at) < self.ttl_seconds:
            return self.result

        previous = self.result
        self.result = self.check()
        self.checked_at = now
        if previous is not None and previous.healthy != self.result.healthy:
            logger.info(
                "Dependency health changed",
                healthy=self.result.healthy,
                message=self.result.message,
            )
        return self.result


class HealthService:
    """Service for performing health checks with caching."""

    def __init__(self, cache_ttl_seconds: float = 5.0) -> None:
        """Initialize the health service.

        Args:
            cache_ttl_seconds: Time to live for cached health check results
        """
        self.cache_ttl_seconds = cache_ttl_seconds
        self._database_check = _CachedCheck(self._probe_database, cache_ttl_seconds)
        self._dismissal_check = _CachedCheck(
            self._probe_dismissal_store, cache_ttl_seconds
        )

    def get_liveness_status(self) -> LivenessResponse:
        return LivenessResponse()

    def get_readiness_status(self) -> ReadinessResponse:
        """Readiness with per-dependency health.

        A failed source is served as empty and an unreadable overlay as an
        empty dismissal set, so a dependency outage only marks the service
        degraded.
        """
        return ReadinessResponse.from_dependencies(
            {
                "database": self.check_database_health(),
                "dismissal_store": self.check_dismissal_store_health(),
            }
        )

    def check_database_health(self) -> DependencyHealth:
        return self._database_check()

    def check_dismissal_store_health(self) -> DependencyHealth:
        return self._dismissal_check()

    @staticmethod
    def _probe_database() -> DependencyHealth:
        started = time.perf_counter()
        try:
            connection.ensure_connection()
        except OperationalError as e:
            return DependencyHealth.measured(
                HealthStatus.UNHEALTHY, f"Database connection failed: {e!s}", started
            )
        except Exception as e:
            logger.error("Unexpected error checking database", error=str(e))
            return DependencyHealth.measured(
                HealthStatus.ERROR, f"Unexpected database error: {e!s}", started
            )
        return DependencyHealth.measured(
            HealthStatus.HEALTHY, "Database connection successful", started
        )

    @staticmethod
    def _probe_dismissal_store() -> DependencyHealth:
        started = time.perf_counter()
        try:
            store = caches[DISMISSAL_CACHE_ALIAS]
            store.set(HEALTH_PROBE_KEY, "ok", timeout=1)
            result = store.get(HEALTH_PROBE_KEY)
        except Exception as e:
            logger.warning("Dismissal store health check failed", error=str(e))
            return DependencyHealth.measured(
                HealthStatus.ERROR, f"Dismissal store unavailable: {e!s}", started
            )

        if result != "ok":
            return DependencyHealth.measured(
                HealthStatus.UNHEALTHY,
                "Dismissal store returned an unexpected probe value",
                started,
            )
        return DependencyHealth.measured(
            HealthStatus.HEALTHY, "Dismissal store available", started
        )


health_service = HealthService()
