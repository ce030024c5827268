"""Health probe schemas."""

import time

from pydantic import Field

from feed.enums import HealthStatus
from feed.schemas.base import FeedSchema


class DependencyHealth(FeedSchema):
    """Outcome of probing one dependency."""

    healthy: bool
    status: HealthStatus
    message: str
    response_time_ms: float | None = Field(None, description="Probe duration")

    @classmethod
    def measured(
        cls, status: HealthStatus, message: str, started: float
    ) -> "DependencyHealth":
        """Build a result for a probe started at perf_counter() value `started`."""
        return cls(
            healthy=status is HealthStatus.HEALTHY,
            status=status,
            message=message,
            response_time_ms=(time.perf_counter() - started) * 1000,
        )


class LivenessResponse(FeedSchema):
    status: str = "alive"


class ReadinessResponse(FeedSchema):
    """Readiness of the feed service.

    `ready` stays true while dependencies are down because every read path
    degrades instead of failing; `status` is then "degraded".
    """

    ready: bool = True
    status: str
    degraded: bool
    dependencies: dict[str, DependencyHealth]

    @classmethod
    def from_dependencies(
        cls, dependencies: dict[str, DependencyHealth]
    ) -> "ReadinessResponse":
        degraded = not all(health.healthy for health in dependencies.values())
        return cls(
            status="degraded" if degraded else "ready",
            degraded=degraded,
            dependencies=dependencies,
        )


__all__ = ["DependencyHealth", "LivenessResponse", "ReadinessResponse"]
