"""Dependency states reported by the readiness probe."""

from enum import Enum


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    # Reachable, but the probe did not get the expected answer
    UNHEALTHY = "unhealthy"
    # The probe itself raised
    ERROR = "error"
