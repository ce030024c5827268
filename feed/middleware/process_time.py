"""Process time middleware for performance monitoring."""

import time
from collections.abc import Callable

from django.conf import settings
from django.http import HttpRequest, HttpResponse

import structlog

from feed.constants import PROCESS_TIME_HEADER, SLOW_REQUEST_THRESHOLD

logger = structlog.get_logger(__name__)


def slow_request_threshold() -> float:
    return float(getattr(settings, "SLOW_REQUEST_THRESHOLD", SLOW_REQUEST_THRESHOLD))


class ProcessTimeMiddleware:
    """Stamp X-Process-Time on every response; warn about slow requests."""

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        started = time.perf_counter()
        response = self.get_response(request)
        elapsed = time.perf_counter() - started

        response[PROCESS_TIME_HEADER] = f"{elapsed:.6f}"

        threshold = slow_request_threshold()
        if elapsed > threshold:
            logger.warning(
                "Slow request detected",
                method=request.method,
                path=request.path,
                status_code=response.status_code,
                duration_s=round(elapsed, 3),
                threshold_s=threshold,
            )
        return response
