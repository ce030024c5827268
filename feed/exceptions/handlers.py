"""DRF exception handler for the notification feed API."""

from datetime import UTC, datetime
from typing import Any

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.http import Http404

import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from feed.constants import REQUEST_ID_HEADER
from feed.exceptions.feed_exceptions import ActionFailedError, ConflictError
from feed.logging.context import get_request_id

logger = structlog.get_logger(__name__)


def _error_body(status_code: int, message: str, **extra: Any) -> dict[str, Any]:
    return {
        "status": status_code,
        "message": message,
        "request_id": get_request_id(),
        "timestamp": datetime.now(UTC).isoformat(),
        **extra,
    }


def _feed_error_response(exc: Exception) -> Response:
    """Build the response for exceptions DRF does not handle itself."""
    if isinstance(exc, ActionFailedError):
        code = status.HTTP_502_BAD_GATEWAY
        body = _error_body(
            code, str(exc), action=exc.action, notification_id=exc.notification_id
        )
    elif isinstance(exc, ConflictError):
        code = status.HTTP_409_CONFLICT
        body = _error_body(code, str(exc), error="conflict", detail=exc.detail)
    elif isinstance(exc, Http404):
        code = status.HTTP_404_NOT_FOUND
        body = _error_body(code, "The requested resource was not found.")
    elif isinstance(exc, PermissionDenied):
        code = status.HTTP_403_FORBIDDEN
        body = _error_body(code, "You do not have permission to perform this action.")
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
        body = _error_body(code, "An internal server error occurred.")
    return Response(body, status=code)


def custom_exception_handler(
    exc: Exception, context: dict[str, Any]
) -> Response | None:
    """Map an exception to an error response and log it.

    DRF's own handler runs first; feed, Django and unexpected exceptions
    get the body {status, message, request_id, timestamp}. Every response
    carries the X-Request-ID header.
    """
    response = exception_handler(exc, context) or _feed_error_response(exc)

    request_id = get_request_id()
    if request_id:
        response[REQUEST_ID_HEADER] = request_id

    view = context.get("view")
    request = view.request if view else None
    log = logger.error if response.status_code >= 500 else logger.warning
    log(
        "Request failed",
        error_type=type(exc).__name__,
        error=str(exc),
        method=request.method if request else "unknown",
        path=request.path if request else "unknown",
        status_code=response.status_code,
        exc_info=settings.DEBUG and response.status_code >= 500,
    )
    return response
