"""Request ID middleware for distributed tracing."""

import uuid
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from feed.constants import MAX_REQUEST_ID_LENGTH, REQUEST_ID_HEADER
from feed.logging.context import clear_request_id, set_request_id


def _incoming_request_id(request: HttpRequest) -> str | None:
    value = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if not value or len(value) > MAX_REQUEST_ID_LENGTH or not value.isprintable():
        return None
    return value


class RequestIDMiddleware:
    """Tag each request with an X-Request-ID for logs and the response.

    A well-formed incoming header is propagated; anything else is replaced
    by a fresh UUID. The log context is reset after the response.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = _incoming_request_id(request) or str(uuid.uuid4())
        request.request_id = request_id  # type: ignore[attr-defined]
        set_request_id(request_id)
        try:
            response = self.get_response(request)
        finally:
            clear_request_id()
        response[REQUEST_ID_HEADER] = request_id
        return response
