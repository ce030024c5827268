"""Security headers middleware."""

from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from feed.constants import SECURITY_HEADERS


class SecurityHeadersMiddleware:
    """Add SECURITY_HEADERS to every response unless a view already set them."""

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        response = self.get_response(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response
