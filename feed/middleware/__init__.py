"""Middleware components for the notification feed service."""

from feed.middleware.process_time import ProcessTimeMiddleware
from feed.middleware.request_id import RequestIDMiddleware
from feed.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "ProcessTimeMiddleware",
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
]
