"""Per-request logging context.

Values are held in context variables rather than thread-locals: views hand
work to the event loop through `async_to_sync`, and asgiref carries the
context across that boundary so service logs keep the request's ids.
"""

from contextvars import ContextVar

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_user_id: ContextVar[str | None] = ContextVar("user_id", default=None)


def set_request_id(request_id: str) -> None:
    _request_id.set(request_id)


def get_request_id() -> str | None:
    return _request_id.get()


def set_user_id(user_id: str) -> None:
    """Record the feed owner of the current request."""
    _user_id.set(user_id)


def get_user_id() -> str | None:
    return _user_id.get()


def clear_request_id() -> None:
    """Reset the request context once the response is produced."""
    _request_id.set(None)
    _user_id.set(None)
