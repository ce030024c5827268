"""Custom structlog processors for request context and service metadata."""

import os
import threading

from colorama import Fore, Style, init
from structlog.typing import EventDict, WrappedLogger

from feed.logging.context import get_request_id, get_user_id

LEVEL_COLORS = {
    "DEBUG": Fore.CYAN,
    "INFO": Fore.GREEN,
    "WARNING": Fore.YELLOW,
    "ERROR": Fore.RED,
    "CRITICAL": Fore.RED + Style.BRIGHT,
}

# Keys rendered in the console prefix; everything else is appended as key=value
_CONSOLE_RESERVED_KEYS = frozenset(
    {
        "level",
        "timestamp",
        "request_id",
        "logger",
        "event",
        "service_name",
        "environment",
        "process_id",
        "thread_id",
    }
)


def add_request_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add the current request_id and feed owner user_id to log events.

    An explicit user_id passed to the logger call takes precedence.
    """
    request_id = get_request_id()
    if request_id:
        event_dict["request_id"] = request_id
    user_id = get_user_id()
    if user_id:
        event_dict.setdefault("user_id", user_id)
    return event_dict


def add_service_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service_name and environment to all log events."""
    event_dict["service_name"] = os.getenv("SERVICE_NAME", "notification-feed-service")
    event_dict["environment"] = os.getenv("ENVIRONMENT", "development")
    return event_dict


def add_process_info(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add process and thread identifiers to log events."""
    event_dict["process_id"] = os.getpid()
    event_dict["thread_id"] = threading.get_ident()
    return event_dict


def _paint(color: str, text: object) -> str:
    return f"{color}{text}{Style.RESET_ALL}"


def console_renderer(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> str:
    """Render an event as one colored console line.

    Layout: ``[LEVEL] timestamp | request_id user_id | logger | event k=v ...``
    with a traceback, when present, on the following lines.
    """
    init(autoreset=True)

    level = str(event_dict.get("level", "info")).upper()
    trace = event_dict.get("request_id") or "-"
    if event_dict.get("user_id"):
        trace = f"{trace} user={event_dict['user_id']}"

    segments = [
        _paint(LEVEL_COLORS.get(level, Fore.WHITE), f"[{level:<8}]"),
        _paint(Fore.WHITE, event_dict.get("timestamp", "")),
        "|",
        _paint(Fore.MAGENTA, trace),
        "|",
        _paint(Fore.BLUE, event_dict.get("logger", "root")),
        "|",
        str(event_dict.get("event", "")),
    ]
    extras = [
        f"{key}={value}"
        for key, value in event_dict.items()
        if key not in _CONSOLE_RESERVED_KEYS and key not in ("exception", "user_id")
    ]
    if extras:
        segments.append(_paint(Fore.WHITE, " ".join(extras)))

    line = " ".join(segments)
    if event_dict.get("exception"):
        line += "\n" + _paint(Fore.RED, event_dict["exception"])
    return line
