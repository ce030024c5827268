"""Production server startup script for the notification feed service.

This module provides the entry point for starting the Django application
with Gunicorn in production environments (Docker containers, Kubernetes).
"""

import os
import sys

from gunicorn.app.wsgiapp import run


def main():
    """Start the notification feed service using Gunicorn.

    Worker and thread counts can be tuned through GUNICORN_WORKERS and
    GUNICORN_THREADS. Logs go to stdout/stderr for container log aggregation.
    """
    sys.argv = [
        "gunicorn",
        "feed_service.wsgi:application",
        "--bind",
        os.getenv("GUNICORN_BIND", "0.0.0.0:8000"),
        "--workers",
        os.getenv("GUNICORN_WORKERS", "4"),
        "--threads",
        os.getenv("GUNICORN_THREADS", "2"),
        "--timeout",
        "60",
        "--access-logfile",
        "-",
        "--error-logfile",
        "-",
    ]
    run()


if __name__ == "__main__":
    main()
