#!/usr/bin/env python
"""Start the feed service locally with the `runlocal` development server.

Extra arguments are passed through, e.g. `python run_local.py 0.0.0.0:9000`.
"""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "feed_service.settings")
    execute_from_command_line([sys.argv[0], "runlocal", *sys.argv[1:]])


if __name__ == "__main__":
    main()
