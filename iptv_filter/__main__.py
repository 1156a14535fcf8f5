"""
Process entry point for `iptv-filter` and `python -m iptv_filter`.

Commands render their own errors and exit codes; anything that escapes them
is a bug and gets the generic error panel with exit code 1.
"""

import logging
import os
import sys

from rich.console import Console

from iptv_filter.cli.app import app
from iptv_filter.cli.formatters import format_error_with_suggestions

log = logging.getLogger("iptv_filter")


def main() -> None:
    if os.name == "nt":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            sys.stderr.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            pass

    try:
        app()
    except Exception as e:
        console = Console()
        console.print()
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
