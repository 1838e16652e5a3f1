"""
Console script entry point.

Application errors are rendered by the commands; only unexpected failures
reach this module.
"""

import logging
import sys

from rich.console import Console

from f1tv_dl.cli.app import app
from f1tv_dl.cli.formatters import format_error_with_suggestions


def main() -> None:
    try:
        app()
    except Exception as e:
        Console(stderr=True).print(
            format_error_with_suggestions(e, {"type": "Unexpected"})
        )
        logging.getLogger("f1tv_dl").debug("Full traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
