"""CLI utility functions."""

import logging
import sys

from rich.console import Console
from rich.markup import escape


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for CLI.

    Diagnostics go to stderr so they never mix with a JSON report on stdout.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def print_error(console: Console, error: Exception | str) -> None:
    console.print(f"[red]Error:[/red] {escape(str(error))}", highlight=False, soft_wrap=True)
