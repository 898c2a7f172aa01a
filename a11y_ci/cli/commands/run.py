"""run command - Check a batch of URLs and report accessibility errors."""

import asyncio
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from a11y_ci.checkers.pa11y import Pa11yChecker
from a11y_ci.cli.utils import print_error, setup_logging
from a11y_ci.config import BatchConfig, LogSinks, RunnerConfig, load_batch_config
from a11y_ci.exceptions import (
    CheckerError,
    ConfigFileNotFoundError,
    DuplicateTargetError,
    InvalidConcurrencyError,
    InvalidConfigError,
    InvalidTargetError,
    InvalidWrapWidthError,
)
from a11y_ci.report import Report
from a11y_ci.runner import run


console = Console()
err_console = Console(stderr=True)

# Exit status when at least one URL did not pass
FAILED_EXIT_CODE = 2

INPUT_ERRORS = (
    DuplicateTargetError,
    InvalidConcurrencyError,
    InvalidTargetError,
    InvalidWrapWidthError,
)


def run_command(
    urls: Annotated[
        list[str] | None,
        typer.Argument(help="URLs to check, in addition to the ones listed in --config"),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="YAML or JSON file with 'defaults' and 'urls'"),
    ] = None,
    concurrency: Annotated[
        int | None,
        typer.Option("--concurrency", "-j", help="Maximum number of URLs checked at once [default: 2]"),
    ] = None,
    wrap_width: Annotated[
        int | None,
        typer.Option("--wrap-width", help="Column at which report text is wrapped [default: 80]"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print the report as JSON instead of text"),
    ] = False,
    pa11y_bin: Annotated[
        str | None,
        typer.Option("--pa11y-bin", help="pa11y executable to run", envvar="A11Y_CI_PA11Y_BIN"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
) -> None:
    """Check URLs for accessibility errors.

    Exits with 0 when every URL passed, 2 when at least one did not, and 1 on
    invalid input or configuration.

    Examples:
      a11y-ci run https://example.com/ https://example.com/about
      a11y-ci run --config a11y-ci.yaml --concurrency 4
      a11y-ci run --config a11y-ci.yaml --json > report.json
    """
    setup_logging(verbose=verbose)

    try:
        batch = load_batch_config(config) if config is not None else BatchConfig()
    except (ConfigFileNotFoundError, InvalidConfigError) as e:
        print_error(err_console, e)
        raise typer.Exit(1) from None

    try:
        checker = build_checker(batch.checker_options, pa11y_bin)
    except CheckerError as e:
        print_error(err_console, e)
        raise typer.Exit(1) from None

    log = LogSinks() if json_output else LogSinks.from_console(console, err_console)
    options = RunnerConfig(log=log).merged(**batch.runner).merged(concurrency=concurrency, wrap_width=wrap_width)
    targets = [*batch.urls, *(urls or [])]

    try:
        report = asyncio.run(run(targets, options, checker=checker))
    except INPUT_ERRORS as e:
        print_error(err_console, e)
        raise typer.Exit(1) from None

    if json_output:
        typer.echo(report.to_json())

    exit_for(report)


def build_checker(options: dict[str, Any], binary: str | None = None) -> Pa11yChecker:
    """Create the pa11y checker, failing early when pa11y is not installed."""
    kwargs: dict[str, Any] = {"options": options}
    if binary:
        kwargs["binary"] = binary
    checker = Pa11yChecker(**kwargs)
    checker.ensure_available()
    return checker


def exit_for(report: Report) -> None:
    if not report.passed:
        raise typer.Exit(FAILED_EXIT_CODE)
