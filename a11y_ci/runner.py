"""Batch entry point: check targets, aggregate the report and render it."""

import asyncio
import logging
from collections import Counter
from collections.abc import Iterable
from typing import Any

from a11y_ci.checkers.base import CheckerLike, as_check_func
from a11y_ci.checkers.pa11y import Pa11yChecker
from a11y_ci.config import RunnerConfig
from a11y_ci.dispatcher import dispatch
from a11y_ci.exceptions import DuplicateTargetError
from a11y_ci.render import emit_report, progress_line, render_report, run_header
from a11y_ci.report import Report
from a11y_ci.schema import CheckFailure, Finding, Target

__all__ = ["resolve_targets", "run", "run_sync"]

logger = logging.getLogger("a11y-ci")

TargetLike = Target | str | dict[str, Any]


def resolve_targets(targets: Iterable[TargetLike]) -> list[Target]:
    """Normalize targets and make sure each URL is submitted only once.

    Raises:
        InvalidTargetError: If a target has no usable URL.
        DuplicateTargetError: If two targets resolve to the same URL.
    """
    resolved = [Target.coerce(target) for target in targets]
    duplicates = [url for url, count in Counter(target.url for target in resolved).items() if count > 1]
    if duplicates:
        raise DuplicateTargetError(duplicates)
    return resolved


async def run(
    targets: Iterable[TargetLike],
    options: RunnerConfig | None = None,
    *,
    checker: CheckerLike | None = None,
    **overrides: Any,
) -> Report:
    """Check every target and return the finished report.

    Progress and the rendered report are written to ``options.log``. Targets
    that cannot be checked are recorded as failures; they never make this
    coroutine raise.

    Args:
        targets: URLs, mappings with a ``url`` key and checker options, or Targets.
        options: Run options. Defaults to ``RunnerConfig()``.
        checker: Checker instance or (async) callable. Defaults to a Pa11yChecker.
        **overrides: RunnerConfig fields overriding ``options`` (None is ignored).

    Returns:
        The finalized Report.

    Example:
        ```python
        report = await run(
            ["https://example.com/", {"url": "https://example.com/form", "timeout": 60000}],
            concurrency=4,
            log=LogSinks.from_logger(logging.getLogger(__name__)),
        )
        ```
    """
    config = (options or RunnerConfig()).merged(**overrides).validate()
    resolved = resolve_targets(targets)
    check = as_check_func(checker if checker is not None else Pa11yChecker())
    log = config.log

    report = Report(total=len(resolved))
    logger.debug(f"Checking {report.total} targets with concurrency {config.concurrency}")
    log.info(run_header(report.total))

    def on_each_complete(url: str, is_pass: bool, entries: list[Finding | CheckFailure]) -> None:
        report.record(url, is_pass, entries)
        sink = log.info if is_pass else log.error
        sink(progress_line(url, is_pass, entries))

    def on_all_complete() -> None:
        report.finalize()
        emit_report(render_report(report, config.wrap_width), log)

    await dispatch(resolved, check, on_each_complete, on_all_complete, concurrency=config.concurrency)
    return report


def run_sync(targets: Iterable[TargetLike], options: RunnerConfig | None = None, **kwargs: Any) -> Report:
    """Blocking wrapper around :func:`run`."""
    return asyncio.run(run(targets, options, **kwargs))
