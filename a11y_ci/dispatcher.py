"""Bounded-concurrency dispatch of checks over a list of targets."""

import asyncio
import logging
from collections.abc import Callable, Sequence

from a11y_ci.checkers.base import CheckFunc
from a11y_ci.classifier import classify
from a11y_ci.exceptions import InvalidConcurrencyError
from a11y_ci.schema import CheckFailure, CheckOutcome, Finding, Target
from a11y_ci.util import error_reason, noop

__all__ = ["DEFAULT_CONCURRENCY", "CompleteCallback", "dispatch"]

logger = logging.getLogger("a11y-ci")

DEFAULT_CONCURRENCY = 2

# Signature: (url, is_pass, entries) -> None, called once per target
CompleteCallback = Callable[[str, bool, list[Finding | CheckFailure]], None]


async def run_check(checker: CheckFunc, target: Target) -> CheckOutcome:
    """Run the checker on one target, turning any error into a CheckFailure."""
    try:
        return await checker(target)
    except Exception as e:
        logger.debug(f"Check failed for {target.url}", exc_info=e)
        return CheckFailure(message=error_reason(e))


async def dispatch(
    targets: Sequence[Target],
    checker: CheckFunc,
    on_each_complete: CompleteCallback,
    on_all_complete: Callable[[], None] = noop,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> None:
    """Check every target with at most ``concurrency`` checks in flight.

    A fixed pool of workers shares one cursor over ``targets``. Each worker
    claims the next unstarted target, awaits the checker, classifies the
    outcome and hands it to ``on_each_complete`` before claiming another, so
    targets start in input order while completions arrive in any order.

    A failing check does not stop the batch; it is classified as a failure
    like any other completion. Errors raised by ``on_each_complete`` cancel the
    remaining workers and propagate.

    Args:
        targets: Targets to check.
        checker: Async function checking one target.
        on_each_complete: Called with (url, is_pass, entries) once per target.
        on_all_complete: Called once, after every target has completed.
        concurrency: Maximum number of checks in flight.

    Raises:
        InvalidConcurrencyError: If ``concurrency`` is lower than one.
    """
    if concurrency < 1:
        raise InvalidConcurrencyError(concurrency)

    cursor = iter(targets)

    async def worker() -> None:
        for target in cursor:
            outcome = await run_check(checker, target)
            is_pass, entries = classify(outcome)
            on_each_complete(target.url, is_pass, entries)

    tasks = [asyncio.create_task(worker()) for _ in range(min(concurrency, len(targets)))]
    try:
        await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    on_all_complete()
