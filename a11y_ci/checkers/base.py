"""Base classes for checkers."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

from a11y_ci.schema import Finding, Target
from a11y_ci.util import to_async_func

__all__ = ["BaseChecker", "CheckFunc", "as_check_func", "parse_findings"]

# Signature: (target) -> Awaitable[list of findings]; raises when the target can't be checked
CheckFunc = Callable[[Target], Awaitable[list[Finding]]]

CheckerLike = Union["BaseChecker", Callable[[Target], Any]]


def parse_findings(raw: Iterable[Finding | dict[str, Any]]) -> list[Finding]:
    """Validate checker output into Finding models."""
    return [item if isinstance(item, Finding) else Finding.model_validate(item) for item in raw]


class BaseChecker(BaseModel):
    """Base class for accessibility checkers.

    A checker opens one target, evaluates it and returns every finding it
    reports, whatever its type. When the target cannot be opened or evaluated
    the checker raises; the message of the exception becomes the failure
    reason recorded in the report.

    Options given at construction apply to every target. Options carried by a
    target override them for that target only.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    options: dict[str, Any] = Field(default_factory=dict, description="Default options for every target.")

    @abstractmethod
    async def check(self, target: Target) -> list[Finding]:
        """Check a single target.

        Args:
            target: The target to check.

        Returns:
            All findings reported for the target.

        Raises:
            CheckerError: If the target could not be checked.
        """

    def options_for(self, target: Target) -> dict[str, Any]:
        return {**self.options, **target.options}

    async def __call__(self, target: Target) -> list[Finding]:
        return await self.check(target)


def as_check_func(checker: CheckerLike) -> CheckFunc:
    """Turn a checker instance, coroutine function or plain function into a CheckFunc.

    Plain functions run in a worker thread so they never block the event loop.
    Whatever the callable returns is validated into Finding models.
    """
    if isinstance(checker, BaseChecker):
        func: Callable[[Target], Awaitable[Any]] = checker.check
    else:
        func = to_async_func(checker)

    async def check(target: Target) -> list[Finding]:
        return parse_findings(await func(target))

    return check
