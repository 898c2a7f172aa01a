"""Configuration for batch runs.

This module holds the explicit run options (:class:`RunnerConfig`), the
logger capability the report is written through (:class:`LogSinks`) and the
loader for batch config files (:func:`load_batch_config`).

A batch config file is a YAML or JSON mapping:

```yaml
defaults:
  concurrency: 4
  wrapWidth: 100
  standard: WCAG2AA    # anything else is a checker option
urls:
  - https://example.com/
  - url: https://example.com/contact
    timeout: 60000
```
"""

import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException
from rich.console import Console
from rich.text import Text
from yaml import YAMLError

from a11y_ci.dispatcher import DEFAULT_CONCURRENCY
from a11y_ci.exceptions import (
    ConfigFileNotFoundError,
    InvalidConcurrencyError,
    InvalidConfigError,
    InvalidTargetError,
    InvalidWrapWidthError,
)
from a11y_ci.schema import Target
from a11y_ci.util import noop

__all__ = [
    "DEFAULT_WRAP_WIDTH",
    "MIN_WRAP_WIDTH",
    "BatchConfig",
    "LogSinks",
    "RunnerConfig",
    "load_batch_config",
]

DEFAULT_WRAP_WIDTH = 80
MIN_WRAP_WIDTH = 20

# Keys of a config file's ``defaults`` that configure the runner, not the checker
RUNNER_KEYS = {
    "concurrency": "concurrency",
    "wrap_width": "wrap_width",
    "wrapWidth": "wrap_width",
}


def plain_text(line: str) -> str:
    """Strip console markup from a rendered line."""
    return Text.from_markup(line).plain


@dataclass(frozen=True)
class LogSinks:
    """Where report lines go: ``info`` for passing output, ``error`` for failures.

    Both sinks receive lines with console markup (``[red]...[/red]``) and
    default to no-ops.
    """

    info: Callable[[str], None] = noop
    error: Callable[[str], None] = noop

    def __post_init__(self) -> None:
        # A missing sink silently drops its lines
        for name in ("info", "error"):
            if getattr(self, name) is None:
                object.__setattr__(self, name, noop)

    @classmethod
    def from_logger(cls, logger: logging.Logger) -> "LogSinks":
        """Write plain text lines to a stdlib logger at INFO and ERROR level."""
        return cls(
            info=lambda line: logger.info(plain_text(line)),
            error=lambda line: logger.error(plain_text(line)),
        )

    @classmethod
    def from_console(cls, console: Console, err_console: Console | None = None) -> "LogSinks":
        """Print styled lines to rich consoles, errors going to ``err_console`` when given."""
        err_console = err_console or console
        return cls(
            info=lambda line: console.print(line, highlight=False, soft_wrap=True),
            error=lambda line: err_console.print(line, highlight=False, soft_wrap=True),
        )


@dataclass(frozen=True)
class RunnerConfig:
    """Options of a batch run.

    Attributes:
        concurrency: Maximum number of checks in flight.
        wrap_width: Column at which report text is wrapped.
        log: Sinks the progress and the report are written to.
    """

    concurrency: int = DEFAULT_CONCURRENCY
    wrap_width: int = DEFAULT_WRAP_WIDTH
    log: LogSinks = field(default_factory=LogSinks)

    def merged(self, **overrides: Any) -> "RunnerConfig":
        """Return a copy with every override that is not None applied."""
        return dataclasses.replace(self, **{key: value for key, value in overrides.items() if value is not None})

    def validate(self) -> "RunnerConfig":
        if self.concurrency < 1:
            raise InvalidConcurrencyError(self.concurrency)
        if self.wrap_width < MIN_WRAP_WIDTH:
            raise InvalidWrapWidthError(self.wrap_width, MIN_WRAP_WIDTH)
        return self


@dataclass
class BatchConfig:
    """Contents of a batch config file.

    Attributes:
        urls: Targets to check.
        runner: Runner options (``concurrency``, ``wrap_width``) set in ``defaults``.
        checker_options: Remaining ``defaults``, applied to every target.
    """

    urls: list[Target] = field(default_factory=list)
    runner: dict[str, Any] = field(default_factory=dict)
    checker_options: dict[str, Any] = field(default_factory=dict)


def _as_int(value: Any, key: str, path: Path) -> int:
    # bool is an int subclass
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    raise InvalidConfigError(str(path), f"'{key}' must be an integer, got {value!r}")


def load_batch_config(path: str | Path) -> BatchConfig:
    """Load a batch config file.

    Args:
        path: Path of a YAML or JSON config file.

    Returns:
        The parsed BatchConfig.

    Raises:
        ConfigFileNotFoundError: If the file does not exist.
        InvalidConfigError: If the file is not a mapping of ``defaults`` and ``urls``.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigFileNotFoundError(str(path))

    try:
        cfg = OmegaConf.load(path)
        if not isinstance(cfg, DictConfig):
            raise InvalidConfigError(str(path), "expected a mapping at the top level")
        data = OmegaConf.to_container(cfg, resolve=True)
    except (OmegaConfBaseException, YAMLError) as e:
        raise InvalidConfigError(str(path), str(e)) from e

    defaults = data.get("defaults") or {}
    urls = data.get("urls") or []
    if not isinstance(defaults, dict):
        raise InvalidConfigError(str(path), "'defaults' must be a mapping")
    if not isinstance(urls, list):
        raise InvalidConfigError(str(path), "'urls' must be a list")

    runner: dict[str, Any] = {}
    checker_options: dict[str, Any] = {}
    for key, value in defaults.items():
        if key in RUNNER_KEYS:
            runner[RUNNER_KEYS[key]] = _as_int(value, key, path)
        else:
            checker_options[key] = value

    try:
        targets = [Target.coerce(url) for url in urls]
    except InvalidTargetError as e:
        raise InvalidConfigError(str(path), str(e)) from e

    return BatchConfig(urls=targets, runner=runner, checker_options=checker_options)
