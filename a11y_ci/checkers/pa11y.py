"""Checker backed by the pa11y command line tool.

pa11y drives a headless browser, evaluates the page and prints its findings.
With ``--reporter json`` the findings are a JSON array on stdout; the process
exits 0 when nothing at the configured level was found and 2 when something
was. Any other exit status means the page could not be checked.
"""

import asyncio
import json
import logging
import os
import shutil
from typing import Any

from pydantic import Field

from a11y_ci.checkers.base import BaseChecker, parse_findings
from a11y_ci.exceptions import CheckerError
from a11y_ci.schema import Finding, Target

__all__ = ["Pa11yChecker"]

logger = logging.getLogger("a11y-ci")

PA11Y_BIN_ENV = "A11Y_CI_PA11Y_BIN"

# Exit statuses for which stdout holds a findings report
REPORT_EXIT_CODES = (0, 2)

# option name -> command line flag, for options carrying a value
VALUE_FLAGS = {
    "standard": "--standard",
    "timeout": "--timeout",
    "wait": "--wait",
    "hideElements": "--hide-elements",
    "rootElement": "--root-element",
}

# option name -> command line flag, for boolean switches
SWITCH_FLAGS = {
    "includeNotices": "--include-notices",
    "includeWarnings": "--include-warnings",
}

# option name -> command line flag, repeated once per value
REPEATED_FLAGS = {
    "runners": "--runner",
}


def _default_binary() -> str:
    return os.getenv(PA11Y_BIN_ENV, "pa11y")


def build_flags(options: dict[str, Any]) -> list[str]:
    """Translate checker options into pa11y command line flags.

    Unknown options are skipped so that one configuration can be shared with
    other tooling.
    """
    flags: list[str] = []
    for name, value in options.items():
        if value is None:
            continue
        if name in VALUE_FLAGS:
            flags.extend([VALUE_FLAGS[name], str(value)])
        elif name in SWITCH_FLAGS:
            if value:
                flags.append(SWITCH_FLAGS[name])
        elif name in REPEATED_FLAGS:
            for item in _as_list(value):
                flags.extend([REPEATED_FLAGS[name], str(item)])
        elif name == "ignore":
            ignored = _as_list(value)
            if ignored:
                flags.extend(["--ignore", ";".join(str(item) for item in ignored)])
        else:
            logger.debug(f"Skipping unsupported pa11y option '{name}'")
    return flags


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class Pa11yChecker(BaseChecker):
    """Run ``pa11y`` as a subprocess for each target.

    Example:
        ```python
        checker = Pa11yChecker(options={"standard": "WCAG2AA", "timeout": 30000})
        findings = await checker.check(Target(url="https://example.com"))
        ```
    """

    binary: str = Field(default_factory=_default_binary, description="pa11y executable name or path.")

    def ensure_available(self) -> None:
        """Raise CheckerError if the pa11y executable cannot be found."""
        if shutil.which(self.binary) is None:
            raise CheckerError(f"pa11y executable '{self.binary}' not found")  # noqa: TRY003

    def command_for(self, target: Target) -> list[str]:
        return [self.binary, "--reporter", "json", *build_flags(self.options_for(target)), target.url]

    async def check(self, target: Target) -> list[Finding]:
        cmd = self.command_for(target)
        logger.debug(f"Running {' '.join(cmd)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            msg = f"pa11y executable '{self.binary}' not found"
            raise CheckerError(msg) from e

        stdout, stderr = await process.communicate()

        if process.returncode not in REPORT_EXIT_CODES:
            logger.debug(f"pa11y exited with {process.returncode} for {target.url}: {stderr.decode(errors='replace')}")
            raise CheckerError(_could_not_open(target.url))

        return self._parse_report(target.url, stdout)

    @staticmethod
    def _parse_report(url: str, stdout: bytes) -> list[Finding]:
        text = stdout.decode(errors="replace").strip()
        if not text:
            return []
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            logger.debug(f"pa11y printed invalid JSON for {url}: {e}")
            raise CheckerError(_could_not_open(url)) from e
        if not isinstance(raw, list):
            raise CheckerError(_could_not_open(url))
        return parse_findings(raw)


def _could_not_open(url: str) -> str:
    return f'Page "{url}" could not be opened'
