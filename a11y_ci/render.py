"""Text rendering of reports and progress.

Lines are produced with rich console markup. Text coming from targets and
checkers is wrapped first and escaped afterwards, so the markup never counts
toward the wrap width and never interprets brackets found in page content.
"""

import re
import textwrap
from dataclasses import dataclass

from rich.markup import escape

from a11y_ci.config import DEFAULT_WRAP_WIDTH, LogSinks, plain_text
from a11y_ci.report import Report
from a11y_ci.schema import CheckFailure, Finding

__all__ = ["RenderedReport", "emit_report", "progress_line", "render_report", "run_header", "wrap_text"]

WRAP_INDENT = 3

SUCCESS_STYLE = "green"
FAILURE_STYLE = "red"
DETAIL_STYLE = "grey50"
HEADER_STYLE = "underline"

# (plain prefix, styled prefix) of the first line of an entry; both are WRAP_INDENT or more columns wide
BULLET = (" • ", f" [{FAILURE_STYLE}]•[/{FAILURE_STYLE}] ")
ERROR_BULLET = (" • Error: ", f" [{FAILURE_STYLE}]•[/{FAILURE_STYLE}] Error: ")

_LINE_BREAK_RUN = re.compile(r"[\r\n]+\s+")


@dataclass(frozen=True)
class RenderedReport:
    """Display lines of a report and whether every target passed."""

    passed: bool
    lines: list[str]

    @property
    def plain_lines(self) -> list[str]:
        return [plain_text(line) for line in self.lines]


def wrap_text(
    text: str,
    width: int = DEFAULT_WRAP_WIDTH,
    prefix: str | None = None,
    indent: int = WRAP_INDENT,
) -> list[str]:
    """Reflow ``text`` into lines of at most ``width`` columns.

    Lines are indented by ``indent`` columns, the first one by ``prefix``
    instead when given. Words are never split, so only a single word longer
    than the available room can overflow.
    """
    padding = " " * indent
    first = padding if prefix is None else prefix
    lines = textwrap.wrap(
        text.strip(),
        width=width,
        initial_indent=first,
        subsequent_indent=padding,
        break_long_words=False,
        break_on_hyphens=False,
    )
    return lines or [first.rstrip()]


def _styled_block(
    text: str,
    width: int,
    prefix: tuple[str, str] | None = None,
    style: str | None = None,
    indent: int = WRAP_INDENT,
) -> list[str]:
    plain_prefix, styled_prefix = prefix if prefix else (None, None)
    lines = wrap_text(text, width, plain_prefix, indent)
    styled = []
    for i, line in enumerate(lines):
        if i == 0 and styled_prefix is not None:
            body = styled_prefix + escape(line[len(plain_prefix) :])
        else:
            body = escape(line)
        styled.append(f"[{style}]{body}[/{style}]" if style else body)
    return styled


def collapse_line_breaks(text: str) -> str:
    """Replace each line break and the whitespace following it with one space."""
    return _LINE_BREAK_RUN.sub(" ", text)


def _render_entry(entry: Finding | CheckFailure, width: int) -> list[str]:
    if isinstance(entry, CheckFailure):
        return ["", *_styled_block(entry.message, width, ERROR_BULLET)]

    lines = ["", *_styled_block(entry.message, width, BULLET)]
    if entry.selector is not None:
        lines.extend(["", *_styled_block(f"({entry.selector})", width, style=DETAIL_STYLE)])
    if entry.context is not None:
        lines.extend(["", *_styled_block(collapse_line_breaks(entry.context), width, style=DETAIL_STYLE)])
    return lines


def render_report(report: Report, wrap_width: int = DEFAULT_WRAP_WIDTH) -> RenderedReport:
    """Render a finished report.

    When every target passed this is a single success line with the pass
    ratio. Otherwise each target with recorded entries gets a header followed
    by its wrapped entries, in the order targets appear in the report, and a
    failure line with the pass ratio closes the output.
    """
    pass_ratio = f"{report.passes}/{report.total} URLs passed"

    if report.passed:
        return RenderedReport(passed=True, lines=["", f"[{SUCCESS_STYLE}]✔ {pass_ratio}[/{SUCCESS_STYLE}]"])

    lines: list[str] = []
    for url, entries in report.results.items():
        if not entries:
            continue
        lines.extend(["", *_styled_block(f"Errors in {url}:", wrap_width, style=HEADER_STYLE, indent=0)])
        for entry in entries:
            lines.extend(_render_entry(entry, wrap_width))
    lines.extend(["", f"[{FAILURE_STYLE}]✘ {pass_ratio}[/{FAILURE_STYLE}]"])
    return RenderedReport(passed=False, lines=lines)


def emit_report(rendered: RenderedReport, log: LogSinks) -> None:
    """Write a rendered report to the info sink if it passed, else to the error sink."""
    sink = log.info if rendered.passed else log.error
    for line in rendered.lines:
        sink(line)


def run_header(total: int) -> str:
    noun = "URL" if total == 1 else "URLs"
    return f"[cyan underline]Running checks on {total} {noun}:[/cyan underline]"


def progress_line(url: str, is_pass: bool, entries: list[Finding | CheckFailure]) -> str:
    """One-line summary of a completed target."""
    prefix = f" [cyan]>[/cyan] {escape(url)} - "
    if any(isinstance(entry, CheckFailure) for entry in entries):
        return f"{prefix}[{FAILURE_STYLE}]Failed to run[/{FAILURE_STYLE}]"
    count = len(entries)
    style = SUCCESS_STYLE if is_pass else FAILURE_STYLE
    noun = "error" if count == 1 else "errors"
    return f"{prefix}[{style}]{count} {noun}[/{style}]"
