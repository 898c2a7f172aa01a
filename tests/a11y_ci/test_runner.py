"""Tests for a11y_ci.runner module."""

import asyncio
from typing import Any
from unittest.mock import patch

import pytest

from a11y_ci.config import LogSinks, RunnerConfig
from a11y_ci.exceptions import DuplicateTargetError, InvalidConcurrencyError, InvalidTargetError, InvalidWrapWidthError
from a11y_ci.runner import resolve_targets, run, run_sync
from a11y_ci.schema import CheckFailure, Finding, Target

UNREACHABLE_URL = "http://notahost:8090/erroring-1"
FAILING_URL = "http://localhost:8090/failing-1"
PASSING_URL = "http://localhost:8090/passing-1"


class CapturingSinks:
    def __init__(self) -> None:
        self.info: list[str] = []
        self.error: list[str] = []

    @property
    def sinks(self) -> LogSinks:
        return LogSinks(info=self.info.append, error=self.error.append)


class TestResolveTargets:
    def test_mixed_target_forms(self) -> None:
        targets = resolve_targets(["https://a.example/", {"url": "https://b.example/", "timeout": 500}])

        assert [t.url for t in targets] == ["https://a.example/", "https://b.example/"]
        assert targets[1].options == {"timeout": 500}

    def test_duplicate_urls_are_rejected(self) -> None:
        with pytest.raises(DuplicateTargetError, match="https://a.example/"):
            resolve_targets(["https://a.example/", {"url": "https://a.example/", "timeout": 500}])

    def test_target_without_url_is_rejected(self) -> None:
        with pytest.raises(InvalidTargetError):
            resolve_targets([{"timeout": 500}])


class TestRun:
    @pytest.mark.asyncio
    async def test_mixed_batch_report(self, make_checker, mixed_outcomes: dict[str, Any], lang_finding) -> None:
        """Unreachable, failing and passing pages end up in one report."""
        report = await run(list(mixed_outcomes), checker=make_checker(mixed_outcomes))

        assert report.finalized
        assert report.to_dict() == {
            "total": 3,
            "passes": 1,
            "results": {
                UNREACHABLE_URL: [{"message": f'Page "{UNREACHABLE_URL}" could not be opened'}],
                FAILING_URL: [lang_finding],
                PASSING_URL: [],
            },
        }

    @pytest.mark.asyncio
    async def test_empty_batch(self) -> None:
        capture = CapturingSinks()

        report = await run([], checker=lambda target: [], log=capture.sinks)

        assert report.to_dict() == {"total": 0, "passes": 0, "results": {}}
        assert capture.info[-1] == "[green]✔ 0/0 URLs passed[/green]"
        assert capture.error == []

    @pytest.mark.asyncio
    async def test_passing_run_writes_only_to_info(self) -> None:
        capture = CapturingSinks()

        report = await run(["https://a.example/", "https://b.example/"], checker=lambda target: [], log=capture.sinks)

        assert report.passed
        assert capture.error == []
        assert capture.info[0] == "[cyan underline]Running checks on 2 URLs:[/cyan underline]"
        assert capture.info[-1] == "[green]✔ 2/2 URLs passed[/green]"

    @pytest.mark.asyncio
    async def test_failing_run_writes_report_to_error(self, make_checker, mixed_outcomes: dict[str, Any]) -> None:
        """The report goes to the error sink; only the header and passing progress go to info."""
        capture = CapturingSinks()

        await run(list(mixed_outcomes), checker=make_checker(mixed_outcomes), log=capture.sinks)

        assert capture.info == [
            "[cyan underline]Running checks on 3 URLs:[/cyan underline]",
            f" [cyan]>[/cyan] {PASSING_URL} - [green]0 errors[/green]",
        ]
        assert f" [cyan]>[/cyan] {UNREACHABLE_URL} - [red]Failed to run[/red]" in capture.error
        assert f" [cyan]>[/cyan] {FAILING_URL} - [red]1 error[/red]" in capture.error
        assert capture.error[-1] == "[red]✘ 1/3 URLs passed[/red]"

    @pytest.mark.asyncio
    async def test_concurrency_one_runs_sequentially(self) -> None:
        in_flight = 0
        max_in_flight = 0

        async def check(target: Target) -> list[Finding]:
            nonlocal in_flight, max_in_flight
            in_flight += 1
            max_in_flight = max(max_in_flight, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return []

        report = await run([f"https://example.com/{i}" for i in range(5)], checker=check, concurrency=1)

        assert max_in_flight == 1
        assert report.passes == 5

    @pytest.mark.asyncio
    async def test_default_concurrency_is_two(self) -> None:
        in_flight = 0
        max_in_flight = 0

        async def check(target: Target) -> list[Finding]:
            nonlocal in_flight, max_in_flight
            in_flight += 1
            max_in_flight = max(max_in_flight, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return []

        await run([f"https://example.com/{i}" for i in range(6)], checker=check)

        assert max_in_flight == 2

    @pytest.mark.asyncio
    async def test_overrides_take_precedence_over_options(self) -> None:
        """Keyword overrides win over the RunnerConfig, None overrides are ignored."""
        capture = CapturingSinks()
        options = RunnerConfig(wrap_width=200, log=LogSinks())

        await run(
            ["https://example.com/"],
            options,
            checker=lambda target: [{"type": "error", "message": "word " * 30}],
            wrap_width=30,
            concurrency=None,
            log=capture.sinks,
        )

        bullet_lines = [line for line in capture.error if "•" in line]
        assert bullet_lines == [" [red]•[/red] word word word word word"]

    @pytest.mark.asyncio
    async def test_sync_checker_runs(self) -> None:
        """A plain function checker returning dicts is accepted."""

        def check(target: Target) -> list[dict[str, Any]]:
            return [{"type": "warning", "message": "Check contrast"}]

        report = await run(["https://example.com/"], checker=check)

        assert report.passes == 1

    @pytest.mark.asyncio
    async def test_invalid_findings_are_failures(self) -> None:
        """Malformed checker output fails the target instead of the batch."""
        report = await run(["https://example.com/"], checker=lambda target: [{"message": "no type"}])

        assert report.passes == 0
        assert isinstance(report.results["https://example.com/"][0], CheckFailure)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("overrides", "error"),
        [
            ({"concurrency": 0}, InvalidConcurrencyError),
            ({"wrap_width": 10}, InvalidWrapWidthError),
        ],
    )
    async def test_invalid_options(self, overrides: dict[str, int], error: type[Exception]) -> None:
        with pytest.raises(error):
            await run(["https://example.com/"], checker=lambda target: [], **overrides)

    @pytest.mark.asyncio
    async def test_defaults_to_pa11y_checker(self) -> None:
        with patch("a11y_ci.runner.Pa11yChecker") as mock_checker_cls:
            mock_checker_cls.return_value = lambda target: []

            report = await run(["https://example.com/"])

        mock_checker_cls.assert_called_once_with()
        assert report.passed


class TestRunSync:
    def test_returns_report(self) -> None:
        report = run_sync(["https://example.com/"], checker=lambda target: [])

        assert report.total == 1
        assert report.passed
