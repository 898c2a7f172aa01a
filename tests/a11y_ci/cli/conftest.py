"""Shared fixtures for CLI tests."""

from collections.abc import Iterator
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CliRunner for testing commands."""
    return CliRunner()


@pytest.fixture
def mock_build_checker(make_checker, mixed_outcomes: dict[str, Any]) -> Iterator[MagicMock]:
    """Replace the pa11y checker with one answering from the mixed outcomes."""
    with patch("a11y_ci.cli.commands.run.build_checker") as mock:
        mock.return_value = make_checker(mixed_outcomes)
        yield mock
