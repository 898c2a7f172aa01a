from collections.abc import Awaitable, Callable
from typing import Any

import pytest

from a11y_ci.exceptions import CheckerError
from a11y_ci.schema import Finding, Target

UNREACHABLE_URL = "http://notahost:8090/erroring-1"
FAILING_URL = "http://localhost:8090/failing-1"
PASSING_URL = "http://localhost:8090/passing-1"


@pytest.fixture
def lang_finding() -> dict[str, Any]:
    """Error-type finding pa11y reports for a page without a lang attribute."""
    return {
        "code": "WCAG2AA.Principle3.Guideline3_1.3_1_1.H57.2",
        "context": '<html><head>\n\t<meta charset="utf-8">\n...</html>',
        "message": (
            "The html element should have a lang or xml:lang attribute which describes the language of the document."
        ),
        "selector": "html",
        "type": "error",
        "typeCode": 1,
    }


@pytest.fixture
def notice_finding() -> dict[str, Any]:
    return {
        "code": "WCAG2AA.Principle2.Guideline2_4.2_4_2.H25.2",
        "context": "<title>Page Title</title>",
        "message": "Check that the title element describes the document.",
        "selector": "html > head > title",
        "type": "notice",
        "typeCode": 3,
    }


@pytest.fixture
def mixed_outcomes(lang_finding: dict[str, Any], notice_finding: dict[str, Any]) -> dict[str, Any]:
    """Outcomes per URL: an exception for pages that can't be opened, else findings."""
    return {
        UNREACHABLE_URL: CheckerError(f'Page "{UNREACHABLE_URL}" could not be opened'),
        FAILING_URL: [lang_finding, notice_finding],
        PASSING_URL: [notice_finding],
    }


@pytest.fixture
def make_checker() -> Callable[[dict[str, Any]], Callable[[Target], Awaitable[list[Finding]]]]:
    """Build an async checker answering from a {url: findings or exception} mapping."""

    def factory(outcomes: dict[str, Any]) -> Callable[[Target], Awaitable[list[Finding]]]:
        async def check(target: Target) -> list[Finding]:
            outcome = outcomes.get(target.url, [])
            if isinstance(outcome, Exception):
                raise outcome
            return [Finding.model_validate(item) for item in outcome]

        return check

    return factory
