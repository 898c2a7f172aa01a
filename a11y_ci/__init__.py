"""Run accessibility checks over a batch of URLs and report on them."""

from a11y_ci.config import LogSinks, RunnerConfig
from a11y_ci.report import Report
from a11y_ci.runner import run, run_sync
from a11y_ci.schema import CheckFailure, Finding, IssueType, Target

__all__ = ["CheckFailure", "Finding", "IssueType", "LogSinks", "Report", "RunnerConfig", "Target", "run", "run_sync"]
