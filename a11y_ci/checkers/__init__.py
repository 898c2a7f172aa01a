from a11y_ci.checkers.base import BaseChecker, CheckFunc, as_check_func, parse_findings
from a11y_ci.checkers.pa11y import Pa11yChecker

__all__ = ["BaseChecker", "CheckFunc", "Pa11yChecker", "as_check_func", "parse_findings"]
