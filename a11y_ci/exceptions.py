class CheckerError(Exception):
    """Raised by a checker when a target could not be checked at all."""

    def __init__(self, reason: str):
        super().__init__(reason)


class InvalidConcurrencyError(ValueError):
    """Raised when the concurrency bound is lower than one."""

    def __init__(self, concurrency: int):
        super().__init__(f"Concurrency must be at least 1, got {concurrency}.")


class InvalidWrapWidthError(ValueError):
    """Raised when the wrap width is too narrow to lay out a report."""

    def __init__(self, wrap_width: int, minimum: int):
        super().__init__(f"Wrap width must be at least {minimum}, got {wrap_width}.")


class InvalidTargetError(ValueError):
    """Raised when a target does not resolve to a URL."""

    def __init__(self, target: object):
        super().__init__(f"Target {target!r} does not have a usable 'url'.")


class DuplicateTargetError(ValueError):
    """Raised when two submitted targets resolve to the same URL."""

    def __init__(self, urls: list[str]):
        urls_str = ", ".join(urls)
        super().__init__(f"Targets must have unique URLs, duplicated: {urls_str}.")


class DuplicateTargetResultError(Exception):
    """Raised when a result is recorded twice for the same target."""

    def __init__(self, url: str):
        super().__init__(f"A result for '{url}' has already been recorded.")


class MissingTargetResultError(Exception):
    """Raised when a finished batch has fewer results than submitted targets."""

    def __init__(self, recorded: int, total: int):
        super().__init__(f"Only {recorded} of {total} targets have a recorded result.")


class ReportFinalizedError(Exception):
    """Raised when a finalized report is mutated."""

    def __init__(self):
        super().__init__("The report has been finalized and can no longer be modified.")


class ConfigFileNotFoundError(FileNotFoundError):
    """Raised when an explicitly given config file does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Config file not found: {path}")


class InvalidConfigError(ValueError):
    """Raised when a config file does not have the expected structure."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid config file '{path}': {reason}")
