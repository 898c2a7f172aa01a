"""Data model shared by the checker, the dispatcher and the report."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from a11y_ci.exceptions import InvalidTargetError

__all__ = ["CheckFailure", "CheckOutcome", "Finding", "IssueType", "ReportEntry", "Target"]


class IssueType(str, Enum):
    """Severity of a finding."""

    ERROR = "error"
    WARNING = "warning"
    NOTICE = "notice"


class Finding(BaseModel):
    """One issue reported by a checker for a target.

    Fields a checker reports beyond the common ones (``typeCode``, ``runner``,
    ``runnerExtras``...) are kept as-is and serialized back verbatim.
    """

    model_config = ConfigDict(extra="allow")

    type: IssueType
    message: str
    code: str | None = None
    selector: str | None = None
    context: str | None = None

    @property
    def is_error(self) -> bool:
        return self.type is IssueType.ERROR


class CheckFailure(BaseModel):
    """Entry recorded when a target could not be checked at all."""

    message: str


# Findings are tried first, a bare ``{"message": ...}`` falls through to CheckFailure.
ReportEntry = Annotated[Finding | CheckFailure, Field(union_mode="left_to_right")]

# A checker either fails for a target or reports its findings.
CheckOutcome = CheckFailure | list[Finding]


class Target(BaseModel):
    """A URL to check, with optional per-target checker options.

    Any key other than ``url`` is treated as a checker option and is available
    through :attr:`options`.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    url: str

    @field_validator("url")
    @classmethod
    def _strip_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("url must not be empty")  # noqa: TRY003
        return value

    @property
    def options(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

    @classmethod
    def coerce(cls, value: Target | str | dict[str, Any]) -> Target:
        """Normalize a bare URL, a mapping with a ``url`` key or a Target."""
        if isinstance(value, Target):
            return value
        try:
            if isinstance(value, str):
                return cls(url=value)
            if isinstance(value, dict):
                return cls.model_validate(value)
        except ValueError as e:
            raise InvalidTargetError(value) from e
        raise InvalidTargetError(value)
