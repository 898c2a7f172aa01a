"""Report aggregated over a batch of checks."""

from __future__ import annotations

import logging
import threading
from typing import Any

from pydantic import BaseModel, Field, PrivateAttr, model_validator

from a11y_ci.exceptions import DuplicateTargetResultError, MissingTargetResultError, ReportFinalizedError
from a11y_ci.schema import CheckFailure, Finding, ReportEntry

__all__ = ["Report"]

logger = logging.getLogger("a11y-ci")


class Report(BaseModel):
    """Totals and per-URL entries of a batch run.

    The report is created empty when a batch starts, receives exactly one
    :meth:`record` call per target while checks complete, and is frozen by
    :meth:`finalize` once the batch is done.

    Attributes:
        total: Number of submitted targets.
        passes: Number of targets without error-type findings or failures.
        results: Recorded entries keyed by URL, in completion order. An empty
            list means the target passed.
    """

    total: int = Field(ge=0)
    passes: int = Field(default=0, ge=0)
    results: dict[str, list[ReportEntry]] = Field(default_factory=dict)

    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)
    _finalized: bool = PrivateAttr(default=False)

    @model_validator(mode="after")
    def check_counts(self) -> Report:
        if self.passes > self.total:
            raise ValueError(f"passes ({self.passes}) cannot exceed total ({self.total})")
        if len(self.results) > self.total:
            raise ValueError(f"{len(self.results)} results recorded for {self.total} targets")
        return self

    @property
    def passed(self) -> bool:
        return self.passes == self.total

    @property
    def finalized(self) -> bool:
        return self._finalized

    def record(self, url: str, is_pass: bool, entries: list[Finding | CheckFailure]) -> None:
        """Record the classified outcome of one target.

        The insertion and the pass increment happen under one lock, so
        concurrent completions never observe a half-applied update.

        Raises:
            DuplicateTargetResultError: If a result for ``url`` already exists.
            ReportFinalizedError: If the report has been finalized.
        """
        with self._lock:
            if self._finalized:
                raise ReportFinalizedError
            if url in self.results:
                logger.error(f"Refusing to overwrite the recorded result of '{url}'")
                raise DuplicateTargetResultError(url)
            self.results[url] = list(entries)
            if is_pass:
                self.passes += 1

    def finalize(self) -> Report:
        """Freeze the report after every target has been recorded.

        Raises:
            MissingTargetResultError: If fewer results than targets were recorded.
        """
        with self._lock:
            if len(self.results) != self.total:
                raise MissingTargetResultError(len(self.results), self.total)
            self._finalized = True
        return self

    def to_dict(self) -> dict[str, Any]:
        """Return the machine-readable shape, omitting unset finding fields."""
        return self.model_dump(mode="json", exclude_none=True)

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(indent=indent, exclude_none=True)

    @classmethod
    def from_json(cls, data: str | bytes) -> Report:
        return cls.model_validate_json(data)
