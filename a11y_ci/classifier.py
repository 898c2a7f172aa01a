"""Pass/fail classification of a single check outcome."""

from a11y_ci.schema import CheckFailure, CheckOutcome, Finding

__all__ = ["classify"]


def classify(outcome: CheckOutcome) -> tuple[bool, list[Finding | CheckFailure]]:
    """Decide whether a target passed and which entries to record for it.

    Args:
        outcome: Either the CheckFailure of a target that could not be checked,
            or the findings the checker reported for it.

    Returns:
        Tuple of (is_pass, entries). A failure is recorded as its single entry
        and never passes. For findings only the error-type ones are recorded,
        and the target passes when there are none.
    """
    if isinstance(outcome, CheckFailure):
        return False, [outcome]

    errors: list[Finding | CheckFailure] = [finding for finding in outcome if finding.is_error]
    return not errors, errors
