"""Aggregation of diagnostic checks into a health verdict."""

from collections.abc import Iterable

from oxygen.models import CheckStatus, DiagnosticCheck

PASSING_STATUSES = frozenset({CheckStatus.OK, CheckStatus.INFO})


def aggregate_health(checks: Iterable[DiagnosticCheck]) -> bool:
    """Fold checks into one verdict.

    The environment is healthy when every required check passed. Advisory
    checks can warn or fail without affecting the result.
    """
    return all(check.status in PASSING_STATUSES for check in checks if check.required)


def overall_status(checks: Iterable[DiagnosticCheck]) -> str:
    """Return ``"healthy"`` or ``"issues_found"`` for a set of checks."""
    return "healthy" if aggregate_health(checks) else "issues_found"
