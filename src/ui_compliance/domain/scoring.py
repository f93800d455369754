"""Deterministic per-file score and compliance verdict."""

from collections.abc import Iterable

from ui_compliance.domain.entities import Severity, Violation

SEVERITY_PENALTY: dict[Severity, int] = {
    Severity.ERROR: 10,
    Severity.WARNING: 5,
    Severity.INFO: 2,
}


def count_by_severity(violations: Iterable[Violation]) -> dict[Severity, int]:
    counts = {severity: 0 for severity in Severity}
    for violation in violations:
        counts[violation.severity] += 1
    return counts


def calculate_score(violations: Iterable[Violation]) -> int:
    """
    100 - 10 per error - 5 per warning - 2 per info, floored at 0.

    Depends only on the severity multiset, so it is monotonically
    non-increasing in every count and always within [0, 100].
    """
    counts = count_by_severity(violations)
    penalty = sum(SEVERITY_PENALTY[severity] * n for severity, n in counts.items())
    return round(max(0, 100 - penalty))


def is_compliant(violations: Iterable[Violation]) -> bool:
    """True iff no violation has error severity. Deliberately independent of the score."""
    return not any(v.severity is Severity.ERROR for v in violations)
