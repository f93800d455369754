"""Use Case: fold per-file reports into a project-level ComplianceReport."""

from collections import Counter
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone

from ui_compliance.domain.config import Configuration
from ui_compliance.domain.entities import (
    PARSE_ERROR_TYPE,
    ComplianceReport,
    ComplianceSummary,
    FileReport,
    Severity,
)


class ComplianceReportBuilder:
    """
    Pure reduce over FileReports.

    `categories` maps rule id -> rule category so violations can be counted
    per category; parse errors count under their own bucket.
    """

    def __init__(self, categories: Mapping[str, str] | None = None) -> None:
        self._categories = dict(categories or {})

    def build(
        self,
        file_reports: Iterable[FileReport],
        config: Configuration,
        timestamp: datetime | None = None,
    ) -> ComplianceReport:
        reports = tuple(file_reports)
        by_type: Counter[str] = Counter()
        by_category: Counter[str] = Counter()
        by_severity: dict[str, int] = {severity.value: 0 for severity in Severity}
        for report in reports:
            for violation in report.violations:
                by_severity[violation.severity.value] += 1
                by_type[violation.rule_type or PARSE_ERROR_TYPE] += 1
                category = self._categories.get(violation.rule_id or "", violation.rule_type or PARSE_ERROR_TYPE)
                by_category[category] += 1

        scanned = sum(
            1 for report in reports
            if not any(v.rule_type == PARSE_ERROR_TYPE for v in report.violations)
        )
        score = sum(r.score for r in reports) / len(reports) if reports else 100.0
        summary = ComplianceSummary(
            total_files=len(reports),
            files_scanned=scanned,
            total_violations=sum(by_severity.values()),
            violations_by_type=dict(by_type),
            violations_by_severity=by_severity,
            violations_by_category=dict(by_category),
            score=round(score, 2),
            compliant=all(report.compliant for report in reports),
        )
        return ComplianceReport(
            summary=summary,
            files=reports,
            timestamp=timestamp or datetime.now(timezone.utc),
            config=config,
        )
