"""Report renderers: markdown, JSON and HTML text, plus a rich terminal reporter."""

import json
from collections.abc import Iterable
from html import escape
from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ui_compliance.domain.config import OutputFormat, ReportingLevel
from ui_compliance.domain.entities import ComplianceReport, FileReport, Severity, Violation

if TYPE_CHECKING:
    from ui_compliance.domain.rules import Rule
    from ui_compliance.use_cases.apply_fixes import FileFixOutcome

SEVERITY_ORDER = (Severity.ERROR, Severity.WARNING, Severity.INFO)

SEVERITY_ICONS = {
    Severity.ERROR: "❌",
    Severity.WARNING: "⚠️",
    Severity.INFO: "ℹ️",
}

SEVERITY_STYLES = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}

# Appended to every rendered report that contains at least one violation.
RECOMMENDATIONS = (
    "Replace hardcoded colors and spacing with design tokens from the design system",
    "Use semantic components (Box, Text, Heading, Button, ...) instead of raw HTML elements",
    "Keep spacing on the enhanced 8pt grid (spacing[2], spacing[4], spacing[6], ...)",
    "Give every interactive element an accessible name and every image alternative text",
    "Move user-facing text into translation keys and call t() for every string",
    "Prefer logical properties (ms-*, me-*, start, end) so layouts mirror for RTL languages",
)


def _violations_by_severity(report: FileReport) -> list[tuple[Severity, list[Violation]]]:
    groups = []
    for severity in SEVERITY_ORDER:
        matching = [v for v in report.violations if v.severity is severity]
        if matching:
            groups.append((severity, matching))
    return groups


def _location(violation: Violation) -> str:
    return f"{violation.line}:{violation.column}"


class ReportRenderer:
    """
    Pure formatting of a ComplianceReport. Never mutates the report.

    The reporting level comes from the constructor when given, otherwise from
    the configuration stored on the report:
      minimal  -> summary only
      standard -> summary + violations grouped by file, then by severity
      detailed -> standard + suggestions, documentation links and proposed fixes
    """

    def __init__(self, reporting_level: ReportingLevel | None = None) -> None:
        self.reporting_level = reporting_level

    def _level(self, report: ComplianceReport) -> ReportingLevel:
        return self.reporting_level or report.config.reporting_level

    def render(self, report: ComplianceReport, output_format: OutputFormat | None = None) -> str:
        fmt = output_format or report.config.output_format
        if fmt is OutputFormat.JSON:
            return self.render_json(report)
        if fmt is OutputFormat.HTML:
            return self.render_html(report)
        return self.render_markdown(report)

    # ------------------------------------------------------------------ #
    # JSON
    # ------------------------------------------------------------------ #

    def render_json(self, report: ComplianceReport) -> str:
        data = report.to_dict()
        level = self._level(report)
        if level is ReportingLevel.MINIMAL:
            data.pop("files")
        elif level is ReportingLevel.STANDARD:
            for file_data in data["files"]:  # type: ignore[union-attr]
                file_data.pop("fixes")
        return json.dumps(data, indent=2, ensure_ascii=False)

    # ------------------------------------------------------------------ #
    # Markdown
    # ------------------------------------------------------------------ #

    def render_markdown(self, report: ComplianceReport) -> str:
        summary = report.summary
        status = "✅ Compliant" if summary.compliant else "❌ Not compliant"
        lines = [
            "# UI Compliance Report",
            "",
            f"Generated: {report.timestamp.isoformat()}",
            "",
            "## Summary",
            "",
            f"- **Status**: {status}",
            f"- **Score**: {summary.score}/100",
            f"- **Files**: {summary.files_scanned} scanned of {summary.total_files}",
            f"- **Violations**: {summary.total_violations}",
        ]
        for severity in SEVERITY_ORDER:
            lines.append(f"  - {severity.value}: {summary.violations_by_severity.get(severity.value, 0)}")
        if summary.violations_by_category:
            lines += ["", "### By category", ""]
            lines += [f"- {name}: {count}" for name, count in sorted(summary.violations_by_category.items())]

        level = self._level(report)
        if level is not ReportingLevel.MINIMAL:
            for file_report in report.files:
                if file_report.violations:
                    lines += self._markdown_file(file_report, detailed=level is ReportingLevel.DETAILED)

        if summary.total_violations:
            lines += ["", "## Recommendations", ""]
            lines += [f"{i}. {text}" for i, text in enumerate(RECOMMENDATIONS, start=1)]
        return "\n".join(lines) + "\n"

    def _markdown_file(self, file_report: FileReport, detailed: bool) -> list[str]:
        lines = ["", f"## {file_report.file_path}", "", f"Score: {file_report.score}/100", ""]
        for severity, violations in _violations_by_severity(file_report):
            lines.append(f"### {SEVERITY_ICONS[severity]} {severity.value.title()} ({len(violations)})")
            lines.append("")
            for violation in violations:
                rule = f" `{violation.rule_id}`" if violation.rule_id else ""
                lines.append(f"- Line {_location(violation)}{rule}: {violation.message}")
                if detailed and violation.suggestion:
                    lines.append(f"  - Suggestion: {violation.suggestion}")
                if detailed and violation.documentation_url:
                    lines.append(f"  - Docs: {violation.documentation_url}")
            lines.append("")
        if detailed and file_report.fixes:
            lines.append("### Available fixes")
            lines.append("")
            for fix in file_report.fixes:
                where = f" (line {fix.range.start.line})" if fix.range else ""
                lines.append(f"- {fix.description}{where}")
        return lines

    # ------------------------------------------------------------------ #
    # HTML
    # ------------------------------------------------------------------ #

    def render_html(self, report: ComplianceReport) -> str:
        summary = report.summary
        status = "Compliant" if summary.compliant else "Not compliant"
        parts = [
            "<!DOCTYPE html>",
            '<html lang="en">',
            '<head><meta charset="utf-8"><title>UI Compliance Report</title></head>',
            "<body>",
            "<h1>UI Compliance Report</h1>",
            f"<p>Generated: {escape(report.timestamp.isoformat())}</p>",
            '<section class="summary">',
            f"<p><strong>Status:</strong> {status}</p>",
            f"<p><strong>Score:</strong> {summary.score}/100</p>",
            f"<p><strong>Files:</strong> {summary.files_scanned} scanned of {summary.total_files}</p>",
            "<ul>",
        ]
        for severity in SEVERITY_ORDER:
            count = summary.violations_by_severity.get(severity.value, 0)
            parts.append(f"<li>{severity.value}: {count}</li>")
        parts += ["</ul>", "</section>"]

        level = self._level(report)
        if level is not ReportingLevel.MINIMAL:
            detailed = level is ReportingLevel.DETAILED
            for file_report in report.files:
                if file_report.violations:
                    parts += self._html_file(file_report, detailed)

        if summary.total_violations:
            parts.append("<h2>Recommendations</h2>")
            parts.append("<ol>")
            parts += [f"<li>{escape(text)}</li>" for text in RECOMMENDATIONS]
            parts.append("</ol>")
        parts += ["</body>", "</html>"]
        return "\n".join(parts) + "\n"

    def _html_file(self, file_report: FileReport, detailed: bool) -> list[str]:
        parts = [
            '<section class="file">',
            f"<h2>{escape(file_report.file_path)}</h2>",
            f"<p>Score: {file_report.score}/100</p>",
        ]
        for severity, violations in _violations_by_severity(file_report):
            parts.append(f'<h3 class="{severity.value}">{severity.value.title()} ({len(violations)})</h3>')
            parts.append("<ul>")
            for violation in violations:
                item = f"Line {_location(violation)}: {escape(violation.message)}"
                if detailed and violation.suggestion:
                    item += f" <em>{escape(violation.suggestion)}</em>"
                if detailed and violation.documentation_url:
                    url = escape(violation.documentation_url, quote=True)
                    item += f' <a href="{url}">docs</a>'
                parts.append(f"<li>{item}</li>")
            parts.append("</ul>")
        parts.append("</section>")
        return parts


class RichTerminalReporter:
    """Terminal reporter using rich tables and panels."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def report(self, report: ComplianceReport, reporting_level: ReportingLevel | None = None) -> None:
        level = reporting_level or report.config.reporting_level
        summary = report.summary
        border = "green" if summary.compliant else "red"
        status = "[green]Compliant[/]" if summary.compliant else "[red]Not compliant[/]"
        counts = "  ".join(
            f"{severity.value}: {summary.violations_by_severity.get(severity.value, 0)}"
            for severity in SEVERITY_ORDER
        )
        self.console.print(Panel(
            f"{status}\nScore: {summary.score}/100\n"
            f"Files: {summary.files_scanned}/{summary.total_files}\n{counts}",
            title="UI Compliance",
            border_style=border,
        ))
        if level is ReportingLevel.MINIMAL or not summary.total_violations:
            return

        table = Table(title="Violations", show_header=True, border_style="blue")
        table.add_column("File", style="cyan")
        table.add_column("Location", justify="right")
        table.add_column("Severity")
        table.add_column("Rule", style="magenta")
        table.add_column("Message")
        if level is ReportingLevel.DETAILED:
            table.add_column("Suggestion", style="green")
        for file_report in report.files:
            for violation in file_report.violations:
                row = [
                    file_report.file_path,
                    _location(violation),
                    f"[{SEVERITY_STYLES[violation.severity]}]{violation.severity.value}[/]",
                    violation.rule_id or "",
                    violation.message,
                ]
                if level is ReportingLevel.DETAILED:
                    row.append(violation.suggestion or "")
                table.add_row(*row)
        self.console.print(table)

    def report_rules(self, rules: Iterable["Rule"]) -> None:
        table = Table(title="Rule catalog", show_header=True, border_style="blue")
        table.add_column("Id", style="cyan")
        table.add_column("Type")
        table.add_column("Severity")
        table.add_column("Enabled")
        table.add_column("Auto-fix")
        table.add_column("Description")
        for rule in rules:
            table.add_row(
                rule.id,
                rule.type.value,
                f"[{SEVERITY_STYLES[rule.severity]}]{rule.severity.value}[/]",
                "yes" if rule.enabled else "no",
                "yes" if rule.auto_fixable else "no",
                rule.description,
            )
        self.console.print(table)

    def report_fixes(self, outcomes: Iterable["FileFixOutcome"], dry_run: bool = False) -> None:
        rows = list(outcomes)
        if not rows:
            self.console.print("[green]No applicable fixes found.[/]")
            return
        title = "Fixes (dry run)" if dry_run else "Fixes applied"
        table = Table(title=title, show_header=True, border_style="blue")
        table.add_column("File", style="cyan")
        table.add_column("Applied", justify="right", style="green")
        table.add_column("Skipped", justify="right", style="yellow")
        table.add_column("Remaining", justify="right")
        for outcome in rows:
            table.add_row(
                outcome.file_path,
                str(outcome.applied),
                str(outcome.skipped),
                str(outcome.remaining_violations),
            )
        self.console.print(table)
