"""Tests for the markdown / JSON / HTML renderers and the rich terminal reporter."""

import json
from datetime import datetime, timezone

import pytest
from rich.console import Console

from ui_compliance.domain.config import Configuration, OutputFormat, ReportingLevel
from ui_compliance.domain.entities import FileReport, Fix, FixRange, Severity, Violation
from ui_compliance.domain.rules.catalog import build_rule_catalog
from ui_compliance.infrastructure.reporters import RECOMMENDATIONS, ReportRenderer, RichTerminalReporter
from ui_compliance.use_cases.apply_fixes import FileFixOutcome
from ui_compliance.use_cases.build_report import ComplianceReportBuilder

STAMP = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def failing_report():
    violation = Violation(
        message="Raw HTML element <div> should use Box",
        severity=Severity.ERROR,
        line=3,
        column=5,
        suggestion="Use <Box> from the design system",
        documentation_url="https://example.test/components",
        rule_id="no-raw-html",
        rule_type="component-usage",
    )
    fix = Fix("Replace <div> with <Box>", "Box", FixRange.on_line(3, 5, 8))
    file_report = FileReport("src/Card.tsx", (violation,), (fix,), 90, False)
    return ComplianceReportBuilder({"no-raw-html": "components"}).build(
        [file_report], Configuration(), timestamp=STAMP
    )


@pytest.fixture
def clean_report():
    file_report = FileReport("src/Clean.tsx", (), (), 100, True)
    return ComplianceReportBuilder().build([file_report], Configuration(), timestamp=STAMP)


class TestMarkdown:

    def test_standard_level_lists_violations_by_file(self, failing_report) -> None:
        text = ReportRenderer(ReportingLevel.STANDARD).render(failing_report, OutputFormat.MARKDOWN)
        assert text.startswith("# UI Compliance Report\n")
        assert "- **Status**: ❌ Not compliant" in text
        assert "- **Score**: 90.0/100" in text
        assert "- components: 1" in text
        assert "## src/Card.tsx" in text
        assert "### ❌ Error (1)" in text
        assert "- Line 3:5 `no-raw-html`: Raw HTML element <div> should use Box" in text
        assert "Suggestion:" not in text

    def test_detailed_level_adds_guidance_and_fixes(self, failing_report) -> None:
        text = ReportRenderer(ReportingLevel.DETAILED).render_markdown(failing_report)
        assert "  - Suggestion: Use <Box> from the design system" in text
        assert "  - Docs: https://example.test/components" in text
        assert "### Available fixes" in text
        assert "- Replace <div> with <Box> (line 3)" in text

    def test_minimal_level_is_summary_only(self, failing_report) -> None:
        text = ReportRenderer(ReportingLevel.MINIMAL).render_markdown(failing_report)
        assert "## src/Card.tsx" not in text
        assert "## Summary" in text

    def test_recommendations_only_when_violations_exist(self, failing_report, clean_report) -> None:
        renderer = ReportRenderer()
        failing = renderer.render_markdown(failing_report)
        assert "## Recommendations" in failing
        assert f"1. {RECOMMENDATIONS[0]}" in failing
        clean = renderer.render_markdown(clean_report)
        assert "## Recommendations" not in clean
        assert "- **Status**: ✅ Compliant" in clean


class TestJson:

    def test_default_format_comes_from_configuration(self, failing_report) -> None:
        data = json.loads(ReportRenderer().render(failing_report))
        assert data["summary"]["total_violations"] == 1
        assert data["timestamp"] == STAMP.isoformat()
        assert data["config"]["output_format"] == "json"

    def test_standard_level_drops_fixes(self, failing_report) -> None:
        data = json.loads(ReportRenderer(ReportingLevel.STANDARD).render_json(failing_report))
        assert "fixes" not in data["files"][0]
        assert data["files"][0]["violations"][0]["rule_id"] == "no-raw-html"

    def test_detailed_level_keeps_fixes(self, failing_report) -> None:
        data = json.loads(ReportRenderer(ReportingLevel.DETAILED).render_json(failing_report))
        assert data["files"][0]["fixes"][0]["fix"] == "Box"

    def test_minimal_level_drops_files(self, failing_report) -> None:
        data = json.loads(ReportRenderer(ReportingLevel.MINIMAL).render_json(failing_report))
        assert "files" not in data

    def test_rendering_does_not_mutate_the_report(self, failing_report) -> None:
        ReportRenderer(ReportingLevel.MINIMAL).render_json(failing_report)
        assert failing_report.files[0].fixes


class TestHtml:

    def test_messages_are_escaped(self, failing_report) -> None:
        text = ReportRenderer(ReportingLevel.DETAILED).render(failing_report, OutputFormat.HTML)
        assert text.startswith("<!DOCTYPE html>")
        assert "&lt;div&gt;" in text
        assert "<div>" not in text
        assert '<a href="https://example.test/components">docs</a>' in text
        assert "<h2>Recommendations</h2>" in text


class TestRichTerminalReporter:

    @staticmethod
    def _reporter() -> tuple[RichTerminalReporter, Console]:
        console = Console(record=True, width=200, color_system=None)
        return RichTerminalReporter(console), console

    def test_report_prints_summary_and_violations(self, failing_report) -> None:
        reporter, console = self._reporter()
        reporter.report(failing_report)
        output = console.export_text()
        assert "Not compliant" in output
        assert "Score: 90.0/100" in output
        assert "no-raw-html" in output
        assert "src/Card.tsx" in output

    def test_minimal_level_prints_panel_only(self, failing_report) -> None:
        reporter, console = self._reporter()
        reporter.report(failing_report, ReportingLevel.MINIMAL)
        assert "no-raw-html" not in console.export_text()

    def test_report_rules(self) -> None:
        reporter, console = self._reporter()
        reporter.report_rules(build_rule_catalog(Configuration()).all())
        output = console.export_text()
        assert "no-hardcoded-colors" in output
        assert "component-size" in output

    def test_report_fixes(self) -> None:
        reporter, console = self._reporter()
        reporter.report_fixes([FileFixOutcome("src/Card.tsx", 2, 1, 0)], dry_run=True)
        output = console.export_text()
        assert "Fixes (dry run)" in output
        assert "src/Card.tsx" in output

    def test_report_fixes_without_outcomes(self) -> None:
        reporter, console = self._reporter()
        reporter.report_fixes([])
        assert "No applicable fixes found." in console.export_text()
