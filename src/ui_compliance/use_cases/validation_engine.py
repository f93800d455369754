"""
Use Case: the validation engine.

Single entry point for single-file, batch and deep-compliance validation.
The engine owns the rule catalog for its lifetime; configurations, contexts
and reports are created per call and handed back to the caller.
"""

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from ui_compliance.domain.analysis import deep_compliance
from ui_compliance.domain.config import Configuration
from ui_compliance.domain.entities import (
    PARSE_ERROR_TYPE,
    ComplianceReport,
    DeepComplianceResult,
    FileKind,
    FileReport,
    Fix,
    Severity,
    SourceFile,
    Violation,
)
from ui_compliance.domain.errors import ParseError
from ui_compliance.domain.markup import MarkupDocument
from ui_compliance.domain.protocols import MarkupParserProtocol
from ui_compliance.domain.rules import Rule, ValidationContext
from ui_compliance.domain.rules.catalog import RuleCatalog, build_rule_catalog
from ui_compliance.domain.scoring import calculate_score, is_compliant
from ui_compliance.use_cases.apply_fixes import FixApplication, TextFixApplier
from ui_compliance.use_cases.build_report import ComplianceReportBuilder

logger = logging.getLogger(__name__)

FileInput = SourceFile | tuple[str, str]


class ValidationEngine:
    """
    Runs the rule catalog against source files.

    Rule enablement is decided once, from the construction-time
    configuration; a per-call configuration still drives the rules'
    allow_* switches and thresholds.
    """

    def __init__(
        self,
        config: Configuration | None = None,
        parser: MarkupParserProtocol | None = None,
        fix_applier: TextFixApplier | None = None,
    ) -> None:
        self.config = config or Configuration()
        if parser is None:
            # JUSTIFICATION: Lazy import keeps the default parser optional for callers injecting their own
            from ui_compliance.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway
            parser = TreeSitterGateway()
        self.parser = parser
        self.fix_applier = fix_applier or TextFixApplier()
        self.catalog: RuleCatalog = build_rule_catalog(self.config)

    # ------------------------------------------------------------------ #
    # Rule introspection
    # ------------------------------------------------------------------ #

    def get_rules(self) -> list[Rule]:
        return self.catalog.all()

    def get_rule(self, rule_id: str) -> Rule | None:
        return self.catalog.get(rule_id)

    def set_rule_enabled(self, rule_id: str, enabled: bool) -> None:
        """Toggle a rule for subsequent validations. Unknown ids are ignored."""
        self.catalog.set_enabled(rule_id, enabled)

    # ------------------------------------------------------------------ #
    # Validation
    # ------------------------------------------------------------------ #

    def _parse(self, path: str, content: str, file_kind: FileKind) -> tuple[MarkupDocument | None, ParseError | None]:
        if not file_kind.is_parseable:
            return None, None
        try:
            return self.parser.parse(content, file_kind, path), None
        except ParseError as exc:
            logger.debug("Could not parse %s: %s", path, exc)
            return None, exc

    def build_context(self, path: str, content: str, config: Configuration | None = None) -> tuple[ValidationContext, ParseError | None]:
        """Parse once and snapshot everything a rule may read."""
        file_kind = FileKind.from_path(path)
        ast, error = self._parse(path, content, file_kind)
        context = ValidationContext(
            code=content,
            file_path=path,
            file_kind=file_kind,
            ast=ast,
            config=config or self.config,
        )
        return context, error

    def validate_file(self, path: str, content: str, config: Configuration | None = None) -> FileReport:
        """
        Validate one file against every enabled rule.

        Never raises for bad input: a parse failure becomes one error at 1:1
        and the text-based rules still run; a rule that crashes is logged and
        contributes nothing.
        """
        context, parse_error = self.build_context(path, content, config)
        violations: list[Violation] = []
        fixes: list[Fix] = []
        if parse_error is not None:
            violations.append(Violation(
                message=f"Parse error: {parse_error}",
                severity=Severity.ERROR,
                line=1,
                column=1,
                context={"line": parse_error.line, "column": parse_error.column},
                rule_id=PARSE_ERROR_TYPE,
                rule_type=PARSE_ERROR_TYPE,
            ))

        for rule in self.catalog.enabled():
            try:
                result = rule.evaluate(context)
            except Exception:
                logger.warning("Rule %s failed on %s; skipping its results", rule.id, path, exc_info=True)
                continue
            violations.extend(v.with_rule(rule.id, rule.type.value) for v in result.violations)
            fixes.extend(result.fixes)

        return FileReport(
            file_path=path,
            violations=tuple(violations),
            fixes=tuple(fixes),
            score=calculate_score(violations),
            compliant=is_compliant(violations),
        )

    def validate_files(
        self,
        files: Iterable[FileInput],
        config: Configuration | None = None,
        max_workers: int | None = None,
    ) -> ComplianceReport:
        """Validate independent files (optionally on a thread pool) and fold the results."""
        sources = [f if isinstance(f, SourceFile) else SourceFile(*f) for f in files]
        if max_workers and max_workers > 1 and len(sources) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                reports = list(pool.map(lambda s: self.validate_file(s.path, s.content, config), sources))
        else:
            reports = [self.validate_file(s.path, s.content, config) for s in sources]
        builder = ComplianceReportBuilder({rule.id: rule.category for rule in self.catalog.all()})
        return builder.build(reports, config or self.config)

    # ------------------------------------------------------------------ #
    # Fixes
    # ------------------------------------------------------------------ #

    def fix_content(self, content: str, fixes: Iterable[Fix]) -> FixApplication:
        return self.fix_applier.apply(content, fixes)

    def apply_fixes(self, path: str, content: str, fixes: Iterable[Fix]) -> str:
        """Return `content` with every applicable fix applied. The caller writes the file."""
        application = self.fix_applier.apply(content, fixes)
        if application.skipped:
            logger.info("%d fix(es) skipped for %s", len(application.skipped), path)
        return application.content

    # ------------------------------------------------------------------ #
    # Deep compliance
    # ------------------------------------------------------------------ #

    def validate_deep_compliance(
        self, path: str, content: str, config: Configuration | None = None
    ) -> DeepComplianceResult:
        """Run the five independent analyses; a source that fails to parse yields empty analyses."""
        file_kind = FileKind.from_path(path)
        document, error = self._parse(path, content, file_kind)
        return deep_compliance(
            path,
            document or MarkupDocument(),
            config or self.config,
            parse_error=str(error) if error is not None else None,
        )
