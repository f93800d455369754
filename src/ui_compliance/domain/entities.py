"""Pure data produced by a validation run: violations, fixes, per-file and project reports."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import PurePath
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, TypedDict

if TYPE_CHECKING:
    from ui_compliance.domain.config import Configuration


class Severity(Enum):
    """Violation severity. Only ERROR blocks compliance."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class RuleType(Enum):
    """What aspect of the design-system contract a rule guards."""
    DESIGN_TOKEN = "design-token"
    COMPONENT_USAGE = "component-usage"
    ACCESSIBILITY = "accessibility"
    LOCALIZATION = "localization"
    STYLING = "styling"
    RESPONSIVE = "responsive"
    SEMANTIC = "semantic"
    PERFORMANCE = "performance"


class FileKind(Enum):
    """Detected kind of a source file; decides whether it is parsed."""
    MARKUP_COMPONENT = "markup-component"
    SCRIPT = "script"
    STYLESHEET = "stylesheet"
    OTHER = "other"

    @property
    def is_parseable(self) -> bool:
        return self in (FileKind.MARKUP_COMPONENT, FileKind.SCRIPT)

    @classmethod
    def from_path(cls, file_path: str) -> "FileKind":
        """Detect the kind from the file extension."""
        suffix = PurePath(file_path).suffix.lower()
        if suffix in (".tsx", ".jsx"):
            return cls.MARKUP_COMPONENT
        if suffix in (".ts", ".js", ".mjs", ".cjs", ".mts", ".cts"):
            return cls.SCRIPT
        if suffix in (".css", ".scss", ".sass", ".less"):
            return cls.STYLESHEET
        return cls.OTHER


# Violation type bucket used for parse errors, which belong to no rule.
PARSE_ERROR_TYPE = "parse-error"


@dataclass(frozen=True, order=True)
class SourcePosition:
    """A position used by fix ranges: 1-based line, 0-based column offset."""
    line: int
    column: int

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "column": self.column}


@dataclass(frozen=True)
class FixRange:
    """Text span a replacement overwrites. End column is exclusive."""
    start: SourcePosition
    end: SourcePosition

    @classmethod
    def on_line(cls, line: int, start_column: int, end_column: int) -> "FixRange":
        """Range within a single line."""
        return cls(SourcePosition(line, start_column), SourcePosition(line, end_column))

    @classmethod
    def insertion(cls, line: int, column: int) -> "FixRange":
        """Empty range: the replacement text is inserted at the position."""
        return cls.on_line(line, column, column)

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}


class ViolationDictRequired(TypedDict):
    """Required fields of a serialized Violation."""
    message: str
    severity: str
    line: int
    column: int


class ViolationDict(ViolationDictRequired, total=False):
    """Serialization shape for Violation including optional fields."""
    end_line: int
    end_column: int
    suggestion: str
    documentation_url: str
    context: dict[str, object]
    rule_id: str
    rule_type: str


@dataclass(frozen=True)
class Violation:
    """A single breach of the design-system contract. line/column are 1-based."""

    message: str
    severity: Severity
    line: int
    column: int
    end_line: int | None = None
    end_column: int | None = None
    suggestion: str | None = None
    documentation_url: str | None = None
    context: Mapping[str, object] = field(default_factory=dict)
    rule_id: str | None = None
    """Stamped by the engine when the violation is collected."""
    rule_type: str | None = None
    """RuleType value of the producing rule, or PARSE_ERROR_TYPE."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "context", MappingProxyType(dict(self.context)))

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def with_rule(self, rule_id: str, rule_type: str) -> "Violation":
        """Return a copy attributed to a rule."""
        return dataclasses.replace(self, rule_id=rule_id, rule_type=rule_type)

    def to_dict(self) -> ViolationDict:
        """Convert to dictionary for serialization."""
        out: ViolationDict = {
            "message": self.message,
            "severity": self.severity.value,
            "line": self.line,
            "column": self.column,
        }
        if self.end_line is not None:
            out["end_line"] = self.end_line
        if self.end_column is not None:
            out["end_column"] = self.end_column
        if self.suggestion:
            out["suggestion"] = self.suggestion
        if self.documentation_url:
            out["documentation_url"] = self.documentation_url
        if self.context:
            out["context"] = dict(self.context)
        if self.rule_id:
            out["rule_id"] = self.rule_id
        if self.rule_type:
            out["rule_type"] = self.rule_type
        return out


@dataclass(frozen=True)
class Fix:
    """Proposed replacement text. Without a range it is informational only."""

    description: str
    fix: str
    range: FixRange | None = None

    @property
    def is_applicable(self) -> bool:
        return self.range is not None

    def to_dict(self) -> dict[str, object]:
        out: dict[str, object] = {"description": self.description, "fix": self.fix}
        if self.range is not None:
            out["range"] = self.range.to_dict()
        return out


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one rule against one file."""

    rule_id: str
    violations: tuple[Violation, ...] = ()
    fixes: tuple[Fix, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.violations

    @classmethod
    def of(
        cls,
        rule_id: str,
        violations: list[Violation] | None = None,
        fixes: list[Fix] | None = None,
    ) -> "ValidationResult":
        return cls(rule_id=rule_id, violations=tuple(violations or ()), fixes=tuple(fixes or ()))


@dataclass(frozen=True)
class SourceFile:
    """Input pair for batch validation."""
    path: str
    content: str


@dataclass(frozen=True)
class FileReport:
    """Per-file aggregate of every enabled rule's result."""

    file_path: str
    violations: tuple[Violation, ...]
    fixes: tuple[Fix, ...]
    score: int
    compliant: bool

    def count(self, severity: Severity) -> int:
        return sum(1 for v in self.violations if v.severity is severity)

    @property
    def applicable_fixes(self) -> tuple[Fix, ...]:
        return tuple(f for f in self.fixes if f.is_applicable)

    def to_dict(self) -> dict[str, object]:
        return {
            "file_path": self.file_path,
            "score": self.score,
            "compliant": self.compliant,
            "violations": [v.to_dict() for v in self.violations],
            "fixes": [f.to_dict() for f in self.fixes],
        }


@dataclass(frozen=True)
class ComplianceSummary:
    """Project-level counts. score is the mean of per-file scores."""

    total_files: int
    files_scanned: int
    total_violations: int
    violations_by_type: dict[str, int]
    violations_by_severity: dict[str, int]
    violations_by_category: dict[str, int]
    score: float
    compliant: bool

    def to_dict(self) -> dict[str, object]:
        return {
            "total_files": self.total_files,
            "files_scanned": self.files_scanned,
            "total_violations": self.total_violations,
            "violations_by_type": dict(self.violations_by_type),
            "violations_by_severity": dict(self.violations_by_severity),
            "violations_by_category": dict(self.violations_by_category),
            "score": self.score,
            "compliant": self.compliant,
        }


@dataclass(frozen=True)
class ComplianceReport:
    """Project aggregate handed back to the caller; the engine keeps no reference."""

    summary: ComplianceSummary
    files: tuple[FileReport, ...]
    timestamp: datetime
    config: "Configuration"

    @property
    def violations(self) -> list[Violation]:
        return [v for report in self.files for v in report.violations]

    def to_dict(self) -> dict[str, object]:
        return {
            "summary": self.summary.to_dict(),
            "files": [f.to_dict() for f in self.files],
            "timestamp": self.timestamp.isoformat(),
            "config": self.config.to_dict(),
        }


# -----------------------------------------------------------------------------
# Deep compliance: typed findings of the five independent analyses.
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class CodeLocation:
    """Where a deep-compliance finding sits. line/column are 1-based."""
    line: int
    column: int
    end_line: int | None = None
    end_column: int | None = None

    def to_dict(self) -> dict[str, int | None]:
        return {
            "line": self.line,
            "column": self.column,
            "end_line": self.end_line,
            "end_column": self.end_column,
        }


@dataclass(frozen=True)
class DesignTokenViolation:
    token: str       # "color" | "spacing"
    value: str
    expected: str
    location: CodeLocation
    fix: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "token": self.token,
            "value": self.value,
            "expected": self.expected,
            "location": self.location.to_dict(),
            "fix": self.fix,
        }


@dataclass(frozen=True)
class ComponentViolation:
    component: str
    issue: str
    severity: Severity
    location: CodeLocation
    suggestion: str

    def to_dict(self) -> dict[str, object]:
        return {
            "component": self.component,
            "issue": self.issue,
            "severity": self.severity.value,
            "location": self.location.to_dict(),
            "suggestion": self.suggestion,
        }


@dataclass(frozen=True)
class AccessibilityViolation:
    rule: str
    element: str
    issue: str
    wcag_criteria: str
    impact: str      # critical | serious | moderate | minor
    location: CodeLocation
    fix: str

    def to_dict(self) -> dict[str, object]:
        return {
            "rule": self.rule,
            "element": self.element,
            "issue": self.issue,
            "wcag_criteria": self.wcag_criteria,
            "impact": self.impact,
            "location": self.location.to_dict(),
            "fix": self.fix,
        }


@dataclass(frozen=True)
class LocalizationViolation:
    text: str
    language: str
    issue: str
    location: CodeLocation
    suggestion: str

    def to_dict(self) -> dict[str, object]:
        return {
            "text": self.text,
            "language": self.language,
            "issue": self.issue,
            "location": self.location.to_dict(),
            "suggestion": self.suggestion,
        }


@dataclass(frozen=True)
class RTLViolation:
    property: str
    value: str
    issue: str
    location: CodeLocation
    fix: str

    def to_dict(self) -> dict[str, object]:
        return {
            "property": self.property,
            "value": self.value,
            "issue": self.issue,
            "location": self.location.to_dict(),
            "fix": self.fix,
        }


def coverage(finding_count: int, total: int = 100) -> float:
    """Coverage percentage: max(0, 100 - findings / total * 100)."""
    if total == 0:
        return 100.0
    return max(0.0, 100 - finding_count / total * 100)


@dataclass(frozen=True)
class DesignTokenCompliance:
    violations: tuple[DesignTokenViolation, ...]

    @property
    def valid(self) -> bool:
        return not self.violations

    @property
    def coverage(self) -> float:
        return coverage(len(self.violations))

    def to_dict(self) -> dict[str, object]:
        return {
            "valid": self.valid,
            "coverage": self.coverage,
            "violations": [v.to_dict() for v in self.violations],
        }


@dataclass(frozen=True)
class ComponentCompliance:
    violations: tuple[ComponentViolation, ...]

    @property
    def errors(self) -> tuple[ComponentViolation, ...]:
        return tuple(v for v in self.violations if v.severity is Severity.ERROR)

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def coverage(self) -> float:
        return coverage(len(self.errors))

    def to_dict(self) -> dict[str, object]:
        return {
            "valid": self.valid,
            "coverage": self.coverage,
            "violations": [v.to_dict() for v in self.violations],
        }


BLOCKING_IMPACTS = frozenset({"critical", "serious"})


@dataclass(frozen=True)
class AccessibilityCompliance:
    violations: tuple[AccessibilityViolation, ...]
    wcag_level: str

    @property
    def valid(self) -> bool:
        return not any(v.impact in BLOCKING_IMPACTS for v in self.violations)

    @property
    def score(self) -> float:
        return coverage(len(self.violations))

    def to_dict(self) -> dict[str, object]:
        return {
            "valid": self.valid,
            "wcag_level": self.wcag_level,
            "score": self.score,
            "violations": [v.to_dict() for v in self.violations],
        }


@dataclass(frozen=True)
class LocalizationCompliance:
    violations: tuple[LocalizationViolation, ...]
    languages: tuple[str, ...]

    @property
    def valid(self) -> bool:
        return not self.violations

    @property
    def coverage(self) -> dict[str, float]:
        """Coverage per supported language."""
        return {
            lang: coverage(sum(1 for v in self.violations if v.language == lang))
            for lang in self.languages
        }

    def to_dict(self) -> dict[str, object]:
        return {
            "valid": self.valid,
            "coverage": self.coverage,
            "violations": [v.to_dict() for v in self.violations],
        }


@dataclass(frozen=True)
class RTLCompliance:
    violations: tuple[RTLViolation, ...]
    enforced: bool

    @property
    def valid(self) -> bool:
        return not self.violations

    @property
    def supported(self) -> bool:
        return self.enforced and not self.violations

    @property
    def coverage(self) -> float:
        return coverage(len(self.violations))

    def to_dict(self) -> dict[str, object]:
        return {
            "valid": self.valid,
            "supported": self.supported,
            "coverage": self.coverage,
            "violations": [v.to_dict() for v in self.violations],
        }


@dataclass(frozen=True)
class DeepComplianceResult:
    """Dashboard-style result of the five deep-compliance analyses for one file."""

    file_path: str
    design_tokens: DesignTokenCompliance
    components: ComponentCompliance
    accessibility: AccessibilityCompliance
    localization: LocalizationCompliance
    rtl: RTLCompliance
    parse_error: str | None = None

    @property
    def valid(self) -> bool:
        return self.design_tokens.valid and self.components.valid and self.accessibility.valid

    def to_dict(self) -> dict[str, object]:
        out: dict[str, object] = {
            "file_path": self.file_path,
            "valid": self.valid,
            "design_token_compliance": self.design_tokens.to_dict(),
            "component_compliance": self.components.to_dict(),
            "accessibility_compliance": self.accessibility.to_dict(),
            "localization_compliance": self.localization.to_dict(),
            "rtl_compliance": self.rtl.to_dict(),
        }
        if self.parse_error is not None:
            out["parse_error"] = self.parse_error
        return out
