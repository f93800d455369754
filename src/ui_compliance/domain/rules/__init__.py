"""Domain models for rules and the per-file validation context."""

from dataclasses import dataclass, field
from functools import cached_property
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Protocol

from ui_compliance.domain.entities import (
    FileKind,
    Fix,
    RuleType,
    Severity,
    ValidationResult,
    Violation,
)

if TYPE_CHECKING:
    from ui_compliance.domain.config import Configuration
    from ui_compliance.domain.markup import MarkupDocument, Span

__all__ = [
    "Evaluable",
    "Rule",
    "ValidationContext",
    "violation_at",
]


@dataclass(frozen=True)
class ValidationContext:
    """
    Read-only snapshot of one file, shared by every rule evaluated against it.

    `ast` is None for stylesheets, unknown kinds and sources that failed to parse.
    """

    code: str
    file_path: str
    file_kind: FileKind
    ast: "MarkupDocument | None"
    config: "Configuration"
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @cached_property
    def lines(self) -> list[str]:
        return self.code.split("\n")

    @property
    def has_markup(self) -> bool:
        return self.ast is not None and self.file_kind is FileKind.MARKUP_COMPONENT


# -----------------------------------------------------------------------------
# A rule is a record plus an evaluator. Evaluators are small stateless objects
# exposing evaluate(context); the record carries the metadata and the toggle.
# -----------------------------------------------------------------------------


class Evaluable(Protocol):
    """Pure evaluation capability: context in, violations and fixes out."""

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        """Inspect the context. Must not mutate it."""
        ...


@dataclass(eq=False)
class Rule:
    """Tagged rule record. Only `enabled` changes after registration."""

    id: str
    name: str
    description: str
    type: RuleType
    severity: Severity
    category: str
    evaluator: Evaluable = field(repr=False)
    enabled: bool = True
    auto_fixable: bool = False

    def evaluate(self, context: ValidationContext) -> ValidationResult:
        violations, fixes = self.evaluator.evaluate(context)
        return ValidationResult.of(self.id, violations, fixes)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type.value,
            "severity": self.severity.value,
            "category": self.category,
            "enabled": self.enabled,
            "auto_fixable": self.auto_fixable,
        }


def violation_at(
    span: "Span",
    message: str,
    severity: Severity,
    *,
    suggestion: str | None = None,
    documentation_url: str | None = None,
    context: Mapping[str, object] | None = None,
) -> Violation:
    """Violation located at a markup span (converted to 1-based columns)."""
    location = span.location()
    return Violation(
        message=message,
        severity=severity,
        line=location.line,
        column=location.column,
        end_line=location.end_line,
        end_column=location.end_column,
        suggestion=suggestion,
        documentation_url=documentation_url,
        context=context or {},
    )
