"""Performance rule: oversized component files should be split."""

from ui_compliance.domain.entities import FileKind, Fix, Severity, Violation
from ui_compliance.domain.rules import ValidationContext


class ComponentSizeCheck:
    """component-size: a markup component longer than max_component_size lines."""

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        if context.file_kind is not FileKind.MARKUP_COMPONENT:
            return [], []
        limit = context.config.max_component_size
        # A trailing newline does not start another line of code.
        count = len(context.lines) - (1 if context.code.endswith("\n") else 0)
        if count <= limit:
            return [], []
        return [Violation(
            message=f"Component file has {count} lines (limit {limit})",
            severity=Severity.WARNING,
            line=limit + 1,
            column=1,
            suggestion="Split into smaller components or lazy-load sections with React.lazy()",
            context={"lines": count, "limit": limit},
        )], []
