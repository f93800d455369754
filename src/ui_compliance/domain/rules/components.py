"""Component usage rules: raw HTML elements, non-catalog components and inline styles."""

from ui_compliance.domain import constants
from ui_compliance.domain.analysis import is_raw_html, iter_unapproved_components
from ui_compliance.domain.entities import Fix, FixRange, Severity, SourcePosition, Violation
from ui_compliance.domain.markup import MarkupAttribute
from ui_compliance.domain.rules import ValidationContext, violation_at


class RawHtmlCheck:
    """no-raw-html: host elements must be replaced by their semantic component."""

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        if context.ast is None or context.config.allow_raw_html:
            return [], []
        violations: list[Violation] = []
        fixes: list[Fix] = []
        for element in context.ast.iter_elements():
            if not is_raw_html(element):
                continue
            replacement = constants.suggest_semantic_component(element.tag)
            violations.append(violation_at(
                element.span,
                f"Raw HTML element <{element.tag}> detected. Use semantic components.",
                Severity.ERROR,
                suggestion=f"Use {replacement} from {constants.DESIGN_SYSTEM_PACKAGE}",
                context={"tag": element.tag, "replacement": replacement},
            ))
            for tag_span in (element.tag_span, element.closing_tag_span):
                if tag_span is not None:
                    fixes.append(Fix(
                        description=f"Replace <{element.tag}> with <{replacement}>",
                        fix=replacement,
                        range=tag_span.to_range(),
                    ))
        return violations, fixes


class ApprovedComponentsCheck:
    """approved-components-only: capitalized tags outside the design-system catalog."""

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        if context.ast is None:
            return [], []
        violations = [
            violation_at(
                element.span,
                f"Component <{element.tag}> is not part of {constants.DESIGN_SYSTEM_PACKAGE}",
                Severity.WARNING,
                suggestion=f"Import from {constants.DESIGN_SYSTEM_PACKAGE} or use an approved component",
                context={"component": element.tag},
            )
            for element in iter_unapproved_components(context.ast, context.config)
        ]
        return violations, []


def _removal_range(attr: MarkupAttribute, lines: list[str]) -> FixRange:
    """The attribute span plus the whitespace separating it from the previous token."""
    start = attr.span.start
    column = start.column
    if 0 < start.line <= len(lines):
        line = lines[start.line - 1]
        while column > 0 and line[column - 1] in " \t":
            column -= 1
    return FixRange(SourcePosition(start.line, column), attr.span.end)


class InlineStyleCheck:
    """no-inline-styles: any style attribute; the fix deletes it."""

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        if context.ast is None or context.config.allow_inline_styles:
            return [], []
        violations: list[Violation] = []
        fixes: list[Fix] = []
        for element, attr in context.ast.iter_attributes():
            if attr.name != "style":
                continue
            violations.append(violation_at(
                attr.span,
                "Inline style attribute detected. Use design tokens and className.",
                Severity.ERROR,
                suggestion="Convert styles to design token classes",
                context={"element": element.tag},
            ))
            fixes.append(Fix(
                description=f"Remove inline style from <{element.tag}>",
                fix="",
                range=_removal_range(attr, context.lines),
            ))
        return violations, fixes
