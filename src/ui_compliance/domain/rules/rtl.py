"""Layout-direction rule: left/right must give way to logical start/end."""

from ui_compliance.domain import constants
from ui_compliance.domain.analysis import (
    CLASS_ATTRIBUTES,
    find_directional_declarations,
    iter_directional_attributes,
    literal_span,
)
from ui_compliance.domain.entities import FileKind, Fix, FixRange, Severity, Violation
from ui_compliance.domain.rules import ValidationContext, violation_at


class RtlSupportCheck:
    """
    rtl-support-required.

    Stylesheets are scanned declaration by declaration; markup files have
    their class strings, style strings and style objects inspected. Located
    usages carry an applicable fix swapping in the logical name.
    """

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        if context.file_kind is FileKind.STYLESHEET:
            return self._evaluate_stylesheet(context)
        if context.ast is None:
            return [], []
        violations: list[Violation] = []
        fixes: list[Fix] = []
        for attr, usages, located in iter_directional_attributes(context.ast):
            is_class = attr.name in CLASS_ATTRIBUTES
            for usage in usages:
                span = literal_span(attr, usage.start, usage.end) if located else attr.span
                if is_class:
                    message = f'Directional class "{usage.property}" not RTL-safe'
                    suggestion = f"Use {usage.replacement} (start/end utilities)"
                else:
                    message = f'Inline style "{usage.property}" not RTL-safe'
                    suggestion = f"Use logical property: {usage.replacement}"
                violations.append(violation_at(
                    span,
                    message,
                    Severity.WARNING,
                    suggestion=suggestion,
                    documentation_url=constants.RTL_DOCS,
                    context={"property": usage.property, "replacement": usage.replacement},
                ))
                fixes.append(Fix(
                    description=f"Replace {usage.property} with {usage.replacement}",
                    fix=usage.replacement,
                    range=span.to_range() if located else None,
                ))
        return violations, fixes

    @staticmethod
    def _evaluate_stylesheet(context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        violations: list[Violation] = []
        fixes: list[Fix] = []
        for number, line in enumerate(context.lines, start=1):
            for usage in find_directional_declarations(line):
                violations.append(Violation(
                    message=f'Directional property "{usage.property}" not RTL-safe',
                    severity=Severity.WARNING,
                    line=number,
                    column=usage.start + 1,
                    end_line=number,
                    end_column=usage.end + 1,
                    suggestion=f"Use logical property: {usage.replacement}",
                    documentation_url=constants.RTL_DOCS,
                    context={"property": usage.property, "replacement": usage.replacement},
                ))
                fixes.append(Fix(
                    description=f"Replace {usage.property} with {usage.replacement}",
                    fix=usage.replacement,
                    range=FixRange.on_line(number, usage.start, usage.end),
                ))
        return violations, fixes
