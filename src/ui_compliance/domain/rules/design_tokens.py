"""Design token rules: hard-coded colors, off-grid spacing and arbitrary bracketed values."""

from ui_compliance.domain import constants
from ui_compliance.domain.analysis import (
    find_off_grid_spacing_classes,
    iter_class_attributes,
    literal_span,
)
from ui_compliance.domain.entities import Fix, Severity, Violation
from ui_compliance.domain.rules import ValidationContext, violation_at


def _color_literal(line: str, start: int, end: int) -> str:
    """The matched hex literal, or the whole rgb(...)/hsl(...) call."""
    if line[end - 1] != "(":
        return line[start:end]
    close = line.find(")", end)
    return line[start:close + 1] if close != -1 else line[start:end]


class HardcodedColorCheck:
    """no-hardcoded-colors: first hex literal or color function on each line."""

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        config = context.config
        if config.allow_hardcoded_colors:
            return [], []
        violations: list[Violation] = []
        fixes: list[Fix] = []
        for number, line in enumerate(context.lines, start=1):
            match = constants.HARDCODED_COLOR.search(line)
            if match is None:
                continue
            value = _color_literal(line, match.start(), match.end())
            violations.append(Violation(
                message="Hardcoded color value detected. Use design tokens instead.",
                severity=Severity.ERROR,
                line=number,
                column=match.start() + 1,
                end_line=number,
                end_column=match.start() + len(value) + 1,
                suggestion="Use colors.primary[500] or semantic color tokens",
                context={"value": value},
            ))
            # The right token depends on intent, so the fix is advisory only.
            fixes.append(Fix(
                description=f"Replace {value} with a semantic color token",
                fix=f"{config.token_prefix}('colors.primary.500')",
            ))
        return violations, fixes


class HardcodedSpacingCheck:
    """
    no-hardcoded-spacing: spacing magnitudes that fall off the 8pt grid.

    Two sources are inspected:
      * declarations on any line (padding: 13px, gap="1.1rem"), rem/em at 16px;
      * spacing utility classes in className literals (p-7, gap-x-9), where
        one index step is 4px. These get an applicable fix replacing the index.
    """

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        if context.config.allow_hardcoded_spacing:
            return [], []
        violations: list[Violation] = []
        fixes: list[Fix] = []
        for number, line in enumerate(context.lines, start=1):
            for match in constants.SPACING_DECLARATION.finditer(line):
                raw = match.group("value") + match.group("unit")
                pixels = constants.to_pixels(float(match.group("value")), match.group("unit"))
                if constants.is_on_grid(pixels):
                    continue
                nearest = constants.nearest_grid_value(pixels)
                violations.append(Violation(
                    message=f'Spacing value "{raw}" not on 8pt grid. Use spacing tokens.',
                    severity=Severity.ERROR,
                    line=number,
                    column=match.start() + 1,
                    end_line=number,
                    end_column=match.end() + 1,
                    suggestion=f"Use spacing[{nearest}]",
                    context={"value": raw, "pixels": pixels, "nearest": nearest},
                ))
                fixes.append(Fix(description=f"Replace {raw} with spacing[{nearest}]", fix=f"spacing[{nearest}]"))

        if context.ast is None:
            return violations, fixes
        for _element, attr in iter_class_attributes(context.ast):
            for issue in find_off_grid_spacing_classes(attr.value.text):
                violations.append(violation_at(
                    literal_span(attr, issue.start, issue.end),
                    f'Spacing class "{issue.value}" not on 8pt grid. Use spacing tokens.',
                    Severity.ERROR,
                    suggestion=f"Use {issue.fix}",
                    context={"value": issue.value, "nearest": issue.replacement},
                ))
                fixes.append(Fix(
                    description=f"Move {issue.value} onto the grid ({issue.fix})",
                    fix=issue.replacement or "",
                    range=literal_span(attr, issue.replace_start, issue.replace_end).to_range(),
                ))
        return violations, fixes


class ArbitraryValueCheck:
    """no-arbitrary-values: bracket escapes like w-[13px] or bg-[#fff] are never allowed."""

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        if context.config.allow_arbitrary_values:
            return [], []
        violations: list[Violation] = []
        for number, line in enumerate(context.lines, start=1):
            for match in constants.ARBITRARY_VALUE.finditer(line):
                violations.append(Violation(
                    message=f'Arbitrary value "[{match.group("value")}]" detected. Use design tokens.',
                    severity=Severity.ERROR,
                    line=number,
                    column=match.start() + 1,
                    end_line=number,
                    end_column=match.end() + 1,
                    suggestion="Replace with appropriate design token",
                    context={"value": match.group("value")},
                ))
        return violations, []
