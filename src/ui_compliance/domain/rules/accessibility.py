"""
Accessibility rules (WCAG 2.2).

Labeling, alternative text, focus order, heading structure, contrast and
keyboard operability. Contrast is flagged for review, never computed.
"""

import re

from ui_compliance.domain import constants
from ui_compliance.domain.analysis import (
    CLASS_ATTRIBUTES,
    integer_value,
    iter_images_without_alt,
    iter_unlabelled_interactive,
    style_sets_colors,
)
from ui_compliance.domain.entities import Fix, FixRange, Severity, Violation
from ui_compliance.domain.markup import MarkupElement
from ui_compliance.domain.rules import ValidationContext, violation_at

_HEADING_TAG = re.compile(r"^h([1-6])$")


def _after_tag_name(element: MarkupElement) -> FixRange | None:
    """Insertion point right after the tag name of the opening tag."""
    if element.tag_span is None:
        return None
    end = element.tag_span.end
    return FixRange.insertion(end.line, end.column)


class FormControlLabelCheck:
    """wcag-aaa-compliance: input/select/textarea need aria-label or aria-labelledby."""

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        if context.ast is None:
            return [], []
        violations: list[Violation] = []
        for element in context.ast.iter_elements():
            if element.tag not in constants.FORM_CONTROL_TAGS:
                continue
            if element.has_attribute("aria-label") or element.has_attribute("aria-labelledby"):
                continue
            violations.append(violation_at(
                element.span,
                f"Form control <{element.tag}> missing accessible label",
                Severity.ERROR,
                suggestion="Add aria-label or aria-labelledby attribute",
                documentation_url=constants.WCAG_LABELS,
                context={"wcag": "3.3.2", "level": context.config.wcag_level.value},
            ))
        return violations, []


class AriaLabelCheck:
    """aria-labels-required: interactive elements need an accessible name (WCAG 4.1.2)."""

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        if context.ast is None:
            return [], []
        violations: list[Violation] = []
        fixes: list[Fix] = []
        for element in iter_unlabelled_interactive(context.ast):
            label = f"{element.tag} action"
            violations.append(violation_at(
                element.span,
                f"Interactive element <{element.tag}> missing accessible label",
                Severity.ERROR,
                suggestion=f'Add aria-label="{label}" or visible text content',
                documentation_url=constants.WCAG_NAME_ROLE_VALUE,
                context={"wcag": "4.1.2", "impact": "serious", "element": element.tag},
            ))
            insertion = _after_tag_name(element)
            if insertion is not None:
                fixes.append(Fix(
                    description=f"Add aria-label to {element.tag}",
                    fix=f' aria-label="{label}"',
                    range=insertion,
                ))
        return violations, fixes


class AltTextCheck:
    """alt-text-required: images need alt, aria-label or aria-labelledby (WCAG 1.1.1)."""

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        if context.ast is None:
            return [], []
        violations: list[Violation] = []
        fixes: list[Fix] = []
        for element in iter_images_without_alt(context.ast):
            violations.append(violation_at(
                element.span,
                "Image missing alternative text",
                Severity.ERROR,
                suggestion='Add alt="" for decorative images or descriptive text',
                documentation_url=constants.WCAG_NON_TEXT_CONTENT,
                context={"wcag": "1.1.1", "impact": "critical", "element": element.tag},
            ))
            insertion = _after_tag_name(element)
            if insertion is not None:
                fixes.append(Fix(
                    description="Add empty alt for decorative image",
                    fix=' alt=""',
                    range=insertion,
                ))
        return violations, fixes


class FocusManagementCheck:
    """focus-management: positive tabIndex, unmanaged dialogs, removed focus outlines."""

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        if context.ast is None:
            return [], []
        violations: list[Violation] = []
        for element in context.ast.iter_elements():
            tab_index = element.attribute("tabIndex")
            if tab_index is not None and (integer_value(tab_index.value) or 0) > 0:
                violations.append(violation_at(
                    tab_index.span,
                    "Avoid positive tabIndex values",
                    Severity.WARNING,
                    suggestion="Use tabIndex={0} or {-1} only",
                    documentation_url=constants.WCAG_FOCUS_ORDER,
                ))
            if element.tag in constants.FOCUS_TRAP_COMPONENTS and not (
                element.has_attribute("returnFocusOnClose") or element.has_attribute("initialFocusRef")
            ):
                violations.append(violation_at(
                    element.span,
                    f"{element.tag} should manage focus properly",
                    Severity.WARNING,
                    suggestion="Add returnFocusOnClose and initialFocusRef props",
                    documentation_url=constants.DIALOG_PATTERN_DOCS,
                ))
            classes = " ".join(element.attribute_text(name) or "" for name in CLASS_ATTRIBUTES)
            if "outline-none" in classes and "focus:ring" not in classes:
                # A missing focus indicator fails 2.4.7 outright.
                violations.append(violation_at(
                    element.span,
                    "Focus indicator removed without alternative",
                    Severity.ERROR,
                    suggestion="Provide visible focus indicator with focus:ring classes",
                    documentation_url=constants.WCAG_FOCUS_VISIBLE,
                ))
        return violations, []


class HeadingHierarchyCheck:
    """heading-hierarchy: no skipped levels, and an h1 wherever headings are used."""

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        if context.ast is None:
            return [], []
        violations: list[Violation] = []
        levels: list[int] = []
        for element in context.ast.iter_elements():
            level = self._level(element)
            if level is None:
                continue
            if levels and level > levels[-1] + 1:
                previous = levels[-1]
                violations.append(violation_at(
                    element.span,
                    f"Heading level skipped: h{previous} to h{level}",
                    Severity.WARNING,
                    suggestion=f"Use h{previous + 1} instead",
                    documentation_url=constants.WCAG_HEADINGS,
                ))
            levels.append(level)
        if levels and 1 not in levels:
            violations.append(Violation(
                message="Page missing h1 heading",
                severity=Severity.WARNING,
                line=1,
                column=1,
                suggestion="Add a main h1 heading to the page",
                documentation_url=constants.WCAG_HEADINGS,
            ))
        return violations, []

    @staticmethod
    def _level(element: MarkupElement) -> int | None:
        match = _HEADING_TAG.match(element.tag)
        if match:
            return int(match.group(1))
        if element.tag == "Heading":
            level = element.attribute("level")
            if level is not None:
                value = integer_value(level.value)
                if value and 1 <= value <= 6:
                    return value
        return None


class ColorContrastCheck:
    """color-contrast: known low-contrast class pairs and inline color + background styles."""

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        if context.ast is None:
            return [], []
        required = context.config.contrast_ratio
        docs = constants.WCAG_CONTRAST if required >= 7 else constants.WCAG_CONTRAST_MINIMUM
        violations: list[Violation] = []
        for element in context.ast.iter_elements():
            classes = " ".join(element.attribute_text(name) or "" for name in CLASS_ATTRIBUTES)
            for pattern, message in constants.LOW_CONTRAST_CLASS_PATTERNS:
                if pattern.search(classes):
                    violations.append(violation_at(
                        element.span,
                        message,
                        Severity.WARNING,
                        suggestion="Use design tokens with pre-validated contrast ratios",
                        documentation_url=docs,
                        context={"required_ratio": required},
                    ))
            if style_sets_colors(element.attribute("style")):
                violations.append(violation_at(
                    element.span,
                    "Inline color styles detected - cannot verify contrast",
                    Severity.WARNING,
                    suggestion=f"Use design tokens with a contrast ratio of at least {required}:1",
                    documentation_url=docs,
                    context={"required_ratio": required},
                ))
        return violations, []


class KeyboardNavigationCheck:
    """keyboard-navigation: clickable non-controls need key handlers plus role and tabIndex."""

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        if context.ast is None:
            return [], []
        violations: list[Violation] = []
        for element in context.ast.iter_elements():
            if not element.has_attribute("onClick") or element.tag in constants.KEYBOARD_OPERABLE:
                continue
            if not any(element.has_attribute(handler) for handler in constants.KEYBOARD_HANDLERS):
                violations.append(violation_at(
                    element.span,
                    "Element with onClick should also handle keyboard events",
                    Severity.ERROR,
                    suggestion="Add onKeyDown handler or use a Button component",
                    documentation_url=constants.WCAG_KEYBOARD,
                ))
            if not element.has_attribute("role") and not element.has_attribute("tabIndex"):
                violations.append(violation_at(
                    element.span,
                    "Clickable element needs proper role and tabIndex",
                    Severity.ERROR,
                    suggestion='Add role="button" tabIndex={0}',
                    documentation_url=constants.WCAG_KEYBOARD,
                ))
        return violations, []
