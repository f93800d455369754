"""Domain analysis: markup inspections shared by the rules and the deep-compliance report.

Pure domain logic, no I/O. Each finder walks the parser-independent markup
AST (or a class / CSS string) and returns plain findings; the rule modules
turn them into Violations and Fixes, and the deep_* functions below turn them
into the typed deep-compliance records.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

from ui_compliance.domain import constants
from ui_compliance.domain.entities import (
    AccessibilityCompliance,
    AccessibilityViolation,
    ComponentCompliance,
    ComponentViolation,
    DeepComplianceResult,
    DesignTokenCompliance,
    DesignTokenViolation,
    LocalizationCompliance,
    LocalizationViolation,
    RTLCompliance,
    RTLViolation,
    Severity,
    SourcePosition,
)
from ui_compliance.domain.markup import (
    AttributeValue,
    MarkupAttribute,
    MarkupElement,
    MarkupText,
    Span,
    ValueKind,
    advance,
)

if TYPE_CHECKING:
    from ui_compliance.domain.config import Configuration
    from ui_compliance.domain.markup import MarkupDocument

CLASS_ATTRIBUTES = ("className", "class")


# -----------------------------------------------------------------------------
# Positions inside attribute values
# -----------------------------------------------------------------------------


def literal_position(attr: MarkupAttribute, offset: int) -> SourcePosition:
    """Source position of character `offset` of an attribute's literal value."""
    value = attr.value
    if value.literal is None or value.literal_start is None:
        return attr.span.start
    return advance(value.literal_start, value.literal[:offset])


def literal_span(attr: MarkupAttribute, start: int, end: int) -> Span:
    return Span(literal_position(attr, start), literal_position(attr, end))


def trimmed_text_span(text: MarkupText) -> Span:
    """Span of a text node without its surrounding whitespace."""
    leading = len(text.value) - len(text.value.lstrip())
    stripped = text.value.strip()
    start = advance(text.span.start, text.value[:leading])
    return Span(start, advance(start, stripped))


# -----------------------------------------------------------------------------
# Class attributes: hard-coded utility values
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class ClassTokenIssue:
    """A utility class that bypasses the token catalog."""

    kind: str                 # "color" | "spacing"
    value: str                # the whole class, e.g. "p-7"
    expected: str
    fix: str
    start: int                # offsets into the class string
    end: int
    replacement: str | None = None
    """For spacing classes: the grid index that replaces the digits."""
    replace_start: int = 0
    replace_end: int = 0


def iter_class_attributes(document: "MarkupDocument") -> Iterator[tuple[MarkupElement, MarkupAttribute]]:
    """className/class attributes whose value is a string literal."""
    for element, attr in document.iter_attributes():
        if attr.name in CLASS_ATTRIBUTES and attr.value.literal is not None:
            yield element, attr


def find_off_grid_spacing_classes(class_text: str) -> list[ClassTokenIssue]:
    issues: list[ClassTokenIssue] = []
    for match in constants.SPACING_CLASS.finditer(class_text):
        index = int(match.group("index"))
        if index in constants.GRID_INDEX_VALUES:
            continue
        nearest = constants.nearest_grid_value(index * constants.GRID_STEP_PX)
        issues.append(ClassTokenIssue(
            kind="spacing",
            value=match.group(0),
            expected="8pt grid token",
            fix=f"spacing[{nearest}]",
            start=match.start(),
            end=match.end(),
            replacement=str(nearest),
            replace_start=match.start("index"),
            replace_end=match.end("index"),
        ))
    return issues


def find_color_classes(class_text: str, token_prefix: str) -> list[ClassTokenIssue]:
    return [
        ClassTokenIssue(
            kind="color",
            value=match.group(0),
            expected="design token",
            fix=f"{token_prefix}('colors.{match.group('name')}.{match.group('shade')}')",
            start=match.start(),
            end=match.end(),
        )
        for match in constants.COLOR_CLASS.finditer(class_text)
    ]


def find_class_token_issues(class_text: str, token_prefix: str) -> list[ClassTokenIssue]:
    """Palette color classes and off-grid spacing classes, in string order."""
    issues = find_color_classes(class_text, token_prefix) + find_off_grid_spacing_classes(class_text)
    return sorted(issues, key=lambda issue: issue.start)


# -----------------------------------------------------------------------------
# Components
# -----------------------------------------------------------------------------


def is_raw_html(element: MarkupElement) -> bool:
    return element.tag in constants.RAW_HTML_ELEMENTS


def is_approved_component(tag: str, config: "Configuration") -> bool:
    # <Tabs.List> is approved when <Tabs> is.
    root = tag.split(".", 1)[0]
    approved = constants.APPROVED_COMPONENTS | config.approved_components
    return tag in approved or root in approved


def iter_unapproved_components(
    document: "MarkupDocument", config: "Configuration"
) -> Iterator[MarkupElement]:
    for element in document.iter_elements():
        if element.is_component and not is_approved_component(element.tag, config):
            yield element


# -----------------------------------------------------------------------------
# Accessibility
# -----------------------------------------------------------------------------


def _has_label_value(attr: MarkupAttribute | None) -> bool:
    if attr is None or not attr.has_value:
        return False
    if attr.value.kind is ValueKind.STRING:
        return bool(attr.value.text.strip())
    return True


def is_interactive(element: MarkupElement) -> bool:
    """Host control tag, interaction handler or interactive ARIA role."""
    if element.tag in constants.INTERACTIVE_TAGS:
        return True
    if any(element.has_attribute(handler) for handler in constants.INTERACTION_HANDLERS):
        return True
    return element.attribute_text("role") in constants.INTERACTIVE_ROLES


def has_accessible_label(element: MarkupElement) -> bool:
    if any(_has_label_value(element.attribute(name)) for name in constants.LABEL_ATTRIBUTES):
        return True
    return element.tag in constants.TEXT_LABELLED_TAGS and element.has_text_content()


def is_image(element: MarkupElement) -> bool:
    return element.tag in constants.IMAGE_TAGS or element.attribute_text("role") == "img"


def lacks_alt_text(element: MarkupElement) -> bool:
    """Image without alt / aria-label / aria-labelledby. alt="" marks a decorative image."""
    return is_image(element) and not any(
        element.has_attribute(name) for name in constants.IMAGE_LABEL_ATTRIBUTES
    )


def iter_unlabelled_interactive(document: "MarkupDocument") -> Iterator[MarkupElement]:
    for element in document.iter_elements():
        if is_interactive(element) and not has_accessible_label(element):
            yield element


def iter_images_without_alt(document: "MarkupDocument") -> Iterator[MarkupElement]:
    for element in document.iter_elements():
        if lacks_alt_text(element):
            yield element


def style_sets_colors(attr: MarkupAttribute | None) -> bool:
    """Inline style defining both a foreground and a background color."""
    if attr is None or not attr.has_value:
        return False
    value = attr.value
    if value.kind is ValueKind.STRING:
        text = value.text
        return "color:" in text.replace(" :", ":") and "background" in text
    keys = set(value.object_keys)
    return "color" in keys and any(key.startswith("background") for key in keys)


def integer_value(value: AttributeValue) -> int | None:
    """Integer held by tabIndex="1" or tabIndex={1}."""
    if value.numeric is not None:
        return int(value.numeric)
    try:
        return int(value.text.strip())
    except ValueError:
        return None


# -----------------------------------------------------------------------------
# Localization
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class TextFinding:
    """User-facing literal text that bypasses translation."""

    text: str
    span: Span
    attribute: str | None = None
    in_expression: bool = False
    """A string literal in braces ({"Hello"}) rather than a bare text node."""


def _is_translated(value: AttributeValue) -> bool:
    return value.kind is ValueKind.EXPRESSION and constants.is_translation_callee(value.callee)


def find_hardcoded_text(document: "MarkupDocument") -> list[TextFinding]:
    """Literal text nodes and literal text attributes, in document order per element."""
    findings: list[TextFinding] = []
    for element in document.iter_elements():
        for attr in element.attributes:
            if attr.name not in constants.TEXT_ATTRIBUTES or not attr.has_value:
                continue
            if _is_translated(attr.value) or attr.value.literal is None:
                continue
            text = attr.value.literal.strip()
            if text and not constants.is_acceptable_literal_text(text):
                findings.append(TextFinding(text=text, span=attr.span, attribute=attr.name))
        for child in element.children:
            if not isinstance(child, MarkupText):
                continue
            text = child.value.strip()
            if not text or constants.is_acceptable_literal_text(text):
                continue
            if child.is_expression and not constants.contains_words(text):
                continue
            findings.append(TextFinding(
                text=text,
                span=trimmed_text_span(child),
                in_expression=child.is_expression,
            ))
    return findings


# -----------------------------------------------------------------------------
# Layout direction
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class DirectionalUsage:
    """A left/right usage and its logical replacement, located inside a string."""

    property: str
    value: str
    replacement: str
    start: int
    end: int


def find_directional_classes(class_text: str) -> list[DirectionalUsage]:
    return [
        DirectionalUsage(
            property=match.group(0),
            value=class_text,
            replacement=constants.logical_class(match.group(0)),
            start=match.start(),
            end=match.end(),
        )
        for match in constants.DIRECTIONAL_CLASS.finditer(class_text)
    ]


def find_directional_declarations(css_text: str) -> list[DirectionalUsage]:
    """margin-left: / right: / text-align: left ... in CSS text. Offsets cover the replaced word."""
    usages: list[DirectionalUsage] = []
    for match in constants.CSS_DIRECTIONAL_PROPERTY.finditer(css_text):
        prop = match.group("property")
        usages.append(DirectionalUsage(
            property=prop,
            value=match.group(0),
            replacement=constants.LOGICAL_PROPERTY_MAP[prop],
            start=match.start("property"),
            end=match.end("property"),
        ))
    for match in constants.CSS_DIRECTIONAL_VALUE.finditer(css_text):
        prop, side = match.group("property"), match.group("value")
        logical = constants.LOGICAL_VALUE_MAP[side]
        usages.append(DirectionalUsage(
            property=f"{prop}: {side}",
            value=match.group(0),
            replacement=logical if prop == "text-align" else f"inline-{logical}",
            start=match.start("value"),
            end=match.end("value"),
        ))
    return sorted(usages, key=lambda usage: usage.start)


def find_directional_style_keys(value: AttributeValue) -> list[DirectionalUsage]:
    """marginLeft / textAlign: 'left' ... in a style={{...}} object."""
    usages: list[DirectionalUsage] = []
    for key, source in value.object_entries:
        if key in constants.LOGICAL_PROPERTY_MAP:
            usages.append(DirectionalUsage(key, source, constants.LOGICAL_PROPERTY_MAP[key], 0, 0))
            continue
        side = source.strip("'\"` ")
        if key in constants.DIRECTIONAL_VALUE_PROPERTIES and side in constants.LOGICAL_VALUE_MAP:
            usages.append(DirectionalUsage(
                f"{key}: {side}", source, f"'{constants.LOGICAL_VALUE_MAP[side]}'", 0, 0,
            ))
    return usages


def iter_directional_attributes(
    document: "MarkupDocument",
) -> Iterator[tuple[MarkupAttribute, list[DirectionalUsage], bool]]:
    """(attribute, usages, located) for class and style attributes with left/right usage.

    `located` tells whether usage offsets point into the attribute literal.
    """
    for _element, attr in document.iter_attributes():
        value = attr.value
        if attr.name in CLASS_ATTRIBUTES and value.literal is not None:
            usages = find_directional_classes(value.literal)
            located = True
        elif attr.name == "style" and value.kind is ValueKind.STRING:
            usages = find_directional_declarations(value.text)
            located = True
        elif attr.name == "style" and value.object_entries:
            usages = find_directional_style_keys(value)
            located = False
        else:
            continue
        if usages:
            yield attr, usages, located


# -----------------------------------------------------------------------------
# Deep compliance: five independent analyses
# -----------------------------------------------------------------------------


def deep_design_tokens(document: "MarkupDocument", config: "Configuration") -> list[DesignTokenViolation]:
    if not config.enforce_design_tokens:
        return []
    violations: list[DesignTokenViolation] = []
    for _element, attr in iter_class_attributes(document):
        for issue in find_class_token_issues(attr.value.text, config.token_prefix):
            violations.append(DesignTokenViolation(
                token=issue.kind,
                value=issue.value,
                expected=issue.expected,
                location=literal_span(attr, issue.start, issue.end).location(),
                fix=issue.fix,
            ))
    return violations


def deep_components(document: "MarkupDocument", config: "Configuration") -> list[ComponentViolation]:
    if not config.enforce_semantic_components:
        return []
    violations: list[ComponentViolation] = []
    for element in document.iter_elements():
        if is_raw_html(element) and not config.allow_raw_html:
            violations.append(ComponentViolation(
                component=element.tag,
                issue=(
                    f"Raw HTML element <{element.tag}> used. "
                    f"Use semantic component from {constants.DESIGN_SYSTEM_PACKAGE}"
                ),
                severity=Severity.ERROR,
                location=element.span.location(),
                suggestion=constants.suggest_semantic_component(element.tag),
            ))
        elif element.is_component and not is_approved_component(element.tag, config):
            violations.append(ComponentViolation(
                component=element.tag,
                issue=f"Component {element.tag} is not from {constants.DESIGN_SYSTEM_PACKAGE}",
                severity=Severity.WARNING,
                location=element.span.location(),
                suggestion=f"Import from {constants.DESIGN_SYSTEM_PACKAGE} or use approved components",
            ))
    return violations


def deep_accessibility(document: "MarkupDocument", config: "Configuration") -> list[AccessibilityViolation]:
    if not config.enforce_wcag_compliance:
        return []
    violations: list[AccessibilityViolation] = []
    for element in document.iter_elements():
        location = element.span.location()
        if is_interactive(element) and not has_accessible_label(element):
            violations.append(AccessibilityViolation(
                rule="aria-label-required",
                element=element.tag,
                issue="Interactive element missing accessible label",
                wcag_criteria="4.1.2",
                impact="serious",
                location=location,
                fix="Add aria-label, aria-labelledby, or visible text content",
            ))
        if lacks_alt_text(element):
            violations.append(AccessibilityViolation(
                rule="alt-text-required",
                element=element.tag,
                issue="Image missing alternative text",
                wcag_criteria="1.1.1",
                impact="critical",
                location=location,
                fix="Add alt attribute with descriptive text",
            ))
        if style_sets_colors(element.attribute("style")):
            violations.append(AccessibilityViolation(
                rule="color-contrast",
                element=element.tag,
                issue="Inline color styles detected - cannot verify contrast ratio",
                wcag_criteria="1.4.3",
                impact="moderate",
                location=location,
                fix="Use design tokens with pre-validated contrast ratios",
            ))
    return violations


def deep_localization(document: "MarkupDocument", config: "Configuration") -> list[LocalizationViolation]:
    if not config.enforce_localization or config.allow_hardcoded_text:
        return []
    # Source text is assumed to be written in the primary language.
    language = config.supported_languages[0]
    violations: list[LocalizationViolation] = []
    for finding in find_hardcoded_text(document):
        if finding.attribute:
            issue = f"Hardcoded text in {finding.attribute} attribute"
            suggestion = f"Use t('key') or i18n function for {finding.attribute}"
        else:
            issue = "Hardcoded user-facing text detected"
            suggestion = "Use t() or i18n translation function"
        violations.append(LocalizationViolation(
            text=finding.text,
            language=language,
            issue=issue,
            location=finding.span.location(),
            suggestion=suggestion,
        ))
    return violations


def deep_rtl(document: "MarkupDocument", config: "Configuration") -> list[RTLViolation]:
    if not config.enforce_rtl_support:
        return []
    violations: list[RTLViolation] = []
    for attr, usages, located in iter_directional_attributes(document):
        kind = "class" if attr.name in CLASS_ATTRIBUTES else "style"
        for usage in usages:
            span = literal_span(attr, usage.start, usage.end) if located else attr.span
            violations.append(RTLViolation(
                property=usage.property,
                value=usage.value,
                issue=f'Directional {kind} "{usage.property}" not RTL-safe',
                location=span.location(),
                fix=usage.replacement,
            ))
    return violations


def deep_compliance(
    file_path: str,
    document: "MarkupDocument",
    config: "Configuration",
    parse_error: str | None = None,
) -> DeepComplianceResult:
    """Run the five analyses against one parsed document."""
    return DeepComplianceResult(
        file_path=file_path,
        design_tokens=DesignTokenCompliance(tuple(deep_design_tokens(document, config))),
        components=ComponentCompliance(tuple(deep_components(document, config))),
        accessibility=AccessibilityCompliance(
            tuple(deep_accessibility(document, config)), config.wcag_level.value,
        ),
        localization=LocalizationCompliance(
            tuple(deep_localization(document, config)), config.supported_languages,
        ),
        rtl=RTLCompliance(tuple(deep_rtl(document, config)), config.enforce_rtl_support),
        parse_error=parse_error,
    )
