"""Rule registry: every rule record, in registration order, keyed by id."""

from collections.abc import Callable, Iterator

from ui_compliance.domain.config import Configuration
from ui_compliance.domain.entities import RuleType, Severity
from ui_compliance.domain.rules import Evaluable, Rule
from ui_compliance.domain.rules.accessibility import (
    AltTextCheck,
    AriaLabelCheck,
    ColorContrastCheck,
    FocusManagementCheck,
    FormControlLabelCheck,
    HeadingHierarchyCheck,
    KeyboardNavigationCheck,
)
from ui_compliance.domain.rules.components import (
    ApprovedComponentsCheck,
    InlineStyleCheck,
    RawHtmlCheck,
)
from ui_compliance.domain.rules.design_tokens import (
    ArbitraryValueCheck,
    HardcodedColorCheck,
    HardcodedSpacingCheck,
)
from ui_compliance.domain.rules.localization import (
    HardcodedTextCheck,
    LanguageFormattingCheck,
    PluralSupportCheck,
    TranslationKeyCheck,
)
from ui_compliance.domain.rules.performance import ComponentSizeCheck
from ui_compliance.domain.rules.rtl import RtlSupportCheck


class RuleCatalog:
    """Ordered id -> Rule mapping. Adding, removing or toggling one rule never touches another."""

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}

    def register(self, rule: Rule) -> None:
        if rule.id in self._rules:
            raise ValueError(f"Rule {rule.id!r} is already registered")
        self._rules[rule.id] = rule

    def unregister(self, rule_id: str) -> Rule | None:
        return self._rules.pop(rule_id, None)

    def get(self, rule_id: str) -> Rule | None:
        return self._rules.get(rule_id)

    def set_enabled(self, rule_id: str, enabled: bool) -> None:
        """Toggle a rule; unknown ids are ignored."""
        rule = self._rules.get(rule_id)
        if rule is not None:
            rule.enabled = enabled

    def all(self) -> list[Rule]:
        return list(self._rules.values())

    def enabled(self) -> Iterator[Rule]:
        return (rule for rule in self._rules.values() if rule.enabled)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules


# (id, name, description, type, severity, category, auto_fixable, evaluator factory, enabled-when)
_RuleSpec = tuple[
    str, str, str, RuleType, Severity, str, bool,
    Callable[[], Evaluable], Callable[[Configuration], bool],
]

RULE_DEFINITIONS: tuple[_RuleSpec, ...] = (
    ("no-hardcoded-colors", "No Hardcoded Colors",
     "Colors must come from design tokens",
     RuleType.DESIGN_TOKEN, Severity.ERROR, "design-tokens", True,
     HardcodedColorCheck, lambda c: c.enforce_design_tokens),
    ("no-hardcoded-spacing", "No Hardcoded Spacing",
     "Spacing must use the enhanced 8pt grid",
     RuleType.DESIGN_TOKEN, Severity.ERROR, "design-tokens", True,
     HardcodedSpacingCheck, lambda c: c.enforce_enhanced_8pt_grid),
    ("no-arbitrary-values", "No Arbitrary Values",
     "Bracketed arbitrary values are never permitted",
     RuleType.STYLING, Severity.ERROR, "design-tokens", False,
     ArbitraryValueCheck, lambda c: c.enforce_design_tokens),
    ("no-raw-html", "No Raw HTML",
     "Use semantic components instead of raw HTML elements",
     RuleType.COMPONENT_USAGE, Severity.ERROR, "components", True,
     RawHtmlCheck, lambda c: c.enforce_semantic_components),
    ("approved-components-only", "Approved Components Only",
     "Only design-system components may be used",
     RuleType.COMPONENT_USAGE, Severity.WARNING, "components", False,
     ApprovedComponentsCheck, lambda c: c.enforce_semantic_components),
    ("no-inline-styles", "No Inline Styles",
     "Inline style attributes bypass design tokens",
     RuleType.STYLING, Severity.ERROR, "styling", True,
     InlineStyleCheck, lambda c: not c.allow_inline_styles),
    ("wcag-aaa-compliance", "WCAG Compliance",
     "Form controls must carry an accessible label",
     RuleType.ACCESSIBILITY, Severity.ERROR, "a11y", False,
     FormControlLabelCheck, lambda c: c.enforce_wcag_compliance),
    ("aria-labels-required", "ARIA Labels Required",
     "Interactive elements must have accessible labels",
     RuleType.ACCESSIBILITY, Severity.ERROR, "a11y", True,
     AriaLabelCheck, lambda c: c.enforce_wcag_compliance),
    ("alt-text-required", "Alt Text Required",
     "Images must have alternative text",
     RuleType.ACCESSIBILITY, Severity.ERROR, "a11y", True,
     AltTextCheck, lambda c: c.enforce_wcag_compliance),
    ("focus-management", "Focus Management",
     "Ensure proper focus indicators and focus order",
     RuleType.ACCESSIBILITY, Severity.WARNING, "a11y", False,
     FocusManagementCheck, lambda c: c.enforce_wcag_compliance),
    ("heading-hierarchy", "Heading Hierarchy",
     "Headings must follow proper hierarchy",
     RuleType.ACCESSIBILITY, Severity.WARNING, "a11y", False,
     HeadingHierarchyCheck, lambda c: c.enforce_wcag_compliance),
    ("color-contrast", "Color Contrast",
     "Flag color combinations whose contrast cannot be verified",
     RuleType.ACCESSIBILITY, Severity.WARNING, "a11y", False,
     ColorContrastCheck, lambda c: c.enforce_wcag_compliance),
    ("keyboard-navigation", "Keyboard Navigation",
     "Ensure all interactive elements are keyboard accessible",
     RuleType.ACCESSIBILITY, Severity.ERROR, "a11y", False,
     KeyboardNavigationCheck, lambda c: c.enforce_wcag_compliance),
    ("no-hardcoded-text", "No Hardcoded Text",
     "User-facing text must use localization functions",
     RuleType.LOCALIZATION, Severity.ERROR, "i18n", False,
     HardcodedTextCheck, lambda c: c.enforce_localization),
    ("translation-keys-exist", "Translation Keys Exist",
     "Translation keys must be defined for all supported languages",
     RuleType.LOCALIZATION, Severity.INFO, "i18n", False,
     TranslationKeyCheck, lambda c: c.enforce_localization),
    ("language-formatting", "Language-Specific Formatting",
     "Use locale-aware formatting for dates, numbers, and currency",
     RuleType.LOCALIZATION, Severity.WARNING, "i18n", False,
     LanguageFormattingCheck, lambda c: c.enforce_localization),
    ("plural-support", "Plural Support",
     "Use proper pluralization for different languages",
     RuleType.LOCALIZATION, Severity.INFO, "i18n", False,
     PluralSupportCheck, lambda c: c.enforce_localization),
    ("rtl-support-required", "RTL Support Required",
     "Components must support right-to-left languages",
     RuleType.LOCALIZATION, Severity.WARNING, "i18n", True,
     RtlSupportCheck, lambda c: c.enforce_rtl_support),
    ("component-size", "Component Size",
     "Large components should be split for code splitting",
     RuleType.PERFORMANCE, Severity.WARNING, "performance", False,
     ComponentSizeCheck, lambda c: c.enforce_code_splitting),
)


def build_rule_catalog(config: Configuration) -> RuleCatalog:
    """Register every rule, enabled according to the matching configuration flag."""
    catalog = RuleCatalog()
    for (rule_id, name, description, rule_type, severity, category,
         auto_fixable, evaluator, enabled_when) in RULE_DEFINITIONS:
        catalog.register(Rule(
            id=rule_id,
            name=name,
            description=description,
            type=rule_type,
            severity=severity,
            category=category,
            evaluator=evaluator(),
            enabled=enabled_when(config),
            auto_fixable=auto_fixable,
        ))
    return catalog
