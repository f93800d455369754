"""Localization rules: literal text, translation keys, locale formatting and plurals."""

from ui_compliance.domain import constants
from ui_compliance.domain.analysis import find_hardcoded_text
from ui_compliance.domain.entities import Fix, Severity, Violation
from ui_compliance.domain.rules import ValidationContext, violation_at


class HardcodedTextCheck:
    """no-hardcoded-text: user-facing literals must come from a translation call."""

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        if context.ast is None or context.config.allow_hardcoded_text:
            return [], []
        violations: list[Violation] = []
        for finding in find_hardcoded_text(context.ast):
            if finding.attribute:
                violations.append(violation_at(
                    finding.span,
                    f'Hardcoded text in {finding.attribute}="{finding.text}"',
                    Severity.ERROR,
                    suggestion=f"Use {finding.attribute}={{t('translation.key')}}",
                    documentation_url=constants.LOCALIZATION_DOCS,
                    context={"text": finding.text, "attribute": finding.attribute},
                ))
            elif finding.in_expression:
                violations.append(violation_at(
                    finding.span,
                    f'Hardcoded text "{finding.text}" in expression',
                    Severity.WARNING,
                    suggestion="Consider using translation function",
                    documentation_url=constants.LOCALIZATION_DOCS,
                    context={"text": finding.text},
                ))
            else:
                violations.append(violation_at(
                    finding.span,
                    f'Hardcoded text "{finding.text}" should use translation',
                    Severity.ERROR,
                    suggestion="Use t('translation.key') or <Trans>",
                    documentation_url=constants.LOCALIZATION_DOCS,
                    context={"text": finding.text},
                ))
        return violations, []


class TranslationKeyCheck:
    """translation-keys-exist: list each key once so its presence in every locale gets verified."""

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        if context.ast is None:
            return [], []
        languages = ", ".join(context.config.supported_languages)
        seen: set[str] = set()
        violations: list[Violation] = []
        for call in context.ast.calls:
            if not (constants.is_translation_callee(call.callee) or call.method == "t"):
                continue
            key = call.first_string_argument
            if key is None or key in seen:
                continue
            seen.add(key)
            violations.append(violation_at(
                call.span,
                f'Verify translation key "{key}" exists for all languages',
                Severity.INFO,
                suggestion=f"Ensure key exists in: {languages}",
                documentation_url=constants.LOCALIZATION_DOCS + "#translation-files",
                context={"key": key},
            ))
        return violations, []


class LanguageFormattingCheck:
    """language-formatting: dates, numbers and currency must be formatted per locale."""

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        if context.ast is None:
            return [], []
        violations: list[Violation] = []
        for call in context.ast.calls:
            if call.method in constants.LOCALE_FORMAT_METHODS:
                violations.append(violation_at(
                    call.span,
                    "Use locale-aware number formatting",
                    Severity.WARNING,
                    suggestion="Use Intl.NumberFormat for locale-specific formatting",
                    documentation_url=constants.LOCALIZATION_DOCS + "#number-formatting",
                    context={"method": call.method},
                ))
            elif (
                call.method in constants.DATE_STRING_METHODS
                and (call.receiver or "").replace(" ", "").startswith("newDate(")
            ):
                violations.append(violation_at(
                    call.span,
                    "Use locale-aware date formatting",
                    Severity.WARNING,
                    suggestion="Use Intl.DateTimeFormat or date-fns with locale",
                    documentation_url=constants.LOCALIZATION_DOCS + "#date-formatting",
                    context={"method": call.method},
                ))
        for literal in context.ast.strings:
            if constants.CURRENCY_SYMBOLS.search(literal.value):
                violations.append(violation_at(
                    literal.span,
                    f'Hardcoded currency symbol "{literal.value}" detected',
                    Severity.WARNING,
                    suggestion="Use Intl.NumberFormat with style: 'currency'",
                    documentation_url=constants.LOCALIZATION_DOCS + "#currency",
                ))
        return violations, []


class PluralSupportCheck:
    """plural-support: count === 1 ternaries and counted nouns in template strings."""

    def evaluate(self, context: ValidationContext) -> tuple[list[Violation], list[Fix]]:
        if context.ast is None:
            return [], []
        violations: list[Violation] = []
        for ternary in context.ast.plural_ternaries:
            if not (ternary.singular and ternary.plural and constants.contains_words(ternary.singular)):
                continue
            violations.append(violation_at(
                ternary.span,
                f'Simple plural pattern "{ternary.singular}/{ternary.plural}" may not work for all languages',
                Severity.INFO,
                suggestion="Use i18n plural support with count parameter",
                documentation_url=constants.LOCALIZATION_DOCS + "#pluralization",
            ))
        for template in context.ast.templates:
            if any(constants.COUNTED_NOUN.search(part) for part in template.parts):
                violations.append(violation_at(
                    template.span,
                    "Template literal with count may need plural support",
                    Severity.INFO,
                    suggestion="Use i18n plural functions for count-based text",
                    documentation_url=constants.LOCALIZATION_DOCS + "#pluralization",
                ))
        return violations, []
