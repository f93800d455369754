"""Unit tests for the localization rules."""

import pytest

from ui_compliance.domain.config import Configuration
from ui_compliance.domain.entities import Severity
from ui_compliance.domain.rules.localization import (
    HardcodedTextCheck,
    LanguageFormattingCheck,
    PluralSupportCheck,
    TranslationKeyCheck,
)


class TestHardcodedTextCheck:

    def test_text_child_is_an_error(self, make_context) -> None:
        violations, _ = HardcodedTextCheck().evaluate(make_context("<Text>Hello world</Text>"))
        assert [v.message for v in violations] == ['Hardcoded text "Hello world" should use translation']
        assert violations[0].severity is Severity.ERROR
        assert violations[0].column == 7

    def test_attribute_text_is_an_error(self, make_context) -> None:
        violations, _ = HardcodedTextCheck().evaluate(make_context('<Input placeholder="Search" />'))
        assert violations[0].message == 'Hardcoded text in placeholder="Search"'
        assert violations[0].suggestion == "Use placeholder={t('translation.key')}"

    def test_string_expression_is_a_warning(self, make_context) -> None:
        violations, _ = HardcodedTextCheck().evaluate(make_context('<Text>{"Inline"}</Text>'))
        assert violations[0].severity is Severity.WARNING

    @pytest.mark.parametrize(
        "code",
        [
            '<Text>{t("greeting")}</Text>',
            '<Input placeholder={t("search")} />',
            "<Text>42</Text>",
            "<Text>...</Text>",
        ],
    )
    def test_translated_or_symbolic_text_passes(self, make_context, code: str) -> None:
        assert HardcodedTextCheck().evaluate(make_context(code)) == ([], [])

    def test_allowed_by_configuration(self, make_context) -> None:
        config = Configuration(allow_hardcoded_text=True)
        assert HardcodedTextCheck().evaluate(make_context("<Text>Hi there</Text>", config=config)) == ([], [])


class TestTranslationKeyCheck:

    def test_each_key_listed_once(self, make_context) -> None:
        code = 'const a = t("home.title");\nconst b = t("home.title");\nconst c = i18n.t("home.body");\n'
        violations, _ = TranslationKeyCheck().evaluate(make_context(code, "labels.ts"))
        assert [v.context["key"] for v in violations] == ["home.title", "home.body"]
        assert all(v.severity is Severity.INFO for v in violations)
        assert violations[1].line == 3

    def test_suggestion_names_supported_languages(self, make_context) -> None:
        config = Configuration(supported_languages=("en", "nb"))
        violations, _ = TranslationKeyCheck().evaluate(make_context('t("k")', "a.ts", config))
        assert violations[0].suggestion == "Ensure key exists in: en, nb"

    def test_dynamic_keys_are_skipped(self, make_context) -> None:
        assert TranslationKeyCheck().evaluate(make_context("t(key)", "a.ts")) == ([], [])


class TestLanguageFormattingCheck:

    def test_number_formatting(self, make_context) -> None:
        violations, _ = LanguageFormattingCheck().evaluate(make_context("const s = price.toFixed(2);", "a.ts"))
        assert [v.message for v in violations] == ["Use locale-aware number formatting"]

    def test_date_formatting(self, make_context) -> None:
        violations, _ = LanguageFormattingCheck().evaluate(make_context("const s = new Date().toDateString();", "a.ts"))
        assert [v.message for v in violations] == ["Use locale-aware date formatting"]

    def test_to_string_on_other_receivers_passes(self, make_context) -> None:
        assert LanguageFormattingCheck().evaluate(make_context("const s = id.toString();", "a.ts")) == ([], [])

    def test_currency_symbol_in_string(self, make_context) -> None:
        violations, _ = LanguageFormattingCheck().evaluate(make_context('const label = "$5";', "a.ts"))
        assert violations[0].message == 'Hardcoded currency symbol "$5" detected'


class TestPluralSupportCheck:

    def test_count_ternary(self, make_context) -> None:
        code = 'const label = count === 1 ? "item" : "items";'
        violations, _ = PluralSupportCheck().evaluate(make_context(code, "a.ts"))
        assert [v.message for v in violations] == [
            'Simple plural pattern "item/items" may not work for all languages'
        ]

    def test_other_ternaries_pass(self, make_context) -> None:
        code = 'const label = count === 2 ? "pair" : "items";'
        assert PluralSupportCheck().evaluate(make_context(code, "a.ts")) == ([], [])

    def test_counted_noun_in_template(self, make_context) -> None:
        violations, _ = PluralSupportCheck().evaluate(make_context("const s = `Showing 3 results`;", "a.ts"))
        assert [v.message for v in violations] == ["Template literal with count may need plural support"]
