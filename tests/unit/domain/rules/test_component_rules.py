"""Unit tests for component usage rules."""

import unittest

import pytest

from ui_compliance.domain.config import Configuration
from ui_compliance.domain.entities import FileKind, Severity
from ui_compliance.domain.rules import ValidationContext
from ui_compliance.domain.rules.components import (
    ApprovedComponentsCheck,
    InlineStyleCheck,
    RawHtmlCheck,
)
from ui_compliance.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway
from ui_compliance.use_cases.apply_fixes import TextFixApplier


class TestRawHtmlCheck:

    def test_div_suggests_box(self, make_context) -> None:
        violations, fixes = RawHtmlCheck().evaluate(make_context("<div>x</div>"))
        assert len(violations) == 1
        violation = violations[0]
        assert violation.severity is Severity.ERROR
        assert "Box" in violation.suggestion
        assert violation.context["replacement"] == "Box"
        assert (violation.line, violation.column) == (1, 1)
        assert len(fixes) == 2

    def test_fixes_rename_opening_and_closing_tags(self, make_context) -> None:
        code = "<Stack>\n  <span>x</span>\n  <h2>y</h2>\n</Stack>"
        _, fixes = RawHtmlCheck().evaluate(make_context(code))
        fixed = TextFixApplier().apply(code, fixes).content
        assert fixed == "<Stack>\n  <Text>x</Text>\n  <Heading>y</Heading>\n</Stack>"

    def test_self_closing_element_has_one_fix(self, make_context) -> None:
        _, fixes = RawHtmlCheck().evaluate(make_context('<img src="a.png" />'))
        assert [fix.fix for fix in fixes] == ["Image"]

    def test_unmapped_tag_falls_back_to_box(self, make_context) -> None:
        violations, _ = RawHtmlCheck().evaluate(make_context("<canvas />"))
        assert violations[0].context["replacement"] == "Box"

    def test_allowed_by_configuration(self, make_context) -> None:
        config = Configuration(allow_raw_html=True)
        assert RawHtmlCheck().evaluate(make_context("<div>x</div>", config=config)) == ([], [])

    def test_stylesheets_have_no_markup(self, make_context) -> None:
        assert RawHtmlCheck().evaluate(make_context("div { color: red; }", "a.css")) == ([], [])


class TestApprovedComponentsCheck:

    def test_unknown_component_is_a_warning(self, make_context) -> None:
        violations, _ = ApprovedComponentsCheck().evaluate(make_context("<Box><FancyCard /></Box>"))
        assert [v.context["component"] for v in violations] == ["FancyCard"]
        assert violations[0].severity is Severity.WARNING

    def test_extra_approved_components_from_configuration(self, make_context) -> None:
        config = Configuration(approved_components=frozenset({"FancyCard"}))
        violations, _ = ApprovedComponentsCheck().evaluate(make_context("<FancyCard />", config=config))
        assert violations == []

    @pytest.mark.parametrize("tag", ["Box", "Stack", "Button", "Tabs.List"])
    def test_catalog_components_pass(self, make_context, tag: str) -> None:
        violations, _ = ApprovedComponentsCheck().evaluate(make_context(f"<{tag} />"))
        assert violations == []

    def test_host_elements_are_not_components(self, make_context) -> None:
        violations, _ = ApprovedComponentsCheck().evaluate(make_context("<section />"))
        assert violations == []


class TestInlineStyleCheck(unittest.TestCase):

    def setUp(self) -> None:
        parser = TreeSitterGateway()

        def make(code: str, config: Configuration | None = None) -> ValidationContext:
            return ValidationContext(
                code=code,
                file_path="Card.tsx",
                file_kind=FileKind.MARKUP_COMPONENT,
                ast=parser.parse(code, FileKind.MARKUP_COMPONENT, "Card.tsx"),
                config=config or Configuration(),
            )

        self.make = make
        self.check = InlineStyleCheck()

    def test_style_attribute_is_flagged(self) -> None:
        violations, fixes = self.check.evaluate(self.make('<Box style={{ color: "red" }} />'))
        self.assertEqual(len(violations), 1)
        self.assertEqual(violations[0].column, 6)
        self.assertEqual(len(fixes), 1)

    def test_fix_removes_attribute_and_leading_space(self) -> None:
        code = '<Box padding="4" style={{ color: "red" }} />'
        _, fixes = self.check.evaluate(self.make(code))
        fixed = TextFixApplier().apply(code, fixes).content
        self.assertEqual(fixed, '<Box padding="4" />')

    def test_revalidating_fixed_code_is_clean(self) -> None:
        code = '<Box style={{ color: "red" }}>\n  <Text style="margin: 0">x</Text>\n</Box>'
        _, fixes = self.check.evaluate(self.make(code))
        fixed = TextFixApplier().apply(code, fixes).content
        violations, _ = self.check.evaluate(self.make(fixed))
        self.assertEqual(violations, [])

    def test_allowed_by_configuration(self) -> None:
        config = Configuration(allow_inline_styles=True)
        self.assertEqual(self.check.evaluate(self.make('<Box style={{}} />', config)), ([], []))
