"""Unit tests for design token rules: colors, 8pt-grid spacing and arbitrary values."""

from ui_compliance.domain.config import Configuration
from ui_compliance.domain.entities import Severity
from ui_compliance.domain.rules.design_tokens import (
    ArbitraryValueCheck,
    HardcodedColorCheck,
    HardcodedSpacingCheck,
)


class TestHardcodedColorCheck:

    def test_first_color_per_line(self, make_context) -> None:
        context = make_context(".card { color: #ff0000; background: rgb(0, 0, 0); }\n", "card.css")
        violations, fixes = HardcodedColorCheck().evaluate(context)
        assert len(violations) == 1
        assert violations[0].column == 16
        assert violations[0].context["value"] == "#ff0000"
        assert violations[0].severity is Severity.ERROR
        assert len(fixes) == 1 and not fixes[0].is_applicable

    def test_color_function_reported_whole(self, make_context) -> None:
        context = make_context("const shadow = 'hsla(0, 0%, 0%, 0.2)';\n", "theme.ts")
        violations, _ = HardcodedColorCheck().evaluate(context)
        assert violations[0].context["value"] == "hsla(0, 0%, 0%, 0.2)"

    def test_fix_uses_token_prefix(self, make_context) -> None:
        config = Configuration(token_prefix="theme")
        _, fixes = HardcodedColorCheck().evaluate(make_context("a { color: #fff; }", "a.css", config))
        assert fixes[0].fix == "theme('colors.primary.500')"

    def test_allowed_by_configuration(self, make_context) -> None:
        config = Configuration(allow_hardcoded_colors=True)
        violations, fixes = HardcodedColorCheck().evaluate(make_context("a { color: #fff; }", "a.css", config))
        assert violations == [] and fixes == []


class TestHardcodedSpacingCheck:

    def test_off_grid_spacing_class_has_one_error(self, make_context) -> None:
        context = make_context('<Box className="p-7" />')
        violations, fixes = HardcodedSpacingCheck().evaluate(context)
        assert len(violations) == 1
        assert violations[0].severity is Severity.ERROR
        assert "spacing[6]" in violations[0].suggestion
        assert violations[0].line == 1
        assert violations[0].column == 17
        assert len(fixes) == 1
        fix = fixes[0]
        assert fix.fix == "6"
        assert (fix.range.start.column, fix.range.end.column) == (18, 19)

    def test_declarations_outside_the_grid(self, make_context) -> None:
        code = ".a { padding: 13px; margin: 16px; gap: 1.1rem; }\n"
        violations, fixes = HardcodedSpacingCheck().evaluate(make_context(code, "a.css"))
        assert [v.context["value"] for v in violations] == ["13px", "1.1rem"]
        assert violations[0].suggestion == "Use spacing[3]"
        assert all(not fix.is_applicable for fix in fixes)

    def test_rem_on_grid_is_accepted(self, make_context) -> None:
        violations, _ = HardcodedSpacingCheck().evaluate(make_context(".a { margin: 1.5rem; }", "a.css"))
        assert violations == []

    def test_allowed_by_configuration(self, make_context) -> None:
        config = Configuration(allow_hardcoded_spacing=True)
        violations, _ = HardcodedSpacingCheck().evaluate(make_context('<Box className="p-7" />', config=config))
        assert violations == []


class TestArbitraryValueCheck:

    def test_every_bracketed_value_is_an_error(self, make_context) -> None:
        context = make_context('<Box className="w-[13px] bg-[#fff] h-[50%]" />')
        violations, fixes = ArbitraryValueCheck().evaluate(context)
        assert [v.context["value"] for v in violations] == ["13px", "#fff", "50%"]
        assert fixes == []

    def test_allowed_by_configuration(self, make_context) -> None:
        config = Configuration(allow_arbitrary_values=True)
        violations, _ = ArbitraryValueCheck().evaluate(make_context('<Box className="w-[13px]" />', config=config))
        assert violations == []
