"""Unit tests for the WCAG accessibility rules."""

import pytest

from ui_compliance.domain.config import Configuration
from ui_compliance.domain.entities import Severity
from ui_compliance.domain.rules.accessibility import (
    AltTextCheck,
    AriaLabelCheck,
    ColorContrastCheck,
    FocusManagementCheck,
    FormControlLabelCheck,
    HeadingHierarchyCheck,
    KeyboardNavigationCheck,
)
from ui_compliance.use_cases.apply_fixes import TextFixApplier


def _messages(violations) -> list[str]:
    return [violation.message for violation in violations]


class TestAltTextCheck:

    def test_image_without_alt_is_critical(self, make_context) -> None:
        violations, fixes = AltTextCheck().evaluate(make_context('<img src="a.png" />'))
        assert len(violations) == 1
        assert violations[0].context["wcag"] == "1.1.1"
        assert violations[0].context["impact"] == "critical"
        assert len(fixes) == 1

    def test_fix_inserts_empty_alt_after_tag_name(self, make_context) -> None:
        code = '<img src="a.png" />'
        _, fixes = AltTextCheck().evaluate(make_context(code))
        assert TextFixApplier().apply(code, fixes).content == '<img alt="" src="a.png" />'

    @pytest.mark.parametrize(
        "code",
        [
            '<img alt="" src="a.png" />',
            '<Image alt="Logo" />',
            '<img aria-label="Chart" />',
            '<Box role="img" aria-labelledby="caption" />',
        ],
    )
    def test_labelled_images_pass(self, make_context, code: str) -> None:
        assert AltTextCheck().evaluate(make_context(code)) == ([], [])


class TestAriaLabelCheck:

    def test_icon_button_needs_label(self, make_context) -> None:
        code = "<button onClick={go} />"
        violations, fixes = AriaLabelCheck().evaluate(make_context(code))
        assert _messages(violations) == ["Interactive element <button> missing accessible label"]
        assert violations[0].context["wcag"] == "4.1.2"
        fixed = TextFixApplier().apply(code, fixes).content
        assert fixed == '<button aria-label="button action" onClick={go} />'

    def test_text_content_labels_buttons_and_links(self, make_context) -> None:
        code = '<Box><button>Save</button><a href="/">Home</a></Box>'
        assert AriaLabelCheck().evaluate(make_context(code)) == ([], [])

    def test_interactive_role_needs_label(self, make_context) -> None:
        violations, _ = AriaLabelCheck().evaluate(make_context('<Box role="button" />'))
        assert violations[0].context["element"] == "Box"


class TestFormControlLabelCheck:

    def test_unlabelled_input_is_an_error(self, make_context) -> None:
        violations, fixes = FormControlLabelCheck().evaluate(make_context('<input type="text" />'))
        assert len(violations) == 1
        assert violations[0].severity is Severity.ERROR
        assert violations[0].context["wcag"] == "3.3.2"
        assert fixes == []

    def test_labelled_controls_pass(self, make_context) -> None:
        code = '<Box><input aria-label="Name" /><select aria-labelledby="l" /></Box>'
        violations, _ = FormControlLabelCheck().evaluate(make_context(code))
        assert violations == []


class TestFocusManagementCheck:

    def test_positive_tab_index_is_a_warning(self, make_context) -> None:
        violations, _ = FocusManagementCheck().evaluate(make_context("<Box tabIndex={3} />"))
        assert _messages(violations) == ["Avoid positive tabIndex values"]
        assert violations[0].severity is Severity.WARNING

    def test_zero_and_negative_tab_index_pass(self, make_context) -> None:
        code = '<Box><Box tabIndex={0} /><Box tabIndex="-1" /></Box>'
        assert FocusManagementCheck().evaluate(make_context(code)) == ([], [])

    def test_modal_without_focus_props(self, make_context) -> None:
        violations, _ = FocusManagementCheck().evaluate(make_context("<Modal isOpen />"))
        assert _messages(violations) == ["Modal should manage focus properly"]

    def test_modal_with_focus_props_passes(self, make_context) -> None:
        code = "<Dialog returnFocusOnClose initialFocusRef={ref} />"
        assert FocusManagementCheck().evaluate(make_context(code)) == ([], [])

    def test_removed_outline_is_an_error(self, make_context) -> None:
        violations, _ = FocusManagementCheck().evaluate(make_context('<Box className="outline-none" />'))
        assert violations[0].severity is Severity.ERROR

    def test_outline_with_focus_ring_passes(self, make_context) -> None:
        code = '<Box className="outline-none focus:ring-2" />'
        assert FocusManagementCheck().evaluate(make_context(code)) == ([], [])


class TestHeadingHierarchyCheck:

    def test_skipped_level(self, make_context) -> None:
        code = "<Box>\n  <h1>A</h1>\n  <h3>B</h3>\n</Box>"
        violations, _ = HeadingHierarchyCheck().evaluate(make_context(code))
        assert _messages(violations) == ["Heading level skipped: h1 to h3"]
        assert violations[0].suggestion == "Use h2 instead"
        assert violations[0].line == 3

    def test_missing_h1_reported_at_top_of_file(self, make_context) -> None:
        code = "<Box>\n  <h2>A</h2>\n</Box>"
        violations, _ = HeadingHierarchyCheck().evaluate(make_context(code))
        assert _messages(violations) == ["Page missing h1 heading"]
        assert (violations[0].line, violations[0].column) == (1, 1)

    def test_heading_component_levels(self, make_context) -> None:
        code = "<Box><Heading level={1}>A</Heading><h2>B</h2><Heading level={3}>C</Heading></Box>"
        assert HeadingHierarchyCheck().evaluate(make_context(code)) == ([], [])

    def test_no_headings_no_findings(self, make_context) -> None:
        assert HeadingHierarchyCheck().evaluate(make_context("<Box />")) == ([], [])


class TestColorContrastCheck:

    def test_low_contrast_class_pair(self, make_context) -> None:
        code = '<Text className="text-gray-400 bg-gray-100">x</Text>'
        violations, _ = ColorContrastCheck().evaluate(make_context(code))
        assert _messages(violations) == ["Gray on gray may have insufficient contrast"]
        assert violations[0].context["required_ratio"] == Configuration().contrast_ratio

    def test_inline_color_and_background(self, make_context) -> None:
        code = '<Box style={{ color: "red", backgroundColor: "white" }} />'
        violations, _ = ColorContrastCheck().evaluate(make_context(code))
        assert _messages(violations) == ["Inline color styles detected - cannot verify contrast"]

    def test_inline_color_alone_passes(self, make_context) -> None:
        code = '<Box style={{ color: "red" }} />'
        assert ColorContrastCheck().evaluate(make_context(code)) == ([], [])


class TestKeyboardNavigationCheck:

    def test_clickable_box_without_keyboard_support(self, make_context) -> None:
        violations, _ = KeyboardNavigationCheck().evaluate(make_context("<Box onClick={go} />"))
        assert _messages(violations) == [
            "Element with onClick should also handle keyboard events",
            "Clickable element needs proper role and tabIndex",
        ]
        assert all(v.severity is Severity.ERROR for v in violations)

    def test_fully_operable_box_passes(self, make_context) -> None:
        code = '<Box onClick={go} onKeyDown={key} role="button" tabIndex={0} />'
        assert KeyboardNavigationCheck().evaluate(make_context(code)) == ([], [])

    def test_native_controls_are_operable(self, make_context) -> None:
        code = "<Stack><Button onClick={go} /><button onClick={go}>Go</button></Stack>"
        assert KeyboardNavigationCheck().evaluate(make_context(code)) == ([], [])
