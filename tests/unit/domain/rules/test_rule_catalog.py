"""Unit tests for the rule catalog and the component-size rule."""

import pytest

from ui_compliance.domain.config import Configuration
from ui_compliance.domain.entities import RuleType, Severity
from ui_compliance.domain.rules import Rule
from ui_compliance.domain.rules.catalog import RULE_DEFINITIONS, RuleCatalog, build_rule_catalog
from ui_compliance.domain.rules.performance import ComponentSizeCheck


class _NoFindings:
    def evaluate(self, context):
        return [], []


def _rule(rule_id: str) -> Rule:
    return Rule(
        id=rule_id,
        name=rule_id.title(),
        description="test rule",
        type=RuleType.STYLING,
        severity=Severity.INFO,
        category="styling",
        evaluator=_NoFindings(),
    )


class TestRuleCatalog:

    def test_register_get_and_unregister(self) -> None:
        catalog = RuleCatalog()
        rule = _rule("custom")
        catalog.register(rule)
        assert catalog.get("custom") is rule
        assert "custom" in catalog
        assert catalog.unregister("custom") is rule
        assert catalog.get("custom") is None
        assert catalog.unregister("custom") is None

    def test_duplicate_ids_are_rejected(self) -> None:
        catalog = RuleCatalog()
        catalog.register(_rule("custom"))
        with pytest.raises(ValueError, match="already registered"):
            catalog.register(_rule("custom"))

    def test_toggling_one_rule_leaves_others_alone(self) -> None:
        catalog = RuleCatalog()
        catalog.register(_rule("a"))
        catalog.register(_rule("b"))
        catalog.set_enabled("a", False)
        catalog.set_enabled("unknown", False)
        assert [rule.id for rule in catalog.enabled()] == ["b"]
        assert [rule.id for rule in catalog.all()] == ["a", "b"]


class TestBuildRuleCatalog:

    def test_nineteen_rules_in_registration_order(self) -> None:
        catalog = build_rule_catalog(Configuration())
        assert len(catalog) == 19
        assert [rule.id for rule in catalog.all()] == [definition[0] for definition in RULE_DEFINITIONS]
        assert catalog.all()[0].id == "no-hardcoded-colors"
        assert catalog.all()[-1].id == "component-size"

    def test_strict_enables_everything(self) -> None:
        catalog = build_rule_catalog(Configuration.preset("strict"))
        assert all(rule.enabled for rule in catalog.all())

    def test_development_disables_localization_and_size(self) -> None:
        catalog = build_rule_catalog(Configuration.preset("development"))
        disabled = {rule.id for rule in catalog.all() if not rule.enabled}
        assert disabled == {
            "no-hardcoded-text",
            "translation-keys-exist",
            "language-formatting",
            "plural-support",
            "component-size",
        }

    def test_migration_keeps_core_rules(self) -> None:
        catalog = build_rule_catalog(Configuration.preset("migration"))
        enabled = {rule.id for rule in catalog.enabled()}
        assert "no-hardcoded-colors" in enabled
        assert "alt-text-required" in enabled
        assert "no-hardcoded-spacing" not in enabled
        assert "no-inline-styles" not in enabled
        assert "rtl-support-required" not in enabled

    def test_catalogs_are_independent(self) -> None:
        first = build_rule_catalog(Configuration())
        second = build_rule_catalog(Configuration())
        first.set_enabled("no-raw-html", False)
        assert second.get("no-raw-html").enabled

    def test_rule_to_dict(self) -> None:
        data = build_rule_catalog(Configuration()).get("no-raw-html").to_dict()
        assert data == {
            "id": "no-raw-html",
            "name": "No Raw HTML",
            "description": "Use semantic components instead of raw HTML elements",
            "type": "component-usage",
            "severity": "error",
            "category": "components",
            "enabled": True,
            "auto_fixable": True,
        }


class TestComponentSizeCheck:

    def test_oversized_component(self, make_context) -> None:
        config = Configuration(max_component_size=3)
        code = "<Box>\n<Text />\n<Text />\n</Box>\n"
        violations, _ = ComponentSizeCheck().evaluate(make_context(code, config=config))
        assert [v.message for v in violations] == ["Component file has 4 lines (limit 3)"]
        assert violations[0].line == 4

    def test_trailing_newline_is_not_a_line(self, make_context) -> None:
        config = Configuration(max_component_size=3)
        code = "<Box>\n<Text />\n</Box>\n"
        assert ComponentSizeCheck().evaluate(make_context(code, config=config)) == ([], [])

    def test_scripts_are_not_components(self, make_context) -> None:
        config = Configuration(max_component_size=1)
        assert ComponentSizeCheck().evaluate(make_context("a;\nb;\nc;\n", "util.ts", config)) == ([], [])
