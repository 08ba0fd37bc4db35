"""
Unit tests for the rule model and rule registry.
"""

import pytest

from manifold_engine.core.types import (Finding, ValidationCode,
                                        ValidationLevel)
from manifold_engine.validation.rules import (RuleRegistry, ValidationRule,
                                              as_rule, normalize_result)

FINDING_DICT = {
    "description": "A short name for the application is required",
    "platform": "general",
    "level": "error",
    "member": "short_name",
    "code": "required-value",
}


class TestFinding:
    """Test the finding model."""

    def test_from_dict_coerces_enums(self):
        finding = Finding.from_dict(FINDING_DICT)

        assert finding.level is ValidationLevel.ERROR
        assert finding.code is ValidationCode.REQUIRED_VALUE
        assert finding.is_error

    def test_to_dict_round_trip(self):
        assert Finding.from_dict(FINDING_DICT).to_dict() == FINDING_DICT

    def test_to_dict_includes_data_when_set(self):
        finding = Finding.from_dict({**FINDING_DICT, "data": ["44x44"]})
        assert finding.to_dict()["data"] == ["44x44"]

    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError):
            Finding.from_dict({**FINDING_DICT, "level": "fatal"})

    def test_missing_key_rejected(self):
        with pytest.raises(KeyError):
            Finding.from_dict({"description": "x"})


class TestAsRule:
    """Test adapting rule exports."""

    def test_callable_becomes_rule(self):
        def my_rule(content):
            return None

        rule = as_rule(my_rule, platform="ios")

        assert rule.id == "my_rule"
        assert rule.platform == "ios"
        assert rule.evaluate is my_rule

    def test_rule_is_returned_unchanged(self):
        rule = ValidationRule(id="x", evaluate=lambda content: None)
        assert as_rule(rule) is rule

    def test_non_callable_rejected(self):
        with pytest.raises(TypeError):
            as_rule("not a rule")


class TestNormalizeResult:
    """Test rule result normalization."""

    def test_none(self):
        assert normalize_result(None) == []

    def test_single_dict(self):
        assert normalize_result(FINDING_DICT) == [Finding.from_dict(FINDING_DICT)]

    def test_mixed_list(self):
        finding = Finding.from_dict(FINDING_DICT)
        assert normalize_result([finding, None, FINDING_DICT]) == [finding, finding]

    def test_garbage_rejected(self):
        with pytest.raises(TypeError):
            normalize_result(42)
        with pytest.raises(TypeError):
            normalize_result(["not a finding"])


class TestRuleRegistry:
    """Test the static rule registry."""

    def test_register_and_lookup(self):
        registry = RuleRegistry()

        @registry.rule("Android", "android.icons")
        def android_icons(content):
            return None

        registry.register("ios", lambda content: None)

        assert registry.has_platform("android")
        assert registry.platforms() == ["android", "ios"]
        rules = registry.rules_for(["ANDROID"])
        assert [rule.id for rule in rules] == ["android.icons"]
        assert rules[0].evaluate is android_icons

    def test_registration_order_kept(self):
        registry = RuleRegistry()
        for name in ("c", "a", "b"):
            registry.register("web", ValidationRule(id=name, evaluate=lambda content: None))

        assert [rule.id for rule in registry.rules_for(["web"])] == ["c", "a", "b"]

    def test_unknown_platform_has_no_rules(self):
        registry = RuleRegistry()
        assert registry.rules_for(["windows"]) == []
        assert not registry.has_platform("windows")

    def test_clear(self):
        registry = RuleRegistry()
        registry.register("web", lambda content: None)
        registry.clear()
        assert registry.platforms() == []
