"""
Unit tests for validation rule discovery.

Tests loading rules from folders and files including:
- Export shapes (rule, callable, list)
- Platform sub-folders
- Broken rule files
- Unreadable locations
"""

import logging

import pytest

from manifold_engine.exceptions import RuleLoadError
from manifold_engine.validation import GENERAL_RULES_DIR
from manifold_engine.validation.loader import (load_rule_file,
                                               load_validation_rules,
                                               load_validation_rules_sync)
from manifold_engine.validation.rules import ValidationRule


class TestLoadRuleFile:
    """Test loading a single rule file."""

    def test_callable_export(self, tmp_path, write_rule_file, finding_rule_source):
        path = write_rule_file(tmp_path, "sample.py", finding_rule_source("sample"))

        rules = load_rule_file(path)

        assert len(rules) == 1
        assert isinstance(rules[0], ValidationRule)
        assert rules[0].id == "sample"
        assert rules[0].platform == "general"

    def test_list_export(self, tmp_path, write_rule_file):
        path = write_rule_file(
            tmp_path,
            "several.py",
            """
            from manifold_engine.validation.rules import ValidationRule


            def first(content):
                return None


            rules = [first, ValidationRule(id="second", evaluate=lambda content: None)]
            """,
        )

        rules = load_rule_file(path, platform="android")

        assert [rule.id for rule in rules] == ["first", "second"]
        assert rules[0].platform == "android"
        assert rules[1].platform == "general"

    def test_missing_export(self, tmp_path, write_rule_file):
        path = write_rule_file(tmp_path, "no_export.py", "value = 1\n")

        with pytest.raises(RuleLoadError) as exc_info:
            load_rule_file(path)

        assert "Failed to load validation rule from file" in exc_info.value.message
        assert exc_info.value.location == str(path)

    def test_syntax_error(self, tmp_path, write_rule_file):
        path = write_rule_file(tmp_path, "broken.py", "def broken(:\n")

        with pytest.raises(RuleLoadError):
            load_rule_file(path)

    def test_non_callable_export(self, tmp_path, write_rule_file):
        path = write_rule_file(tmp_path, "bad_export.py", "rules = 42\n")

        with pytest.raises(RuleLoadError):
            load_rule_file(path)


class TestLoadValidationRules:
    """Test loading rule folders."""

    def test_loads_every_rule_file(self, tmp_path, write_rule_file, finding_rule_source):
        rules_dir = tmp_path / "rules"
        write_rule_file(rules_dir, "b_rule.py", finding_rule_source("b_rule"))
        write_rule_file(rules_dir, "a_rule.py", finding_rule_source("a_rule"))
        write_rule_file(rules_dir, "notes.txt", "not a rule")
        write_rule_file(rules_dir, "_helpers.py", "rules = 42\n")

        rules = load_validation_rules_sync(rules_dir)

        assert [rule.id for rule in rules] == ["a_rule", "b_rule"]

    def test_platform_folders_are_opt_in(self, tmp_path, write_rule_file, finding_rule_source):
        rules_dir = tmp_path / "rules"
        write_rule_file(rules_dir, "common.py", finding_rule_source("common"))
        write_rule_file(rules_dir / "android", "android_icons.py", finding_rule_source("android_icons"))
        write_rule_file(rules_dir / "ios", "ios_icons.py", finding_rule_source("ios_icons"))

        without_platforms = load_validation_rules_sync(rules_dir)
        with_android = load_validation_rules_sync(rules_dir, ["Android"])

        assert [rule.id for rule in without_platforms] == ["common"]
        assert sorted(rule.id for rule in with_android) == ["android_icons", "common"]
        android_rule = next(rule for rule in with_android if rule.id == "android_icons")
        assert android_rule.platform == "android"

    def test_broken_file_is_skipped(self, tmp_path, write_rule_file, finding_rule_source, caplog):
        rules_dir = tmp_path / "rules"
        write_rule_file(rules_dir, "good.py", finding_rule_source("good"))
        write_rule_file(rules_dir, "broken.py", "raise RuntimeError('boom')\n")

        with caplog.at_level(logging.ERROR, logger="manifold_engine.validation.loader"):
            rules = load_validation_rules_sync(rules_dir)

        assert [rule.id for rule in rules] == ["good"]
        assert "broken.py" in caplog.text

    def test_single_file_location(self, tmp_path, write_rule_file, finding_rule_source):
        path = write_rule_file(tmp_path, "only.py", finding_rule_source("only"))

        rules = load_validation_rules_sync(path)

        assert [rule.id for rule in rules] == ["only"]

    def test_missing_location(self, tmp_path):
        missing = tmp_path / "missing"

        with pytest.raises(RuleLoadError) as exc_info:
            load_validation_rules_sync(missing)

        assert exc_info.value.message.startswith(
            f"Failed to read validation rules from the specified location: '{missing}'."
        )

    @pytest.mark.asyncio
    async def test_async_loader(self, tmp_path, write_rule_file, finding_rule_source):
        rules_dir = tmp_path / "rules"
        write_rule_file(rules_dir, "async_loaded.py", finding_rule_source("async_loaded"))

        rules = await load_validation_rules(rules_dir)

        assert [rule.id for rule in rules] == ["async_loaded"]

    @pytest.mark.asyncio
    async def test_bundled_general_rules(self):
        rules = await load_validation_rules(GENERAL_RULES_DIR)

        assert {rule.id for rule in rules} == {
            "absolute_start_url",
            "deprecated_members",
            "https_url_required",
            "scope_suggestion",
            "short_name_required",
            "start_url_required",
            "w3c_manifest_schema",
        }
