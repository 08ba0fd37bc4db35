"""
Unit tests for platform registration and loading.
"""

import json
import logging

import pytest

from manifold_engine.exceptions import PlatformError
from manifold_engine.platforms import (PlatformBase, PlatformConfigEntry,
                                       PlatformRegistry)
from manifold_engine.validation.rules import RuleRegistry, ValidationRule


class RecordingPlatform(PlatformBase):
    """Platform registered in code."""

    instances = []

    def __init__(self, package_name, platforms):
        super().__init__("recording", "Recording", package_name, platforms=platforms)
        RecordingPlatform.instances.append(self)


class TestPlatformBase:
    """Test rule lookup of a platform."""

    @pytest.mark.asyncio
    async def test_rules_from_registry(self):
        registry = RuleRegistry()
        registry.register("web", ValidationRule(id="web.scope", evaluate=lambda content: None))
        platform = PlatformBase("web", "Web", "manifold_web", rule_registry=registry)

        rules = await platform.get_validation_rules(["web"])

        assert [rule.id for rule in rules] == ["web.scope"]

    @pytest.mark.asyncio
    async def test_rules_from_folder(self, tmp_path, write_rule_file, finding_rule_source):
        write_rule_file(tmp_path / "validation_rules", "web_rule.py", finding_rule_source("web_rule"))
        write_rule_file(
            tmp_path / "validation_rules" / "android",
            "android_rule.py",
            finding_rule_source("android_rule"),
        )
        platform = PlatformBase("web", "Web", "manifold_web", base_dir=tmp_path)

        rules = await platform.get_validation_rules(["android"])

        assert sorted(rule.id for rule in rules) == ["android_rule", "web_rule"]

    @pytest.mark.asyncio
    async def test_rules_from_single_file(self, tmp_path, write_rule_file, finding_rule_source):
        write_rule_file(tmp_path, "validation_rules.py", finding_rule_source("single"))
        platform = PlatformBase("web", "Web", "manifold_web", base_dir=tmp_path)

        rules = await platform.get_validation_rules([])

        assert [rule.id for rule in rules] == ["single"]

    @pytest.mark.asyncio
    async def test_missing_rules_warns(self, tmp_path, caplog):
        platform = PlatformBase("web", "Web", "manifold_web", base_dir=tmp_path)

        with caplog.at_level(logging.WARNING):
            rules = await platform.get_validation_rules([])

        assert rules == []
        assert "Failed to retrieve the validation rules for platform: web" in caplog.text

    @pytest.mark.asyncio
    async def test_missing_base_dir_warns(self, caplog):
        platform = PlatformBase("web", "Web", "manifold_web")

        with caplog.at_level(logging.WARNING):
            assert await platform.get_validation_rules([]) == []

        assert "Missing base directory" in caplog.text


class TestPlatformRegistryConfiguration:
    """Test platform configuration."""

    def test_configure_from_mapping(self):
        registry = PlatformRegistry({"Android": {"module": "manifold_android", "source": "pkg"}})

        assert registry.list_platforms() == ["android"]
        assert registry.get_config("android") == PlatformConfigEntry(
            module="manifold_android", source="pkg"
        )

    def test_configure_from_file(self, tmp_path):
        config_file = tmp_path / "platforms.json"
        config_file.write_text(json.dumps({"ios": {"module": "manifold_ios"}}))

        registry = PlatformRegistry(config_file)

        assert registry.is_registered("iOS")
        assert registry.get_config("ios").source == ""

    def test_missing_config_file(self, tmp_path):
        with pytest.raises(PlatformError) as exc_info:
            PlatformRegistry(str(tmp_path / "missing.json"))

        assert "Platform configuration file is missing or invalid" in exc_info.value.message

    def test_invalid_entry(self):
        with pytest.raises(PlatformError) as exc_info:
            PlatformRegistry({"android": {"source": "pkg"}})

        assert exc_info.value.platform_id == "android"

    def test_register_and_unregister(self):
        registry = PlatformRegistry()
        registry.register("Recording", RecordingPlatform)

        assert registry.list_platforms() == ["recording"]

        registry.unregister("recording")
        assert registry.list_platforms() == []

        with pytest.raises(PlatformError):
            registry.unregister("recording")


class TestLoadPlatforms:
    """Test loading platform modules."""

    @pytest.mark.asyncio
    async def test_load_in_code_platform(self):
        RecordingPlatform.instances.clear()
        registry = PlatformRegistry()
        registry.register("recording", RecordingPlatform)

        platforms = await registry.load_platforms(["recording"])

        assert len(platforms) == 1
        assert platforms[0].platforms == ["recording"]

    @pytest.mark.asyncio
    async def test_module_shared_by_platform_ids(self, platform_module):
        registry = PlatformRegistry(
            {
                "android": {"module": platform_module},
                "ios": {"module": platform_module},
            }
        )

        platforms = await registry.load_platforms(["android", "ios"])

        assert len(platforms) == 1
        assert platforms[0].id == "test"
        assert platforms[0].package_name == platform_module
        assert platforms[0].platforms == ["android", "ios"]

    @pytest.mark.asyncio
    async def test_unregistered_platform_skipped(self, platform_module, caplog):
        registry = PlatformRegistry({"android": {"module": platform_module}})

        with caplog.at_level(logging.ERROR):
            platforms = await registry.load_platforms(["android", "windows"])

        assert len(platforms) == 1
        assert "Platform 'windows' is not registered!" in caplog.text

    @pytest.mark.asyncio
    async def test_import_failure_skipped(self, caplog):
        registry = PlatformRegistry({"ghost": {"module": "manifold_missing_platform_module"}})

        with caplog.at_level(logging.ERROR):
            platforms = await registry.load_platforms(["ghost"])

        assert platforms == []
        assert "manifold_missing_platform_module" in caplog.text

    @pytest.mark.asyncio
    async def test_module_without_platform_class(self, caplog):
        registry = PlatformRegistry({"json": {"module": "json"}})

        with caplog.at_level(logging.ERROR):
            platforms = await registry.load_platforms(["json"])

        assert platforms == []
        assert "does not define 'Platform'" in caplog.text

    @pytest.mark.asyncio
    async def test_loaded_platform_provides_rules(self, platform_module):
        registry = PlatformRegistry({"test": {"module": platform_module}})

        platforms = await registry.load_platforms(["test"])
        rules = await platforms[0].get_validation_rules(["test"])

        assert [rule.id for rule in rules] == ["test_rule"]

    @pytest.mark.asyncio
    async def test_no_platforms(self):
        assert await PlatformRegistry().load_platforms([]) == []
