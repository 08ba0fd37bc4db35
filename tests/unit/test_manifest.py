"""
Unit tests for manifest parsing.

Tests the ManifestParser including:
- Loading from files, strings and dictionaries
- Format detection, forced formats and the W3C fallback
- Automatic conversion of Chrome hosted app manifests
- Writing manifests back to disk
"""

import json
import logging

import pytest

from manifold_engine.core import ManifestInfo
from manifold_engine.core.manifest import ManifestParser
from manifold_engine.exceptions import (ManifestContentError,
                                         ManifestConversionError)


class TestManifestParserLoad:
    """Test loading manifests."""

    @pytest.mark.asyncio
    async def test_load_from_file(self, tmp_path, w3c_manifest):
        manifest_file = tmp_path / "manifest.json"
        manifest_file.write_text(json.dumps(w3c_manifest))

        info = await ManifestParser.load_from_file(manifest_file)

        assert info.format == "w3c"
        assert info.content == w3c_manifest
        assert info.generated_from == str(manifest_file)

    @pytest.mark.asyncio
    async def test_load_from_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await ManifestParser.load_from_file(tmp_path / "missing.json")

    @pytest.mark.asyncio
    async def test_load_from_string(self, edge_manifest):
        info = await ManifestParser.load_from_string(json.dumps(edge_manifest))

        assert info.format == "edgeextension"
        assert info.content == edge_manifest

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["{not json", "", "[1, 2]", "\"manifest\""])
    async def test_invalid_json(self, text):
        with pytest.raises(ManifestContentError) as exc_info:
            await ManifestParser.load_from_string(text)

        assert exc_info.value.message == "Invalid manifest format."

    @pytest.mark.asyncio
    async def test_load_from_dict_requires_object(self):
        with pytest.raises(ManifestContentError):
            await ManifestParser.load_from_dict(["name"])

    @pytest.mark.asyncio
    async def test_undetected_manifest_defaults_to_w3c(self, caplog):
        content = {"name": "Sample", "version": "1.0"}

        with caplog.at_level(logging.WARNING):
            info = await ManifestParser.load_from_dict(content)

        assert info.format == "w3c"
        assert "Unable to detect the manifest format" in caplog.text

    @pytest.mark.asyncio
    async def test_forced_format(self, w3c_manifest, caplog):
        with caplog.at_level(logging.WARNING):
            info = await ManifestParser.load_from_dict(w3c_manifest, manifest_format="EdgeExtension")

        assert info.format == "edgeextension"
        assert "Forcing to format EdgeExtension" in caplog.text

    @pytest.mark.asyncio
    async def test_chrome_manifest_converted_to_w3c(self, chrome_manifest, caplog):
        with caplog.at_level(logging.INFO):
            info = await ManifestParser.load_from_dict(chrome_manifest)

        assert info.format == "w3c"
        assert info.content["start_url"] == "https://mail.contoso.com/"
        assert info.content["name"] == "Contoso Mail"
        assert "Found a chromeos manifest" in caplog.text

    @pytest.mark.asyncio
    async def test_forced_chrome_format_is_converted(self, chrome_manifest):
        info = await ManifestParser.load_from_dict(chrome_manifest, manifest_format="chromeos")

        assert info.format == "w3c"

    @pytest.mark.asyncio
    async def test_chrome_manifest_with_non_string_urls(self):
        content = {
            "name": "a",
            "version": "1",
            "manifest_version": 2,
            "app": {"launch": {"web_url": "http://a.com/"}, "urls": [1]},
        }

        with pytest.raises(ManifestConversionError):
            await ManifestParser.load_from_dict(content)


class TestManifestParserWrite:
    """Test writing manifests."""

    @pytest.mark.asyncio
    async def test_write_to_file(self, tmp_path, w3c_info):
        output = tmp_path / "out" / "nested" / "manifest.json"

        written = await ManifestParser.write_to_file(w3c_info, output)

        assert written == output
        text = output.read_text(encoding="utf-8")
        assert text == json.dumps(w3c_info.content, indent=4)
        assert json.loads(text) == w3c_info.content

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [None, ["name"]])
    async def test_write_non_object_manifest(self, tmp_path, content):
        with pytest.raises(ManifestContentError) as exc_info:
            await ManifestParser.write_to_file(ManifestInfo(content=content), tmp_path / "m.json")

        assert exc_info.value.message == "Manifest content is empty or invalid."
        assert not (tmp_path / "m.json").exists()

    @pytest.mark.asyncio
    async def test_write_empty_object(self, tmp_path):
        path = await ManifestParser.write_to_file(ManifestInfo(content={}), tmp_path / "m.json")

        assert path.read_text(encoding="utf-8") == "{}"

    @pytest.mark.asyncio
    async def test_write_then_load(self, tmp_path, edge_manifest):
        info = ManifestInfo(content=edge_manifest, format="edgeextension")
        path = await ManifestParser.write_to_file(info, tmp_path / "manifest.json")

        loaded = await ManifestParser.load_from_file(path)

        assert loaded.format == "edgeextension"
        assert loaded.content == edge_manifest
