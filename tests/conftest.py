"""
Pytest configuration and shared fixtures for MANIFOLD_ENGINE tests.

This module provides:
- Sample manifests in every registered format
- Rule file and platform module factories
- Metrics isolation between tests
"""

import copy
import logging
import sys
import textwrap
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

from manifold_engine.constants import BASE_MANIFEST_FORMAT
from manifold_engine.core.types import ManifestInfo
from manifold_engine.observability import (clear_correlation_id,
                                           clear_manifest_context,
                                           get_metrics_collector)

# ============================================================================
# SAMPLE MANIFESTS
# ============================================================================

W3C_MANIFEST: Dict[str, Any] = {
    "name": "Contoso Mail",
    "short_name": "Mail",
    "start_url": "https://mail.contoso.com/",
    "display": "standalone",
    "orientation": "any",
    "dir": "ltr",
    "lang": "en-us",
    "theme_color": "#2196f3",
    "icons": [
        {"src": "icon_64.png", "sizes": "64x64", "type": "image/png"},
        {"src": "icon_128.png", "sizes": "128x128", "type": "image/png"},
    ],
    "mjs_extended_scope": ["https://mail.contoso.com/*"],
}

CHROME_MANIFEST: Dict[str, Any] = {
    "name": "Contoso Mail",
    "description": "Read your mail",
    "version": "0.2",
    "manifest_version": 2,
    "app": {
        "urls": ["https://mail.contoso.com/", "https://mail.contoso.com/"],
        "launch": {"web_url": "https://mail.contoso.com/"},
    },
    "icons": {"64": "icon_64.png", "128": "icon_128.png"},
    "permissions": ["notifications", "geolocation"],
}

EDGE_EXTENSION_MANIFEST: Dict[str, Any] = {
    "name": "Contoso Clipper",
    "author": "Contoso",
    "version": "1.0.0",
    "manifest_version": 2,
    "description": "Clip pages",
    "default_locale": "en",
    "homepage_url": "https://contoso.com/clipper",
    "icons": {"48": "icon_48.png"},
    "browser_action": {"default_popup": "popup.html"},
}


@pytest.fixture
def w3c_manifest() -> Dict[str, Any]:
    """Valid W3C manifest (deep copy, safe to mutate)."""
    return copy.deepcopy(W3C_MANIFEST)


@pytest.fixture
def chrome_manifest() -> Dict[str, Any]:
    """Chrome hosted app manifest."""
    return copy.deepcopy(CHROME_MANIFEST)


@pytest.fixture
def edge_manifest() -> Dict[str, Any]:
    """Edge extension manifest."""
    return copy.deepcopy(EDGE_EXTENSION_MANIFEST)


@pytest.fixture
def w3c_info(w3c_manifest: Dict[str, Any]) -> ManifestInfo:
    """ManifestInfo wrapping the W3C sample."""
    return ManifestInfo(content=w3c_manifest, format=BASE_MANIFEST_FORMAT)


# ============================================================================
# RULE FILE FACTORIES
# ============================================================================


@pytest.fixture
def write_rule_file() -> Callable[..., Path]:
    """
    Return a helper writing a rule file.

    Usage:
        write_rule_file(tmp_path / "rules", "my_rule.py", "rules = ...")
    """

    def _write(directory: Path, filename: str, source: str) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return _write


FINDING_RULE_SOURCE = """
from manifold_engine.core.types import Finding


def {name}(content):
    return Finding(
        description="{description}",
        platform="{platform}",
        level="{level}",
        member="{member}",
        code="required-value",
    )


rules = {name}
"""


@pytest.fixture
def finding_rule_source() -> Callable[..., str]:
    """Return a helper producing the source of a rule that always reports one finding."""

    def _source(
        name: str,
        platform: str = "general",
        level: str = "warning",
        member: str = "name",
        description: str = "test finding",
    ) -> str:
        return FINDING_RULE_SOURCE.format(
            name=name, platform=platform, level=level, member=member, description=description
        )

    return _source


@pytest.fixture
def platform_module(tmp_path: Path, monkeypatch, write_rule_file, finding_rule_source):
    """
    Create an importable platform module with a validation_rules folder.

    Returns:
        Name of the module, to use in a platform configuration
    """
    package_dir = tmp_path / "site" / "manifold_test_platform"
    write_rule_file(
        package_dir,
        "__init__.py",
        """
        from pathlib import Path

        from manifold_engine.platforms import PlatformBase


        class Platform(PlatformBase):
            def __init__(self, package_name, platforms):
                super().__init__(
                    "test",
                    "Test Platform",
                    package_name,
                    base_dir=Path(__file__).parent,
                    platforms=platforms,
                )
        """,
    )
    write_rule_file(
        package_dir / "validation_rules",
        "test_rule.py",
        finding_rule_source("test_rule", platform="test", member="test_member"),
    )
    monkeypatch.syspath_prepend(str(tmp_path / "site"))
    yield "manifold_test_platform"
    sys.modules.pop("manifold_test_platform", None)


# ============================================================================
# ISOLATION
# ============================================================================


@pytest.fixture(autouse=True)
def reset_observability():
    """Reset global metrics, logging context and package log level around each test."""
    get_metrics_collector().reset()
    yield
    get_metrics_collector().reset()
    clear_manifest_context()
    clear_correlation_id()
    logging.getLogger("manifold_engine").setLevel(logging.NOTSET)
