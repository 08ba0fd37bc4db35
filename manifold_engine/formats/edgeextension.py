"""
Edge browser extension manifest.

Extension manifests are not W3C compliant, so the general rule set is not
run against them (see ``validation.runner.apply_validation_rules``).

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

from typing import Any, Dict

from ..constants import EDGE_EXTENSION_MANIFEST_FORMAT
from .base import SchemaDescriptor
from .w3c import icons_from_size_map, icons_to_size_map

DEFAULT_VERSION = "1.0.0"
DEFAULT_MANIFEST_VERSION = 2

ROOT_MEMBERS = {
    name: None
    for name in (
        "name",
        "author",
        "version",
        "default_locale",
        "description",
        "manifest_version",
        "icons",
        "content_security_policy",
        "browser_action",
        "page_action",
        "background",
        "commands",
        "content_scripts",
        "externally_connectable",
        "homepage_url",
        "addressbar",
        "options_page",
        "permissions",
        "optional_permissions",
        "web_accessible_resources",
        "minimum_edge_version",
        "key",
        "-ms-preload",
    )
}

REQUIRED_MEMBERS = ("name", "author", "version")


def to_w3c(content: Dict[str, Any]) -> Dict[str, Any]:
    """Convert an extension manifest to the W3C format."""
    manifest: Dict[str, Any] = {}

    if content.get("name"):
        manifest["name"] = content["name"]
    if content.get("description"):
        manifest["description"] = content["description"]
    if content.get("default_locale"):
        manifest["lang"] = content["default_locale"]
    if content.get("homepage_url"):
        manifest["start_url"] = content["homepage_url"]
    if isinstance(content.get("icons"), dict):
        manifest["icons"] = icons_from_size_map(content["icons"])

    return manifest


def from_w3c(content: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a W3C manifest to an extension manifest."""
    name = content.get("name") or content.get("short_name") or ""
    manifest: Dict[str, Any] = {
        "name": name,
        "author": content.get("short_name") or name,
        "version": DEFAULT_VERSION,
        "manifest_version": DEFAULT_MANIFEST_VERSION,
    }

    if content.get("description"):
        manifest["description"] = content["description"]
    if content.get("lang"):
        manifest["default_locale"] = content["lang"]
    if content.get("start_url"):
        manifest["homepage_url"] = content["start_url"]

    icons = icons_to_size_map(content.get("icons"))
    if icons:
        manifest["icons"] = icons

    return manifest


EDGE_EXTENSION_FORMAT = SchemaDescriptor(
    id=EDGE_EXTENSION_MANIFEST_FORMAT,
    members=ROOT_MEMBERS,
    required=REQUIRED_MEMBERS,
    to_canonical=to_w3c,
    from_canonical=from_w3c,
)
