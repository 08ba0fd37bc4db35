"""
Chrome Web Store hosted app manifest.

See https://developer.chrome.com/webstore/hosted_apps for the format.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

import logging
from typing import Any, Dict, List, Optional

from ..constants import (CHROME_MANIFEST_FORMAT, MEMBER_API_ACCESS,
                         MEMBER_EXTENDED_SCOPE)
from ..exceptions import ManifestConversionError
from .base import SchemaDescriptor
from .w3c import icons_from_size_map, icons_to_size_map

logger = logging.getLogger(__name__)

ACCESS_PLATFORM = "chrome"
DEFAULT_VERSION = "1"
DEFAULT_MANIFEST_VERSION = 2

APP_LAUNCH_MEMBERS = {"web_url": None, "container": None, "height": None, "width": None}
APP_MEMBERS = {"urls": None, "launch": APP_LAUNCH_MEMBERS}

ROOT_MEMBERS = {
    "name": None,
    "description": None,
    "version": None,
    "manifest_version": None,
    "app": APP_MEMBERS,
    "background_page": None,
    "icons": None,
    "key": None,
    "minimum_chrome_version": None,
    "offline_enabled": None,
    "permissions": None,
    "update_url": None,
    "default_locale": None,
}

REQUIRED_MEMBERS = ("name", "version", "manifest_version", "app", "app.launch.web_url")


def to_scope_pattern(url: str) -> str:
    """Trim a URL and turn a trailing slash into a wildcard suffix."""
    url = url.strip()
    if url.endswith("/"):
        return url[:-1] + "/*"
    return url


def from_scope_pattern(pattern: str) -> str:
    """Inverse of :func:`to_scope_pattern`."""
    if pattern.endswith("/*"):
        return pattern[:-1]
    return pattern


def _dedupe(values: List[str]) -> List[str]:
    return list(dict.fromkeys(values))


def to_w3c(content: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a hosted app manifest to the W3C format.

    Args:
        content: Chrome hosted app manifest body

    Returns:
        W3C manifest body

    Raises:
        ManifestConversionError: If app.launch.web_url is missing, or web_url,
            app.urls or permissions have the wrong type
    """
    app = content.get("app")
    app = app if isinstance(app, dict) else {}
    launch = app.get("launch")
    launch = launch if isinstance(launch, dict) else {}
    web_url = launch.get("web_url")
    if not web_url:
        raise ManifestConversionError(
            "Hosted app manifest is missing the app.launch.web_url member."
        )
    if not isinstance(web_url, str):
        raise ManifestConversionError(
            "Hosted app manifest member app.launch.web_url must be a string."
        )

    manifest: Dict[str, Any] = {"start_url": web_url, "icons": []}

    if content.get("default_locale"):
        manifest["lang"] = content["default_locale"]

    if content.get("name"):
        manifest["name"] = content["name"]

    # short_name wins as the canonical name
    if content.get("short_name"):
        manifest["name"] = content["short_name"]

    if isinstance(content.get("icons"), dict):
        manifest["icons"] = icons_from_size_map(content["icons"])

    app_urls = app.get("urls")
    if app_urls is not None and (
        not isinstance(app_urls, list) or not all(isinstance(url, str) for url in app_urls)
    ):
        raise ManifestConversionError(
            "Hosted app manifest member app.urls must be a list of strings."
        )
    scope_patterns: Optional[List[str]] = None
    if isinstance(app_urls, list):
        scope_patterns = [to_scope_pattern(url) for url in _dedupe(app_urls)]
        manifest[MEMBER_EXTENDED_SCOPE] = scope_patterns

    permissions = content.get("permissions")
    if permissions is not None and (
        not isinstance(permissions, list) or not all(isinstance(p, str) for p in permissions)
    ):
        raise ManifestConversionError(
            "Hosted app manifest member permissions must be a list of strings."
        )
    if permissions:
        access = ", ".join(permissions)
        manifest[MEMBER_API_ACCESS] = [
            {"match": to_scope_pattern(web_url), "platform": ACCESS_PLATFORM, "access": access}
        ]
        for pattern in scope_patterns or []:
            manifest[MEMBER_API_ACCESS].append(
                {"match": pattern, "platform": ACCESS_PLATFORM, "access": access}
            )

    return manifest


def from_w3c(content: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a W3C manifest to a hosted app manifest.

    Args:
        content: W3C manifest body

    Returns:
        Chrome hosted app manifest body

    Raises:
        ManifestConversionError: If start_url is missing
    """
    start_url = content.get("start_url")
    if not start_url:
        raise ManifestConversionError(
            "A start_url is required to express the manifest as a hosted app."
        )

    app: Dict[str, Any] = {"launch": {"web_url": start_url}}
    scope = content.get(MEMBER_EXTENDED_SCOPE)
    if isinstance(scope, list) and scope:
        app["urls"] = _dedupe([from_scope_pattern(pattern) for pattern in scope])

    manifest: Dict[str, Any] = {
        "name": content.get("name") or content.get("short_name") or "",
        "version": DEFAULT_VERSION,
        "manifest_version": DEFAULT_MANIFEST_VERSION,
        "app": app,
    }

    if content.get("description"):
        manifest["description"] = content["description"]

    if content.get("lang"):
        manifest["default_locale"] = content["lang"]

    icons = icons_to_size_map(content.get("icons"))
    if icons:
        manifest["icons"] = icons

    permissions: List[str] = []
    for entry in content.get(MEMBER_API_ACCESS) or []:
        if isinstance(entry, dict) and entry.get("platform") == ACCESS_PLATFORM:
            permissions.extend(
                p.strip() for p in str(entry.get("access", "")).split(",") if p.strip()
            )
    if permissions:
        manifest["permissions"] = _dedupe(permissions)

    logger.debug(f"Converted W3C manifest to hosted app manifest: {manifest['name']!r}")
    return manifest


CHROME_FORMAT = SchemaDescriptor(
    id=CHROME_MANIFEST_FORMAT,
    members=ROOT_MEMBERS,
    required=REQUIRED_MEMBERS,
    to_canonical=to_w3c,
    from_canonical=from_w3c,
)
