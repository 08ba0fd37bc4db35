"""
W3C manifest schema check.

Type and enum violations are reported as errors at the JSON pointer of the
offending value (``/display``, ``/icons/0/purpose``). Members that are
neither W3C members nor extension members are reported as warnings.

``purpose`` is declared here as a single keyword; space-separated values
such as ``"any maskable"`` produce errors that the pipeline's reclassifier
removes when at least one keyword is legal.
"""

from typing import Any, Dict, List, Sequence

from jsonschema import Draft7Validator

from manifold_engine.constants import (ALL_PLATFORMS, CODE_INVALID_VALUE,
                                       ICON_PURPOSE_VALUES, LEVEL_ERROR,
                                       LEVEL_WARNING)
from manifold_engine.core.types import Finding
from manifold_engine.formats import is_extension_member
from manifold_engine.formats.w3c import ICON_MEMBERS, ROOT_MEMBERS

IMAGE_RESOURCE_SCHEMA = {
    "type": "object",
    "properties": {
        "src": {"type": "string"},
        "sizes": {"type": "string"},
        "type": {"type": "string"},
        "purpose": {"type": "string", "enum": list(ICON_PURPOSE_VALUES)},
    },
    "required": ["src"],
}

W3C_MANIFEST_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "short_name": {"type": "string"},
        "id": {"type": "string"},
        "description": {"type": "string"},
        "lang": {"type": "string"},
        "dir": {"type": "string", "enum": ["ltr", "rtl", "auto"]},
        "start_url": {"type": "string"},
        "scope": {"type": "string"},
        "display": {
            "type": "string",
            "enum": ["fullscreen", "standalone", "minimal-ui", "browser"],
        },
        "orientation": {
            "type": "string",
            "enum": [
                "any",
                "natural",
                "landscape",
                "portrait",
                "portrait-primary",
                "portrait-secondary",
                "landscape-primary",
                "landscape-secondary",
            ],
        },
        "theme_color": {"type": "string"},
        "background_color": {"type": "string"},
        "icons": {"type": "array", "items": IMAGE_RESOURCE_SCHEMA},
        "screenshots": {"type": "array", "items": IMAGE_RESOURCE_SCHEMA},
        "categories": {"type": "array", "items": {"type": "string"}},
        "related_applications": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "platform": {"type": "string"},
                    "url": {"type": "string"},
                    "id": {"type": "string"},
                },
                "required": ["platform"],
            },
        },
        "prefer_related_applications": {"type": "boolean"},
        "shortcuts": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "short_name": {"type": "string"},
                    "description": {"type": "string"},
                    "url": {"type": "string"},
                    "icons": {"type": "array", "items": IMAGE_RESOURCE_SCHEMA},
                },
                "required": ["name", "url"],
            },
        },
    },
}

_validator = Draft7Validator(W3C_MANIFEST_SCHEMA)


def _pointer(path: Sequence[Any]) -> str:
    return "/" + "/".join(str(part) for part in path)


def _unknown_members(content: Dict[str, Any]) -> List[str]:
    unknown = [
        f"/{name}"
        for name in content
        if str(name).lower() not in ROOT_MEMBERS and not is_extension_member(str(name))
    ]

    icons = content.get("icons")
    if isinstance(icons, list):
        for index, icon in enumerate(icons):
            if not isinstance(icon, dict):
                continue
            unknown.extend(
                f"/icons/{index}/{name}"
                for name in icon
                if str(name).lower() not in ICON_MEMBERS
                and not is_extension_member(str(name))
            )
    return unknown


def w3c_manifest_schema(content: Dict[str, Any]) -> List[Finding]:
    """
    Check the manifest against the W3C schema.

    Returns one error per schema violation, sorted by JSON pointer, followed
    by one warning per unknown member.
    """
    findings: List[Finding] = []

    errors = sorted(_validator.iter_errors(content), key=lambda e: _pointer(e.absolute_path))
    for error in errors:
        findings.append(
            Finding(
                description=error.message,
                platform=ALL_PLATFORMS,
                level=LEVEL_ERROR,
                member=_pointer(error.absolute_path),
                code=CODE_INVALID_VALUE,
            )
        )

    for member in _unknown_members(content):
        findings.append(
            Finding(
                description=f"Unknown member '{member.rsplit('/', 1)[-1]}'",
                platform=ALL_PLATFORMS,
                level=LEVEL_WARNING,
                member=member,
                code=CODE_INVALID_VALUE,
            )
        )

    return findings


rules = w3c_manifest_schema
