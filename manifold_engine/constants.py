"""
Constants for MANIFOLD_ENGINE.

This module contains all shared constants used across the codebase to avoid
magic strings and improve maintainability.
"""

from typing import Final

# ============================================================================
# MANIFEST FORMAT CONSTANTS
# ============================================================================

BASE_MANIFEST_FORMAT: Final[str] = "w3c"
"""Canonical (hub) manifest format. Every conversion routes through it."""

CHROME_MANIFEST_FORMAT: Final[str] = "chromeos"
"""Chrome Web Store hosted app manifest."""

EDGE_EXTENSION_MANIFEST_FORMAT: Final[str] = "edgeextension"
"""Edge browser extension manifest (not W3C compliant)."""


# ============================================================================
# VALIDATION CONSTANTS
# ============================================================================

ALL_PLATFORMS: Final[str] = "general"
"""Platform value used by findings that apply to every platform."""

LEVEL_ERROR: Final[str] = "error"
LEVEL_WARNING: Final[str] = "warning"
LEVEL_SUGGESTION: Final[str] = "suggestion"

CODE_REQUIRED_VALUE: Final[str] = "required-value"
CODE_INVALID_VALUE: Final[str] = "invalid-value"
CODE_MISSING_IMAGE_GROUP: Final[str] = "missing-image-group"
CODE_MISSING_IMAGE: Final[str] = "missing-image"
CODE_MISSING_IMAGE_ONSITE: Final[str] = "missing-image-onsite"
CODE_REQUIRED_ABSOLUTE_URL: Final[str] = "required-absolute-url"
CODE_REQUIRED_HTTPS_URL: Final[str] = "required-https-url"
CODE_DEPRECATED_MEMBER: Final[str] = "deprecated-member"

# Manifest members referenced by findings
MEMBER_LANG: Final[str] = "lang"
MEMBER_NAME: Final[str] = "name"
MEMBER_SHORT_NAME: Final[str] = "short_name"
MEMBER_SCOPE: Final[str] = "scope"
MEMBER_ICONS: Final[str] = "icons"
MEMBER_DISPLAY: Final[str] = "display"
MEMBER_ORIENTATION: Final[str] = "orientation"
MEMBER_START_URL: Final[str] = "start_url"
MEMBER_THEME_COLOR: Final[str] = "theme_color"
MEMBER_RELATED_APPLICATIONS: Final[str] = "related_applications"
MEMBER_PREFER_RELATED_APPLICATIONS: Final[str] = "prefer_related_applications"
MEMBER_DESCRIPTION: Final[str] = "description"
MEMBER_BACKGROUND_COLOR: Final[str] = "background_color"
MEMBER_DIR: Final[str] = "dir"
MEMBER_ACCESS_WHITELIST: Final[str] = "mjs_access_whitelist"
MEMBER_API_ACCESS: Final[str] = "mjs_api_access"
MEMBER_EXTENDED_SCOPE: Final[str] = "mjs_extended_scope"

# Legal tokens of an icon's space-separated "purpose" member
ICON_PURPOSE_VALUES: Final[tuple[str, ...]] = ("any", "maskable", "monochrome")

# ============================================================================
# RULE EXECUTION CONSTANTS
# ============================================================================

DEFAULT_RULE_TIMEOUT: Final[float] = 30.0
"""Default per-rule timeout in seconds. 0 disables the timeout."""

RULES_EXPORT_NAME: Final[str] = "rules"
"""Module attribute a rule file must define (a rule, a callable or a list)."""

RULES_DIRECTORY_NAME: Final[str] = "validation_rules"
"""Folder (or ``.py`` file stem) a platform keeps its rules in."""

# ============================================================================
# MANIFEST IO CONSTANTS
# ============================================================================

MANIFEST_JSON_INDENT: Final[int] = 4
"""Indentation used when writing manifests to disk."""

DEFAULT_START_URL: Final[str] = "/"
