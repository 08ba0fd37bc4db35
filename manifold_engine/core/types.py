"""
Type definitions for MANIFOLD_ENGINE core structures.

This module provides the manifest document wrapper, validation findings and
TypedDict definitions for W3C manifest members used throughout the codebase.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, TypedDict

from ..constants import (ALL_PLATFORMS, CODE_DEPRECATED_MEMBER,
                         CODE_INVALID_VALUE, CODE_MISSING_IMAGE,
                         CODE_MISSING_IMAGE_GROUP, CODE_MISSING_IMAGE_ONSITE,
                         CODE_REQUIRED_ABSOLUTE_URL, CODE_REQUIRED_HTTPS_URL,
                         CODE_REQUIRED_VALUE, LEVEL_ERROR, LEVEL_SUGGESTION,
                         LEVEL_WARNING)

# ============================================================================
# Manifest Member Types
# ============================================================================


class IconDict(TypedDict, total=False):
    """W3C icon entry."""

    src: str
    sizes: str
    type: str
    purpose: str


class ApiAccessDict(TypedDict):
    """Access-control entry synthesized from hosted app permissions."""

    match: str
    platform: str
    access: str


class W3CManifestDict(TypedDict, total=False):
    """Canonical (W3C) manifest body."""

    name: str
    short_name: str
    start_url: str
    scope: str
    display: str
    orientation: str
    lang: str
    dir: str
    description: str
    theme_color: str
    background_color: str
    icons: List[IconDict]
    related_applications: List[Dict[str, Any]]
    prefer_related_applications: bool
    mjs_extended_scope: List[str]
    mjs_api_access: List[ApiAccessDict]


# ============================================================================
# Validation Findings
# ============================================================================


class ValidationLevel(str, Enum):
    """Severity of a validation finding."""

    ERROR = LEVEL_ERROR
    WARNING = LEVEL_WARNING
    SUGGESTION = LEVEL_SUGGESTION


class ValidationCode(str, Enum):
    """Category of a validation finding."""

    REQUIRED_VALUE = CODE_REQUIRED_VALUE
    INVALID_VALUE = CODE_INVALID_VALUE
    MISSING_IMAGE = CODE_MISSING_IMAGE
    MISSING_IMAGE_GROUP = CODE_MISSING_IMAGE_GROUP
    MISSING_IMAGE_ONSITE = CODE_MISSING_IMAGE_ONSITE
    REQUIRED_ABSOLUTE_URL = CODE_REQUIRED_ABSOLUTE_URL
    REQUIRED_HTTPS_URL = CODE_REQUIRED_HTTPS_URL
    DEPRECATED_MEMBER = CODE_DEPRECATED_MEMBER


@dataclass
class Finding:
    """A single validation outcome tied to a manifest member."""

    description: str
    level: ValidationLevel
    member: str
    code: ValidationCode
    platform: str = ALL_PLATFORMS
    data: Any = None

    def __post_init__(self) -> None:
        # Accept plain strings so rule authors can write level="warning"
        self.level = ValidationLevel(self.level)
        self.code = ValidationCode(self.code)

    @property
    def is_error(self) -> bool:
        return self.level == ValidationLevel.ERROR

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Finding":
        """
        Build a finding from a dictionary result.

        Args:
            data: Mapping with description, level, member, code and optional
                  platform/data keys

        Returns:
            Finding instance

        Raises:
            KeyError: If a required key is missing
            ValueError: If level or code is not a known value
        """
        return cls(
            description=data["description"],
            level=data["level"],
            member=data["member"],
            code=data["code"],
            platform=data.get("platform", ALL_PLATFORMS),
            data=data.get("data"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = {
            "description": self.description,
            "platform": self.platform,
            "level": self.level.value,
            "member": self.member,
            "code": self.code.value,
        }
        if self.data is not None:
            result["data"] = self.data
        return result


# ============================================================================
# Manifest Document
# ============================================================================


@dataclass
class ManifestInfo:
    """
    A manifest body together with the format it currently conforms to.

    ``content`` is shared by reference between the detector, converter and
    validator. Copy it before handing the document to a step that mutates it
    if the original must be preserved.
    """

    content: Optional[Dict[str, Any]]
    format: Optional[str] = None
    generated: bool = False
    generated_url: Optional[str] = None
    generated_from: Optional[str] = None
    timestamp: Optional[datetime] = None
    default: Optional[Dict[str, Any]] = field(default=None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, omitting unset provenance fields."""
        result: Dict[str, Any] = {"content": self.content, "format": self.format}
        if self.generated:
            result["generated"] = True
        if self.generated_url:
            result["generatedUrl"] = self.generated_url
        if self.generated_from:
            result["generatedFrom"] = self.generated_from
        if self.timestamp:
            result["timestamp"] = self.timestamp.isoformat()
        if self.default:
            result["default"] = self.default
        return result
