"""
Icon checks shared by platform rule sets.

Platforms express their icon requirements as either a list of sizes that
must all be present, or a group of sizes of which at least one must be
present.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

from typing import Any, Dict, List, Optional, Sequence

from ..constants import (CODE_MISSING_IMAGE, CODE_MISSING_IMAGE_GROUP,
                         LEVEL_WARNING, MEMBER_ICONS)
from ..core.types import Finding
from .rules import ValidationRule


def _icon_sizes(content: Dict[str, Any]) -> List[str]:
    icons = content.get(MEMBER_ICONS)
    if not isinstance(icons, list):
        return []
    return [icon.get("sizes") for icon in icons if isinstance(icon, dict)]


def image_validation(
    content: Dict[str, Any],
    description: str,
    platform: str,
    level: str,
    required_sizes: Sequence[str],
) -> Optional[Finding]:
    """
    Check that an icon exists for every required size.

    Args:
        content: Manifest content
        description: Finding description
        platform: Platform reporting the finding
        level: Finding level
        required_sizes: Sizes such as ``"44x44"``

    Returns:
        A ``missing-image`` finding whose data lists the missing sizes, or
        None when every size is present
    """
    present = set(_icon_sizes(content))
    missing = [size for size in required_sizes if size not in present]
    if not missing:
        return None

    return Finding(
        description=description,
        platform=platform,
        level=level,
        member=MEMBER_ICONS,
        code=CODE_MISSING_IMAGE,
        data=missing,
    )


def image_group_validation(
    content: Dict[str, Any],
    description: str,
    platform: str,
    valid_sizes: Sequence[str],
) -> Optional[Finding]:
    """Warn unless at least one icon has a size from ``valid_sizes``."""
    if any(size in valid_sizes for size in _icon_sizes(content)):
        return None

    return Finding(
        description=description,
        platform=platform,
        level=LEVEL_WARNING,
        member=MEMBER_ICONS,
        code=CODE_MISSING_IMAGE_GROUP,
        data=list(valid_sizes),
    )


def image_rule(
    rule_id: str, description: str, platform: str, level: str, required_sizes: Sequence[str]
) -> ValidationRule:
    """Wrap :func:`image_validation` as a rule."""

    def evaluate(content: Dict[str, Any]) -> Optional[Finding]:
        return image_validation(content, description, platform, level, required_sizes)

    return ValidationRule(id=rule_id, evaluate=evaluate, platform=platform)


def image_group_rule(
    rule_id: str, description: str, platform: str, valid_sizes: Sequence[str]
) -> ValidationRule:
    """Wrap :func:`image_group_validation` as a rule."""

    def evaluate(content: Dict[str, Any]) -> Optional[Finding]:
        return image_group_validation(content, description, platform, valid_sizes)

    return ValidationRule(id=rule_id, evaluate=evaluate, platform=platform)
