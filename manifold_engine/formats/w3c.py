"""
W3C web app manifest: the canonical format every conversion routes through.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

from typing import Any, Dict, List, Mapping

from ..constants import BASE_MANIFEST_FORMAT
from .base import SchemaDescriptor

ICON_MEMBERS = {"sizes": None, "src": None, "type": None, "purpose": None}

ROOT_MEMBERS = {
    "name": None,
    "short_name": None,
    "id": None,
    "scope": None,
    "icons": ICON_MEMBERS,
    "display": None,
    "orientation": None,
    "start_url": None,
    "lang": None,
    "theme_color": None,
    "dir": None,
    "description": None,
    "related_applications": None,
    "prefer_related_applications": None,
    "background_color": None,
    "categories": None,
    "screenshots": None,
    "shortcuts": None,
}


def _identity(content: Dict[str, Any]) -> Dict[str, Any]:
    return content


def icons_from_size_map(icons: Mapping[str, str]) -> List[Dict[str, str]]:
    """
    Flatten a size-keyed icon map into W3C icon entries.

    Example:
        >>> icons_from_size_map({"64": "icon_64.png"})
        [{"sizes": "64x64", "src": "icon_64.png"}]
    """
    return [{"sizes": f"{size}x{size}", "src": src} for size, src in icons.items()]


def icons_to_size_map(icons: Any) -> Dict[str, str]:
    """
    Fold W3C icon entries into a size-keyed map.

    Only square sizes can be expressed; other entries are skipped. When an
    entry lists several sizes, each square size is mapped to its src.
    """
    size_map: Dict[str, str] = {}
    if not isinstance(icons, list):
        return size_map

    for icon in icons:
        if not isinstance(icon, Mapping) or not icon.get("src"):
            continue
        for size in str(icon.get("sizes", "")).split():
            width, _, height = size.lower().partition("x")
            if width and width == height and width.isdigit():
                size_map.setdefault(width, icon["src"])
    return size_map


W3C_FORMAT = SchemaDescriptor(
    id=BASE_MANIFEST_FORMAT,
    members=ROOT_MEMBERS,
    allow_extensions=True,
    to_canonical=_identity,
    from_canonical=_identity,
)
