"""
Manifest format catalog and detection.

The catalog is static and ordered. Detection returns the first schema whose
matcher accepts the manifest, so overlapping schemas are resolved by catalog
order: platform schemas with required members come first and the canonical
W3C schema is last as the default.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from .base import SchemaDescriptor, is_extension_member, members_match
from .chromeos import CHROME_FORMAT
from .edgeextension import EDGE_EXTENSION_FORMAT
from .w3c import W3C_FORMAT

logger = logging.getLogger(__name__)

# Detection priority order. Canonical last.
FORMAT_CATALOG: Tuple[SchemaDescriptor, ...] = (
    CHROME_FORMAT,
    EDGE_EXTENSION_FORMAT,
    W3C_FORMAT,
)

_FORMATS_BY_ID: Dict[str, SchemaDescriptor] = {fmt.id: fmt for fmt in FORMAT_CATALOG}


def detect(content: Any) -> Optional[str]:
    """
    Detect the format of a parsed manifest.

    Args:
        content: Parsed manifest body

    Returns:
        Format identifier of the first matching schema, or None
    """
    for descriptor in FORMAT_CATALOG:
        if descriptor.matches(content):
            logger.debug(f"Manifest matched format '{descriptor.id}'")
            return descriptor.id
    return None


def get_format(format_id: Optional[str]) -> Optional[SchemaDescriptor]:
    """Return the descriptor registered for ``format_id`` (case-insensitive)."""
    if not isinstance(format_id, str):
        return None
    return _FORMATS_BY_ID.get(format_id.lower())


def list_available_manifest_formats() -> List[str]:
    """Return the registered format identifiers, canonical first."""
    return [W3C_FORMAT.id] + [fmt.id for fmt in FORMAT_CATALOG if fmt is not W3C_FORMAT]


__all__ = [
    "FORMAT_CATALOG",
    "SchemaDescriptor",
    "detect",
    "get_format",
    "is_extension_member",
    "list_available_manifest_formats",
    "members_match",
]
