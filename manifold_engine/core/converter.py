"""
Manifest format conversion.

Every conversion routes through the canonical W3C format: the source
schema's ``to_canonical`` runs first, then the target schema's
``from_canonical``. Adding a format therefore takes two converters instead
of one per existing format.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

import dataclasses
import logging
from typing import Optional

from ..constants import BASE_MANIFEST_FORMAT
from ..exceptions import ManifestContentError, ManifestFormatError
from ..formats import get_format
from ..observability import timed_operation
from .types import ManifestInfo

logger = logging.getLogger(__name__)


def _normalize_format(format_id: Optional[str]) -> str:
    if isinstance(format_id, str) and format_id:
        return format_id.lower()
    return BASE_MANIFEST_FORMAT


@timed_operation("manifest.convert")
def convert_to(
    manifest_info: Optional[ManifestInfo], output_format: Optional[str] = None
) -> ManifestInfo:
    """
    Convert a manifest to another registered format.

    Args:
        manifest_info: Manifest to convert. A missing format is treated as W3C.
        output_format: Target format identifier (default: W3C)

    Returns:
        ``manifest_info`` itself when source and target formats are equal,
        otherwise a new ManifestInfo in the target format

    Raises:
        ManifestContentError: If the manifest content is not a JSON object
        ManifestFormatError: If the source or target format is not registered
    """
    if manifest_info is None or not isinstance(manifest_info.content, dict):
        raise ManifestContentError("Manifest content is empty or not initialized.")

    input_format = _normalize_format(manifest_info.format)
    output_format = _normalize_format(output_format)

    if input_format == output_format:
        if not manifest_info.format:
            manifest_info.format = output_format
        return manifest_info

    source = get_format(input_format)
    target = get_format(output_format)
    if (
        source is None
        or target is None
        or source.to_canonical is None
        or target.from_canonical is None
    ):
        raise ManifestFormatError(
            "Manifest format is not recognized.",
            manifest_format=input_format if source is None else output_format,
        )

    logger.info(f"Converting the {input_format} manifest to {output_format} format...")
    canonical = source.to_canonical(manifest_info.content)
    converted = target.from_canonical(canonical)

    return dataclasses.replace(manifest_info, content=converted, format=output_format)
