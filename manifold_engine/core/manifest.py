"""
Manifest loading and writing.

Parses manifest JSON, detects its format and hands back a ManifestInfo.
Chrome hosted app manifests are converted to the W3C format on load, since
every validation and most conversions start from W3C.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..constants import (BASE_MANIFEST_FORMAT, CHROME_MANIFEST_FORMAT,
                         MANIFEST_JSON_INDENT)
from ..exceptions import ManifestContentError
from ..formats import detect
from .converter import convert_to
from .types import ManifestInfo

logger = logging.getLogger(__name__)


class ManifestParser:
    """
    Manifest parser for loading and writing manifest files.

    Example:
        info = await ManifestParser.load_from_file("manifest.json")
        await ManifestParser.write_to_file(info, "out/manifest.json")
    """

    @staticmethod
    async def load_from_file(
        path: Union[str, Path], manifest_format: Optional[str] = None
    ) -> ManifestInfo:
        """
        Load a manifest from a JSON file.

        Args:
            path: Path to the manifest file
            manifest_format: Format to assume instead of detecting one

        Returns:
            ManifestInfo (in W3C format when the file held a Chrome manifest)

        Raises:
            FileNotFoundError: If the file doesn't exist
            ManifestContentError: If the file is not a JSON object
        """
        path_obj = Path(path)
        if not path_obj.exists():
            raise FileNotFoundError(f"Manifest file not found: {path_obj}")

        content = path_obj.read_text(encoding="utf-8")
        info = await ManifestParser.load_from_string(content, manifest_format)
        info.generated_from = str(path_obj)
        return info

    @staticmethod
    async def load_from_string(
        content: Union[str, bytes], manifest_format: Optional[str] = None
    ) -> ManifestInfo:
        """
        Load a manifest from JSON text.

        Raises:
            ManifestContentError: If the text is not a JSON object
        """
        try:
            data = json.loads(content)
        except (TypeError, ValueError) as e:
            raise ManifestContentError("Invalid manifest format.") from e

        return await ManifestParser.load_from_dict(data, manifest_format)

    @staticmethod
    async def load_from_dict(
        data: Dict[str, Any], manifest_format: Optional[str] = None
    ) -> ManifestInfo:
        """
        Wrap a parsed manifest, detecting its format.

        A forced ``manifest_format`` wins over detection. A manifest matching
        no format is treated as W3C.

        Raises:
            ManifestContentError: If ``data`` is not a JSON object
        """
        if not isinstance(data, dict):
            raise ManifestContentError("Invalid manifest format.")

        if manifest_format:
            logger.warning(f"Forcing to format {manifest_format}...")
            detected_format = manifest_format.lower()
        else:
            detected_format = detect(data)
            if not detected_format:
                logger.warning("Unable to detect the manifest format, assuming W3C")
                detected_format = BASE_MANIFEST_FORMAT

        logger.info(f"Found a {detected_format} manifest...")
        info = ManifestInfo(content=data, format=detected_format)

        if detected_format != CHROME_MANIFEST_FORMAT:
            return info

        info = convert_to(info, BASE_MANIFEST_FORMAT)
        if detect(info.content) == BASE_MANIFEST_FORMAT:
            logger.info("Conversion to W3C Manifest format successful.")
        return info

    @staticmethod
    async def write_to_file(manifest_info: Optional[ManifestInfo], path: Union[str, Path]) -> Path:
        """
        Write a manifest's content as indented JSON.

        Args:
            manifest_info: Manifest to write
            path: Output file; missing parent folders are created

        Returns:
            Path written

        Raises:
            ManifestContentError: If the manifest content is not a JSON object
        """
        if manifest_info is None or not isinstance(manifest_info.content, dict):
            raise ManifestContentError("Manifest content is empty or invalid.")

        path_obj = Path(path)
        path_obj.parent.mkdir(parents=True, exist_ok=True)
        path_obj.write_text(
            json.dumps(manifest_info.content, indent=MANIFEST_JSON_INDENT), encoding="utf-8"
        )
        logger.debug(f"Wrote {manifest_info.format} manifest to {path_obj}")
        return path_obj
