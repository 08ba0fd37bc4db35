"""
Core manifest handling.

Manifest and finding types, format conversion, manifest loading and the
validation pipeline.
"""

from .types import (Finding, ManifestInfo, ValidationCode,
                    ValidationLevel, W3CManifestDict)
from .converter import convert_to
from .manifest import ManifestParser
from .pipeline import ManifestPipeline

__all__ = [
    "Finding",
    "ManifestInfo",
    "ValidationCode",
    "ValidationLevel",
    "W3CManifestDict",
    "convert_to",
    "ManifestParser",
    "ManifestPipeline",
]
