"""
MANIFOLD_ENGINE - Web App Manifest Engine

Detects the format of web app manifests, converts them through the W3C
format and validates them with general and platform-specific rule sets.
"""

__version__ = "0.1.0"

# Core manifest handling
from .core import (Finding, ManifestInfo, ManifestParser, ManifestPipeline,
                   ValidationCode, ValidationLevel, convert_to)
# Format catalog
from .formats import detect, list_available_manifest_formats
# Platforms
from .platforms import PlatformBase, PlatformRegistry
# Validation
from .validation import (RuleRegistry, ValidationRule,
                         validate_and_normalize_start_url)

__all__ = [
    # Core
    "ManifestInfo",
    "ManifestParser",
    "ManifestPipeline",
    "Finding",
    "ValidationLevel",
    "ValidationCode",
    "convert_to",
    # Formats
    "detect",
    "list_available_manifest_formats",
    # Validation
    "ValidationRule",
    "RuleRegistry",
    "validate_and_normalize_start_url",
    # Platforms
    "PlatformBase",
    "PlatformRegistry",
]
