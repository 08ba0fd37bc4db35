"""
Validation platforms.

A platform contributes its own rule set to validation. Platforms are
declared in a configuration mapping or registered in code, and loaded on
demand for the platform ids a validation request names.
"""

from .base import PlatformBase
from .registry import PlatformConfigEntry, PlatformRegistry

__all__ = ["PlatformBase", "PlatformConfigEntry", "PlatformRegistry"]
