"""
Command line interface for MANIFOLD_ENGINE.

Provides the ``manifold`` command with detect, convert and validate
subcommands.
"""

from .main import cli, main

__all__ = ["cli", "main"]
