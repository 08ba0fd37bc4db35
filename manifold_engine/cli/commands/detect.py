"""
Detect command for CLI.

Prints the format a manifest file conforms to.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

import sys
from pathlib import Path

import click

from ...formats import detect as detect_format
from ..utils import load_manifest_file


@click.command()
@click.argument("manifest_file", type=click.Path(exists=True, path_type=Path))
def detect(manifest_file: Path) -> None:
    """
    Detect the format of a manifest file.

    MANIFEST_FILE: Path to the manifest to inspect

    Examples:
        manifold detect manifest.json
    """
    manifest = load_manifest_file(manifest_file)
    manifest_format = detect_format(manifest)

    if manifest_format is None:
        click.echo(click.style(f"Manifest '{manifest_file}' format is not recognized.", fg="red"))
        sys.exit(1)

    click.echo(manifest_format)
