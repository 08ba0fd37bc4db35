"""
Convert command for CLI.

Converts a manifest to another registered format.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

from pathlib import Path

import click

from ...constants import BASE_MANIFEST_FORMAT
from ...core.converter import convert_to
from ...exceptions import ManifoldEngineError
from ...formats import list_available_manifest_formats
from ..utils import (format_manifest_output, parse_manifest_file,
                     save_manifest_file)


@click.command()
@click.argument("manifest_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--to",
    "output_format",
    type=click.Choice(list_available_manifest_formats(), case_sensitive=False),
    default=BASE_MANIFEST_FORMAT,
    show_default=True,
    help="Target format",
)
@click.option(
    "--from",
    "input_format",
    type=click.Choice(list_available_manifest_formats(), case_sensitive=False),
    default=None,
    help="Assume this input format instead of detecting it",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Write the converted manifest to this file instead of stdout",
)
def convert(
    manifest_file: Path, output_format: str, input_format: str | None, output: Path | None
) -> None:
    """
    Convert a manifest file to another format.

    MANIFEST_FILE: Path to the manifest to convert

    Examples:
        manifold convert manifest.json --to chromeos
        manifold convert app.json --from chromeos --output manifest.json
    """
    info = parse_manifest_file(manifest_file, input_format)

    try:
        converted = convert_to(info, output_format)
    except ManifoldEngineError as e:
        raise click.ClickException(str(e)) from e

    if output:
        save_manifest_file(output, converted)
        click.echo(
            click.style(f"Wrote {converted.format} manifest to {output}", fg="green"), err=True
        )
    else:
        click.echo(format_manifest_output(converted.content))
