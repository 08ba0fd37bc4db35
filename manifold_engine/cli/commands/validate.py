"""
Validate command for CLI.

Validates a manifest against the general rules and the requested platforms'
rules.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

import asyncio
import sys
from pathlib import Path

import click

from ...constants import BASE_MANIFEST_FORMAT
from ...core.converter import convert_to
from ...core.pipeline import ManifestPipeline
from ...exceptions import ManifoldEngineError
from ..utils import format_finding, parse_manifest_file, sort_findings


@click.command()
@click.argument("manifest_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--platform",
    "-p",
    "platforms",
    multiple=True,
    help="Platform whose rules to apply (repeatable)",
)
@click.option("--site-url", help="URL of the hosted site, used to resolve start_url")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show finding codes and data",
)
@click.pass_obj
def validate(config, manifest_file: Path, platforms, site_url, verbose: bool) -> None:
    """
    Validate a manifest file.

    MANIFEST_FILE: Path to the manifest to validate

    Exits with status 1 when an error-level finding is reported.

    Examples:
        manifold validate manifest.json
        manifold validate manifest.json -p android -p ios --site-url https://example.com
    """
    info = parse_manifest_file(manifest_file)

    try:
        if info.format != BASE_MANIFEST_FORMAT:
            info = convert_to(info, BASE_MANIFEST_FORMAT)

        pipeline = ManifestPipeline.from_config(config)
        if site_url:
            pipeline.normalize_start_url(site_url, info)
        findings = asyncio.run(pipeline.validate(info, list(platforms)))
    except ManifoldEngineError as e:
        raise click.ClickException(str(e)) from e

    for finding in sort_findings(findings):
        click.echo(format_finding(finding, verbose=verbose))

    errors = [f for f in findings if f.is_error]
    if errors:
        click.echo(click.style(f"❌ Manifest '{manifest_file}' has {len(errors)} error(s)", fg="red"))
        sys.exit(1)

    click.echo(click.style(f"✅ Manifest '{manifest_file}' is valid!", fg="green"))
