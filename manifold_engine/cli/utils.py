"""
Utility functions for CLI commands.

This module provides shared utilities for CLI operations.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Sequence

import click

from ..core.manifest import ManifestParser
from ..core.types import Finding, ManifestInfo
from ..exceptions import ManifoldEngineError

LEVEL_COLORS = {"error": "red", "warning": "yellow", "suggestion": "cyan"}


def load_manifest_file(file_path: Path) -> dict[str, Any]:
    """
    Load a manifest JSON file without any format handling.

    Raises:
        click.ClickException: If the file doesn't exist or is invalid JSON
    """
    if not file_path.exists():
        raise click.ClickException(f"Manifest file not found: {file_path}")

    try:
        with open(file_path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in manifest file: {e}") from e


def parse_manifest_file(file_path: Path, manifest_format: str | None = None) -> ManifestInfo:
    """
    Load a manifest file through ManifestParser.

    Raises:
        click.ClickException: If the file cannot be parsed
    """
    try:
        return asyncio.run(ManifestParser.load_from_file(file_path, manifest_format))
    except (FileNotFoundError, ManifoldEngineError) as e:
        raise click.ClickException(str(e)) from e


def save_manifest_file(file_path: Path, manifest_info: ManifestInfo) -> None:
    """
    Write a manifest to a JSON file.

    Raises:
        click.ClickException: If the file cannot be written
    """
    try:
        asyncio.run(ManifestParser.write_to_file(manifest_info, file_path))
    except (OSError, ManifoldEngineError) as e:
        raise click.ClickException(f"Failed to write manifest file: {e}") from e


def format_manifest_output(manifest: dict[str, Any]) -> str:
    return json.dumps(manifest, indent=4, ensure_ascii=False)


def format_finding(finding: Finding, verbose: bool = False) -> str:
    """Render one finding as a single styled line."""
    level = finding.level.value
    line = (
        f"{click.style(level.upper(), fg=LEVEL_COLORS.get(level))} "
        f"[{finding.platform}] {finding.member}: {finding.description}"
    )
    if verbose:
        line += f" ({finding.code.value})"
        if finding.data is not None:
            line += f" data={json.dumps(finding.data)}"
    return line


def sort_findings(findings: Sequence[Finding]) -> list[Finding]:
    """Order findings by level (errors first), then platform and member."""
    order = {"error": 0, "warning": 1, "suggestion": 2}
    return sorted(findings, key=lambda f: (order[f.level.value], f.platform, f.member))
