"""
Validation rule discovery.

Loads rules from a folder of rule files, or from a single rule file. A rule
file is a Python module exporting ``rules``: a ValidationRule, a callable, or
a list of either.

Folder layout::

    validation_rules/
        short_name_required.py      # loaded for every request
        android/                    # loaded only when "android" is requested
            icons.py

A rule file that fails to import or lacks the export is logged and skipped;
only an unreadable location is fatal.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

import asyncio
import hashlib
import importlib.util
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Union

from ..constants import ALL_PLATFORMS, RULES_EXPORT_NAME
from ..exceptions import RuleLoadError
from .rules import ValidationRule, as_rules

logger = logging.getLogger(__name__)


def _module_name(path: Path) -> str:
    digest = hashlib.sha256(str(path.resolve()).encode()).hexdigest()[:12]
    return f"_manifold_rule_{path.stem}_{digest}"


def load_rule_file(path: Union[str, Path], platform: str = ALL_PLATFORMS) -> List[ValidationRule]:
    """
    Import a rule file and return its rules.

    Args:
        path: Path to a ``.py`` rule file
        platform: Platform assigned to bare callables

    Returns:
        List of ValidationRule (a single export becomes a one-element list)

    Raises:
        RuleLoadError: If the file cannot be imported or has no ``rules`` export
    """
    path = Path(path)
    spec = importlib.util.spec_from_file_location(_module_name(path), path)
    if spec is None or spec.loader is None:
        raise RuleLoadError(
            f"Failed to load validation rule from file: '{path}'. Not a Python module.",
            location=str(path),
        )

    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        # Rule files are arbitrary code; any import-time failure disqualifies the file
        sys.modules.pop(spec.name, None)
        raise RuleLoadError(
            f"Failed to load validation rule from file: '{path}'. {e}.", location=str(path)
        ) from e

    export = getattr(module, RULES_EXPORT_NAME, None)
    if export is None:
        raise RuleLoadError(
            f"Failed to load validation rule from file: '{path}'. "
            f"Module does not define '{RULES_EXPORT_NAME}'.",
            location=str(path),
        )

    try:
        return as_rules(export, platform=platform)
    except TypeError as e:
        raise RuleLoadError(
            f"Failed to load validation rule from file: '{path}'. {e}.", location=str(path)
        ) from e


def _load_directory(
    directory: Path, platforms: List[str], platform: str
) -> List[ValidationRule]:
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        raise RuleLoadError(
            f"Failed to read validation rules from the specified location: '{directory}'. {e}.",
            location=str(directory),
        ) from e

    rules: List[ValidationRule] = []
    for entry in entries:
        if entry.is_dir():
            # Platform folders are opt-in
            if entry.name.lower() not in platforms:
                continue
            try:
                rules.extend(_load_directory(entry, [], platform=entry.name.lower()))
            except RuleLoadError as e:
                logger.error(str(e))
            continue

        if entry.suffix != ".py" or entry.name.startswith("_"):
            logger.debug(f"Skipping non-rule file: {entry}")
            continue

        try:
            rules.extend(load_rule_file(entry, platform=platform))
        except RuleLoadError as e:
            logger.error(e.message)

    return rules


def load_validation_rules_sync(
    file_or_dir: Union[str, Path], platforms: Iterable[str] = ()
) -> List[ValidationRule]:
    """
    Load validation rules from a folder or a single file.

    Args:
        file_or_dir: Rule folder or rule file
        platforms: Platform sub-folders to include

    Returns:
        List of loaded rules

    Raises:
        RuleLoadError: If the location cannot be read, or a single rule file
                       cannot be loaded
    """
    location = Path(file_or_dir)
    requested = [p.lower() for p in platforms]

    if location.is_file():
        return load_rule_file(location)

    if not location.exists():
        raise RuleLoadError(
            f"Failed to read validation rules from the specified location: '{location}'. "
            f"No such file or directory.",
            location=str(location),
        )

    return _load_directory(location, requested, platform=ALL_PLATFORMS)


async def load_validation_rules(
    file_or_dir: Union[str, Path], platforms: Iterable[str] = ()
) -> List[ValidationRule]:
    """
    Async wrapper around :func:`load_validation_rules_sync`.

    File system access and module imports run in a worker thread so the
    event loop is not blocked.
    """
    return await asyncio.to_thread(load_validation_rules_sync, file_or_dir, list(platforms))
