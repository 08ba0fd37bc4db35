"""
Post-processing of findings known to be false positives.

The W3C schema check treats an icon's ``purpose`` as a single keyword, while
the member actually holds a space-separated list of keywords. A schema error
at ``/icons/<n>/purpose`` is therefore dropped when the icon's purpose
contains at least one legal keyword.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Sequence

from ..constants import ICON_PURPOSE_VALUES
from ..core.types import Finding

logger = logging.getLogger(__name__)

# Anchored: shortcuts/<n>/icons/<m>/purpose must not match
ICON_PURPOSE_PATH = re.compile(r"^/icons/(\d+)/purpose$")


def _icon_purpose(content: Dict[str, Any], index: int) -> Optional[str]:
    icons = content.get("icons")
    if not isinstance(icons, list) or index >= len(icons):
        return None
    icon = icons[index]
    if not isinstance(icon, dict):
        return None
    purpose = icon.get("purpose")
    return purpose if isinstance(purpose, str) else None


def is_satisfied_icon_purpose(finding: Finding, content: Dict[str, Any]) -> bool:
    """Return True if ``finding`` is a purpose error on an icon whose purpose is legal."""
    if not finding.is_error:
        return False

    match = ICON_PURPOSE_PATH.match(finding.member or "")
    if not match:
        return False

    purpose = _icon_purpose(content, int(match.group(1)))
    if purpose is None:
        return False
    return any(token in ICON_PURPOSE_VALUES for token in purpose.split())


def reclassify_findings(findings: Sequence[Finding], content: Dict[str, Any]) -> List[Finding]:
    """
    Drop icon-purpose errors that the manifest actually satisfies.

    Args:
        findings: Findings produced by the runner
        content: Manifest content the findings were produced from

    Returns:
        New list without the satisfied findings; order is preserved
    """
    kept = []
    for finding in findings:
        if is_satisfied_icon_purpose(finding, content):
            logger.debug(f"Dropping satisfied icon purpose finding at '{finding.member}'")
            continue
        kept.append(finding)
    return kept
