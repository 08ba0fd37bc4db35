"""Hosted apps should be served over HTTPS."""

from typing import Any, Dict, Optional
from urllib.parse import urlsplit

from manifold_engine.constants import (ALL_PLATFORMS, CODE_REQUIRED_HTTPS_URL,
                                       LEVEL_WARNING, MEMBER_START_URL)
from manifold_engine.core.types import Finding


def https_url_required(content: Dict[str, Any]) -> Optional[Finding]:
    """Warn unless start_url uses the https scheme."""
    start_url = content.get(MEMBER_START_URL)
    if isinstance(start_url, str) and start_url:
        try:
            scheme = urlsplit(start_url).scheme
        except ValueError:
            scheme = ""
        if scheme.lower() == "https":
            return None

    return Finding(
        description="The start URL for the target web site needs to be a HTTPS URL",
        platform=ALL_PLATFORMS,
        level=LEVEL_WARNING,
        member=MEMBER_START_URL,
        code=CODE_REQUIRED_HTTPS_URL,
    )


rules = https_url_required
