"""Suggest an absolute start URL so the manifest can be used outside its site."""

from typing import Any, Dict, Optional
from urllib.parse import urlsplit

from manifold_engine.constants import (ALL_PLATFORMS,
                                       CODE_REQUIRED_ABSOLUTE_URL,
                                       LEVEL_SUGGESTION, MEMBER_START_URL)
from manifold_engine.core.types import Finding


def absolute_start_url(content: Dict[str, Any]) -> Optional[Finding]:
    """Suggest an absolute start_url; relative ones need a site URL to resolve."""
    start_url = content.get(MEMBER_START_URL)
    # Missing start_url is reported by start_url_required
    if not isinstance(start_url, str) or not start_url:
        return None

    try:
        parts = urlsplit(start_url)
    except ValueError:
        return None
    if parts.scheme and parts.netloc:
        return None

    return Finding(
        description="The start URL should be an absolute URL",
        platform=ALL_PLATFORMS,
        level=LEVEL_SUGGESTION,
        member=MEMBER_START_URL,
        code=CODE_REQUIRED_ABSOLUTE_URL,
        data=start_url,
    )


rules = absolute_start_url
