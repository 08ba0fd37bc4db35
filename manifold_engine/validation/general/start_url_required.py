"""Every manifest needs a start URL."""

from typing import Any, Dict, Optional

from manifold_engine.constants import (ALL_PLATFORMS, CODE_REQUIRED_VALUE,
                                       LEVEL_ERROR, MEMBER_START_URL)
from manifold_engine.core.types import Finding


def start_url_required(content: Dict[str, Any]) -> Optional[Finding]:
    """Error when start_url is missing or empty."""
    if content.get(MEMBER_START_URL):
        return None

    return Finding(
        description="The start URL for the target web site is required",
        platform=ALL_PLATFORMS,
        level=LEVEL_ERROR,
        member=MEMBER_START_URL,
        code=CODE_REQUIRED_VALUE,
    )


rules = start_url_required
