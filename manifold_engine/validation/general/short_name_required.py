"""Every manifest needs a short name."""

from typing import Any, Dict, Optional

from manifold_engine.constants import (ALL_PLATFORMS, CODE_REQUIRED_VALUE,
                                       LEVEL_ERROR, MEMBER_SHORT_NAME)
from manifold_engine.core.types import Finding


def short_name_required(content: Dict[str, Any]) -> Optional[Finding]:
    """Error when short_name is missing or empty."""
    if content.get(MEMBER_SHORT_NAME):
        return None

    return Finding(
        description="A short name for the application is required",
        platform=ALL_PLATFORMS,
        level=LEVEL_ERROR,
        member=MEMBER_SHORT_NAME,
        code=CODE_REQUIRED_VALUE,
    )


rules = short_name_required
