"""Warn about members superseded by newer ones."""

from typing import Any, Dict, List

from manifold_engine.constants import (ALL_PLATFORMS, CODE_DEPRECATED_MEMBER,
                                       LEVEL_WARNING, MEMBER_ACCESS_WHITELIST,
                                       MEMBER_API_ACCESS)
from manifold_engine.core.types import Finding

# deprecated member -> replacement
DEPRECATED_MEMBERS = {
    MEMBER_ACCESS_WHITELIST: MEMBER_API_ACCESS,
}


def deprecated_members(content: Dict[str, Any]) -> List[Finding]:
    """Warn once per deprecated member present at the top level."""
    findings: List[Finding] = []
    for member, replacement in DEPRECATED_MEMBERS.items():
        if member in content:
            findings.append(
                Finding(
                    description=(
                        f"The '{member}' member is deprecated, "
                        f"use '{replacement}' instead"
                    ),
                    platform=ALL_PLATFORMS,
                    level=LEVEL_WARNING,
                    member=member,
                    code=CODE_DEPRECATED_MEMBER,
                )
            )
    return findings


rules = deprecated_members
