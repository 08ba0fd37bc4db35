"""Suggest navigation scope rules for hosted apps."""

from typing import Any, Dict, Optional

from manifold_engine.constants import (ALL_PLATFORMS, CODE_REQUIRED_VALUE,
                                       LEVEL_SUGGESTION, MEMBER_EXTENDED_SCOPE)
from manifold_engine.core.types import Finding
from manifold_engine.validation.rules import ValidationRule


async def scope_suggestion(content: Dict[str, Any]) -> Optional[Finding]:
    """Suggest mjs_extended_scope when the manifest declares none."""
    if content.get(MEMBER_EXTENDED_SCOPE):
        return None

    return Finding(
        description=(
            "It is recommended to specify a set of rules that represent "
            "the navigation scope of the application"
        ),
        platform=ALL_PLATFORMS,
        level=LEVEL_SUGGESTION,
        member=MEMBER_EXTENDED_SCOPE,
        code=CODE_REQUIRED_VALUE,
    )


rules = ValidationRule(id="scope_suggestion", evaluate=scope_suggestion)
