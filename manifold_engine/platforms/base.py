"""
Base class for validation platforms.

A platform contributes a rule set that runs after the general rules. Rules
come from a :class:`~manifold_engine.validation.rules.RuleRegistry` when the
platform registered them in code, otherwise from the platform's own folder:

    <base_dir>/validation_rules/      (folder of rule files)
    <base_dir>/validation_rules.py    (single rule file)

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..constants import RULES_DIRECTORY_NAME
from ..validation.loader import load_validation_rules
from ..validation.rules import RuleRegistry, ValidationRule

logger = logging.getLogger(__name__)


class PlatformBase:
    """
    A validation platform.

    Subclasses are exposed as ``Platform`` by the module configured for a
    platform id and are instantiated as ``Platform(package_name, platforms)``.

    Attributes:
        id: Platform identifier
        name: Display name
        package_name: Module the platform was loaded from
        base_dir: Folder holding the platform's rule files
        platforms: Platform ids this instance was loaded for
    """

    def __init__(
        self,
        id: str,
        name: str,
        package_name: str,
        base_dir: Optional[Union[str, Path]] = None,
        rule_registry: Optional[RuleRegistry] = None,
        platforms: Optional[Sequence[str]] = None,
    ) -> None:
        self.id = id
        self.name = name
        self.package_name = package_name
        self.base_dir = Path(base_dir) if base_dir else None
        self.rule_registry = rule_registry
        self.platforms = list(platforms or [])

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, package_name={self.package_name!r})"

    async def get_validation_rules(self, platforms: Sequence[str]) -> List[ValidationRule]:
        """
        Return the platform's rules.

        Args:
            platforms: Requested platform ids, used to select platform
                       sub-folders of the rule folder

        Returns:
            List of rules, empty when the platform has none
        """
        if self.rule_registry is not None and self.rule_registry.has_platform(self.id):
            return self.rule_registry.rules_for([self.id])

        if not self.base_dir:
            logger.warning(f"Missing base directory for platform: {self.id}.")
            return []

        rules_dir = self.base_dir / RULES_DIRECTORY_NAME
        if rules_dir.is_dir():
            return await load_validation_rules(rules_dir, platforms)

        rules_file = rules_dir.with_suffix(".py")
        if rules_file.is_file():
            return await load_validation_rules(rules_file, platforms)

        logger.warning(
            f"Failed to retrieve the validation rules for platform: {self.id}. "
            f"The validation rules folder is missing or invalid."
        )
        return []
