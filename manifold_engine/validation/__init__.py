"""
Validation rule engine.

Rule model and registry, rule file discovery, concurrent execution, finding
post-processing and start URL normalization.
"""

from .general import GENERAL_RULES_DIR
from .images import (image_group_rule, image_group_validation, image_rule,
                     image_validation)
from .loader import (load_rule_file, load_validation_rules,
                     load_validation_rules_sync)
from .reclassifier import reclassify_findings
from .rules import RuleRegistry, ValidationRule, as_rule, normalize_result
from .runner import apply_validation_rules, run_validation_rules
from .start_url import (get_default_short_name, is_url,
                        validate_and_normalize_start_url)

__all__ = [
    # Rules
    "ValidationRule",
    "RuleRegistry",
    "as_rule",
    "normalize_result",
    # Loading
    "GENERAL_RULES_DIR",
    "load_rule_file",
    "load_validation_rules",
    "load_validation_rules_sync",
    # Execution
    "run_validation_rules",
    "apply_validation_rules",
    "reclassify_findings",
    # Icon helpers
    "image_validation",
    "image_group_validation",
    "image_rule",
    "image_group_rule",
    # Start URL
    "validate_and_normalize_start_url",
    "get_default_short_name",
    "is_url",
]
