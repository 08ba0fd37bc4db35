"""
Validation rule model and static rule registry.

A rule is a named capability that receives manifest content and returns
nothing, one finding or a list of findings. ``evaluate`` may be a plain
function or a coroutine function; the runner awaits whichever it gets.

Rules are obtained either from rule files discovered by
:mod:`manifold_engine.validation.loader` or from a :class:`RuleRegistry`
populated explicitly at startup.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import (Any, Awaitable, Callable, Dict, Iterable, List, Optional,
                    Union)

from ..constants import ALL_PLATFORMS
from ..core.types import Finding

logger = logging.getLogger(__name__)

RuleResult = Union[None, Finding, Dict[str, Any], List[Union[Finding, Dict[str, Any]]]]
RuleFunction = Callable[[Dict[str, Any]], Union[RuleResult, Awaitable[RuleResult]]]


@dataclass(frozen=True)
class ValidationRule:
    """
    A named validation rule.

    Attributes:
        id: Rule identifier, used in logs and metrics
        evaluate: Callable receiving the manifest content
        platform: Platform the rule belongs to ("general" for all platforms)
    """

    id: str
    evaluate: RuleFunction
    platform: str = ALL_PLATFORMS


def as_rule(obj: Any, platform: str = ALL_PLATFORMS) -> ValidationRule:
    """
    Adapt a rule export to a ValidationRule.

    Args:
        obj: A ValidationRule or a bare callable
        platform: Platform assigned to bare callables

    Returns:
        ValidationRule instance

    Raises:
        TypeError: If ``obj`` is neither a rule nor callable
    """
    if isinstance(obj, ValidationRule):
        return obj
    if callable(obj):
        rule_id = getattr(obj, "__name__", None) or type(obj).__name__
        return ValidationRule(id=rule_id, evaluate=obj, platform=platform)
    raise TypeError(f"Validation rule must be callable, got {type(obj).__name__}")


def as_rules(export: Any, platform: str = ALL_PLATFORMS) -> List[ValidationRule]:
    """Normalize a single rule or a list of rules into a list."""
    if isinstance(export, (list, tuple)):
        return [as_rule(item, platform) for item in export]
    return [as_rule(export, platform)]


def normalize_result(result: RuleResult) -> List[Finding]:
    """
    Normalize a rule result into a list of findings.

    Raises:
        TypeError: If the result is not a finding, a finding dict or a list of those
        KeyError, ValueError: If a finding dict is malformed
    """
    if result is None:
        return []
    if isinstance(result, (Finding, dict)):
        result = [result]
    if not isinstance(result, (list, tuple)):
        raise TypeError(f"Unexpected rule result type: {type(result).__name__}")

    findings = []
    for item in result:
        if isinstance(item, Finding):
            findings.append(item)
        elif isinstance(item, dict):
            findings.append(Finding.from_dict(item))
        elif item is not None:
            raise TypeError(f"Unexpected finding type: {type(item).__name__}")
    return findings


class RuleRegistry:
    """
    Static registry of validation rules keyed by platform.

    Rules keep their registration order within a platform.

    Example:
        registry = RuleRegistry()

        @registry.rule("android", "android.icons")
        def android_icons(content):
            ...
    """

    def __init__(self) -> None:
        self._rules: "OrderedDict[str, List[ValidationRule]]" = OrderedDict()

    def register(self, platform_id: str, rule: Any) -> ValidationRule:
        """
        Register a rule for a platform.

        Args:
            platform_id: Platform identifier ("general" for all platforms)
            rule: ValidationRule or callable

        Returns:
            The registered ValidationRule
        """
        validation_rule = as_rule(rule, platform=platform_id)
        self._rules.setdefault(platform_id.lower(), []).append(validation_rule)
        logger.debug(f"Registered validation rule '{validation_rule.id}' for '{platform_id}'")
        return validation_rule

    def rule(self, platform_id: str, rule_id: Optional[str] = None):
        """Decorator form of :meth:`register`."""

        def decorator(func: RuleFunction) -> RuleFunction:
            self.register(
                platform_id,
                ValidationRule(id=rule_id or func.__name__, evaluate=func, platform=platform_id),
            )
            return func

        return decorator

    def rules_for(self, platform_ids: Iterable[str]) -> List[ValidationRule]:
        """Return the rules of the given platforms, in registration order."""
        rules: List[ValidationRule] = []
        for platform_id in platform_ids:
            rules.extend(self._rules.get(platform_id.lower(), []))
        return rules

    def has_platform(self, platform_id: str) -> bool:
        return platform_id.lower() in self._rules

    def platforms(self) -> List[str]:
        return list(self._rules)

    def clear(self) -> None:
        self._rules.clear()
