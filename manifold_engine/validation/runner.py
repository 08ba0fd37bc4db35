"""
Concurrent execution of validation rules.

Every rule of a pass is launched at once and the pass waits for all of them.
A rule that raises, returns something that is not a finding, or exceeds the
per-rule timeout is logged and contributes nothing; its siblings are not
affected.

Findings are collected as each rule completes, so the aggregated list
follows completion order, not rule order. Compare results without relying
on ordering.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

import asyncio
import inspect
import logging
import time
from typing import Any, Dict, List, Optional, Sequence, Union

from ..constants import EDGE_EXTENSION_MANIFEST_FORMAT
from ..core.types import Finding
from ..observability import record_operation
from .rules import ValidationRule, normalize_result

logger = logging.getLogger(__name__)
_default_logger = logger

LoggerLike = Union[logging.Logger, logging.LoggerAdapter]


async def run_validation_rules(
    content: Dict[str, Any],
    rules: Sequence[ValidationRule],
    timeout: Optional[float] = None,
    logger: Optional[LoggerLike] = None,
) -> List[Finding]:
    """
    Run rules concurrently against manifest content.

    Args:
        content: Canonical manifest body
        rules: Rules to run
        timeout: Per-rule timeout in seconds for coroutine rules (None or 0
                 disables it). Plain-function rules run inline and are not
                 interrupted.
        logger: Logger for rule failures (defaults to this module's logger)

    Returns:
        Findings of all rules that completed, in completion order
    """
    log = logger or _default_logger
    results: List[Finding] = []

    async def run_one(rule: ValidationRule) -> None:
        start_time = time.perf_counter()
        success = False
        try:
            outcome = rule.evaluate(content)
            if inspect.isawaitable(outcome):
                if timeout:
                    outcome = await asyncio.wait_for(outcome, timeout)
                else:
                    outcome = await outcome
            results.extend(normalize_result(outcome))
            success = True
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            record_operation("validation.rule", duration_ms, success, rule=rule.id)

    outcomes = await asyncio.gather(*(run_one(rule) for rule in rules), return_exceptions=True)

    for rule, outcome in zip(rules, outcomes):
        if isinstance(outcome, asyncio.TimeoutError):
            log.error(f"Validation rule '{rule.id}' timed out after {timeout}s")
        elif isinstance(outcome, BaseException):
            log.error(
                f"Validation rule '{rule.id}' failed: {outcome}",
                exc_info=(type(outcome), outcome, outcome.__traceback__),
            )

    return results


async def apply_validation_rules(
    content: Dict[str, Any],
    general_rules: Sequence[ValidationRule],
    platform_modules: Sequence[Any],
    platforms: Sequence[str],
    timeout: Optional[float] = None,
    logger: Optional[LoggerLike] = None,
) -> List[Finding]:
    """
    Run the general rule set and every platform's rule set, and merge results.

    The general pass is skipped when the only requested platform is the
    Edge extension format, whose manifests are not W3C shaped.

    Args:
        content: Canonical manifest body
        general_rules: Rules applying to every platform
        platform_modules: Platform providers exposing
                          ``async get_validation_rules(platforms)``
        platforms: Requested platform identifiers
        timeout: Per-rule timeout in seconds
        logger: Logger for rule and provider failures

    Returns:
        Merged findings
    """
    log = logger or _default_logger
    all_results: List[Finding] = []

    if [p.lower() for p in platforms] == [EDGE_EXTENSION_MANIFEST_FORMAT]:
        log.debug("Skipping general validation rules for an Edge extension manifest")
    else:
        all_results.extend(
            await run_validation_rules(content, general_rules, timeout=timeout, logger=log)
        )

    async def validate_platform(platform: Any) -> None:
        rules = await platform.get_validation_rules(list(platforms))
        all_results.extend(
            await run_validation_rules(content, rules, timeout=timeout, logger=log)
        )

    outcomes = await asyncio.gather(
        *(validate_platform(platform) for platform in platform_modules),
        return_exceptions=True,
    )
    for platform, outcome in zip(platform_modules, outcomes):
        if isinstance(outcome, BaseException):
            platform_id = getattr(platform, "id", type(platform).__name__)
            log.error(f"Failed to run validation rules for platform '{platform_id}': {outcome}")

    return all_results
