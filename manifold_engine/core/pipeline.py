"""
Manifest pipeline.

Ties detection, conversion, validation and start URL normalization
together behind one object with injected collaborators: the platform
provider, the general rule set, the rule timeout and the logger.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

import logging
import time
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from ..constants import BASE_MANIFEST_FORMAT, DEFAULT_RULE_TIMEOUT
from ..exceptions import ManifestContentError, ManifestFormatError
from ..formats import detect
from ..observability import (clear_manifest_context, get_logger,
                             log_operation, record_operation,
                             set_manifest_context)
from ..platforms import PlatformRegistry
from ..validation import (GENERAL_RULES_DIR, ValidationRule,
                          apply_validation_rules, load_validation_rules,
                          reclassify_findings,
                          validate_and_normalize_start_url)
from .converter import convert_to
from .types import Finding, ManifestInfo

logger = logging.getLogger(__name__)


class ManifestPipeline:
    """
    Detect, convert and validate web app manifests.

    Example:
        pipeline = ManifestPipeline(platform_provider=registry)
        info = ManifestInfo(content=data, format=pipeline.detect(data))
        info = pipeline.convert(info)
        findings = await pipeline.validate(info, ["android"])
    """

    def __init__(
        self,
        platform_provider: Optional[Any] = None,
        general_rules: Optional[Sequence[ValidationRule]] = None,
        general_rules_dir: Optional[Union[str, Path]] = None,
        rule_timeout: Optional[float] = DEFAULT_RULE_TIMEOUT,
        logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ) -> None:
        """
        Initialize the pipeline.

        Args:
            platform_provider: Object exposing ``async load_platforms(ids)``
                               (defaults to an empty PlatformRegistry)
            general_rules: Rules applying to every platform. When omitted
                           they are loaded once from ``general_rules_dir``.
            general_rules_dir: Folder of general rule files (defaults to the
                               bundled rules)
            rule_timeout: Per-rule timeout in seconds (None or 0 disables it)
            logger: Logger for pipeline, rule and platform failures
        """
        self.platform_provider = platform_provider or PlatformRegistry()
        self.general_rules_dir = Path(general_rules_dir or GENERAL_RULES_DIR)
        self.rule_timeout = rule_timeout or None
        self.logger = logger or get_logger("manifold_engine.pipeline")

        self._general_rules: Optional[List[ValidationRule]] = (
            list(general_rules) if general_rules is not None else None
        )

    @classmethod
    def from_config(cls, config: Any, **kwargs: Any) -> "ManifestPipeline":
        """Build a pipeline from an :class:`~manifold_engine.config.EngineConfig`."""
        if "platform_provider" not in kwargs and config.platforms_config:
            kwargs["platform_provider"] = PlatformRegistry(config.platforms_config)
        kwargs.setdefault("general_rules_dir", config.general_rules_dir)
        kwargs.setdefault("rule_timeout", config.effective_rule_timeout)
        return cls(**kwargs)

    def detect(self, content: Any) -> Optional[str]:
        """Return the format of ``content``, or None if no format matches."""
        return detect(content)

    def convert(self, manifest_info: ManifestInfo, output_format: Optional[str] = None) -> ManifestInfo:
        """Convert a manifest (see :func:`~manifold_engine.core.converter.convert_to`)."""
        return convert_to(manifest_info, output_format)

    def normalize_start_url(
        self, site_url: Optional[str], manifest_info: ManifestInfo
    ) -> ManifestInfo:
        """Validate and resolve start_url (see :mod:`manifold_engine.validation.start_url`)."""
        return validate_and_normalize_start_url(site_url, manifest_info)

    async def get_general_rules(self) -> List[ValidationRule]:
        """Return the general rule set, loading it on first use."""
        if self._general_rules is None:
            self._general_rules = await load_validation_rules(self.general_rules_dir)
            self.logger.debug(
                f"Loaded {len(self._general_rules)} general validation rules "
                f"from {self.general_rules_dir}"
            )
        return self._general_rules

    async def validate(
        self, manifest_info: Optional[ManifestInfo], platforms: Optional[Sequence[str]] = None
    ) -> List[Finding]:
        """
        Validate a W3C manifest for the given platforms.

        Args:
            manifest_info: Manifest in W3C format
            platforms: Platform ids whose rule sets run after the general
                       rules. Unregistered ids are logged and skipped.

        Returns:
            Findings of every rule that completed, after false positives are
            removed. Ordering is not significant.

        Raises:
            ManifestContentError: If the manifest content is not a JSON object
            ManifestFormatError: If the manifest is not in W3C format
            RuleLoadError: If the general rule folder cannot be read
        """
        if manifest_info is None or not isinstance(manifest_info.content, dict):
            raise ManifestContentError("Manifest content is empty or invalid.")

        if manifest_info.format != BASE_MANIFEST_FORMAT:
            raise ManifestFormatError(
                "The manifest passed as argument is not a W3C manifest.",
                manifest_format=manifest_info.format,
            )

        platforms = list(platforms or [])
        start_time = time.perf_counter()
        success = False
        findings: List[Finding] = []
        set_manifest_context(manifest_format=manifest_info.format, platforms=platforms)
        try:
            general_rules = await self.get_general_rules()
            platform_modules = await self.platform_provider.load_platforms(platforms)

            findings = await apply_validation_rules(
                manifest_info.content,
                general_rules,
                platform_modules,
                platforms,
                timeout=self.rule_timeout,
                logger=self.logger,
            )
            findings = reclassify_findings(findings, manifest_info.content)
            success = True
            return findings
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            record_operation("manifest.validate", duration_ms, success)
            log_operation(
                self.logger,
                "manifest.validate",
                level=logging.INFO if success else logging.ERROR,
                success=success,
                duration_ms=duration_ms,
                finding_count=len(findings),
            )
            clear_manifest_context()
