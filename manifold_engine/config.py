"""
Configuration management for MANIFOLD_ENGINE.

Settings come from direct parameters first and environment variables
second. ManifestPipeline can still be built with explicit arguments; this
class only gathers them in one place for the CLI and embedding services.
"""

import logging
import os
from pathlib import Path

from .constants import DEFAULT_RULE_TIMEOUT

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EngineConfig:
    """
    Manifest engine configuration.

    Environment variables:
        MANIFOLD_RULE_TIMEOUT: Per-rule timeout in seconds (0 disables it)
        MANIFOLD_PLATFORMS_CONFIG: Path of the platform configuration JSON file
        MANIFOLD_GENERAL_RULES_DIR: Folder overriding the bundled general rules
        MANIFOLD_LOG_LEVEL: Log level of the ``manifold_engine`` logger

    Example:
        config = EngineConfig()
        config.validate()
        pipeline = ManifestPipeline.from_config(config)
    """

    def __init__(
        self,
        rule_timeout: float | None = None,
        platforms_config: str | None = None,
        general_rules_dir: str | None = None,
        log_level: str | None = None,
    ):
        """
        Initialize configuration.

        Args:
            rule_timeout: Per-rule timeout in seconds (defaults to 30 or MANIFOLD_RULE_TIMEOUT)
            platforms_config: Platform configuration file (defaults to MANIFOLD_PLATFORMS_CONFIG)
            general_rules_dir: General rule folder (defaults to MANIFOLD_GENERAL_RULES_DIR)
            log_level: Log level name (defaults to INFO or MANIFOLD_LOG_LEVEL)
        """
        if rule_timeout is None:
            rule_timeout = float(os.getenv("MANIFOLD_RULE_TIMEOUT", str(DEFAULT_RULE_TIMEOUT)))
        self.rule_timeout = rule_timeout
        self.platforms_config = platforms_config or os.getenv("MANIFOLD_PLATFORMS_CONFIG") or None
        self.general_rules_dir = (
            general_rules_dir or os.getenv("MANIFOLD_GENERAL_RULES_DIR") or None
        )
        self.log_level = (log_level or os.getenv("MANIFOLD_LOG_LEVEL", "INFO")).upper()

    @property
    def effective_rule_timeout(self) -> float | None:
        """Timeout to hand to the runner; None when disabled."""
        return self.rule_timeout or None

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: If a configuration value is invalid
        """
        if self.rule_timeout < 0:
            raise ValueError(f"rule_timeout must be >= 0, got {self.rule_timeout}")

        if self.log_level not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {self.log_level}"
            )

        if self.platforms_config and not Path(self.platforms_config).is_file():
            raise ValueError(f"platforms_config file not found: {self.platforms_config}")

        if self.general_rules_dir and not Path(self.general_rules_dir).is_dir():
            raise ValueError(f"general_rules_dir is not a directory: {self.general_rules_dir}")
