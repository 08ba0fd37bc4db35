"""
Platform registration and loading.

Platforms are registered either through a configuration mapping (or a JSON
file holding one)::

    {
        "android": {"module": "manifold_android", "source": "manifold-android"},
        "ios": {"module": "manifold_cordova", "source": "manifold-cordova"}
    }

or in code with :meth:`PlatformRegistry.register`. Several platform ids may
share a module; the module is imported once and its ``Platform`` class is
instantiated once with the list of ids it serves.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

import asyncio
import importlib
import json
import logging
from collections import OrderedDict
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, Field, ValidationError

from ..exceptions import PlatformError
from .base import PlatformBase

logger = logging.getLogger(__name__)

PlatformFactory = Callable[[str, List[str]], PlatformBase]

PLATFORM_CLASS_NAME = "Platform"


class PlatformConfigEntry(BaseModel):
    """Configuration of one platform id."""

    module: str = Field(..., min_length=1, description="Importable module exposing 'Platform'")
    source: str = Field("", description="Distribution the module is installed from")


def _read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise PlatformError(
            f"Platform configuration file is missing or invalid - path: '{path}'.",
            context={"error": str(e)},
        ) from e

    if not isinstance(data, dict):
        raise PlatformError(
            f"Platform configuration file is missing or invalid - path: '{path}'."
        )
    return data


class PlatformRegistry:
    """
    Registry of validation platforms.

    Example:
        registry = PlatformRegistry()
        registry.configure({"test": {"module": "tests.fixtures.test_platform"}})
        platforms = await registry.load_platforms(["test"])
    """

    def __init__(self, config: Optional[Union[Mapping[str, Any], str, Path]] = None) -> None:
        self._config: Dict[str, PlatformConfigEntry] = {}
        self._factories: Dict[str, PlatformFactory] = {}
        if config is not None:
            self.configure(config)

    def configure(self, config: Union[Mapping[str, Any], str, Path]) -> None:
        """
        Replace the platform configuration.

        Args:
            config: Mapping of platform id to ``{"module", "source"}``, or the
                    path of a JSON file holding one

        Raises:
            PlatformError: If the file cannot be read or an entry is invalid
        """
        if isinstance(config, (str, Path)):
            config = _read_config_file(config)

        entries: Dict[str, PlatformConfigEntry] = {}
        for platform_id, entry in config.items():
            try:
                entries[platform_id.lower()] = PlatformConfigEntry.model_validate(entry)
            except ValidationError as e:
                raise PlatformError(
                    f"Invalid configuration for platform '{platform_id}': {e}",
                    platform_id=platform_id,
                ) from e

        self._config = entries
        logger.debug(f"Configured platforms: {sorted(entries)}")

    def register(self, platform_id: str, factory: PlatformFactory) -> None:
        """
        Register a platform in code.

        Args:
            platform_id: Platform identifier
            factory: Callable receiving ``(package_name, platform_ids)`` and
                     returning a PlatformBase, typically a PlatformBase subclass
        """
        self._factories[platform_id.lower()] = factory

    def unregister(self, platform_id: str) -> None:
        platform_id = platform_id.lower()
        if platform_id not in self._factories and platform_id not in self._config:
            raise PlatformError(f"Platform '{platform_id}' is not registered.", platform_id)
        self._factories.pop(platform_id, None)
        self._config.pop(platform_id, None)

    def list_platforms(self) -> List[str]:
        """Return every registered platform id."""
        return sorted(set(self._config) | set(self._factories))

    def is_registered(self, platform_id: str) -> bool:
        platform_id = platform_id.lower()
        return platform_id in self._factories or platform_id in self._config

    def get_config(self, platform_id: str) -> Optional[PlatformConfigEntry]:
        return self._config.get(platform_id.lower())

    @staticmethod
    def _import_platform_class(module_name: str) -> PlatformFactory:
        module = importlib.import_module(module_name)
        platform_class = getattr(module, PLATFORM_CLASS_NAME, None)
        if platform_class is None:
            raise PlatformError(
                f"Failed to resolve module: '{module_name}'. "
                f"Module does not define '{PLATFORM_CLASS_NAME}'."
            )
        return platform_class

    async def _load_group(
        self, package_name: str, factory: Optional[PlatformFactory], platform_ids: List[str]
    ) -> PlatformBase:
        if factory is None:
            logger.debug(f"Loading platform module: {package_name}")
            try:
                factory = await asyncio.to_thread(self._import_platform_class, package_name)
            except ImportError as e:
                raise PlatformError(
                    f"Failed to resolve module: '{package_name}'. {e}",
                    platform_id=platform_ids[0],
                ) from e
        return factory(package_name, platform_ids)

    async def load_platforms(self, platform_ids: Sequence[str]) -> List[PlatformBase]:
        """
        Load the platforms serving the requested ids.

        Unregistered ids and modules that fail to load are logged and
        skipped.

        Args:
            platform_ids: Requested platform identifiers

        Returns:
            One PlatformBase per distinct module (or in-code factory)
        """
        # package name -> (factory or None, platform ids served)
        groups: "OrderedDict[str, tuple]" = OrderedDict()

        for platform_id in platform_ids or []:
            key = platform_id.lower()
            factory = self._factories.get(key)
            if factory is not None:
                package_name = key
            elif key in self._config:
                package_name = self._config[key].module
            else:
                logger.error(f"Platform '{platform_id}' is not registered!")
                continue

            groups.setdefault(package_name, (factory, []))[1].append(key)

        names = list(groups)
        outcomes = await asyncio.gather(
            *(self._load_group(name, *groups[name]) for name in names),
            return_exceptions=True,
        )

        platforms: List[PlatformBase] = []
        for name, outcome in zip(names, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"Failed to load platform module '{name}': {outcome}")
                continue
            platforms.append(outcome)
        return platforms
