"""JSON loading for root manifests, package manifests and module configs.

A ConfigLoader is created per invocation and passed explicitly to the option
merger and the discoverer. Its cache lives only as long as the loader value,
so two invocations never observe each other's reads.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import ConfigParseError
from .schema import ModuleConfig

logger = logging.getLogger(__name__)

PACKAGE_MANIFEST_FILENAME = "package.json"


class ConfigLoader:
    """Reads JSON files, optionally caching parsed content per path.

    Args:
        cache: Keep parsed files for the lifetime of this loader (default True).
            Pass False to always read fresh content from disk.
    """

    def __init__(self, *, cache: bool = True) -> None:
        self._cache: dict[Path, dict[str, Any]] | None = {} if cache else None

    async def load_json_async(self, path: Path) -> dict[str, Any]:
        """Load a JSON object from disk.

        Raises:
            ConfigParseError: File is missing, not valid JSON, or not an object
        """
        if self._cache is not None and path in self._cache:
            return self._cache[path]

        data = await asyncio.to_thread(_read_json_object, path)
        if self._cache is not None:
            self._cache[path] = data
        return data

    async def load_package_manifest_async(self, package_dir: Path) -> dict[str, Any]:
        """Load the package.json of a package directory."""
        return await self.load_json_async(package_dir / PACKAGE_MANIFEST_FILENAME)

    async def load_module_config_async(self, config_path: Path) -> ModuleConfig:
        """Load and validate a module config file."""
        data = await self.load_json_async(config_path)
        try:
            return ModuleConfig.model_validate(data)
        except ValidationError as err:
            raise ConfigParseError(config_path, f"invalid module config: {err}") from err

    def clear(self) -> None:
        if self._cache is not None:
            self._cache.clear()


def _read_json_object(path: Path) -> dict[str, Any]:
    logger.debug(f"Reading {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as err:
        raise ConfigParseError(path, "file does not exist") from err
    except json.JSONDecodeError as err:
        raise ConfigParseError(path, f"invalid JSON ({err.msg} at line {err.lineno}, column {err.colno})") from err

    if not isinstance(data, dict):
        raise ConfigParseError(path, f"expected a JSON object, got {type(data).__name__}")
    return data
