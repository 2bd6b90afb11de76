"""Merge utilities for autolinking options.

Options come from three layers, the later the higher priority:

1. options defined in the root package.json (`expo.autolinking`)
2. platform-specific options from the above (e.g., `expo.autolinking.ios`)
3. options provided by the caller (e.g., CLI flags)

Merging is shallow: a key present in a later layer replaces the whole value
from earlier layers. Lists such as `searchPaths` or `exclude` are replaced,
never combined.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from typing import TypeVar

from pydantic import BaseModel

from .config_loader import ConfigLoader
from .schema import SearchOptions
from .search_paths import find_package_json_path_async
from .search_paths import resolve_search_paths_async

logger = logging.getLogger(__name__)

OptionsType = TypeVar("OptionsType", bound=SearchOptions)

# Keys that a layer may set. Anything else in a layer (including the
# platform sub-sections of the base layer) is not carried into the result.
OVERRIDABLE_KEYS = frozenset({
    "platform",
    "searchPaths",
    "exclude",
    "flags",
    "target",
    "namespace",
})

# Python-side spellings accepted in the provided layer.
_KEY_ALIASES = {"search_paths": "searchPaths"}

# Location of the autolinking section inside the root package.json.
AUTOLINKING_CONFIG_PATH = ("expo", "autolinking")


def get_autolinking_config(manifest: Mapping[str, Any]) -> dict[str, Any]:
    """Extract the autolinking section from a root manifest.

    Returns an empty dict when the section is missing or not an object.
    """
    section: Any = manifest
    for key in AUTOLINKING_CONFIG_PATH:
        if not isinstance(section, Mapping):
            return {}
        section = section.get(key)
    return dict(section) if isinstance(section, Mapping) else {}


def merge_linking_options(
    base_config: Mapping[str, Any] | None,
    platform: str | None,
    provided: Mapping[str, Any],
) -> dict[str, Any]:
    """Merge the three option layers into one dict.

    Args:
        base_config: Autolinking section of the root manifest (may be None)
        platform: Requested platform; selects `base_config[platform]`
        provided: Explicitly provided options; None values count as not provided

    Returns:
        Merged options limited to OVERRIDABLE_KEYS, keyed by their JSON names
    """
    base_config = base_config or {}
    platform_config = base_config.get(platform) if platform else None
    if not isinstance(platform_config, Mapping):
        platform_config = {}

    provided_layer = {_KEY_ALIASES.get(key, key): value for key, value in provided.items() if value is not None}

    merged: dict[str, Any] = {}
    for layer in (base_config, platform_config, provided_layer):
        for key, value in layer.items():
            if key in OVERRIDABLE_KEYS:
                merged[key] = value
    return merged


async def merge_linking_options_async(
    provided: OptionsType | Mapping[str, Any],
    *,
    cwd: str | Path | None = None,
    loader: ConfigLoader | None = None,
    options_class: type[OptionsType] | None = None,
) -> OptionsType:
    """Build the effective options for a search/resolve/generate run.

    Looks up the nearest package.json from cwd, merges its autolinking
    options with the provided ones, then makes the search paths absolute or
    falls back to the default node_modules paths when none were given.

    Args:
        provided: Options from the caller, as a model or a plain mapping
        cwd: Working directory (default: process cwd)
        loader: Config loader to read the manifest with (default: fresh loader)
        options_class: Model to validate into (default: type of `provided`,
            or SearchOptions for mappings)

    Returns:
        Frozen options with absolute `search_paths`

    Raises:
        ConfigParseError: The root package.json exists but cannot be parsed
        pydantic.ValidationError: Merged options are invalid (e.g., no platform)
    """
    cwd = Path(cwd) if cwd is not None else Path.cwd()
    loader = loader or ConfigLoader()

    if isinstance(provided, BaseModel):
        provided_dict = provided.model_dump(by_alias=True, exclude_unset=True)
        options_class = options_class or type(provided)
    else:
        provided_dict = dict(provided)
    cls: type[Any] = options_class or SearchOptions

    manifest_path = await find_package_json_path_async(cwd)
    if manifest_path is not None:
        base_config = get_autolinking_config(await loader.load_json_async(manifest_path))
        logger.debug(f"Loaded autolinking options from {manifest_path}: {sorted(base_config)}")
    else:
        base_config = {}
        logger.debug(f"No package.json found from {cwd}, using provided options only")

    platform = provided_dict.get("platform")
    merged = merge_linking_options(base_config, platform, provided_dict)
    options = cls.model_validate(merged)

    search_paths = await resolve_search_paths_async(options.search_paths, cwd)
    return options.model_copy(update={"search_paths": search_paths})
