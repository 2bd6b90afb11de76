"""Discovery of linkable packages inside search paths.

Convention over configuration: a package is linkable when its directory,
directly inside a search path (`<search path>/<name>`) or inside a scope
(`<search path>/@<scope>/<name>`), contains a module config file declaring
the platforms it supports.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .config_loader import ConfigLoader
from .duplicates import DuplicateTracker
from .errors import ConfigParseError
from .merge_utils import merge_linking_options_async
from .models import PackageRevision
from .models import SearchResults
from .schema import ModuleConfig
from .schema import SearchOptions

logger = logging.getLogger(__name__)

# Names of the config files, from lowest to highest priority.
CONFIG_FILENAMES = ("unimodule.json", "expo-module.config.json")


@dataclass
class DiscoveredPackage:
    """A package found in a search path that supports the requested platform."""

    name: str
    revision: PackageRevision
    config: ModuleConfig


def config_priority(config_path: str | Path) -> int:
    """Priority of a config file by its name. Higher number means higher priority, -1 if unknown."""
    name = Path(config_path).name
    return CONFIG_FILENAMES.index(name) if name in CONFIG_FILENAMES else -1


def find_config_path(package_dir: Path) -> Path | None:
    """Return the highest-priority config file in a package directory, if any.

    Lower-priority files are ignored entirely, so a directory with both
    unimodule.json and expo-module.config.json only ever contributes the latter.
    """
    existing = [package_dir / name for name in CONFIG_FILENAMES if (package_dir / name).is_file()]
    if not existing:
        return None
    return max(existing, key=config_priority)


def _iter_visible_dirs(directory: Path) -> Iterator[Path]:
    try:
        entries = list(directory.iterdir())
    except (FileNotFoundError, NotADirectoryError):
        return
    for entry in entries:
        if not entry.name.startswith(".") and entry.is_dir():
            yield entry


def iter_package_dirs(search_path: Path) -> Iterator[Path]:
    """Yield first-level and scoped package directories in enumeration order."""
    for entry in _iter_visible_dirs(search_path):
        yield entry
        if entry.name.startswith("@"):
            yield from _iter_visible_dirs(entry)


async def discover_packages_async(
    search_path: str | Path,
    platform: str,
    exclude: list[str] | None = None,
    *,
    loader: ConfigLoader | None = None,
) -> list[DiscoveredPackage]:
    """Find packages in one search path that can be linked for a platform.

    Args:
        search_path: Directory to scan (a missing directory yields nothing)
        platform: Requested platform; packages not declaring it are skipped
        exclude: Package names to skip
        loader: Config loader used to read configs and package manifests

    Returns:
        Discovered packages in filesystem enumeration order. The same
        package name may appear more than once; folding is up to the caller.

    Raises:
        ConfigParseError: A config file or package.json cannot be parsed
    """
    loader = loader or ConfigLoader()
    excluded = set(exclude or [])
    discovered: list[DiscoveredPackage] = []

    for package_dir in iter_package_dirs(Path(search_path)):
        config_path = find_config_path(package_dir)
        if config_path is None:
            continue

        # Symlinked installs (e.g., workspaces) collapse to one canonical path
        package_path = package_dir.resolve()
        config = await loader.load_module_config_async(package_path / config_path.name)
        manifest = await loader.load_package_manifest_async(package_path)

        name = manifest.get("name")
        if not isinstance(name, str) or not name:
            raise ConfigParseError(package_path / "package.json", "missing package name")

        if name in excluded:
            logger.debug(f"Skipping {name}: excluded")
            continue
        if not config.supports_platform(platform):
            logger.debug(f"Skipping {name}: does not support platform '{platform}'")
            continue

        revision = PackageRevision(path=package_path, version=str(manifest.get("version", "")))
        discovered.append(DiscoveredPackage(name=name, revision=revision, config=config))

    return discovered


async def find_modules_async(
    options: SearchOptions | dict,
    *,
    cwd: str | Path | None = None,
    loader: ConfigLoader | None = None,
) -> SearchResults:
    """Search for modules to link based on the given options.

    Options are first merged with the root package.json (see
    merge_linking_options_async). Search paths are then scanned one after
    another; the revision found first for a name becomes the primary one.

    Args:
        options: Search options from the caller
        cwd: Working directory (default: process cwd)
        loader: Config loader shared by the merge and discovery steps

    Returns:
        Mapping of module name to its primary revision
    """
    loader = loader or ConfigLoader()
    effective = await merge_linking_options_async(options, cwd=cwd, loader=loader)
    tracker = DuplicateTracker()

    for search_path in effective.search_paths or []:
        packages = await discover_packages_async(search_path, effective.platform, effective.exclude, loader=loader)
        logger.debug(f"Found {len(packages)} package(s) for {effective.platform} in {search_path}")
        for package in packages:
            tracker.add(package.name, package.revision)

    return tracker.results
