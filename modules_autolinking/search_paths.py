"""Search path resolution for autolinking.

Search paths are the directories scanned for linkable packages, in priority
order: a package found through an earlier path wins over a package with the
same name found through a later one.

When no search paths are configured, every node_modules directory that sits
next to a package.json on the way up from the working directory is used,
innermost first. This makes nested workspaces (an app inside a monorepo)
work without any configuration.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .config_loader import PACKAGE_MANIFEST_FILENAME

logger = logging.getLogger(__name__)

MODULES_DIRNAME = "node_modules"


def find_up(filename: str, cwd: str | Path) -> Path | None:
    """Find the nearest file with the given name in cwd or any of its ancestors.

    Args:
        filename: File name to look for (e.g., "package.json")
        cwd: Directory to start from (relative paths are made absolute)

    Returns:
        Path to the file, or None if no ancestor contains it
    """
    start = Path(os.path.abspath(cwd))
    for directory in (start, *start.parents):
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


async def find_package_json_path_async(cwd: str | Path) -> Path | None:
    """Find the project's package.json, starting from cwd."""
    return find_up(PACKAGE_MANIFEST_FILENAME, cwd)


async def find_default_paths_async(cwd: str | Path) -> list[Path]:
    """Collect node_modules directories of all enclosing packages.

    Starting at cwd, finds the nearest package.json, records its sibling
    node_modules directory, then continues from the directory above the one
    holding that manifest. Stops when no further package.json is found.

    Args:
        cwd: Directory to start from

    Returns:
        node_modules paths ordered innermost to outermost (possibly empty)

    Example:
        For /repo/apps/mobile/package.json and /repo/package.json, starting
        from /repo/apps/mobile/src this returns
        [/repo/apps/mobile/node_modules, /repo/node_modules].
    """
    paths: list[Path] = []
    directory = Path(os.path.abspath(cwd))

    while (manifest_path := find_up(PACKAGE_MANIFEST_FILENAME, directory)) is not None:
        package_dir = manifest_path.parent
        paths.append(package_dir / MODULES_DIRNAME)
        if package_dir.parent == package_dir:
            # Manifest at the filesystem root
            break
        directory = package_dir.parent

    logger.debug(f"Default search paths from {cwd}: {[str(p) for p in paths]}")
    return paths


async def resolve_search_paths_async(search_paths: list[str | Path] | None, cwd: str | Path) -> list[Path]:
    """Resolve configured search paths, falling back to the default ones.

    Args:
        search_paths: Explicit search paths; relative entries are resolved
            against cwd and their order is kept
        cwd: Base directory for relative paths and for default lookup

    Returns:
        Absolute search paths in priority order
    """
    if search_paths:
        return [Path(os.path.abspath(os.path.join(cwd, search_path))) for search_path in search_paths]
    return await find_default_paths_async(cwd)
