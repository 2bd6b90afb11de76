"""Resolution of search results into platform-specific module descriptors."""

from __future__ import annotations

import asyncio
import logging
from typing import Literal

from .models import ModuleDescriptor
from .models import PrimaryRevision
from .models import SearchResults
from .platforms import PlatformLinking
from .platforms import PlatformRegistry
from .platforms import create_platform_registry
from .schema import ResolveOptions

logger = logging.getLogger(__name__)

# "fail-fast": one failing package aborts the whole resolution.
# "isolate": failing packages are logged and left out of the result.
FailurePolicy = Literal["fail-fast", "isolate"]


async def _resolve_one(
    platform: PlatformLinking,
    package_name: str,
    revision: PrimaryRevision,
    options: ResolveOptions,
) -> ModuleDescriptor | None:
    resolved = await platform.resolve_module_async(package_name, revision, options)
    if not resolved:
        return None
    return {
        "packageName": package_name,
        "packageVersion": revision.version,
        **resolved,
    }


async def resolve_modules_async(
    search_results: SearchResults,
    options: ResolveOptions,
    *,
    registry: PlatformRegistry | None = None,
    failure_policy: FailurePolicy = "fail-fast",
) -> list[ModuleDescriptor]:
    """Resolve search results to a list of platform-specific descriptors.

    All packages are resolved concurrently by the capability registered for
    `options.platform`. Packages the capability returns nothing for are
    dropped.

    Args:
        search_results: Results of find_modules_async
        options: Effective resolve options
        registry: Platform registry (default: built-in and plugin platforms)
        failure_policy: What to do when resolving a package raises

    Returns:
        Descriptors sorted by package name

    Raises:
        UnsupportedPlatformError: No capability for `options.platform`
        Exception: Any capability error, under the "fail-fast" policy
    """
    if failure_policy not in ("fail-fast", "isolate"):
        raise ValueError(f"Unknown failure policy: {failure_policy}")

    registry = registry or create_platform_registry()
    platform = registry.get(options.platform)

    names = list(search_results)
    tasks = [_resolve_one(platform, name, search_results[name], options) for name in names]

    if failure_policy == "fail-fast":
        outcomes = await asyncio.gather(*tasks)
    else:
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

    modules: list[ModuleDescriptor] = []
    for name, outcome in zip(names, outcomes, strict=True):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            logger.error(f"Failed to resolve {name} for {options.platform}: {outcome}")
            continue
        if outcome is not None:
            modules.append(outcome)

    return sorted(modules, key=lambda module: module["packageName"])
