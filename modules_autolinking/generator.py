"""Generation of the source file listing all linked modules."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .errors import UnsupportedPlatformError
from .models import ModuleDescriptor
from .platforms import PlatformRegistry
from .platforms import create_platform_registry
from .schema import GenerateOptions

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Outcome of a package list generation."""

    platform: str
    target: Path
    generated: bool
    reason: str | None = None


async def generate_package_list_async(
    modules: list[ModuleDescriptor],
    options: GenerateOptions,
    *,
    registry: PlatformRegistry | None = None,
    console: Console | None = None,
) -> GenerationResult:
    """Generate a source file listing all modules to link.

    The platform's emitter writes the file. A platform that is unknown or has
    no emitter is reported and skipped; it is not an error.

    Args:
        modules: Resolved module descriptors
        options: Effective generate options (platform, target, namespace)
        registry: Platform registry (default: built-in and plugin platforms)
        console: Console for the report (default: shared console)

    Returns:
        GenerationResult telling whether the file was generated
    """
    registry = registry or create_platform_registry()

    try:
        platform = registry.get(options.platform)
        await platform.generate_package_list_async(modules, options.target, options.namespace)
    except UnsupportedPlatformError as e:
        if console is None:
            from .console import console
        logger.error(f"Package list not generated for {options.platform}: {e.message}")
        console.print(f"[red]Generating package list is not available for platform: {escape(options.platform)}[/red]")
        return GenerationResult(platform=options.platform, target=options.target, generated=False, reason=e.message)

    logger.info(f"Generated package list with {len(modules)} module(s) at {options.target}")
    return GenerationResult(platform=options.platform, target=options.target, generated=True)
