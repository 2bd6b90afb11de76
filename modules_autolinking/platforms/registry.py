"""Registry of platform capabilities, keyed by platform identifier.

Built-in platforms are registered when the registry is created. Other
packages can contribute platforms through the `modules_autolinking.platforms`
entry point group in their pyproject.toml:

```toml
[project.entry-points."modules_autolinking.platforms"]
web = "my_package.linking:WebPlatform"
```

The entry point must load a PlatformLinking subclass (or instance); its name
is the platform identifier.
"""

from __future__ import annotations

import logging
from importlib.metadata import entry_points

from ..errors import UnsupportedPlatformError
from .android import AndroidPlatform
from .base import PlatformLinking
from .ios import IosPlatform

logger = logging.getLogger(__name__)

PLATFORMS_GROUP = "modules_autolinking.platforms"


class PlatformRegistry:
    """Explicit mapping of platform identifiers to capabilities."""

    def __init__(self) -> None:
        self._platforms: dict[str, PlatformLinking] = {}

    def register(self, platform: PlatformLinking, name: str | None = None) -> None:
        """Register a capability under `name` (default: `platform.name`).

        A later registration for the same name replaces the earlier one.
        """
        key = name or platform.name
        if not key:
            raise ValueError(f"Cannot register {platform!r} without a platform name")
        if key in self._platforms:
            logger.debug(f"Replacing platform '{key}': {self._platforms[key]!r} -> {platform!r}")
        self._platforms[key] = platform

    def get(self, name: str) -> PlatformLinking:
        """Get the capability for a platform.

        Raises:
            UnsupportedPlatformError: No capability is registered for `name`
        """
        platform = self._platforms.get(name)
        if platform is None:
            available = ", ".join(self.names()) or "none"
            raise UnsupportedPlatformError(name, f"Platform '{name}' is not supported. Available: {available}")
        return platform

    def names(self) -> list[str]:
        return sorted(self._platforms)

    def __contains__(self, name: object) -> bool:
        return name in self._platforms


def load_platform_plugins(registry: PlatformRegistry) -> None:
    """Register platforms published through entry points."""
    for entry_point in entry_points(group=PLATFORMS_GROUP):
        loaded = entry_point.load()
        platform = loaded() if isinstance(loaded, type) else loaded
        if not isinstance(platform, PlatformLinking):
            raise TypeError(f"Entry point '{entry_point.name}' does not provide a PlatformLinking: {loaded!r}")
        registry.register(platform, name=entry_point.name)
        logger.debug(f"Registered platform '{entry_point.name}' from {entry_point.value}")


def create_platform_registry(*, load_plugins: bool = True) -> PlatformRegistry:
    """Create a registry with the built-in platforms (and plugins, if enabled)."""
    registry = PlatformRegistry()
    registry.register(IosPlatform())
    registry.register(AndroidPlatform())
    if load_plugins:
        load_platform_plugins(registry)
    return registry
