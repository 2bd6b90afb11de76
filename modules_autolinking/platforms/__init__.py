"""Platform capabilities used to resolve modules and generate package lists.

Public API:
- PlatformLinking: Base class for platform capabilities
- PlatformRegistry: Mapping of platform identifiers to capabilities
- create_platform_registry: Registry with built-in and plugin platforms
- IosPlatform, AndroidPlatform: Built-in platforms
"""

from .android import AndroidPlatform
from .base import PlatformLinking
from .ios import IosPlatform
from .registry import PLATFORMS_GROUP
from .registry import PlatformRegistry
from .registry import create_platform_registry
from .registry import load_platform_plugins

__all__ = [
    "PLATFORMS_GROUP",
    "AndroidPlatform",
    "IosPlatform",
    "PlatformLinking",
    "PlatformRegistry",
    "create_platform_registry",
    "load_platform_plugins",
]
