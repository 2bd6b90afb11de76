"""Platform capability interface.

A platform capability knows how to turn a discovered package into a
platform-specific module descriptor, and optionally how to emit the source
file listing all linked modules.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..errors import UnsupportedPlatformError
from ..models import ModuleDescriptor
from ..models import PackageRevision
from ..schema import ResolveOptions


class PlatformLinking:
    """Base class for platform capabilities.

    Subclasses set `name` and implement resolve_module_async. Platforms that
    can emit a package list also override generate_package_list_async.
    """

    name: str = ""

    async def resolve_module_async(
        self,
        package_name: str,
        revision: PackageRevision,
        options: ResolveOptions,
    ) -> dict[str, Any] | None:
        """Resolve a package to platform-specific descriptor fields.

        Returns:
            Descriptor fields, or None if the package has nothing to link
            on this platform
        """
        raise NotImplementedError

    async def generate_package_list_async(
        self,
        modules: list[ModuleDescriptor],
        target: Path,
        namespace: str | None,
    ) -> None:
        """Write a source file listing all modules to the target path.

        Raises:
            UnsupportedPlatformError: The platform has no package list emitter
        """
        raise UnsupportedPlatformError(
            self.name, f"Generating package list is not available for platform: {self.name}"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
