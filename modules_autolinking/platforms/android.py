"""Android platform capability: links packages shipping a Gradle project."""

from __future__ import annotations

import logging
import re
from typing import Any

from ..models import PackageRevision
from ..schema import ResolveOptions
from .base import PlatformLinking

logger = logging.getLogger(__name__)


def convert_package_name_to_project_name(package_name: str) -> str:
    """Turn an npm package name into a Gradle project name.

    Example:
        >>> convert_package_name_to_project_name("@scope/my.module")
        'scope-my-module'
    """
    return re.sub(r"\W+", "-", package_name.removeprefix("@"))


class AndroidPlatform(PlatformLinking):
    name = "android"

    async def resolve_module_async(
        self,
        package_name: str,
        revision: PackageRevision,
        options: ResolveOptions,
    ) -> dict[str, Any] | None:
        build_gradle = revision.path / "android" / "build.gradle"
        if not build_gradle.is_file():
            logger.debug(f"{package_name} has no android/build.gradle, nothing to link for android")
            return None

        return {
            "projectName": convert_package_name_to_project_name(package_name),
            "sourceDir": str(build_gradle.parent),
        }
