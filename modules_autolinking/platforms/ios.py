"""iOS platform capability: links packages shipping a podspec."""

from __future__ import annotations

import logging
from typing import Any

from ..models import PackageRevision
from ..schema import ResolveOptions
from .base import PlatformLinking

logger = logging.getLogger(__name__)


class IosPlatform(PlatformLinking):
    name = "ios"

    async def resolve_module_async(
        self,
        package_name: str,
        revision: PackageRevision,
        options: ResolveOptions,
    ) -> dict[str, Any] | None:
        podspecs = sorted(p for p in revision.path.glob("*/*.podspec") if p.parent.name != "node_modules")
        if not podspecs:
            logger.debug(f"{package_name} has no podspec, nothing to link for ios")
            return None

        podspec = podspecs[0]
        return {
            "podName": podspec.stem,
            "podspecDir": str(podspec.parent),
            "flags": options.flags,
        }
