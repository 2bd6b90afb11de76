"""Pydantic schemas for module configs and autolinking options."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class ModuleConfig(BaseModel):
    """Contents of a module config file (expo-module.config.json or unimodule.json)."""

    model_config = ConfigDict(extra="allow")

    platforms: list[str] = Field(default_factory=list, description="Platforms the module supports")

    def supports_platform(self, platform: str) -> bool:
        return platform in self.platforms


class SearchOptions(BaseModel):
    """Options used to find modules to link."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    platform: str = Field(..., description="Platform identifier (e.g., 'ios', 'android')")
    search_paths: list[Path] | None = Field(
        None, alias="searchPaths", description="Directories to scan, highest priority first"
    )
    exclude: list[str] | None = Field(None, description="Package names to skip")

    def is_excluded(self, package_name: str) -> bool:
        return package_name in (self.exclude or [])


class ResolveOptions(SearchOptions):
    """Options used to resolve modules to platform-specific descriptors."""

    flags: dict[str, Any] | None = Field(None, description="Extra flags passed through to descriptors")


class GenerateOptions(ResolveOptions):
    """Options used to generate the package list source file."""

    target: Path = Field(..., description="Path of the generated source file")
    namespace: str | None = Field(None, description="Namespace/package of the generated source")
