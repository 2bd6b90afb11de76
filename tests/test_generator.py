"""Tests for package list generation."""

import json
import logging

import pytest
from rich.console import Console

from modules_autolinking.generator import generate_package_list_async
from modules_autolinking.platforms import PlatformLinking
from modules_autolinking.platforms import PlatformRegistry
from modules_autolinking.platforms import create_platform_registry
from modules_autolinking.schema import GenerateOptions

MODULES = [
    {"packageName": "alpha", "packageVersion": "1.0.0"},
    {"packageName": "beta", "packageVersion": "2.0.0"},
]


class JsonListPlatform(PlatformLinking):
    """Writes the package names as JSON, to check what the emitter receives."""

    name = "json"

    async def resolve_module_async(self, package_name, revision, options):
        return {}

    async def generate_package_list_async(self, modules, target, namespace):
        target.write_text(json.dumps({"namespace": namespace, "packages": [m["packageName"] for m in modules]}))


class BrokenPlatform(JsonListPlatform):
    name = "broken"

    async def generate_package_list_async(self, modules, target, namespace):
        raise OSError("disk full")


@pytest.fixture
def registry():
    registry = PlatformRegistry()
    registry.register(JsonListPlatform())
    registry.register(BrokenPlatform())
    return registry


@pytest.fixture
def recording_console():
    return Console(record=True, width=200, force_terminal=False)


@pytest.mark.asyncio
async def test_delegates_to_platform_emitter(tmp_path, registry, recording_console):
    target = tmp_path / "PackageList.json"
    options = GenerateOptions(platform="json", target=target, namespace="com.example")

    result = await generate_package_list_async(MODULES, options, registry=registry, console=recording_console)

    assert result.generated
    assert result.reason is None
    assert json.loads(target.read_text()) == {"namespace": "com.example", "packages": ["alpha", "beta"]}
    assert recording_console.export_text() == ""


@pytest.mark.asyncio
async def test_unknown_platform_is_reported_not_raised(tmp_path, registry, recording_console, caplog):
    target = tmp_path / "PackageList.java"
    options = GenerateOptions(platform="windows", target=target)

    with caplog.at_level(logging.ERROR):
        result = await generate_package_list_async(MODULES, options, registry=registry, console=recording_console)

    assert not result.generated
    assert result.platform == "windows"
    assert "not supported" in result.reason
    assert not target.exists()
    assert "Generating package list is not available for platform: windows" in recording_console.export_text()
    assert "windows" in caplog.text


@pytest.mark.asyncio
async def test_builtin_platform_without_emitter_is_reported(tmp_path, recording_console):
    target = tmp_path / "ExpoModulesProvider.swift"
    options = GenerateOptions(platform="ios", target=target)

    result = await generate_package_list_async(
        MODULES, options, registry=create_platform_registry(load_plugins=False), console=recording_console
    )

    assert not result.generated
    assert not target.exists()
    assert "not available for platform: ios" in recording_console.export_text()


@pytest.mark.asyncio
async def test_emitter_errors_propagate(tmp_path, registry, recording_console):
    options = GenerateOptions(platform="broken", target=tmp_path / "out")

    with pytest.raises(OSError, match="disk full"):
        await generate_package_list_async(MODULES, options, registry=registry, console=recording_console)
