"""Shared fixtures for building node_modules trees on disk."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

_DEFAULT_CONFIG = object()


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))
    return path


@pytest.fixture
def make_package() -> Callable[..., Path]:
    """Create a package directory with a package.json and a module config.

    Usage:
        make_package(tmp_path / "node_modules", "foo", platforms=["ios"])
        make_package(search_path, "@scope/bar", config_filename="unimodule.json")
        make_package(search_path, "baz", config=None)  # no module config at all
    """

    def _make(
        search_path: Path,
        name: str,
        version: str = "1.0.0",
        platforms: list[str] | None = None,
        config_filename: str = "expo-module.config.json",
        config: dict | None | object = _DEFAULT_CONFIG,
        dirname: str | None = None,
    ) -> Path:
        package_dir = search_path / (dirname or name)
        write_json(package_dir / "package.json", {"name": name, "version": version})
        if config is _DEFAULT_CONFIG:
            config = {"platforms": platforms if platforms is not None else ["ios", "android"]}
        if config is not None:
            write_json(package_dir / config_filename, config)
        return package_dir

    return _make


@pytest.fixture
def json_file() -> Callable[[Path, object], Path]:
    """Write JSON content to a path, creating parent directories."""
    return write_json
