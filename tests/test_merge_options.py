"""Tests for layered autolinking options."""

import pytest
from pydantic import ValidationError

from modules_autolinking.config_loader import ConfigLoader
from modules_autolinking.errors import ConfigParseError
from modules_autolinking.merge_utils import get_autolinking_config
from modules_autolinking.merge_utils import merge_linking_options
from modules_autolinking.merge_utils import merge_linking_options_async
from modules_autolinking.schema import GenerateOptions
from modules_autolinking.schema import ResolveOptions
from modules_autolinking.schema import SearchOptions


class TestMergeLinkingOptions:
    def test_later_layers_win(self):
        base = {"exclude": ["a"], "searchPaths": ["base"], "ios": {"exclude": ["b"]}}

        assert merge_linking_options(base, "ios", {"platform": "ios"}) == {
            "exclude": ["b"],
            "searchPaths": ["base"],
            "platform": "ios",
        }
        assert merge_linking_options(base, "ios", {"platform": "ios", "exclude": ["c"]})["exclude"] == ["c"]

    def test_platform_section_only_for_requested_platform(self):
        base = {"exclude": ["a"], "ios": {"exclude": ["b"]}}

        assert merge_linking_options(base, "android", {"platform": "android"})["exclude"] == ["a"]

    def test_merge_is_shallow(self):
        base = {"flags": {"inhibit_warnings": True, "modular_headers": False}, "ios": {"flags": {"modular_headers": True}}}

        merged = merge_linking_options(base, "ios", {"platform": "ios"})

        assert merged["flags"] == {"modular_headers": True}

    def test_lists_are_replaced_not_combined(self):
        merged = merge_linking_options({"searchPaths": ["a", "b"]}, "ios", {"searchPaths": ["c"]})

        assert merged["searchPaths"] == ["c"]

    def test_none_in_provided_layer_does_not_override(self):
        merged = merge_linking_options({"searchPaths": ["a"]}, "ios", {"platform": "ios", "searchPaths": None})

        assert merged["searchPaths"] == ["a"]

    def test_only_overridable_keys_are_kept(self):
        base = {"exclude": ["a"], "ios": {"exclude": ["b"]}, "android": {}, "unknown": 1}

        merged = merge_linking_options(base, "ios", {"platform": "ios", "other": 2})

        assert set(merged) == {"exclude", "platform"}

    def test_accepts_snake_case_search_paths(self):
        merged = merge_linking_options({}, "ios", {"platform": "ios", "search_paths": ["x"]})

        assert merged["searchPaths"] == ["x"]

    def test_missing_base(self):
        assert merge_linking_options(None, "ios", {"platform": "ios"}) == {"platform": "ios"}

    def test_non_object_platform_section_is_ignored(self):
        merged = merge_linking_options({"ios": ["not", "an", "object"]}, "ios", {"platform": "ios"})

        assert merged == {"platform": "ios"}


@pytest.mark.parametrize(
    "manifest, expected",
    [
        ({"name": "app"}, {}),
        ({"expo": {}}, {}),
        ({"expo": "invalid"}, {}),
        ({"expo": {"autolinking": {"exclude": ["a"]}}}, {"exclude": ["a"]}),
    ],
)
def test_get_autolinking_config(manifest, expected):
    assert get_autolinking_config(manifest) == expected


class TestMergeLinkingOptionsAsync:
    @pytest.mark.asyncio
    async def test_reads_root_manifest(self, tmp_path, json_file):
        json_file(
            tmp_path / "package.json",
            {
                "name": "app",
                "expo": {
                    "autolinking": {
                        "searchPaths": ["../shared/node_modules"],
                        "exclude": ["a"],
                        "android": {"exclude": ["b"]},
                    }
                },
            },
        )

        options = await merge_linking_options_async({"platform": "android"}, cwd=tmp_path)

        assert isinstance(options, SearchOptions)
        assert options.platform == "android"
        assert options.exclude == ["b"]
        assert options.search_paths == [tmp_path.parent / "shared" / "node_modules"]

    @pytest.mark.asyncio
    async def test_manifest_found_from_nested_directory(self, tmp_path, json_file):
        json_file(tmp_path / "package.json", {"expo": {"autolinking": {"exclude": ["a"]}}})
        nested = tmp_path / "src" / "screens"
        nested.mkdir(parents=True)

        options = await merge_linking_options_async({"platform": "ios"}, cwd=nested)

        assert options.exclude == ["a"]
        # Default search paths are looked up from cwd
        assert options.search_paths == [tmp_path / "node_modules"]

    @pytest.mark.asyncio
    async def test_missing_manifest_is_empty_base(self, tmp_path):
        options = await merge_linking_options_async({"platform": "ios", "exclude": ["x"]}, cwd=tmp_path)

        assert options.exclude == ["x"]
        assert options.search_paths == []

    @pytest.mark.asyncio
    async def test_provided_search_paths_override_manifest(self, tmp_path, json_file):
        json_file(tmp_path / "package.json", {"expo": {"autolinking": {"searchPaths": ["from-manifest"]}}})

        options = await merge_linking_options_async({"platform": "ios", "searchPaths": ["from-cli"]}, cwd=tmp_path)

        assert options.search_paths == [tmp_path / "from-cli"]

    @pytest.mark.asyncio
    async def test_keeps_options_class_of_model_input(self, tmp_path):
        provided = GenerateOptions(platform="android", target=tmp_path / "PackageList.java", namespace="com.app")

        options = await merge_linking_options_async(provided, cwd=tmp_path)

        assert isinstance(options, GenerateOptions)
        assert options.target == tmp_path / "PackageList.java"
        assert options.namespace == "com.app"

    @pytest.mark.asyncio
    async def test_options_class_for_mapping_input(self, tmp_path, json_file):
        json_file(tmp_path / "package.json", {"expo": {"autolinking": {"ios": {"flags": {"inhibit_warnings": True}}}}})

        options = await merge_linking_options_async({"platform": "ios"}, cwd=tmp_path, options_class=ResolveOptions)

        assert isinstance(options, ResolveOptions)
        assert options.flags == {"inhibit_warnings": True}

    @pytest.mark.asyncio
    async def test_result_is_immutable(self, tmp_path):
        options = await merge_linking_options_async({"platform": "ios"}, cwd=tmp_path)

        with pytest.raises(ValidationError):
            options.platform = "android"

    @pytest.mark.asyncio
    async def test_missing_platform_is_invalid(self, tmp_path):
        with pytest.raises(ValidationError):
            await merge_linking_options_async({}, cwd=tmp_path)

    @pytest.mark.asyncio
    async def test_malformed_manifest_is_fatal(self, tmp_path):
        (tmp_path / "package.json").write_text("{")

        with pytest.raises(ConfigParseError) as exc_info:
            await merge_linking_options_async({"platform": "ios"}, cwd=tmp_path)

        assert exc_info.value.path == tmp_path / "package.json"

    @pytest.mark.asyncio
    async def test_manifest_read_through_loader(self, tmp_path, json_file):
        json_file(tmp_path / "package.json", {"expo": {"autolinking": {"exclude": ["a"]}}})
        loader = ConfigLoader()

        await merge_linking_options_async({"platform": "ios"}, cwd=tmp_path, loader=loader)
        json_file(tmp_path / "package.json", {"expo": {"autolinking": {"exclude": ["b"]}}})

        cached = await merge_linking_options_async({"platform": "ios"}, cwd=tmp_path, loader=loader)
        fresh = await merge_linking_options_async({"platform": "ios"}, cwd=tmp_path)

        assert cached.exclude == ["a"]
        assert fresh.exclude == ["b"]


class TestConfigLoader:
    @pytest.mark.asyncio
    async def test_cache_disabled_reads_fresh_content(self, tmp_path, json_file):
        path = json_file(tmp_path / "config.json", {"v": 1})
        loader = ConfigLoader(cache=False)

        assert await loader.load_json_async(path) == {"v": 1}
        json_file(path, {"v": 2})
        assert await loader.load_json_async(path) == {"v": 2}

    @pytest.mark.asyncio
    async def test_clear_drops_cached_content(self, tmp_path, json_file):
        path = json_file(tmp_path / "config.json", {"v": 1})
        loader = ConfigLoader()

        await loader.load_json_async(path)
        json_file(path, {"v": 2})
        loader.clear()

        assert await loader.load_json_async(path) == {"v": 2}

    @pytest.mark.asyncio
    async def test_non_object_json_is_rejected(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigParseError, match="expected a JSON object"):
            await ConfigLoader().load_json_async(path)
