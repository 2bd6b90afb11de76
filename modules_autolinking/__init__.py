"""Modules autolinking - discover native modules in node_modules and link them.

Public API:
- resolve_search_paths_async: Absolute search paths, or the default node_modules chain
- merge_linking_options_async: Effective options from package.json and provided options
- find_modules_async: Search results (name -> primary revision with duplicates)
- verify_search_results: Report modules found at more than one location
- resolve_modules_async: Sorted platform-specific module descriptors
- generate_package_list_async: Emit the package list through the platform capability
"""

from .config_loader import ConfigLoader
from .discovery import CONFIG_FILENAMES
from .discovery import discover_packages_async
from .discovery import find_modules_async
from .duplicates import DuplicateTracker
from .duplicates import verify_search_results
from .errors import AutolinkingError
from .errors import ConfigParseError
from .errors import UnsupportedPlatformError
from .generator import GenerationResult
from .generator import generate_package_list_async
from .merge_utils import merge_linking_options
from .merge_utils import merge_linking_options_async
from .models import ModuleDescriptor
from .models import PackageRevision
from .models import PrimaryRevision
from .models import SearchResults
from .platforms import PlatformLinking
from .platforms import PlatformRegistry
from .platforms import create_platform_registry
from .resolution import resolve_modules_async
from .schema import GenerateOptions
from .schema import ModuleConfig
from .schema import ResolveOptions
from .schema import SearchOptions
from .search_paths import find_default_paths_async
from .search_paths import find_package_json_path_async
from .search_paths import resolve_search_paths_async

__all__ = [
    "CONFIG_FILENAMES",
    "AutolinkingError",
    "ConfigLoader",
    "ConfigParseError",
    "DuplicateTracker",
    "GenerateOptions",
    "GenerationResult",
    "ModuleConfig",
    "ModuleDescriptor",
    "PackageRevision",
    "PlatformLinking",
    "PlatformRegistry",
    "PrimaryRevision",
    "ResolveOptions",
    "SearchOptions",
    "SearchResults",
    "UnsupportedPlatformError",
    "create_platform_registry",
    "discover_packages_async",
    "find_default_paths_async",
    "find_modules_async",
    "find_package_json_path_async",
    "generate_package_list_async",
    "merge_linking_options",
    "merge_linking_options_async",
    "resolve_modules_async",
    "resolve_search_paths_async",
    "verify_search_results",
]
