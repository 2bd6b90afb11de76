"""Data types shared across the search, resolve and generate steps."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Any

# Descriptor produced by a platform capability, plus packageName/packageVersion.
ModuleDescriptor = dict[str, Any]


@dataclass
class PackageRevision:
    """One on-disk location claiming to provide a named module."""

    path: Path
    version: str

    def to_dict(self) -> dict[str, Any]:
        return {"path": str(self.path), "version": self.version}


@dataclass
class PrimaryRevision(PackageRevision):
    """The first-discovered revision of a module and any other copies found later.

    Attributes:
        path: Canonical (symlink-resolved) package directory
        version: Version read from the package manifest
        duplicates: Revisions with the same name at other physical paths,
            in discovery order
    """

    duplicates: list[PackageRevision] = field(default_factory=list)

    @classmethod
    def from_revision(cls, revision: PackageRevision) -> PrimaryRevision:
        return cls(path=revision.path, version=revision.version)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["duplicates"] = [duplicate.to_dict() for duplicate in self.duplicates]
        return result


# Module name -> primary revision, in discovery order.
SearchResults = dict[str, PrimaryRevision]


def search_results_to_dict(results: SearchResults) -> dict[str, Any]:
    """Convert search results to a JSON-serializable mapping."""
    return {name: revision.to_dict() for name, revision in results.items()}
