"""Folding of discovered packages into search results, and duplicate reporting."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .models import PackageRevision
from .models import PrimaryRevision
from .models import SearchResults

logger = logging.getLogger(__name__)


class DuplicateTracker:
    """Builds SearchResults from revisions discovered in priority order.

    The first revision found for a name becomes the primary one. Later
    revisions at another path are recorded once as duplicates; finding the
    primary's own path again changes nothing.
    """

    def __init__(self) -> None:
        self._results: SearchResults = {}
        self._seen_paths: dict[str, set[Path]] = {}

    def add(self, name: str, revision: PackageRevision) -> bool:
        """Record a discovered revision.

        Returns:
            True if the revision was recorded (as primary or duplicate),
            False if its path was already known for this name
        """
        seen = self._seen_paths.get(name)
        if seen is None:
            self._results[name] = PrimaryRevision.from_revision(revision)
            self._seen_paths[name] = {revision.path}
            return True

        if revision.path in seen:
            return False

        seen.add(revision.path)
        self._results[name].duplicates.append(revision)
        logger.debug(f"Found duplicate of {name} at {revision.path}")
        return True

    @property
    def results(self) -> SearchResults:
        return self._results


def verify_search_results(
    search_results: SearchResults,
    *,
    cwd: str | Path | None = None,
    console: Console | None = None,
) -> int:
    """Report modules that were found at more than one location.

    Does not modify the results.

    Args:
        search_results: Results of a module search
        cwd: Base for the relative paths shown (default: process cwd)
        console: Console to print to (default: shared console)

    Returns:
        Number of module names with at least one duplicate
    """
    if console is None:
        from .console import console

    base = os.path.abspath(cwd) if cwd is not None else os.getcwd()

    def relative_path(revision: PackageRevision) -> str:
        return escape(os.path.relpath(revision.path, base))

    counter = 0
    for module_name, revision in search_results.items():
        if not revision.duplicates:
            continue

        logger.warning(f"Found multiple revisions of {module_name}")
        console.print(f"[yellow]⚠️  Found multiple revisions of[/yellow] [green]{escape(module_name)}[/green]")
        console.print(f" - [magenta]{relative_path(revision)}[/magenta] ([cyan]{escape(revision.version)}[/cyan])")
        for duplicate in revision.duplicates:
            console.print(f" - [dim]{relative_path(duplicate)} ({escape(duplicate.version)})[/dim]")
        counter += 1

    if counter > 0:
        console.print(
            "[yellow]⚠️  Please get rid of multiple revisions as it may introduce "
            "some side effects or compatibility issues[/yellow]"
        )
    return counter
