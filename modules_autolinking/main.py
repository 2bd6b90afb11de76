"""Command-line interface for modules autolinking."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from collections.abc import Coroutine
from pathlib import Path
from typing import Any
from typing import TypeVar

import click
from pydantic import ValidationError
from rich.table import Table

from .config_loader import ConfigLoader
from .console import console
from .console import error_console
from .discovery import find_modules_async
from .duplicates import verify_search_results
from .errors import AutolinkingError
from .generator import generate_package_list_async
from .logging_setup import init_json_logging
from .merge_utils import merge_linking_options_async
from .models import SearchResults
from .models import search_results_to_dict
from .platforms import create_platform_registry
from .resolution import resolve_modules_async
from .schema import GenerateOptions
from .schema import ResolveOptions
from .schema import SearchOptions
from .utils.error_format import escape_markup
from .utils.error_format import format_error_message

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _run(ctx: click.Context, coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine, reporting autolinking errors without a traceback."""
    try:
        return asyncio.run(coro)
    except (AutolinkingError, ValidationError) as e:
        logger.error(f"Command failed: {e}")
        error_console.print(
            f"[red]Error:[/red] {escape_markup(format_error_message(e, include_type=False))}", soft_wrap=True
        )
        if ctx.obj.get("verbose"):
            error_console.print_exception()
        ctx.exit(1)


def _provided_options(
    platform: str,
    search_paths: tuple[str, ...],
    exclude: tuple[str, ...],
    **extra: Any,
) -> dict[str, Any]:
    # Empty values mean "not provided" so the package.json layers apply
    return {
        "platform": platform,
        "searchPaths": list(search_paths) or None,
        "exclude": list(exclude) or None,
        **extra,
    }


def search_options(func: Callable) -> Callable:
    """Options shared by every command that searches for modules."""
    func = click.argument("search_paths", nargs=-1, type=click.Path(file_okay=False))(func)
    func = click.option(
        "--exclude", "-e", multiple=True, help="Package name to exclude (can be repeated)"
    )(func)
    func = click.option(
        "--platform", "-p", default="ios", show_default=True, help="Platform to link modules for"
    )(func)
    return func


def _print_search_results(results: SearchResults) -> None:
    if not results:
        console.print("[dim]No modules found[/dim]")
        return

    table = Table(title="Modules to link", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="green")
    table.add_column("Version", style="cyan")
    table.add_column("Path", style="magenta")
    table.add_column("Duplicates", justify="right")

    for name, revision in results.items():
        table.add_row(name, revision.version, str(revision.path), str(len(revision.duplicates)))
    console.print(table)


@click.group()
@click.version_option(package_name="modules-autolinking")
@click.option("--verbose", "-v", is_flag=True, help="Show tracebacks for errors")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write JSONL logs to this file (default: $AUTOLINKING_LOG_PATH)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, log_file: str | None):
    """Find, verify and resolve native modules to link automatically."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    init_json_logging(log_file)


@cli.command()
@search_options
@click.option("--json", "-j", "as_json", is_flag=True, help="Output results as JSON")
@click.pass_context
def search(ctx: click.Context, platform: str, exclude: tuple[str, ...], search_paths: tuple[str, ...], as_json: bool):
    """Search for modules that can be linked for a platform."""
    provided = _provided_options(platform, search_paths, exclude)
    results = _run(ctx, find_modules_async(SearchOptions.model_validate(provided)))

    if as_json:
        click.echo(json.dumps(search_results_to_dict(results), indent=2))
    else:
        _print_search_results(results)


@cli.command()
@search_options
@click.pass_context
def verify(ctx: click.Context, platform: str, exclude: tuple[str, ...], search_paths: tuple[str, ...]):
    """Check that no module was found at more than one location."""
    provided = _provided_options(platform, search_paths, exclude)
    results = _run(ctx, find_modules_async(SearchOptions.model_validate(provided)))

    if verify_search_results(results) == 0:
        console.print(f"[green]✓ No duplicates among {len(results)} module(s)[/green]")


async def _search_and_resolve(
    provided: dict[str, Any],
    options_class: type[ResolveOptions],
) -> tuple[ResolveOptions, list[dict[str, Any]]]:
    loader = ConfigLoader()
    options = await merge_linking_options_async(provided, loader=loader, options_class=options_class)
    results = await find_modules_async(options, loader=loader)
    modules = await resolve_modules_async(results, options, registry=create_platform_registry())
    return options, modules


@cli.command()
@search_options
@click.option("--json", "-j", "as_json", is_flag=True, help="Output results as JSON")
@click.pass_context
def resolve(ctx: click.Context, platform: str, exclude: tuple[str, ...], search_paths: tuple[str, ...], as_json: bool):
    """Resolve found modules to platform-specific descriptors."""
    provided = _provided_options(platform, search_paths, exclude)
    _options, modules = _run(ctx, _search_and_resolve(provided, ResolveOptions))

    if as_json:
        click.echo(json.dumps({"modules": modules}, indent=2))
        return

    if not modules:
        console.print("[dim]No modules to link[/dim]")
        return
    for module in modules:
        console.print(
            f"[green]{escape_markup(module['packageName'])}[/green] "
            f"([cyan]{escape_markup(module['packageVersion'])}[/cyan])"
        )


async def _generate(provided: dict[str, Any]):
    options, modules = await _search_and_resolve(provided, GenerateOptions)
    assert isinstance(options, GenerateOptions)
    return await generate_package_list_async(modules, options, registry=create_platform_registry())


@cli.command("generate-package-list")
@search_options
@click.option("--target", "-t", required=True, type=click.Path(dir_okay=False), help="Path of the generated file")
@click.option("--namespace", "-n", default=None, help="Namespace of the generated file")
@click.pass_context
def generate_package_list(
    ctx: click.Context,
    platform: str,
    exclude: tuple[str, ...],
    search_paths: tuple[str, ...],
    target: str,
    namespace: str | None,
):
    """Generate the source file listing all modules to link."""
    provided = _provided_options(platform, search_paths, exclude, target=str(Path(target).absolute()), namespace=namespace)
    result = _run(ctx, _generate(provided))

    if result.generated:
        console.print(f"[green]✓ Generated package list at {escape_markup(result.target)}[/green]")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
