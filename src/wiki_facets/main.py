# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Commands to fetch page links, categories, main image, infobox fields, and search results

import json as jsonlib
from collections.abc import Awaitable, Callable
from typing import Any

import asyncclick as click
from rich.console import Console

from wiki_facets.client import Wiki
from wiki_facets.config import get_config
from wiki_facets.errors import WikiFacetsError
from wiki_facets.page import WikiPage
from wiki_facets.utils.logging import (
    LoggingMode,
    configure_logging,
    get_logging_status,
    with_page_context,
)
from wiki_facets.utils.rich_tables import (
    create_infobox_table,
    create_key_value_table,
    create_list_table,
    create_logging_status_table,
    print_rich_table,
)

console = Console()


async def _with_page(ctx: click.Context, title: str, action: Callable[[WikiPage], Awaitable[Any]]) -> Any:
    """Resolve ``title`` and run ``action`` on it, turning library errors into a clean exit."""
    with with_page_context(title) as logger:
        async with Wiki(api_url=ctx.obj["api_url"]) as wiki:
            try:
                page = await wiki.page(title)
                return await action(page)
            except WikiFacetsError as e:
                logger.warning("Command failed", error=str(e), error_type=type(e).__name__)
                console.print(f"[red]❌ {e}[/red]")

    # Exit outside the log context so a handled failure is not logged as an error
    ctx.exit(1)


def _emit(ctx: click.Context, data: Any, render: Callable[[], None]) -> None:
    if ctx.obj["json_output"]:
        click.echo(jsonlib.dumps(data, ensure_ascii=False, indent=2))
    else:
        render()


@click.command()
@click.argument("title")
@click.option("--limit", "-l", type=int, default=None, help="Links requested per batch")
@click.pass_context
async def links(ctx, title: str, limit: int | None):
    """🔗 List every article linked from a page."""
    results = await _with_page(ctx, title, lambda page: page.links(limit=limit))
    _emit(ctx, results, lambda: print_rich_table(console, create_list_table(f"🔗 Links from {title}", results)))


@click.command()
@click.argument("title")
@click.pass_context
async def categories(ctx, title: str):
    """🏷️ List the categories a page belongs to."""
    results = await _with_page(ctx, title, lambda page: page.categories())
    _emit(
        ctx,
        results,
        lambda: print_rich_table(console, create_list_table(f"🏷️ Categories of {title}", results, column="Category")),
    )


@click.command(name="main-image")
@click.argument("title")
@click.pass_context
async def main_image(ctx, title: str):
    """🖼️ Resolve the primary image of a page."""
    url = await _with_page(ctx, title, lambda page: page.main_image())
    _emit(
        ctx,
        {"title": title, "main_image": url},
        lambda: console.print(f"🖼️ {url}" if url else f"[yellow]No main image found for {title}.[/yellow]"),
    )


@click.command()
@click.argument("title")
@click.argument("key", required=False)
@click.pass_context
async def info(ctx, title: str, key: str | None):
    """📋 Show infobox fields of a page, or a single field with KEY."""
    data = await _with_page(ctx, title, lambda page: page.full_info())
    fields = data.general

    if key:
        value = fields.get(key)
        _emit(ctx, {key: value}, lambda: console.print(f"[cyan]{key}[/cyan]: {value if value is not None else 'N/A'}"))
        return

    _emit(ctx, fields, lambda: print_rich_table(console, create_infobox_table(f"Infobox of {title}", fields)))


@click.command()
@click.argument("query")
@click.option("--limit", "-l", type=int, default=10, help="Number of results to show")
@click.pass_context
async def search(ctx, query: str, limit: int):
    """🔎 Search the wiki and list matching page titles."""
    async with Wiki(api_url=ctx.obj["api_url"]) as wiki:
        try:
            cursor = await wiki.search(query, aggregated=False, limit=limit)
        except WikiFacetsError as e:
            console.print(f"[red]❌ {e}[/red]")
            ctx.exit(1)
    results = cursor.results
    _emit(ctx, results, lambda: print_rich_table(console, create_list_table(f"🔎 Results for {query!r}", results)))


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    config = get_config()
    mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE

    # Use config defaults when CLI parameters are not provided
    final_log_level = log_level or config.log_level
    final_log_file = log_file or (str(config.log_file) if config.log_file else None)

    configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    logging_table = create_logging_status_table(status)
    print_rich_table(console, logging_table)


@click.command(name="config")
def show_config():
    """⚙️ Show the effective configuration."""
    config = get_config()
    data = {key: str(value) for key, value in config.model_dump().items()}
    print_rich_table(console, create_key_value_table("⚙️ Configuration", data))


@click.group(invoke_without_command=True)
@click.option("--api-url", default=None, help="MediaWiki api.php endpoint (defaults to WIKI_FACETS_API_URL)")
@click.option("--json", is_flag=True, help="Output JSON instead of rich tables")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, api_url: str | None, json: bool, log_level: str | None, log_file: str | None):
    """
    📚 Wiki Facets - structured page data from any MediaWiki site

    Fetch links, categories, infobox fields, and the main image of a page
    without hand-building API queries.
    """
    # Store global options in context for commands to access
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json
    ctx.obj["api_url"] = api_url

    # Initialize logging once here instead of in each command
    _initialize_logging(json, log_level, log_file)

    # Show help if no command provided
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Add commands to the main group
app.add_command(links)
app.add_command(categories)
app.add_command(main_image)
app.add_command(info)
app.add_command(search)
app.add_command(logging_status)
app.add_command(show_config)


if __name__ == "__main__":
    app()
