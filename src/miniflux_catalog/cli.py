"""CLI entry point for the Miniflux catalog tools."""

import asyncio
import sys
from pathlib import Path
from typing import Any, List, Optional

import typer

from miniflux_catalog.adapters.miniflux import MinifluxClient
from miniflux_catalog.config import get_settings
from miniflux_catalog.core import CatalogResolver
from miniflux_catalog.tools import ToolRegistry, ToolResult, build_registry
from miniflux_catalog.use_cases import CatalogService

cli = typer.Typer(help="Browse, search and resolve names in a Miniflux catalog.", no_args_is_help=True)

CONFIG_OPTION = typer.Option(Path("config.yaml"), "--config", help="Path to YAML config")


def create_registry(config_path: Path = Path("config.yaml")) -> ToolRegistry:
    """Wire settings, client, service and registry together."""
    settings = get_settings(config_path)
    client = MinifluxClient(
        base_url=settings.base_url,
        token=settings.token,
        timeout=settings.miniflux.timeout,
    )
    resolver = CatalogResolver(
        client,
        default_limit=settings.resolver.default_limit,
        max_limit=settings.resolver.max_limit,
    )
    return build_registry(CatalogService(client, resolver))


def run_tool(config_path: Path, tool_name: str, **arguments: Any) -> None:
    """Call one tool, print its payload and exit non-zero on error payloads."""
    try:
        registry = create_registry(config_path)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        raise typer.Exit(code=2)

    result: ToolResult = asyncio.run(registry.call(tool_name, **arguments))
    print(result.text)
    if result.is_error:
        raise typer.Exit(code=1)


@cli.command("list-categories")
def list_categories(
    counts: bool = typer.Option(False, "--counts", help="Include unread and feed counts"),
    config: Path = CONFIG_OPTION,
) -> None:
    """List all categories."""
    run_tool(config, "listCategories", counts=counts)


@cli.command("list-feeds")
def list_feeds(config: Path = CONFIG_OPTION) -> None:
    """List all feeds."""
    run_tool(config, "listFeeds")


@cli.command("feed")
def feed_details(feed_id: int, config: Path = CONFIG_OPTION) -> None:
    """Show details of one feed."""
    run_tool(config, "getFeedDetails", feed_id=feed_id)


@cli.command("feeds-in-category")
def feeds_in_category(
    category_id: int,
    query: Optional[str] = typer.Option(None, "--query", "-q", help="Filter by title or URL"),
    config: Path = CONFIG_OPTION,
) -> None:
    """List feeds of a category."""
    run_tool(config, "searchFeedsByCategory", category_id=category_id, query=query)


@cli.command("resolve-category")
def resolve_category(name: str, config: Path = CONFIG_OPTION) -> None:
    """Resolve a category name to its id."""
    run_tool(config, "resolveCategoryId", category_name=name)


@cli.command("resolve-feed")
def resolve_feed(query: str, config: Path = CONFIG_OPTION) -> None:
    """Resolve a feed title or URL to its id."""
    run_tool(config, "resolveFeedId", feed_query=query)


@cli.command("resolve")
def resolve(
    query: str,
    limit: Optional[int] = typer.Option(None, "--limit", help="Candidates per kind (max 25)"),
    config: Path = CONFIG_OPTION,
) -> None:
    """Rank categories and feeds matching a name or id."""
    run_tool(config, "resolveId", query=query, limit_per_kind=limit)


@cli.command("entries")
def entries(
    category_id: Optional[int] = typer.Option(None, "--category-id"),
    feed_id: Optional[int] = typer.Option(None, "--feed-id"),
    search: Optional[str] = typer.Option(None, "--search", "-s"),
    status: Optional[List[str]] = typer.Option(None, "--status", help="read, unread or removed"),
    starred: Optional[bool] = typer.Option(None, "--starred/--not-starred"),
    limit: Optional[int] = typer.Option(None, "--limit"),
    offset: Optional[int] = typer.Option(None, "--offset"),
    order: Optional[str] = typer.Option(None, "--order"),
    direction: Optional[str] = typer.Option(None, "--direction"),
    before: Optional[str] = typer.Option(None, "--before", help="Unix time or date"),
    after: Optional[str] = typer.Option(None, "--after", help="Unix time or date"),
    published_before: Optional[str] = typer.Option(None, "--published-before"),
    published_after: Optional[str] = typer.Option(None, "--published-after"),
    changed_before: Optional[str] = typer.Option(None, "--changed-before"),
    changed_after: Optional[str] = typer.Option(None, "--changed-after"),
    before_entry_id: Optional[int] = typer.Option(None, "--before-entry-id"),
    after_entry_id: Optional[int] = typer.Option(None, "--after-entry-id"),
    config: Path = CONFIG_OPTION,
) -> None:
    """Search entries."""
    run_tool(
        config,
        "searchEntries",
        category_id=category_id,
        feed_id=feed_id,
        search=search,
        status=list(status) if status else None,
        starred=starred,
        limit=limit,
        offset=offset,
        order=order,
        direction=direction,
        before=before,
        after=after,
        published_before=published_before,
        published_after=published_after,
        changed_before=changed_before,
        changed_after=changed_after,
        before_entry_id=before_entry_id,
        after_entry_id=after_entry_id,
    )


def app() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    app()
