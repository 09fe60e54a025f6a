"""Tool registry exposing catalog operations as named, JSON-returning calls."""

import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from miniflux_catalog.core import ErrorCode, SearchWindow
from miniflux_catalog.use_cases import CatalogService, ServiceResult, error_result

Handler = Callable[..., Awaitable[ServiceResult]]


@dataclass
class ToolSpec:
    """A registered operation."""

    name: str
    title: str
    description: str
    handler: Handler


@dataclass
class ToolResult:
    """Single text payload returned to the caller."""

    text: str
    is_error: bool = False


class ToolRegistry:
    """Explicit registry of callable tools, built once at startup."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}

    def register(self, name: str, title: str, description: str, handler: Handler) -> None:
        if name in self._tools:
            raise ValueError(f"Tool already registered: {name}")
        self._tools[name] = ToolSpec(name=name, title=title, description=description, handler=handler)

    def names(self) -> list[str]:
        return list(self._tools)

    def get(self, name: str) -> ToolSpec:
        return self._tools[name]

    async def call(self, tool_name: str, **arguments: Any) -> ToolResult:
        """Invoke a tool by name. Unknown names raise KeyError.

        Arguments the handler cannot accept come back as an INVALID_ARGUMENT
        error payload.
        """
        spec = self._tools[tool_name]
        try:
            result = await spec.handler(**arguments)
        except (TypeError, ValueError) as e:
            result = error_result(ErrorCode.INVALID_ARGUMENT, message=str(e))
        return ToolResult(
            text=json.dumps(result.payload, ensure_ascii=False),
            is_error=result.is_error,
        )


def build_registry(service: CatalogService) -> ToolRegistry:
    """Register every catalog operation against `service`."""
    registry = ToolRegistry()

    async def search_entries(**arguments: Any) -> ServiceResult:
        try:
            window = SearchWindow(**arguments)
        except (TypeError, ValueError) as e:
            return error_result(ErrorCode.INVALID_ARGUMENT, message=str(e))
        return await service.search_entries(window)

    registry.register(
        "listCategories",
        "List Miniflux Categories",
        "List all available Miniflux categories. Pass counts=true to include "
        "unread and feed counts for each category.",
        service.list_categories,
    )
    registry.register(
        "resolveCategoryId",
        "Resolve Category ID",
        "Resolve a category name to its numeric ID. Use it when a user mentions a "
        "category by name and another tool needs the ID. If it returns "
        "CATEGORY_NOT_FOUND the name may refer to a feed instead.",
        service.resolve_category_id,
    )
    registry.register(
        "resolveFeedId",
        "Resolve Feed ID",
        "Resolve a feed title, site URL or feed URL to its numeric ID. Exact, "
        "case-insensitive, punctuation-insensitive, word and partial matches "
        "are attempted in this order.",
        service.resolve_feed_id,
    )
    registry.register(
        "resolveId",
        "Resolve Category or Feed",
        "Rank categories and feeds that could be meant by a free-form name or "
        "numeric ID. Reports the inferred kind when only one kind matches.",
        service.resolve_id,
    )
    registry.register(
        "searchFeedsByCategory",
        "Search Feeds by Category",
        "Search for feeds within a category by title, site URL or feed URL.",
        service.search_feeds_by_category,
    )
    registry.register(
        "getFeedDetails",
        "Get Feed Details",
        "Get details for a single feed by numeric ID.",
        service.get_feed_details,
    )
    registry.register(
        "listFeeds",
        "List All Feeds",
        "List all feeds of the authenticated user.",
        service.list_feeds,
    )
    registry.register(
        "searchEntries",
        "Search Entries",
        "Search entries globally or scoped by category or feed ID. Time bounds "
        "accept unix seconds, unix milliseconds or date strings. When both a "
        "category and a feed are given the category scope is used.",
        search_entries,
    )

    return registry
