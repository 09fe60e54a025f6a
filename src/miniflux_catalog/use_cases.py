"""Business logic use cases."""

from dataclasses import dataclass
from typing import Any, Optional

from miniflux_catalog.core import (
    Ambiguous,
    CatalogClient,
    CatalogFetchError,
    CatalogResolver,
    EntityKind,
    ErrorCode,
    FetchFailed,
    Matched,
    Resolution,
    SearchWindow,
    normalize_time,
    paginate,
)
from miniflux_catalog.core.text import fold_case


@dataclass
class ServiceResult:
    """Payload of one operation plus an explicit error flag."""

    payload: dict[str, Any]
    is_error: bool = False


def error_result(code: ErrorCode, **fields: Any) -> ServiceResult:
    return ServiceResult(payload={"error": code.value, **fields}, is_error=True)


def fetch_failed_result(failure: FetchFailed) -> ServiceResult:
    fields: dict[str, Any] = {"message": failure.message}
    if failure.status_code is not None:
        fields["status_code"] = failure.status_code
    return error_result(ErrorCode.FETCH_FAILED, **fields)


def build_entries_request(window: SearchWindow) -> tuple[str, list[tuple[str, str]]]:
    """
    Translate a search window into an entries endpoint and query parameters.

    Category scope takes precedence over feed scope. Time bounds that cannot
    be parsed are left out of the query.
    """
    params: list[tuple[str, str]] = []

    if window.search:
        params.append(("search", window.search))
    for status in window.status or []:
        params.append(("status", status))
    if window.starred is not None:
        params.append(("starred", "true" if window.starred else "false"))
    if window.offset is not None:
        params.append(("offset", str(window.offset)))
    if window.limit is not None:
        params.append(("limit", str(window.limit)))
    if window.order:
        params.append(("order", window.order))
    if window.direction:
        params.append(("direction", window.direction))

    for name, value in window.time_bounds.items():
        seconds = normalize_time(value)
        if seconds is not None:
            params.append((name, str(seconds)))

    if window.before_entry_id is not None:
        params.append(("before_entry_id", str(window.before_entry_id)))
    if window.after_entry_id is not None:
        params.append(("after_entry_id", str(window.after_entry_id)))

    if window.category_id is not None:
        path = f"/v1/categories/{window.category_id}/entries"
    elif window.feed_id is not None:
        path = f"/v1/feeds/{window.feed_id}/entries"
    else:
        path = "/v1/entries"

    return path, params


class CatalogService:
    """Service for browsing, searching and resolving catalog records."""

    def __init__(self, client: CatalogClient, resolver: Optional[CatalogResolver] = None) -> None:
        self.client = client
        self.resolver = resolver or CatalogResolver(client)

    async def list_categories(self, counts: bool = False) -> ServiceResult:
        try:
            categories = await self.client.list_categories(counts=counts)
        except CatalogFetchError as e:
            return fetch_failed_result(FetchFailed(str(e), e.status_code))
        return ServiceResult({"categories": [c.to_dict() for c in categories]})

    async def list_feeds(self) -> ServiceResult:
        try:
            feeds = await self.client.list_feeds()
        except CatalogFetchError as e:
            return fetch_failed_result(FetchFailed(str(e), e.status_code))
        return ServiceResult({"feeds": [f.to_dict() for f in feeds]})

    async def get_feed_details(self, feed_id: int) -> ServiceResult:
        try:
            feed = await self.client.get_feed(feed_id)
        except CatalogFetchError as e:
            return fetch_failed_result(FetchFailed(str(e), e.status_code))
        return ServiceResult({"feed": feed.to_dict()})

    async def search_feeds_by_category(self, category_id: int, query: Optional[str] = None) -> ServiceResult:
        """List feeds of a category, optionally filtered by title or URL."""
        try:
            feeds = await self.client.list_category_feeds(category_id)
        except CatalogFetchError as e:
            return fetch_failed_result(FetchFailed(str(e), e.status_code))

        if query:
            needle = fold_case(query)
            feeds = [
                f for f in feeds
                if any(needle in fold_case(v or "") for v in (f.title, f.site_url, f.feed_url))
            ]

        return ServiceResult({"feeds": [f.to_dict() for f in feeds]})

    async def resolve_category_id(self, category_name: str) -> ServiceResult:
        outcome = await self.resolver.resolve(EntityKind.CATEGORY, category_name)
        return self._resolution_result(
            outcome, "category_id", ErrorCode.CATEGORY_NOT_FOUND, ErrorCode.AMBIGUOUS_CATEGORY
        )

    async def resolve_feed_id(self, feed_query: str) -> ServiceResult:
        outcome = await self.resolver.resolve(EntityKind.FEED, feed_query)
        return self._resolution_result(
            outcome, "feed_id", ErrorCode.FEED_NOT_FOUND, ErrorCode.AMBIGUOUS_FEED
        )

    async def resolve_id(self, query: str, limit_per_kind: Optional[int] = None) -> ServiceResult:
        """Rank categories and feeds that could be meant by `query`."""
        outcome = await self.resolver.resolve_fuzzy(query, limit_per_kind)
        if isinstance(outcome, FetchFailed):
            return fetch_failed_result(outcome)
        return ServiceResult({"query": query, **outcome.to_dict()})

    async def search_entries(self, window: SearchWindow) -> ServiceResult:
        """Search entries and describe the returned page."""
        path, params = build_entries_request(window)
        try:
            page = await self.client.list_entries(path, params)
        except CatalogFetchError as e:
            return fetch_failed_result(FetchFailed(str(e), e.status_code))

        descriptor = paginate(page.total, window.offset, len(page.entries), window.limit)
        return ServiceResult({
            "total": page.total,
            "entries": page.entries,
            "page": descriptor.to_dict(),
        })

    @staticmethod
    def _resolution_result(
        outcome: Resolution,
        id_field: str,
        not_found: ErrorCode,
        ambiguous: ErrorCode,
    ) -> ServiceResult:
        if isinstance(outcome, Matched):
            return ServiceResult({id_field: outcome.id})
        if isinstance(outcome, Ambiguous):
            return error_result(ambiguous, candidates=outcome.candidates)
        if isinstance(outcome, FetchFailed):
            return fetch_failed_result(outcome)
        return error_result(not_found)
