"""Tests for use cases."""

from unittest.mock import AsyncMock

import pytest

from miniflux_catalog.core import (
    CatalogFetchError,
    Category,
    CategoryRef,
    EntriesPage,
    Feed,
    SearchWindow,
)
from miniflux_catalog.use_cases import CatalogService, build_entries_request


def make_client() -> AsyncMock:
    client = AsyncMock()
    client.list_categories.return_value = [
        Category(id=1, title="Tech News"),
        Category(id=2, title="Tech News Daily"),
    ]
    client.list_feeds.return_value = [
        Feed(
            id=10,
            title="AI Code King",
            site_url="https://youtube.com/@aicodeking",
            feed_url="https://youtube.com/feeds/aicodeking.xml",
            category=CategoryRef(id=1, title="Tech News"),
        ),
        Feed(id=11, title="Hacker News", site_url="https://news.ycombinator.com"),
    ]
    return client


def test_build_entries_request_global() -> None:
    """Test a global search with every filter kind."""
    window = SearchWindow(
        search="rust",
        status=["unread", "read"],
        starred=False,
        limit=20,
        offset=40,
        order="published_at",
        direction="desc",
        after="2024-01-01T00:00:00Z",
        published_before=1704067200000,
        changed_after="garbage",
        before_entry_id=900,
    )

    path, params = build_entries_request(window)

    assert path == "/v1/entries"
    assert params == [
        ("search", "rust"),
        ("status", "unread"),
        ("status", "read"),
        ("starred", "false"),
        ("offset", "40"),
        ("limit", "20"),
        ("order", "published_at"),
        ("direction", "desc"),
        ("after", "1704067200"),
        ("published_before", "1704067200"),
        ("before_entry_id", "900"),
    ]


def test_build_entries_request_scopes() -> None:
    """Test scope selection, with category taking precedence over feed."""
    assert build_entries_request(SearchWindow(category_id=3))[0] == "/v1/categories/3/entries"
    assert build_entries_request(SearchWindow(feed_id=9))[0] == "/v1/feeds/9/entries"
    assert build_entries_request(SearchWindow(category_id=3, feed_id=9))[0] == "/v1/categories/3/entries"


def test_search_window_validation() -> None:
    """Test invalid enum values are rejected."""
    with pytest.raises(ValueError, match="Invalid status"):
        SearchWindow(status=["archived"])
    with pytest.raises(ValueError, match="Invalid order"):
        SearchWindow(order="title")
    with pytest.raises(ValueError, match="Invalid direction"):
        SearchWindow(direction="up")


@pytest.mark.asyncio
async def test_search_entries_adds_page_descriptor() -> None:
    """Test entries are passed through with pagination info."""
    client = AsyncMock()
    client.list_entries.return_value = EntriesPage(total=30, entries=[{"id": i} for i in range(20)])
    service = CatalogService(client)

    result = await service.search_entries(SearchWindow(feed_id=4, limit=20))

    assert result.is_error is False
    assert result.payload["total"] == 30
    assert len(result.payload["entries"]) == 20
    assert result.payload["page"]["has_more"] is True
    assert result.payload["page"]["next_offset"] == 20
    client.list_entries.assert_called_once_with("/v1/feeds/4/entries", [("limit", "20")])


@pytest.mark.asyncio
async def test_search_entries_fetch_failure() -> None:
    """Test upstream failures surface as FETCH_FAILED."""
    client = AsyncMock()
    client.list_entries.side_effect = CatalogFetchError("HTTP 502 Bad Gateway: ", status_code=502)

    result = await CatalogService(client).search_entries(SearchWindow())

    assert result.is_error is True
    assert result.payload == {
        "error": "FETCH_FAILED",
        "message": "HTTP 502 Bad Gateway: ",
        "status_code": 502,
    }


@pytest.mark.asyncio
async def test_resolve_category_id() -> None:
    """Test category resolution payloads."""
    service = CatalogService(make_client())

    matched = await service.resolve_category_id("tech news")
    assert matched.is_error is False
    assert matched.payload == {"category_id": 1}

    ambiguous = await service.resolve_category_id("news tech")
    assert ambiguous.is_error is True
    assert ambiguous.payload["error"] == "AMBIGUOUS_CATEGORY"
    assert [c["id"] for c in ambiguous.payload["candidates"]] == [1, 2]

    missing = await service.resolve_category_id("Sports")
    assert missing.is_error is True
    assert missing.payload == {"error": "CATEGORY_NOT_FOUND"}


@pytest.mark.asyncio
async def test_resolve_feed_id() -> None:
    """Test feed resolution payloads."""
    service = CatalogService(make_client())

    assert (await service.resolve_feed_id("AICodeKing")).payload == {"feed_id": 10}

    by_url = await service.resolve_feed_id("youtube.com")
    assert by_url.payload == {"feed_id": 10}

    missing = await service.resolve_feed_id("Lobsters")
    assert missing.payload == {"error": "FEED_NOT_FOUND"}


@pytest.mark.asyncio
async def test_resolve_feed_id_ambiguous_lists_urls() -> None:
    """Test ambiguous feed candidates carry both URLs."""
    client = make_client()
    client.list_feeds.return_value = [
        Feed(id=1, title="Rust Blog", site_url="https://blog.rust-lang.org", feed_url="https://blog.rust-lang.org/feed.xml"),
        Feed(id=2, title="Go Blog", site_url="https://go.dev/blog", feed_url="https://go.dev/blog/feed.atom"),
    ]

    result = await CatalogService(client).resolve_feed_id("blog")

    assert result.is_error is True
    assert result.payload["error"] == "AMBIGUOUS_FEED"
    assert result.payload["candidates"][1] == {
        "id": 2,
        "title": "Go Blog",
        "site_url": "https://go.dev/blog",
        "feed_url": "https://go.dev/blog/feed.atom",
    }


@pytest.mark.asyncio
async def test_resolve_id() -> None:
    """Test fuzzy resolution payload."""
    service = CatalogService(make_client())

    result = await service.resolve_id("10")

    assert result.is_error is False
    assert result.payload["query"] == "10"
    assert result.payload["inferred_kind"] == "feed"
    assert result.payload["exact_id_match"] == {"kind": "feed", "id": 10, "title": "AI Code King"}
    assert result.payload["feeds"][0]["score"] == 90
    assert result.payload["feeds"][0]["category"] == {"id": 1, "title": "Tech News"}


@pytest.mark.asyncio
async def test_resolve_id_fetch_failure() -> None:
    """Test fuzzy resolution reports FETCH_FAILED without partial data."""
    client = make_client()
    client.list_categories.side_effect = CatalogFetchError("timeout")

    result = await CatalogService(client).resolve_id("tech")

    assert result.is_error is True
    assert result.payload == {"error": "FETCH_FAILED", "message": "timeout"}


@pytest.mark.asyncio
async def test_search_feeds_by_category() -> None:
    """Test feeds of a category are filtered by title or URL."""
    client = make_client()
    client.list_category_feeds.return_value = client.list_feeds.return_value
    service = CatalogService(client)

    everything = await service.search_feeds_by_category(1)
    assert [f["id"] for f in everything.payload["feeds"]] == [10, 11]

    filtered = await service.search_feeds_by_category(1, query="YCOMBINATOR")
    assert [f["id"] for f in filtered.payload["feeds"]] == [11]
    client.list_category_feeds.assert_called_with(1)


@pytest.mark.asyncio
async def test_list_and_detail_operations() -> None:
    """Test browsing operations wrap their records."""
    client = make_client()
    client.get_feed.return_value = client.list_feeds.return_value[1]
    service = CatalogService(client)

    categories = await service.list_categories(counts=True)
    assert categories.payload["categories"][0] == {"id": 1, "title": "Tech News"}
    client.list_categories.assert_called_once_with(counts=True)

    feeds = await service.list_feeds()
    assert len(feeds.payload["feeds"]) == 2

    detail = await service.get_feed_details(11)
    assert detail.payload["feed"]["title"] == "Hacker News"
    assert detail.payload["feed"]["feed_url"] is None
