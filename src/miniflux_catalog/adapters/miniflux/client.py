"""Miniflux REST API client."""

import sys
from typing import Any, Optional

import httpx

from miniflux_catalog.core import Category, CategoryRef, EntriesPage, Feed
from miniflux_catalog.core.interfaces import CatalogClient, CatalogFetchError

Params = Optional[list[tuple[str, str]]]


class MinifluxClient(CatalogClient):
    """Read-only client for the Miniflux v1 API."""

    def __init__(self, base_url: str, token: Optional[str] = None, timeout: float = 30.0) -> None:
        if not base_url:
            raise ValueError("MINIFLUX_BASE_URL is required")
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout

    async def list_categories(self, counts: bool = False) -> list[Category]:
        params = [("counts", "true")] if counts else None
        data = await self._get_json("/v1/categories", params)
        return [self._parse_category(raw) for raw in self._expect_list(data, "/v1/categories")]

    async def list_feeds(self) -> list[Feed]:
        data = await self._get_json("/v1/feeds")
        return [self._parse_feed(raw) for raw in self._expect_list(data, "/v1/feeds")]

    async def list_category_feeds(self, category_id: int) -> list[Feed]:
        path = f"/v1/categories/{category_id}/feeds"
        data = await self._get_json(path)
        return [self._parse_feed(raw) for raw in self._expect_list(data, path)]

    async def get_feed(self, feed_id: int) -> Feed:
        return self._parse_feed(await self._get_json(f"/v1/feeds/{feed_id}"))

    async def list_entries(self, path: str, params: Params = None) -> EntriesPage:
        data = await self._get_json(path, params)
        if not isinstance(data, dict):
            raise CatalogFetchError(f"Unexpected entries payload from {path}")

        total = data.get("total")
        entries = data.get("entries") or []
        if isinstance(total, bool) or not isinstance(total, int) or not isinstance(entries, list):
            raise CatalogFetchError(f"Malformed entries payload from {path}")

        return EntriesPage(total=total, entries=entries)

    async def _get_json(self, path: str, params: Params = None) -> Any:
        """GET a path and decode its JSON body."""
        url = f"{self.base_url}{path}"

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(url, headers=self._get_headers(), params=params)
            except httpx.HTTPError as e:
                print(f"  └─ ⚠️  Miniflux request failed: {path}: {e}", file=sys.stderr)
                raise CatalogFetchError(f"Request to {path} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            print(f"  └─ ⚠️  Miniflux API error: {response.status_code} for {path}", file=sys.stderr)
            raise CatalogFetchError(
                f"HTTP {response.status_code} {response.reason_phrase}: {response.text}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise CatalogFetchError(f"Invalid JSON from {path}: {e}", status_code=response.status_code) from e

    def _get_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["X-Auth-Token"] = self.token
        return headers

    @staticmethod
    def _expect_list(data: Any, path: str) -> list:
        if not isinstance(data, list):
            raise CatalogFetchError(f"Expected a list from {path}")
        return data

    @staticmethod
    def _parse_id(raw: dict, what: str) -> int:
        value = raw.get("id")
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise CatalogFetchError(f"Malformed {what} record: invalid id {value!r}")
        return value

    def _parse_category(self, raw: Any) -> Category:
        if not isinstance(raw, dict):
            raise CatalogFetchError("Malformed category record")
        extra = {k: v for k, v in raw.items() if k not in ("id", "title")}
        return Category(
            id=self._parse_id(raw, "category"),
            title=str(raw.get("title") or ""),
            extra=extra,
        )

    def _parse_feed(self, raw: Any) -> Feed:
        if not isinstance(raw, dict):
            raise CatalogFetchError("Malformed feed record")

        category = None
        raw_category = raw.get("category")
        if isinstance(raw_category, dict) and raw_category.get("id") is not None:
            category = CategoryRef(
                id=self._parse_id(raw_category, "category"),
                title=str(raw_category.get("title") or ""),
            )

        extra = {
            k: v for k, v in raw.items()
            if k not in ("id", "title", "site_url", "feed_url", "category")
        }
        return Feed(
            id=self._parse_id(raw, "feed"),
            title=str(raw.get("title") or ""),
            site_url=raw.get("site_url") or None,
            feed_url=raw.get("feed_url") or None,
            category=category,
            extra=extra,
        )
