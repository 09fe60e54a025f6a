"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import Optional

from miniflux_catalog.core.entities import Category, EntriesPage, Feed


class CatalogFetchError(Exception):
    """Upstream catalog could not be read (network, HTTP status or payload)."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CatalogClient(ABC):
    """Read-only access to the upstream catalog.

    Implementations raise CatalogFetchError on any failure.
    """

    @abstractmethod
    async def list_categories(self, counts: bool = False) -> list[Category]:
        """List all categories."""
        pass

    @abstractmethod
    async def list_feeds(self) -> list[Feed]:
        """List all feeds."""
        pass

    @abstractmethod
    async def list_category_feeds(self, category_id: int) -> list[Feed]:
        """List feeds belonging to one category."""
        pass

    @abstractmethod
    async def get_feed(self, feed_id: int) -> Feed:
        """Fetch a single feed."""
        pass

    @abstractmethod
    async def list_entries(self, path: str, params: list[tuple[str, str]]) -> EntriesPage:
        """Fetch entries from an entries endpoint with the given query parameters."""
        pass
