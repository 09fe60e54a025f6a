"""Core domain entities."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class EntityKind(str, Enum):
    """Kind of catalog record a name can resolve to."""

    CATEGORY = "category"
    FEED = "feed"


class ErrorCode(str, Enum):
    """Machine-readable error codes surfaced to callers."""

    CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"
    FEED_NOT_FOUND = "FEED_NOT_FOUND"
    AMBIGUOUS_CATEGORY = "AMBIGUOUS_CATEGORY"
    AMBIGUOUS_FEED = "AMBIGUOUS_FEED"
    FETCH_FAILED = "FETCH_FAILED"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"


@dataclass
class Category:
    """Catalog category.

    `extra` keeps fields the resolver does not interpret (counts, user_id, ...)
    so they can be passed through to callers unchanged.
    """

    id: int
    title: str
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.id <= 0:
            raise ValueError("Category id must be positive")

    def to_dict(self) -> dict[str, Any]:
        return {**self.extra, "id": self.id, "title": self.title}


@dataclass
class CategoryRef:
    """Read-only projection of the category a feed belongs to."""

    id: int
    title: str


@dataclass
class Feed:
    """Catalog feed."""

    id: int
    title: str
    site_url: Optional[str] = None
    feed_url: Optional[str] = None
    category: Optional[CategoryRef] = None
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.id <= 0:
            raise ValueError("Feed id must be positive")

    def to_dict(self) -> dict[str, Any]:
        data = {
            **self.extra,
            "id": self.id,
            "title": self.title,
            "site_url": self.site_url,
            "feed_url": self.feed_url,
        }
        if self.category is not None:
            data["category"] = {"id": self.category.id, "title": self.category.title}
        return data

    def to_candidate(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "site_url": self.site_url,
            "feed_url": self.feed_url,
        }


CatalogRecord = Union[Category, Feed]


@dataclass
class ScoredCandidate:
    """A catalog record paired with its match score (0-100)."""

    record: CatalogRecord
    score: int

    @property
    def id(self) -> int:
        return self.record.id

    @property
    def title(self) -> str:
        return self.record.title

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "title": self.title, "score": self.score}
        if isinstance(self.record, Feed):
            data["site_url"] = self.record.site_url
            data["feed_url"] = self.record.feed_url
            if self.record.category is not None:
                data["category"] = {
                    "id": self.record.category.id,
                    "title": self.record.category.title,
                }
        return data


# Resolution outcomes

@dataclass
class Matched:
    id: int


@dataclass
class Ambiguous:
    candidates: list[dict[str, Any]]


@dataclass
class NotFound:
    pass


@dataclass
class FetchFailed:
    """Upstream read failed; no partial data was used."""

    message: str
    status_code: Optional[int] = None


Resolution = Union[Matched, Ambiguous, NotFound, FetchFailed]


@dataclass
class ExactIdMatch:
    kind: EntityKind
    id: int
    title: str


@dataclass
class FuzzyResolution:
    """Ranked candidates across categories and feeds."""

    categories: list[ScoredCandidate]
    feeds: list[ScoredCandidate]
    truncated: bool = False
    inferred_kind: Optional[EntityKind] = None
    exact_id_match: Optional[ExactIdMatch] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "categories": [c.to_dict() for c in self.categories],
            "feeds": [f.to_dict() for f in self.feeds],
            "truncated": self.truncated,
        }
        if self.inferred_kind is not None:
            data["inferred_kind"] = self.inferred_kind.value
        if self.exact_id_match is not None:
            data["exact_id_match"] = {
                "kind": self.exact_id_match.kind.value,
                "id": self.exact_id_match.id,
                "title": self.exact_id_match.title,
            }
        return data


@dataclass
class EntriesPage:
    """Raw entries response: authoritative total plus opaque entry records."""

    total: int
    entries: list[dict[str, Any]]


@dataclass
class PageDescriptor:
    total: int
    returned_count: int
    offset: int
    limit: Optional[int]
    next_offset: Optional[int]
    has_more: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "returned_count": self.returned_count,
            "offset": self.offset,
            "limit": self.limit,
            "next_offset": self.next_offset,
            "has_more": self.has_more,
        }


TimeValue = Union[str, int, float, None]

ENTRY_STATUSES = ("read", "unread", "removed")
ENTRY_ORDERS = ("id", "status", "published_at", "category_title", "category_id")
SORT_DIRECTIONS = ("asc", "desc")


@dataclass
class SearchWindow:
    """Filter set for an entries search.

    When both `category_id` and `feed_id` are given the category scope is
    used and the feed scope is ignored.
    """

    category_id: Optional[int] = None
    feed_id: Optional[int] = None
    search: Optional[str] = None
    status: Optional[list[str]] = None
    starred: Optional[bool] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
    order: Optional[str] = None
    direction: Optional[str] = None
    before: TimeValue = None
    after: TimeValue = None
    published_before: TimeValue = None
    published_after: TimeValue = None
    changed_before: TimeValue = None
    changed_after: TimeValue = None
    before_entry_id: Optional[int] = None
    after_entry_id: Optional[int] = None

    def __post_init__(self) -> None:
        for value in self.status or []:
            if value not in ENTRY_STATUSES:
                raise ValueError(f"Invalid status: {value!r}")
        if self.order is not None and self.order not in ENTRY_ORDERS:
            raise ValueError(f"Invalid order: {self.order!r}")
        if self.direction is not None and self.direction not in SORT_DIRECTIONS:
            raise ValueError(f"Invalid direction: {self.direction!r}")
        if self.limit is not None and self.limit < 0:
            raise ValueError("Limit cannot be negative")
        if self.offset is not None and self.offset < 0:
            raise ValueError("Offset cannot be negative")

    @property
    def time_bounds(self) -> dict[str, TimeValue]:
        return {
            "before": self.before,
            "after": self.after,
            "published_before": self.published_before,
            "published_after": self.published_after,
            "changed_before": self.changed_before,
            "changed_after": self.changed_after,
        }
