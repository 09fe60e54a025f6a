"""Core domain layer."""

from miniflux_catalog.core.entities import (
    Ambiguous,
    Category,
    CategoryRef,
    EntityKind,
    EntriesPage,
    ErrorCode,
    ExactIdMatch,
    Feed,
    FetchFailed,
    FuzzyResolution,
    Matched,
    NotFound,
    PageDescriptor,
    Resolution,
    ScoredCandidate,
    SearchWindow,
)
from miniflux_catalog.core.interfaces import CatalogClient, CatalogFetchError
from miniflux_catalog.core.pagination import paginate
from miniflux_catalog.core.resolver import CatalogResolver, rank_candidates, resolve_name
from miniflux_catalog.core.scoring import parse_numeric_hint, score_candidate
from miniflux_catalog.core.temporal import normalize_time

__all__ = [
    "Ambiguous",
    "Category",
    "CategoryRef",
    "EntityKind",
    "EntriesPage",
    "ErrorCode",
    "ExactIdMatch",
    "Feed",
    "FetchFailed",
    "FuzzyResolution",
    "Matched",
    "NotFound",
    "PageDescriptor",
    "Resolution",
    "ScoredCandidate",
    "SearchWindow",
    "CatalogClient",
    "CatalogFetchError",
    "CatalogResolver",
    "rank_candidates",
    "resolve_name",
    "parse_numeric_hint",
    "score_candidate",
    "normalize_time",
    "paginate",
]
