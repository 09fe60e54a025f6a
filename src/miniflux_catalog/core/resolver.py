"""Name -> id resolution over categories and feeds."""

import asyncio
from typing import Optional, Sequence, Union

from miniflux_catalog.core.entities import (
    Ambiguous,
    CatalogRecord,
    EntityKind,
    ExactIdMatch,
    Feed,
    FetchFailed,
    FuzzyResolution,
    Matched,
    NotFound,
    Resolution,
    ScoredCandidate,
)
from miniflux_catalog.core.interfaces import CatalogClient, CatalogFetchError
from miniflux_catalog.core.scoring import SCORE_SUBSTRING, parse_numeric_hint, score_candidate
from miniflux_catalog.core.text import collapse, fold_case, tokenize

DEFAULT_FUZZY_LIMIT = 10
MAX_FUZZY_LIMIT = 25


def resolve_name(records: Sequence[CatalogRecord], query: str) -> Resolution:
    """
    Resolve a free-form name against one collection, strongest tier first.

    Tiers: exact title, case-insensitive, collapsed, token subset, substring.
    The first tier with any hit decides. For the three equality tiers the
    first record in listing order wins; token subset and substring return
    Ambiguous when more than one record qualifies. Feeds are additionally
    compared by site_url and feed_url in the case-insensitive and substring
    tiers.
    """
    raw = query or ""
    query = raw.strip()
    if not query:
        return NotFound()

    for record in records:
        if record.title == raw:
            return Matched(record.id)

    folded = fold_case(query)
    for record in records:
        if any(fold_case(value) == folded for value in _searchable_values(record)):
            return Matched(record.id)

    collapsed = collapse(query)
    if collapsed:
        for record in records:
            if collapse(record.title) == collapsed:
                return Matched(record.id)

    query_tokens = set(tokenize(query))
    if query_tokens:
        hits = [r for r in records if query_tokens <= set(tokenize(r.title))]
        if hits:
            return _decide(hits)

    hits = [r for r in records if _contains(r, folded, collapsed)]
    if hits:
        return _decide(hits)

    return NotFound()


def _searchable_values(record: CatalogRecord) -> list[str]:
    values = [record.title or ""]
    if isinstance(record, Feed):
        values.extend(v for v in (record.site_url, record.feed_url) if v)
    return values


def _contains(record: CatalogRecord, folded: str, collapsed: str) -> bool:
    for value in _searchable_values(record):
        if folded in fold_case(value):
            return True
        if collapsed and collapsed in collapse(value):
            return True
    return False


def _decide(hits: list[CatalogRecord]) -> Resolution:
    if len(hits) == 1:
        return Matched(hits[0].id)
    return Ambiguous(candidates=[_candidate(r) for r in hits])


def _candidate(record: CatalogRecord) -> dict:
    if isinstance(record, Feed):
        return record.to_candidate()
    return {"id": record.id, "title": record.title}


def rank_candidates(
    records: Sequence[CatalogRecord],
    query: str,
    numeric_hint: Optional[int],
) -> list[ScoredCandidate]:
    """Score every record and keep the plausible ones, best first.

    Records scoring below the substring tier are dropped unless their id is
    exactly the numeric hint.
    """
    ranked = []
    for record in records:
        score = score_candidate(query, numeric_hint, record.id, record.title)
        if score >= SCORE_SUBSTRING or (numeric_hint is not None and record.id == numeric_hint):
            ranked.append(ScoredCandidate(record=record, score=score))
    ranked.sort(key=lambda c: (-c.score, c.title or ""))
    return ranked


def clamp_limit(limit: Optional[int], default: int = DEFAULT_FUZZY_LIMIT, ceiling: int = MAX_FUZZY_LIMIT) -> int:
    if limit is None:
        return default
    return max(1, min(int(limit), ceiling))


class CatalogResolver:
    """Resolves user-supplied names to catalog ids.

    Every call re-reads the catalog; nothing is cached between calls.
    """

    def __init__(
        self,
        client: CatalogClient,
        default_limit: int = DEFAULT_FUZZY_LIMIT,
        max_limit: int = MAX_FUZZY_LIMIT,
    ) -> None:
        self.client = client
        self.max_limit = max(1, min(max_limit, MAX_FUZZY_LIMIT))
        self.default_limit = max(1, min(default_limit, self.max_limit))

    async def resolve(self, kind: EntityKind, query: str) -> Resolution:
        """Resolve `query` within a single collection."""
        try:
            if kind == EntityKind.CATEGORY:
                records: Sequence[CatalogRecord] = await self.client.list_categories()
            else:
                records = await self.client.list_feeds()
        except CatalogFetchError as e:
            return FetchFailed(message=str(e), status_code=e.status_code)

        return resolve_name(records, query)

    async def resolve_fuzzy(
        self, query: str, limit_per_kind: Optional[int] = None
    ) -> Union[FuzzyResolution, FetchFailed]:
        """
        Rank categories and feeds against `query` together.

        Both collections are read concurrently and both reads must succeed;
        a failure of either one cancels the other read and yields FetchFailed.
        """
        reads = [
            asyncio.ensure_future(self.client.list_categories()),
            asyncio.ensure_future(self.client.list_feeds()),
        ]
        try:
            categories, feeds = await asyncio.gather(*reads)
        except CatalogFetchError as e:
            for read in reads:
                read.cancel()
            return FetchFailed(message=str(e), status_code=e.status_code)

        limit = clamp_limit(limit_per_kind, self.default_limit, self.max_limit)
        numeric_hint = parse_numeric_hint(query)

        ranked_categories = rank_candidates(categories, query, numeric_hint)
        ranked_feeds = rank_candidates(feeds, query, numeric_hint)

        inferred_kind = None
        if ranked_categories and not ranked_feeds:
            inferred_kind = EntityKind.CATEGORY
        elif ranked_feeds and not ranked_categories:
            inferred_kind = EntityKind.FEED

        return FuzzyResolution(
            categories=ranked_categories[:limit],
            feeds=ranked_feeds[:limit],
            truncated=len(ranked_categories) > limit or len(ranked_feeds) > limit,
            inferred_kind=inferred_kind,
            exact_id_match=_exact_id_match(numeric_hint, categories, feeds),
        )


def _exact_id_match(
    numeric_hint: Optional[int],
    categories: Sequence[CatalogRecord],
    feeds: Sequence[CatalogRecord],
) -> Optional[ExactIdMatch]:
    if numeric_hint is None:
        return None
    for kind, records in ((EntityKind.CATEGORY, categories), (EntityKind.FEED, feeds)):
        for record in records:
            if record.id == numeric_hint:
                return ExactIdMatch(kind=kind, id=record.id, title=record.title)
    return None
