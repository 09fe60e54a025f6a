"""Confidence scoring of a query against a single catalog record."""

import re
from typing import Optional

from miniflux_catalog.core.text import collapse, fold_case, tokenize

SCORE_EXACT = 100
SCORE_NUMERIC_ID = 90
SCORE_COLLAPSED = 70
SCORE_TOKEN_SUBSET = 50
SCORE_SUBSTRING = 30

_DIGITS = re.compile(r"[0-9]+")


def parse_numeric_hint(query: str) -> Optional[int]:
    """Return the query as an id when it is made of decimal digits only."""
    stripped = (query or "").strip()
    if _DIGITS.fullmatch(stripped):
        return int(stripped)
    return None


def score_candidate(
    query: str,
    numeric_hint: Optional[int],
    candidate_id: int,
    title: str,
) -> int:
    """
    Score how well `query` identifies a record.

    Tiers are checked from strongest to weakest and the first satisfied one
    wins, so the result is always one of 100, 90, 70, 50, 30 or 0.
    """
    query = (query or "").strip()
    title = title or ""
    folded_query = fold_case(query)
    folded_title = fold_case(title)

    if folded_query and folded_query == folded_title:
        return SCORE_EXACT

    if numeric_hint is not None and numeric_hint == candidate_id:
        return SCORE_NUMERIC_ID

    collapsed_query = collapse(query)
    if collapsed_query and collapsed_query == collapse(title):
        return SCORE_COLLAPSED

    query_tokens = set(tokenize(query))
    if query_tokens and query_tokens <= set(tokenize(title)):
        return SCORE_TOKEN_SUBSET

    if folded_query and folded_query in folded_title:
        return SCORE_SUBSTRING

    return 0
