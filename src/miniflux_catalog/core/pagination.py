"""Offset pagination arithmetic for entry searches."""

from typing import Optional

from miniflux_catalog.core.entities import PageDescriptor


def paginate(
    total: int,
    offset: Optional[int],
    returned_count: int,
    limit: Optional[int] = None,
) -> PageDescriptor:
    """Describe where a page sits in the full result set."""
    offset = offset or 0
    has_more = offset + returned_count < total
    return PageDescriptor(
        total=total,
        returned_count=returned_count,
        offset=offset,
        limit=limit,
        next_offset=offset + returned_count if has_more else None,
        has_more=has_more,
    )
