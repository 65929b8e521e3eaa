"""Ranking of aggregated records: merge sort by a named key, then limit.

The sort is a top-down merge sort over index ranges of a single backing
list. One scratch list of the same size is allocated up front and reused
by every merge, so each level of the recursion costs O(n) copies and the
recursion depth is O(log n).

Keys are compared with a strict less-than. When two records compare
equal the one from the left half is taken first, which keeps equal
records in input order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from sortkey.errors import RankingError
from sortkey.models import SortKey, UrlStat

logger = logging.getLogger(__name__)

NO_LIMIT = -1

Comparator = Callable[[UrlStat, UrlStat], bool]

COMPARATORS: dict[SortKey, Comparator] = {
    SortKey.RELEVANCE_SCORE: lambda a, b: a.relevance_score < b.relevance_score,
    SortKey.VIEWS: lambda a, b: a.views < b.views,
}


def _merge(
    items: list[UrlStat],
    scratch: list[UrlStat],
    lo: int,
    mid: int,
    hi: int,
    less: Comparator,
) -> None:
    scratch[lo:hi] = items[lo:hi]
    i, j = lo, mid
    for k in range(lo, hi):
        if i >= mid:
            items[k] = scratch[j]
            j += 1
        elif j >= hi:
            items[k] = scratch[i]
            i += 1
        elif less(scratch[j], scratch[i]):
            items[k] = scratch[j]
            j += 1
        else:
            items[k] = scratch[i]
            i += 1


def _sort_range(
    items: list[UrlStat],
    scratch: list[UrlStat],
    lo: int,
    hi: int,
    less: Comparator,
) -> None:
    if hi - lo <= 1:
        return
    mid = (lo + hi) // 2
    _sort_range(items, scratch, lo, mid, less)
    _sort_range(items, scratch, mid, hi, less)
    _merge(items, scratch, lo, mid, hi, less)


def merge_sort(
    records: Sequence[UrlStat],
    sort_key: SortKey | str | None,
) -> list[UrlStat]:
    """Return the records sorted ascending by the given key.

    Args:
        records: Records to sort. Left untouched.
        sort_key: A SortKey or its name. Anything unrecognized sorts by
            relevanceScore.

    Returns:
        A new list holding the same records in ascending key order.
    """
    items = list(records)
    if len(items) <= 1:
        return items

    key = sort_key if isinstance(sort_key, SortKey) else SortKey.parse(sort_key)
    scratch = list(items)
    _sort_range(items, scratch, 0, len(items), COMPARATORS[key])
    return items


def parse_limit(raw: Any) -> int:
    """Parse a limit query value. Non-positive or invalid means no limit."""
    if raw is None or isinstance(raw, bool):
        return NO_LIMIT
    try:
        limit = int(raw)
    except (ValueError, TypeError):
        return NO_LIMIT
    return limit if limit > 0 else NO_LIMIT


def limit_results(records: list[UrlStat], limit: int) -> list[UrlStat]:
    """Keep the first limit records when 0 < limit < len(records)."""
    if limit <= 0 or limit >= len(records):
        return records
    return records[:limit]


def rank(
    records: Sequence[UrlStat] | None,
    sort_key_raw: SortKey | str | None,
    limit: int = NO_LIMIT,
) -> list[UrlStat]:
    """Sort records by a named key and truncate to the first limit.

    Raises:
        RankingError: If records is None.
    """
    if records is None:
        raise RankingError("Cannot rank a missing record collection")

    key = SortKey.parse(sort_key_raw)
    ranked = limit_results(merge_sort(records, key), limit)
    logger.debug(
        "Ranked %d records by %s, returning %d",
        len(records), key.value, len(ranked),
    )
    return ranked
