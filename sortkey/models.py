"""Immutable data models for URL engagement statistics.

All dataclasses are frozen (immutable) to prevent accidental mutation.
Each model has a to_document() method that converts it to the dict
shape used on the wire, and the record batch knows how to decode itself
from the JSON documents served by data sources.

Zero-valued numeric fields are indistinguishable from absent ones: a
record without "views" decodes to views=0, and views=0 is omitted again
when the record is encoded.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


def _parse_int(value: Any) -> int:
    """Safely parse a value to int, returning 0 on failure.

    Source documents sometimes carry empty or mistyped numeric fields,
    so this avoids discarding a whole batch over one bad record.
    """
    if isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (ValueError, TypeError, OverflowError):
        return 0


def _parse_float(value: Any) -> float:
    """Safely parse a value to float, returning 0.0 on failure.

    NaN and infinities also become 0.0: NaN compares false against
    everything and would land at an arbitrary position when ranked.
    """
    if isinstance(value, bool):
        return 0.0
    try:
        parsed = float(value)
    except (ValueError, TypeError):
        return 0.0
    return parsed if math.isfinite(parsed) else 0.0


class SortKey(str, Enum):
    """Field used to order records."""

    RELEVANCE_SCORE = "relevanceScore"
    VIEWS = "views"

    @classmethod
    def parse(cls, raw: str | None) -> SortKey:
        """Map free text to a sort key, falling back to relevanceScore.

        Never raises: empty or unrecognized input selects the default.
        """
        for key in cls:
            if raw == key.value:
                return key
        return cls.RELEVANCE_SCORE


@dataclass(frozen=True)
class UrlStat:
    """Engagement statistics for a single URL.

    Attributes:
        url: Address the statistics belong to.
        views: Page view count.
        relevance_score: Relevance of the page, higher is more relevant.
    """

    url: str = ""
    views: int = 0
    relevance_score: float = 0.0

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> UrlStat:
        """Build a record from a decoded JSON object, best-effort."""
        url = doc.get("url")
        return cls(
            url=url if isinstance(url, str) else "",
            views=_parse_int(doc.get("views")),
            relevance_score=_parse_float(doc.get("relevanceScore")),
        )

    def to_document(self) -> dict:
        """Convert to a wire dict. Omits empty and zero-valued fields."""
        doc: dict[str, Any] = {}
        if self.url:
            doc["url"] = self.url
        if self.views:
            doc["views"] = self.views
        if self.relevance_score:
            doc["relevanceScore"] = self.relevance_score
        return doc


@dataclass(frozen=True)
class AggregationResult:
    """A batch of records, as served by one source or produced by one run.

    Attributes:
        records: The records in source order. Duplicates are kept.
    """

    records: tuple[UrlStat, ...] = ()

    @classmethod
    def from_json(cls, raw: bytes | str) -> AggregationResult:
        """Strictly decode a ``{"data": [...]}`` document.

        A missing "data" member is an empty batch. Entries of "data" that
        are not JSON objects are skipped.

        Raises:
            ValueError: If the input is not valid JSON, the top level is not
                an object, or "data" is not a list. Nesting too deep to
                decode is reported as invalid JSON.
        """
        try:
            payload = json.loads(raw)
        except RecursionError:
            raise ValueError("JSON document is nested too deeply") from None
        if not isinstance(payload, dict):
            raise ValueError(
                f"expected a JSON object, got {type(payload).__name__}"
            )

        data = payload.get("data")
        if data is None:
            return cls()
        if not isinstance(data, list):
            raise ValueError(
                f"expected 'data' to be a list, got {type(data).__name__}"
            )

        return cls(
            records=tuple(
                UrlStat.from_document(item)
                for item in data
                if isinstance(item, dict)
            )
        )

    @classmethod
    def decode(cls, raw: bytes | str) -> AggregationResult:
        """Best-effort decode: malformed input yields an empty batch."""
        try:
            return cls.from_json(raw)
        except ValueError as exc:
            logger.warning("Discarding malformed record batch: %s", exc)
            return cls()

    def to_document(self) -> dict:
        """Convert to the response body shape with a record count."""
        return {
            "data": [record.to_document() for record in self.records],
            "count": len(self.records),
        }
