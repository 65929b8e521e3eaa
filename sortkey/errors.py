"""Exception hierarchy for the aggregation service.

Partial-source failures (one bad file, one dead endpoint) are logged and
excluded from results; only the errors below ever reach a caller.
"""

from __future__ import annotations


class SortKeyError(RuntimeError):
    """Base class for all service errors."""


class ConfigurationError(SortKeyError, ValueError):
    """Settings that cannot be used to run an aggregation."""


class AggregationError(SortKeyError):
    """An aggregation produced no usable data."""


class FetchError(SortKeyError):
    """A single endpoint exhausted its retry budget."""

    def __init__(self, url: str, attempts: int, detail: str = "") -> None:
        suffix = f": {detail}" if detail else ""
        super().__init__(
            f"Retry limit exceeded after {attempts} attempts "
            f"for {url}{suffix}"
        )
        self.url = url
        self.attempts = attempts


class RankingError(SortKeyError):
    """Internal invariant violated while ranking records."""
