"""Validation of endpoint lists and aggregated records.

Endpoint lists are validated before any fetch starts. A line is a usable
endpoint only if it:
- uses the http:// or https:// scheme
- points at a JSON document (ends with ".json")

Lines failing either check are dropped. Record validation only produces
warnings: odd records are still served, they are just worth knowing
about (e.g. a record with no URL).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sortkey.models import UrlStat

logger = logging.getLogger(__name__)

VALID_URL_PREFIXES = ("http://", "https://")
VALID_URL_SUFFIX = ".json"


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating an endpoint list.

    Attributes:
        valid: True if at least one endpoint survived.
        urls: Endpoints that passed validation, in input order.
        errors: One message per dropped non-blank line.
    """

    valid: bool
    urls: tuple[str, ...]
    errors: tuple[str, ...]


def is_valid_endpoint_url(line: str) -> bool:
    """Check a single endpoint line (surrounding whitespace ignored)."""
    candidate = line.strip()
    return (
        candidate.startswith(VALID_URL_PREFIXES)
        and candidate.endswith(VALID_URL_SUFFIX)
    )


def validate_endpoint_urls(lines: Iterable[str]) -> ValidationResult:
    """Keep the valid endpoints from a newline-split endpoint file.

    Blank lines are dropped silently; other invalid lines are reported.

    Args:
        lines: Raw lines of an endpoint list.

    Returns:
        ValidationResult with valid=False if no endpoint survived.
    """
    urls: list[str] = []
    errors: list[str] = []

    for number, line in enumerate(lines, start=1):
        if is_valid_endpoint_url(line):
            urls.append(line.strip())
        elif line.strip():
            errors.append(f"line {number}: invalid endpoint '{line.strip()}'")

    return ValidationResult(
        valid=len(urls) > 0,
        urls=tuple(urls),
        errors=tuple(errors),
    )


def validate_records(records: Iterable[UrlStat]) -> tuple[str, ...]:
    """Collect warnings about unusual records.

    Checks:
    - URL is non-empty
    - views is not negative

    Returns:
        Tuple of warning messages, empty if every record looks normal.
    """
    warnings: list[str] = []
    for index, record in enumerate(records):
        if not record.url or not record.url.strip():
            warnings.append(f"record {index}: empty url")
        if record.views < 0:
            warnings.append(f"record {index}: negative views")

    if warnings:
        logger.info("Record validation found %d warnings", len(warnings))
    return tuple(warnings)
