"""AWS Lambda entry point for the URL stats service.

This is the thin layer between API Gateway (proxy integration) and the
aggregation engine. Each invocation:

    1. Routes the request path
    2. Loads config from environment variables
    3. Aggregates records from the configured data source
    4. Ranks and limits them (sortkey route only)
    5. Returns the records as {"data": [...], "count": n}

Routes:
    GET /                      every record, in no particular order
    GET /sortkey/<key>?limit=N records sorted ascending by <key>

All logging is structured JSON for CloudWatch readability.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

from sortkey.config import load_config
from sortkey.errors import AggregationError, ConfigurationError, RankingError
from sortkey.fetchers import aggregate
from sortkey.models import AggregationResult
from sortkey.ranking import parse_limit, rank
from sortkey.validation.validators import validate_records

logger = logging.getLogger()
logger.setLevel(logging.INFO)

SORTKEY_PREFIX = "/sortkey/"

HTTP_REASONS = {
    400: "Bad Request",
    405: "Method Not Allowed",
    500: "Internal Server Error",
}


class _JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON for CloudWatch."""

    def format(self, record: logging.LogRecord) -> str:
        """Serialize the log record to a JSON string."""
        return json.dumps({
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        })


_handler = logging.StreamHandler()
_handler.setFormatter(_JSONFormatter())
if not logger.handlers:
    logger.addHandler(_handler)


def _response(status: int, payload: dict[str, Any]) -> dict[str, Any]:
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(payload),
    }


def _error(status: int, message: str | None = None) -> dict[str, Any]:
    return _response(
        status,
        {"error": message or HTTP_REASONS[status], "status": status},
    )


def _parse_sort_key(path: str) -> str | None:
    """Extract <key> from /sortkey/<key>, or None if the path is malformed."""
    segments = path.split(SORTKEY_PREFIX)
    if len(segments) != 2 or segments[0]:
        return None
    key_segments = segments[1].split("/")
    if len(key_segments) != 1 or not key_segments[0]:
        return None
    return key_segments[0]


def _load_records() -> AggregationResult:
    """Aggregate the configured data source, logging how long it took."""
    service_config, retry_config = load_config()

    started = time.monotonic()
    try:
        result = aggregate(
            service_config.source_kind,
            service_config.source_path,
            retry_config,
        )
    except AggregationError as exc:
        logger.error(
            "Aggregation failed: %s took=%.3fs",
            exc, time.monotonic() - started,
        )
        raise

    logger.info(
        "Aggregated %d records from %s source took=%.3fs",
        len(result.records),
        service_config.source_kind,
        time.monotonic() - started,
    )
    warnings = validate_records(result.records)
    for warning in warnings:
        logger.warning("Record validation: %s", warning)
    return result


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """AWS Lambda handler - entry point for every HTTP request.

    Called by API Gateway with a proxy event. Only httpMethod, path and
    queryStringParameters are read; the context is unused but required
    by the Lambda interface.

    Degenerate inputs never fail: an unknown sort key sorts by
    relevanceScore and an invalid limit returns every record.

    Returns:
        Dict with statusCode, headers and a JSON body. Errors carry a body
        of {"error": message, "status": code}.
    """
    method = (event.get("httpMethod") or "GET").upper()
    path = event.get("path") or "/"
    query = event.get("queryStringParameters") or {}

    if path == "/":
        sort_key = None
    elif path.startswith(SORTKEY_PREFIX):
        sort_key = _parse_sort_key(path)
        if sort_key is None:
            return _error(400)
    else:
        return _error(400)

    if method != "GET":
        return _error(405)

    try:
        result = _load_records()
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return _error(500, str(exc))
    except AggregationError as exc:
        return _error(500, str(exc))

    if sort_key is None:
        return _response(200, result.to_document())

    try:
        ranked = rank(result.records, sort_key, parse_limit(query.get("limit")))
    except RankingError as exc:
        logger.error("Ranking failed: %s", exc)
        return _error(500, str(exc))

    logger.info(
        "Serving %d of %d records sorted by %s",
        len(ranked), len(result.records), sort_key,
    )
    return _response(200, AggregationResult(records=tuple(ranked)).to_document())
