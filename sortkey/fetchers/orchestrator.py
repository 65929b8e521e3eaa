"""Fetcher orchestrator: pick the acquisition strategy for a source kind.

    file  Read JSON snapshot files sequentially (fetchers.file_source)
    http  Fetch listed endpoints concurrently (fetchers.http_source)

Every call runs an isolated aggregation: nothing is cached or shared
between calls, so concurrent requests never see each other's data.
Unlike partial-source failures, which are logged and skipped inside each
strategy, an aggregation that produces no data raises.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import requests

from sortkey.config import RetryConfig
from sortkey.errors import ConfigurationError
from sortkey.fetchers.file_source import aggregate_files
from sortkey.fetchers.http_source import aggregate_endpoints
from sortkey.models import AggregationResult
from sortkey.sources import SOURCE_FILE, SOURCE_HTTP

logger = logging.getLogger(__name__)


def aggregate(
    source_kind: str,
    source_path: str,
    retry_config: RetryConfig | None = None,
    session: requests.Session | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> AggregationResult:
    """Collect every record from the configured data source.

    Args:
        source_kind: Resolved source kind, "file" or "http".
        source_path: Directory of snapshot files or endpoint lists.
        retry_config: Retry budget for http sources. Defaults apply when
            omitted.
        session: Optional HTTP session for http sources.
        sleep: Backoff sleep for http sources.

    Returns:
        AggregationResult holding the consolidated, unordered records.

    Raises:
        ConfigurationError: If source_kind is not a supported kind.
        AggregationError: If the source produced no data.
    """
    if source_kind == SOURCE_FILE:
        logger.info("Aggregating file data source at %s", source_path)
        records = aggregate_files(source_path)
    elif source_kind == SOURCE_HTTP:
        logger.info("Aggregating http data source listed in %s", source_path)
        records = aggregate_endpoints(
            source_path,
            retry_config or RetryConfig(),
            session=session,
            sleep=sleep,
        )
    else:
        raise ConfigurationError(
            f"Invalid method for getting json data. Data source: {source_kind}"
        )

    return AggregationResult(records=tuple(records))
