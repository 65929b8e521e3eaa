"""HTTP data source: remote endpoints listed in local .cfg files.

Each ``*.cfg`` file in the source directory holds one endpoint URL per
line. All files are read and validated before any request is made, so a
file without a single usable endpoint fails the run up front.

Endpoints are then fetched concurrently, one task per URL, on a thread
pool. Results are consumed as they complete; the executor context only
exits once every task has finished, so no result is lost and no worker
outlives the call. Endpoints that exhaust their retry budget are logged
and left out. The run fails only when no endpoint succeeded.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

import requests

from sortkey.config import RetryConfig
from sortkey.errors import AggregationError, FetchError
from sortkey.fetchers.http_client import create_session
from sortkey.fetchers.retrying import fetch_url_stats
from sortkey.models import UrlStat
from sortkey.sources import FILE_SUFFIX_BY_SOURCE, SOURCE_HTTP
from sortkey.storage.files import list_files, read_file
from sortkey.validation.validators import validate_endpoint_urls

logger = logging.getLogger(__name__)


def load_endpoint_urls(path: str | Path) -> list[str]:
    """Read and validate the endpoint URLs of every .cfg file in path.

    Raises:
        AggregationError: If the directory has no .cfg files, a file cannot
            be read, or any file contains no valid endpoint.
    """
    urls: list[str] = []

    for file_path in list_files(path, FILE_SUFFIX_BY_SOURCE[SOURCE_HTTP]):
        try:
            raw = read_file(file_path)
        except OSError as exc:
            raise AggregationError(
                f"Cannot read endpoint list {file_path}: {exc}"
            ) from exc
        text = raw.decode("utf-8", errors="replace")
        result = validate_endpoint_urls(text.split("\n"))
        for error in result.errors:
            logger.warning("%s: %s", file_path, error)
        if not result.valid:
            raise AggregationError(
                f"No valid urls were found as data source in {file_path}"
            )
        urls.extend(result.urls)

    return urls


def aggregate_endpoints(
    path: str | Path,
    config: RetryConfig,
    session: requests.Session | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> list[UrlStat]:
    """Fetch every listed endpoint concurrently and merge their records.

    Args:
        path: Directory holding the .cfg endpoint lists.
        config: Retry budget for each endpoint.
        session: HTTP session to use. A new one is created (and closed)
            when omitted.
        sleep: Backoff sleep, passed through to each fetch.

    Returns:
        Records of every successful endpoint. Order is completion order
        and carries no meaning.

    Raises:
        AggregationError: If no endpoint could be fetched, or the
            successful endpoints served no records.
    """
    urls = load_endpoint_urls(path)

    owns_session = session is None
    if session is None:
        session = create_session(config, pool_size=len(urls))

    records: list[UrlStat] = []
    succeeded = 0
    failed = 0

    try:
        with ThreadPoolExecutor(max_workers=len(urls)) as executor:
            futures = {
                executor.submit(
                    fetch_url_stats, session, url, config, sleep,
                ): url
                for url in urls
            }

            for future in as_completed(futures):
                try:
                    batch = future.result()
                except FetchError as exc:
                    logger.error("Endpoint failed: %s", exc)
                    failed += 1
                    continue
                succeeded += 1
                records.extend(batch.records)
    finally:
        if owns_session:
            session.close()

    logger.info(
        "Fetched %d endpoints: %d succeeded, %d failed, %d records",
        len(urls), succeeded, failed, len(records),
    )

    if succeeded == 0:
        raise AggregationError(f"All {failed} http get attempts failed")
    if not records:
        raise AggregationError(
            f"{succeeded} endpoints responded but served no records"
        )
    return records
