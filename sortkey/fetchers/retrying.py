"""Single-endpoint fetch with tiered retry and backoff.

The retry budget is a ladder of tiers. Each tier pairs a backoff period
with a fixed number of attempts:

    tier 1: up to N attempts, sleeping 1s after each failure
    tier 2: up to N attempts, sleeping 5s after each failure
    tier 3: up to N attempts, sleeping 10s after each failure

The delay only escalates once a tier's attempts are used up. Transport
errors and non-2xx statuses both count as failed attempts. The first
success ends the ladder immediately.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import requests

from sortkey.config import RetryConfig
from sortkey.errors import FetchError
from sortkey.models import AggregationResult

logger = logging.getLogger(__name__)


def _attempt(
    session: requests.Session,
    url: str,
    timeout: float,
) -> requests.Response:
    response = session.get(url, timeout=timeout)
    if not 200 <= response.status_code < 300:
        raise requests.HTTPError(
            f"HTTP {response.status_code} {response.reason} for {url}",
            response=response,
        )
    return response


def fetch_url_stats(
    session: requests.Session,
    url: str,
    config: RetryConfig,
    sleep: Callable[[float], None] = time.sleep,
) -> AggregationResult:
    """Fetch one endpoint's record batch, retrying through every tier.

    The body of the first successful response is decoded best-effort: a
    malformed body is an empty batch, not a failure.

    Args:
        session: HTTP session shared by the run.
        url: Endpoint serving a ``{"data": [...]}`` document.
        config: Backoff tiers, attempts per tier and request timeout.
        sleep: Called with the tier's period after each failed attempt.

    Returns:
        AggregationResult decoded from the response body.

    Raises:
        FetchError: If every attempt of every tier failed.
    """
    total = config.total_attempts
    attempt = 0
    last_error = ""

    for backoff in config.backoff_periods:
        for _ in range(config.attempts_per_period):
            attempt += 1
            try:
                response = _attempt(session, url, config.request_timeout)
            except requests.RequestException as exc:
                last_error = str(exc)
                if attempt >= total:
                    break
                logger.warning(
                    "Attempt %d/%d to GET %s failed: %s. Retrying in %ss",
                    attempt, total, url, exc, backoff,
                )
                sleep(backoff)
                continue

            logger.info(
                "GET %s succeeded on attempt %d/%d", url, attempt, total,
            )
            return AggregationResult.decode(response.content)

    logger.error("Retry limit exceeded for %s", url)
    raise FetchError(url, attempt, last_error)
