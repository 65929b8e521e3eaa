"""Configuration for the URL stats aggregation service.

Centralizes all configuration: which data source to aggregate, where it
lives, and the retry budget for remote endpoints. All config is loaded
from environment variables at runtime.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from sortkey.errors import ConfigurationError
from sortkey.sources import resolve_source

ENV_SOURCE_KIND = "DATA_COLLECTION_METHOD"
ENV_SOURCE_PATH = "DATA_COLLECTION_PATH"
ENV_RETRY_ATTEMPTS = "FETCH_RETRY_ATTEMPTS"
ENV_BACKOFF_PERIODS = "FETCH_BACKOFF_PERIODS"
ENV_PORT = "PORT"


@dataclass(frozen=True)
class RetryConfig:
    """Retry budget for one endpoint fetch.

    Each entry of backoff_periods is a tier: the fetcher makes up to
    attempts_per_period attempts, sleeping that tier's period (seconds)
    after each failure, before escalating to the next tier.
    """

    backoff_periods: tuple[float, ...] = (1.0, 5.0, 10.0)
    attempts_per_period: int = 5
    request_timeout: float = 10.0
    user_agent: str = "SortKeyUrlStatsCollector/1.0"

    @property
    def total_attempts(self) -> int:
        return len(self.backoff_periods) * self.attempts_per_period


@dataclass(frozen=True)
class ServiceConfig:
    source_kind: str
    source_path: str
    host: str = "0.0.0.0"
    port: int = 5000


def _parse_backoff_periods(raw: str) -> tuple[float, ...]:
    try:
        periods = tuple(float(part) for part in raw.split(",") if part.strip())
    except ValueError:
        raise ConfigurationError(
            f"Invalid {ENV_BACKOFF_PERIODS}: '{raw}'. "
            "Expected comma-separated seconds, e.g. '1,5,10'."
        ) from None
    if not periods or any(period < 0 for period in periods):
        raise ConfigurationError(
            f"Invalid {ENV_BACKOFF_PERIODS}: '{raw}'. "
            "Expected at least one non-negative period."
        )
    return periods


def _parse_positive_int(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value <= 0:
        raise ConfigurationError(
            f"Invalid {name}: '{raw}'. Expected a positive integer."
        )
    return value


def load_config() -> tuple[ServiceConfig, RetryConfig]:
    """Load and validate configuration from environment variables.

    The data source kind and path never fail to resolve: unknown kinds
    fall back to "http" and empty paths to the kind's default directory.
    Retry and port overrides are optional but must be well formed.

    Returns:
        Tuple of (ServiceConfig, RetryConfig) with validated settings.

    Raises:
        ConfigurationError: If a retry or port override is malformed.
    """
    source_kind, source_path = resolve_source(
        os.environ.get(ENV_SOURCE_KIND, ""),
        os.environ.get(ENV_SOURCE_PATH, ""),
    )

    retry_defaults = RetryConfig()
    backoff_raw = os.environ.get(ENV_BACKOFF_PERIODS, "")
    attempts_raw = os.environ.get(ENV_RETRY_ATTEMPTS, "")
    port_raw = os.environ.get(ENV_PORT, "")

    retry_config = RetryConfig(
        backoff_periods=(
            _parse_backoff_periods(backoff_raw)
            if backoff_raw
            else retry_defaults.backoff_periods
        ),
        attempts_per_period=(
            _parse_positive_int(ENV_RETRY_ATTEMPTS, attempts_raw)
            if attempts_raw
            else retry_defaults.attempts_per_period
        ),
    )

    service_config = ServiceConfig(
        source_kind=source_kind,
        source_path=source_path,
        port=_parse_positive_int(ENV_PORT, port_raw) if port_raw else 5000,
    )
    return service_config, retry_config
