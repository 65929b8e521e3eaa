"""HTTP session factory for endpoint fetches.

Creates a requests.Session pre-configured with:
- Honest User-Agent header (not browser impersonation)
- A connection pool large enough for one connection per fetch worker
- No adapter-level retries: retries are tiered in fetchers.retrying
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter

from sortkey.config import RetryConfig


def create_session(
    config: RetryConfig,
    pool_size: int = 10,
) -> requests.Session:
    """Create an HTTP session shared by the fetch workers of one run.

    Args:
        config: Retry configuration with user_agent.
        pool_size: Connections kept per host, one per concurrent fetch.

    Returns:
        A requests.Session ready to use for all endpoint fetches.
    """
    session = requests.Session()
    session.headers["User-Agent"] = config.user_agent
    session.headers["Accept"] = "application/json"

    adapter = HTTPAdapter(
        pool_connections=pool_size,
        pool_maxsize=pool_size,
        max_retries=0,
    )
    session.mount("https://", adapter)
    session.mount("http://", adapter)

    return session
