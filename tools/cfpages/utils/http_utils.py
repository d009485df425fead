# File: cfpages/utils/http_utils.py

import asyncio
import random
import logging
from typing import Dict, Optional
from urllib.parse import urlencode, quote

from ..errors import NetworkError, AuthenticationError, CloudFoundryError
from ..events import EventType
from ..interfaces.event_bus import EventBus as EventBusInterface
from ..interfaces.paginator import FetchPage
from ..interfaces.page import Page

logger = logging.getLogger(__name__)

# --- Constants (overridden by ClientConfig) ---
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_SECONDS = 1.0
DEFAULT_TIMEOUT_SECONDS = 30
MAX_RETRY_SLEEP_SECONDS = 60


def build_auth_headers(token: Optional[str] = None) -> Dict[str, str]:
    """
    Construct request headers for the Cloud Controller.
    The token gets a ``bearer`` prefix unless it already carries one.
    """
    headers = {"Accept": "application/json"}
    if token:
        if token.lower().startswith("bearer "):
            headers["Authorization"] = token
        else:
            headers["Authorization"] = f"bearer {token}"
    return headers


def build_url(api_host: str, path: str, params=None) -> str:
    """Join host, path and query; spaces in ``q`` values are sent as %20."""
    url = f"{api_host.rstrip('/')}/{path.lstrip('/')}"
    if params:
        url = f"{url}?{urlencode(params, quote_via=quote)}"
    return url


def compute_backoff(attempt: int, retry_delay: float) -> float:
    """Exponential backoff with jitter for the given retry attempt (1-based)."""
    jitter = random.uniform(0.8, 1.2)
    sleep_time = retry_delay * (2 ** (attempt - 1)) * jitter
    return min(sleep_time, MAX_RETRY_SLEEP_SECONDS)


def is_retryable(error: Exception) -> bool:
    if isinstance(error, AuthenticationError):
        return False
    if isinstance(error, CloudFoundryError):
        # 429 is the only client error worth repeating
        return error.status_code == 429 or not error.is_client_error
    return isinstance(error, NetworkError)


def with_retries(
    fetch_page: FetchPage,
    max_retries: int = DEFAULT_MAX_RETRIES,
    retry_delay: float = DEFAULT_RETRY_DELAY_SECONDS,
    event_bus: Optional[EventBusInterface] = None,
) -> FetchPage:
    """
    Wrap a page fetcher so transient network failures are retried.

    Authentication failures and client errors are raised immediately. After
    the last attempt the original error is re-raised unchanged.
    """
    async def fetch_with_retries(page: int) -> Page:
        attempt = 0
        while True:
            try:
                return await fetch_page(page)
            except Exception as e:
                if attempt >= max_retries or not is_retryable(e):
                    raise
                attempt += 1
                sleep_time = compute_backoff(attempt, retry_delay)
                logger.warning(
                    f"Fetching page {page} failed ({e}); retry {attempt}/{max_retries} in {sleep_time:.2f}s"
                )
                if event_bus is not None:
                    event_bus.publish(EventType.FETCH_RETRY, page=page, attempt=attempt, error=str(e))
                await asyncio.sleep(sleep_time)

    fetch_with_retries.__name__ = getattr(fetch_page, "__name__", "fetch_page")
    return fetch_with_retries
