import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import httpx

from config.settings import (
    FETCH_MAX_CONCURRENCY,
    HTTP_CONNECT_TIMEOUT_S,
    HTTP_TIMEOUT_S,
    HTTP_USER_AGENT,
)
from framework.fanout import ensure_sequence, map_with_limit

logger = logging.getLogger(__name__)

_HEADERS = {
    "User-Agent": HTTP_USER_AGENT,
    "Accept": "*/*",
}
_TIMEOUT = httpx.Timeout(HTTP_TIMEOUT_S, connect=HTTP_CONNECT_TIMEOUT_S)


async def fetch_url(url: str) -> httpx.Response:
    """GET a single URL and return the response.

    Non-2xx statuses are returned as-is; only transport errors raise.
    """
    async with httpx.AsyncClient(headers=_HEADERS, timeout=_TIMEOUT, follow_redirects=True) as client:
        resp = await client.get(url)
    logger.debug(f"fetched {url} status={resp.status_code}")
    return resp


async def fetch_all(
    urls: Sequence[str],
    max_concurrency: int = FETCH_MAX_CONCURRENCY,
    fetch_impl: Callable[[str], Awaitable[Any]] = fetch_url,
) -> list[Any]:
    """Fetch multiple URLs with bounded concurrency, preserving order.

    Waits for every request to settle. If any failed, raises AggregateFailure
    whose ``failed`` list holds ``{index, error}`` for each one; partial
    results are not returned.
    """
    ensure_sequence(urls, "urls")
    return await map_with_limit(urls, fetch_impl, max_concurrency, label="requests")
