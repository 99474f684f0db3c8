"""Bounded waits for elements to appear on a page."""

import asyncio
import logging
from typing import Any

from tenacity import AsyncRetrying, retry_if_result, stop_after_attempt, wait_fixed

from seopanel.core.page.base import PageSource

logger = logging.getLogger(__name__)


async def wait_for_element(
    page: PageSource,
    selector: str,
    *,
    retry_interval: float,
    max_retries: int,
    timeout: float,
) -> Any | None:
    """Poll ``page`` for ``selector`` until it appears or a bound is hit.

    The first query runs immediately, then up to ``max_retries`` more
    queries run ``retry_interval`` seconds apart. ``timeout`` caps the
    whole wait even if attempts remain.

    Args:
        page: Page to query
        selector: Selector to look for
        retry_interval: Seconds between queries
        max_retries: Queries after the first one
        timeout: Hard wall-clock limit in seconds

    Returns:
        The element as returned by ``page.query``, or None if it never appeared.

    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_fixed(retry_interval),
        retry=retry_if_result(lambda element: element is None),
        retry_error_callback=lambda state: None,
    )
    try:
        return await asyncio.wait_for(retrying(page.query, selector), timeout=timeout)
    except TimeoutError:
        logger.debug(f'Timed out after {timeout}s waiting for {selector!r}')
        return None
