"""
Remote CSV download.
"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


async def fetch_csv(url: str, timeout: Optional[float] = None,
                    transport: Optional[httpx.AsyncBaseTransport] = None) -> str:
    """
    Download ``url`` and return the body as text.

    Redirects are followed (published sheet links redirect to a content host).
    Non-2xx responses raise ``httpx.HTTPStatusError``.
    """
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True, transport=transport) as client:
        response = await client.get(url)
        response.raise_for_status()

    logger.debug("Fetched %s (%d bytes)", url, len(response.content))
    return response.text
