from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional
from aiohttp import ClientSession, ClientTimeout
import aiohttp
import logging

from ..errors import FetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchResult:
    url: str
    resolved_url: str
    text: str


async def fetch_text(
    session: ClientSession,
    url: str,
    *,
    timeout: float = 15.0,
    user_agent: Optional[str] = None,
    retries: int = 2,
) -> FetchResult:
    """
    Fetch a URL and return its body text plus the final URL after redirects.
    Raises FetchError once every attempt has failed.
    """
    headers = {}
    if user_agent:
        headers["User-Agent"] = user_agent

    last_exc: Optional[Exception] = None
    for attempt in range(retries + 1):
        try:
            async with session.get(url, headers=headers, timeout=ClientTimeout(total=timeout)) as resp:
                resp.raise_for_status()
                text = await resp.text()
                return FetchResult(url=url, resolved_url=str(resp.url), text=text)
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as exc:
            last_exc = exc
            logger.debug("fetch_text attempt %s failed for %s: %r", attempt + 1, url, exc)
            if attempt < retries:
                await asyncio.sleep(min(2 ** attempt, 5))
    raise FetchError(url, last_exc)


def create_session() -> ClientSession:
    """
    Create a shared aiohttp ClientSession.
    """
    # Note: caller is responsible for closing the session (await session.close()).
    connector = aiohttp.TCPConnector(limit=0)  # unlimited; concurrency managed by the worker pool
    return aiohttp.ClientSession(connector=connector)
