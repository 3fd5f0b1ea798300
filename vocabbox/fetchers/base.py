"""Shared HTTP plumbing for the web API clients."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import aiohttp

from ..config import Config

logger = logging.getLogger(__name__)

# Statuses worth another attempt; anything else non-200 is final
RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})


class BaseFetcher(ABC):
    """
    Base for the dictionary, image and audio clients.

    Owns one aiohttp session per fetcher, created on first use and closed
    by close() or by leaving an ``async with`` block. _get_json() wraps the
    request/retry/backoff loop the JSON APIs share.
    """

    USER_AGENT = "VocabBox/1.0"

    def __init__(self, timeout: Optional[int] = None, retries: Optional[int] = None):
        self.timeout = timeout or Config.TIMEOUT
        self.retries = max(1, retries or Config.RETRIES)
        self._session: Optional[aiohttp.ClientSession] = None
        self._session_lock = asyncio.Lock()

    async def _get_session(self) -> aiohttp.ClientSession:
        async with self._session_lock:
            if self._session is None or self._session.closed:
                self._session = aiohttp.ClientSession(
                    headers={"User-Agent": self.USER_AGENT},
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                )
            return self._session

    @staticmethod
    def _backoff(attempt: int, status: Optional[int] = None) -> float:
        """Seconds to wait before retry number attempt + 1; rate limits wait twice as long."""
        delay = float(2 ** attempt)
        return delay * 2 if status == 429 else delay

    async def _get_json(self, url: str, params: Optional[Dict[str, str]] = None, label: str = "") -> Any:
        """
        GET a JSON document, retrying timeouts, connection errors and
        RETRYABLE_STATUSES.

        Returns:
            The decoded body, or None for 404, other final statuses and
            exhausted retries
        """
        label = label or type(self).__name__
        session = await self._get_session()

        for attempt in range(self.retries):
            status = None
            try:
                async with session.get(url, params=params) as response:
                    status = response.status
                    if status == 200:
                        return await response.json(content_type=None)
                    if status == 404:
                        logger.info("%s: nothing at %s", label, url)
                        return None
                    if status not in RETRYABLE_STATUSES:
                        logger.warning("%s: HTTP %s, giving up", label, status)
                        return None
                    logger.warning(
                        "%s: HTTP %s (attempt %d/%d)", label, status, attempt + 1, self.retries
                    )
            except asyncio.TimeoutError:
                logger.warning("%s: timeout (attempt %d/%d)", label, attempt + 1, self.retries)
            except (aiohttp.ClientError, ValueError) as e:
                logger.warning("%s: request failed: %s", label, e)

            if attempt < self.retries - 1:
                await asyncio.sleep(self._backoff(attempt, status))

        return None

    @abstractmethod
    async def fetch(self, source: str) -> Any:
        """
        Resolve a word, query or URL.

        Returns:
            Fetcher-specific result, or None when nothing usable was found
        """

    async def close(self) -> None:
        async with self._session_lock:
            if self._session is not None and not self._session.closed:
                await self._session.close()
            self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
