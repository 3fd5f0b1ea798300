"""Debounced scheduling of async callbacks."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Run an async callback once input has stopped changing for a delay.

    Every schedule() supersedes the previous one: the pending task is
    cancelled (even if its callback is already awaiting) and the version
    token is bumped. The callback receives its token and can check
    is_current() after each await so a late result never lands on newer
    state.

    Usage:
        debouncer = Debouncer(delay_ms=1000)

        async def lookup(token, text):
            result = await service.get_word_info(text)
            if debouncer.is_current(token):
                apply(result)

        debouncer.schedule(lookup, "apple")
    """

    def __init__(self, delay_ms: int) -> None:
        self.delay_ms = delay_ms
        self._version: int = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def version(self) -> int:
        return self._version

    @property
    def pending(self) -> bool:
        """True while a scheduled callback has not finished."""
        return self._task is not None and not self._task.done()

    def is_current(self, token: int) -> bool:
        return token == self._version

    def cancel(self) -> None:
        """Drop the pending callback, if any, and invalidate its token."""
        self._version += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def schedule(self, callback: Callable[..., Awaitable[Any]], *args: Any) -> int:
        """
        Schedule callback(token, *args) after the delay.

        Must be called from a running event loop.

        Returns:
            The token passed to the callback
        """
        self.cancel()
        token = self._version

        async def _debounced() -> None:
            await asyncio.sleep(self.delay_ms / 1000)
            if not self.is_current(token):
                return
            try:
                await callback(token, *args)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Debounced callback failed")

        self._task = asyncio.create_task(_debounced())
        return token
