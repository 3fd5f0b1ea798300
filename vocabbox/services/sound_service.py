"""Sound Service - play pronunciation audio."""

import logging
from typing import Callable, Optional

from ..fetchers import AudioFetcher

logger = logging.getLogger(__name__)


class SoundService:
    """
    Resolve an audio reference to a local file and hand it to a player.

    The player is a callable taking a local path; the Flet UI supplies one
    backed by an Audio control.
    """

    def __init__(
        self,
        player: Optional[Callable[[str], None]] = None,
        fetcher: Optional[AudioFetcher] = None,
    ):
        self._player = player
        self._fetcher = fetcher

    @property
    def fetcher(self) -> AudioFetcher:
        """Lazy-load audio fetcher."""
        if self._fetcher is None:
            self._fetcher = AudioFetcher()
        return self._fetcher

    def set_player(self, player: Callable[[str], None]) -> None:
        self._player = player

    async def play(self, audio: Optional[str]) -> bool:
        """
        Play an audio reference.

        Args:
            audio: Remote URL or local path

        Returns:
            True if playback was started
        """
        if not audio:
            return False
        if self._player is None:
            logger.warning("No audio player attached, cannot play %s", audio)
            return False

        local_path = await self.fetcher.fetch(audio)
        if not local_path:
            logger.warning("Audio unavailable: %s", audio)
            return False

        self._player(local_path)
        return True

    async def close(self) -> None:
        if self._fetcher is not None:
            await self._fetcher.close()
            self._fetcher = None
