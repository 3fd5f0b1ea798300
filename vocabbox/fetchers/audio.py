"""Audio fetcher - pronunciation downloads and TTS synthesis."""

import asyncio
import logging
import os
import uuid
from typing import Optional

import aiofiles
import aiohttp
import edge_tts

from ..config import Config
from ..utils.parsing import TextParser
from ..utils.paths import MediaPathGenerator
from .base import BaseFetcher

logger = logging.getLogger(__name__)

# Anything smaller is an error page or a truncated stream
MIN_AUDIO_BYTES = 100


def _file_ok(path: str) -> bool:
    return os.path.exists(path) and os.path.getsize(path) > MIN_AUDIO_BYTES


def _remove_quietly(path: Optional[str]) -> None:
    if path and os.path.exists(path):
        try:
            os.remove(path)
        except OSError as e:
            logger.debug("Could not remove temp file %s: %s", path, e)


class AudioFetcher(BaseFetcher):
    """Download pronunciation files and synthesize missing ones with Edge TTS."""

    def __init__(self, voice: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.voice = voice or Config.VOICE

    async def download(self, url: str, output_path: str) -> bool:
        """
        Download an audio file.

        Uses atomic write pattern: write to temp file, then rename.

        Args:
            url: Remote audio URL
            output_path: Path to save the file

        Returns:
            True if successful, False otherwise
        """
        session = await self._get_session()
        temp_path = f"{output_path}.{uuid.uuid4().hex[:8]}.tmp"

        for attempt in range(self.retries):
            try:
                async with session.get(url) as response:
                    if response.status != 200:
                        logger.warning("Audio download error %s for %s", response.status, url)
                        if response.status < 500 and response.status != 429:
                            return False
                    else:
                        content = await response.read()
                        if len(content) <= MIN_AUDIO_BYTES:
                            logger.warning("Audio too small (%d bytes): %s", len(content), url)
                            return False

                        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
                        try:
                            async with aiofiles.open(temp_path, "wb") as f:
                                await f.write(content)
                            os.replace(temp_path, output_path)
                        finally:
                            _remove_quietly(temp_path)
                        return True
            except asyncio.TimeoutError:
                logger.warning("Audio download timeout: %s", url)
            except aiohttp.ClientError as e:
                logger.warning("Audio download failed: %s (%s)", url, e)

            if attempt < self.retries - 1:
                await asyncio.sleep(2 ** attempt)

        return False

    async def synthesize(self, text: str, output_path: str) -> bool:
        """
        Generate a pronunciation with Edge TTS.

        Args:
            text: Text to convert to speech
            output_path: Path to save MP3

        Returns:
            True if successful, False otherwise
        """
        clean_text = TextParser.clean_for_tts(text)
        if not clean_text:
            return False

        temp_path = f"{output_path}.{uuid.uuid4().hex[:8]}.tmp"
        try:
            os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
            communicate = edge_tts.Communicate(clean_text, self.voice)
            await communicate.save(temp_path)

            if _file_ok(temp_path):
                os.replace(temp_path, output_path)
                return True
            return False
        except Exception as e:
            logger.warning("Error generating audio for %r: %s", clean_text, str(e)[:80])
            return False
        finally:
            _remove_quietly(temp_path)

    async def fetch(self, source: str) -> Optional[str]:
        """
        Resolve an audio reference to a local file.

        Remote URLs are downloaded once into the media cache; local paths
        are returned as they are when they exist.

        Args:
            source: Remote URL or local path

        Returns:
            Local file path, or None
        """
        if not source:
            return None

        if not MediaPathGenerator.is_remote(source):
            return source if os.path.exists(source) else None

        output_path = MediaPathGenerator.audio_cache_path(source)
        if _file_ok(output_path):
            return output_path

        if await self.download(source, output_path):
            return output_path
        return None

    async def pronounce(self, word: str) -> Optional[str]:
        """Synthesize (or reuse) a pronunciation for a word."""
        if not word or not word.strip():
            return None

        output_path = MediaPathGenerator.audio_tts_path(word, self.voice)
        if _file_ok(output_path):
            return output_path

        if await self.synthesize(word, output_path):
            return output_path
        return None
