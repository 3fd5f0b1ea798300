"""
Lookup Service - resolve typed text to a word draft.

Combines the dictionary, image search and pronunciation fetchers behind a
single call used by the Add Word screen.
"""

import logging
from typing import Optional

from ..config import Config
from ..fetchers import AudioFetcher, DictionaryFetcher, ImageSearchFetcher
from ..models import WordDraft
from ..utils.parsing import TextParser

logger = logging.getLogger(__name__)


class WordLookupService:
    """
    Service for looking up words.

    Dictionary failures yield None. Image search and TTS fallback are
    best-effort: their failures leave the field empty.
    """

    def __init__(
        self,
        dictionary: Optional[DictionaryFetcher] = None,
        images: Optional[ImageSearchFetcher] = None,
        audio: Optional[AudioFetcher] = None,
        tts_fallback: Optional[bool] = None,
    ):
        """
        Initialize lookup service.

        Args:
            dictionary: Dictionary client (defaults to DictionaryFetcher())
            images: Image search client (defaults to ImageSearchFetcher())
            audio: Audio client used for the TTS fallback
            tts_fallback: Synthesize a pronunciation when the dictionary has
                none (defaults to Config.TTS_FALLBACK)
        """
        self.dictionary = dictionary or DictionaryFetcher()
        self.images = images or ImageSearchFetcher()
        self.tts_fallback = Config.TTS_FALLBACK if tts_fallback is None else tts_fallback
        self._audio = audio

    @property
    def audio(self) -> AudioFetcher:
        """Lazy-load audio fetcher."""
        if self._audio is None:
            self._audio = AudioFetcher()
        return self._audio

    async def _find_image(self, word: str) -> Optional[str]:
        if not self.images.enabled:
            return None
        try:
            return await self.images.fetch(word)
        except Exception as e:
            logger.warning("Image search for %r failed: %s", word, e)
            return None

    async def _pronounce(self, word: str) -> Optional[str]:
        try:
            return await self.audio.pronounce(word)
        except Exception as e:
            logger.warning("TTS fallback for %r failed: %s", word, e)
            return None

    async def get_word_info(self, text: str) -> Optional[WordDraft]:
        """
        Look up the given text.

        Args:
            text: Raw search text

        Returns:
            A new draft, or None if the word was not found
        """
        query = TextParser.normalize_query(text)
        if not query:
            return None

        fields = await self.dictionary.fetch(query)
        if not fields:
            return None

        word = fields.get("word", "")
        image = await self._find_image(word)

        audio = fields.get("audio")
        if not audio and self.tts_fallback and word:
            audio = await self._pronounce(word)

        logger.debug("Lookup %r -> %r (audio=%s, image=%s)", text, word, bool(audio), bool(image))
        return WordDraft(
            search_text=text,
            word=word,
            phonetics=fields.get("phonetics", ""),
            part_of_speech=fields.get("part_of_speech", ""),
            meaning=fields.get("meaning", ""),
            audio=audio,
            image=image,
        )

    async def close(self) -> None:
        """Clean up all fetchers."""
        await self.dictionary.close()
        await self.images.close()
        if self._audio is not None:
            await self._audio.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
