"""Dictionary fetcher - word definitions via the Free Dictionary API."""

import logging
import urllib.parse
from typing import Any, Dict, List, Optional

from ..config import Config
from ..utils.parsing import TextParser
from .base import BaseFetcher

logger = logging.getLogger(__name__)


class DictionaryFetcher(BaseFetcher):
    """
    Resolve a word to its dictionary entry.

    Only the first entry, first meaning and first definition are used,
    matching what the Add Word screen shows.
    """

    def __init__(self, base_url: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.base_url = (base_url or Config.DICTIONARY_API_URL).rstrip("/")

    @staticmethod
    def _normalize_url(url: Optional[str]) -> Optional[str]:
        """The API sometimes returns protocol-relative audio links."""
        if not url:
            return None
        url = url.strip()
        if url.startswith("//"):
            return f"https:{url}"
        return url or None

    @classmethod
    def parse_entries(cls, payload: Any) -> Optional[Dict[str, Any]]:
        """
        Map an API response to word fields.

        Args:
            payload: Decoded JSON body (a list of entries)

        Returns:
            Dict with word, phonetics, part_of_speech, meaning, audio,
            or None if the payload has no usable entry
        """
        if not isinstance(payload, list) or not payload:
            return None
        entry = payload[0]
        if not isinstance(entry, dict) or not entry.get("word"):
            return None

        phonetic_items: List[Dict[str, Any]] = [
            p for p in entry.get("phonetics") or [] if isinstance(p, dict)
        ]

        phonetics = entry.get("phonetic") or next(
            (p["text"] for p in phonetic_items if p.get("text")), ""
        )
        audio = next(
            (p["audio"] for p in phonetic_items if p.get("audio")), None
        )

        part_of_speech = ""
        meaning = ""
        meanings = entry.get("meanings") or []
        if meanings and isinstance(meanings[0], dict):
            first = meanings[0]
            part_of_speech = first.get("partOfSpeech") or ""
            definitions = first.get("definitions") or []
            if definitions and isinstance(definitions[0], dict):
                meaning = TextParser.clean_definition(definitions[0].get("definition", ""))

        return {
            "word": TextParser.normalize_unicode(entry["word"]),
            "phonetics": TextParser.normalize_unicode(phonetics),
            "part_of_speech": part_of_speech,
            "meaning": meaning,
            "audio": cls._normalize_url(audio),
        }

    async def _get_entries(self, word: str) -> Any:
        """Entry list for a word, or None when the API does not know it."""
        url = f"{self.base_url}/{urllib.parse.quote(word)}"
        return await self._get_json(url, label="Dictionary API")

    async def fetch(self, source: str) -> Optional[Dict[str, Any]]:
        """
        Look up a word.

        Args:
            source: Word to look up

        Returns:
            Parsed word fields, or None if not found
        """
        word = TextParser.normalize_query(source)
        if not word:
            return None

        payload = await self._get_entries(word)
        if payload is None:
            return None

        result = self.parse_entries(payload)
        if result is None:
            logger.warning("Unexpected dictionary payload for %r", word)
        return result
