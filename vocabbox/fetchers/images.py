"""Image fetcher - illustrative pictures via the Pixabay search API."""

from typing import Any, Optional

from ..config import Config
from ..utils.parsing import TextParser
from .base import BaseFetcher


class ImageSearchFetcher(BaseFetcher):
    """Find an image URL for a word. Disabled when no API key is configured."""

    def __init__(self, api_key: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.api_key = Config.PIXABAY_API_KEY if api_key is None else api_key

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    @staticmethod
    def parse_hits(payload: Any) -> Optional[str]:
        """Return the first hit's web-format URL."""
        if not isinstance(payload, dict):
            return None
        for hit in payload.get("hits") or []:
            if isinstance(hit, dict) and hit.get("webformatURL"):
                return hit["webformatURL"]
        return None

    async def fetch(self, source: str) -> Optional[str]:
        """
        Search for an image.

        Args:
            source: Word to illustrate

        Returns:
            Image URL, or None
        """
        query = TextParser.normalize_query(source)
        if not query or not self.enabled:
            return None

        params = {
            "key": self.api_key,
            "q": query,
            "image_type": "photo",
            "safesearch": "true",
            "per_page": "3",
        }

        payload = await self._get_json(Config.PIXABAY_API_URL, params=params, label="Image search")
        return self.parse_hits(payload) if payload is not None else None
