"""
Media path generation utilities - Single source of truth for file naming.

Used by the audio fetcher, the sound service and the image picker so that
the same source always maps to the same cached file.
"""

import hashlib
import re
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from ..config import Config


class MediaPathGenerator:
    """Centralized media file path generator."""

    AUDIO_EXT = ".mp3"
    IMAGE_EXT = ".jpg"
    VOICE_TAG_PATTERN = re.compile(r"[^A-Za-z0-9]+")

    @classmethod
    def _get_media_dir(cls) -> Path:
        return Path(Config.MEDIA_DIR)

    @classmethod
    def _hash(cls, value: str) -> str:
        return hashlib.sha256(value.encode("utf-8")).hexdigest()[:16]

    @classmethod
    def _extension(cls, source: str, default: str) -> str:
        suffix = Path(urlparse(source).path).suffix.lower()
        return suffix if suffix and len(suffix) <= 5 else default

    @classmethod
    def audio_cache(cls, url: str) -> str:
        """
        Filename for a downloaded pronunciation.

        Args:
            url: Remote audio URL

        Returns:
            Filename like "_snd_1a2b3c4d5e6f7a8b.mp3"
        """
        return f"_snd_{cls._hash(url)}{cls._extension(url, cls.AUDIO_EXT)}"

    @classmethod
    def audio_tts(cls, word: str, voice: Optional[str] = None) -> str:
        """
        Filename for a synthesized pronunciation.

        The voice is part of the name, so switching Config.VOICE never
        reuses clips spoken by the previous voice.

        Returns:
            Filename like "_tts_1a2b3c4d5e6f7a8b_enGBSoniaNeural.mp3"
        """
        voice = voice or Config.VOICE
        tag = cls.VOICE_TAG_PATTERN.sub("", voice)
        return f"_tts_{cls._hash(word.lower() + '|' + voice)}_{tag}{cls.AUDIO_EXT}"

    @classmethod
    def picked_image(cls, source_path: str) -> str:
        """Filename for an image copied from the photo library."""
        return f"_img_{cls._hash(source_path)}{cls._extension(source_path, cls.IMAGE_EXT)}"

    @classmethod
    def audio_cache_path(cls, url: str) -> str:
        return str(cls._get_media_dir() / cls.audio_cache(url))

    @classmethod
    def audio_tts_path(cls, word: str, voice: Optional[str] = None) -> str:
        return str(cls._get_media_dir() / cls.audio_tts(word, voice))

    @classmethod
    def picked_image_path(cls, source_path: str) -> str:
        return str(cls._get_media_dir() / cls.picked_image(source_path))

    @staticmethod
    def is_remote(reference: Optional[str]) -> bool:
        """True for http(s) references, False for local paths."""
        if not reference:
            return False
        return urlparse(reference).scheme in ("http", "https")
