"""Fetchers module - network clients for dictionary, image and audio data."""

from .base import BaseFetcher
from .dictionary import DictionaryFetcher
from .images import ImageSearchFetcher
from .audio import AudioFetcher

__all__ = [
    'BaseFetcher',
    'DictionaryFetcher',
    'ImageSearchFetcher',
    'AudioFetcher',
]
