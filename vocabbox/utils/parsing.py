"""Text parsing utilities shared by fetchers and storage."""

import html
import re
import unicodedata


class TextParser:
    """
    Centralized text parsing utilities.

    Dictionary payloads, search input and stored rows all pass through here
    so comparisons and file names stay consistent.
    """

    HTML_TAG_PATTERN = re.compile(r'<[^>]+>')
    WHITESPACE_PATTERN = re.compile(r'\s+')

    @classmethod
    def normalize_unicode(cls, text: str) -> str:
        """
        Normalize text to NFC form for consistent Unicode handling.

        Prevents issues with characters like é being represented as
        either a single codepoint (NFC) or base + combining accent (NFD).
        """
        if not text:
            return ""
        return unicodedata.normalize('NFC', str(text))

    @classmethod
    def normalize_query(cls, text: str) -> str:
        """
        Normalize user input into a lookup query.

        Strips surrounding whitespace, collapses inner whitespace and
        lower-cases the result.

        Args:
            text: Raw text typed by the user

        Returns:
            Query string, empty if nothing usable was typed
        """
        if not text:
            return ""
        text = cls.normalize_unicode(text)
        return cls.WHITESPACE_PATTERN.sub(' ', text).strip().lower()

    @classmethod
    def clean_definition(cls, text: str) -> str:
        """Remove HTML and entities from a definition."""
        if not text:
            return ""
        text = html.unescape(str(text))
        text = cls.HTML_TAG_PATTERN.sub('', text)
        text = cls.WHITESPACE_PATTERN.sub(' ', text).strip()
        return cls.normalize_unicode(text)

    @classmethod
    def clean_for_tts(cls, text: str) -> str:
        """Clean text for TTS processing."""
        return cls.clean_definition(text)
