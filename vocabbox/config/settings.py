"""Global settings and configuration."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load from project root
_env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(_env_path)


def _env_bool(key: str, default: bool) -> bool:
    value = os.environ.get(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


@dataclass
class Config:
    """Application-wide configuration."""

    # Dictionary lookup (Free Dictionary API)
    DICTIONARY_API_URL: str = os.environ.get(
        "DICTIONARY_API_URL", "https://api.dictionaryapi.dev/api/v2/entries/en"
    )

    # Pixabay image search, optional. Without a key lookups carry no image.
    # NEVER hardcode secret keys in source code!
    PIXABAY_API_KEY: str = os.environ.get("PIXABAY_API_KEY", "")
    PIXABAY_API_URL: str = "https://pixabay.com/api/"

    # Pronunciation fallback via Edge TTS when the dictionary has no audio
    TTS_FALLBACK: bool = _env_bool("TTS_FALLBACK", False)
    VOICE: str = "en-GB-SoniaNeural"

    # Add Word screen
    LOOKUP_DEBOUNCE_MS: int = 1000

    # Async settings
    RETRIES: int = 3
    TIMEOUT: int = 15

    # BASE_DIR is the project root (parent of vocabbox/)
    BASE_DIR: Path = Path(__file__).parent.parent.parent.resolve()

    MEDIA_DIR: str = str(BASE_DIR / "media")
    WORDS_CSV_FILE: str = str(BASE_DIR / "data" / "words_learning.csv")
    WORDS_DB_FILE: str = str(BASE_DIR / "data" / "words_learning.db")
    SETTINGS_FILE: str = str(BASE_DIR / "settings.json")
