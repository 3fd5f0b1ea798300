"""Data models for VocabBox."""

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class WordDraft:
    """A word record being composed on the Add Word screen."""

    search_text: str = ""
    word: str = ""
    phonetics: str = ""
    part_of_speech: str = ""
    meaning: str = ""

    # Remote URL or local file path
    audio: Optional[str] = None
    image: Optional[str] = None

    @property
    def is_submittable(self) -> bool:
        """A draft can be added to the learning list only once it has a word."""
        return bool(self.word and self.word.strip())

    def with_image(self, image: Optional[str]) -> "WordDraft":
        """Return a copy with only the image replaced."""
        return replace(self, image=image)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WordDraft":
        """Build a draft from a dict, ignoring unknown keys and blank media."""
        known = {k: data[k] for k in cls.__dataclass_fields__ if k in data}
        for key in ("audio", "image"):
            if not known.get(key):
                known[key] = None
        return cls(**known)
