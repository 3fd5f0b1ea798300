"""
Learning List Store - the list of words the user is learning.

Plays the role of the application-wide store: screens dispatch add/remove
actions and subscribe to changes; rows are persisted through a repository
(CSV or SQLite).
"""

import asyncio
import hashlib
import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import pandas as pd

from ..models import WordDraft
from .repository import WORD_COLUMNS, BaseRepository, CSVRepository, SQLiteRepository

logger = logging.getLogger(__name__)


class StorageBackend(Enum):
    """Available storage backends."""
    CSV = "csv"
    SQLITE = "sqlite"

    @classmethod
    def parse(cls, value: Any) -> "StorageBackend":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            logger.warning("Unknown storage backend %r, using CSV", value)
            return cls.CSV


class LearningListStore:
    """
    Store for the learning list.

    Usage:
        store = LearningListStore()
        store.load()
        store.on_change(refresh_view)
        store.add_word(draft)
    """

    # Thread pool for blocking I/O operations
    _executor = ThreadPoolExecutor(max_workers=2)

    def __init__(
        self,
        csv_path: Optional[str] = None,
        backend: StorageBackend = StorageBackend.CSV,
        db_path: Optional[str] = None,
        autosave: bool = True,
        repository: Optional[BaseRepository] = None,
    ):
        """
        Initialize the store.

        Args:
            csv_path: Path to CSV file (for CSV backend)
            backend: Storage backend to use
            db_path: Path to SQLite database (for SQLite backend)
            autosave: Persist after every add/remove
            repository: Pre-built repository, overrides backend selection
        """
        self.backend = StorageBackend.parse(backend)
        self.csv_path = csv_path
        self.db_path = db_path
        self.autosave = autosave

        self._repository: Optional[BaseRepository] = repository
        self._loaded: bool = False
        self._save_lock = asyncio.Lock()
        self._change_callbacks: List[Callable[[], None]] = []

    def _get_repository(self) -> BaseRepository:
        """Get or create the appropriate repository."""
        if self._repository is None:
            if self.backend == StorageBackend.SQLITE:
                self._repository = SQLiteRepository(self.db_path)
            else:
                self._repository = CSVRepository(self.csv_path)
        return self._repository

    @property
    def count(self) -> int:
        """Get total word count."""
        return self._get_repository().count()

    def on_change(self, callback: Callable[[], None]) -> None:
        """
        Register a callback for data changes.

        Args:
            callback: Function to call when the list changes
        """
        self._change_callbacks.append(callback)

    def remove_listener(self, callback: Callable[[], None]) -> None:
        if callback in self._change_callbacks:
            self._change_callbacks.remove(callback)

    def _notify_change(self) -> None:
        """Notify all registered callbacks of data change."""
        for callback in list(self._change_callbacks):
            try:
                callback()
            except Exception:
                logger.exception("Learning list listener failed")

    def load(self) -> bool:
        """
        Load the learning list from storage.

        A missing CSV file is not an error: the list starts empty.

        Returns:
            True if existing data was loaded
        """
        success = self._get_repository().load()
        self._loaded = True
        logger.info("Learning list loaded (%s, %d words)", self.backend.value, self.count)
        return success

    async def load_async(self) -> bool:
        """load() on the worker pool, keeping file or database I/O off the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self.load)

    def save(self) -> bool:
        """
        Save the learning list.

        Returns:
            True if saved successfully
        """
        return self._get_repository().save()

    async def save_async(self) -> bool:
        """save() on the worker pool. Overlapping calls run one at a time."""
        async with self._save_lock:
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(self._executor, self.save)

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    @staticmethod
    def generate_uuid(draft: WordDraft, added_at: str) -> str:
        """Id from the word's content, the time it was added and a random nonce."""
        unique_string = f"{draft.word}|{draft.part_of_speech}|{draft.meaning}|{added_at}|{uuid.uuid4().hex}"
        return hashlib.sha256(unique_string.encode()).hexdigest()[:32]

    @classmethod
    def to_record(cls, draft: WordDraft, added_at: Optional[str] = None) -> Dict[str, Any]:
        """Convert a draft into a learning-list row."""
        added_at = added_at or datetime.now().isoformat(timespec="seconds")
        return {
            "UUID": cls.generate_uuid(draft, added_at),
            "Word": draft.word.strip(),
            "Phonetics": draft.phonetics,
            "PartOfSpeech": draft.part_of_speech,
            "Meaning": draft.meaning,
            "Audio": draft.audio or "",
            "Image": draft.image or "",
            "AddedAt": added_at,
        }

    @staticmethod
    def to_draft(record: Dict[str, Any]) -> WordDraft:
        """Convert a learning-list row back into a draft."""
        return WordDraft.from_dict({
            "search_text": record.get("Word", ""),
            "word": record.get("Word", ""),
            "phonetics": record.get("Phonetics", ""),
            "part_of_speech": record.get("PartOfSpeech", ""),
            "meaning": record.get("Meaning", ""),
            "audio": record.get("Audio"),
            "image": record.get("Image"),
        })

    def add_word(self, draft: WordDraft) -> Optional[str]:
        """
        Append a word to the learning list.

        Args:
            draft: Draft to add; must have a word

        Returns:
            UUID of the new entry, or None if nothing was added
        """
        if draft is None or not draft.is_submittable:
            logger.warning("Refusing to add a draft without a word")
            return None

        self._ensure_loaded()
        record = self.to_record(draft)
        repo = self._get_repository()

        if repo.add_row(record) < 0:
            return None
        if self.autosave and not repo.save():
            logger.error("Added %r but could not persist the learning list", draft.word)

        logger.info("Added %r to the learning list", draft.word)
        self._notify_change()
        return record["UUID"]

    def remove_word(self, uuid: str) -> bool:
        """
        Remove a word by UUID.

        Returns:
            True if a word was removed
        """
        self._ensure_loaded()
        repo = self._get_repository()

        if not repo.delete_by_uuid(uuid):
            return False
        if self.autosave:
            repo.save()

        self._notify_change()
        return True

    def get_all(self) -> pd.DataFrame:
        """Get all words, oldest first."""
        self._ensure_loaded()
        return self._get_repository().get_all()

    def get_by_uuid(self, uuid: str) -> Optional[Dict[str, Any]]:
        self._ensure_loaded()
        return self._get_repository().get_by_uuid(uuid)

    def entries(self, query: str = "") -> List[Dict[str, Any]]:
        """
        Get words as row dicts, newest first.

        Args:
            query: Optional filter on word and meaning

        Returns:
            List of rows keyed by WORD_COLUMNS
        """
        self._ensure_loaded()
        repo = self._get_repository()
        df = repo.search(query.strip()) if query and query.strip() else repo.get_all()
        if df.empty:
            return []
        return [
            {column: row.get(column, "") for column in WORD_COLUMNS}
            for row in reversed(df.to_dict(orient="records"))
        ]

    def contains_word(self, word: str) -> bool:
        """Case-insensitive check for an existing entry."""
        if not word:
            return False
        df = self.get_all()
        if df.empty:
            return False
        return bool((df["Word"].astype(str).str.lower() == word.strip().lower()).any())
