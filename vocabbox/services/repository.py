"""
Repository Pattern - Abstract data access layer for the learning list.

Enables switching between CSV and SQLite backends without changing the store.
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

import pandas as pd

from ..config import Config
from ..utils.parsing import TextParser

logger = logging.getLogger(__name__)

# Column order of a learning-list row
WORD_COLUMNS: List[str] = [
    "UUID", "Word", "Phonetics", "PartOfSpeech", "Meaning", "Audio", "Image", "AddedAt",
]

SEARCH_COLUMNS: List[str] = ["Word", "Meaning"]


def _normalize_row(data: Dict[str, Any]) -> Dict[str, Any]:
    row = {}
    for column in WORD_COLUMNS:
        value = data.get(column)
        if value is None:
            value = ""
        row[column] = TextParser.normalize_unicode(value) if isinstance(value, str) else value
    return row


class BaseRepository(ABC):
    """
    Abstract base class for learning-list repositories.

    Rows are dicts keyed by WORD_COLUMNS; UUID identifies a row.
    """

    @abstractmethod
    def load(self) -> bool:
        """Open the backing file or database. Returns False when it had to start empty."""
        pass

    @abstractmethod
    def save(self) -> bool:
        """Flush pending rows. Returns False if they could not be written."""
        pass

    @abstractmethod
    def get_all(self) -> pd.DataFrame:
        """Get all entries as DataFrame, oldest first."""
        pass

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Optional[Dict[str, Any]]:
        """Get row by UUID."""
        pass

    @abstractmethod
    def add_row(self, data: Dict[str, Any]) -> int:
        """Append a learning-list row. Returns its position, or -1 if rejected."""
        pass

    @abstractmethod
    def delete_by_uuid(self, uuid: str) -> bool:
        """Delete the row with the given UUID."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of words in the list."""
        pass

    @abstractmethod
    def search(self, query: str) -> pd.DataFrame:
        """Search rows whose word or meaning contains query."""
        pass


class CSVRepository(BaseRepository):
    """
    Learning list kept in memory as a DataFrame and written to a
    pipe-separated, BOM-prefixed CSV that spreadsheet apps open directly.
    """

    def __init__(self, csv_path: Optional[str] = None):
        """
        Args:
            csv_path: List file, Config.WORDS_CSV_FILE by default
        """
        self.csv_path = Path(csv_path or Config.WORDS_CSV_FILE)
        self._df: Optional[pd.DataFrame] = None
        self._dirty: bool = False

    @property
    def is_dirty(self) -> bool:
        """True when rows were added or removed since the last load or save."""
        return self._dirty

    @staticmethod
    def _empty() -> pd.DataFrame:
        return pd.DataFrame(columns=WORD_COLUMNS)

    def load(self) -> bool:
        """Load the learning list from CSV file."""
        if not self.csv_path.exists():
            self._df = self._empty()
            return False

        try:
            df = pd.read_csv(
                self.csv_path,
                sep='|',
                encoding='utf-8-sig',
                dtype=str,
                keep_default_na=False,
            )
            df.columns = df.columns.str.strip()
            for column in WORD_COLUMNS:
                if column not in df.columns:
                    df[column] = ""
            self._df = df[WORD_COLUMNS]
            self._dirty = False
            return True

        except Exception as e:
            logger.error("Error loading CSV %s: %s", self.csv_path, e)
            self._df = self._empty()
            return False

    def save(self) -> bool:
        """Save the learning list to CSV file."""
        if self._df is None:
            return False

        try:
            self.csv_path.parent.mkdir(parents=True, exist_ok=True)
            self._df.to_csv(
                self.csv_path,
                sep='|',
                index=False,
                encoding='utf-8-sig',
            )
            self._dirty = False
            return True
        except Exception as e:
            logger.error("Error saving CSV %s: %s", self.csv_path, e)
            return False

    def get_all(self) -> pd.DataFrame:
        if self._df is None:
            self.load()
        return self._df.copy() if self._df is not None else self._empty()

    def get_by_uuid(self, uuid: str) -> Optional[Dict[str, Any]]:
        if self._df is None:
            return None

        matches = self._df[self._df['UUID'] == uuid]
        if matches.empty:
            return None
        return matches.iloc[0].to_dict()

    def add_row(self, data: Dict[str, Any]) -> int:
        if self._df is None:
            self.load()

        try:
            new_row = pd.DataFrame([_normalize_row(data)], columns=WORD_COLUMNS)
            if self._df.empty:
                self._df = new_row
            else:
                self._df = pd.concat([self._df, new_row], ignore_index=True)
            self._dirty = True
            return len(self._df) - 1
        except Exception as e:
            logger.error("Error adding row: %s", e)
            return -1

    def delete_by_uuid(self, uuid: str) -> bool:
        if self._df is None:
            return False

        mask = self._df['UUID'] == uuid
        if not mask.any():
            return False

        self._df = self._df[~mask].reset_index(drop=True)
        self._dirty = True
        return True

    def count(self) -> int:
        return len(self._df) if self._df is not None else 0

    def search(self, query: str) -> pd.DataFrame:
        if self._df is None or not query:
            return self._empty()

        query = query.lower()
        mask = pd.Series([False] * len(self._df), index=self._df.index)
        for col in SEARCH_COLUMNS:
            mask |= self._df[col].astype(str).str.lower().str.contains(query, na=False, regex=False)

        return self._df[mask].copy()


class SQLiteRepository(BaseRepository):
    """
    Learning list stored in a single SQLite table.

    Every write is its own transaction, so save() is a no-op.
    """

    SCHEMA_VERSION = 1

    # Row column -> table column
    COLUMN_MAP: Dict[str, str] = {
        "UUID": "uuid",
        "Word": "word",
        "Phonetics": "phonetics",
        "PartOfSpeech": "part_of_speech",
        "Meaning": "meaning",
        "Audio": "audio",
        "Image": "image",
        "AddedAt": "added_at",
    }

    def __init__(self, db_path: Optional[str] = None):
        """
        Args:
            db_path: Database file, Config.WORDS_DB_FILE by default
        """
        self.db_path = Path(db_path or Config.WORDS_DB_FILE)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Short-lived connection; rows come back as sqlite3.Row."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def _init_schema(self) -> None:
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY,
                    applied_at TEXT DEFAULT CURRENT_TIMESTAMP
                )
            """)
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS words_learning (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    uuid TEXT UNIQUE NOT NULL,
                    word TEXT NOT NULL,
                    phonetics TEXT,
                    part_of_speech TEXT,
                    meaning TEXT,
                    audio TEXT,
                    image TEXT,
                    added_at TEXT
                )
            """)
            cursor.execute("CREATE INDEX IF NOT EXISTS idx_words_word ON words_learning(word)")
            cursor.execute(
                "INSERT OR IGNORE INTO schema_version (version) VALUES (?)",
                (self.SCHEMA_VERSION,),
            )
            conn.commit()

    def _to_frame(self, rows: List[sqlite3.Row]) -> pd.DataFrame:
        reverse = {v: k for k, v in self.COLUMN_MAP.items()}
        records = [
            {reverse[key]: (row[key] or "") for key in row.keys() if key in reverse}
            for row in rows
        ]
        return pd.DataFrame(records, columns=WORD_COLUMNS)

    def load(self) -> bool:
        """Create the table on first use."""
        try:
            self._init_schema()
            return True
        except sqlite3.Error as e:
            logger.error("Error initializing SQLite %s: %s", self.db_path, e)
            return False

    def save(self) -> bool:
        return True

    def get_all(self) -> pd.DataFrame:
        try:
            with self._get_connection() as conn:
                rows = conn.execute("SELECT * FROM words_learning ORDER BY id").fetchall()
                return self._to_frame(rows)
        except sqlite3.Error as e:
            logger.error("Error reading learning list: %s", e)
            return pd.DataFrame(columns=WORD_COLUMNS)

    def get_by_uuid(self, uuid: str) -> Optional[Dict[str, Any]]:
        try:
            with self._get_connection() as conn:
                row = conn.execute(
                    "SELECT * FROM words_learning WHERE uuid = ?", (uuid,)
                ).fetchone()
                if row is None:
                    return None
                return self._to_frame([row]).iloc[0].to_dict()
        except sqlite3.Error:
            return None

    def add_row(self, data: Dict[str, Any]) -> int:
        row = _normalize_row(data)
        columns = {self.COLUMN_MAP[k]: v for k, v in row.items()}

        try:
            with self._get_connection() as conn:
                placeholders = ", ".join("?" for _ in columns)
                conn.execute(
                    f"INSERT INTO words_learning ({', '.join(columns)}) VALUES ({placeholders})",
                    list(columns.values()),
                )
                conn.commit()
                return conn.execute("SELECT COUNT(*) FROM words_learning").fetchone()[0] - 1
        except sqlite3.Error as e:
            logger.error("Error adding row: %s", e)
            return -1

    def delete_by_uuid(self, uuid: str) -> bool:
        try:
            with self._get_connection() as conn:
                cursor = conn.execute("DELETE FROM words_learning WHERE uuid = ?", (uuid,))
                conn.commit()
                return cursor.rowcount > 0
        except sqlite3.Error as e:
            logger.error("Error deleting %s: %s", uuid, e)
            return False

    def count(self) -> int:
        try:
            with self._get_connection() as conn:
                return conn.execute("SELECT COUNT(*) FROM words_learning").fetchone()[0]
        except sqlite3.Error:
            return 0

    def search(self, query: str) -> pd.DataFrame:
        if not query:
            return pd.DataFrame(columns=WORD_COLUMNS)

        # Literal substring match, like the CSV backend
        escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        try:
            with self._get_connection() as conn:
                rows = conn.execute(
                    "SELECT * FROM words_learning"
                    " WHERE word LIKE ? ESCAPE '\\' OR meaning LIKE ? ESCAPE '\\' ORDER BY id",
                    (pattern, pattern),
                ).fetchall()
                return self._to_frame(rows)
        except sqlite3.Error:
            return pd.DataFrame(columns=WORD_COLUMNS)

    def import_from_csv(self, csv_path: str) -> int:
        """
        Copy every row of a CSV learning list into this database.

        Rows whose UUID already exists are skipped.

        Returns:
            How many rows were inserted
        """
        csv_repo = CSVRepository(csv_path)
        if not csv_repo.load():
            return 0

        imported = 0
        for _, row in csv_repo.get_all().iterrows():
            if self.add_row(row.to_dict()) >= 0:
                imported += 1
        return imported
