"""Vocabulary record persistence."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from types import TracebackType
from typing import Protocol, Self

from wordbank.models import VocabularyRecord

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".local" / "share" / "wordbank" / "words.db"

_COLUMNS = (
    "word, definition, pronunciation, example_sentence, mw_audio_url, "
    "date_added, user_image_url, user_audio_url"
)


class DuplicateKeyError(Exception):
    """Raised when inserting a word that is already stored."""

    def __init__(self, word: str) -> None:
        self.word = word
        super().__init__(f"Word '{word}' is already stored")


class VocabularyStore(Protocol):
    """Storage keyed by base form. Implementations enforce key uniqueness."""

    def get(self, word: str) -> VocabularyRecord | None: ...

    def insert(self, record: VocabularyRecord) -> None: ...


class InMemoryVocabularyStore:
    """Dict-backed store. Nothing survives the process."""

    def __init__(self, records: list[VocabularyRecord] | None = None) -> None:
        self._records: dict[str, VocabularyRecord] = {}
        for record in records or []:
            self.insert(record)

    def get(self, word: str) -> VocabularyRecord | None:
        return self._records.get(word)

    def insert(self, record: VocabularyRecord) -> None:
        if record.word in self._records:
            raise DuplicateKeyError(record.word)
        self._records[record.word] = record

    def list_words(self) -> list[VocabularyRecord]:
        return [self._records[word] for word in sorted(self._records)]

    def delete(self, word: str) -> bool:
        return self._records.pop(word, None) is not None


class DryRunVocabularyStore:
    """Reads through to another store but keeps inserts in memory.

    Usage:
        with SqliteVocabularyStore(path, read_only=True) as stored:
            store = DryRunVocabularyStore(stored)
    """

    def __init__(self, backing: VocabularyStore) -> None:
        self._backing = backing
        self._pending = InMemoryVocabularyStore()

    def get(self, word: str) -> VocabularyRecord | None:
        return self._pending.get(word) or self._backing.get(word)

    def insert(self, record: VocabularyRecord) -> None:
        if self._backing.get(record.word) is not None:
            raise DuplicateKeyError(record.word)
        self._pending.insert(record)


class SqliteVocabularyStore:
    """SQLite-backed store.

    Usage:
        with SqliteVocabularyStore(Path("words.db")) as store:
            store.get("serendipitous")
    """

    def __init__(self, path: Path, *, read_only: bool = False) -> None:
        """Initialize the store.

        Args:
            path: Database file. Parent directories are created on enter.
            read_only: Open an existing database without write access.
                The file must already exist.
        """
        self._path = path
        self._read_only = read_only
        self._connection: sqlite3.Connection | None = None

    def __enter__(self) -> Self:
        """Enter context: open the connection and create the schema."""
        if self._read_only:
            uri = f"{self._path.resolve().as_uri()}?mode=ro"
            self._connection = sqlite3.connect(uri, uri=True)
        else:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(self._path)
        self._connection.row_factory = sqlite3.Row
        if not self._read_only:
            self._ensure_schema()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context: close the connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    @property
    def _db(self) -> sqlite3.Connection:
        if self._connection is None:
            raise RuntimeError("Store is not open; use it as a context manager")
        return self._connection

    def _ensure_schema(self) -> None:
        self._db.execute(
            """
            CREATE TABLE IF NOT EXISTS words (
                word TEXT PRIMARY KEY,
                definition TEXT NOT NULL,
                pronunciation TEXT NOT NULL DEFAULT '',
                example_sentence TEXT NOT NULL DEFAULT '',
                mw_audio_url TEXT,
                date_added TEXT NOT NULL,
                user_image_url TEXT,
                user_audio_url TEXT
            );
            """
        )
        self._db.commit()

    @staticmethod
    def _to_record(row: sqlite3.Row) -> VocabularyRecord:
        return VocabularyRecord(
            word=row["word"],
            definition=row["definition"],
            pronunciation=row["pronunciation"],
            example_sentence=row["example_sentence"],
            audio_url=row["mw_audio_url"],
            date_added=datetime.fromisoformat(row["date_added"]),
            user_image_url=row["user_image_url"],
            user_audio_url=row["user_audio_url"],
        )

    def get(self, word: str) -> VocabularyRecord | None:
        """Return the record stored for a word, or None."""
        row = self._db.execute(
            f"SELECT {_COLUMNS} FROM words WHERE word = ?", (word,)
        ).fetchone()
        return self._to_record(row) if row else None

    def insert(self, record: VocabularyRecord) -> None:
        """Insert a new record and commit.

        Raises:
            DuplicateKeyError: If the word is already stored.
        """
        try:
            self._db.execute(
                f"INSERT INTO words ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    record.word,
                    record.definition,
                    record.pronunciation,
                    record.example_sentence,
                    record.audio_url,
                    record.date_added.isoformat(),
                    record.user_image_url,
                    record.user_audio_url,
                ),
            )
            self._db.commit()
        except sqlite3.IntegrityError as e:
            self._db.rollback()
            raise DuplicateKeyError(record.word) from e

    def list_words(self) -> list[VocabularyRecord]:
        """Return all records, alphabetically by word."""
        rows = self._db.execute(f"SELECT {_COLUMNS} FROM words ORDER BY word ASC").fetchall()
        return [self._to_record(row) for row in rows]

    def delete(self, word: str) -> bool:
        """Delete the record for a word.

        Attached user media is not touched.

        Returns:
            True if a record was deleted, False if the word wasn't stored.
        """
        cursor = self._db.execute("DELETE FROM words WHERE word = ?", (word,))
        self._db.commit()
        logger.debug("Deleted %d row(s) for %s", cursor.rowcount, word)
        return cursor.rowcount > 0
