"""Pytest fixtures for wordbank tests."""

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, Self

import pytest

from wordbank.models import VocabularyRecord
from wordbank.store import InMemoryVocabularyStore

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def _mw_entry(
    headword: str,
    definition: str | None = "a definition",
    *,
    mw: str | None = None,
    audio: str | None = None,
) -> dict[str, Any]:
    pronunciation: dict[str, Any] = {}
    if mw is not None:
        pronunciation["mw"] = mw
    if audio is not None:
        pronunciation["sound"] = {"audio": audio, "ref": "c", "stat": "1"}

    entry: dict[str, Any] = {
        "meta": {"id": headword, "stems": [headword]},
        "hwi": {"hw": headword, "prs": [pronunciation] if pronunciation else []},
        "fl": "noun",
    }
    if definition is not None:
        entry["shortdef"] = [definition]
    return entry


class StubLookup:
    """Dictionary lookup stub that records calls.

    Words in `responses` return the stored value (or raise it if it is an
    exception). Any other word gets a generic entry unless `default` is False,
    in which case it gets an empty response.
    """

    def __init__(
        self,
        responses: dict[str, Any] | None = None,
        *,
        default: bool = True,
    ) -> None:
        self.responses = responses or {}
        self.default = default
        self.calls: list[str] = []
        self.closed = False

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.closed = True

    def lookup(self, word: str) -> Any:
        self.calls.append(word)
        if word in self.responses:
            response = self.responses[word]
            if isinstance(response, Exception):
                raise response
            return response
        if self.default:
            return [_mw_entry(word, f"definition of {word}")]
        return []


class RecordingStore(InMemoryVocabularyStore):
    """In-memory store that records get() and insert() calls."""

    def __init__(self) -> None:
        super().__init__()
        self.gets: list[str] = []
        self.inserts: list[str] = []

    def get(self, word: str) -> VocabularyRecord | None:
        self.gets.append(word)
        return super().get(word)

    def insert(self, record: VocabularyRecord) -> None:
        self.inserts.append(record.word)
        super().insert(record)


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed, timezone-aware timestamp for records."""
    return FIXED_NOW


@pytest.fixture
def make_entry() -> Callable[..., dict[str, Any]]:
    """Factory for raw Merriam-Webster Collegiate entries.

    Call it as make_entry(headword, definition, mw=..., audio=...).
    """
    return _mw_entry


@pytest.fixture
def make_lookup() -> Callable[..., StubLookup]:
    """Factory for lookup stubs: make_lookup(responses, default=True)."""
    return StubLookup


@pytest.fixture
def recording_store() -> RecordingStore:
    """An empty in-memory store that records calls."""
    return RecordingStore()
