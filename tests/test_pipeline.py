"""Tests for the pipeline module."""

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from wordbank.artifacts import ArtifactWriter
from wordbank.dictionary import DictionaryGateway
from wordbank.models import DefinitionResult, VocabularyRecord
from wordbank.pipeline import InputError, ProcessingError, VocabularyPipeline, reconcile
from wordbank.store import DuplicateKeyError, InMemoryVocabularyStore

SCENARIO_TEXT = "The serendipitous discovery led to a paradigm shift."
STORED_AT = datetime(2024, 1, 15, 9, 30, tzinfo=UTC)

EntryFactory = Callable[..., dict[str, Any]]
LookupFactory = Callable[..., Any]
PipelineFactory = Callable[..., VocabularyPipeline]


@pytest.fixture
def make_pipeline(fixed_now: datetime) -> PipelineFactory:
    """Factory for pipelines with a fixed clock: make_pipeline(store, lookup, **kwargs)."""

    def _make(store: InMemoryVocabularyStore, lookup: Any, **kwargs: Any) -> VocabularyPipeline:
        return VocabularyPipeline(
            store,
            DictionaryGateway(lookup),
            clock=lambda: fixed_now,
            **kwargs,
        )

    return _make


def make_record(word: str) -> VocabularyRecord:
    """Create a stored VocabularyRecord for testing."""
    return VocabularyRecord(
        word=word,
        definition="already known",
        pronunciation="",
        example_sentence="Old sentence.",
        audio_url=None,
        date_added=STORED_AT,
    )


class TestReconcile:
    """Tests for reconcile function."""

    def test_inserts_new_words_in_order(
        self, recording_store: Any, make_lookup: LookupFactory, fixed_now: datetime
    ) -> None:
        """Should insert every new word in mapping order."""
        entries = {"zebra": "Zebras graze.", "apple": "Apples fall."}
        gateway = DictionaryGateway(make_lookup())

        result = reconcile(entries, recording_store, gateway, clock=lambda: fixed_now)

        assert result.inserted_words == ["zebra", "apple"]
        assert result.inserted_count == 2
        assert recording_store.inserts == ["zebra", "apple"]

    def test_builds_record_from_definition(
        self, make_lookup: LookupFactory, make_entry: EntryFactory, fixed_now: datetime
    ) -> None:
        """Should combine the definition and the sentence into the record."""
        store = InMemoryVocabularyStore()
        lookup = make_lookup(
            {"shift": [make_entry("shift", "to move", mw="ˈshift", audio="shift001")]}
        )

        reconcile(
            {"shift": "A paradigm shift."},
            store,
            DictionaryGateway(lookup),
            clock=lambda: fixed_now,
        )

        record = store.get("shift")
        assert record == VocabularyRecord(
            word="shift",
            definition="to move",
            pronunciation="ˈshift",
            example_sentence="A paradigm shift.",
            audio_url="https://media.merriam-webster.com/audio/prons/en/us/mp3/s/shift001.mp3",
            date_added=fixed_now,
            user_image_url=None,
            user_audio_url=None,
        )

    def test_known_word_not_looked_up(self, make_lookup: LookupFactory) -> None:
        """Should skip words already in the store without calling the dictionary."""
        store = InMemoryVocabularyStore([make_record("shift")])
        lookup = make_lookup()

        result = reconcile({"shift": "New sentence."}, store, DictionaryGateway(lookup))

        assert result.inserted_words == []
        assert lookup.calls == []
        record = store.get("shift")
        assert record is not None
        assert record.example_sentence == "Old sentence."

    def test_not_found_skipped(self, recording_store: Any, make_lookup: LookupFactory) -> None:
        """Should skip words the dictionary doesn't know."""
        lookup = make_lookup({"zzyzx": []})

        result = reconcile(
            {"zzyzx": "Zzyzx road.", "road": "Zzyzx road."},
            recording_store,
            DictionaryGateway(lookup),
        )

        assert result.inserted_words == ["road"]
        assert recording_store.get("zzyzx") is None

    def test_duplicate_key_treated_as_known(self, make_lookup: LookupFactory) -> None:
        """Should treat a concurrent insert as an already-known word."""
        store = MagicMock()
        store.get.return_value = None
        store.insert.side_effect = [DuplicateKeyError("zebra"), None]

        result = reconcile(
            {"zebra": "Zebras graze.", "apple": "Apples fall."},
            store,
            DictionaryGateway(make_lookup()),
        )

        assert result.inserted_words == ["apple"]
        assert store.insert.call_count == 2

    def test_unexpected_error_does_not_stop_run(self) -> None:
        """Should skip a word whose processing fails and continue."""
        store = InMemoryVocabularyStore()
        gateway = MagicMock()
        gateway.define.side_effect = [
            KeyError("boom"),
            DefinitionResult(definition="fruit", pronunciation="", audio_url=None),
        ]

        result = reconcile({"zebra": "Zebras.", "apple": "Apples."}, store, gateway)

        assert result.inserted_words == ["apple"]
        assert store.get("zebra") is None

    def test_store_error_does_not_stop_run(self, make_lookup: LookupFactory) -> None:
        """Should skip a word whose store lookup fails and continue."""
        store = MagicMock()
        store.get.side_effect = [OSError("disk"), None]

        result = reconcile(
            {"zebra": "Zebras.", "apple": "Apples."},
            store,
            DictionaryGateway(make_lookup()),
        )

        assert result.inserted_words == ["apple"]

    def test_empty_entries(self, recording_store: Any, make_lookup: LookupFactory) -> None:
        """Should do nothing for an empty mapping."""
        lookup = make_lookup()

        result = reconcile({}, recording_store, DictionaryGateway(lookup))

        assert result.inserted_count == 0
        assert lookup.calls == []
        assert recording_store.gets == []


class TestVocabularyPipeline:
    """Tests for VocabularyPipeline class."""

    def test_scenario_all_defined(
        self,
        recording_store: Any,
        make_pipeline: PipelineFactory,
        make_lookup: LookupFactory,
        fixed_now: datetime,
    ) -> None:
        """Should add every distinct candidate with the full sentence."""
        result = make_pipeline(recording_store, make_lookup()).run(SCENARIO_TEXT)

        assert result.new_words == ["serendipitou", "discovery", "paradigm", "shift"]
        assert result.new_words_count == 4
        for word in result.new_words:
            record = recording_store.get(word)
            assert record is not None
            assert record.example_sentence == SCENARIO_TEXT
            assert record.date_added == fixed_now

    def test_scenario_one_not_found(
        self, recording_store: Any, make_pipeline: PipelineFactory, make_lookup: LookupFactory
    ) -> None:
        """Should leave out a word the dictionary doesn't know."""
        lookup = make_lookup({"paradigm": ["paradox", "paragon"]})

        result = make_pipeline(recording_store, lookup).run(SCENARIO_TEXT)

        assert "paradigm" in lookup.calls
        assert "paradigm" not in result.new_words
        assert result.new_words == ["serendipitou", "discovery", "shift"]

    def test_scenario_word_already_stored(
        self, recording_store: Any, make_pipeline: PipelineFactory, make_lookup: LookupFactory
    ) -> None:
        """Should not re-insert or report a stored word."""
        recording_store.insert(make_record("discovery"))
        lookup = make_lookup()

        result = make_pipeline(recording_store, lookup).run(SCENARIO_TEXT)

        assert "discovery" not in result.new_words
        assert "discovery" not in lookup.calls
        assert recording_store.inserts.count("discovery") == 1

    def test_scenario_lookup_transport_failure(
        self, recording_store: Any, make_pipeline: PipelineFactory, make_lookup: LookupFactory
    ) -> None:
        """Should skip a word whose lookup fails on the network."""
        lookup = make_lookup({"discovery": httpx.ConnectError("connection refused")})

        result = make_pipeline(recording_store, lookup).run(SCENARIO_TEXT)

        assert result.new_words == ["serendipitou", "paradigm", "shift"]

    def test_second_run_adds_nothing(
        self, recording_store: Any, make_pipeline: PipelineFactory, make_lookup: LookupFactory
    ) -> None:
        """Should be idempotent against the same store."""
        pipeline = make_pipeline(recording_store, make_lookup())

        first = pipeline.run(SCENARIO_TEXT)
        second = pipeline.run(SCENARIO_TEXT)

        assert first.new_words_count == 4
        assert second.new_words_count == 0
        assert second.new_words == []

    def test_order_follows_first_sighting(
        self, make_pipeline: PipelineFactory, make_lookup: LookupFactory
    ) -> None:
        """Should report new words in document order of first occurrence."""
        text = "Zebras graze. Apples grow. Zebras nibble apples."
        result = make_pipeline(InMemoryVocabularyStore(), make_lookup()).run(text)

        assert result.new_words == ["zebra", "graze", "apple", "grow", "nibble"]

    def test_no_duplicates(
        self, make_pipeline: PipelineFactory, make_lookup: LookupFactory
    ) -> None:
        """Should never report the same base form twice."""
        text = "Cats chase cats. Cats sleep! Jumped, jumps, jumping?"
        result = make_pipeline(InMemoryVocabularyStore(), make_lookup()).run(text)

        assert len(result.new_words) == len(set(result.new_words))
        assert result.new_words == ["cat", "chase", "sleep", "jump"]

    def test_empty_text(
        self, recording_store: Any, make_pipeline: PipelineFactory, make_lookup: LookupFactory
    ) -> None:
        """Should succeed with nothing added and no collaborator calls."""
        lookup = make_lookup()

        result = make_pipeline(recording_store, lookup).run("")

        assert result.to_dict() == {"new_words_count": 0, "new_words": []}
        assert lookup.calls == []
        assert recording_store.gets == []
        assert recording_store.inserts == []

    def test_none_text_raises(
        self, recording_store: Any, make_pipeline: PipelineFactory, make_lookup: LookupFactory
    ) -> None:
        """Should raise InputError before touching the store."""
        lookup = make_lookup()

        with pytest.raises(InputError):
            make_pipeline(recording_store, lookup).run(None)

        assert issubclass(InputError, ProcessingError)
        assert lookup.calls == []
        assert recording_store.gets == []

    def test_writes_artifacts(
        self, tmp_path: Path, make_pipeline: PipelineFactory, make_lookup: LookupFactory
    ) -> None:
        """Should record extracted entries and per-word outcomes."""
        store = InMemoryVocabularyStore([make_record("discovery")])
        lookup = make_lookup({"paradigm": []})

        with ArtifactWriter(tmp_path) as artifacts:
            make_pipeline(store, lookup, artifacts=artifacts).run(SCENARIO_TEXT)

        assert (tmp_path / "01-entries.json").exists()
        inserted = (tmp_path / "02-inserted.jsonl").read_text().strip().split("\n")
        skipped = (tmp_path / "02-skipped.jsonl").read_text().strip().split("\n")
        assert len(inserted) == 2
        assert '"reason": "known"' in skipped[0]
        assert '"reason": "not_found"' in skipped[1]
