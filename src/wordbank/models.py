"""Data models for vocabulary extraction and enrichment."""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class Sentence:
    """A sentence segmented from raw text.

    Attributes:
        text: The sentence text, untrimmed, terminator included.
        index: Zero-based index of the sentence within the source text.
    """

    text: str
    index: int


@dataclass(frozen=True)
class DefinitionResult:
    """Dictionary data for a single word.

    Attributes:
        definition: First short definition, or a fallback literal.
        pronunciation: Phonetic respelling, headword, or empty string.
        audio_url: URL of the pronunciation recording, if any.
    """

    definition: str
    pronunciation: str
    audio_url: str | None


@dataclass(frozen=True)
class NotFound:
    """A lookup that produced no usable dictionary entry.

    Attributes:
        word: The word that was looked up.
        reason: Short description of why the lookup was discarded.
    """

    word: str
    reason: str


LookupOutcome = DefinitionResult | NotFound


@dataclass
class VocabularyRecord:
    """A persisted vocabulary word.

    Attributes:
        word: The base form, unique key in the store.
        definition: Definition text.
        pronunciation: Pronunciation string.
        example_sentence: First sentence the word was seen in (trimmed).
        audio_url: Dictionary pronunciation audio URL, if any.
        date_added: When the record was created.
        user_image_url: Image attached by the user later on.
        user_audio_url: Audio attached by the user later on.
    """

    word: str
    definition: str
    pronunciation: str
    example_sentence: str
    audio_url: str | None
    date_added: datetime
    user_image_url: str | None = None
    user_audio_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Export the record as a JSON-serializable dictionary."""
        data = asdict(self)
        data["date_added"] = self.date_added.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VocabularyRecord":
        """Load a record from a dictionary as produced by to_dict()."""
        return cls(
            word=data["word"],
            definition=data["definition"],
            pronunciation=data["pronunciation"],
            example_sentence=data["example_sentence"],
            audio_url=data.get("audio_url"),
            date_added=datetime.fromisoformat(data["date_added"]),
            user_image_url=data.get("user_image_url"),
            user_audio_url=data.get("user_audio_url"),
        )


@dataclass
class ReconcileResult:
    """Outcome of one reconciliation pass.

    Attributes:
        inserted_words: Base forms inserted into the store, in first-sighting order.
    """

    inserted_words: list[str] = field(default_factory=list)

    @property
    def inserted_count(self) -> int:
        """Number of words inserted."""
        return len(self.inserted_words)


@dataclass
class ProcessResult:
    """Summary returned by a pipeline run.

    Attributes:
        new_words_count: Number of words newly added to the store.
        new_words: The added base forms, in document order of first sighting.
    """

    new_words_count: int
    new_words: list[str]

    def to_dict(self) -> dict[str, Any]:
        """Export the result as a JSON-serializable dictionary."""
        return asdict(self)
