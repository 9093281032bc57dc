"""Pipeline that turns raw text into newly stored vocabulary records."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from wordbank.artifacts import ArtifactWriter, NullArtifactWriter
from wordbank.dictionary import DictionaryGateway
from wordbank.models import NotFound, ProcessResult, ReconcileResult, VocabularyRecord
from wordbank.store import DuplicateKeyError, VocabularyStore
from wordbank.vocabulary import extract_vocabulary

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Base class for errors that abort a pipeline run."""


class InputError(ProcessingError):
    """Raised when a run is started without any text."""


def _utcnow() -> datetime:
    return datetime.now(UTC)


def reconcile(
    entries: dict[str, str],
    store: VocabularyStore,
    gateway: DictionaryGateway,
    *,
    clock: Callable[[], datetime] = _utcnow,
    artifacts: ArtifactWriter | NullArtifactWriter | None = None,
) -> ReconcileResult:
    """Store the extracted words that are new and have a definition.

    Words are handled one at a time, in the mapping's order. Words already
    stored are left untouched. A word whose lookup fails, or whose
    processing raises, is skipped without affecting the others.

    Args:
        entries: Mapping of base form to example sentence.
        store: Store to check and insert into.
        gateway: Dictionary gateway for definitions.
        clock: Returns the timestamp for new records.
        artifacts: Optional writer for per-word outcomes.

    Returns:
        ReconcileResult with the inserted words in order.
    """
    artifacts = artifacts or NullArtifactWriter()
    result = ReconcileResult()

    for word, sentence in entries.items():
        try:
            if store.get(word) is not None:
                logger.debug("Skipping known word %s", word)
                artifacts.write_skipped(word, "known")
                continue

            outcome = gateway.define(word)
            if isinstance(outcome, NotFound):
                logger.debug("No definition for %s (%s)", word, outcome.reason)
                artifacts.write_skipped(word, "not_found")
                continue

            record = VocabularyRecord(
                word=word,
                definition=outcome.definition,
                pronunciation=outcome.pronunciation,
                example_sentence=sentence,
                audio_url=outcome.audio_url,
                date_added=clock(),
            )
            store.insert(record)
        except DuplicateKeyError:
            logger.info("Word %s was stored concurrently, skipping", word)
            artifacts.write_skipped(word, "duplicate")
            continue
        except Exception:
            logger.warning("Failed to process %s", word, exc_info=True)
            artifacts.write_skipped(word, "failed")
            continue

        result.inserted_words.append(word)
        artifacts.write_inserted(record)

    return result


class VocabularyPipeline:
    """Extracts vocabulary from text and stores the words that are new.

    Usage:
        pipeline = VocabularyPipeline(store, DictionaryGateway(client))
        result = pipeline.run(text)
    """

    def __init__(
        self,
        store: VocabularyStore,
        gateway: DictionaryGateway,
        *,
        clock: Callable[[], datetime] = _utcnow,
        artifacts: ArtifactWriter | NullArtifactWriter | None = None,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._clock = clock
        self._artifacts = artifacts or NullArtifactWriter()

    def run(self, text: str | None) -> ProcessResult:
        """Run extraction and reconciliation over one text.

        Args:
            text: Raw text. An empty string is valid and adds nothing.

        Returns:
            ProcessResult with the newly added words in document order.

        Raises:
            InputError: If text is None. Nothing is stored in that case.
        """
        if text is None:
            raise InputError("No text provided")

        entries = extract_vocabulary(text)
        self._artifacts.write_entries(entries)
        logger.info("Extracted %d candidate words", len(entries))

        result = reconcile(
            entries,
            self._store,
            self._gateway,
            clock=self._clock,
            artifacts=self._artifacts,
        )
        logger.info("Added %d new words", result.inserted_count)

        return ProcessResult(
            new_words_count=result.inserted_count,
            new_words=list(result.inserted_words),
        )
