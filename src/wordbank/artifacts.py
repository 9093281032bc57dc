"""Intermediate artifact writers for pipeline debugging."""

from __future__ import annotations

import json
from io import TextIOWrapper
from pathlib import Path
from types import TracebackType
from typing import Any, Self

from wordbank.models import VocabularyRecord


class ArtifactWriter:
    """Context manager that writes numbered JSONL/JSON pipeline artifacts.

    Files are named with numeric prefixes to reflect the pipeline stage order.

    Usage:
        with ArtifactWriter(Path("artifacts/")) as artifacts:
            artifacts.write_entries(entries)
            ...
    """

    def __init__(self, directory: Path) -> None:
        """Initialize the artifact writer.

        Args:
            directory: Directory to write artifacts to. Created if it doesn't exist.
        """
        self._directory = directory
        self._handles: dict[str, TextIOWrapper] = {}

    def __enter__(self) -> Self:
        """Enter context: create directory."""
        self._directory.mkdir(parents=True, exist_ok=True)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context: close all open file handles."""
        for handle in self._handles.values():
            handle.close()
        self._handles.clear()

    def _get_handle(self, filename: str) -> TextIOWrapper:
        """Get or open a file handle for the given filename."""
        if filename not in self._handles:
            path = self._directory / filename
            self._handles[filename] = open(path, "w", encoding="utf-8")  # noqa: SIM115
        return self._handles[filename]

    def _write_jsonl(self, filename: str, data: dict[str, Any]) -> None:
        """Write a single JSON line to the named file."""
        handle = self._get_handle(filename)
        handle.write(json.dumps(data, ensure_ascii=False) + "\n")

    def write_entries(self, entries: dict[str, str]) -> None:
        """Write the extracted base forms and their sentences to 01-entries.json."""
        handle = self._get_handle("01-entries.json")
        json.dump(entries, handle, ensure_ascii=False, indent=2)

    def write_inserted(self, record: VocabularyRecord) -> None:
        """Write an inserted record to 02-inserted.jsonl."""
        self._write_jsonl("02-inserted.jsonl", record.to_dict())

    def write_skipped(self, word: str, reason: str) -> None:
        """Write a skipped word to 02-skipped.jsonl."""
        self._write_jsonl("02-skipped.jsonl", {"word": word, "reason": reason})


class NullArtifactWriter:
    """No-op artifact writer (null object pattern).

    Drop-in replacement for ArtifactWriter that writes nothing.
    Used when --artifacts is not provided.
    """

    def __enter__(self) -> Self:
        """Enter context (no-op)."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context (no-op)."""

    def write_entries(self, entries: dict[str, str]) -> None:
        """No-op."""

    def write_inserted(self, record: VocabularyRecord) -> None:
        """No-op."""

    def write_skipped(self, word: str, reason: str) -> None:
        """No-op."""
