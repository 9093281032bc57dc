"""CLI for wordbank — collect vocabulary from text."""

from __future__ import annotations

import json
import logging
import os
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from wordbank.artifacts import ArtifactWriter, NullArtifactWriter
from wordbank.dictionary import DictionaryGateway, MerriamWebsterClient
from wordbank.models import NotFound, VocabularyRecord
from wordbank.pipeline import VocabularyPipeline
from wordbank.store import (
    DEFAULT_DB_PATH,
    DryRunVocabularyStore,
    InMemoryVocabularyStore,
    SqliteVocabularyStore,
    VocabularyStore,
)

app = typer.Typer(
    name="wordbank",
    no_args_is_help=True,
)

DbOption = Annotated[
    Path | None,
    typer.Option("--db", help="SQLite database file. Defaults to $WORDBANK_DB."),
]


@app.callback()
def _callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging."),
    ] = False,
) -> None:
    """Collect vocabulary words with definitions from text."""
    load_dotenv()
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


def _resolve_db_path(db: Path | None) -> Path:
    """Resolve the database path from the option, the environment, or the default."""
    if db:
        return db
    env_path = os.environ.get("WORDBANK_DB")
    return Path(env_path) if env_path else DEFAULT_DB_PATH


def _make_client() -> MerriamWebsterClient:
    """Build a dictionary client from MW_DICTIONARY_KEY."""
    api_key = os.environ.get("MW_DICTIONARY_KEY")
    if not api_key:
        typer.echo("Error: MW_DICTIONARY_KEY not set. Set it in .env or environment.", err=True)
        raise typer.Exit(1)
    return MerriamWebsterClient(api_key)


def _open_store(stack: ExitStack, db: Path | None, dry_run: bool) -> VocabularyStore:
    """Open the store for a processing run.

    A dry run reads stored words from an existing database but never writes
    to it, and never creates the file.
    """
    path = _resolve_db_path(db)
    if not dry_run:
        return stack.enter_context(SqliteVocabularyStore(path))
    if not path.exists():
        return DryRunVocabularyStore(InMemoryVocabularyStore())
    return DryRunVocabularyStore(stack.enter_context(SqliteVocabularyStore(path, read_only=True)))


def _read_text(file: Path | None) -> str:
    if file is None:
        return sys.stdin.read()
    return file.read_text(encoding="utf-8")


def _echo_record(record: VocabularyRecord) -> None:
    typer.echo(f"{record.word} [{record.pronunciation}]")
    typer.echo(f"  {record.definition}")
    typer.echo(f"  Example: {record.example_sentence}")
    if record.audio_url:
        typer.echo(f"  Audio: {record.audio_url}")
    typer.echo(f"  Added: {record.date_added:%Y-%m-%d}")


@app.command()
def process(
    file: Annotated[
        Path | None,
        typer.Argument(
            help="Text file to read. Reads stdin if omitted.", exists=True, readable=True
        ),
    ] = None,
    db: DbOption = None,
    artifacts: Annotated[
        Path | None,
        typer.Option("--artifacts", help="Directory for intermediate pipeline artifacts."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Look words up but don't store them."),
    ] = False,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the result as JSON."),
    ] = False,
) -> None:
    """Extract vocabulary from text and store the new words."""
    client = _make_client()
    text = _read_text(file)

    artifact_writer = ArtifactWriter(artifacts) if artifacts else NullArtifactWriter()

    with ExitStack() as stack:
        stack.enter_context(client)
        stack.enter_context(artifact_writer)
        store = _open_store(stack, db, dry_run)
        pipeline = VocabularyPipeline(store, DictionaryGateway(client), artifacts=artifact_writer)
        result = pipeline.run(text)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False))
        return

    typer.echo(f"Added {result.new_words_count} new words.")
    for word in result.new_words:
        typer.echo(f"  {word}")


@app.command()
def define(
    word: Annotated[str, typer.Argument(help="Word to look up.")],
) -> None:
    """Look a word up in the dictionary without storing it."""
    with _make_client() as client:
        outcome = DictionaryGateway(client).define(word.lower())

    if isinstance(outcome, NotFound):
        typer.echo(f"Word not found: {word}", err=True)
        raise typer.Exit(1)

    typer.echo(f"{word} [{outcome.pronunciation}]")
    typer.echo(f"  {outcome.definition}")
    if outcome.audio_url:
        typer.echo(f"  Audio: {outcome.audio_url}")


@app.command()
def show(
    word: Annotated[str, typer.Argument(help="Stored word to show.")],
    db: DbOption = None,
) -> None:
    """Show a stored word."""
    with SqliteVocabularyStore(_resolve_db_path(db)) as store:
        record = store.get(word.lower())

    if record is None:
        typer.echo(f"Word not found: {word}", err=True)
        raise typer.Exit(1)
    _echo_record(record)


@app.command("list")
def list_words(
    db: DbOption = None,
) -> None:
    """List stored words alphabetically."""
    with SqliteVocabularyStore(_resolve_db_path(db)) as store:
        records = store.list_words()

    if not records:
        typer.echo("No words stored.")
        return
    for record in records:
        typer.echo(f"{record.word}\t{record.pronunciation}\t{record.definition}")


@app.command()
def delete(
    word: Annotated[str, typer.Argument(help="Stored word to delete.")],
    db: DbOption = None,
) -> None:
    """Delete a stored word."""
    with SqliteVocabularyStore(_resolve_db_path(db)) as store:
        deleted = store.delete(word.lower())

    if not deleted:
        typer.echo(f"Word not found: {word}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Deleted {word}.")


def main() -> None:  # pragma: no cover
    """Entry point for the CLI."""
    # Configure logging — only show warnings by default
    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    app()
