"""Dictionary lookup using the Merriam-Webster Collegiate API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, Self

import httpx
from pydantic import BaseModel, ValidationError

from wordbank.models import DefinitionResult, LookupOutcome, NotFound

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Any

logger = logging.getLogger(__name__)

API_URL = "https://www.dictionaryapi.com/api/v3/references/collegiate/json"
AUDIO_URL = (
    "https://media.merriam-webster.com/audio/prons/"
    "{language}/{region}/{format}/{subdir}/{audio}.{format}"
)
AUDIO_LANGUAGE = "en"
AUDIO_REGION = "us"
AUDIO_FORMAT = "mp3"
DEFAULT_TIMEOUT = 10.0
NO_DEFINITION = "No definition available"


class DictionaryLookup(Protocol):
    """A source of raw dictionary entries."""

    def lookup(self, word: str) -> Any: ...


class Sound(BaseModel):
    """Pronunciation recording reference."""

    audio: str | None = None


class Pronunciation(BaseModel):
    """One pronunciation of a headword."""

    mw: str | None = None
    sound: Sound | None = None


class HeadwordInfo(BaseModel):
    """Headword and its pronunciations."""

    hw: str | None = None
    prs: list[Pronunciation] = []


class MerriamWebsterEntry(BaseModel):
    """The subset of a Collegiate entry we use. Unknown fields are ignored."""

    hwi: HeadwordInfo | None = None
    shortdef: list[str] = []


def audio_url(audio: str) -> str:
    """Build the URL of a Merriam-Webster pronunciation recording.

    Args:
        audio: The audio base filename from the entry (e.g., "serend01").

    Returns:
        Full URL of the mp3 file.
    """
    if audio.startswith("bix"):
        subdir = "bix"
    elif audio.startswith("gg"):
        subdir = "gg"
    elif "0" <= audio[0] <= "9":
        subdir = "number"
    else:
        subdir = audio[0]
    return AUDIO_URL.format(
        language=AUDIO_LANGUAGE,
        region=AUDIO_REGION,
        format=AUDIO_FORMAT,
        subdir=subdir,
        audio=audio,
    )


def parse_entries(word: str, data: Any) -> LookupOutcome:
    """Turn a raw Collegiate API response into a lookup outcome.

    Only the first entry is used. An empty response, a list of spelling
    suggestions (strings), or an entry that doesn't match the expected
    shape are all reported as NotFound.

    Args:
        word: The word that was looked up.
        data: Decoded JSON response.

    Returns:
        DefinitionResult for a usable entry, NotFound otherwise.
    """
    if not isinstance(data, list) or not data:
        return NotFound(word=word, reason="empty response")
    if isinstance(data[0], str):
        return NotFound(word=word, reason="suggestions only")

    try:
        entry = MerriamWebsterEntry.model_validate(data[0])
    except ValidationError:
        logger.debug("Malformed dictionary entry for %s", word, exc_info=True)
        return NotFound(word=word, reason="malformed entry")

    definition = entry.shortdef[0] if entry.shortdef and entry.shortdef[0] else NO_DEFINITION

    hwi = entry.hwi or HeadwordInfo()
    first = hwi.prs[0] if hwi.prs else None
    pronunciation = (first and first.mw) or hwi.hw or ""

    audio = first.sound.audio if first and first.sound else None

    return DefinitionResult(
        definition=definition,
        pronunciation=pronunciation,
        audio_url=audio_url(audio) if audio else None,
    )


class MerriamWebsterClient:
    """HTTP client for the Merriam-Webster Collegiate dictionary.

    Usage:
        with MerriamWebsterClient(api_key) as client:
            client.lookup("serendipitous")
    """

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Collegiate dictionary API key.
            timeout: Request timeout in seconds.
            http_client: Client to use for requests. A new one is created
                if not given. Only a client created here is closed on exit.

        Raises:
            ValueError: If api_key is empty.
        """
        if not api_key:
            raise ValueError("api_key must not be empty")
        self._api_key = api_key
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context: close the HTTP client if this object created it."""
        if self._owns_client:
            self._client.close()

    def lookup(self, word: str) -> Any:
        """Fetch the raw entries for a word.

        Returns:
            Decoded JSON response, usually a list of entries or of
            spelling suggestions.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response.
            httpx.RequestError: If the request fails.
            ValueError: If the body is not valid JSON.
        """
        response = self._client.get(f"{API_URL}/{word}", params={"key": self._api_key})
        response.raise_for_status()
        return response.json()


class DictionaryGateway:
    """Looks up definitions, degrading every kind of failure to NotFound."""

    def __init__(self, lookup: DictionaryLookup) -> None:
        self._lookup = lookup

    def define(self, word: str) -> LookupOutcome:
        """Look up a word.

        Args:
            word: Base form to look up.

        Returns:
            DefinitionResult if the dictionary has a usable entry,
            NotFound if it has none or the lookup failed.
        """
        try:
            data = self._lookup.lookup(word)
        except Exception as e:
            logger.warning("Dictionary lookup failed for %s: %s", word, e)
            return NotFound(word=word, reason="lookup failed")

        return parse_entries(word, data)
