"""Vocabulary collection from free-form text."""

from wordbank.dictionary import (
    DictionaryGateway,
    DictionaryLookup,
    MerriamWebsterClient,
    audio_url,
    parse_entries,
)
from wordbank.filtering import STOPWORDS, is_candidate
from wordbank.lemmatizer import SUFFIX_RULES, lemmatize
from wordbank.models import (
    DefinitionResult,
    LookupOutcome,
    NotFound,
    ProcessResult,
    ReconcileResult,
    Sentence,
    VocabularyRecord,
)
from wordbank.pipeline import InputError, ProcessingError, VocabularyPipeline, reconcile
from wordbank.sentences import extract_sentences
from wordbank.store import (
    DryRunVocabularyStore,
    DuplicateKeyError,
    InMemoryVocabularyStore,
    SqliteVocabularyStore,
    VocabularyStore,
)
from wordbank.tokens import extract_tokens
from wordbank.vocabulary import VocabularyBuilder, extract_vocabulary

__all__ = [
    "DefinitionResult",
    "DictionaryGateway",
    "DictionaryLookup",
    "DryRunVocabularyStore",
    "DuplicateKeyError",
    "InMemoryVocabularyStore",
    "InputError",
    "LookupOutcome",
    "MerriamWebsterClient",
    "NotFound",
    "ProcessResult",
    "ProcessingError",
    "ReconcileResult",
    "STOPWORDS",
    "SUFFIX_RULES",
    "Sentence",
    "SqliteVocabularyStore",
    "VocabularyBuilder",
    "VocabularyPipeline",
    "VocabularyRecord",
    "VocabularyStore",
    "audio_url",
    "extract_sentences",
    "extract_tokens",
    "extract_vocabulary",
    "is_candidate",
    "lemmatize",
    "parse_entries",
    "reconcile",
]
