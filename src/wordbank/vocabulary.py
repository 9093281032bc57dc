"""Vocabulary extraction from raw text."""

from wordbank.filtering import is_candidate
from wordbank.lemmatizer import lemmatize
from wordbank.sentences import extract_sentences
from wordbank.tokens import extract_tokens


class VocabularyBuilder:
    """Incrementally binds base forms to the first sentence they appear in.

    Feed tokens via add(), then call build() to get the mapping of
    base form to example sentence, in order of first sighting.
    """

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}
        self._built = False

    def add(self, token: str, sentence: str) -> None:
        """Add a token seen in a sentence.

        Tokens that are not candidates are silently ignored, as are base
        forms that already have a sentence.

        Args:
            token: Lowercase token.
            sentence: The trimmed sentence containing the token.

        Raises:
            RuntimeError: If build() has already been called.
        """
        if self._built:
            raise RuntimeError("Cannot add tokens after build() has been called")
        if not is_candidate(token):
            return

        base = lemmatize(token)
        if base not in self._entries:
            self._entries[base] = sentence

    def build(self) -> dict[str, str]:
        """Return the accumulated base form to sentence mapping.

        This is a terminal operation.

        Raises:
            RuntimeError: If build() has already been called.
        """
        if self._built:
            raise RuntimeError("build() has already been called")
        self._built = True
        return dict(self._entries)


def extract_vocabulary(text: str) -> dict[str, str]:
    """Extract candidate base forms from text with their first sentence.

    Args:
        text: Raw input text, possibly empty.

    Returns:
        Mapping of base form to the trimmed first sentence containing it,
        in document order of first sighting.
    """
    builder = VocabularyBuilder()

    for sentence in extract_sentences(text):
        trimmed = sentence.text.strip()
        for token in extract_tokens(sentence.text):
            builder.add(token, trimmed)

    return builder.build()
