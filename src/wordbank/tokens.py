"""Token extraction from sentences."""

import re
from collections.abc import Generator

# ASCII word boundaries: letters adjacent to digits or underscores do not form a token
_TOKEN_PATTERN = re.compile(r"\b[a-z]+\b", re.ASCII)


def extract_tokens(sentence_text: str) -> Generator[str, None, None]:
    """Extract lowercase word tokens from a sentence.

    The sentence is lowercased, then every maximal run of ASCII letters
    bounded by non-word characters is yielded in order. Digits and
    punctuation are skipped.

    Args:
        sentence_text: The sentence text to tokenize.

    Yields:
        Lowercase tokens, duplicates included.
    """
    for match in _TOKEN_PATTERN.finditer(sentence_text.lower()):
        yield match.group()
