"""Sentence segmentation."""

import re
from collections.abc import Generator

from wordbank.models import Sentence

# A run of non-terminators followed by one or more terminators
_SENTENCE_PATTERN = re.compile(r"[^.!?]+[.!?]+")


def extract_sentences(text: str) -> Generator[Sentence, None, None]:
    """Split text into sentences ending at '.', '!' or '?'.

    Sentences are yielded untrimmed, terminators included. Text following
    the last terminator is not part of any sentence. If no terminated
    sentence is found, the whole text is yielded as a single sentence.

    Args:
        text: Input text to split into sentences.

    Yields:
        Sentence objects with text and index within input.
    """
    index = 0
    for match in _SENTENCE_PATTERN.finditer(text):
        yield Sentence(text=match.group(), index=index)
        index += 1

    if index == 0:
        yield Sentence(text=text, index=0)
