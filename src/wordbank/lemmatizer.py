"""Heuristic suffix-stripping lemmatizer."""

# (suffix, replacement) pairs, tried in order; the first applicable rule wins
SUFFIX_RULES: tuple[tuple[str, str], ...] = (
    ("ies", "y"),
    ("es", "e"),
    ("s", ""),
    ("ed", ""),
    ("ing", ""),
)

# A rule only applies if the remaining stem is longer than this
MIN_STEM_LENGTH = 2


def lemmatize(token: str) -> str:
    """Reduce a token to its base form using SUFFIX_RULES.

    This is not real morphology: "running" becomes "runn" and "boxes"
    becomes "boxe". Stored words are keyed by this output, so it must
    stay stable.

    Args:
        token: Lowercase token.

    Returns:
        The base form, or the token unchanged if no rule applies.
    """
    for suffix, replacement in SUFFIX_RULES:
        if token.endswith(suffix) and len(token) - len(suffix) > MIN_STEM_LENGTH:
            return token[: -len(suffix)] + replacement
    return token
