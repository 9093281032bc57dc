"""Candidate word filtering."""

# Tokens this short are never candidates
MIN_CANDIDATE_LENGTH = 4

# High-frequency English words that are never worth learning
STOPWORDS: frozenset[str] = frozenset(
    {
        "the", "be", "to", "of", "and", "a", "in", "that", "have", "i",
        "it", "for", "not", "on", "with", "he", "as", "you", "do", "at",
        "this", "but", "his", "by", "from", "they", "we", "say", "her", "she",
        "or", "an", "will", "my", "one", "all", "would", "there", "their", "what",
        "so", "up", "out", "if", "about", "who", "get", "which", "go", "me",
        "when", "make", "can", "like", "time", "no", "just", "him", "know", "take",
        "people", "into", "year", "your", "good", "some", "could", "them", "see", "other",
        "than", "then", "now", "look", "only", "come", "its", "over", "think", "also",
        "back", "after", "use", "two", "how", "our", "work", "first", "well", "way",
        "even", "new", "want", "because", "any", "these", "give", "day", "most", "us",
        "is", "was", "are", "been", "has", "had", "were", "said", "did", "having",
        "may", "should", "am",
    }
)  # fmt: skip


def is_candidate(token: str) -> bool:
    """Return True if a lowercase token is worth keeping as vocabulary.

    Args:
        token: Lowercase token.

    Returns:
        False if the token is shorter than MIN_CANDIDATE_LENGTH or is a
        stopword, True otherwise.
    """
    if len(token) < MIN_CANDIDATE_LENGTH:
        return False
    return token not in STOPWORDS
