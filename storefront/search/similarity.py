"""
Heuristic string similarity used to match a search query against catalog labels.
"""

EXACT_MATCH_SCORE = 1.0
SUBSTRING_SCORE = 0.8
COMMON_WORDS_BASE = 0.3
COMMON_WORDS_SPAN = 0.4
COMMON_WORDS_CAP = 0.7


def score(a: str, b: str) -> float:
    """
    Compare two strings and return a similarity in [0, 1].

    Only lowercasing and trimming are applied: accents and punctuation are
    compared as-is, so "l'oreal" and "loreal" do not match.

    Args:
        a: Candidate label (or query)
        b: Query (or candidate label)

    Returns:
        1.0 for equal strings, 0.8 when one contains the other, up to 0.7 for
        words shared in either direction, otherwise 0.0
    """
    s1 = (a or "").lower().strip()
    s2 = (b or "").lower().strip()

    if s1 == s2:
        return EXACT_MATCH_SCORE
    if s2 in s1 or s1 in s2:
        return SUBSTRING_SCORE

    # Split on single spaces: consecutive spaces yield empty words, which match everything
    words1 = s1.split(' ')
    words2 = s2.split(' ')
    common_words = [word for word in words1 if any(word in w or w in word for w in words2)]

    if common_words:
        ratio = len(common_words) / max(len(words1), len(words2))
        return min(COMMON_WORDS_CAP, COMMON_WORDS_BASE + ratio * COMMON_WORDS_SPAN)

    return 0.0
