"""Edit-distance similarity using RapidFuzz."""

from rapidfuzz.distance import Levenshtein


def levenshtein_distance(a: str, b: str) -> int:
    """Unit-cost Levenshtein distance (case-insensitive)."""
    return Levenshtein.distance(a.lower(), b.lower())


def string_similarity(a: str, b: str) -> float:
    """Normalized similarity ``1 - distance / max(len(a), len(b))``.

    Two empty strings are identical (1.0); one empty string shares
    nothing with a non-empty one (0.0). Symmetric in its arguments.
    """
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    return Levenshtein.normalized_similarity(a.lower(), b.lower())
