"""Coarse phonetic encoding for surnames.

A simplified double-metaphone: an ordered list of rewrite rules collapses
sounds that are commonly confused or transcribed differently. Order matters,
each rule runs on the output of the previous one.
"""

import re

from src.matching.similarity import string_similarity

# (pattern, replacement, count); count 0 rewrites every occurrence
_RULES: tuple[tuple[re.Pattern[str], str, int], ...] = tuple(
    (re.compile(pattern), replacement, count)
    for pattern, replacement, count in (
        (r"[^a-z]", "", 0),
        (r"ph", "f", 0),
        (r"ck", "k", 0),
        (r"([bcdfghjklmnpqrstvwxz])\1+", r"\1", 0),
        (r"([aeiou])[aeiou]+", r"\1", 0),
        (r"kn|gn|pn|ae|wr", "n", 0),
        (r"wh", "w", 0),
        (r"x", "ks", 0),
        (r"mb$", "m", 0),
        (r"ght", "t", 0),
        (r"dg|tch", "j", 0),
        (r"([^c])ia", r"\1ya", 0),
        (r"([^c])io", r"\1yo", 0),
        (r"([^c])iu", r"\1yu", 0),
        (r"ow", "aw", 0),
        (r"ee|ea|ey|ei|ie", "e", 0),
        (r"oa|oe|ou|oo|ough", "o", 0),
        (r"ai|ay|ae", "a", 0),
        (r"^[aeiou]", "A", 1),
        (r"[aeiou]$", "A", 1),
        (r"[aeiou]", "A", 0),
        (r"sh|sch|ch", "S", 0),
        (r"th", "T", 0),
    )
)


def phonetic_code(token: str) -> str:
    """Encode a name token as a short phonetic code.

    Examples:
        phonetic_code("wilbur") -> "wAlbAr"
        phonetic_code("willbur") -> "wAlbAr"
    """
    if not token:
        return ""
    code = token.lower()
    for pattern, replacement, count in _RULES:
        code = pattern.sub(replacement, code, count=count)
    return code


def phonetic_similarity(a: str, b: str) -> float:
    """Similarity (0-1) of two tokens by how they sound.

    Identical codes score 1.0; otherwise the codes are compared by edit
    distance. Empty input scores 0.0.
    """
    if not a or not b:
        return 0.0
    code_a = phonetic_code(a)
    code_b = phonetic_code(b)
    if code_a == code_b:
        return 1.0
    return string_similarity(code_a, code_b)
