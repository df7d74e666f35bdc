"""Common misspelling detection for name tokens.

Recognizes three kinds of transcription error:
- a single confusable letter-group substitution (c/k, f/ph, l/ll, ...)
- a doubled ``l`` written once or twice (Wilbur / Willbur)
- one adjacent-character transposition (Jhon / John)
"""

from collections.abc import Iterable

DEFAULT_CONFUSABLE_PAIRS: tuple[tuple[str, str], ...] = (
    ("c", "k"),
    ("s", "c"),
    ("y", "i"),
    ("f", "ph"),
    ("n", "nn"),
    ("l", "ll"),
    ("m", "mm"),
    ("t", "tt"),
    ("i", "e"),
    ("a", "e"),
    ("a", "o"),
    ("e", "a"),
    ("ks", "x"),
    ("z", "s"),
    ("j", "g"),
    ("w", "wh"),
)


def has_doubled_letter_collapse(a: str, b: str) -> bool:
    """True if writing the first ``ll`` as ``l`` in one token gives the other."""
    a = a.lower()
    b = b.lower()
    return a.replace("ll", "l", 1) == b or b.replace("ll", "l", 1) == a


def _is_transposition(a: str, b: str) -> bool:
    if len(a) != len(b):
        return False
    for i in range(len(a) - 1):
        if a[:i] + a[i + 1] + a[i] + a[i + 2 :] == b:
            return True
    return False


class MisspellingDetector:
    """Detects tokens that differ only by a common spelling mistake."""

    def __init__(
        self, pairs: Iterable[tuple[str, str]] = DEFAULT_CONFUSABLE_PAIRS
    ):
        """Initialize detector with confusable letter pairs.

        Args:
            pairs: Letter groups that are commonly written for one another.
                   Each pair is tried in both directions.
        """
        self._pairs: tuple[tuple[str, str], ...] = tuple(
            (x.lower(), y.lower()) for x, y in pairs
        )

    def has_doubled_letter_collapse(self, a: str, b: str) -> bool:
        return has_doubled_letter_collapse(a, b)

    def looks_like_misspelling(self, a: str, b: str) -> bool:
        """Check whether ``a`` and ``b`` are plausibly the same misspelled name.

        Substitutions replace only the first occurrence, so a pair can
        explain a single typo but not a systematic respelling.
        """
        a = a.lower()
        b = b.lower()

        if has_doubled_letter_collapse(a, b):
            return True

        for x, y in self._pairs:
            if (
                a.replace(x, y, 1) == b
                or b.replace(x, y, 1) == a
                or a.replace(y, x, 1) == b
                or b.replace(y, x, 1) == a
            ):
                return True

        return _is_transposition(a, b)
