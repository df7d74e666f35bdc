"""Given-name nickname equivalence.

Maps canonical given names to their common short forms and answers whether
two tokens are variants of the same name (Mike = Michael, Bob = Bobby).
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

DEFAULT_NICKNAMES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "michael": ("mike", "mick", "mickey"),
        "robert": ("rob", "bob", "bobby"),
        "william": ("will", "bill", "billy"),
        "james": ("jim", "jimmy"),
        "thomas": ("tom", "tommy"),
        "joseph": ("joe", "joey"),
        "daniel": ("dan", "danny"),
        "richard": ("rick", "ricky", "dick"),
        "nicholas": ("nick", "nicky"),
        "anthony": ("tony",),
        "donald": ("don", "donnie"),
        "edward": ("ed", "eddie", "ned"),
        "christopher": ("chris",),
        "matthew": ("matt",),
        "steven": ("steve",),
        "alexander": ("alex",),
        "david": ("dave",),
        "jonathan": ("jon", "john"),
        "samuel": ("sam",),
        "patrick": ("pat",),
        "timothy": ("tim",),
        "kenneth": ("ken", "kenny"),
        "lawrence": ("larry",),
        "charles": ("chuck", "charlie"),
        "benjamin": ("ben",),
        "nathan": ("nate", "nat"),
    }
)


class NicknameResolver:
    """Bidirectional nickname lookup over an immutable table.

    The table is copied at construction, so the resolver can be shared
    across concurrent workers and substituted freely in tests.
    """

    def __init__(self, table: Mapping[str, Iterable[str]] = DEFAULT_NICKNAMES):
        """Initialize resolver with a canonical -> variants table.

        Args:
            table: Canonical given name -> informal short forms
        """
        self._table: Mapping[str, frozenset[str]] = MappingProxyType(
            {
                canonical.lower(): frozenset(v.lower() for v in variants)
                for canonical, variants in table.items()
            }
        )

    def is_variant(self, a: str, b: str) -> bool:
        """Check if two given names are the same name or nickname variants.

        True when the names are equal, when one is the canonical form and the
        other one of its variants, or when both are variants of the same
        canonical name.
        """
        a = a.lower()
        b = b.lower()
        if a == b:
            return True

        for canonical, variants in self._table.items():
            if a == canonical and b in variants:
                return True
            if b == canonical and a in variants:
                return True
            if a in variants and b in variants:
                return True
        return False

    def variants_of(self, name: str) -> set[str]:
        """All names considered equivalent to ``name`` (including itself)."""
        name = name.lower()
        found = {name}
        for canonical, variants in self._table.items():
            if name == canonical or name in variants:
                found.add(canonical)
                found.update(variants)
        return found
