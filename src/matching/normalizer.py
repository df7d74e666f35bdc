"""Name token normalization."""

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_name(token: str | None) -> str:
    """Lower-case a name token and drop everything outside [a-z0-9].

    An empty result means the token carries no signal; callers skip it
    rather than treating it as an error.
    """
    if not token:
        return ""
    return _NON_ALNUM.sub("", token.strip().lower())
