"""Tests for name token normalization."""

import pytest

from src.matching.normalizer import normalize_name


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("John", "john"),
        ("  O'Brien ", "obrien"),
        ("Mary-Jane", "maryjane"),
        ("Smith III.", "smithiii"),
        ("Agent 47", "agent47"),
    ],
)
def test_normalize_strips_and_lowercases(raw: str, expected: str):
    """Non-alphanumerics are removed and letters lower-cased."""
    assert normalize_name(raw) == expected


@pytest.mark.parametrize("raw", ["", None, "   ", "!!!", "-.-"])
def test_empty_signal_yields_empty_string(raw):
    """Blank or punctuation-only input normalizes to an empty string."""
    assert normalize_name(raw) == ""
