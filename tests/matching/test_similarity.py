"""Tests for edit-distance similarity."""

import pytest

from src.matching.similarity import levenshtein_distance, string_similarity

PAIRS = [
    ("kitten", "sitting"),
    ("wilbur", "willbur"),
    ("john", "jon"),
    ("smith", "jones"),
    ("a", ""),
    ("", ""),
    ("mike", "michael"),
]


class TestLevenshteinDistance:
    """Tests for levenshtein_distance."""

    def test_classic_example(self):
        """kitten -> sitting takes three edits."""
        assert levenshtein_distance("kitten", "sitting") == 3

    def test_case_insensitive(self):
        """Case differences are not edits."""
        assert levenshtein_distance("SMITH", "smith") == 0


class TestStringSimilarity:
    """Tests for string_similarity."""

    def test_normalized_by_longer_string(self):
        """Similarity is 1 - distance / max length."""
        assert string_similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)
        assert string_similarity("mike", "michael") == pytest.approx(3 / 7)

    def test_both_empty_is_identical(self):
        """Two empty strings score 1.0."""
        assert string_similarity("", "") == 1.0

    def test_one_empty_scores_zero(self):
        """An empty string shares nothing with a non-empty one."""
        assert string_similarity("smith", "") == 0.0
        assert string_similarity("", "smith") == 0.0

    @pytest.mark.parametrize("token", ["a", "john", "willbur", "o'brien"])
    def test_reflexive(self, token: str):
        """Any non-empty string is fully similar to itself."""
        assert string_similarity(token, token) == 1.0

    @pytest.mark.parametrize(("a", "b"), PAIRS)
    def test_symmetric(self, a: str, b: str):
        """sim(a, b) == sim(b, a)."""
        assert string_similarity(a, b) == string_similarity(b, a)

    @pytest.mark.parametrize(("a", "b"), PAIRS)
    def test_bounded(self, a: str, b: str):
        """Similarity stays within [0, 1]."""
        assert 0.0 <= string_similarity(a, b) <= 1.0
