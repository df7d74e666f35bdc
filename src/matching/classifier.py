"""Candidate classification for a single name query.

Decision order:
1. Drop candidates at or below the confidence floor
2. Nothing left -> Unmatched
3. Exactly one high-confidence candidate -> Matched
4. Exactly one candidate left -> Matched
5. Top candidate clears the required score by a decisive gap -> Matched
6. Top candidate has the exact query surname and a fair score -> Matched
7. Otherwise -> MultipleMatches for an operator to pick from
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from src.matching.confidence import ConfidenceCombiner
from src.matching.normalizer import normalize_name
from src.matching.schemas import (
    MatchCandidate,
    Matched,
    MatchOutcome,
    MultipleMatches,
    NameQuery,
    RosterMember,
    Unmatched,
)


class ClassifierThresholds(BaseModel):
    """Cut-offs used when classifying scored candidates."""

    model_config = ConfigDict(frozen=True)

    common_floor: int = 40
    floor: int = 30
    high_confidence: int = 95
    common_required_top: int = 85
    required_top: int = 80
    common_required_gap: int = 30
    required_gap: int = 25
    exact_family_override: int = 70


class CandidateClassifier:
    """Scores roster candidates for a query and classifies the outcome."""

    def __init__(
        self,
        combiner: ConfidenceCombiner | None = None,
        thresholds: ClassifierThresholds | None = None,
    ):
        """Initialize classifier.

        Args:
            combiner: Confidence scorer for (query, member) pairs
            thresholds: Classification cut-offs (defaults if omitted)
        """
        self._combiner = combiner or ConfidenceCombiner()
        self._t = thresholds or ClassifierThresholds()

    def build_query(self, given_name: str | None, family_name: str | None) -> NameQuery:
        return self._combiner.build_query(given_name, family_name)

    def score_candidates(
        self,
        query: NameQuery,
        members: Iterable[RosterMember],
    ) -> list[MatchCandidate]:
        """Score every roster member that has both name parts."""
        return [
            MatchCandidate(member=member, confidence=self._combiner.score(query, member))
            for member in members
            if member.has_full_name
        ]

    def evaluate(
        self,
        query: NameQuery,
        members: Iterable[RosterMember],
    ) -> MatchOutcome:
        """Score roster members against a query and classify the result."""
        if query.is_empty:
            return Unmatched(reason="empty name")
        return self.classify(query, self.score_candidates(query, members))

    def classify(
        self,
        query: NameQuery,
        candidates: Iterable[MatchCandidate],
    ) -> MatchOutcome:
        """Classify already-scored candidates for a query.

        Args:
            query: Normalized query name
            candidates: Scored candidates in roster order

        Returns:
            Matched, MultipleMatches or Unmatched
        """
        t = self._t
        common = query.is_common_given

        remaining = self._above_floor(query, candidates)
        if not remaining:
            return Unmatched(reason="no candidate above threshold")

        high = [c for c in remaining if c.confidence >= t.high_confidence]
        if len(high) == 1:
            return _matched(high[0])

        if len(remaining) == 1:
            return _matched(remaining[0])

        top, second = remaining[0], remaining[1]
        required_top = t.common_required_top if common else t.required_top
        required_gap = t.common_required_gap if common else t.required_gap
        if (
            top.confidence > required_top
            and top.confidence - second.confidence > required_gap
        ):
            return _matched(top)

        if (
            query.family
            and normalize_name(top.member.family_name) == query.family
            and top.confidence >= t.exact_family_override
        ):
            return _matched(top)

        return MultipleMatches(candidates=remaining)

    def rank(
        self,
        query: NameQuery,
        members: Iterable[RosterMember],
    ) -> list[MatchCandidate]:
        """Plausible members for a query, best first.

        Used for manual lookup when an operator resolves an ambiguous or
        unmatched import by name. Applies the same confidence floor as
        ``classify``; a blank query ranks nothing.
        """
        if query.is_empty:
            return []
        return self._above_floor(query, self.score_candidates(query, members))

    def _above_floor(
        self,
        query: NameQuery,
        candidates: Iterable[MatchCandidate],
    ) -> list[MatchCandidate]:
        floor = self._t.common_floor if query.is_common_given else self._t.floor
        # Stable sort keeps roster order among equal scores
        return sorted(
            (c for c in candidates if c.confidence > floor),
            key=lambda c: c.confidence,
            reverse=True,
        )


def _matched(candidate: MatchCandidate) -> Matched:
    return Matched(member=candidate.member, confidence=candidate.confidence)
