"""Confidence scoring for (query name, roster member) pairs.

Implements the confidence cascade used when importing leave records:
- Exact name (or nickname with exact surname): 100
- Exact surname with a similar given name: 95
- Doubled-letter surname typo with nickname given name: 98
- Surname misspelling or strong phonetic match, similar given name: 92
- Good phonetic surname match, similar given name: 85
- Otherwise a weighted blend of given/family similarity, penalized when
  the surname match is weak

The rules and numbers are heuristics tuned by example, not a calibrated
model. They are kept as named constants in ConfidenceThresholds so they can
be tuned without touching the cascade.
"""

import math
from collections.abc import Collection

from pydantic import BaseModel, ConfigDict

from src.matching.misspellings import MisspellingDetector
from src.matching.nicknames import NicknameResolver
from src.matching.normalizer import normalize_name
from src.matching.phonetic import phonetic_similarity
from src.matching.schemas import NameQuery, RosterMember
from src.matching.similarity import string_similarity

DEFAULT_COMMON_GIVEN_NAMES: frozenset[str] = frozenset(
    {
        "mike",
        "michael",
        "john",
        "johnny",
        "dave",
        "david",
        "bob",
        "robert",
        "bill",
        "william",
        "jim",
        "james",
        "tom",
        "thomas",
        "joe",
        "joseph",
        "dan",
        "daniel",
        "steve",
        "steven",
        "alex",
        "alexander",
        "matt",
        "matthew",
        "chris",
        "christopher",
        "pat",
        "patrick",
        "nick",
        "nicholas",
        "sam",
        "samuel",
        "tim",
        "timothy",
        "rick",
        "richard",
        "tony",
        "anthony",
        "don",
        "donald",
        "nate",
        "nathan",
    }
)


class ConfidenceThresholds(BaseModel):
    """Scores and cut-offs used by the confidence cascade."""

    model_config = ConfigDict(frozen=True)

    # Cascade results
    exact_score: int = 100
    exact_family_score: int = 95
    doubled_letter_nickname_score: int = 98
    spelling_match_score: int = 92
    phonetic_match_score: int = 85

    # Cascade gates
    exact_family_given_similarity: float = 0.5
    given_match_similarity: float = 0.6
    strong_phonetic_similarity: float = 0.9
    good_phonetic_similarity: float = 0.8

    # Weighted blend
    common_given_weight: float = 0.2
    common_family_weight: float = 0.8
    given_weight: float = 0.3
    family_weight: float = 0.7
    phonetic_family_factor: float = 0.9

    # Component floors
    given_prefix_floor: float = 0.8
    given_nickname_floor: float = 0.9
    given_nate_nathan_floor: float = 0.95
    given_misspelling_floor: float = 0.85
    family_misspelling_floor: float = 0.85
    family_doubled_letter_floor: float = 0.95
    family_prefix_floor: float = 0.9

    # Weak-surname penalty gate
    common_family_gate: float = 0.6
    family_gate: float = 0.4


def _is_prefix_pair(a: str, b: str) -> bool:
    return a.startswith(b) or b.startswith(a)


class ConfidenceCombiner:
    """Fuses phonetic, edit-distance, nickname and misspelling signals.

    Stateless apart from its injected lookup tables, so one instance can
    score candidates for any number of concurrent queries.
    """

    def __init__(
        self,
        nicknames: NicknameResolver | None = None,
        misspellings: MisspellingDetector | None = None,
        thresholds: ConfidenceThresholds | None = None,
        common_given_names: Collection[str] = DEFAULT_COMMON_GIVEN_NAMES,
    ):
        """Initialize combiner with its lookup tables.

        Args:
            nicknames: Nickname resolver (default table if omitted)
            misspellings: Misspelling detector (default pairs if omitted)
            thresholds: Cascade constants (defaults if omitted)
            common_given_names: Normalized given names that get stricter weights
        """
        self._nicknames = nicknames or NicknameResolver()
        self._misspellings = misspellings or MisspellingDetector()
        self._t = thresholds or ConfidenceThresholds()
        self._common_given_names = frozenset(common_given_names)

    def build_query(self, given_name: str | None, family_name: str | None) -> NameQuery:
        """Normalize free-text name parts into a NameQuery."""
        return NameQuery.from_raw(given_name, family_name, self._common_given_names)

    def score(self, query: NameQuery, member: RosterMember) -> int:
        """Score how likely ``member`` is the person named by ``query``.

        Args:
            query: Normalized query name
            member: Roster member to compare against

        Returns:
            Integer confidence in [0, 100]
        """
        return self.score_tokens(
            query,
            normalize_name(member.given_name),
            normalize_name(member.family_name),
        )

    def score_tokens(self, query: NameQuery, given: str, family: str) -> int:
        """Score a query against already-normalized member name tokens."""
        t = self._t
        q_given, q_family = query.given, query.family
        variants = self._nicknames.is_variant(q_given, given)

        # Rule 1: exact full name, or exact surname with same/nickname given name
        if (q_given and q_family and q_given == given and q_family == family) or (
            q_family and q_family == family and variants
        ):
            return t.exact_score

        # Rule 2: exact surname with a related given name
        if q_given and q_family and q_family == family:
            if (
                string_similarity(q_given, given) > t.exact_family_given_similarity
                or variants
            ):
                return t.exact_family_score

        # Rules 3-4: surname is a typo or sounds the same
        if q_family and family and q_given and given:
            family_phonetic = phonetic_similarity(q_family, family)
            family_misspelled = self._misspellings.looks_like_misspelling(
                q_family, family
            )
            doubled_letter = self._misspellings.has_doubled_letter_collapse(
                q_family, family
            )
            given_match = (
                variants
                or string_similarity(q_given, given) > t.given_match_similarity
            )

            if doubled_letter and variants:
                return t.doubled_letter_nickname_score
            if (
                family_phonetic > t.strong_phonetic_similarity or family_misspelled
            ) and given_match:
                return t.spelling_match_score
            if family_phonetic > t.good_phonetic_similarity and given_match:
                return t.phonetic_match_score

        # Rule 5: weighted blend
        if query.is_common_given:
            given_weight, family_weight = t.common_given_weight, t.common_family_weight
        else:
            given_weight, family_weight = t.given_weight, t.family_weight

        given_sim = self._given_component(q_given, given, variants)
        family_sim = self._family_component(q_family, family)
        combined = given_sim * given_weight + family_sim * family_weight

        # Rule 6: a strong given name must not mask a weak surname
        if q_given and q_family:
            gate = t.common_family_gate if query.is_common_given else t.family_gate
            if family_sim < gate:
                combined = combined * (family_sim / gate)

        return max(0, min(100, math.floor(combined * 100 + 0.5)))

    def _given_component(self, q_given: str, given: str, variants: bool) -> float:
        t = self._t
        sim = string_similarity(q_given, given)
        if not (q_given and given):
            return sim

        if _is_prefix_pair(q_given, given):
            sim = max(sim, t.given_prefix_floor)
        if variants:
            sim = max(sim, t.given_nickname_floor)
            if {q_given, given} == {"nate", "nathan"}:
                sim = max(sim, t.given_nate_nathan_floor)
        if self._misspellings.looks_like_misspelling(q_given, given):
            sim = max(sim, t.given_misspelling_floor)
        return sim

    def _family_component(self, q_family: str, family: str) -> float:
        t = self._t
        sim = string_similarity(q_family, family)
        if not (q_family and family):
            return sim

        phonetic = phonetic_similarity(q_family, family)
        if phonetic > sim:
            sim = max(sim, phonetic * t.phonetic_family_factor)
        if self._misspellings.looks_like_misspelling(q_family, family):
            sim = max(sim, t.family_misspelling_floor)
        if self._misspellings.has_doubled_letter_collapse(q_family, family):
            sim = max(sim, t.family_doubled_letter_floor)
        if _is_prefix_pair(q_family, family):
            sim = max(sim, t.family_prefix_floor)
        return sim
