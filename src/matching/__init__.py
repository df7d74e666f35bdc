"""Name matching module for resolving imported names to roster members.

This module provides:
- Name normalization, phonetic encoding and edit-distance similarity
- Nickname equivalence (Mike = Michael) and misspelling detection
- ConfidenceCombiner: rule cascade producing a 0-100 confidence
- CandidateClassifier: Matched / MultipleMatches / Unmatched decisions
"""

from src.matching.classifier import CandidateClassifier, ClassifierThresholds
from src.matching.confidence import (
    DEFAULT_COMMON_GIVEN_NAMES,
    ConfidenceCombiner,
    ConfidenceThresholds,
)
from src.matching.misspellings import DEFAULT_CONFUSABLE_PAIRS, MisspellingDetector
from src.matching.nicknames import DEFAULT_NICKNAMES, NicknameResolver
from src.matching.normalizer import normalize_name
from src.matching.phonetic import phonetic_code, phonetic_similarity
from src.matching.schemas import (
    MatchCandidate,
    Matched,
    MatchOutcome,
    MatchStatus,
    MemberStatus,
    MultipleMatches,
    NameQuery,
    RosterMember,
    Unmatched,
)
from src.matching.similarity import levenshtein_distance, string_similarity

__all__ = [
    "DEFAULT_COMMON_GIVEN_NAMES",
    "DEFAULT_CONFUSABLE_PAIRS",
    "DEFAULT_NICKNAMES",
    "CandidateClassifier",
    "ClassifierThresholds",
    "ConfidenceCombiner",
    "ConfidenceThresholds",
    "MatchCandidate",
    "MatchOutcome",
    "MatchStatus",
    "Matched",
    "MemberStatus",
    "MisspellingDetector",
    "MultipleMatches",
    "NameQuery",
    "NicknameResolver",
    "RosterMember",
    "Unmatched",
    "levenshtein_distance",
    "normalize_name",
    "phonetic_code",
    "phonetic_similarity",
    "string_similarity",
]
