"""Name matching schemas.

Defines roster snapshots, normalized queries and the tagged match outcome
returned by the candidate classifier.
"""

from collections.abc import Collection
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from src.matching.normalizer import normalize_name


class MemberStatus(str, Enum):
    """Roster membership status."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class RosterMember(BaseModel):
    """Member snapshot returned by the roster for a single query.

    The employee number is the stable identifier; the internal member id is
    only present once the member has an account.
    """

    model_config = ConfigDict(frozen=True)

    member_id: str | None = Field(default=None, description="Internal member id")
    employee_number: int = Field(description="Stable employee (PIN) number")
    given_name: str | None = Field(default=None, description="First name")
    family_name: str | None = Field(default=None, description="Last name")
    status: MemberStatus = Field(default=MemberStatus.ACTIVE)
    division_id: int | None = Field(default=None, description="Owning division")

    @property
    def has_full_name(self) -> bool:
        """True when both name parts are present."""
        return bool(self.given_name) and bool(self.family_name)


class NameQuery(BaseModel):
    """Normalized first/last name pair being resolved."""

    model_config = ConfigDict(frozen=True)

    given: str = Field(default="", description="Normalized given name")
    family: str = Field(default="", description="Normalized family name")
    is_common_given: bool = Field(
        default=False,
        description="Given name is on the common-names list (stricter matching)",
    )

    @classmethod
    def from_raw(
        cls,
        given_name: str | None,
        family_name: str | None,
        common_names: Collection[str] = frozenset(),
    ) -> "NameQuery":
        """Build a query from free-text name parts.

        Args:
            given_name: First name as transcribed externally
            family_name: Last name as transcribed externally
            common_names: Normalized given names that get stricter thresholds

        Returns:
            NameQuery with normalized tokens
        """
        given = normalize_name(given_name)
        return cls(
            given=given,
            family=normalize_name(family_name),
            is_common_given=given in common_names,
        )

    @property
    def is_empty(self) -> bool:
        """True when neither token carries any signal."""
        return not self.given and not self.family


class MatchCandidate(BaseModel):
    """A roster member scored against a query."""

    member: RosterMember
    confidence: int = Field(ge=0, le=100, description="Match confidence (0-100)")


class MatchStatus(str, Enum):
    """Classification of a query against its candidates."""

    MATCHED = "matched"
    MULTIPLE_MATCHES = "multiple_matches"
    UNMATCHED = "unmatched"


class Matched(BaseModel):
    """Query resolved to a single member."""

    status: Literal["matched"] = "matched"
    member: RosterMember
    confidence: int = Field(ge=0, le=100)


class MultipleMatches(BaseModel):
    """Ambiguous query; an operator has to pick one of the candidates."""

    status: Literal["multiple_matches"] = "multiple_matches"
    candidates: list[MatchCandidate] = Field(
        description="Candidates ordered by confidence, highest first"
    )


class Unmatched(BaseModel):
    """Nothing in the roster scored above threshold."""

    status: Literal["unmatched"] = "unmatched"
    reason: str | None = Field(default=None, description="Why nothing matched")


MatchOutcome = Annotated[
    Matched | MultipleMatches | Unmatched,
    Field(discriminator="status"),
]
