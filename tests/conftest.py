"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from datetime import date, datetime

import pytest

from src.importer.schemas import ExternalLeaveRecord, LeaveKind
from src.matching.schemas import RosterMember


@pytest.fixture
def make_member() -> Callable[..., RosterMember]:
    """Factory for roster members with sensible defaults."""

    def _make_member(
        employee_number: int,
        given_name: str | None,
        family_name: str | None,
        member_id: str | None = None,
        division_id: int | None = None,
    ) -> RosterMember:
        return RosterMember(
            member_id=member_id,
            employee_number=employee_number,
            given_name=given_name,
            family_name=family_name,
            division_id=division_id,
        )

    return _make_member


@pytest.fixture
def make_record() -> Callable[..., ExternalLeaveRecord]:
    """Factory for external leave records with sensible defaults."""

    def _make_record(
        given_name: str,
        family_name: str,
        event_date: date = date(2025, 3, 14),
        leave_kind: LeaveKind = LeaveKind.PLD,
        is_waitlisted: bool = False,
        created_at: datetime = datetime(2025, 1, 10, 9, 30),
        original_request_date: datetime | None = None,
    ) -> ExternalLeaveRecord:
        return ExternalLeaveRecord(
            given_name=given_name,
            family_name=family_name,
            event_date=event_date,
            leave_kind=leave_kind,
            is_waitlisted=is_waitlisted,
            created_at=created_at,
            original_request_date=original_request_date,
        )

    return _make_record


@pytest.fixture
def roster(make_member) -> list[RosterMember]:
    """Sample division roster."""
    return [
        make_member(1001, "Nathan", "Wilbur", member_id="m-1001"),
        make_member(1002, "Michael", "Johnson", member_id="m-1002"),
        make_member(1003, "Karen", "Karlson"),
        make_member(1004, "Eric", "Jonson", member_id="m-1004"),
        make_member(1005, "Michael", "Smith", member_id="m-1005"),
    ]
