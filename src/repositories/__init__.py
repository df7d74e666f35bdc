"""Repository layer for data persistence.

Provides repository classes over the roster and leave-request tables.
Repositories encapsulate data access logic and implement the store
protocols the import pipeline depends on.
"""

from src.repositories.leave_request_repo import LeaveRequestRepository
from src.repositories.roster_repo import RosterRepository

__all__ = [
    "LeaveRequestRepository",
    "RosterRepository",
]
