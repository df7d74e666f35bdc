"""Leave import reconciliation.

This module provides:
- ImportPreviewService: concurrent per-record matching and duplicate checks
- DuplicateChecker: same member / day / batch lookup against existing requests
- prepare_import_records: operator selection -> persistence-ready records
- Schemas for external records, preview items and insert records
"""

from src.importer.duplicate_checker import DuplicateChecker
from src.importer.preview_service import ImportPreviewService
from src.importer.protocols import LeaveRequestStore, RosterQuery
from src.importer.results import Failure, Result, Success
from src.importer.schemas import (
    ExternalLeaveRecord,
    LeaveImportRecord,
    LeaveKind,
    PreviewItem,
    TargetStatus,
)
from src.importer.selection import SelectionError, prepare_import_records

__all__ = [
    "DuplicateChecker",
    "ExternalLeaveRecord",
    "Failure",
    "ImportPreviewService",
    "LeaveImportRecord",
    "LeaveKind",
    "LeaveRequestStore",
    "PreviewItem",
    "Result",
    "RosterQuery",
    "SelectionError",
    "Success",
    "TargetStatus",
    "prepare_import_records",
]
