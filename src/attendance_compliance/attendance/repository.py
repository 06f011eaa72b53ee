from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import CheckType
from ..locations.repository import OfficeLocationRepository
from .model import AttendanceRecord, RecordCriteria


class AttendanceRepository(OfficeLocationRepository, Protocol):
    """Persistence contract consumed by the engine.

    insert_record must enforce at most one authoritative (berhasil) record per
    (user_id, date, type) and raise DuplicateSubmission carrying the existing
    record when a second one arrives.
    """

    def insert_record(self, record: AttendanceRecord) -> AttendanceRecord:
        raise NotImplementedError

    def query_records(self, criteria: RecordCriteria) -> Sequence[AttendanceRecord]:
        """Records matching criteria, newest first."""
        raise NotImplementedError

    def find_authoritative(self, user_id: str, day: date, check_type: CheckType) -> Optional[AttendanceRecord]:
        raise NotImplementedError
