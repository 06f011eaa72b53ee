"""Filtering, absence deduplication, export and summaries over record snapshots.

Everything here is a pure function of its arguments, so reports can run
next to live classification without locking.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..attendance.model import AttendanceRecord, RecordCriteria
from ..core.constants import EXPORT_FILENAME_PREFIX
from ..core.enums import Audience, CheckType, Role, StatusCode
from ..users.model import Employee
from .columns import columns_for


def audience_for(role: Role) -> Audience:
    if role in (Role.ADMIN, Role.KEPALA):
        return Audience.ALL
    if role == Role.KARYAWAN:
        return Audience.SELF
    raise ValueError(f"unsupported role: {role!r}")


@dataclass(frozen=True)
class ReportTable:
    headers: Tuple[str, ...]
    rows: List[Tuple[str, ...]]


@dataclass
class EmployeeSummary:
    user_id: str
    on_time: int = 0
    late: int = 0
    rejected: int = 0
    absent: int = 0
    work_hours: float = 0.0
    overtime_hours: float = 0.0
    session_warnings: int = 0


class ReportAggregator:
    def filter(self, records: Iterable[AttendanceRecord], criteria: RecordCriteria) -> List[AttendanceRecord]:
        return [r for r in records if criteria.matches(r)]

    def dedupe_absences(self, records: Iterable[AttendanceRecord]) -> List[AttendanceRecord]:
        """Collapse repeated tidak_hadir markers of the same user; first occurrence wins.

        User-initiated records are never collapsed, even when identical.
        """
        seen = set()
        out: List[AttendanceRecord] = []
        for r in records:
            if r.status == StatusCode.TIDAK_HADIR:
                if r.absence_key in seen:
                    continue
                seen.add(r.absence_key)
            out.append(r)
        return out

    def build(self, records: Iterable[AttendanceRecord], criteria: RecordCriteria) -> List[AttendanceRecord]:
        # Filter first: a filtered-out duplicate must not suppress a visible one.
        return self.dedupe_absences(self.filter(records, criteria))

    def export(
        self,
        records: Sequence[AttendanceRecord],
        audience: Audience,
        directory: Optional[Mapping[str, Employee]] = None,
    ) -> ReportTable:
        columns = columns_for(audience)
        directory = directory or {}
        rows = [tuple(c.value(r, directory.get(r.user_id)) for c in columns) for r in records]
        return ReportTable(headers=tuple(c.header for c in columns), rows=rows)

    def to_csv(self, table: ReportTable, *, delimiter: str = ",") -> str:
        out = io.StringIO()
        writer = csv.writer(out, delimiter=delimiter, lineterminator="\n")
        writer.writerow(table.headers)
        writer.writerows(table.rows)
        return out.getvalue()

    def export_filename(self, on_date: date) -> str:
        return f"{EXPORT_FILENAME_PREFIX}_{on_date.isoformat()}.csv"

    def summarize(self, records: Iterable[AttendanceRecord]) -> List[EmployeeSummary]:
        """Per-user counts and hour totals, users in first-seen order."""
        by_user: Dict[str, EmployeeSummary] = {}
        for r in records:
            s = by_user.setdefault(r.user_id, EmployeeSummary(user_id=r.user_id))
            if r.status == StatusCode.TIDAK_HADIR:
                s.absent += 1
            elif r.status != StatusCode.BERHASIL:
                s.rejected += 1
            elif r.type == CheckType.MASUK:
                if r.is_late:
                    s.late += 1
                else:
                    s.on_time += 1
            s.work_hours = round(s.work_hours + r.work_hours, 2)
            s.overtime_hours = round(s.overtime_hours + r.overtime_hours, 2)
            if r.session_flag is not None:
                s.session_warnings += 1
        return list(by_user.values())

    def session_warnings(self, records: Iterable[AttendanceRecord]) -> List[AttendanceRecord]:
        """keluar records closed without a valid session (orphan or inconsistent)."""
        return [r for r in records if r.session_flag is not None]
