from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from ..attendance.model import AttendanceRecord, RecordCriteria
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.enums import Audience, Role
from ..users.repository import EmployeeDirectory
from .aggregator import EmployeeSummary, ReportAggregator, ReportTable, audience_for


@dataclass(frozen=True)
class ReportData:
    records: List[AttendanceRecord]
    table: ReportTable
    summary: List[EmployeeSummary]
    warnings: List[AttendanceRecord] = field(default_factory=list)


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str


class AttendanceReportService:
    """Reads one snapshot from the repository and shapes it for a viewer.

    Viewers whose role only sees their own data are pinned to their user id
    whatever employee filter they send.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeDirectory,
        *,
        aggregator: Optional[ReportAggregator] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._aggregator = aggregator or ReportAggregator()

    def _scope(self, viewer_id: str, viewer_role: Role, criteria: RecordCriteria) -> tuple[Audience, RecordCriteria]:
        audience = audience_for(viewer_role)
        if audience == Audience.SELF:
            criteria = criteria.with_employee(viewer_id)
        return audience, criteria

    def build_attendance_report(self, *, viewer_id: str, viewer_role: Role, criteria: RecordCriteria) -> ReportData:
        audience, criteria = self._scope(viewer_id, viewer_role, criteria)

        snapshot = self._attendance.query_records(criteria)
        records = self._aggregator.build(snapshot, criteria)

        directory = None
        if audience == Audience.ALL:
            directory = self._employees.get_many(r.user_id for r in records)

        return ReportData(
            records=records,
            table=self._aggregator.export(records, audience, directory),
            summary=self._aggregator.summarize(records),
            warnings=self._aggregator.session_warnings(records),
        )

    def export_csv(
        self,
        *,
        viewer_id: str,
        viewer_role: Role,
        criteria: RecordCriteria,
        on_date: Optional[date] = None,
    ) -> CsvExport:
        report = self.build_attendance_report(viewer_id=viewer_id, viewer_role=viewer_role, criteria=criteria)
        on_date = on_date or now_local().date()
        return CsvExport(
            filename=self._aggregator.export_filename(on_date),
            content=self._aggregator.to_csv(report.table),
        )
