"""Report column layout and display labels.

Defined once and shared by the on-screen table and the exported file so the
two views cannot drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from ..attendance.model import AttendanceRecord
from ..core.enums import Audience, CheckType, StatusCode
from ..users.model import Employee

TYPE_LABELS = {
    CheckType.MASUK: "Masuk",
    CheckType.KELUAR: "Keluar",
    CheckType.ABSENT: "Tidak Hadir",
}

STATUS_LABELS = {
    StatusCode.BERHASIL: "Berhasil",
    StatusCode.WAJAH_TIDAK_VALID: "Wajah Tidak Valid",
    StatusCode.LOKASI_TIDAK_VALID: "Lokasi Tidak Valid",
    StatusCode.TIDAK_HADIR: "Tidak Hadir",
}

UNKNOWN_EMPLOYEE = "Unknown"
MISSING = "-"


def yes_no(value: bool) -> str:
    return "Ya" if value else "Tidak"


def format_hours(value: float) -> str:
    return f"{value:g}"


def format_coordinate(value: Optional[float]) -> str:
    return "" if value is None else repr(float(value))


Getter = Callable[[AttendanceRecord, Optional[Employee]], str]


@dataclass(frozen=True)
class ReportColumn:
    header: str
    value: Getter
    admin_only: bool = False


COLUMNS: Tuple[ReportColumn, ...] = (
    ReportColumn("Tanggal", lambda r, e: r.timestamp.strftime("%d/%m/%Y")),
    ReportColumn("Waktu", lambda r, e: r.timestamp.strftime("%H.%M.%S")),
    ReportColumn("Karyawan", lambda r, e: e.name if e else UNKNOWN_EMPLOYEE, admin_only=True),
    ReportColumn("ID Karyawan", lambda r, e: (e.employee_number if e else None) or MISSING, admin_only=True),
    ReportColumn("Departemen", lambda r, e: (e.department if e else None) or MISSING, admin_only=True),
    ReportColumn("Jenis", lambda r, e: TYPE_LABELS[r.type]),
    ReportColumn("Status", lambda r, e: STATUS_LABELS[r.status]),
    ReportColumn("Terlambat", lambda r, e: yes_no(r.is_late)),
    ReportColumn("Menit Terlambat", lambda r, e: str(r.late_minutes)),
    ReportColumn("Jam Kerja", lambda r, e: format_hours(r.work_hours)),
    ReportColumn("Lembur", lambda r, e: format_hours(r.overtime_hours)),
    ReportColumn("Latitude", lambda r, e: format_coordinate(r.latitude)),
    ReportColumn("Longitude", lambda r, e: format_coordinate(r.longitude)),
)


def columns_for(audience: Audience) -> Tuple[ReportColumn, ...]:
    if audience == Audience.ALL:
        return COLUMNS
    if audience == Audience.SELF:
        return tuple(c for c in COLUMNS if not c.admin_only)
    raise ValueError(f"unsupported audience: {audience!r}")
