import csv
import io
from datetime import date, datetime

import pytest

from attendance_compliance.attendance.model import AttendanceRecord, RecordCriteria
from attendance_compliance.core.enums import Audience, CheckType, Role, SessionFlag, StatusCode
from attendance_compliance.core.exceptions import InvalidInput
from attendance_compliance.reports.aggregator import ReportAggregator, audience_for
from attendance_compliance.users.model import Employee

SELF_HEADERS = (
    "Tanggal", "Waktu", "Jenis", "Status", "Terlambat", "Menit Terlambat",
    "Jam Kerja", "Lembur", "Latitude", "Longitude",
)
ALL_HEADERS = SELF_HEADERS[:2] + ("Karyawan", "ID Karyawan", "Departemen") + SELF_HEADERS[2:]


def _absent(user_id="u1", day=date(2025, 1, 15)):
    return AttendanceRecord(user_id, datetime.combine(day, datetime.min.time()).replace(hour=17), CheckType.ABSENT, StatusCode.TIDAK_HADIR)


@pytest.fixture
def records():
    return [
        AttendanceRecord("u1", datetime(2025, 1, 14, 8, 15), CheckType.MASUK, StatusCode.BERHASIL, is_late=True, late_minutes=15, latitude=-6.2, longitude=106.816666),
        AttendanceRecord("u1", datetime(2025, 1, 14, 17, 30), CheckType.KELUAR, StatusCode.BERHASIL, work_hours=9.25, overtime_hours=1.25, latitude=-6.2, longitude=106.816666),
        AttendanceRecord("u2", datetime(2025, 1, 14, 8, 2), CheckType.MASUK, StatusCode.LOKASI_TIDAK_VALID, latitude=-6.3, longitude=106.9),
        AttendanceRecord("u2", datetime(2025, 1, 14, 8, 3), CheckType.MASUK, StatusCode.BERHASIL, latitude=-6.2, longitude=106.816666),
        AttendanceRecord("u2", datetime(2025, 1, 14, 16, 0), CheckType.KELUAR, StatusCode.BERHASIL, session_flag=SessionFlag.ORPHAN_CLOSE_OUT),
        _absent("u1", date(2025, 1, 15)),
        _absent("u1", date(2025, 1, 15)),
        AttendanceRecord("u1", datetime(2025, 1, 16, 23, 59, 59, 999000), CheckType.MASUK, StatusCode.WAJAH_TIDAK_VALID),
    ]


def test_audience_by_role():
    assert audience_for(Role.ADMIN) == Audience.ALL
    assert audience_for(Role.KEPALA) == Audience.ALL
    assert audience_for(Role.KARYAWAN) == Audience.SELF


def test_filter_date_bounds_are_inclusive(records):
    criteria = RecordCriteria(start_date=date(2025, 1, 16), end_date=date(2025, 1, 16))
    out = ReportAggregator().filter(records, criteria)
    assert [r.status for r in out] == [StatusCode.WAJAH_TIDAK_VALID]


def test_empty_criteria_keeps_everything(records):
    assert ReportAggregator().filter(records, RecordCriteria()) == records


def test_blank_query_values_mean_no_filter(records):
    criteria = RecordCriteria.from_query({"employee_id": "all", "start_date": "", "end_date": "", "type": "", "status": "bogus"})
    assert criteria == RecordCriteria()
    assert ReportAggregator().filter(records, criteria) == records


def test_query_accepts_camel_case_keys():
    criteria = RecordCriteria.from_query({"employeeId": "u2", "startDate": "2025-01-14", "type": "masuk", "status": "berhasil"})
    assert criteria.employee_id == "u2"
    assert criteria.start_date == date(2025, 1, 14)
    assert criteria.type == CheckType.MASUK
    assert criteria.status == StatusCode.BERHASIL


def test_malformed_query_date_is_invalid():
    with pytest.raises(InvalidInput):
        RecordCriteria.from_query({"start_date": "14/01/2025"})


def test_filter_composes_with_intersection(records):
    agg = ReportAggregator()
    by_user = RecordCriteria(employee_id="u2")
    by_type = RecordCriteria(type=CheckType.MASUK)
    both = RecordCriteria(employee_id="u2", type=CheckType.MASUK)

    assert agg.filter(agg.filter(records, by_user), by_type) == agg.filter(records, both)
    assert agg.filter(agg.filter(records, by_type), by_user) == agg.filter(records, both)


def test_identical_absences_collapse_to_one(records):
    out = ReportAggregator().dedupe_absences(records)
    assert sum(1 for r in out if r.status == StatusCode.TIDAK_HADIR) == 1
    assert len(out) == len(records) - 1


def test_dedupe_is_idempotent(records):
    agg = ReportAggregator()
    once = agg.dedupe_absences(records)
    assert agg.dedupe_absences(once) == once


def test_user_initiated_duplicates_are_kept():
    rejected = AttendanceRecord("u1", datetime(2025, 1, 14, 8, 0), CheckType.MASUK, StatusCode.WAJAH_TIDAK_VALID)
    assert ReportAggregator().dedupe_absences([rejected, rejected]) == [rejected, rejected]


def test_absences_on_different_days_are_kept():
    out = ReportAggregator().dedupe_absences([_absent(day=date(2025, 1, 14)), _absent(day=date(2025, 1, 15))])
    assert len(out) == 2


def test_export_self_omits_employee_columns(records):
    table = ReportAggregator().export(records[:1], Audience.SELF)

    assert table.headers == SELF_HEADERS
    assert table.rows == [
        ("14/01/2025", "08.15.00", "Masuk", "Berhasil", "Ya", "15", "0", "0", "-6.2", "106.816666"),
    ]


def test_export_all_includes_directory_fields(records):
    directory = {"u1": Employee("u1", "Budi Santoso", Role.KARYAWAN, employee_number="EMP-001", department="Finance")}
    table = ReportAggregator().export(records[1:3], Audience.ALL, directory)

    assert table.headers == ALL_HEADERS
    assert table.rows[0][2:5] == ("Budi Santoso", "EMP-001", "Finance")
    assert table.rows[0][-4:-2] == ("9.25", "1.25")
    assert table.rows[1][2:5] == ("Unknown", "-", "-")
    assert table.rows[1][6] == "Lokasi Tidak Valid"


def test_export_of_empty_set_has_headers_only():
    table = ReportAggregator().export([], Audience.SELF)
    assert table.headers == SELF_HEADERS
    assert table.rows == []


def test_csv_has_header_and_quotes_commas():
    agg = ReportAggregator()
    directory = {"u1": Employee("u1", "Santoso, Budi", Role.KARYAWAN)}
    table = agg.export([_absent()], Audience.ALL, directory)

    content = agg.to_csv(table)
    rows = list(csv.reader(io.StringIO(content)))

    assert rows[0] == list(ALL_HEADERS)
    assert rows[1][2] == "Santoso, Budi"
    assert rows[1][5:8] == ["Tidak Hadir", "Tidak Hadir", "Tidak"]
    assert '"Santoso, Budi"' in content


def test_export_filename():
    assert ReportAggregator().export_filename(date(2025, 1, 31)) == "attendance_report_2025-01-31.csv"


def test_summary_counts_per_user(records):
    agg = ReportAggregator()
    summary = {s.user_id: s for s in agg.summarize(agg.dedupe_absences(records))}

    assert summary["u1"].late == 1
    assert summary["u1"].absent == 1
    assert summary["u1"].rejected == 1
    assert summary["u1"].work_hours == 9.25
    assert summary["u1"].overtime_hours == 1.25
    assert summary["u2"].on_time == 1
    assert summary["u2"].rejected == 1
    assert summary["u2"].session_warnings == 1


def test_session_warnings(records):
    warnings = ReportAggregator().session_warnings(records)
    assert [r.session_flag for r in warnings] == [SessionFlag.ORPHAN_CLOSE_OUT]


def test_absences_of_different_users_are_kept():
    agg = ReportAggregator()
    out = agg.dedupe_absences([_absent("u1"), _absent("u2"), _absent("u1"), _absent("boss")])

    assert [r.user_id for r in out] == ["u1", "u2", "boss"]
    assert {s.user_id: s.absent for s in agg.summarize(out)} == {"u1": 1, "u2": 1, "boss": 1}
