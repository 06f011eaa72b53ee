from __future__ import annotations

from datetime import datetime
from types import SimpleNamespace

import pytest

from attendance_compliance.attendance import controller as attendance_controller
from attendance_compliance.locations.service import LocationService
from attendance_compliance.main import create_app
from attendance_compliance.reports.service import AttendanceReportService

FACE = "aGVsbG8="


class FixedRecognizer:
    def __init__(self, confidence):
        self.confidence = confidence
        self.seen = []

    def match_confidence(self, user_id, captured):
        self.seen.append((user_id, captured))
        return self.confidence


@pytest.fixture
def container(attendance_repo, employees, attendance_service):
    return SimpleNamespace(
        attendance_service=attendance_service,
        location_service=LocationService(attendance_repo),
        report_service=AttendanceReportService(attendance_repo, employees),
        face_recognizer=FixedRecognizer(0.9),
    )


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(attendance_controller, "now_local", lambda: datetime(2025, 1, 15, 8, 20))
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, user_id, role):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


def test_requires_login(client):
    assert client.post("/api/attendance", json={"type": "masuk"}).status_code == 401


def test_submit_masuk(client, inside):
    login(client, "u1", "karyawan")

    resp = client.post(
        "/api/attendance",
        json={"type": "masuk", "latitude": inside.latitude, "longitude": inside.longitude, "face_image": FACE},
    )

    assert resp.status_code == 201
    record = resp.get_json()["record"]
    assert record["status"] == "berhasil"
    assert record["is_late"] is True
    assert record["late_minutes"] == 20
    assert record["timestamp"] == "2025-01-15T08:20:00.000"


def test_submit_uses_face_recognizer_for_images(client, container, inside):
    container.face_recognizer = FixedRecognizer(0.3)
    login(client, "u1", "karyawan")

    resp = client.post(
        "/api/attendance",
        json={"type": "masuk", "latitude": inside.latitude, "longitude": inside.longitude, "face_image": "aGVsbG8="},
    )

    assert resp.get_json()["record"]["status"] == "wajah_tidak_valid"
    assert container.face_recognizer.seen == [("u1", b"hello")]


def test_submit_rejects_unknown_type(client):
    login(client, "u1", "karyawan")
    assert client.post("/api/attendance", json={"type": "absent"}).status_code == 400


def test_submit_without_coordinates_is_bad_request(client, attendance_repo):
    login(client, "u1", "karyawan")
    resp = client.post("/api/attendance", json={"type": "masuk", "face_image": FACE})
    assert resp.status_code == 400
    assert attendance_repo.records == []


def test_submit_without_office_is_unavailable(client, attendance_repo, inside):
    attendance_repo.office = None
    login(client, "u1", "karyawan")

    resp = client.post(
        "/api/attendance",
        json={"type": "masuk", "latitude": inside.latitude, "longitude": inside.longitude, "face_image": FACE},
    )
    assert resp.status_code == 503


def test_next_type(client):
    login(client, "u1", "karyawan")
    resp = client.get("/api/attendance/next-type?date=2025-01-15")
    assert resp.get_json() == {"date": "2025-01-15", "next_type": "masuk"}


def test_office_location_update_is_admin_only(client):
    login(client, "u1", "karyawan")
    resp = client.put("/api/admin/office-location", json={"latitude": 0, "longitude": 0, "address": "HQ", "radius": 100})
    assert resp.status_code == 403


def test_admin_updates_office_location(client, attendance_repo):
    login(client, "root", "admin")

    resp = client.put(
        "/api/admin/office-location",
        json={"latitude": -6.21, "longitude": 106.82, "address": "New HQ", "radius": 200},
    )

    assert resp.status_code == 200
    assert attendance_repo.office.radius_meters == 200
    assert client.get("/api/office-location").get_json()["address"] == "New HQ"


def test_admin_office_location_rejects_radius_out_of_bounds(client, attendance_repo, office):
    login(client, "root", "admin")
    resp = client.put("/api/admin/office-location", json={"latitude": 0, "longitude": 0, "address": "HQ", "radius": 20})
    assert resp.status_code == 400
    assert attendance_repo.office == office


def test_admin_sweep(client):
    login(client, "root", "admin")
    resp = client.post("/api/admin/absences/sweep", json={"date": "2025-01-14"})

    body = resp.get_json()
    assert resp.status_code == 200
    assert sorted(r["user_id"] for r in body["marked"]) == ["boss", "u1", "u2"]


def test_report_for_karyawan_is_scoped(client, inside):
    login(client, "u2", "karyawan")
    client.post(
        "/api/attendance",
        json={"type": "masuk", "latitude": inside.latitude, "longitude": inside.longitude, "face_image": FACE},
    )
    login(client, "u1", "karyawan")

    body = client.get("/api/reports/attendance?employee_id=u2").get_json()

    assert body["records"] == []
    assert "Karyawan" not in body["headers"]


def test_report_csv_download(client, inside):
    login(client, "u1", "karyawan")
    client.post(
        "/api/attendance",
        json={"type": "masuk", "latitude": inside.latitude, "longitude": inside.longitude, "face_image": FACE},
    )
    login(client, "root", "admin")

    resp = client.get("/api/reports/attendance.csv?start_date=2025-01-15&end_date=2025-01-15")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "attendance_report_" in resp.headers["Content-Disposition"]
    text = resp.data.decode("utf-8-sig")
    assert text.splitlines()[0].startswith("Tanggal,Waktu,Karyawan,ID Karyawan,Departemen")
    assert "Budi Santoso" in text


def test_report_rejects_malformed_date(client):
    login(client, "u1", "karyawan")
    assert client.get("/api/reports/attendance?start_date=yesterday").status_code == 400


def test_summary(client, inside):
    login(client, "u1", "karyawan")
    client.post(
        "/api/attendance",
        json={"type": "masuk", "latitude": inside.latitude, "longitude": inside.longitude, "face_image": FACE},
    )

    summary = client.get("/api/reports/summary").get_json()["summary"]

    assert summary[0]["user_id"] == "u1"
    assert summary[0]["late"] == 1


def test_client_face_confidence_is_ignored_without_recognizer(client, container, attendance_repo, inside):
    container.face_recognizer = None
    login(client, "u1", "karyawan")

    resp = client.post(
        "/api/attendance",
        json={"type": "masuk", "latitude": inside.latitude, "longitude": inside.longitude, "face_confidence": 1.0},
    )

    assert resp.status_code == 201
    assert resp.get_json()["record"]["status"] == "wajah_tidak_valid"
    assert attendance_repo.records[-1].status.value == "wajah_tidak_valid"


def test_client_face_confidence_does_not_override_recognizer(client, container, inside):
    container.face_recognizer = FixedRecognizer(0.1)
    login(client, "u1", "karyawan")

    resp = client.post(
        "/api/attendance",
        json={
            "type": "masuk",
            "latitude": inside.latitude,
            "longitude": inside.longitude,
            "face_image": FACE,
            "face_confidence": 1.0,
        },
    )

    assert resp.get_json()["record"]["status"] == "wajah_tidak_valid"


def test_submission_just_before_midnight_stays_on_the_same_day(client, monkeypatch, inside):
    monkeypatch.setattr(attendance_controller, "now_local", lambda: datetime(2025, 1, 15, 23, 59, 59, 999600))
    login(client, "u1", "karyawan")

    resp = client.post(
        "/api/attendance",
        json={"type": "masuk", "latitude": inside.latitude, "longitude": inside.longitude, "face_image": FACE},
    )

    assert resp.status_code == 201
    assert resp.get_json()["record"]["timestamp"] == "2025-01-15T23:59:59.999"
    next_type = client.get("/api/attendance/next-type?date=2025-01-15").get_json()["next_type"]
    assert next_type == "keluar"
