from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from studyhall.container import wire
from studyhall.core.enums import Role
from studyhall.core.exceptions import AlreadyCheckedInError
from studyhall.main import create_app
from studyhall.users.model import Account


class EmptyAttendance:
    def list_attendance(self, user_id, work_date=None):
        return []

    def list_attendance_for_date(self, work_date: date):
        return []


class EmptyAdmissions:
    def list_admissions(self, *, payment_status=None, user_id=None):
        return []


class Unused:
    pass


class Users:
    def __init__(self):
        self.rows = {
            "U1": Account(user_id="U1", full_name="Asha", email="asha@example.com"),
            "A1": Account(user_id="A1", full_name="Admin", email="admin@example.com", role=Role.ADMIN),
        }

    def get_account(self, user_id):
        return self.rows.get(user_id)

    def list_accounts(self, *, role=None, approval_status=None):
        return [
            a
            for a in self.rows.values()
            if (role is None or a.role == role) and (approval_status is None or a.approval_status == approval_status)
        ]

    def set_approval(self, *, user_id, status, decided_by, decided_at):
        self.rows[user_id] = replace(
            self.rows[user_id], approval_status=status, approved_by=decided_by, approved_at=decided_at
        )
        return True


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    container = wire(
        bookings_repo=Unused(),
        attendance_repo=EmptyAttendance(),
        admissions_repo=EmptyAdmissions(),
        payments_repo=Unused(),
        users_repo=Users(),
    )
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


def _sign_in(client, user_id="U1", role="student"):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


def test_check_absent_students_payload(client):
    resp = client.post("/check-absent-students", json={"date": "2025-03-10"})

    assert resp.status_code == 200
    assert resp.get_json() == {"success": True, "date": "2025-03-10", "absentCount": 0, "absentStudents": []}


def test_check_absent_students_via_get(client):
    resp = client.get("/check-absent-students?date=2025-03-10")

    assert resp.status_code == 200
    assert resp.get_json()["date"] == "2025-03-10"


def test_check_absent_students_failure_is_generic_500(client, app, monkeypatch):
    def boom(**kwargs):
        raise RuntimeError("database is down")

    monkeypatch.setattr(app.extensions["studyhall"].absence_service, "check_absent_students", boom)

    resp = client.post("/check-absent-students")

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to check absent students"}


def test_check_absent_students_bad_date_is_400(client):
    resp = client.post("/check-absent-students", json={"date": "10/03/2025"})

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Invalid date (YYYY-MM-DD)"}


def test_check_in_requires_login(client):
    resp = client.post("/api/attendance/check-in", json={"shift": "morning"})

    assert resp.status_code == 401


def test_check_in_unknown_shift_is_400(client):
    _sign_in(client)

    resp = client.post("/api/attendance/check-in", json={"shift": "dawn"})

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "INVALID_SHIFT"


def test_check_in_duplicate_is_409(client, app, monkeypatch):
    _sign_in(client)

    def already(user_id, shift, **kwargs):
        raise AlreadyCheckedInError(shift)

    monkeypatch.setattr(app.extensions["studyhall"].attendance_service, "check_in", already)

    resp = client.post("/api/attendance/check-in", json={"shift": "morning"})

    assert resp.status_code == 409
    body = resp.get_json()
    assert body["success"] is False
    assert body["code"] == "ALREADY_CHECKED_IN"


def test_fee_quote(client):
    resp = client.post("/api/fees/quote", json={"selectedShifts": ["night", "morning", "night"]})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["selectedShifts"] == ["morning", "night"]
    assert (body["shiftFee"], body["totalAmount"]) == (549, 599)


def test_admin_routes_reject_students(client):
    _sign_in(client, role="student")

    resp = client.get("/admin/api/payments/pending")

    assert resp.status_code == 403


def test_unapproved_account_cannot_book(client):
    _sign_in(client)

    resp = client.post("/api/bookings", json={"shift": "morning", "seatNumber": "S5"})

    assert resp.status_code == 403
    assert resp.get_json()["code"] == "ACCOUNT_NOT_APPROVED"


def test_admin_approves_student_account(client):
    _sign_in(client, user_id="A1", role="admin")

    pending = client.get("/admin/api/students?status=pending").get_json()["students"]
    resp = client.post("/admin/api/students/U1/approve")

    assert [s["userId"] for s in pending] == ["U1"]
    assert resp.status_code == 200
    account = resp.get_json()["account"]
    assert (account["approvalStatus"], account["approvedBy"]) == ("approved", "A1")


def test_student_sees_own_approval_status(client):
    _sign_in(client)

    resp = client.get("/api/account")

    assert resp.get_json()["account"]["approvalStatus"] == "pending"
