from __future__ import annotations

import posixpath
from datetime import date, datetime
from decimal import Decimal
from io import BytesIO
from types import SimpleNamespace

import pytest

from src.hr_portal.hr_portal.attendance.model import RawPunchRow
from src.hr_portal.hr_portal.attendance.service import AttendanceQueryService
from src.hr_portal.hr_portal.auth.model import TokenVerifyResult
from src.hr_portal.hr_portal.businesscard.model import CardProfile
from src.hr_portal.hr_portal.businesscard.service import BusinessCardService
from src.hr_portal.hr_portal.core.enums import CardType, LeaveUnit
from src.hr_portal.hr_portal.core.exceptions import ExternalServiceError
from src.hr_portal.hr_portal.employees.model import Employee
from src.hr_portal.hr_portal.forms.business_trip_service import BusinessTripFormService
from src.hr_portal.hr_portal.forms.cancel_leave_service import CancelLeaveService
from src.hr_portal.hr_portal.forms.model import FormResult
from src.hr_portal.hr_portal.forms.overtime_service import OvertimeFormService
from src.hr_portal.hr_portal.leave.model import LeaveGrantRow
from src.hr_portal.hr_portal.leave.service import LeaveBalanceService
from src.hr_portal.hr_portal.main import create_app
from src.hr_portal.hr_portal.salary.service import SalaryVerificationService

AUTH = {"tokenid": "t-1", "cid": "C01", "uid": "0325"}
DAY = date(2025, 10, 31)
EMPLOYEE = Employee(
    "E1", "0325", "王小明", company_id="C01", email="ming@example.com", hire_date=date(2023, 10, 5)
)


class FakeVerifier:
    def verify(self, auth):
        if auth.tokenid == "t-1":
            return TokenVerifyResult(code="200", msg="ok")
        return TokenVerifyResult(code="401", msg="Token 無效")


class FakePunches:
    rows = [
        RawPunchRow("E1", "0325", DAY, CardType.CLOCK_IN, datetime(2025, 10, 31, 8, 0), datetime(2025, 10, 31, 8, 31), "1"),
        RawPunchRow("E1", "0325", DAY, CardType.CLOCK_OUT, datetime(2025, 10, 31, 17, 0), datetime(2025, 10, 31, 17, 2), ""),
    ]

    def get_for_employee_and_date(self, employee_no, work_date):
        return [r for r in self.rows if r.employee_no == employee_no and r.work_date == work_date]

    def get_for_date(self, work_date):
        return [r for r in self.rows if r.work_date == work_date]

    def get_for_employee_between(self, employee_no, start_date, end_date):
        return [r for r in self.rows if r.employee_no == employee_no and start_date <= r.work_date <= end_date]


class FakeEmployees:
    def get_by_no(self, employee_no, company_id=""):
        if employee_no == "0325" and company_id in ("", "C01"):
            return EMPLOYEE
        return None

    def get_by_email(self, email):
        return EMPLOYEE if email == EMPLOYEE.email else None


class FakeLeaves:
    def list_grants(self, window):
        return [LeaveGrantRow("SPECIAL", "特休", LeaveUnit.DAY, Decimal("7"))]

    def list_usages(self, window):
        return []

    def min_unit_hours_by_class(self):
        return {}

    def get_leave_type(self, leave_code, company_id=""):
        return None


class FakeCodes:
    def replace_code(self, **kwargs):
        return 1

    def get_latest(self, *, cid, uid):
        return None

    def mark_used(self, code_id):
        return True


class FakeMailer:
    def __init__(self, error=None):
        self.error = error

    def send_html(self, **kwargs):
        if self.error:
            raise self.error


class FakeForms:
    def submit(self, req):
        return FormResult(form_id="PKG0001", form_number="REQ-42", status="SUCCESS")


class FakeBpm:
    def __init__(self):
        self.invoked = []
        self.cancelled = []
        self.online = True

    def invoke_process(self, **kwargs):
        self.invoked.append(kwargs)
        return {"processSerialNo": "PKG0002", "requestId": "REQ-43", "status": "SUCCESS"}

    def cancel_form(self, **kwargs):
        self.cancelled.append(kwargs)
        return {}

    def test_connection(self):
        return self.online

    def get_user_id_by_email(self, email):
        if not self.online:
            raise ExternalServiceError("BPM 連線失敗: down")
        return "77" if email == EMPLOYEE.email else None


class FakeStore:
    root = "/uploads/attachments"

    def __init__(self):
        self.uploads = []
        self.files = {f"{self.root}/0325/old_note.pdf": b"hello", f"{self.root}/0400/other.pdf": b"x"}
        self.online = True

    def owner_dir(self, sub_dir=""):
        return posixpath.join(self.root, sub_dir)

    def owns(self, remote_path, sub_dir):
        return bool(sub_dir) and posixpath.dirname(posixpath.normpath(remote_path)) == self.owner_dir(sub_dir)

    def upload_many(self, files, *, sub_dir=""):
        paths = []
        for stream, name in files:
            self.uploads.append((name, stream.read(), sub_dir))
            paths.append(f"{self.root}/{sub_dir}/{name}")
        return paths

    def list_files(self, remote_dir=None):
        return [p for p in self.files if posixpath.dirname(p) == remote_dir]

    def exists(self, remote_path):
        return remote_path in self.files

    def download(self, remote_path):
        return self.files[remote_path]

    def delete(self, remote_path):
        del self.files[remote_path]

    def test_connection(self):
        return self.online


class FakeCardProfiles:
    def get_profile(self, employee_no, company_id):
        if employee_no != "0325":
            return None
        return CardProfile(
            employee_no="0325",
            company_id=company_id,
            name="王小明",
            job_title="工程師",
            office_tel="123",
            company_name="磐碁",
            company_phone="02-2345-6789",
        )


def _container(mailer=None):
    employees = FakeEmployees()
    today = lambda: date(2025, 11, 17)
    bpm = FakeBpm()
    store = FakeStore()
    return SimpleNamespace(
        conn=None,
        token_verifier=FakeVerifier(),
        bpm_client=bpm,
        attachment_store=store,
        mailer=mailer or FakeMailer(),
        attendance_service=AttendanceQueryService(FakePunches()),
        leave_service=LeaveBalanceService(FakeLeaves(), employees, day_work_hours=8, today=today),
        salary_verification_service=SalaryVerificationService(
            FakeCodes(), employees, mailer or FakeMailer(), test_code="0000"
        ),
        leave_form_service=FakeForms(),
        overtime_form_service=OvertimeFormService(employees, bpm),
        cancel_leave_service=CancelLeaveService(employees, bpm),
        business_trip_form_service=BusinessTripFormService(employees, bpm, store),
        business_card_service=BusinessCardService(FakeCardProfiles(), base_url="https://cards.example.test"),
    )


@pytest.fixture
def container(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return _container()


@pytest.fixture
def client(container):
    return create_app(container=container).test_client()


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


def test_attendance_query_returns_record(client):
    resp = client.get("/api/AttendanceQuery?employeeNo=0325&date=2025-10-31")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["clockInStatus"] == "遲到"
    assert body["clockOutTime"] == "2025/10/31 17:02:00"


def test_attendance_query_validation_and_not_found(client):
    assert client.get("/api/AttendanceQuery?employeeNo=0325&date=2025/10/31").status_code == 400
    assert client.get("/api/AttendanceQuery?date=2025-10-31").status_code == 400

    resp = client.get("/api/AttendanceQuery?employeeNo=0325&date=2025-10-30")
    assert resp.status_code == 404
    assert resp.get_json()["message"] == "查無出勤記錄"


def test_attendance_query_all(client):
    body = client.get("/api/AttendanceQuery/all?date=2025-10-31").get_json()

    assert body["totalCount"] == 1
    assert body["records"][0]["employeeNo"] == "0325"


def test_work_query_envelope(client):
    body = client.post("/app/WorkQuery", json={**AUTH, "wyearmonth": "2025-10"}).get_json()

    assert body["code"] == "200"
    assert body["data"]["rmonth"] == "10"
    assert body["data"]["records"][0]["onduty"] == "F"


def test_work_query_bad_month(client):
    body = client.post("/app/WorkQuery", json={**AUTH, "wyearmonth": "10/2025"}).get_json()

    assert body["code"] == "400"


def test_protected_route_rejects_bad_token(client):
    resp = client.post("/app/WorkQuery", json={**AUTH, "tokenid": "expired", "wyearmonth": "2025-10"})

    assert resp.status_code == 401
    assert resp.get_json()["msg"] == "Token 無效"


def test_leave_balance_envelope(client):
    body = client.post("/app/LeaveBalance", json={**AUTH, "ryear": "2025"}).get_json()

    assert body == {
        "code": "200",
        "msg": "查詢成功",
        "data": [{"leavetype": "特休", "annualquota": 7.0, "deducteddays": 0.0, "remainingdays": 7.0}],
    }


def test_leave_balance_requires_year(client):
    body = client.post("/app/LeaveBalance", json=AUTH).get_json()

    assert body["code"] == "500"
    assert body["data"] == []


def test_leave_remain(client):
    body = client.get("/api/LeaveRemain?employeeNo=0325").get_json()

    assert body["anniversaryStart"] == "2025/10/05"
    assert body["leaveTypes"][0]["displayText"] == "7 天"


def test_leave_remain_year_out_of_range(client):
    assert client.get("/api/LeaveRemain?employeeNo=0325&year=2030").status_code == 400
    assert client.get("/api/LeaveRemain?employeeNo=9999").status_code == 404


def test_leave_remain_two_years(client):
    body = client.get("/api/LeaveRemain/two-years?employeeNo=0325").get_json()

    assert [r["year"] for r in body] == [2025, 2024]


def test_anniversary_period(client):
    body = client.get("/api/LeaveRemain/anniversary-period?employeeNo=0325&year=2024").get_json()

    assert body["description"] == "周年制區間：2024/10/05 ~ 2025/10/04"


def test_send_code(client):
    assert client.post("/app/sendcode", json=AUTH).get_json() == {"code": "200", "msg": "請求成功"}


def test_send_code_mail_failure(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    client = create_app(container=_container(FakeMailer(ExternalServiceError("smtp down")))).test_client()

    body = client.post("/app/sendcode", json=AUTH).get_json()

    assert body == {"code": "203", "msg": "請求失敗，Email 發送失敗"}


def test_send_code_check(client):
    ok = client.post("/app/sendcodecheck", json={**AUTH, "verificationcode": "0000"}).get_json()
    missing = client.post("/app/sendcodecheck", json={**AUTH, "verificationcode": "1234"}).get_json()

    assert ok["code"] == "200"
    assert missing["code"] == "203"


def test_leave_form_submit(client):
    body = client.post("/app/efleaveform", json={**AUTH, "leavetype": "A01"}).get_json()

    assert body == {"code": "200", "msg": "請求成功", "formid": "PKG0001", "formnumber": "REQ-42"}


def test_attachment_upload(client, container):
    resp = client.post(
        "/app/attachment/upload",
        data={**AUTH, "files": [(BytesIO(b"%PDF"), "note.pdf"), (BytesIO(b"img"), "photo.jpg")]},
        content_type="multipart/form-data",
    )

    body = resp.get_json()
    assert body["code"] == "200"
    assert [d["filename"] for d in body["data"]] == ["note.pdf", "photo.jpg"]
    assert container.attachment_store.uploads[0] == ("note.pdf", b"%PDF", "0325")


def test_attachment_upload_without_files(client):
    body = client.post("/app/attachment/upload", data=AUTH, content_type="multipart/form-data").get_json()

    assert body["code"] == "203"


OVERTIME = {
    "estartdate": "2025-11-20",
    "estarttime": "18:30",
    "eenddate": "2025-11-20",
    "eendtime": "21:00",
    "ereason": "系統上線",
    "eprocess": "C",
}


def test_overtime_apply(client, container):
    body = client.post("/app/efotapply", json={**AUTH, **OVERTIME}).get_json()

    assert body == {"code": "200", "msg": "請求成功", "formid": "PKG0002"}
    assert container.bpm_client.invoked[0]["form_code"] == "PI_OVERTIME_001"


def test_overtime_apply_rejects_unknown_process(client, container):
    body = client.post("/app/efotapply", json={**AUTH, **OVERTIME, "eprocess": "X"}).get_json()

    assert body == {"code": "203", "msg": "請求失敗，主要條件不符合"}
    assert container.bpm_client.invoked == []


def test_leave_cancel(client, container):
    body = client.post("/app/efleavecancel", json={**AUTH, "formid": "PKG0001", "reasons": "行程取消"}).get_json()

    assert body == {"code": "200", "msg": "請求成功"}
    assert container.bpm_client.cancelled[0]["form_id"] == "PKG0001"


def test_leave_cancel_requires_reason(client):
    body = client.post("/app/efleavecancel", json={**AUTH, "formid": "PKG0001"}).get_json()

    assert body == {"code": "203", "msg": "請求失敗，reasons 為必填"}


TRIP = {
    "Email": "ming@example.com",
    "Date": "2025-11-17",
    "Reason": "客戶拜訪",
    "StartDate": "2025-11-20",
    "EndDate": "2025-11-21",
    "Location": "台中",
    "NumberOfDays": "2",
    "MainTasksOfTrip": "產品展示",
    "EstimatedCosts": "3000",
}


def test_business_trip_form_with_attachment(client, container):
    resp = client.post(
        "/api/BusinessTripForm",
        data={**TRIP, "Attachments": [(BytesIO(b"%PDF"), "ticket.pdf")]},
        content_type="multipart/form-data",
    )

    assert resp.status_code == 200
    assert resp.get_json() == {
        "success": True,
        "message": "出差表單申請成功",
        "formId": "PKG0002",
        "formNumber": "REQ-43",
    }
    assert container.attachment_store.uploads == [("ticket.pdf", b"%PDF", "0325")]
    assert container.bpm_client.invoked[0]["file_path"] == "/uploads/attachments/0325/ticket.pdf"


def test_business_trip_form_validation(client, container):
    resp = client.post(
        "/api/BusinessTripForm", data={**TRIP, "Location": ""}, content_type="multipart/form-data"
    )

    assert resp.status_code == 400
    assert resp.get_json()["errorCode"] == "VALIDATION_FAILED"
    assert container.bpm_client.invoked == []


def test_attachment_list_shows_only_own_folder(client):
    body = client.post("/app/attachment/list", json=AUTH).get_json()

    assert body["data"] == [{"filename": "old_note.pdf", "path": "/uploads/attachments/0325/old_note.pdf"}]


def test_attachment_download(client):
    resp = client.post("/app/attachment/download", json={**AUTH, "path": "/uploads/attachments/0325/old_note.pdf"})

    assert resp.status_code == 200
    assert resp.data == b"hello"
    assert "old_note.pdf" in resp.headers["Content-Disposition"]


def test_attachment_download_outside_own_folder_is_forbidden(client):
    other = client.post("/app/attachment/download", json={**AUTH, "path": "/uploads/attachments/0400/other.pdf"})
    escape = client.post(
        "/app/attachment/download", json={**AUTH, "path": "/uploads/attachments/0325/../0400/other.pdf"}
    )
    missing = client.post("/app/attachment/download", json={**AUTH, "path": "/uploads/attachments/0325/gone.pdf"})

    assert other.status_code == 403
    assert escape.status_code == 403
    assert missing.status_code == 404


def test_attachment_delete(client, container):
    path = "/uploads/attachments/0325/old_note.pdf"

    body = client.post("/app/attachment/delete", json={**AUTH, "path": path}).get_json()

    assert body == {"code": "200", "msg": "請求成功"}
    assert path not in container.attachment_store.files
    denied = client.post("/app/attachment/delete", json={**AUTH, "path": "/uploads/attachments/0400/other.pdf"})
    assert denied.status_code == 403
    assert "/uploads/attachments/0400/other.pdf" in container.attachment_store.files


def test_business_card(client):
    body = client.post("/app/businesscard", json=AUTH).get_json()

    assert body["code"] == "200"
    assert body["msg"] == "成功"
    assert body["data"]["uname"] == "王小明"
    assert body["data"]["utel"] == "02-2345-6789 # 123"
    assert body["data"]["uqrcode"] == "https://cards.example.test/C01|0325"


def test_business_card_unknown_employee(client):
    body = client.post("/app/businesscard", json={**AUTH, "uid": "9999"}).get_json()

    assert body == {"code": "203", "msg": "請求失敗，主要條件不符合"}


def test_diagnostic_connection_checks(client, container):
    ok = client.get("/api/Diagnostic/bpm/test-connection")
    container.attachment_store.online = False
    down = client.get("/api/Diagnostic/ftp/test-connection")

    assert ok.status_code == 200
    assert ok.get_json()["message"] == "BPM 連線成功"
    assert down.status_code == 400
    assert down.get_json()["message"] == "FTP 連線失敗"


def test_diagnostic_bpm_user_lookup(client, container):
    found = client.get("/api/Diagnostic/bpm/user?email=ming@example.com")
    unknown = client.get("/api/Diagnostic/bpm/user?email=nobody@example.com")
    missing = client.get("/api/Diagnostic/bpm/user")
    container.bpm_client.online = False
    down = client.get("/api/Diagnostic/bpm/user?email=ming@example.com")

    assert found.get_json() == {"success": True, "email": "ming@example.com", "userId": "77"}
    assert unknown.status_code == 404
    assert missing.status_code == 400
    assert down.status_code == 502


def test_diagnostics_are_not_mounted_in_production(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.delenv("DIAGNOSTICS_ENABLED", raising=False)
    client = create_app(container=_container()).test_client()

    assert client.get("/api/Diagnostic/bpm/test-connection").status_code == 404
    assert client.get("/health").status_code == 200
