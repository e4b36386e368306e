from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest

from src.hr_portal.hr_portal.core.exceptions import ValidationError
from src.hr_portal.hr_portal.employees.model import Employee
from src.hr_portal.hr_portal.forms.model import OvertimeApplyRequest
from src.hr_portal.hr_portal.forms.overtime_service import OvertimeFormService

EMPLOYEE = Employee(employee_id="E1", employee_no="0325", name="王小明", company_id="C01", department_name="資訊部")


class FakeEmployees:
    def __init__(self):
        self.lookups = []

    def get_by_no(self, employee_no, company_id=""):
        self.lookups.append((employee_no, company_id))
        return EMPLOYEE if employee_no == "0325" else None


class FakeBpm:
    def __init__(self):
        self.calls = []

    def invoke_process(self, **kwargs):
        self.calls.append(kwargs)
        return {"processSerialNo": "OT0007", "requestId": "REQ-7", "status": "SUCCESS"}


REQ = OvertimeApplyRequest(
    tokenid="t",
    cid="C01",
    uid="0325",
    estartdate="2025-11-20",
    estarttime="18:30",
    eenddate="2025-11-20",
    eendtime="21:00",
    ereason="系統上線",
    eprocess="C",
)


@pytest.fixture
def bpm():
    return FakeBpm()


@pytest.fixture
def employees():
    return FakeEmployees()


@pytest.fixture
def service(employees, bpm):
    return OvertimeFormService(employees, bpm, environment="TEST", now=lambda: datetime(2025, 11, 17, 9, 30))


def test_apply_sends_planned_overtime_to_bpm(service, bpm, employees):
    result = service.apply(REQ)

    assert (result.form_id, result.form_number) == ("OT0007", "REQ-7")
    assert employees.lookups == [("0325", "C01")]
    (call,) = bpm.calls
    assert call["form_code"] == "PI_OVERTIME_001"
    assert call["process_code"] == "PI_OVERTIME_001_PROCESS"
    assert call["user_id"] == "0325"
    assert call["file_path"] is None
    assert call["subject"] == "王小明 的加班申請 - 2025/11/20 18:30 ~ 2025/11/20 21:00"
    assert call["form_data"] == {
        "applyDate": "2025/11/17",
        "startTimeF": "2025/11/20 18:30",
        "endTimeF": "2025/11/20 21:00",
        "startTime": "",
        "endTime": "",
        "detail": "系統上線",
        "processType": "0",
        "fillFormDate": "2025/11/17",
        "overtimeCode": "SLC01",
        "fillerId": "0325",
        "fillerName": "王小明",
        "fillerUnitName": "資訊部",
        "applier": "0325",
        "applierUnit": "PI",
        "cpf01": "0325",
        "companyNo": "C01",
    }


def test_overtime_pay_maps_to_process_type_one(service, bpm):
    service.apply(replace(REQ, eprocess="p"))

    assert bpm.calls[0]["form_data"]["processType"] == "1"


def test_overnight_overtime_is_allowed(service, bpm):
    service.apply(replace(REQ, estarttime="22:00", eenddate="2025-11-21", eendtime="02:00"))

    assert bpm.calls[0]["form_data"]["endTimeF"] == "2025/11/21 02:00"


def test_attachments_are_joined_into_file_path(service, bpm):
    service.apply(replace(REQ, efileurl="/uploads/0325/a.pdf|| ||/uploads/0325/b.jpg"))

    (call,) = bpm.calls
    assert call["file_path"] == "/uploads/0325/a.pdf||/uploads/0325/b.jpg"
    assert call["form_data"]["filePath"] == call["file_path"]


@pytest.mark.parametrize(
    "changes",
    [
        {"eprocess": "X"},
        {"eprocess": ""},
        {"eendtime": "18:30"},
        {"eenddate": "2025-11-19"},
        {"estarttime": "6pm"},
        {"ereason": "  "},
        {"uid": "9999"},
    ],
)
def test_bad_overtime_requests_are_rejected(service, bpm, changes):
    with pytest.raises(ValidationError):
        service.apply(replace(REQ, **changes))
    assert bpm.calls == []
