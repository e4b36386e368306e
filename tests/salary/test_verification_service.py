from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta

import pytest

from src.hr_portal.hr_portal.core.enums import VerificationOutcome
from src.hr_portal.hr_portal.core.exceptions import NotFoundError, ValidationError
from src.hr_portal.hr_portal.employees.model import Employee
from src.hr_portal.hr_portal.salary.model import VerificationCode
from src.hr_portal.hr_portal.salary.service import SalaryVerificationService, random_code


class FakeCodes:
    def __init__(self):
        self.rows: dict[int, VerificationCode] = {}
        self.next_id = 1

    def replace_code(self, *, cid, uid, code, created_at, expires_at):
        self.rows = {k: v for k, v in self.rows.items() if (v.cid, v.uid) != (cid, uid)}
        code_id = self.next_id
        self.next_id += 1
        self.rows[code_id] = VerificationCode(
            cid=cid, uid=uid, code=code, created_at=created_at, expires_at=expires_at, code_id=code_id
        )
        return code_id

    def get_latest(self, *, cid, uid):
        matches = [v for v in self.rows.values() if (v.cid, v.uid) == (cid, uid)]
        return max(matches, key=lambda v: v.created_at) if matches else None

    def mark_used(self, code_id):
        self.rows[code_id] = replace(self.rows[code_id], is_used=True)
        return True


class FakeEmployees:
    def __init__(self, *employees):
        self.employees = list(employees)

    def get_by_no(self, employee_no, company_id=""):
        for e in self.employees:
            if e.employee_no == employee_no and (not company_id or e.company_id == company_id):
                return e
        return None


class FakeMailer:
    def __init__(self):
        self.sent = []

    def send_html(self, **kwargs):
        self.sent.append(kwargs)


class Clock:
    def __init__(self, value):
        self.value = value

    def __call__(self):
        return self.value


@pytest.fixture
def clock(fixed_now):
    return Clock(fixed_now)


@pytest.fixture
def codes():
    return FakeCodes()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def service(codes, mailer, clock):
    employees = FakeEmployees(
        Employee(employee_id="E1", employee_no="0325", name="王小明", company_id="C01", email="ming@example.com"),
        Employee(employee_id="E2", employee_no="0400", name="無信箱", company_id="C01"),
        Employee(employee_id="E3", employee_no="0500", name="外公司", company_id="C02", email="other@example.com"),
    )
    return SalaryVerificationService(
        codes, employees, mailer, expiry_minutes=5, test_code="0000", now=clock, code_factory=lambda: "4821"
    )


def test_send_code_stores_code_and_mails_it(service, codes, mailer, fixed_now):
    sent = service.send_code("C01", "0325")

    assert sent.code == "4821"
    assert sent.code_id == 1
    assert sent.expires_at == fixed_now + timedelta(minutes=5)
    assert codes.get_latest(cid="C01", uid="0325").code == "4821"

    (mail,) = mailer.sent
    assert mail["to_email"] == "ming@example.com"
    assert "4821" in mail["html_body"]
    assert "5 分鐘" in mail["html_body"]


def test_send_code_replaces_previous_code(service, codes):
    service.send_code("C01", "0325")
    service.send_code("C01", "0325")

    assert list(codes.rows) == [2]


def test_send_code_without_email_is_not_found(service, mailer):
    with pytest.raises(NotFoundError):
        service.send_code("C01", "0400")
    with pytest.raises(NotFoundError):
        service.send_code("C01", "9999")
    assert mailer.sent == []


def test_send_code_looks_up_employee_within_company(service, mailer):
    with pytest.raises(NotFoundError):
        service.send_code("C01", "0500")
    assert mailer.sent == []

    service.send_code("C02", "0500")

    (mail,) = mailer.sent
    assert mail["to_email"] == "other@example.com"


def test_send_code_requires_cid(service):
    with pytest.raises(ValidationError):
        service.send_code(" ", "0325")


def test_correct_code_is_valid_once(service):
    service.send_code("C01", "0325")

    assert service.verify_code("C01", "0325", "4821") == VerificationOutcome.VALID
    assert service.verify_code("C01", "0325", "4821") == VerificationOutcome.USED


def test_wrong_code_is_invalid(service):
    service.send_code("C01", "0325")

    assert service.verify_code("C01", "0325", "1111") == VerificationOutcome.INVALID


def test_code_expires(service, clock, fixed_now):
    service.send_code("C01", "0325")
    clock.value = fixed_now + timedelta(minutes=5, seconds=1)

    assert service.verify_code("C01", "0325", "4821") == VerificationOutcome.EXPIRED


def test_numeric_code_from_json_body_is_accepted(service):
    service.send_code("C01", "0325")

    assert service.verify_code("C01", "0325", 1234) == VerificationOutcome.INVALID
    assert service.verify_code("C01", "0325", 4821) == VerificationOutcome.VALID


def test_no_code_sent_is_not_found(service):
    assert service.verify_code("C01", "0325", "4821") == VerificationOutcome.NOT_FOUND


def test_test_code_always_passes(service, codes):
    assert service.verify_code("C01", "0325", "0000") == VerificationOutcome.VALID
    assert codes.rows == {}


def test_test_code_disabled_when_blank(codes, mailer, clock):
    service = SalaryVerificationService(codes, FakeEmployees(), mailer, test_code="", now=clock)

    assert service.verify_code("C01", "0325", "") == VerificationOutcome.NOT_FOUND


def test_random_code_is_four_digits():
    for _ in range(20):
        code = random_code()
        assert len(code) == 4 and code.isdigit()
