from __future__ import annotations

import logging
import secrets
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Callable

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import VERIFICATION_CODE_DIGITS, VERIFICATION_MAIL_SUBJECT
from ..core.enums import VerificationOutcome
from ..core.exceptions import NotFoundError
from ..employees.repository import EmployeeRepository
from ..integrations.mailer import SmtpMailer
from .model import VerificationCode
from .repository import VerificationCodeRepository

logger = logging.getLogger(__name__)

_MAIL_TEMPLATE = """\
<html>
<body style='font-family: Arial, sans-serif;'>
    <h2>薪資查詢驗證碼</h2>
    <p>親愛的 {name}，您好：</p>
    <p>您的薪資查詢驗證碼為：</p>
    <h1 style='color: #0066cc; font-size: 32px; letter-spacing: 5px;'>{code}</h1>
    <p>此驗證碼將於 <strong>{minutes} 分鐘</strong>後失效，請盡快使用。</p>
    <hr style='border: none; border-top: 1px solid #ddd; margin: 20px 0;'>
    <p style='color: #666; font-size: 12px;'>
        此為系統自動發送的郵件，請勿直接回覆。<br>
        如有疑問，請聯繫人力資源部門。
    </p>
    <p style='color: #666; font-size: 12px;'>{sent_at}</p>
</body>
</html>
"""


def random_code(digits: int = VERIFICATION_CODE_DIGITS) -> str:
    return f"{secrets.randbelow(10 ** digits):0{digits}d}"


class SalaryVerificationService:
    def __init__(
        self,
        codes: VerificationCodeRepository,
        employees: EmployeeRepository,
        mailer: SmtpMailer,
        *,
        expiry_minutes: int = 5,
        test_code: str = "",
        now: Callable[[], datetime] | None = None,
        code_factory: Callable[[], str] | None = None,
    ):
        self._codes = codes
        self._employees = employees
        self._mailer = mailer
        self._expiry = timedelta(minutes=int(expiry_minutes))
        self._test_code = (test_code or "").strip()
        self._now = now or now_local
        self._code_factory = code_factory or random_code

    def send_code(self, cid: str, uid: str) -> VerificationCode:
        cid = require_non_empty(cid, "cid")
        uid = require_non_empty(uid, "uid")

        employee = self._employees.get_by_no(uid, company_id=cid)
        if not employee or not employee.email:
            raise NotFoundError("請求失敗，找不到使用者資料")

        created_at = self._now()
        code = VerificationCode(
            cid=cid,
            uid=uid,
            code=self._code_factory(),
            created_at=created_at,
            expires_at=created_at + self._expiry,
        )
        code_id = self._codes.replace_code(
            cid=cid, uid=uid, code=code.code, created_at=code.created_at, expires_at=code.expires_at
        )

        html = _MAIL_TEMPLATE.format(
            name=employee.name,
            code=code.code,
            minutes=int(self._expiry.total_seconds() // 60),
            sent_at=created_at.strftime("%Y-%m-%d %H:%M:%S"),
        )
        self._mailer.send_html(
            to_email=employee.email,
            to_name=employee.name,
            subject=VERIFICATION_MAIL_SUBJECT,
            html_body=html,
        )
        logger.info("verification code sent uid=%s cid=%s expires=%s", uid, cid, code.expires_at)
        return replace(code, code_id=code_id)

    def verify_code(self, cid: str, uid: str, code: str | int) -> VerificationOutcome:
        code = "" if code is None else str(code).strip()
        if self._test_code and code == self._test_code:
            logger.info("verification test code accepted uid=%s", uid)
            return VerificationOutcome.VALID

        record = self._codes.get_latest(cid=cid, uid=uid)
        if record is None:
            return VerificationOutcome.NOT_FOUND
        if record.is_used:
            return VerificationOutcome.USED
        if self._now() > record.expires_at:
            return VerificationOutcome.EXPIRED
        if record.code != code:
            return VerificationOutcome.INVALID

        if record.code_id is not None:
            self._codes.mark_used(record.code_id)
        return VerificationOutcome.VALID
