from __future__ import annotations

import logging

from ..common.validators import require_non_empty
from ..core.constants import LEAVE_FORM_CODE
from ..employees.repository import EmployeeRepository
from ..integrations.bpm_client import BpmClient
from .model import CancelLeaveRequest
from .service import find_employee

logger = logging.getLogger(__name__)


class CancelLeaveService:
    """銷假: withdraw a submitted leave form through BPM."""

    def __init__(self, employees: EmployeeRepository, bpm: BpmClient):
        self._employees = employees
        self._bpm = bpm

    def cancel(self, req: CancelLeaveRequest) -> dict:
        form_id = require_non_empty(req.formid, "formid")
        reason = require_non_empty(req.reasons, "reasons")
        employee = find_employee(self._employees, req.uid, req.cid)

        response = self._bpm.cancel_form(
            form_code=LEAVE_FORM_CODE,
            form_id=form_id,
            user_id=employee.employee_no,
            reason=reason,
        )
        logger.info("leave form cancelled uid=%s form=%s", employee.employee_no, form_id)
        return response
