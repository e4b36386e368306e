from __future__ import annotations

import logging

from ..common.validators import require_non_empty
from ..core.constants import BPM_SOURCE_SYSTEM, LEAVE_FORM_CODE
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..integrations.bpm_client import BpmClient
from ..leave.repository import LeaveRepository
from .fields import join_paths, require_clock, slash_date, split_paths
from .model import FormResult, LeaveFormSubmitRequest

logger = logging.getLogger(__name__)


def find_employee(employees: EmployeeRepository, uid: str, cid: str) -> Employee:
    employee = employees.get_by_no(require_non_empty(uid, "uid"), company_id=cid)
    if not employee:
        raise ValidationError(f"找不到工號對應的員工資料: {uid}")
    return employee


class LeaveFormService:
    def __init__(
        self,
        employees: EmployeeRepository,
        leaves: LeaveRepository,
        bpm: BpmClient,
        *,
        environment: str = "TEST",
    ):
        self._employees = employees
        self._leaves = leaves
        self._bpm = bpm
        self._environment = environment

    def build_form_data(self, req: LeaveFormSubmitRequest, leave_type_name: str) -> dict:
        start = slash_date(req.estartdate, "estartdate")
        end = slash_date(req.eenddate, "eenddate")
        if end < start:
            raise ValidationError("eenddate 不可早於 estartdate")

        data = {
            "startDate": start,
            "startTime": require_clock(req.estarttime, "estarttime"),
            "endDate": end,
            "endTime": require_clock(req.eendtime, "eendtime"),
            "agentNo": require_non_empty(req.eagent, "eagent"),
            "reason": require_non_empty(req.ereason, "ereason"),
            "leaveTypeId": req.leavetype,
            "leaveTypeName": leave_type_name,
        }
        if req.eleavedate:
            data["eventDate"] = slash_date(req.eleavedate, "eleavedate")
        return data

    @staticmethod
    def attachment_path(req: LeaveFormSubmitRequest) -> str | None:
        return join_paths(split_paths(req.efileurl))

    def submit(self, req: LeaveFormSubmitRequest) -> FormResult:
        leave_code = require_non_empty(req.leavetype, "leavetype")
        employee = find_employee(self._employees, req.uid, req.cid)

        leave_type = self._leaves.get_leave_type(leave_code, req.cid)
        if not leave_type:
            raise ValidationError(f"找不到假別代碼: {leave_code}")

        form_data = self.build_form_data(req, leave_type.leave_name)
        file_path = self.attachment_path(req)

        response = self._bpm.invoke_process(
            process_code=f"{LEAVE_FORM_CODE}_PROCESS",
            form_code=LEAVE_FORM_CODE,
            form_data=form_data,
            user_id=employee.employee_no,
            subject=f"{employee.name} 的請假申請 - {leave_type.leave_name}",
            source_system=BPM_SOURCE_SYSTEM,
            environment=self._environment,
            file_path=file_path,
        )

        result = FormResult.from_bpm(response)
        logger.info(
            "leave form submitted uid=%s type=%s serial=%s request=%s status=%s",
            employee.employee_no, leave_code, result.form_id, result.form_number, result.status,
        )
        return result
