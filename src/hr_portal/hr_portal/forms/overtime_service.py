from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import BPM_SOURCE_SYSTEM, OVERTIME_CODE, OVERTIME_FORM_CODE, OVERTIME_PROCESS_TYPES
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from ..integrations.bpm_client import BpmClient
from .fields import filler_fields, join_paths, require_period, split_paths
from .model import FormResult, OvertimeApplyRequest
from .service import find_employee

logger = logging.getLogger(__name__)

_BPM_MINUTE = "%Y/%m/%d %H:%M"


class OvertimeFormService:
    """加班單預申請: planned overtime goes to BPM, actual times are filled in later."""

    def __init__(
        self,
        employees: EmployeeRepository,
        bpm: BpmClient,
        *,
        environment: str = "TEST",
        now: Callable[[], datetime] | None = None,
    ):
        self._employees = employees
        self._bpm = bpm
        self._environment = environment
        self._now = now or now_local

    @staticmethod
    def process_type(eprocess: str) -> str:
        key = require_non_empty(eprocess, "eprocess").upper()
        if key not in OVERTIME_PROCESS_TYPES:
            raise ValidationError("eprocess 只能是 C（轉補休）或 P（加班費）")
        return OVERTIME_PROCESS_TYPES[key]

    def build_form_data(self, req: OvertimeApplyRequest) -> dict:
        start, end = require_period(req.estartdate, req.estarttime, req.eenddate, req.eendtime)
        today = self._now().strftime("%Y/%m/%d")
        return {
            "applyDate": today,
            "startTimeF": start.strftime(_BPM_MINUTE),
            "endTimeF": end.strftime(_BPM_MINUTE),
            "startTime": "",
            "endTime": "",
            "detail": require_non_empty(req.ereason, "ereason"),
            "processType": self.process_type(req.eprocess),
            "fillFormDate": today,
            "overtimeCode": OVERTIME_CODE,
        }

    def apply(self, req: OvertimeApplyRequest) -> FormResult:
        employee = find_employee(self._employees, req.uid, req.cid)
        form_data = {**self.build_form_data(req), **filler_fields(employee)}
        file_path = join_paths(split_paths(req.efileurl))
        if file_path:
            form_data["filePath"] = file_path

        response = self._bpm.invoke_process(
            process_code=f"{OVERTIME_FORM_CODE}_PROCESS",
            form_code=OVERTIME_FORM_CODE,
            form_data=form_data,
            user_id=employee.employee_no,
            subject=f"{employee.name} 的加班申請 - {form_data['startTimeF']} ~ {form_data['endTimeF']}",
            source_system=BPM_SOURCE_SYSTEM,
            environment=self._environment,
            file_path=file_path,
        )

        result = FormResult.from_bpm(response)
        logger.info(
            "overtime form submitted uid=%s process=%s serial=%s request=%s",
            employee.employee_no, form_data["processType"], result.form_id, result.form_number,
        )
        return result
