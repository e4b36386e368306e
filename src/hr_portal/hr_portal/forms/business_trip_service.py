from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import BinaryIO, Callable, Iterable

from ..common.datetime_utils import now_local
from ..common.validators import require_decimal, require_email, require_non_empty
from ..core.constants import (
    BPM_SOURCE_SYSTEM,
    BUSINESS_TRIP_DEFAULT_STATUS,
    BUSINESS_TRIP_FORM_CODE,
    BUSINESS_TRIP_MAX_DAYS,
)
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from ..integrations.bpm_client import BpmClient
from ..integrations.ftp_store import FtpAttachmentStore
from .fields import filler_fields, join_paths, require_date, slash_date
from .model import BusinessTripFormRequest, FormResult

logger = logging.getLogger(__name__)


def _slash_minute(value: str, field_name: str) -> str:
    raw = require_non_empty(value, field_name).replace("/", "-")
    try:
        return datetime.strptime(raw, "%Y-%m-%d %H:%M").strftime("%Y/%m/%d %H:%M")
    except ValueError:
        raise ValidationError(f"{field_name} 格式錯誤，請使用 yyyy-MM-dd HH:mm")


class BusinessTripFormService:
    def __init__(
        self,
        employees: EmployeeRepository,
        bpm: BpmClient,
        store: FtpAttachmentStore,
        *,
        environment: str = "TEST",
        now: Callable[[], datetime] | None = None,
    ):
        self._employees = employees
        self._bpm = bpm
        self._store = store
        self._environment = environment
        self._now = now or now_local

    def build_form_data(self, req: BusinessTripFormRequest) -> dict:
        if require_date(req.enddate, "EndDate") < require_date(req.startdate, "StartDate"):
            raise ValidationError("EndDate 不可早於 StartDate")
        days = require_decimal(
            req.numberofdays, "NumberOfDays", minimum=Decimal("0.5"), maximum=Decimal(BUSINESS_TRIP_MAX_DAYS)
        )

        data = {
            "date": slash_date(req.date, "Date"),
            "reason": require_non_empty(req.reason, "Reason"),
            "startDate": slash_date(req.startdate, "StartDate"),
            "endDate": slash_date(req.enddate, "EndDate"),
            "location": require_non_empty(req.location, "Location"),
            "numberOfDays": float(days),
            "mainTasksOfTrip": require_non_empty(req.maintasksoftrip, "MainTasksOfTrip"),
            "estimatedCosts": require_non_empty(req.estimatedcosts, "EstimatedCosts"),
            "applicationDateTime": (
                _slash_minute(req.applicationdatetime, "ApplicationDateTime")
                if req.applicationdatetime
                else self._now().strftime("%Y/%m/%d %H:%M")
            ),
            "approvalStatus": req.approvalstatus or BUSINESS_TRIP_DEFAULT_STATUS,
        }
        if req.approvingpersonnel:
            data["approvingPersonnel"] = req.approvingpersonnel
        if req.approvaltime:
            data["approvalTime"] = _slash_minute(req.approvaltime, "ApprovalTime")
        if req.remarks:
            data["remarks"] = req.remarks
        return data

    def create(
        self,
        req: BusinessTripFormRequest,
        attachments: Iterable[tuple[BinaryIO, str]] = (),
    ) -> FormResult:
        email = require_email(req.email, "Email")
        employee = self._employees.get_by_email(email)
        if not employee:
            raise ValidationError(f"找不到 Email 對應的員工資料: {email}")

        form_data = {**self.build_form_data(req), **filler_fields(employee)}

        attachments = list(attachments)
        file_path = None
        if attachments:
            file_path = join_paths(self._store.upload_many(attachments, sub_dir=employee.employee_no))
            form_data["filePath"] = file_path
            logger.info("business trip attachments uploaded uid=%s count=%s", employee.employee_no, len(attachments))

        response = self._bpm.invoke_process(
            process_code=f"{BUSINESS_TRIP_FORM_CODE}_PROCESS",
            form_code=BUSINESS_TRIP_FORM_CODE,
            form_data=form_data,
            user_id=employee.employee_no,
            subject=f"出差申請 - {form_data['location']} ({form_data['startDate']} ~ {form_data['endDate']})",
            source_system=BPM_SOURCE_SYSTEM,
            environment=self._environment,
            file_path=file_path,
        )

        result = FormResult.from_bpm(response)
        logger.info(
            "business trip form submitted uid=%s location=%s serial=%s request=%s",
            employee.employee_no, form_data["location"], result.form_id, result.form_number,
        )
        return result
