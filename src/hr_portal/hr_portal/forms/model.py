from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..auth.model import AuthRequest


@dataclass(frozen=True)
class LeaveFormSubmitRequest(AuthRequest):
    """Đơn xin nghỉ gửi sang BPM; ngày dạng yyyy-MM-dd, giờ dạng HH:mm."""

    leavetype: str = ""
    estartdate: str = ""
    estarttime: str = ""
    eenddate: str = ""
    eendtime: str = ""
    eleavedate: str = ""
    ereason: str = ""
    eagent: str = ""
    efiletype: str = ""
    efileurl: str = ""
    efileid: list = field(default_factory=list)


@dataclass(frozen=True)
class OvertimeApplyRequest(AuthRequest):
    """Đơn tăng ca dự kiến; eprocess C = 轉補休, P = 加班費."""

    estartdate: str = ""
    estarttime: str = ""
    eenddate: str = ""
    eendtime: str = ""
    ereason: str = ""
    eprocess: str = ""
    efiletype: str = ""
    efileurl: str = ""
    efileid: list = field(default_factory=list)


@dataclass(frozen=True)
class CancelLeaveRequest(AuthRequest):
    formid: str = ""
    reasons: str = ""


@dataclass(frozen=True)
class BusinessTripFormRequest:
    """Đơn công tác (multipart form); người nộp được nhận diện qua email."""

    email: str = ""
    date: str = ""
    reason: str = ""
    startdate: str = ""
    enddate: str = ""
    location: str = ""
    numberofdays: str = ""
    maintasksoftrip: str = ""
    estimatedcosts: str = ""
    applicationdatetime: str = ""
    approvalstatus: str = ""
    approvingpersonnel: str = ""
    approvaltime: str = ""
    remarks: str = ""


@dataclass(frozen=True)
class FormResult:
    form_id: str
    form_number: str
    status: str = ""
    message: Optional[str] = None

    @classmethod
    def from_bpm(cls, response: Mapping[str, Any]) -> "FormResult":
        return cls(
            form_id=str(response.get("processSerialNo") or ""),
            form_number=str(response.get("requestId") or ""),
            status=str(response.get("status") or ""),
            message=response.get("message"),
        )


@dataclass(frozen=True)
class AttachmentUploadRequest(AuthRequest):
    pass


@dataclass(frozen=True)
class AttachmentPathRequest(AuthRequest):
    path: str = ""
