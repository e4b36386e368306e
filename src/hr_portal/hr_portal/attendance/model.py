from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..auth.model import AuthRequest
from ..core.constants import NOT_CLOCKED
from ..core.enums import CardType


@dataclass(frozen=True)
class RawPunchRow:
    """Một lượt chấm dự kiến (vào hoặc ra) của một nhân viên trong một ngày."""

    employee_id: str
    employee_no: str
    work_date: date
    card_type: CardType
    expected_time: Optional[datetime]
    actual_time: Optional[datetime]
    anomaly_code: str = ""


@dataclass(frozen=True)
class PunchDisplay:
    time: str
    status: str


NOT_CLOCKED_DISPLAY = PunchDisplay(time=NOT_CLOCKED, status=NOT_CLOCKED)


@dataclass(frozen=True)
class AttendanceRecord:
    """Bản ghi chấm công đã chuẩn hoá cho một ngày (luôn đủ trường)."""

    date: str
    clock_in_time: str = NOT_CLOCKED
    clock_in_status: str = NOT_CLOCKED
    clock_in_code: str = ""
    clock_out_time: str = NOT_CLOCKED
    clock_out_status: str = NOT_CLOCKED
    clock_out_code: str = ""

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "clockInTime": self.clock_in_time,
            "clockInStatus": self.clock_in_status,
            "clockOutTime": self.clock_out_time,
            "clockOutStatus": self.clock_out_status,
            "clockInCode": self.clock_in_code,
            "clockOutCode": self.clock_out_code,
        }


@dataclass(frozen=True)
class DailyWorkRecord:
    """Read-model cho tra cứu công theo tháng (T = bình thường, F = bất thường)."""

    date: str
    clockin: str = ""
    checkin: str = ""
    statusin: str = ""
    clockout: str = ""
    checkout: str = ""
    statusout: str = ""
    onduty: str = "T"

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "clockin": self.clockin,
            "checkin": self.checkin,
            "statusin": self.statusin,
            "clockout": self.clockout,
            "checkout": self.checkout,
            "statusout": self.statusout,
            "onduty": self.onduty,
        }


@dataclass(frozen=True)
class MonthlyWorkSummary:
    ryear: str
    rmonth: str
    records: list[DailyWorkRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "ryear": self.ryear,
            "rmonth": self.rmonth,
            "records": [r.to_dict() for r in self.records],
        }


@dataclass(frozen=True)
class WorkQueryRequest(AuthRequest):
    wyearmonth: str = ""
