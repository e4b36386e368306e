from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Optional

from ..auth.model import AuthRequest
from ..core.enums import LeaveUnit


def format_decimal(value: Decimal) -> str:
    """8 -> '8', 4.50 -> '4.5' (no exponent, no trailing zeros)."""
    text = format(value.normalize(), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def round_1(value: Decimal) -> float:
    return float(value.quantize(Decimal("0.1"), rounding=ROUND_HALF_EVEN))


@dataclass(frozen=True)
class LeaveEntitlementWindow:
    """Chu kỳ phép năm tính theo ngày kỷ niệm vào làm: [start_date, end_date]."""

    employee_no: str
    year: int
    start_date: date
    end_date: date

    def contains(self, value: date) -> bool:
        return self.start_date <= value <= self.end_date


@dataclass(frozen=True)
class LeaveGrantRow:
    leave_type_code: str
    leave_type_name: str
    unit: LeaveUnit
    value: Decimal
    min_unit_hours: Decimal = Decimal("1")
    grant_date: Optional[date] = None


@dataclass(frozen=True)
class LeaveUsageRow:
    leave_type_code: str
    start: datetime
    end: datetime
    ask_leave_hours: Decimal
    cancel_hours: Decimal = Decimal("0")
    is_counted: bool = True


@dataclass(frozen=True)
class LeaveTypeBalance:
    leave_type_code: str
    leave_type_name: str
    min_unit_hours: Decimal
    total_days: Decimal
    total_hours: Decimal
    used_days: Decimal
    used_hours: Decimal
    remaining_days: Decimal
    remaining_hours: Decimal
    remaining_total_hours: Decimal
    display_text: str

    def to_detail_dict(self) -> dict:
        return {
            "leaveTypeCode": self.leave_type_code,
            "leaveTypeName": self.leave_type_name,
            "minUnitHours": float(self.min_unit_hours),
            "totalDays": float(self.total_days),
            "totalHours": float(self.total_hours),
            "usedDays": float(self.used_days),
            "usedHours": float(self.used_hours),
            "remainDays": float(self.remaining_days),
            "remainHours": float(self.remaining_hours),
            "remainTotalHours": float(self.remaining_total_hours),
            "displayText": self.display_text,
        }

    def to_quota_dict(self, day_work_hours: Decimal) -> dict:
        return {
            "leavetype": self.leave_type_name,
            "annualquota": round_1(self.total_hours / day_work_hours),
            "deducteddays": round_1(self.used_hours / day_work_hours),
            "remainingdays": round_1(max(self.remaining_total_hours, Decimal("0")) / day_work_hours),
        }


@dataclass(frozen=True)
class LeaveRemainResult:
    employee_no: str
    employee_name: str
    window: LeaveEntitlementWindow
    balances: list[LeaveTypeBalance] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "employeeNo": self.employee_no,
            "employeeName": self.employee_name,
            "year": self.window.year,
            "anniversaryStart": self.window.start_date.strftime("%Y/%m/%d"),
            "anniversaryEnd": self.window.end_date.strftime("%Y/%m/%d"),
            "leaveTypes": [b.to_detail_dict() for b in self.balances],
        }


@dataclass(frozen=True)
class LeaveBalanceRequest(AuthRequest):
    ryear: str = ""


@dataclass(frozen=True)
class LeaveType:
    """Một mã phép của công ty; leave_class gom nhóm (SPECIAL, PERSONAL, ...)."""

    leave_code: str
    leave_name: str
    leave_class: str
    unit: LeaveUnit = LeaveUnit.HOUR
    min_value: Decimal = Decimal("1")
