from __future__ import annotations

from enum import Enum, IntEnum


class CardType(IntEnum):
    """Loại thẻ chấm: 0 = vào ca, 1 = tan ca."""

    CLOCK_IN = 0
    CLOCK_OUT = 1


class AnomalyCode(str, Enum):
    """Mã bất thường do máy chấm công trả về (đã trim)."""

    NORMAL = ""
    NOT_CLOCKED = "0"
    LATE = "1"
    EARLY_LEAVE = "2"
    OVERTIME_ATTENDANCE = "3"
    ABSENT = "4"

    @property
    def label(self) -> str:
        return {
            AnomalyCode.NORMAL: "正常",
            AnomalyCode.NOT_CLOCKED: "應刷未刷",
            AnomalyCode.LATE: "遲到",
            AnomalyCode.EARLY_LEAVE: "早退",
            AnomalyCode.OVERTIME_ATTENDANCE: "超時出勤",
            AnomalyCode.ABSENT: "曠職",
        }[self]


class LeaveUnit(str, Enum):
    """Đơn vị của hạn mức nghỉ phép."""

    DAY = "DAY"
    HOUR = "HOUR"


class ApiCode(str, Enum):
    """Mã kết quả trong envelope JSON của các API /app/*."""

    OK = "200"
    FAILED = "203"
    VERIFY_ERROR = "300"
    BAD_REQUEST = "400"
    ERROR = "500"


class VerificationOutcome(str, Enum):
    """Kết quả kiểm tra mã xác thực tra cứu lương."""

    VALID = "VALID"
    NOT_FOUND = "NOT_FOUND"
    USED = "USED"
    EXPIRED = "EXPIRED"
    INVALID = "INVALID"
