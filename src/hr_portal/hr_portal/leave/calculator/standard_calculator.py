from __future__ import annotations

from decimal import Decimal

from ...core.enums import LeaveUnit
from ..model import LeaveGrantRow, LeaveUsageRow, format_decimal
from .base import BalanceCalculator

_ZERO = Decimal("0")


class StandardBalanceCalculator(BalanceCalculator):
    """HOUR grants count as hours, DAY grants as days * day_work_hours; usage is ask - cancel, not below 0."""

    def granted_hours(self, grant: LeaveGrantRow, day_work_hours: Decimal) -> Decimal:
        if grant.unit == LeaveUnit.DAY:
            return grant.value * day_work_hours
        return grant.value

    def used_hours(self, usage: LeaveUsageRow) -> Decimal:
        return max(usage.ask_leave_hours - usage.cancel_hours, _ZERO)

    def display_text(self, days: Decimal, hours: Decimal) -> str:
        if hours == 0:
            return f"{format_decimal(days)} 天"
        return f"{format_decimal(days)} 天 {format_decimal(hours)} 小時"
