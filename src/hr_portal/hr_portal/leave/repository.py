from __future__ import annotations

from decimal import Decimal
from typing import Mapping, Optional, Protocol, Sequence

from .model import LeaveEntitlementWindow, LeaveGrantRow, LeaveType, LeaveUsageRow


class LeaveRepository(Protocol):
    def list_grants(self, window: LeaveEntitlementWindow) -> Sequence[LeaveGrantRow]:
        """Special leave for the window year plus compensatory hours earned inside it."""
        raise NotImplementedError

    def list_usages(self, window: LeaveEntitlementWindow) -> Sequence[LeaveUsageRow]:
        raise NotImplementedError

    def min_unit_hours_by_class(self) -> Mapping[str, Decimal]:
        raise NotImplementedError

    def get_leave_type(self, leave_code: str, company_id: str = "") -> Optional[LeaveType]:
        raise NotImplementedError
