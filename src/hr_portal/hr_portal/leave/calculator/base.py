from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ..model import LeaveGrantRow, LeaveUsageRow


class BalanceCalculator(ABC):
    """Calculator interface (Strategy Pattern for leave balances).

    ``tracks_remaining`` False means the type has no quota to show: the
    aggregator reports total/remaining as 0 and hands ``display_text`` the
    used days/hours instead of the remaining ones.
    """

    tracks_remaining = True

    @abstractmethod
    def granted_hours(self, grant: LeaveGrantRow, day_work_hours: Decimal) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def used_hours(self, usage: LeaveUsageRow) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def display_text(self, days: Decimal, hours: Decimal) -> str:
        raise NotImplementedError
