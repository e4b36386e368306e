from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import LeaveUnit
from ..core.exceptions import NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .aggregator import aggregate
from .anniversary import current_window_for, window_for
from .calculator.base import BalanceCalculator
from .model import LeaveEntitlementWindow, LeaveGrantRow, LeaveRemainResult, LeaveTypeBalance
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatutoryQuota:
    """Hạn mức cố định mỗi chu kỳ (事假, 病假), tính bằng giờ."""

    code: str
    name: str
    hours: Decimal


class LeaveBalanceService:
    def __init__(
        self,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
        *,
        day_work_hours: int | Decimal = 8,
        statutory_quotas: Sequence[StatutoryQuota] = (),
        calculator: BalanceCalculator | None = None,
        calculators: Mapping[str, BalanceCalculator] | None = None,
        today: Callable[[], date] | None = None,
    ):
        self._leaves = leaves
        self._employees = employees
        self._day_work_hours = Decimal(day_work_hours)
        self._statutory = tuple(statutory_quotas)
        self._calculator = calculator
        self._calculators = dict(calculators or {})
        self._today = today or (lambda: now_local().date())

    @property
    def day_work_hours(self) -> Decimal:
        return self._day_work_hours

    def current_year(self) -> int:
        return self._today().year

    def _employee(self, employee_no: str, company_id: str = "") -> Employee:
        employee_no = require_non_empty(employee_no, "employeeNo")
        employee = self._employees.get_by_no(employee_no, company_id=company_id)
        if not employee:
            raise NotFoundError(f"查無員工編號 {employee_no} 的資料")
        return employee

    def _statutory_grants(self) -> list[LeaveGrantRow]:
        min_units = self._leaves.min_unit_hours_by_class()
        return [
            LeaveGrantRow(
                leave_type_code=q.code,
                leave_type_name=q.name,
                unit=LeaveUnit.HOUR,
                value=q.hours,
                min_unit_hours=min_units.get(q.code, Decimal("1")),
            )
            for q in self._statutory
        ]

    def _window(self, employee: Employee, year: Optional[int]) -> LeaveEntitlementWindow:
        if year is None:
            return current_window_for(employee.employee_no, employee.hire_date, self._today())
        return window_for(employee.employee_no, employee.hire_date, year)

    def get_window(self, employee_no: str, year: Optional[int] = None) -> LeaveEntitlementWindow:
        """Window for ``year``; without a year, the window that contains today."""
        return self._window(self._employee(employee_no), year)

    def get_balances(
        self, employee_no: str, year: Optional[int] = None, *, company_id: str = ""
    ) -> tuple[Employee, LeaveEntitlementWindow, list[LeaveTypeBalance]]:
        employee = self._employee(employee_no, company_id)
        window = self._window(employee, year)

        grants = [*self._leaves.list_grants(window), *self._statutory_grants()]
        usages = self._leaves.list_usages(window)
        logger.info(
            "leave balance employee=%s year=%s window=%s..%s grants=%s usages=%s",
            employee.employee_no, year, window.start_date, window.end_date, len(grants), len(usages),
        )

        balances = aggregate(
            window,
            grants,
            usages,
            self._day_work_hours,
            calculator=self._calculator,
            calculators=self._calculators,
        )
        return employee, window, balances

    def get_leave_remain(self, employee_no: str, year: Optional[int] = None) -> LeaveRemainResult:
        employee, window, balances = self.get_balances(employee_no, year)
        return LeaveRemainResult(
            employee_no=employee.employee_no,
            employee_name=employee.name,
            window=window,
            balances=balances,
        )

    def get_leave_remain_two_years(self, employee_no: str) -> list[LeaveRemainResult]:
        current = self.get_leave_remain(employee_no)
        return [current, self.get_leave_remain(employee_no, current.window.year - 1)]

    def get_quota_rows(self, employee_no: str, year: Optional[int] = None, *, company_id: str = "") -> list[dict]:
        """Rows for the /app/LeaveBalance envelope (days rounded to one decimal)."""
        _, _, balances = self.get_balances(employee_no, year, company_id=company_id)
        return [b.to_quota_dict(self._day_work_hours) for b in balances]
