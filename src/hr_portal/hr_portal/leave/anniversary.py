"""Anniversary-year windows for leave entitlement.

Two explicit semantics:

* ``compute_window(hire, year)`` is anchored on the requested year:
  ``[anniversary in year, anniversary in year+1 - 1 day]``.
* ``current_window(hire, today)`` is the window that contains ``today``.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from ..common.datetime_utils import same_day_in_year
from ..core.exceptions import NotFoundError
from .model import LeaveEntitlementWindow


def _require_hire_date(hire_date: Optional[date]) -> date:
    if hire_date is None:
        raise NotFoundError("查無到職日資料")
    return hire_date


def compute_window(hire_date: Optional[date], target_year: int) -> tuple[date, date]:
    hire_date = _require_hire_date(hire_date)
    start = same_day_in_year(hire_date, target_year)
    end = same_day_in_year(hire_date, target_year + 1) - timedelta(days=1)
    return start, end


def current_window(hire_date: Optional[date], today: date) -> tuple[date, date]:
    hire_date = _require_hire_date(hire_date)
    year = today.year
    if same_day_in_year(hire_date, year) > today:
        year -= 1
    return compute_window(hire_date, year)


def window_for(employee_no: str, hire_date: Optional[date], target_year: int) -> LeaveEntitlementWindow:
    start, end = compute_window(hire_date, target_year)
    return LeaveEntitlementWindow(employee_no=employee_no, year=target_year, start_date=start, end_date=end)


def current_window_for(employee_no: str, hire_date: Optional[date], today: date) -> LeaveEntitlementWindow:
    start, end = current_window(hire_date, today)
    return LeaveEntitlementWindow(employee_no=employee_no, year=start.year, start_date=start, end_date=end)
