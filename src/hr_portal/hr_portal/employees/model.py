from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Hồ sơ nhân viên tối thiểu mà các API cần (tên, ngày vào làm, email)."""

    employee_id: str
    employee_no: str
    name: str
    company_id: str = ""
    department_name: Optional[str] = None
    email: Optional[str] = None
    hire_date: Optional[date] = None
