from __future__ import annotations

from typing import Optional, Protocol

from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_no(self, employee_no: str, company_id: str = "") -> Optional[Employee]:
        """Employee numbers are unique per company; rows without a company match any."""
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError
