from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import RawPunchRow


class PunchRepository(Protocol):
    def get_for_employee_and_date(self, employee_no: str, work_date: date) -> Sequence[RawPunchRow]:
        raise NotImplementedError

    def get_for_date(self, work_date: date) -> Sequence[RawPunchRow]:
        raise NotImplementedError

    def get_for_employee_between(self, employee_no: str, start_date: date, end_date: date) -> Sequence[RawPunchRow]:
        raise NotImplementedError
