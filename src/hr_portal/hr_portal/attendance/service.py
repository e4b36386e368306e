from __future__ import annotations

import logging
from datetime import date

from ..common.validators import require_non_empty, require_year_month
from ..core.exceptions import NotFoundError
from .factory import AnomalyStrategyFactory
from .model import AttendanceRecord, MonthlyWorkSummary
from .normalizer import group_by_employee, normalize, summarize_month
from .repository import PunchRepository

logger = logging.getLogger(__name__)


class AttendanceQueryService:
    def __init__(self, punches: PunchRepository, *, strategy_factory: AnomalyStrategyFactory | None = None):
        self._punches = punches
        self._factory = strategy_factory or AnomalyStrategyFactory()

    def get_daily_record(self, employee_no: str, work_date: date) -> AttendanceRecord:
        employee_no = require_non_empty(employee_no, "employeeNo")
        rows = self._punches.get_for_employee_and_date(employee_no, work_date)
        logger.info("daily attendance employee=%s date=%s rows=%s", employee_no, work_date, len(rows))

        record = normalize(rows, work_date, factory=self._factory)
        if record is None:
            raise NotFoundError(f"查無 {employee_no} 於 {work_date.isoformat()} 的考勤資料")
        return record

    def get_all_daily_records(self, work_date: date) -> list[tuple[str, AttendanceRecord]]:
        rows = self._punches.get_for_date(work_date)
        logger.info("daily attendance (all) date=%s rows=%s", work_date, len(rows))

        result: list[tuple[str, AttendanceRecord]] = []
        for employee_no, employee_rows in group_by_employee(rows).items():
            record = normalize(employee_rows, work_date, factory=self._factory)
            if record is not None:
                result.append((employee_no, record))
        return result

    def get_monthly_work(self, employee_no: str, year_month: str) -> MonthlyWorkSummary:
        employee_no = require_non_empty(employee_no, "uid")
        first, last = require_year_month(year_month, "wyearmonth")

        rows = self._punches.get_for_employee_between(employee_no, first, last)
        logger.info("monthly attendance employee=%s month=%s rows=%s", employee_no, year_month, len(rows))

        return MonthlyWorkSummary(
            ryear=str(first.year),
            rmonth=f"{first.month:02d}",
            records=summarize_month(rows),
        )
