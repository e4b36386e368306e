from __future__ import annotations

from decimal import Decimal
from typing import Mapping, Optional, Sequence

from ..core.constants import (
    COMPENSATORY_LEAVE_CODE,
    COMPENSATORY_LEAVE_NAME,
    DEFAULT_DAY_WORK_HOURS,
    SPECIAL_LEAVE_CODE,
    SPECIAL_LEAVE_NAME,
)
from ..core.enums import LeaveUnit
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_datetime, to_decimal, to_text
from .model import LeaveEntitlementWindow, LeaveGrantRow, LeaveType, LeaveUsageRow
from .repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_grants(self, window: LeaveEntitlementWindow) -> Sequence[LeaveGrantRow]:
        min_units = self.min_unit_hours_by_class()
        grants: list[LeaveGrantRow] = []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT special_value, leave_unit
                FROM employee_special
                WHERE employee_no=%s AND special_year=%s
                """,
                (window.employee_no, window.year),
            )
            for r in fetchall(cur):
                grants.append(
                    LeaveGrantRow(
                        leave_type_code=SPECIAL_LEAVE_CODE,
                        leave_type_name=SPECIAL_LEAVE_NAME,
                        unit=LeaveUnit(to_text(r.get("leave_unit")) or LeaveUnit.HOUR.value),
                        value=to_decimal(r.get("special_value")),
                        min_unit_hours=min_units.get(SPECIAL_LEAVE_CODE, Decimal("2")),
                    )
                )

            cur.execute(
                """
                SELECT COALESCE(SUM(change_hours), 0) AS hours
                FROM employee_change_hour
                WHERE employee_no=%s AND change_date BETWEEN %s AND %s
                """,
                (window.employee_no, window.start_date, window.end_date),
            )
            r = fetchone(cur)
            hours = to_decimal(r.get("hours") if r else None)
            if hours > 0:
                grants.append(
                    LeaveGrantRow(
                        leave_type_code=COMPENSATORY_LEAVE_CODE,
                        leave_type_name=COMPENSATORY_LEAVE_NAME,
                        unit=LeaveUnit.HOUR,
                        value=hours,
                        min_unit_hours=min_units.get(COMPENSATORY_LEAVE_CODE, Decimal("1")),
                    )
                )
        return grants

    def list_usages(self, window: LeaveEntitlementWindow) -> Sequence[LeaveUsageRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT lr.leave_class, al.start_at, al.end_at,
                       al.ask_leave_hour, al.cancel_hour, al.is_count
                FROM ask_leave al
                JOIN (
                    SELECT leave_code, MIN(leave_class) AS leave_class
                    FROM leave_reference
                    GROUP BY leave_code
                ) lr ON lr.leave_code = al.leave_code
                WHERE al.employee_no=%s
                  AND al.start_at >= %s
                  AND al.start_at < DATE_ADD(%s, INTERVAL 1 DAY)
                ORDER BY al.start_at
                """,
                (window.employee_no, window.start_date, window.end_date),
            )
            return [
                LeaveUsageRow(
                    leave_type_code=to_text(r["leave_class"]),
                    start=to_datetime(r["start_at"]),
                    end=to_datetime(r["end_at"]),
                    ask_leave_hours=to_decimal(r.get("ask_leave_hour")),
                    cancel_hours=to_decimal(r.get("cancel_hour")),
                    is_counted=bool(r.get("is_count")),
                )
                for r in fetchall(cur)
            ]

    def min_unit_hours_by_class(self) -> Mapping[str, Decimal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT leave_class, leave_unit, MIN(min_value) AS min_value
                FROM leave_reference
                GROUP BY leave_class, leave_unit
                """
            )
            result: dict[str, Decimal] = {}
            for r in fetchall(cur):
                value = to_decimal(r.get("min_value"))
                if to_text(r.get("leave_unit")) == LeaveUnit.DAY.value:
                    value = value * DEFAULT_DAY_WORK_HOURS
                result.setdefault(to_text(r["leave_class"]), value)
            return result

    def get_leave_type(self, leave_code: str, company_id: str = "") -> Optional[LeaveType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT leave_code, leave_name, leave_class, leave_unit, min_value
                FROM leave_reference
                WHERE leave_code=%s AND company_id IN (%s, '')
                ORDER BY company_id DESC
                LIMIT 1
                """,
                (leave_code, company_id),
            )
            r = fetchone(cur)
            if not r:
                return None
            return LeaveType(
                leave_code=to_text(r["leave_code"]),
                leave_name=to_text(r["leave_name"]),
                leave_class=to_text(r["leave_class"]),
                unit=LeaveUnit(to_text(r.get("leave_unit")) or LeaveUnit.HOUR.value),
                min_value=to_decimal(r.get("min_value")),
            )
