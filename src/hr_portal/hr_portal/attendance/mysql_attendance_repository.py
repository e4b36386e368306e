from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import CardType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, to_date, to_datetime, to_text
from .model import RawPunchRow
from .repository import PunchRepository

_SELECT = """
    SELECT employee_id, employee_no, work_date, work_card_type,
           work_card_date, card_data_date, card_data_code
    FROM card_data_match
"""


def _to_row(r: dict) -> RawPunchRow:
    return RawPunchRow(
        employee_id=to_text(r.get("employee_id")),
        employee_no=to_text(r.get("employee_no")),
        work_date=to_date(r["work_date"]),
        card_type=CardType(int(r["work_card_type"])),
        expected_time=to_datetime(r.get("work_card_date")),
        actual_time=to_datetime(r.get("card_data_date")),
        anomaly_code=to_text(r.get("card_data_code")),
    )


class MySQLPunchRepository(PunchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_no: str, work_date: date) -> Sequence[RawPunchRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE employee_no=%s AND work_date=%s
                ORDER BY work_card_type, id
                """,
                (employee_no, work_date),
            )
            return [_to_row(r) for r in fetchall(cur)]

    def get_for_date(self, work_date: date) -> Sequence[RawPunchRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE work_date=%s
                ORDER BY employee_no, work_card_type, id
                """,
                (work_date,),
            )
            return [_to_row(r) for r in fetchall(cur)]

    def get_for_employee_between(self, employee_no: str, start_date: date, end_date: date) -> Sequence[RawPunchRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE employee_no=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date, work_card_type, id
                """,
                (employee_no, start_date, end_date),
            )
            return [_to_row(r) for r in fetchall(cur)]
