from __future__ import annotations

from typing import Any, Mapping, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, to_date, to_text
from .model import Employee
from .repository import EmployeeRepository

_SELECT = """
    SELECT employee_id, employee_no, company_id, employee_cname,
           department_name, email, hire_date
    FROM employees
"""


def _to_employee(r: Mapping[str, Any]) -> Employee:
    return Employee(
        employee_id=to_text(r["employee_id"]),
        employee_no=to_text(r["employee_no"]),
        name=to_text(r.get("employee_cname")),
        company_id=to_text(r.get("company_id")),
        department_name=r.get("department_name"),
        email=(to_text(r.get("email")) or None),
        hire_date=to_date(r.get("hire_date")),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _fetch_one(self, sql: str, params: tuple) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def get_by_no(self, employee_no: str, company_id: str = "") -> Optional[Employee]:
        sql = _SELECT + " WHERE employee_no=%s"
        params: tuple = (employee_no,)
        if company_id:
            sql += " AND company_id IN (%s, '')"
            params += (company_id,)
        # An exact company match sorts ahead of the '' fallback row.
        return self._fetch_one(sql + " ORDER BY company_id DESC LIMIT 1", params)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self._fetch_one(_SELECT + " WHERE email=%s ORDER BY company_id DESC LIMIT 1", (email,))
