from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, to_text
from .model import CardProfile
from .repository import CardProfileRepository


class MySQLCardProfileRepository(CardProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_profile(self, employee_no: str, company_id: str) -> Optional[CardProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT e.employee_no, e.company_id, e.employee_cname, e.employee_ename, e.passport_name,
                       e.job_title, e.department_name, e.email, e.office_tel,
                       c.company_name, c.phone, c.website, c.address
                FROM employees e
                LEFT JOIN companies c ON c.company_id = %s
                WHERE e.employee_no=%s AND e.company_id IN (%s, '')
                ORDER BY e.company_id DESC
                LIMIT 1
                """,
                (company_id, employee_no, company_id),
            )
            r = fetchone(cur)
            if not r:
                return None
            return CardProfile(
                employee_no=to_text(r["employee_no"]),
                company_id=to_text(r.get("company_id")) or company_id,
                name=to_text(r.get("employee_cname")),
                english_name=to_text(r.get("employee_ename")),
                passport_name=to_text(r.get("passport_name")),
                job_title=to_text(r.get("job_title")),
                department_name=to_text(r.get("department_name")),
                email=to_text(r.get("email")),
                office_tel=to_text(r.get("office_tel")),
                company_name=to_text(r.get("company_name")),
                company_phone=to_text(r.get("phone")),
                company_website=to_text(r.get("website")),
                company_address=to_text(r.get("address")),
            )
