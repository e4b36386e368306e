from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, to_datetime, to_text
from .model import VerificationCode
from .repository import VerificationCodeRepository


class MySQLVerificationCodeRepository(VerificationCodeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def replace_code(self, *, cid: str, uid: str, code: str, created_at: datetime, expires_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM salary_verification_codes WHERE cid=%s AND uid=%s", (cid, uid))
            cur.execute(
                """
                INSERT INTO salary_verification_codes(cid, uid, code, created_at, expires_at, is_used)
                VALUES(%s,%s,%s,%s,%s,0)
                """,
                (cid, uid, code, created_at, expires_at),
            )
            return int(cur.lastrowid)

    def get_latest(self, *, cid: str, uid: str) -> Optional[VerificationCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, cid, uid, code, created_at, expires_at, is_used
                FROM salary_verification_codes
                WHERE cid=%s AND uid=%s
                ORDER BY created_at DESC, id DESC
                LIMIT 1
                """,
                (cid, uid),
            )
            r = fetchone(cur)
            if not r:
                return None
            return VerificationCode(
                code_id=int(r["id"]),
                cid=to_text(r["cid"]),
                uid=to_text(r["uid"]),
                code=to_text(r["code"]),
                created_at=to_datetime(r["created_at"]),
                expires_at=to_datetime(r["expires_at"]),
                is_used=bool(r.get("is_used")),
            )

    def mark_used(self, code_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE salary_verification_codes SET is_used=1 WHERE id=%s AND is_used=0",
                (int(code_id),),
            )
            return cur.rowcount > 0
