from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import VerificationCode


class VerificationCodeRepository(Protocol):
    def replace_code(self, *, cid: str, uid: str, code: str, created_at: datetime, expires_at: datetime) -> int:
        """Delete older codes for (cid, uid) and store the new one."""
        raise NotImplementedError

    def get_latest(self, *, cid: str, uid: str) -> Optional[VerificationCode]:
        raise NotImplementedError

    def mark_used(self, code_id: int) -> bool:
        raise NotImplementedError
