from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..auth.model import AuthRequest


@dataclass(frozen=True)
class VerificationCode:
    """Mã xác thực tra cứu lương (4 chữ số, có hạn dùng)."""

    cid: str
    uid: str
    code: str
    created_at: datetime
    expires_at: datetime
    is_used: bool = False
    code_id: Optional[int] = None


@dataclass(frozen=True)
class SendCodeRequest(AuthRequest):
    pass


@dataclass(frozen=True)
class SendCodeCheckRequest(AuthRequest):
    verificationcode: str = ""
