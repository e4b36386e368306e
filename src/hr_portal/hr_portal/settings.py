"""Immutable runtime settings built once from the selected config module."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from types import ModuleType
from typing import Any, Mapping

from .core.constants import (
    DEFAULT_BUSINESS_CARD_BASE_URL,
    DEFAULT_DAY_WORK_HOURS,
    DEFAULT_PERSONAL_LEAVE_HOURS,
    DEFAULT_SICK_LEAVE_HOURS,
    DEFAULT_VERIFICATION_CODE_MINUTES,
)


@dataclass(frozen=True)
class BpmSettings:
    base_url: str = ""
    api_token: str = ""
    environment: str = "TEST"
    timeout: float = 30


@dataclass(frozen=True)
class FtpSettings:
    host: str = ""
    port: int = 21
    username: str = ""
    password: str = ""
    upload_path: str = "/uploads/attachments/"
    timeout: float = 30


@dataclass(frozen=True)
class SmtpSettings:
    host: str = ""
    port: int = 587
    username: str = ""
    password: str = ""
    use_tls: bool = True
    sender: str = ""
    sender_name: str = "HR System"
    timeout: float = 30


@dataclass(frozen=True)
class AppSettings:
    db: Mapping[str, Any]
    token_verify_url: str
    token_verify_timeout: float = 30
    bpm: BpmSettings = field(default_factory=BpmSettings)
    ftp: FtpSettings = field(default_factory=FtpSettings)
    smtp: SmtpSettings = field(default_factory=SmtpSettings)
    verification_code_minutes: int = DEFAULT_VERIFICATION_CODE_MINUTES
    verification_test_code: str = ""
    day_work_hours: Decimal = Decimal(DEFAULT_DAY_WORK_HOURS)
    personal_leave_hours: Decimal = Decimal(DEFAULT_PERSONAL_LEAVE_HOURS)
    sick_leave_hours: Decimal = Decimal(DEFAULT_SICK_LEAVE_HOURS)
    business_card_base_url: str = DEFAULT_BUSINESS_CARD_BASE_URL

    @classmethod
    def from_module(cls, settings: ModuleType) -> "AppSettings":
        return cls(
            db=dict(getattr(settings, "DB_CONFIG")),
            token_verify_url=str(getattr(settings, "TOKEN_VERIFY_URL")),
            token_verify_timeout=float(getattr(settings, "TOKEN_VERIFY_TIMEOUT", 30)),
            bpm=BpmSettings(**dict(getattr(settings, "BPM_CONFIG", {}))),
            ftp=FtpSettings(**dict(getattr(settings, "FTP_CONFIG", {}))),
            smtp=SmtpSettings(**dict(getattr(settings, "SMTP_CONFIG", {}))),
            verification_code_minutes=int(
                getattr(settings, "VERIFICATION_CODE_MINUTES", DEFAULT_VERIFICATION_CODE_MINUTES)
            ),
            verification_test_code=str(getattr(settings, "VERIFICATION_TEST_CODE", "") or ""),
            day_work_hours=Decimal(str(getattr(settings, "DAY_WORK_HOURS", DEFAULT_DAY_WORK_HOURS))),
            personal_leave_hours=Decimal(str(getattr(settings, "PERSONAL_LEAVE_HOURS", DEFAULT_PERSONAL_LEAVE_HOURS))),
            sick_leave_hours=Decimal(str(getattr(settings, "SICK_LEAVE_HOURS", DEFAULT_SICK_LEAVE_HOURS))),
            business_card_base_url=str(
                getattr(settings, "BUSINESS_CARD_BASE_URL", DEFAULT_BUSINESS_CARD_BASE_URL) or DEFAULT_BUSINESS_CARD_BASE_URL
            ),
        )
