from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_year_month

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} 為必填")
    return str(value).strip()


def require_iso_date(value: str, field_name: str) -> date:
    raw = require_non_empty(value, field_name)
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{field_name} 格式錯誤，請使用 yyyy-MM-dd")


def require_email(value: str, field_name: str) -> str:
    raw = require_non_empty(value, field_name)
    if not _EMAIL_RE.match(raw):
        raise ValidationError(f"{field_name} 格式不正確")
    return raw


def require_decimal(value, field_name: str, *, minimum: Decimal, maximum: Decimal) -> Decimal:
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, TypeError):
        raise ValidationError(f"{field_name} 格式錯誤")
    if not number.is_finite() or not minimum <= number <= maximum:
        raise ValidationError(f"{field_name} 必須介於 {minimum} 到 {maximum}")
    return number


def require_year_month(value: str, field_name: str) -> tuple[date, date]:
    raw = require_non_empty(value, field_name)
    try:
        return parse_year_month(raw)
    except ValueError:
        raise ValidationError(f"{field_name} 格式錯誤，請使用 yyyy-MM")


def require_year(value, field_name: str, *, around: int | None = None, spread: int = 1) -> int:
    """Parse a year; with ``around`` the value must stay within ``around ± spread``."""
    try:
        year = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} 格式錯誤")
    if around is not None and abs(year - around) > spread:
        raise ValidationError(f"{field_name} 只能查詢 {around - spread} 到 {around + spread} 年")
    return year
