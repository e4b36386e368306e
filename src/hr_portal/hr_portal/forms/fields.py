"""Field formatting shared by the BPM forms."""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

from ..common.validators import require_iso_date, require_non_empty
from ..core.constants import APPLIER_UNIT, ATTACHMENT_PATH_SEPARATOR
from ..core.exceptions import ValidationError
from ..employees.model import Employee


def slash_date(value: str, field_name: str) -> str:
    return require_date(value, field_name).strftime("%Y/%m/%d")


def require_date(value: str, field_name: str) -> date:
    """yyyy-MM-dd, or yyyy/MM/dd as the BPM pages send it."""
    return require_iso_date(str(value or "").replace("/", "-"), field_name)


def require_clock(value: str, field_name: str) -> str:
    raw = require_non_empty(value, field_name)
    try:
        return datetime.strptime(raw, "%H:%M").strftime("%H:%M")
    except ValueError:
        raise ValidationError(f"{field_name} 格式錯誤，請使用 HH:mm")


def require_period(start_date: str, start_time: str, end_date: str, end_time: str) -> tuple[datetime, datetime]:
    start = datetime.combine(require_date(start_date, "estartdate"), _clock(require_clock(start_time, "estarttime")))
    end = datetime.combine(require_date(end_date, "eenddate"), _clock(require_clock(end_time, "eendtime")))
    if end <= start:
        raise ValidationError("結束時間必須晚於開始時間")
    return start, end


def _clock(value: str):
    return datetime.strptime(value, "%H:%M").time()


def join_paths(paths: Iterable[str]) -> str | None:
    cleaned = [p.strip() for p in paths if p and p.strip()]
    return ATTACHMENT_PATH_SEPARATOR.join(cleaned) or None


def split_paths(value: str) -> list[str]:
    return (value or "").split(ATTACHMENT_PATH_SEPARATOR)


def filler_fields(employee: Employee) -> dict:
    """Who filled in the form; BPM copies these into the approval chain."""
    return {
        "fillerId": employee.employee_no,
        "fillerName": employee.name,
        "fillerUnitName": employee.department_name or "",
        "applier": employee.employee_no,
        "applierUnit": APPLIER_UNIT,
        "cpf01": employee.employee_no,
        "companyNo": employee.company_id,
    }
