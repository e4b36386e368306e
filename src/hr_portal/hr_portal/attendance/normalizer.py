"""Turn raw punch-clock rows into per-day records.

``normalize`` builds the detailed :class:`AttendanceRecord` used by the daily
query; ``summarize_month`` builds the compact T/F view used by the monthly
work query. Both only look at the first row of each card type.
"""

from __future__ import annotations

from collections import OrderedDict
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import format_or_empty, is_real_punch
from ..core.constants import CLOCK_FORMAT, RECORD_DATE_FORMAT
from ..core.enums import CardType
from .classifier import classify
from .factory import AnomalyStrategyFactory, clean_code, is_normal_code
from .model import AttendanceRecord, DailyWorkRecord, RawPunchRow


def _first_of(rows: Iterable[RawPunchRow], card_type: CardType) -> Optional[RawPunchRow]:
    for row in rows:
        if row.card_type == card_type:
            return row
    return None


def normalize(
    rows: Sequence[RawPunchRow],
    query_date: date,
    *,
    factory: AnomalyStrategyFactory | None = None,
) -> Optional[AttendanceRecord]:
    """Return None when there is no row at all (not found, not "not clocked")."""
    if not rows:
        return None

    fields: dict[str, str] = {"date": query_date.strftime(RECORD_DATE_FORMAT)}

    clock_in = _first_of(rows, CardType.CLOCK_IN)
    if clock_in is not None:
        shown = classify(clock_in.actual_time, clock_in.anomaly_code, factory=factory)
        fields.update(
            clock_in_time=shown.time,
            clock_in_status=shown.status,
            clock_in_code=clean_code(clock_in.anomaly_code),
        )

    clock_out = _first_of(rows, CardType.CLOCK_OUT)
    if clock_out is not None:
        shown = classify(clock_out.actual_time, clock_out.anomaly_code, factory=factory)
        fields.update(
            clock_out_time=shown.time,
            clock_out_status=shown.status,
            clock_out_code=clean_code(clock_out.anomaly_code),
        )

    return AttendanceRecord(**fields)


def group_by_employee(rows: Iterable[RawPunchRow]) -> "OrderedDict[str, list[RawPunchRow]]":
    grouped: "OrderedDict[str, list[RawPunchRow]]" = OrderedDict()
    for row in rows:
        grouped.setdefault(row.employee_no, []).append(row)
    return grouped


def _side(row: Optional[RawPunchRow]) -> tuple[str, str, str]:
    """(expected, actual, T/F/'') for one side of the day."""
    if row is None:
        return "", "", ""
    expected = format_or_empty(row.expected_time, CLOCK_FORMAT)
    if not is_real_punch(row.actual_time):
        return expected, "", ""
    status = "T" if is_normal_code(row.anomaly_code) else "F"
    return expected, row.actual_time.strftime(CLOCK_FORMAT), status


def summarize_day(work_date: date, rows: Sequence[RawPunchRow]) -> DailyWorkRecord:
    clockin, checkin, statusin = _side(_first_of(rows, CardType.CLOCK_IN))
    clockout, checkout, statusout = _side(_first_of(rows, CardType.CLOCK_OUT))
    onduty = "F" if "F" in (statusin, statusout) else "T"
    return DailyWorkRecord(
        date=work_date.isoformat(),
        clockin=clockin,
        checkin=checkin,
        statusin=statusin,
        clockout=clockout,
        checkout=checkout,
        statusout=statusout,
        onduty=onduty,
    )


def summarize_month(rows: Iterable[RawPunchRow]) -> list[DailyWorkRecord]:
    by_date: dict[date, list[RawPunchRow]] = {}
    for row in rows:
        by_date.setdefault(row.work_date, []).append(row)
    return [summarize_day(d, by_date[d]) for d in sorted(by_date)]
