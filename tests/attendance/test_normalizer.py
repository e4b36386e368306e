from __future__ import annotations

from datetime import date, datetime

from src.hr_portal.hr_portal.attendance.model import RawPunchRow
from src.hr_portal.hr_portal.attendance.normalizer import group_by_employee, normalize, summarize_month
from src.hr_portal.hr_portal.core.enums import CardType

DAY = date(2025, 10, 31)


def _row(card_type, actual=None, code="", *, expected=None, work_date=DAY, employee_no="0325"):
    return RawPunchRow(
        employee_id=f"E{employee_no}",
        employee_no=employee_no,
        work_date=work_date,
        card_type=card_type,
        expected_time=expected,
        actual_time=actual,
        anomaly_code=code,
    )


def test_no_rows_means_no_record():
    assert normalize([], DAY) is None


def test_missing_clock_out_row_defaults_to_not_clocked():
    record = normalize([_row(CardType.CLOCK_IN, datetime(2025, 10, 31, 8, 0), "4")], DAY)

    assert record is not None
    assert record.clock_out_time == "應刷未刷"
    assert record.clock_out_status == "應刷未刷"
    assert record.clock_out_code == ""
    assert record.clock_in_time == "應刷未刷"
    assert record.clock_in_code == "4"


def test_late_clock_in_is_displayed_with_time_and_label():
    record = normalize([_row(CardType.CLOCK_IN, datetime(2025, 10, 31, 8, 30, 0), "1")], DAY)

    assert record.date == "2025/10/31"
    assert record.clock_in_time == "2025/10/31 08:30:00"
    assert record.clock_in_status == "遲到"
    assert record.clock_in_code == "1"


def test_output_does_not_depend_on_row_order():
    rows = [
        _row(CardType.CLOCK_IN, datetime(2025, 10, 31, 8, 30), "1"),
        _row(CardType.CLOCK_OUT, datetime(2025, 10, 31, 21, 0), " 3 "),
    ]

    first = normalize(rows, DAY)
    second = normalize(list(reversed(rows)), DAY)

    assert first == second
    assert first.to_dict() == {
        "date": "2025/10/31",
        "clockInTime": "2025/10/31 08:30:00",
        "clockInStatus": "遲到",
        "clockOutTime": "2025/10/31 21:00:00",
        "clockOutStatus": "正常",
        "clockInCode": "1",
        "clockOutCode": "3",
    }


def test_group_by_employee_keeps_first_seen_order():
    rows = [
        _row(CardType.CLOCK_IN, employee_no="B"),
        _row(CardType.CLOCK_IN, employee_no="A"),
        _row(CardType.CLOCK_OUT, employee_no="B"),
    ]

    grouped = group_by_employee(rows)

    assert list(grouped) == ["B", "A"]
    assert len(grouped["B"]) == 2


def test_summarize_month_sorts_by_date_and_flags_abnormal_days():
    d1 = date(2025, 10, 1)
    d2 = date(2025, 10, 2)
    rows = [
        _row(CardType.CLOCK_IN, datetime(2025, 10, 2, 8, 30), "1", expected=datetime(2025, 10, 2, 8, 0), work_date=d2),
        _row(CardType.CLOCK_OUT, datetime(2025, 10, 2, 17, 5), "", expected=datetime(2025, 10, 2, 17, 0), work_date=d2),
        _row(CardType.CLOCK_IN, datetime(2025, 10, 1, 7, 55), "", expected=datetime(2025, 10, 1, 8, 0), work_date=d1),
        _row(CardType.CLOCK_OUT, None, "0", expected=datetime(2025, 10, 1, 17, 0), work_date=d1),
    ]

    first, second = summarize_month(rows)

    assert first.date == "2025-10-01"
    assert (first.clockin, first.checkin, first.statusin) == ("08:00:00", "07:55:00", "T")
    assert (first.clockout, first.checkout, first.statusout) == ("17:00:00", "", "")
    assert first.onduty == "T"

    assert second.date == "2025-10-02"
    assert (second.checkin, second.statusin) == ("08:30:00", "F")
    assert second.statusout == "T"
    assert second.onduty == "F"
