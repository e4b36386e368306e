from __future__ import annotations

from collections import OrderedDict
from decimal import Decimal
from typing import Callable, Iterable, Mapping, Sequence

from .calculator.base import BalanceCalculator
from .calculator.standard_calculator import StandardBalanceCalculator
from .model import LeaveEntitlementWindow, LeaveGrantRow, LeaveTypeBalance, LeaveUsageRow

_ZERO = Decimal("0")


def split_hours(hours: Decimal, day_work_hours: Decimal) -> tuple[Decimal, Decimal]:
    """Whole days plus leftover hours; negative input is treated as 0."""
    hours = max(hours, _ZERO)
    days = (hours // day_work_hours).to_integral_value()
    return days, hours - days * day_work_hours


def _granted_by_type(
    window: LeaveEntitlementWindow,
    grants: Iterable[LeaveGrantRow],
    day_work_hours: Decimal,
    pick: Callable[[str], BalanceCalculator],
) -> "OrderedDict[str, tuple[LeaveGrantRow, Decimal]]":
    totals: "OrderedDict[str, tuple[LeaveGrantRow, Decimal]]" = OrderedDict()
    for grant in grants:
        if grant.grant_date is not None and not window.contains(grant.grant_date):
            continue
        code = grant.leave_type_code
        first, hours = totals.get(code, (grant, _ZERO))
        totals[code] = (first, hours + pick(code).granted_hours(grant, day_work_hours))
    return totals


def _used_by_type(
    window: LeaveEntitlementWindow,
    usages: Iterable[LeaveUsageRow],
    pick: Callable[[str], BalanceCalculator],
) -> dict[str, Decimal]:
    used: dict[str, Decimal] = {}
    for usage in usages:
        if not usage.is_counted or not window.contains(usage.start.date()):
            continue
        code = usage.leave_type_code
        used[code] = used.get(code, _ZERO) + pick(code).used_hours(usage)
    return used


def _balance(
    code: str,
    grant: LeaveGrantRow,
    total_hours: Decimal,
    used_hours: Decimal,
    day_work_hours: Decimal,
    calculator: BalanceCalculator,
) -> LeaveTypeBalance:
    if calculator.tracks_remaining:
        remaining_total = total_hours - used_hours
        remaining_days, remaining_hours = split_hours(remaining_total, day_work_hours)
        display_text = calculator.display_text(remaining_days, remaining_hours)
    else:
        total_hours = remaining_total = remaining_days = remaining_hours = _ZERO
        display_text = calculator.display_text(*split_hours(used_hours, day_work_hours))

    return LeaveTypeBalance(
        leave_type_code=code,
        leave_type_name=grant.leave_type_name,
        min_unit_hours=grant.min_unit_hours,
        total_days=total_hours / day_work_hours,
        total_hours=total_hours,
        used_days=used_hours / day_work_hours,
        used_hours=used_hours,
        remaining_days=remaining_days,
        remaining_hours=remaining_hours,
        remaining_total_hours=remaining_total,
        display_text=display_text,
    )


def aggregate(
    window: LeaveEntitlementWindow,
    grants: Sequence[LeaveGrantRow],
    usages: Sequence[LeaveUsageRow],
    day_work_hours: Decimal | int,
    *,
    calculator: BalanceCalculator | None = None,
    calculators: Mapping[str, BalanceCalculator] | None = None,
) -> list[LeaveTypeBalance]:
    """Per leave type balances for ``window``, in the order grants first appear.

    ``calculators`` overrides ``calculator`` per leave type code. Types without a
    positive grant in the window are left out unless their calculator does not
    track a remaining quota; usage of a type that has no grant is ignored.
    ``remaining_total_hours`` may go negative when usage exceeds the grant, the
    days/hours split never does.
    """
    calculator = calculator or StandardBalanceCalculator()
    calculators = dict(calculators or {})
    day_work_hours = Decimal(day_work_hours)
    if day_work_hours <= 0:
        raise ValueError("day_work_hours must be positive")

    def pick(code: str) -> BalanceCalculator:
        return calculators.get(code, calculator)

    granted = _granted_by_type(window, grants, day_work_hours, pick)
    used = _used_by_type(window, usages, pick)

    balances: list[LeaveTypeBalance] = []
    for code, (grant, total_hours) in granted.items():
        calc = pick(code)
        if calc.tracks_remaining and total_hours <= 0:
            continue
        balances.append(_balance(code, grant, total_hours, used.get(code, _ZERO), day_work_hours, calc))
    return balances
