from __future__ import annotations

from decimal import Decimal

from ..model import format_decimal
from .standard_calculator import StandardBalanceCalculator


class UsedOnlyBalanceCalculator(StandardBalanceCalculator):
    """病假: no remaining quota is shown, only what was used in the window."""

    tracks_remaining = False

    def display_text(self, days: Decimal, hours: Decimal) -> str:
        if days > 0 and hours > 0:
            return f"已使用 {format_decimal(days)} 天 {format_decimal(hours)} 小時"
        if days > 0:
            return f"已使用 {format_decimal(days)} 天"
        if hours > 0:
            return f"已使用 {format_decimal(hours)} 小時"
        return "尚未使用"
