from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..model import NOT_CLOCKED_DISPLAY, PunchDisplay
from .base import AnomalyStrategy


class NotClockedStrategy(AnomalyStrategy):
    """Codes 0 (not clocked) and 4 (absent): the punch time is never shown."""

    def display(self, *, actual_time: Optional[datetime], code: str) -> PunchDisplay:
        return NOT_CLOCKED_DISPLAY
