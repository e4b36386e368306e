from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.datetime_utils import is_real_punch
from ...core.constants import NORMAL_LABEL, PUNCH_DISPLAY_FORMAT
from ..model import NOT_CLOCKED_DISPLAY, PunchDisplay
from .base import AnomalyStrategy


class NormalStrategy(AnomalyStrategy):
    """Blank code and overtime attendance (3) both read as 正常."""

    def display(self, *, actual_time: Optional[datetime], code: str) -> PunchDisplay:
        if not is_real_punch(actual_time):
            return NOT_CLOCKED_DISPLAY
        return PunchDisplay(time=actual_time.strftime(PUNCH_DISPLAY_FORMAT), status=NORMAL_LABEL)
