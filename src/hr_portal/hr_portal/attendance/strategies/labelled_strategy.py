from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.datetime_utils import is_real_punch
from ...core.constants import NOT_CLOCKED, PUNCH_DISPLAY_FORMAT, UNKNOWN_LABEL
from ...core.enums import AnomalyCode
from ..model import PunchDisplay
from .base import AnomalyStrategy


def label_for(code: str) -> str:
    try:
        return AnomalyCode(code).label
    except ValueError:
        return UNKNOWN_LABEL


class LabelledStrategy(AnomalyStrategy):
    """Late (1), early leave (2) and unknown codes keep their own label."""

    def display(self, *, actual_time: Optional[datetime], code: str) -> PunchDisplay:
        shown = actual_time.strftime(PUNCH_DISPLAY_FORMAT) if is_real_punch(actual_time) else NOT_CLOCKED
        return PunchDisplay(time=shown, status=label_for(code))
