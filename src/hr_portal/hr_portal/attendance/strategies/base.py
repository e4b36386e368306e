from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ..model import PunchDisplay


class AnomalyStrategy(ABC):
    """Strategy Pattern: decide how one punch is displayed for its anomaly code."""

    @abstractmethod
    def display(self, *, actual_time: Optional[datetime], code: str) -> PunchDisplay:
        raise NotImplementedError
