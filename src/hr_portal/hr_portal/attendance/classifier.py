from __future__ import annotations

from datetime import datetime
from typing import Optional

from .factory import AnomalyStrategyFactory, clean_code
from .model import PunchDisplay

_default_factory = AnomalyStrategyFactory()


def classify(
    actual_time: Optional[datetime],
    anomaly_code: Optional[str],
    *,
    factory: AnomalyStrategyFactory | None = None,
) -> PunchDisplay:
    """Map one punch to the (time, status) pair shown to the employee."""
    code = clean_code(anomaly_code)
    strategy = (factory or _default_factory).for_code(code)
    return strategy.display(actual_time=actual_time, code=code)
