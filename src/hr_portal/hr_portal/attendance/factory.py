from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import AnomalyCode
from .strategies.base import AnomalyStrategy
from .strategies.labelled_strategy import LabelledStrategy
from .strategies.normal_strategy import NormalStrategy
from .strategies.not_clocked_strategy import NotClockedStrategy

_NOT_CLOCKED_CODES = frozenset({AnomalyCode.NOT_CLOCKED.value, AnomalyCode.ABSENT.value})
_NORMAL_CODES = frozenset({AnomalyCode.NORMAL.value, AnomalyCode.OVERTIME_ATTENDANCE.value})


def clean_code(code: Optional[str]) -> str:
    return (code or "").strip()


def is_normal_code(code: Optional[str]) -> bool:
    return clean_code(code) in _NORMAL_CODES


@dataclass
class AnomalyStrategyFactory:
    """Factory Pattern: choose the display strategy for an anomaly code.

    Order matters: not-clocked codes first, then normal codes, everything else
    keeps its own label.
    """

    not_clocked: AnomalyStrategy = field(default_factory=NotClockedStrategy)
    normal: AnomalyStrategy = field(default_factory=NormalStrategy)
    labelled: AnomalyStrategy = field(default_factory=LabelledStrategy)

    def for_code(self, code: Optional[str]) -> AnomalyStrategy:
        code = clean_code(code)
        if code in _NOT_CLOCKED_CODES:
            return self.not_clocked
        if code in _NORMAL_CODES:
            return self.normal
        return self.labelled
