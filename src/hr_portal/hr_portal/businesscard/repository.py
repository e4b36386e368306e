from __future__ import annotations

from typing import Optional, Protocol

from .model import CardProfile


class CardProfileRepository(Protocol):
    def get_profile(self, employee_no: str, company_id: str) -> Optional[CardProfile]:
        raise NotImplementedError
