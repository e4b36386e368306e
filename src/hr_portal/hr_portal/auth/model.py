from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Protocol, Type, TypeVar, runtime_checkable


@runtime_checkable
class HasAuthFields(Protocol):
    """Anything carrying the tokenid/uid/cid triple checked by token_required."""

    tokenid: str
    uid: str
    cid: str


@dataclass(frozen=True)
class AuthRequest:
    tokenid: str = ""
    cid: str = ""
    uid: str = ""

    def missing_auth_fields(self) -> bool:
        return not all(str(v or "").strip() for v in (self.tokenid, self.uid, self.cid))


@dataclass(frozen=True)
class TokenVerifyResult:
    code: str
    msg: str

    @property
    def valid(self) -> bool:
        return self.code == "200"


R = TypeVar("R")


def parse_request(request_type: Type[R], payload: Mapping[str, Any] | None) -> R:
    """Build a request DTO from a JSON/form body; keys match case-insensitively."""
    lowered = {str(k).lower(): v for k, v in (payload or {}).items()}
    kwargs: dict[str, Any] = {}
    for f in fields(request_type):
        value = lowered.get(f.name.lower())
        if value is None:
            continue
        kwargs[f.name] = value.strip() if isinstance(value, str) else value
    return request_type(**kwargs)
