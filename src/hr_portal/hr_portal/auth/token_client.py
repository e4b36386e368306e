from __future__ import annotations

import logging

import requests

from ..core.enums import ApiCode
from .model import HasAuthFields, TokenVerifyResult

logger = logging.getLogger(__name__)


class TokenVerifier:
    """Client for the external tokenid verification endpoint.

    Never raises for transport problems: they come back as code "300" so the
    caller can answer 401 with the verifier's message.
    """

    def __init__(self, *, verify_url: str, timeout: float = 30, session: requests.Session | None = None):
        self._verify_url = verify_url
        self._timeout = timeout
        self._session = session or requests.Session()

    def verify(self, auth: HasAuthFields) -> TokenVerifyResult:
        payload = {"tokenid": auth.tokenid, "uid": auth.uid, "cid": auth.cid}
        logger.info("token verify url=%s uid=%s cid=%s", self._verify_url, auth.uid, auth.cid)
        try:
            resp = self._session.post(self._verify_url, json=payload, timeout=self._timeout)
        except requests.RequestException as e:
            logger.error("token verify failed: %s", e)
            return TokenVerifyResult(code=ApiCode.VERIFY_ERROR.value, msg=f"Token 驗證失敗: {e}")

        if not resp.ok:
            logger.warning("token verify http %s: %s", resp.status_code, resp.text[:200])
            return TokenVerifyResult(code=ApiCode.VERIFY_ERROR.value, msg="Token 驗證服務無法連線或回應異常")

        try:
            body = resp.json()
        except ValueError:
            logger.warning("token verify returned non-JSON body")
            return TokenVerifyResult(code=ApiCode.VERIFY_ERROR.value, msg="Token 驗證服務無法連線或回應異常")

        if not isinstance(body, dict):
            return TokenVerifyResult(code=ApiCode.VERIFY_ERROR.value, msg="Token 驗證服務無法連線或回應異常")

        result = TokenVerifyResult(code=str(body.get("code", "")), msg=str(body.get("msg", "")))
        logger.info("token verify result code=%s msg=%s", result.code, result.msg)
        return result
