from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests

from ..core.exceptions import ExternalServiceError
from ..settings import BpmSettings

logger = logging.getLogger(__name__)


class BpmClient:
    """Thin JSON client for the BPM middleware (Bearer token auth)."""

    def __init__(self, settings: BpmSettings, *, session: requests.Session | None = None):
        self._base_url = settings.base_url.rstrip("/")
        self._timeout = settings.timeout
        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json", "Accept": "application/json"})
        if settings.api_token:
            self._session.headers.update({"Authorization": f"Bearer {settings.api_token}"})

    def _url(self, endpoint: str) -> str:
        return f"{self._base_url}/{endpoint.lstrip('/')}"

    def _send(self, method: str, endpoint: str, **kwargs) -> Any:
        url = self._url(endpoint)
        logger.info("bpm %s %s", method, url)
        try:
            resp = self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as e:
            logger.error("bpm %s %s failed: %s", method, url, e)
            raise ExternalServiceError(f"BPM 連線失敗: {e}") from e

        if not resp.ok:
            logger.error("bpm %s %s http %s: %s", method, url, resp.status_code, resp.text[:500])
            raise ExternalServiceError(f"BPM API 呼叫失敗: {resp.status_code}")

        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError as e:
            raise ExternalServiceError("BPM 回應不是有效的 JSON") from e

    def get(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self._send("GET", endpoint, params=params)

    def post(self, endpoint: str, payload: Mapping[str, Any]) -> Any:
        return self._send("POST", endpoint, json=dict(payload))

    def test_connection(self) -> bool:
        try:
            self.get("health")
            return True
        except ExternalServiceError as e:
            logger.warning("bpm connection test failed: %s", e)
            return False

    def get_user_id_by_email(self, email: str) -> Optional[str]:
        data = self.get("user/by-email", params={"email": email})
        user_id = (data or {}).get("userId") if isinstance(data, dict) else None
        return str(user_id) if user_id else None

    def invoke_process(
        self,
        *,
        process_code: str,
        form_code: str,
        form_data: Mapping[str, Any],
        user_id: str,
        subject: str,
        source_system: str,
        environment: str,
        file_path: Optional[str] = None,
    ) -> dict:
        """Start a BPM process; returns the raw response (requestId, processSerialNo, status, ...)."""
        payload = {
            "processCode": process_code,
            "formDataMap": {form_code: dict(form_data)},
            "userId": user_id,
            "subject": subject,
            "sourceSystem": source_system,
            "environment": environment,
            "hasAttachments": bool(file_path),
            "filePath": file_path,
        }
        data = self.post("bpm/invoke-process", payload)
        return data if isinstance(data, dict) else {}

    def cancel_form(self, *, form_code: str, form_id: str, user_id: str, reason: str) -> dict:
        data = self.post(
            f"forms/{form_code}/instances/{form_id}/cancel",
            {"userId": user_id, "employeeNo": user_id, "reason": reason},
        )
        return data if isinstance(data, dict) else {}
