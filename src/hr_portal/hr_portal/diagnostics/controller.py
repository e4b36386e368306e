from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..core.exceptions import ExternalServiceError
from ..container import Container

logger = logging.getLogger(__name__)


def _connection_result(name: str, ok: bool):
    body = {
        "success": ok,
        "message": f"{name} 連線成功" if ok else f"{name} 連線失敗",
        "timestamp": now_local().isoformat(timespec="seconds"),
    }
    return jsonify(body), 200 if ok else 400


def register(app: Flask, container: Container) -> None:
    """Connectivity checks for BPM and FTP; only mounted when DIAGNOSTICS_ENABLED."""
    bpm = container.bpm_client
    store = container.attachment_store

    @app.route("/api/Diagnostic/bpm/test-connection", methods=["GET"], endpoint="diagnostic_bpm")
    def diagnostic_bpm():
        return _connection_result("BPM", bpm.test_connection())

    @app.route("/api/Diagnostic/bpm/user", methods=["GET"], endpoint="diagnostic_bpm_user")
    def diagnostic_bpm_user():
        email = (request.args.get("email") or "").strip()
        if not email:
            return jsonify({"success": False, "message": "email 為必填"}), 400
        try:
            user_id = bpm.get_user_id_by_email(email)
        except ExternalServiceError as e:
            logger.warning("bpm user lookup failed email=%s: %s", email, e)
            return jsonify({"success": False, "message": str(e)}), 502
        if not user_id:
            return jsonify({"success": False, "message": "找不到 BPM 使用者"}), 404
        return jsonify({"success": True, "email": email, "userId": user_id})

    @app.route("/api/Diagnostic/ftp/test-connection", methods=["GET"], endpoint="diagnostic_ftp")
    def diagnostic_ftp():
        return _connection_result("FTP", store.test_connection())
