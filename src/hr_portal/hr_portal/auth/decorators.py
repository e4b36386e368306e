from __future__ import annotations

import logging
from functools import wraps
from typing import Type

from flask import jsonify, request

from ..core.enums import ApiCode
from .model import AuthRequest, parse_request
from .token_client import TokenVerifier

logger = logging.getLogger(__name__)


def make_token_required(verifier: TokenVerifier):
    """Build a ``token_required(request_type)`` decorator bound to ``verifier``.

    The wrapped view receives the parsed request DTO as its first argument.
    """

    def token_required(request_type: Type[AuthRequest] = AuthRequest):
        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                if request.is_json:
                    payload = request.get_json(silent=True) or {}
                else:
                    payload = request.form.to_dict()
                req = parse_request(request_type, payload)

                if req.missing_auth_fields():
                    logger.warning("token check: missing fields uid=%s cid=%s", req.uid, req.cid)
                    return jsonify({"code": ApiCode.BAD_REQUEST.value, "msg": "缺少必要參數: tokenid, uid, cid"}), 400

                try:
                    result = verifier.verify(req)
                except Exception as e:
                    logger.exception("token check crashed")
                    return jsonify({"code": ApiCode.ERROR.value, "msg": f"Token 驗證過程發生錯誤: {e}"}), 500

                if not result.valid:
                    logger.warning("token check rejected: %s (uid=%s)", result.msg, req.uid)
                    return jsonify({"code": result.code, "msg": result.msg}), 401

                return view(req, *args, **kwargs)

            return wrapper

        return decorator

    return token_required
