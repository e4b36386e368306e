from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..auth.decorators import make_token_required
from ..core.enums import ApiCode, VerificationOutcome
from ..core.exceptions import ExternalServiceError, NotFoundError, ValidationError
from ..container import Container
from .model import SendCodeCheckRequest, SendCodeRequest

logger = logging.getLogger(__name__)

_CHECK_MESSAGES = {
    VerificationOutcome.VALID: "請求成功",
    VerificationOutcome.NOT_FOUND: "請求失敗，找不到驗證碼或驗證碼已過期",
    VerificationOutcome.USED: "請求失敗，驗證碼已被使用",
    VerificationOutcome.EXPIRED: "請求失敗，驗證碼已過期",
    VerificationOutcome.INVALID: "請求失敗，驗證碼不正確",
}


def _failed(msg: str):
    return jsonify({"code": ApiCode.FAILED.value, "msg": msg})


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.token_verifier)
    service = container.salary_verification_service

    @app.route("/app/sendcode", methods=["POST"], endpoint="salary_send_code")
    @token_required(SendCodeRequest)
    def salary_send_code(req: SendCodeRequest):
        try:
            service.send_code(req.cid, req.uid)
            return jsonify({"code": ApiCode.OK.value, "msg": "請求成功"})
        except ValidationError:
            return _failed("請求失敗，參數驗證不通過")
        except NotFoundError as e:
            return _failed(str(e))
        except ExternalServiceError:
            logger.exception("send code mail failed uid=%s", req.uid)
            return _failed("請求失敗，Email 發送失敗")
        except Exception:
            logger.exception("send code failed uid=%s", req.uid)
            return _failed("請求失敗，系統發生錯誤")

    @app.route("/app/sendcodecheck", methods=["POST"], endpoint="salary_send_code_check")
    @token_required(SendCodeCheckRequest)
    def salary_send_code_check(req: SendCodeCheckRequest):
        if not str(req.verificationcode or "").strip():
            return _failed("請求失敗，參數驗證不通過")
        try:
            outcome = service.verify_code(req.cid, req.uid, req.verificationcode)
        except Exception:
            logger.exception("verify code failed uid=%s", req.uid)
            return _failed("請求失敗，系統發生錯誤")

        if outcome != VerificationOutcome.VALID:
            logger.warning("verify code rejected uid=%s outcome=%s", req.uid, outcome.value)
            return _failed(_CHECK_MESSAGES[outcome])
        return jsonify({"code": ApiCode.OK.value, "msg": _CHECK_MESSAGES[outcome]})
