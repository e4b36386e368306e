from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..auth.decorators import make_token_required
from ..core.enums import ApiCode
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from .model import BusinessCardRequest

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.token_verifier)
    service = container.business_card_service

    @app.route("/app/businesscard", methods=["POST"], endpoint="business_card")
    @token_required(BusinessCardRequest)
    def business_card(req: BusinessCardRequest):
        try:
            card = service.get_card(req.uid, req.cid)
            return jsonify({"code": ApiCode.OK.value, "msg": "成功", "data": card.to_dict()})
        except (ValidationError, NotFoundError):
            return jsonify({"code": ApiCode.FAILED.value, "msg": "請求失敗，主要條件不符合"})
        except Exception:
            logger.exception("business card failed uid=%s", req.uid)
            return jsonify({"code": ApiCode.ERROR.value, "msg": "請求失敗，系統發生錯誤"})
