from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..auth.decorators import make_token_required
from ..common.validators import require_non_empty, require_year
from ..core.enums import ApiCode
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from .model import LeaveBalanceRequest

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.token_verifier)
    service = container.leave_service

    def _query_year(*, bounded: bool):
        raw = request.args.get("year")
        if raw is None or not raw.strip():
            return None
        around = service.current_year() if bounded else None
        return require_year(raw, "year", around=around)

    def _employee_no() -> str:
        return require_non_empty(request.args.get("employeeNo", ""), "employeeNo")

    @app.route("/app/LeaveBalance", methods=["POST"], endpoint="leave_balance")
    @token_required(LeaveBalanceRequest)
    def leave_balance(req: LeaveBalanceRequest):
        try:
            year = require_year(require_non_empty(req.ryear, "ryear"), "ryear")
            rows = service.get_quota_rows(req.uid, year, company_id=req.cid)
            return jsonify({"code": ApiCode.OK.value, "msg": "查詢成功", "data": rows})
        except (ValidationError, NotFoundError) as e:
            return jsonify({"code": ApiCode.ERROR.value, "msg": str(e), "data": []})
        except Exception:
            logger.exception("leave balance failed uid=%s year=%s", req.uid, req.ryear)
            return jsonify({"code": ApiCode.ERROR.value, "msg": "請求失敗", "data": []})

    @app.route("/api/LeaveRemain", methods=["GET"], endpoint="leave_remain")
    def leave_remain():
        try:
            result = service.get_leave_remain(_employee_no(), _query_year(bounded=True))
            return jsonify(result.to_dict())
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"message": str(e)}), 404
        except Exception as e:
            logger.exception("leave remain failed")
            return jsonify({"message": "查詢失敗", "error": str(e)}), 500

    @app.route("/api/LeaveRemain/two-years", methods=["GET"], endpoint="leave_remain_two_years")
    def leave_remain_two_years():
        try:
            results = service.get_leave_remain_two_years(_employee_no())
            return jsonify([r.to_dict() for r in results])
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"message": str(e)}), 404
        except Exception as e:
            logger.exception("leave remain (two years) failed")
            return jsonify({"message": "查詢失敗", "error": str(e)}), 500

    @app.route("/api/LeaveRemain/anniversary-period", methods=["GET"], endpoint="leave_anniversary_period")
    def leave_anniversary_period():
        try:
            window = service.get_window(_employee_no(), _query_year(bounded=False))
            start = window.start_date.strftime("%Y/%m/%d")
            end = window.end_date.strftime("%Y/%m/%d")
            return jsonify(
                {
                    "employeeNo": window.employee_no,
                    "year": window.year,
                    "anniversaryStart": start,
                    "anniversaryEnd": end,
                    "description": f"周年制區間：{start} ~ {end}",
                }
            )
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"message": str(e)}), 404
        except Exception as e:
            logger.exception("anniversary period failed")
            return jsonify({"message": "查詢失敗", "error": str(e)}), 500
