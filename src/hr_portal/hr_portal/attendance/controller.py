from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..auth.decorators import make_token_required
from ..common.validators import require_iso_date, require_non_empty
from ..core.enums import ApiCode
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from .model import WorkQueryRequest

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.token_verifier)
    service = container.attendance_service

    @app.route("/api/AttendanceQuery", methods=["GET"], endpoint="attendance_query")
    def attendance_query():
        try:
            employee_no = require_non_empty(request.args.get("employeeNo", ""), "employeeNo")
            work_date = require_iso_date(request.args.get("date", ""), "date")
            record = service.get_daily_record(employee_no, work_date)
            return jsonify(record.to_dict())
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"message": "查無出勤記錄", "detail": str(e)}), 404
        except Exception:
            logger.exception("attendance query failed")
            return jsonify({"message": "查詢出勤記錄時發生錯誤"}), 500

    @app.route("/api/AttendanceQuery/all", methods=["GET"], endpoint="attendance_query_all")
    def attendance_query_all():
        try:
            work_date = require_iso_date(request.args.get("date", ""), "date")
            records = service.get_all_daily_records(work_date)
            return jsonify(
                {
                    "date": work_date.strftime("%Y/%m/%d"),
                    "totalCount": len(records),
                    "records": [{"employeeNo": no, **rec.to_dict()} for no, rec in records],
                }
            )
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except Exception:
            logger.exception("attendance query (all) failed")
            return jsonify({"message": "查詢出勤記錄時發生錯誤"}), 500

    @app.route("/app/WorkQuery", methods=["POST"], endpoint="work_query")
    @token_required(WorkQueryRequest)
    def work_query(req: WorkQueryRequest):
        try:
            summary = service.get_monthly_work(req.uid, req.wyearmonth)
            return jsonify({"code": ApiCode.OK.value, "msg": "查詢成功", "data": summary.to_dict()})
        except ValidationError as e:
            return jsonify({"code": ApiCode.BAD_REQUEST.value, "msg": str(e)})
        except Exception as e:
            logger.exception("work query failed uid=%s month=%s", req.uid, req.wyearmonth)
            return jsonify({"code": ApiCode.ERROR.value, "msg": f"查詢失敗: {e}"})
