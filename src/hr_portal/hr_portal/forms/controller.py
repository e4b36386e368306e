from __future__ import annotations

import logging
import posixpath
from io import BytesIO

from flask import Flask, jsonify, request, send_file

from ..auth.decorators import make_token_required
from ..auth.model import parse_request
from ..core.enums import ApiCode
from ..core.exceptions import ExternalServiceError, ValidationError
from ..container import Container
from .model import (
    AttachmentPathRequest,
    AttachmentUploadRequest,
    BusinessTripFormRequest,
    CancelLeaveRequest,
    LeaveFormSubmitRequest,
    OvertimeApplyRequest,
)

logger = logging.getLogger(__name__)

_CONDITION_FAILED = "請求失敗，主要條件不符合"


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.token_verifier)
    store = container.attachment_store

    @app.route("/app/efleaveform", methods=["POST"], endpoint="leave_form_submit")
    @token_required(LeaveFormSubmitRequest)
    def leave_form_submit(req: LeaveFormSubmitRequest):
        try:
            result = container.leave_form_service.submit(req)
            return jsonify(
                {
                    "code": ApiCode.OK.value,
                    "msg": "請求成功",
                    "formid": result.form_id,
                    "formnumber": result.form_number,
                }
            )
        except ValidationError as e:
            return jsonify({"code": ApiCode.FAILED.value, "msg": f"{_CONDITION_FAILED}: {e}"})
        except ExternalServiceError as e:
            logger.exception("leave form BPM call failed uid=%s", req.uid)
            return jsonify({"code": ApiCode.FAILED.value, "msg": f"請求失敗: {e}"})
        except Exception as e:
            logger.exception("leave form submit failed uid=%s", req.uid)
            return jsonify({"code": ApiCode.FAILED.value, "msg": f"請求失敗: {e}"})

    @app.route("/app/efotapply", methods=["POST"], endpoint="overtime_apply")
    @token_required(OvertimeApplyRequest)
    def overtime_apply(req: OvertimeApplyRequest):
        try:
            result = container.overtime_form_service.apply(req)
            return jsonify({"code": ApiCode.OK.value, "msg": "請求成功", "formid": result.form_id})
        except ValidationError as e:
            logger.warning("overtime apply rejected uid=%s: %s", req.uid, e)
            return jsonify({"code": ApiCode.FAILED.value, "msg": _CONDITION_FAILED})
        except Exception:
            logger.exception("overtime apply failed uid=%s", req.uid)
            return jsonify({"code": ApiCode.ERROR.value, "msg": "系統錯誤"})

    @app.route("/app/efleavecancel", methods=["POST"], endpoint="leave_cancel")
    @token_required(CancelLeaveRequest)
    def leave_cancel(req: CancelLeaveRequest):
        try:
            container.cancel_leave_service.cancel(req)
            return jsonify({"code": ApiCode.OK.value, "msg": "請求成功"})
        except ValidationError as e:
            logger.warning("leave cancel rejected uid=%s form=%s: %s", req.uid, req.formid, e)
            return jsonify({"code": ApiCode.FAILED.value, "msg": f"請求失敗，{e}"})
        except Exception:
            logger.exception("leave cancel failed uid=%s form=%s", req.uid, req.formid)
            return jsonify({"code": ApiCode.FAILED.value, "msg": _CONDITION_FAILED})

    @app.route("/api/BusinessTripForm", methods=["POST"], endpoint="business_trip_create")
    def business_trip_create():
        req = parse_request(BusinessTripFormRequest, request.form.to_dict())
        uploads = request.files.getlist("Attachments") + request.files.getlist("attachments")
        files = [(f.stream, f.filename) for f in uploads if f and f.filename]
        try:
            result = container.business_trip_form_service.create(req, files)
            return jsonify(
                {
                    "success": True,
                    "message": "出差表單申請成功",
                    "formId": result.form_id,
                    "formNumber": result.form_number,
                }
            )
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e), "errorCode": "VALIDATION_FAILED"}), 400
        except ExternalServiceError as e:
            logger.exception("business trip BPM/FTP call failed email=%s", req.email)
            return jsonify({"success": False, "message": f"申請失敗: {e}", "errorCode": "CREATE_FAILED"}), 400
        except Exception as e:
            logger.exception("business trip create failed email=%s location=%s", req.email, req.location)
            return jsonify({"message": "申請出差表單時發生錯誤", "error": str(e)}), 500

    @app.route("/app/attachment/upload", methods=["POST"], endpoint="attachment_upload")
    @token_required(AttachmentUploadRequest)
    def attachment_upload(req: AttachmentUploadRequest):
        files = [f for f in request.files.getlist("files") if f and f.filename]
        if not files:
            return jsonify({"code": ApiCode.FAILED.value, "msg": "請求失敗，未選擇檔案", "data": []})
        try:
            paths = store.upload_many(((f.stream, f.filename) for f in files), sub_dir=req.uid)
            data = [{"filename": f.filename, "path": p} for f, p in zip(files, paths)]
            return jsonify({"code": ApiCode.OK.value, "msg": "請求成功", "data": data})
        except (ValidationError, ExternalServiceError) as e:
            logger.exception("attachment upload failed uid=%s", req.uid)
            return jsonify({"code": ApiCode.FAILED.value, "msg": f"請求失敗: {e}", "data": []})
        except Exception:
            logger.exception("attachment upload crashed uid=%s", req.uid)
            return jsonify({"code": ApiCode.FAILED.value, "msg": "請求失敗，系統發生錯誤", "data": []})

    @app.route("/app/attachment/list", methods=["POST"], endpoint="attachment_list")
    @token_required(AttachmentUploadRequest)
    def attachment_list(req: AttachmentUploadRequest):
        try:
            paths = store.list_files(store.owner_dir(req.uid))
            data = [{"filename": posixpath.basename(p), "path": p} for p in paths]
            return jsonify({"code": ApiCode.OK.value, "msg": "請求成功", "data": data})
        except ExternalServiceError as e:
            logger.exception("attachment list failed uid=%s", req.uid)
            return jsonify({"code": ApiCode.FAILED.value, "msg": f"請求失敗: {e}", "data": []})

    def _owned_existing(req: AttachmentPathRequest):
        if not store.owns(req.path, req.uid):
            return jsonify({"code": ApiCode.FAILED.value, "msg": "請求失敗，無權存取此附件"}), 403
        if not store.exists(req.path):
            return jsonify({"code": ApiCode.FAILED.value, "msg": "請求失敗，附件不存在"}), 404
        return None

    @app.route("/app/attachment/download", methods=["POST"], endpoint="attachment_download")
    @token_required(AttachmentPathRequest)
    def attachment_download(req: AttachmentPathRequest):
        try:
            denied = _owned_existing(req)
            if denied:
                return denied
            content = store.download(req.path)
        except ExternalServiceError as e:
            logger.exception("attachment download failed uid=%s path=%s", req.uid, req.path)
            return jsonify({"code": ApiCode.FAILED.value, "msg": f"請求失敗: {e}"})
        return send_file(BytesIO(content), as_attachment=True, download_name=posixpath.basename(req.path))

    @app.route("/app/attachment/delete", methods=["POST"], endpoint="attachment_delete")
    @token_required(AttachmentPathRequest)
    def attachment_delete(req: AttachmentPathRequest):
        try:
            denied = _owned_existing(req)
            if denied:
                return denied
            store.delete(req.path)
            logger.info("attachment deleted uid=%s path=%s", req.uid, req.path)
            return jsonify({"code": ApiCode.OK.value, "msg": "請求成功"})
        except ExternalServiceError as e:
            logger.exception("attachment delete failed uid=%s path=%s", req.uid, req.path)
            return jsonify({"code": ApiCode.FAILED.value, "msg": f"請求失敗: {e}"})
