from __future__ import annotations

from dataclasses import dataclass

import pytest
import requests
from flask import Flask, jsonify

from src.hr_portal.hr_portal.auth.decorators import make_token_required
from src.hr_portal.hr_portal.auth.model import AuthRequest, TokenVerifyResult, parse_request
from src.hr_portal.hr_portal.auth.token_client import TokenVerifier


@dataclass(frozen=True)
class EchoRequest(AuthRequest):
    note: str = ""


class FakeVerifier:
    def __init__(self, result=None, error=None):
        self.result = result or TokenVerifyResult(code="200", msg="ok")
        self.error = error
        self.calls = []

    def verify(self, auth):
        self.calls.append(auth)
        if self.error:
            raise self.error
        return self.result


def _client(verifier):
    app = Flask(__name__)
    token_required = make_token_required(verifier)

    @app.route("/echo", methods=["POST"])
    @token_required(EchoRequest)
    def echo(req: EchoRequest):
        return jsonify({"uid": req.uid, "note": req.note})

    return app.test_client()


AUTH = {"tokenid": "t-1", "cid": "C01", "uid": "0325"}


def test_missing_auth_fields_is_400():
    verifier = FakeVerifier()

    resp = _client(verifier).post("/echo", json={"tokenid": "t-1", "uid": "0325"})

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "400"
    assert verifier.calls == []


def test_rejected_token_is_401_with_verifier_message():
    verifier = FakeVerifier(TokenVerifyResult(code="401", msg="Token 已過期"))

    resp = _client(verifier).post("/echo", json=AUTH)

    assert resp.status_code == 401
    assert resp.get_json() == {"code": "401", "msg": "Token 已過期"}


def test_verifier_crash_is_500():
    resp = _client(FakeVerifier(error=RuntimeError("boom"))).post("/echo", json=AUTH)

    assert resp.status_code == 500
    assert resp.get_json()["code"] == "500"
    assert "boom" in resp.get_json()["msg"]


def test_valid_token_passes_parsed_request_to_view():
    verifier = FakeVerifier()

    resp = _client(verifier).post("/echo", json={"TokenID": " t-1 ", "CID": "C01", "UID": "0325", "Note": "hi"})

    assert resp.status_code == 200
    assert resp.get_json() == {"uid": "0325", "note": "hi"}
    assert verifier.calls[0].tokenid == "t-1"


def test_form_body_is_accepted():
    resp = _client(FakeVerifier()).post("/echo", data={**AUTH, "note": "form"})

    assert resp.get_json() == {"uid": "0325", "note": "form"}


def test_parse_request_ignores_unknown_keys():
    req = parse_request(EchoRequest, {"uid": "1", "extra": "x"})

    assert req == EchoRequest(uid="1")
    assert req.missing_auth_fields()


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=""):
        self.status_code = status_code
        self.ok = 200 <= status_code < 400
        self._body = body
        self.text = text

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.posts = []

    def post(self, url, json=None, timeout=None):
        self.posts.append((url, json, timeout))
        if self.error:
            raise self.error
        return self.response


def _verifier(session):
    return TokenVerifier(verify_url="http://verify.local/api/Tokenid/Verify", timeout=5, session=session)


def test_token_verifier_posts_triple_and_reads_result():
    session = FakeSession(FakeResponse(body={"code": "200", "msg": "驗證成功"}))

    result = _verifier(session).verify(AuthRequest(tokenid="t-1", cid="C01", uid="0325"))

    assert result.valid
    assert session.posts == [
        ("http://verify.local/api/Tokenid/Verify", {"tokenid": "t-1", "uid": "0325", "cid": "C01"}, 5)
    ]


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(error=requests.ConnectionError("down")),
        FakeSession(FakeResponse(status_code=502, text="bad gateway")),
        FakeSession(FakeResponse(body=None, text="<html>")),
    ],
)
def test_token_verifier_transport_problems_become_code_300(session):
    result = _verifier(session).verify(AuthRequest(tokenid="t", cid="c", uid="u"))

    assert result.code == "300"
    assert not result.valid
