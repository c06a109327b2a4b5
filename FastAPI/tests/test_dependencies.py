import pytest
from fastapi import HTTPException

import app.dependencies as deps


class _Creds:
    def __init__(self, token: str):
        self.credentials = token


class _User:
    def __init__(self, user_id="u1", is_active=True):
        self.id = user_id
        self.is_active = is_active


def test_get_current_user_missing_credentials():
    with pytest.raises(HTTPException) as ex:
        deps.get_current_user(db=object(), credentials=None)
    assert ex.value.status_code == 401
    assert ex.value.detail == "Not authenticated"


def test_get_current_user_invalid_token(monkeypatch):
    monkeypatch.setattr(deps, "decode_access_token", lambda token: None)
    with pytest.raises(HTTPException) as ex:
        deps.get_current_user(db=object(), credentials=_Creds("bad"))
    assert ex.value.status_code == 401
    assert ex.value.detail == "Invalid or expired token"


def test_get_current_user_provisions_user_from_claims(monkeypatch):
    seen = {}

    def fake_get_or_create(db, user_id, email=None):
        seen.update(user_id=user_id, email=email)
        return _User(user_id=user_id)

    monkeypatch.setattr(deps, "decode_access_token", lambda token: {"sub": "u1", "email": "a@b.com"})
    monkeypatch.setattr(deps, "get_or_create", fake_get_or_create)
    out = deps.get_current_user(db=object(), credentials=_Creds("tok"))
    assert out.id == "u1"
    assert seen == {"user_id": "u1", "email": "a@b.com"}


def test_get_current_active_user_blocks_inactive():
    with pytest.raises(HTTPException) as ex:
        deps.get_current_active_user(user=_User(is_active=False))
    assert ex.value.status_code == 403


def test_get_current_active_user_success():
    user = _User()
    assert deps.get_current_active_user(user=user) is user


def test_unauthenticated_request_is_rejected(anon_client):
    resp = anon_client.get("/profile")
    assert resp.status_code == 401
