import pytest
from fastapi import HTTPException

import jobportal.dependencies as deps
from jobportal.core.errors import ForbiddenError, InternalError
from jobportal.core.identity import Identity


class _Creds:
    def __init__(self, token: str):
        self.credentials = token


class _User:
    def __init__(self, user_id="u1", role="jobseeker"):
        self.id = user_id
        self.role = role


def test_get_current_identity_missing_credentials():
    with pytest.raises(HTTPException) as ex:
        deps.get_current_identity(credentials=None)
    assert ex.value.status_code == 401


def test_get_current_identity_invalid_token(monkeypatch):
    monkeypatch.setattr(deps, "decode_access_token", lambda token: None)
    with pytest.raises(HTTPException) as ex:
        deps.get_current_identity(credentials=_Creds("bad"))
    assert ex.value.status_code == 401


def test_get_current_identity_success(monkeypatch):
    monkeypatch.setattr(deps, "decode_access_token", lambda token: {"sub": "u1", "role": "employer", "name": "Erin"})
    identity = deps.get_current_identity(credentials=_Creds("tok"))
    assert identity == Identity(id="u1", role="employer", name="Erin")


def test_require_jobseeker_accepts_jobseeker(monkeypatch):
    identity = Identity(id="u1", role="jobseeker")
    monkeypatch.setattr(deps, "get_by_id", lambda db, uid: _User(uid, "jobseeker"))
    assert deps.require_jobseeker(db=object(), identity=identity) is identity


def test_require_employer_rejects_jobseeker(monkeypatch):
    monkeypatch.setattr(deps, "get_by_id", lambda db, uid: _User(uid, "jobseeker"))
    with pytest.raises(ForbiddenError) as ex:
        deps.require_employer(db=object(), identity=Identity(id="u1", role="jobseeker"))
    assert ex.value.status_code == 403
    assert "employer" in ex.value.message


def test_role_gate_uses_stored_role_not_token_claim(monkeypatch):
    # Token claims employer, but the stored user is a jobseeker.
    monkeypatch.setattr(deps, "get_by_id", lambda db, uid: _User(uid, "jobseeker"))
    with pytest.raises(ForbiddenError):
        deps.require_employer(db=object(), identity=Identity(id="u1", role="employer"))


def test_role_gate_missing_user_is_forbidden(monkeypatch):
    monkeypatch.setattr(deps, "get_by_id", lambda db, uid: None)
    with pytest.raises(ForbiddenError):
        deps.require_jobseeker(db=object(), identity=Identity(id="gone"))


def test_role_gate_lookup_failure_is_internal_error(monkeypatch):
    monkeypatch.setattr(deps, "get_by_id", lambda db, uid: (_ for _ in ()).throw(RuntimeError("db")))
    with pytest.raises(InternalError) as ex:
        deps.require_employer(db=object(), identity=Identity(id="u1"))
    assert ex.value.status_code == 500


def test_providers_build_default_collaborators():
    assert deps.get_email_validator() is not None
    assert deps.get_mailer() is not None
