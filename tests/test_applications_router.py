import io

import pytest

import jobportal.routers.applications as applications_mod
from conftest import auth_header, signup
from jobportal.models.application import ApplicationStatus


def _resume(name="resume.pdf", content=b"%PDF-1.4 resume"):
    return {"resume": (name, io.BytesIO(content), "application/pdf")}


def _apply(client, job_id, token, **kwargs):
    return client.post(f"/applications/apply/{job_id}", files=_resume(**kwargs), headers=auth_header(token))


@pytest.fixture
def other_employer_token(live_client):
    resp = signup(live_client, name="Olly", email="olly@globex.com", role="employer", company_name="Globex")
    return resp.json()["token"]


def test_apply_review_and_track_scenario(live_client, posted_job, seeker_token, employer_token, upload_root):
    applied = _apply(live_client, posted_job["id"], seeker_token)
    assert applied.status_code == 201
    application = applied.json()["application"]
    assert application["status"] == "Applied"
    assert (upload_root / application["resume"]).exists()

    listed = live_client.get(
        f"/applications/job/{posted_job['id']}/applications", headers=auth_header(employer_token)
    )
    assert listed.status_code == 200
    [row] = listed.json()["applications"]
    assert row["id"] == application["id"]
    assert row["applicant"]["email"] == "sam@example.com"
    assert row["status_updated_by"] is None

    updated = live_client.put(
        f"/applications/status/{application['id']}",
        json={"status": "Shortlisted"},
        headers=auth_header(employer_token),
    )
    assert updated.status_code == 200
    employer_id = live_client.get("/jobs/dashboard", headers=auth_header(employer_token)).json()[0]["posted_by"]
    assert updated.json()["application"]["status_updated_by"] == employer_id

    mine = live_client.get("/applications/my-applications", headers=auth_header(seeker_token))
    assert mine.status_code == 200
    [own] = mine.json()["applications"]
    assert own["status"] == "Shortlisted"
    assert own["status_updated_by"]["name"] == "Erin Employer"
    assert own["job"]["title"] == "Backend Engineer"
    assert "resume" not in own


def test_duplicate_application_rejected_and_file_cleaned(live_client, posted_job, seeker_token, upload_root):
    assert _apply(live_client, posted_job["id"], seeker_token).status_code == 201
    again = _apply(live_client, posted_job["id"], seeker_token, name="other.pdf")
    assert again.status_code == 409
    assert again.json()["code"] == "DUPLICATE_APPLICATION"
    stored = list((upload_root / "uploads" / "resumes").iterdir())
    assert len(stored) == 1


def test_apply_to_missing_job(live_client, seeker_token):
    resp = _apply(live_client, "no-such-job", seeker_token)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Job not found"


def test_employer_cannot_apply(live_client, posted_job, employer_token):
    resp = _apply(live_client, posted_job["id"], employer_token)
    assert resp.status_code == 403


def test_apply_requires_resume_file(live_client, posted_job, seeker_token):
    resp = live_client.post(f"/applications/apply/{posted_job['id']}", headers=auth_header(seeker_token))
    assert resp.status_code == 422


def test_apply_rejects_unsupported_file_type(live_client, posted_job, seeker_token):
    resp = _apply(live_client, posted_job["id"], seeker_token, name="resume.exe")
    assert resp.status_code == 400


def test_only_owner_sees_job_applications(live_client, posted_job, seeker_token, other_employer_token):
    _apply(live_client, posted_job["id"], seeker_token)
    url = f"/applications/job/{posted_job['id']}/applications"
    assert live_client.get(url, headers=auth_header(other_employer_token)).status_code == 403
    assert live_client.get(url, headers=auth_header(seeker_token)).status_code == 403
    missing = live_client.get("/applications/job/nope/applications", headers=auth_header(other_employer_token))
    assert missing.status_code == 404


def test_only_owner_updates_status_or_reads_resume(
    live_client, posted_job, seeker_token, employer_token, other_employer_token
):
    application = _apply(live_client, posted_job["id"], seeker_token).json()["application"]
    status_url = f"/applications/status/{application['id']}"
    resume_url = f"/applications/resume/{application['id']}"

    assert live_client.put(status_url, json={"status": "Rejected"}, headers=auth_header(other_employer_token)).status_code == 403
    assert live_client.get(resume_url, headers=auth_header(other_employer_token)).status_code == 403
    assert live_client.get(resume_url, headers=auth_header(seeker_token)).status_code == 403

    owner = live_client.get(resume_url, headers=auth_header(employer_token))
    assert owner.status_code == 200
    assert owner.json()["resume_path"] == application["resume"]


def test_missing_application(live_client, employer_token):
    assert live_client.put("/applications/status/nope", json={"status": "Accepted"}, headers=auth_header(employer_token)).status_code == 404
    assert live_client.get("/applications/resume/nope", headers=auth_header(employer_token)).status_code == 404


def test_status_accepts_every_value_from_every_value(live_client, posted_job, seeker_token, employer_token):
    application = _apply(live_client, posted_job["id"], seeker_token).json()["application"]
    url = f"/applications/status/{application['id']}"
    sequence = [s.value for s in ApplicationStatus]
    # Walk forwards, backwards, and back to the initial state.
    for status in sequence + list(reversed(sequence)):
        resp = live_client.put(url, json={"status": status}, headers=auth_header(employer_token))
        assert resp.status_code == 200, status
        assert resp.json()["application"]["status"] == status


def test_status_outside_enum_rejected(live_client, posted_job, seeker_token, employer_token):
    application = _apply(live_client, posted_job["id"], seeker_token).json()["application"]
    resp = live_client.put(
        f"/applications/status/{application['id']}",
        json={"status": "Hired"},
        headers=auth_header(employer_token),
    )
    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_STATUS"


def test_my_applications_empty_and_requires_auth(live_client, seeker_token):
    resp = live_client.get("/applications/my-applications", headers=auth_header(seeker_token))
    assert resp.status_code == 200
    assert resp.json() == {"applications": []}
    assert live_client.get("/applications/my-applications").status_code == 401


def test_apply_returns_500_on_unexpected_failure(monkeypatch, client):
    monkeypatch.setattr(
        applications_mod.application_workflow,
        "apply",
        lambda db, identity, job_id, resume: (_ for _ in ()).throw(RuntimeError("disk full")),
    )
    resp = client.post("/applications/apply/j1", files=_resume())
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Server error"
