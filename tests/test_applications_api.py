from datetime import datetime, timedelta

import pytest

from talentdesk.models.applicant import Applicant
from talentdesk.models.submission import Submission

T1 = datetime(2024, 3, 1, 9, 0, 0)


def _register(client, *, email: str, password: str = "Testpass123!", role: str = "hr", company: str = "Acme"):
    body = {"name": "Test User", "email": email, "password": password, "role": role}
    if role == "hr":
        body["company"] = company
    return client.post("/api/auth/register", json=body)


def _login(client, *, email: str, password: str = "Testpass123!"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def _auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _recruiter_token(client, email: str) -> str:
    r = _register(client, email=email)
    assert r.status_code == 201, r.text
    return _login(client, email=email).json()["access_token"]


def _create_job(client, token: str, title: str = "Backend Engineer") -> dict:
    r = client.post(
        "/api/jobs",
        headers=_auth_headers(token),
        json={"title": title, "description": "Build and run our APIs."},
    )
    assert r.status_code == 201, r.text
    return r.json()["job"]


def _add_submission(db, job_id: int, *, score, submitted_at, status="new", name="Cand", **extra) -> Submission:
    s = Submission(
        job_id=job_id,
        applicant_name=name,
        applicant_email=f"{name.lower().replace(' ', '')}@example.com",
        ats_score=score,
        status=status,
        submitted_at=submitted_at,
        updated_at=submitted_at,
        raw_resume_text="resume",
        **extra,
    )
    db.add(s)
    db.commit()
    db.refresh(s)
    return s


@pytest.fixture()
def owner(client):
    token = _recruiter_token(client, "owner@example.com")
    job = _create_job(client, token)
    return {"token": token, "job": job}


def test_listing_requires_authentication(client, owner):
    r = client.get(f"/api/jobs/{owner['job']['slug']}/applications")
    assert r.status_code == 401, r.text
    assert r.json()["success"] is False


def test_listing_orders_by_score_then_recency(client, db_session, owner):
    job_id = owner["job"]["id"]
    # The later 90 is inserted first so it has the lower id; only submitted_at can rank it first.
    c = _add_submission(db_session, job_id, score=90, submitted_at=T1 + timedelta(hours=2), name="Third")
    a = _add_submission(db_session, job_id, score=90, submitted_at=T1, name="First")
    b = _add_submission(db_session, job_id, score=70, submitted_at=T1 + timedelta(hours=1), name="Second")
    assert c.id < a.id

    r = client.get(f"/api/jobs/{owner['job']['slug']}/applications", headers=_auth_headers(owner["token"]))
    assert r.status_code == 200, r.text
    ids = [app["id"] for app in r.json()["applications"]]
    assert ids == [c.id, a.id, b.id]


def test_listing_pagination_counts_full_filtered_set(client, db_session, owner):
    job_id = owner["job"]["id"]
    for i in range(7):
        _add_submission(db_session, job_id, score=i * 10, submitted_at=T1 + timedelta(minutes=i), name=f"Cand {i}")

    url = f"/api/jobs/{owner['job']['slug']}/applications"
    headers = _auth_headers(owner["token"])

    r = client.get(url, params={"page": 2, "limit": 3}, headers=headers)
    body = r.json()
    assert [a["atsScore"] for a in body["applications"]] == [30, 20, 10]
    assert body["pagination"] == {"page": 2, "pages": 3, "total": 7, "limit": 3}

    r = client.get(url, params={"page": 9, "limit": 3}, headers=headers)
    assert r.status_code == 200
    assert r.json()["applications"] == []
    assert r.json()["pagination"]["total"] == 7


def test_listing_enormous_page_is_empty(client, db_session, owner):
    _add_submission(db_session, owner["job"]["id"], score=50, submitted_at=T1)

    r = client.get(
        f"/api/jobs/{owner['job']['slug']}/applications",
        params={"page": 10**18, "limit": 10},
        headers=_auth_headers(owner["token"]),
    )
    assert r.status_code == 200, r.text
    assert r.json()["applications"] == []
    assert r.json()["pagination"]["total"] == 1


def test_listing_status_filter(client, db_session, owner):
    job_id = owner["job"]["id"]
    _add_submission(db_session, job_id, score=10, submitted_at=T1, status="new", name="A")
    _add_submission(db_session, job_id, score=20, submitted_at=T1, status="shortlisted", name="B")
    _add_submission(db_session, job_id, score=30, submitted_at=T1, status="rejected", name="C")

    url = f"/api/jobs/{owner['job']['slug']}/applications"
    headers = _auth_headers(owner["token"])

    everything = client.get(url, params={"status": "all"}, headers=headers).json()
    assert {a["status"] for a in everything["applications"]} == {"pending", "shortlisted", "rejected"}

    shortlisted = client.get(url, params={"status": "shortlisted"}, headers=headers).json()
    assert [a["name"] for a in shortlisted["applications"]] == ["B"]
    assert shortlisted["pagination"]["total"] == 1

    pending = client.get(url, params={"status": "pending"}, headers=headers).json()
    assert [a["name"] for a in pending["applications"]] == ["A"]


def test_listing_projection_uses_linked_applicant(client, db_session, owner):
    applicant = Applicant(name="Linked Person", email="linked@example.com", phone="555-0100")
    db_session.add(applicant)
    db_session.commit()
    _add_submission(
        db_session, owner["job"]["id"], score=55, submitted_at=T1, name="Denorm",
        applicant_id=applicant.id, analysis='{"skillsMatched": ["python"]}',
    )

    r = client.get(f"/api/jobs/{owner['job']['slug']}/applications", headers=_auth_headers(owner["token"]))
    app = r.json()["applications"][0]
    assert app["name"] == "Linked Person"
    assert app["email"] == "linked@example.com"
    assert app["phone"] == "555-0100"
    assert app["skillsMatched"] == ["python"]
    assert "applicant_email" not in app


def test_listing_rejects_bad_paging(client, owner):
    r = client.get(
        f"/api/jobs/{owner['job']['slug']}/applications",
        params={"page": 0},
        headers=_auth_headers(owner["token"]),
    )
    assert r.status_code == 400, r.text


def test_foreign_and_missing_jobs_return_identical_404(client, db_session, owner):
    intruder = _recruiter_token(client, "intruder@example.com")
    sub = _add_submission(db_session, owner["job"]["id"], score=50, submitted_at=T1)
    headers = _auth_headers(intruder)

    foreign_list = client.get(f"/api/jobs/{owner['job']['slug']}/applications", headers=headers)
    missing_list = client.get("/api/jobs/no-such-job/applications", headers=headers)
    assert foreign_list.status_code == missing_list.status_code == 404
    assert foreign_list.json() == missing_list.json()

    foreign_put = client.put(
        f"/api/jobs/{owner['job']['slug']}/applications/{sub.id}",
        json={"status": "rejected"},
        headers=headers,
    )
    missing_put = client.put(
        f"/api/jobs/no-such-job/applications/{sub.id}",
        json={"status": "rejected"},
        headers=headers,
    )
    assert foreign_put.status_code == missing_put.status_code == 404
    assert foreign_put.json() == missing_put.json()

    db_session.refresh(sub)
    assert sub.status == "new"


@pytest.mark.parametrize("external", ["pending", "reviewed", "shortlisted", "rejected"])
def test_status_update_round_trips(client, db_session, owner, external):
    sub = _add_submission(db_session, owner["job"]["id"], score=50, submitted_at=T1, status="reviewed")
    slug = owner["job"]["slug"]
    headers = _auth_headers(owner["token"])

    r = client.put(f"/api/jobs/{slug}/applications/{sub.id}", json={"status": external}, headers=headers)
    assert r.status_code == 200, r.text
    assert r.json()["message"] == "Application status updated successfully"
    assert r.json()["application"]["status"] == external

    listed = client.get(f"/api/jobs/{slug}/applications", headers=headers).json()["applications"]
    assert [a["status"] for a in listed if a["id"] == sub.id] == [external]


def test_pending_is_stored_as_new(client, db_session, owner):
    sub = _add_submission(db_session, owner["job"]["id"], score=50, submitted_at=T1, status="rejected")
    client.put(
        f"/api/jobs/{owner['job']['slug']}/applications/{sub.id}",
        json={"status": "pending"},
        headers=_auth_headers(owner["token"]),
    )
    db_session.refresh(sub)
    assert sub.status == "new"


@pytest.mark.parametrize("bad", ["new", "hired", "", None])
def test_invalid_status_rejected_without_mutation(client, db_session, owner, bad):
    sub = _add_submission(db_session, owner["job"]["id"], score=50, submitted_at=T1, status="reviewed")
    r = client.put(
        f"/api/jobs/{owner['job']['slug']}/applications/{sub.id}",
        json={"status": bad},
        headers=_auth_headers(owner["token"]),
    )
    assert r.status_code == 400, r.text
    assert r.json()["error"] == "Invalid status"
    db_session.refresh(sub)
    assert sub.status == "reviewed"


def test_status_update_unknown_application(client, owner):
    r = client.put(
        f"/api/jobs/{owner['job']['slug']}/applications/9999",
        json={"status": "reviewed"},
        headers=_auth_headers(owner["token"]),
    )
    assert r.status_code == 404
    assert r.json()["error"] == "Application not found"


def test_status_update_requires_authentication(client, db_session, owner):
    sub = _add_submission(db_session, owner["job"]["id"], score=50, submitted_at=T1)
    r = client.put(f"/api/jobs/{owner['job']['slug']}/applications/{sub.id}", json={"status": "reviewed"})
    assert r.status_code == 401
