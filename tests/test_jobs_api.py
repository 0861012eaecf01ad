import re

from talentdesk.services.jobs import make_slug


def _register(client, *, email: str, role: str = "hr"):
    body = {"name": "Test User", "email": email, "password": "Testpass123!", "role": role}
    if role == "hr":
        body["company"] = "Acme"
    return client.post("/api/auth/register", json=body)


def _token(client, email: str, role: str = "hr") -> str:
    _register(client, email=email, role=role)
    r = client.post("/api/auth/login", json={"email": email, "password": "Testpass123!"})
    return r.json()["access_token"]


def _auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _create_job(client, token: str, **overrides):
    body = {"title": "Data Engineer", "description": "Pipelines all day."}
    body.update(overrides)
    return client.post("/api/jobs", headers=_auth_headers(token), json=body)


def test_make_slug():
    assert make_slug("Senior Dev (Remote) ", 1700000000000) == "senior-dev-remote-1700000000000"
    assert make_slug("!!!", 5) == "job-5"


def test_recruiter_creates_job(client):
    token = _token(client, "rec@example.com")
    r = _create_job(client, token, skills=["python", " ", "sql"], experienceLevel="Senior")
    assert r.status_code == 201, r.text
    job = r.json()["job"]
    assert re.fullmatch(r"data-engineer-\d{13}", job["slug"])
    assert job["skills"] == ["python", "sql"]
    assert job["experienceLevel"] == "senior"
    assert job["status"] == "active"
    assert job["isPublic"] is True
    assert job["applicationCount"] == 0


def test_job_creation_validation(client):
    token = _token(client, "rec@example.com")
    r = _create_job(client, token, title="   ")
    assert r.status_code == 400
    assert r.json()["error"] == "Title is required"

    r = _create_job(client, token, status="archived")
    assert r.status_code == 400
    assert "Invalid status" in r.json()["error"]

    r = _create_job(client, token, deadline="next tuesday")
    assert r.status_code == 400


def test_applicant_cannot_create_job(client):
    token = _token(client, "app@example.com", role="applicant")
    r = _create_job(client, token)
    assert r.status_code == 403


def test_job_creation_requires_login(client):
    r = client.post("/api/jobs", json={"title": "X", "description": "Y"})
    assert r.status_code == 401


def test_get_job_by_slug_visibility(client):
    owner = _token(client, "owner@example.com")
    other = _token(client, "other@example.com")
    public = _create_job(client, owner).json()["job"]
    private = _create_job(client, owner, title="Secret Role", isPublic=False).json()["job"]
    closed = _create_job(client, owner, title="Old Role", status="closed").json()["job"]

    assert client.get(f"/api/jobs/{public['slug']}").status_code == 200
    assert client.get(f"/api/jobs/{private['slug']}").status_code == 404
    assert client.get(f"/api/jobs/{private['slug']}", headers=_auth_headers(other)).status_code == 404
    assert client.get(f"/api/jobs/{private['slug']}", headers=_auth_headers(owner)).status_code == 200
    r = client.get(f"/api/jobs/{closed['slug']}")
    assert r.status_code == 404
    assert r.json()["error"] == "Job not found"


def test_list_jobs_public_and_mine(client):
    owner = _token(client, "owner@example.com")
    other = _token(client, "other@example.com")
    _create_job(client, owner, title="Public One")
    _create_job(client, owner, title="Private One", isPublic=False)
    _create_job(client, other, title="Someone Else")

    public = client.get("/api/jobs").json()
    assert {j["title"] for j in public["jobs"]} == {"Public One", "Someone Else"}
    assert public["pagination"]["total"] == 2

    mine = client.get("/api/jobs", params={"mine": "true"}, headers=_auth_headers(owner)).json()
    assert {j["title"] for j in mine["jobs"]} == {"Public One", "Private One"}

    assert client.get("/api/jobs", params={"mine": "true"}).status_code == 401
    paged = client.get("/api/jobs", params={"limit": 1, "page": 2}).json()
    assert len(paged["jobs"]) == 1
    assert paged["pagination"]["pages"] == 2


def test_list_jobs_enormous_page_is_empty(client):
    token = _token(client, "rec@example.com")
    _create_job(client, token)

    r = client.get("/api/jobs", params={"page": 10**18, "limit": 10})
    assert r.status_code == 200, r.text
    assert r.json()["jobs"] == []
    assert r.json()["pagination"]["total"] == 1
