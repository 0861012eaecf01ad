from talentdesk.models.user import User
from talentdesk.utils.jwt import create_access_token, decode_access_token


def _register(client, *, email: str, password: str | None = "Testpass123!", role: str = "hr"):
    body = {"name": "Test User", "email": email, "role": role}
    if password is not None:
        body["password"] = password
    if role == "hr":
        body["company"] = "Acme"
    return client.post("/api/auth/register", json=body)


def _login(client, *, email: str, password: str):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def test_login_returns_token_with_identity_claims(client, db_session):
    created = _register(client, email="rec@example.com").json()["user"]

    r = _login(client, email="REC@example.com", password="Testpass123!")
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["id"] == created["id"]
    assert "password" not in data["user"]

    claims = decode_access_token(data["access_token"])
    assert claims["sub"] == str(created["id"])
    assert claims["role"] == "hr"
    assert claims["company"] == "Acme"

    user = db_session.query(User).filter(User.id == created["id"]).one()
    assert user.last_login is not None


def test_login_wrong_password(client):
    _register(client, email="rec2@example.com")
    r = _login(client, email="rec2@example.com", password="wrong-password")
    assert r.status_code == 401
    assert r.json()["error"] == "Invalid email or password"


def test_login_unknown_user(client):
    r = _login(client, email="ghost@example.com", password="whatever1")
    assert r.status_code == 401
    assert r.json()["error"] == "Invalid email or password"


def test_login_applicant_without_password(client):
    _register(client, email="nopw@example.com", password=None, role="applicant")
    r = _login(client, email="nopw@example.com", password="anything")
    assert r.status_code == 401
    assert "no password set" in r.json()["error"]


def test_login_disabled_account(client, db_session):
    _register(client, email="off@example.com")
    user = db_session.query(User).filter(User.email == "off@example.com").one()
    user.is_active = False
    db_session.commit()

    r = _login(client, email="off@example.com", password="Testpass123!")
    assert r.status_code == 401


def test_invalid_and_expired_tokens_are_rejected(client):
    from datetime import timedelta

    bad = client.get("/api/jobs/x/applications", headers={"Authorization": "Bearer not-a-token"})
    assert bad.status_code == 401

    expired = create_access_token({"sub": "1", "role": "hr"}, expires_delta=timedelta(minutes=-5))
    r = client.get("/api/jobs/x/applications", headers={"Authorization": f"Bearer {expired}"})
    assert r.status_code == 401


def test_signed_token_with_non_numeric_subject_is_rejected(client):
    token = create_access_token({"sub": "not-a-user-id", "role": "hr"})
    headers = {"Authorization": f"Bearer {token}"}

    r = client.get("/api/jobs/x/applications", headers=headers)
    assert r.status_code == 401
    assert r.json()["error"] == "Unauthorized"

    # Optional auth treats it as anonymous.
    assert client.get("/api/jobs", headers=headers).status_code == 200


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "Backend running"
