import re

from backend.quickgig.models.user import User

from conftest import signup


def _login(client, *, email: str, password: str):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def test_signup_returns_public_user(client):
    r = signup(client, email="alice@example.com", role="worker", name="Alice")
    assert r.status_code == 200, r.text
    data = r.json()
    assert set(data) == {"id", "email", "name", "role"}
    assert data["email"] == "alice@example.com"
    assert data["name"] == "Alice"
    assert data["role"] == "worker"
    assert isinstance(data["id"], int)


def test_signups_with_distinct_emails_get_distinct_increasing_ids(client):
    ids = [
        signup(client, email=f"user{i}@example.com", role="worker").json()["id"]
        for i in range(3)
    ]
    assert len(set(ids)) == 3
    assert ids == sorted(ids)


def test_duplicate_email_fails_and_creates_no_row(client, db_session):
    first = signup(client, email="dup@example.com", role="employer", name="First")
    assert first.status_code == 200, first.text

    r = signup(client, email="dup@example.com", role="worker", name="Second")
    assert r.status_code == 400, r.text
    assert r.json()["error"] == "Email already exists"
    assert db_session.query(User).filter(User.email == "dup@example.com").count() == 1


def test_signup_invalid_role_rejected(client):
    r = signup(client, email="bad-role@example.com", role="recruiter")
    assert r.status_code == 400, r.text
    assert "role" in r.json()["error"].lower()


def test_signup_missing_field_rejected(client):
    r = client.post("/api/auth/signup", json={"email": "x@example.com", "password": "pw"})
    assert r.status_code == 400, r.text
    assert "error" in r.json()


def test_signup_invalid_email_rejected(client):
    r = signup(client, email="not-an-email", role="worker")
    assert r.status_code == 400, r.text
    assert "email" in r.json()["error"].lower()


def test_login_returns_full_user_record(client):
    created = signup(client, email="bob@example.com", role="employer", password="s3cret", name="Bob").json()

    r = _login(client, email="bob@example.com", password="s3cret")
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["id"] == created["id"]
    assert data["password"] == "s3cret"
    assert data["role"] == "employer"
    # Same text form SQLite writes for CURRENT_TIMESTAMP.
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", data["created_at"])


def test_login_wrong_password_fails(client):
    signup(client, email="carol@example.com", role="worker", password="right")
    r = _login(client, email="carol@example.com", password="wrong")
    assert r.status_code == 401, r.text
    assert r.json()["error"] == "Invalid credentials"


def test_login_unknown_email_fails(client):
    r = _login(client, email="nobody@example.com", password="whatever")
    assert r.status_code == 401, r.text


def test_login_is_case_sensitive(client):
    signup(client, email="dave@example.com", role="worker", password="CaseSensitive")

    assert _login(client, email="Dave@example.com", password="CaseSensitive").status_code == 401
    assert _login(client, email="dave@example.com", password="casesensitive").status_code == 401
    assert _login(client, email="dave@example.com", password="CaseSensitive").status_code == 200
