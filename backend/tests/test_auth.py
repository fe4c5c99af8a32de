from datetime import timedelta

from models.users import Session as SessionModel, User
from utils.sessions import create_session


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def test_register_login_me_flow(client):
    resp = client.post("/api/auth/register", json={
        "email": "alice@x.com",
        "password": "correct horse",
        "firstName": "Alice",
        "lastName": "Liddell",
        "company": "Wonderland Ltd",
    })
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["user"]["email"] == "alice@x.com"
    assert body["user"]["role"] == "user"
    assert "passwordHash" not in body["user"]

    resp = client.post("/api/auth/login", json={"email": "alice@x.com", "password": "correct horse"})
    assert resp.status_code == 200
    token = resp.json()["token"]
    assert len(token) == 64
    assert resp.json()["user"]["lastLoginAt"] is not None

    me = client.get("/api/auth/me", headers=bearer(token))
    assert me.status_code == 200
    assert me.json()["user"]["firstName"] == "Alice"
    assert me.json()["user"]["company"] == "Wonderland Ltd"


def test_register_ignores_requested_role(client, db):
    resp = client.post("/api/auth/register", json={
        "email": "mallory@x.com",
        "password": "pw",
        "firstName": "Mallory",
        "lastName": "M",
        "role": "admin",
    })
    assert resp.status_code == 201
    assert resp.json()["user"]["role"] == "user"
    assert db.query(User).filter(User.email == "mallory@x.com").one().role == "user"


def test_register_duplicate_email_is_rejected(client, make_user):
    make_user(email="taken@example.com")
    resp = client.post("/api/auth/register", json={
        "email": "Taken@Example.com", "password": "pw", "firstName": "T", "lastName": "T",
    })
    assert resp.status_code == 400
    assert "already exists" in resp.json()["error"]


def test_register_missing_fields(client):
    resp = client.post("/api/auth/register", json={"email": "x@example.com", "password": "pw"})
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_password_is_stored_hashed(client, db):
    client.post("/api/auth/register", json={
        "email": "hash@example.com", "password": "plain-text", "firstName": "H", "lastName": "H",
    })
    user = db.query(User).filter(User.email == "hash@example.com").one()
    assert user.password_hash != "plain-text"
    assert user.password_hash.startswith("$pbkdf2-sha256$")


def test_wrong_password_creates_no_session(client, db, make_user):
    make_user(email="alice@x.com", password="right")
    resp = client.post("/api/auth/login", json={"email": "alice@x.com", "password": "wrong"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid credentials"}
    assert "token" not in resp.json()
    assert db.query(SessionModel).count() == 0


def test_unknown_and_inactive_users_cannot_login(client, make_user):
    make_user(email="gone@example.com", password="pw", is_active=False)
    assert client.post("/api/auth/login", json={"email": "gone@example.com", "password": "pw"}).status_code == 401
    assert client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "pw"}).status_code == 401


def test_me_requires_token(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json()["error"] == "No token provided"

    resp = client.get("/api/auth/me", headers=bearer("not-a-real-token"))
    assert resp.status_code == 401


def test_expired_session_is_rejected(client, db, make_user):
    user = make_user()
    session = create_session(db, user, ttl=timedelta(seconds=-1))
    assert db.query(SessionModel).filter(SessionModel.token == session.token).count() == 1

    resp = client.get("/api/auth/me", headers=bearer(session.token))
    assert resp.status_code == 401


def test_multiple_sessions_per_user(client, make_user, login):
    make_user(email="multi@example.com", password="pw")
    first = login("multi@example.com", "pw")
    second = login("multi@example.com", "pw")
    assert first != second
    assert client.get("/api/auth/me", headers=bearer(first)).status_code == 200
    assert client.get("/api/auth/me", headers=bearer(second)).status_code == 200


def test_logout_revokes_only_that_session(client, make_user, login):
    make_user(email="out@example.com", password="pw")
    first = login("out@example.com", "pw")
    second = login("out@example.com", "pw")

    resp = client.post("/api/auth/logout", headers=bearer(first))
    assert resp.status_code == 200
    assert client.get("/api/auth/me", headers=bearer(first)).status_code == 401
    assert client.get("/api/auth/me", headers=bearer(second)).status_code == 200


def test_logout_is_idempotent(client):
    assert client.post("/api/auth/logout").status_code == 200
    assert client.post("/api/auth/logout", headers=bearer("unknown")).status_code == 200


def test_audit_log_records_logins(client, make_user, admin_headers):
    make_user(email="audited@example.com", password="pw")
    client.post("/api/auth/login", json={"email": "audited@example.com", "password": "nope"})

    resp = client.get("/api/logs", params={"action": "LOGIN", "status": "fail"}, headers=admin_headers)
    assert resp.status_code == 200
    items = resp.json()["items"]
    assert any(item["meta"]["email"] == "audited@example.com" for item in items)
