from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi.testclient import TestClient

from tests.conftest import registration_payload


@pytest.fixture
def fixed_code(monkeypatch):
    monkeypatch.setattr("snipers.services.otp.generate_code", lambda: "424242")
    return "424242"


def test_signup_verify_flow(client, fixed_code):
    resp = client.post("/api/auth/signup", json={"email": "new@example.com", "phone": "+1555"})
    assert resp.status_code == 200
    assert resp.json() == {"message": "OTP sent successfully"}

    resp = client.post("/api/auth/verify-otp", json={"email": "new@example.com", "otp": fixed_code})
    assert resp.status_code == 200
    assert resp.json() == {"message": "OTP verified successfully"}

    resp = client.post("/api/auth/verify-otp", json={"email": "new@example.com", "otp": fixed_code})
    assert resp.status_code == 400
    assert resp.json()["message"] == "No OTP found for this email"


def test_signup_requires_email(client):
    resp = client.post("/api/auth/signup", json={"phone": "+1555"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Email is required"


def test_signup_rejects_registered_email(client, alice):
    resp = client.post("/api/auth/signup", json={"email": "alice@example.com"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "User with this email already exists"


def test_verify_otp_errors(client, app, fixed_code):
    resp = client.post("/api/auth/verify-otp", json={"email": "x@example.com"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Email and OTP are required"

    client.post("/api/auth/signup", json={"email": "x@example.com"})
    resp = client.post("/api/auth/verify-otp", json={"email": "x@example.com", "otp": "000000"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid OTP"

    app.state.otp_cache.ttl_seconds = -1
    resp = client.post("/api/auth/verify-otp", json={"email": "x@example.com", "otp": fixed_code})
    assert resp.status_code == 400
    assert resp.json()["message"] == "OTP has expired"


def test_complete_registration_starts_session(client):
    resp = client.post("/api/auth/complete-registration", json=registration_payload("carol"))
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Registration completed successfully"
    assert body["user"] == {"id": 1, "username": "carol", "email": "carol@example.com", "name": "Carol"}
    assert "password" not in body["user"]

    profile = client.get("/api/user")
    assert profile.status_code == 200
    assert profile.json() == {
        "id": 1,
        "username": "carol",
        "email": "carol@example.com",
        "name": "Carol",
        "phone": "+10000000000",
    }


def test_complete_registration_validation(client):
    resp = client.post("/api/auth/complete-registration", json={"username": "dave"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Invalid request data"
    missing = {tuple(err["loc"]) for err in body["errors"]}
    assert ("body", "email") in missing
    assert ("body", "password") in missing


def test_complete_registration_rejects_duplicates(client, alice):
    resp = client.post("/api/auth/complete-registration", json=registration_payload("alice"))
    assert resp.status_code == 400

    payload = registration_payload("alice")
    payload["email"] = "other@example.com"
    resp = client.post("/api/auth/complete-registration", json=payload)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Username is already taken"


def test_signin_and_signout(client, alice):
    resp = client.post("/api/auth/signin", json={"email": "alice@example.com", "password": "alice-pass"})
    assert resp.status_code == 200
    assert resp.json()["user"]["username"] == "alice"
    assert client.get("/api/user").status_code == 200

    resp = client.post("/api/auth/signout")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Logout successful"}
    assert client.get("/api/user").status_code == 401


def test_signout_destroys_server_session(app, alice):
    token = alice.cookies.get("sid")
    alice.post("/api/auth/signout")

    replay = TestClient(app)
    replay.cookies.set("sid", token)
    assert replay.get("/api/user").status_code == 401


def test_signin_bad_credentials(client, alice):
    resp = client.post("/api/auth/signin", json={"email": "alice@example.com", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid credentials"}

    resp = client.post("/api/auth/signin", json={"email": "ALICE@example.com", "password": "alice-pass"})
    assert resp.status_code == 401


def test_signin_requires_fields(client):
    resp = client.post("/api/auth/signin", json={"email": "alice@example.com"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Email and password are required"


def test_user_requires_session(client):
    resp = client.get("/api/user")
    assert resp.status_code == 401
    assert resp.json() == {"message": "Unauthorized"}


def test_tampered_cookie_is_unauthorized(client):
    client.cookies.set("sid", "forged.token.value")
    assert client.get("/api/user").status_code == 401


def test_session_cookie_attributes(client):
    resp = client.post("/api/auth/complete-registration", json=registration_payload("erin"))
    cookie = resp.headers["set-cookie"]
    assert cookie.startswith("sid=")
    assert "Max-Age=604800" in cookie
    assert "HttpOnly" in cookie
    assert "Secure" not in cookie


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_concurrent_registration_creates_one_account(app):
    usernames = [f"race{round_no}" for round_no in range(5)]

    for username in usernames:
        payload = registration_payload(username)

        def register(_):
            return TestClient(app).post("/api/auth/complete-registration", json=payload).status_code

        with ThreadPoolExecutor(max_workers=8) as pool:
            statuses = list(pool.map(register, range(8)))
        assert statuses.count(200) == 1, statuses
        assert statuses.count(400) == 7, statuses

    repo = app.state.repository
    assert repo.count_users() == len(usernames)
    assert all(repo.get_user_by_username(name) for name in usernames)


def test_forbidden_uses_access_message_for_reads(bob, alice):
    strategy = alice.post("/api/strategies", json={"name": "s", "type": "OPTION"}).json()
    assert bob.get(f"/api/strategies/{strategy['id']}").json()["message"] == "Not authorized to access this strategy"
