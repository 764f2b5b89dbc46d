import jwt
import pytest

from eventeye.controller import auth_controller
from eventeye.controller.auth_controller import current_session, sign_in, sign_out, sign_up
from eventeye.core.config import settings
from eventeye.core.security import hash_password, verify_password
from eventeye.errors import AuthError, BackendError, ValidationError, friendly_message
from eventeye.models.user_model import AuthSession, AuthUser

from conftest import run


def test_password_hash_roundtrip():
    hashed = hash_password("hunter2")
    assert hashed != "hunter2"
    assert verify_password("hunter2", hashed)
    assert not verify_password("hunter3", hashed)
    assert not verify_password("hunter2", None)
    assert not verify_password("hunter2", "garbage")


def test_sign_up_normalizes_email_and_keeps_role(db):
    user = run(sign_up(db, "  Alice@Example.COM ", "pw", "Alice", "sponsor"))
    assert user.email == "alice@example.com"
    assert user.requested_role == "sponsor"
    assert user.password_hash != "pw"


def test_sign_up_twice_is_already_registered(db):
    run(sign_up(db, "a@example.com", "pw", "Alice"))
    with pytest.raises(BackendError) as excinfo:
        run(sign_up(db, "A@example.com", "pw", "Alice again"))
    assert "already registered" in excinfo.value.message
    assert friendly_message(excinfo.value, "create account").startswith("An account with this email")


def test_sign_up_requires_full_name_before_writing(db):
    with pytest.raises(ValidationError):
        run(sign_up(db, "a@example.com", "pw", "   "))
    assert db.query(AuthUser).count() == 0


def test_sign_in_and_out(db):
    run(sign_up(db, "a@example.com", "pw", "Alice"))
    context = run(sign_in(db, "a@example.com", "pw"))
    assert run(current_session(db, context.access_token)).user.email == "a@example.com"

    run(sign_out(db, context))
    assert db.query(AuthSession).count() == 0
    with pytest.raises(AuthError):
        run(current_session(db, context.access_token))


def test_sign_in_with_bad_credentials(db):
    run(sign_up(db, "a@example.com", "pw", "Alice"))
    for email, password in (("a@example.com", "wrong"), ("nobody@example.com", "pw")):
        with pytest.raises(BackendError) as excinfo:
            run(sign_in(db, email, password))
        assert friendly_message(excinfo.value, "sign in") == "Invalid email or password. Please try again."


def test_current_session_rejects_garbage_and_missing_tokens(db):
    with pytest.raises(AuthError):
        run(current_session(db, None))
    with pytest.raises(AuthError):
        run(current_session(db, "not-a-token"))


def test_google_sign_in_not_configured(db, monkeypatch):
    monkeypatch.setattr(settings, "GOOGLE_CLIENT_ID", None)
    with pytest.raises(BackendError):
        run(auth_controller.sign_in_with_google(db, "token"))


def test_google_sign_in_creates_identity_once(db, monkeypatch):
    monkeypatch.setattr(settings, "GOOGLE_CLIENT_ID", "client-id")
    monkeypatch.setattr(auth_controller, "verify_google_id_token", lambda token: {
        "email": "G.User@gmail.com", "email_verified": True, "name": "G User",
    })
    first = run(auth_controller.sign_in_with_google(db, "token"))
    second = run(auth_controller.sign_in_with_google(db, "token"))
    assert first.user.id == second.user.id
    assert first.user.provider == "google"
    assert db.query(AuthUser).count() == 1
    assert db.query(AuthSession).count() == 2


def test_google_sign_in_rejects_bad_token(db, monkeypatch):
    def reject(token):
        raise jwt.InvalidAudienceError("bad audience")

    monkeypatch.setattr(settings, "GOOGLE_CLIENT_ID", "client-id")
    monkeypatch.setattr(auth_controller, "verify_google_id_token", reject)
    with pytest.raises(BackendError):
        run(auth_controller.sign_in_with_google(db, "token"))
    assert db.query(AuthUser).count() == 0


def test_http_signup_signin_me_signout(client):
    response = client.post("/auth/signup", json={
        "email": "org@uni.edu", "password": "pw", "full_name": "Org", "role": "organizer",
    })
    assert response.status_code == 200
    assert response.json()["data"]["requested_role"] == "organizer"

    duplicate = client.post("/auth/signup", json={
        "email": "org@uni.edu", "password": "pw", "full_name": "Org",
    })
    assert duplicate.status_code == 400
    assert "already exists" in duplicate.json()["message"]

    signin = client.post("/auth/signin", json={"email": "org@uni.edu", "password": "pw"})
    headers = {"Authorization": f"Bearer {signin.json()['data']['access_token']}"}
    assert client.get("/auth/me", headers=headers).json()["data"]["email"] == "org@uni.edu"

    assert client.post("/auth/signout", headers=headers).status_code == 200
    assert client.get("/auth/me", headers=headers).status_code == 401


def test_http_bad_login_message(client):
    response = client.post("/auth/signin", json={"email": "x@example.com", "password": "pw"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid email or password. Please try again."
