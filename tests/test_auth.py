# =============================================================================
# File: tests/test_auth.py
# Purpose: Authorization rule table + /auth subsite.
# =============================================================================
from blogapp.auth import (
    AUTHENTICATION_REQUIRED,
    AUTHORIZED,
    EmailProvider,
    is_authorized,
    validate_email,
)
from blogapp.db import SessionLocal
from blogapp.models import User

from conftest import ADMIN, login


def make_user(email):
    # No session needed, just an in-memory User
    return User(id=1, email=email)


def test_reads_always_authorized(app):
    with app.app_context():
        for endpoint in ("home.index", "blog.archive", "blog.entry", None):
            assert is_authorized(endpoint, False, None) == AUTHORIZED


def test_new_entry_rules(app):
    with app.app_context():
        assert is_authorized("blog.archive", True, None) == AUTHENTICATION_REQUIRED

        res = is_authorized("blog.archive", True, make_user("someone@example.com"))
        assert res.kind == "unauthorized"
        assert res.message_key == "MsgNotAnAdmin"

        assert is_authorized("blog.archive", True, make_user(ADMIN)) == AUTHORIZED
        # admin email match is case-insensitive
        assert is_authorized("blog.archive", True, make_user(ADMIN.upper())) == AUTHORIZED


def test_new_comment_rules(app):
    with app.app_context():
        assert is_authorized("blog.entry", True, None) == AUTHENTICATION_REQUIRED
        assert is_authorized("blog.entry", True, make_user("someone@example.com")) == AUTHORIZED


def test_other_writes_authorized(app):
    with app.app_context():
        assert is_authorized("auth.login", True, None) == AUTHORIZED


def test_validate_email():
    assert validate_email("a@b.io")
    assert not validate_email("")
    assert not validate_email("no-at-sign")
    assert not validate_email("a b@c.io")
    assert not validate_email("a@@b.io")
    assert not validate_email("a@localhost")


def test_email_provider_normalises():
    assert EmailProvider().authenticate({"email": "  Bob@Example.COM "}) == "bob@example.com"
    assert EmailProvider().authenticate({"email": "nope"}) is None


def test_login_creates_user_once(client):
    login(client, "bob@example.com")
    client.get("/auth/logout")
    login(client, "Bob@example.com")
    with SessionLocal() as s:
        assert s.query(User).filter_by(email="bob@example.com").count() == 1


def test_login_page_and_invalid_login(client):
    rv = client.get("/auth/login")
    assert rv.status_code == 200
    assert "Email address" in rv.get_data(as_text=True)

    rv = client.post("/auth/login", data={"provider": "email", "email": "bad"})
    assert rv.status_code == 400
    assert "Please enter a valid email address" in rv.get_data(as_text=True)


def test_login_redirects_to_next(client):
    rv = client.post(
        "/auth/login",
        data={"provider": "email", "email": "bob@example.com", "next": "/blog"},
    )
    assert rv.status_code == 302
    assert rv.headers["Location"].endswith("/blog")


def test_login_ignores_external_next(client):
    rv = client.post(
        "/auth/login",
        data={"provider": "email", "email": "bob@example.com", "next": "https://evil.example/"},
    )
    assert rv.status_code == 302
    assert "evil" not in rv.headers["Location"]


def test_logout(client):
    login(client, "bob@example.com")
    assert "Logged in as bob@example.com" in client.get("/").get_data(as_text=True)

    rv = client.get("/auth/logout")
    assert rv.status_code == 302
    body = client.get("/").get_data(as_text=True)
    assert "Logged in as" not in body
    assert "You are now logged out" in body


def test_concurrent_first_login_reuses_user(app, monkeypatch):
    import blogapp.auth as auth_mod

    with SessionLocal() as s:
        s.add(User(email="race@example.com"))
        s.commit()

    # Lookup misses as if another request inserted the row just after it
    monkeypatch.setattr(auth_mod, "_find_user", lambda db, email: None)

    with SessionLocal() as s:
        user = auth_mod.get_or_create_user(s, "Race@example.com")
        assert user.email == "race@example.com"
        assert s.query(User).filter_by(email="race@example.com").count() == 1
