# =============================================================================
# File: tests/conftest.py
# Purpose: App + client fixtures on a temporary SQLite database per test.
# =============================================================================
import pytest

from blogapp import create_app

ADMIN = "admin@example.com"


@pytest.fixture
def app(tmp_path):
    """Use a temporary SQLite file per test."""
    db_path = tmp_path / "blog_test.sqlite"
    app = create_app(
        {
            "TESTING": True,
            "DATABASE_URL": f"sqlite:///{db_path}",
            "ADMIN_EMAIL": ADMIN,
            "DEFAULT_LANGUAGE": "en",
            "SECRET_KEY": "test",
        }
    )
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, email):
    rv = client.post("/auth/login", data={"provider": "email", "email": email})
    assert rv.status_code == 302
    return rv


@pytest.fixture
def admin_client(client):
    login(client, ADMIN)
    return client


@pytest.fixture
def user_client(client):
    login(client, "reader@example.com")
    return client
