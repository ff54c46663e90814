import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-0123456789abcdef"
os.environ["ARGON2_TIME_COST"] = "1"
os.environ["ARGON2_MEMORY_COST"] = "1024"
os.environ["ARGON2_PARALLELISM"] = "1"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from notekeeper import crud  # noqa: E402
from notekeeper.database import Base, SessionLocal, engine  # noqa: E402
from notekeeper.main import app  # noqa: E402
from notekeeper.models import ROLE_ADMIN  # noqa: E402

PASSWORD = "pass-123"  # noqa: S105


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def users(db):
    return {
        "admin": crud.users.upsert_user(db, "admin", PASSWORD, role=ROLE_ADMIN),
        "alice": crud.users.upsert_user(db, "alice", PASSWORD),
        "bob": crud.users.upsert_user(db, "bob", PASSWORD),
    }


@pytest.fixture
def login(client, users):
    def _login(username: str, password: str = PASSWORD) -> dict:
        r = client.post(
            "/auth/login",
            json={"username": username, "password": password},
        )
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['accessToken']}"}

    return _login


@pytest.fixture
def admin_headers(login):
    return login("admin")


@pytest.fixture
def alice_headers(login):
    return login("alice")


@pytest.fixture
def bob_headers(login):
    return login("bob")


@pytest.fixture
def make_category(client, admin_headers):
    def _make(name: str) -> dict:
        r = client.post("/categories", json={"name": name}, headers=admin_headers)
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture
def make_note(client, users, alice_headers):
    def _make(headers=None, **overrides) -> dict:
        body = {
            "title": "Meeting",
            "content": "Discuss the budget",
            "eventDate": "2024-05-10T09:30:00Z",
            "authorId": users["alice"].id,
            "province": "Tehran",
        }
        body.update(overrides)
        r = client.post("/notes", json=body, headers=headers or alice_headers)
        assert r.status_code == 201, r.text
        return r.json()

    return _make
