import pytest

from notekeeper.client import NotesClient, SessionContext


@pytest.fixture
def visited():
    return []


@pytest.fixture
def session(client, users, visited):
    return SessionContext(NotesClient(http=client), navigate=visited.append)


def test_starts_signed_out_without_admin(session):
    assert session.current_user is None
    assert not session.is_authenticated
    assert not session.is_admin


def test_login_success_navigates_home(session, visited):
    assert session.login("alice", "pass-123") is True
    assert session.current_user.username == "alice"
    assert session.current_user.role == "USER"
    assert session.token
    assert session.error is None
    assert session.is_loading is False
    assert visited == ["/"]


def test_login_failure_sets_error_and_keeps_user(session, visited):
    session.login("alice", "pass-123")
    assert session.login("alice", "wrong") is False
    assert session.error == "Invalid credentials"
    assert session.current_user.username == "alice"
    assert visited == ["/"]

    session.clear_error()
    assert session.error is None


def test_logout_clears_identity(session, visited):
    session.login("admin", "pass-123")
    assert session.is_admin
    session.logout()
    assert session.current_user is None
    assert session.token is None
    assert visited == ["/", "/login"]


def test_restore_checks_token_with_server(client, users, session, visited):
    session.login("bob", "pass-123")
    token = session.token

    fresh = SessionContext(NotesClient(http=client), navigate=visited.append)
    assert fresh.restore(token) is True
    assert fresh.current_user.username == "bob"

    rejected = SessionContext(NotesClient(http=client))
    assert rejected.restore("garbage") is False
    assert rejected.current_user is None
    assert rejected.token is None
    assert rejected.is_loading is False


def test_guard_redirects_when_signed_out(session, visited):
    assert session.guard("/notes") is False
    assert visited == []
    session.restore(None)
    assert session.guard("/login") is True
    assert session.guard("/notes") is False
    assert visited == ["/login"]

    session.login("alice", "pass-123")
    assert session.guard("/notes") is True
