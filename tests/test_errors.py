import logging

from sqlalchemy.exc import SQLAlchemyError

from notekeeper import crud


PROBLEM_KEYS = (
    "type",
    "title",
    "status",
    "detail",
    "instance",
    "correlation_id",
    "code",
    "message",
    "details",
    "error",
)


def test_unknown_route_is_problem_json(client):
    r = client.get("/__nope__")
    assert r.status_code == 404
    assert r.headers["content-type"].startswith("application/problem+json")
    body = r.json()
    for k in PROBLEM_KEYS:
        assert k in body


def test_validation_error_is_400_problem(client):
    r = client.post("/auth/login", json={})
    assert r.status_code == 400
    body = r.json()
    for k in PROBLEM_KEYS:
        assert k in body
    assert body["code"] == "VALIDATION_ERROR"
    assert body["details"]["errors"]


def test_non_numeric_path_id_is_400(client):
    assert client.get("/notes/abc").status_code == 400


def test_correlation_id_header(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
    assert r.headers["X-Correlation-ID"]


def test_storage_failure_is_logged_500(client, monkeypatch, caplog):
    def broken(*args, **kwargs):
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr(crud.notes, "list_notes", broken)
    with caplog.at_level(logging.ERROR, logger="notekeeper.errors"):
        r = client.get("/notes")
    assert r.status_code == 500
    body = r.json()
    assert body["code"] == "INTERNAL_ERROR"
    assert body["message"] == "Internal server error"
    assert "disk I/O error" in body["details"]["detail"]
    assert "Storage failure on GET /notes" in caplog.text
