def test_login_returns_reduced_identity(client, users):
    r = client.post("/auth/login", json={"username": "alice", "password": "pass-123"})
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Login successful"
    assert body["user"] == {"id": users["alice"].id, "username": "alice", "role": "USER"}
    assert "password" not in body["user"]
    assert body["accessToken"]
    assert body["tokenType"] == "bearer"


def test_login_wrong_password_and_unknown_user_look_the_same(client, users):
    wrong = client.post("/auth/login", json={"username": "alice", "password": "nope"})
    unknown = client.post("/auth/login", json={"username": "ghost", "password": "nope"})
    assert wrong.status_code == unknown.status_code == 401
    a, b = wrong.json(), unknown.json()
    for key in ("title", "status", "detail", "code", "message", "error"):
        assert a[key] == b[key]
    assert a["error"] == "Invalid credentials"


def test_login_missing_fields(client, users):
    r = client.post("/auth/login", json={"username": "alice"})
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"

    r = client.post("/auth/login", json={"username": "", "password": "x"})
    assert r.status_code == 400


def test_me_requires_token(client, users, alice_headers):
    assert client.get("/auth/me").status_code == 401

    r = client.get("/auth/me", headers=alice_headers)
    assert r.status_code == 200
    assert r.json()["username"] == "alice"


def test_me_rejects_garbage_token(client, users):
    r = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["code"] == "UNAUTHORIZED"


def test_login_does_not_grant_admin_by_default(client, alice_headers):
    r = client.get("/auth/me", headers=alice_headers)
    assert r.json()["role"] == "USER"
