def test_list_is_ordered_by_name(client, make_category):
    for name in ("Work", "Archive", "Personal"):
        make_category(name)
    r = client.get("/categories")
    assert r.status_code == 200
    assert [c["name"] for c in r.json()] == ["Archive", "Personal", "Work"]
    assert r.json()[0]["createdAt"].startswith("20")


def test_create_trims_name(client, admin_headers):
    r = client.post("/categories", json={"name": "  Travel  "}, headers=admin_headers)
    assert r.status_code == 201
    assert r.json()["name"] == "Travel"


def test_create_rejects_empty_name(client, admin_headers):
    for name in ("", "   "):
        r = client.post("/categories", json={"name": name}, headers=admin_headers)
        assert r.status_code == 400
    r = client.post("/categories", json={}, headers=admin_headers)
    assert r.status_code == 400


def test_create_duplicate_is_conflict(client, admin_headers, make_category):
    make_category("Work")
    r = client.post("/categories", json={"name": " Work "}, headers=admin_headers)
    assert r.status_code == 409
    assert r.json()["code"] == "CONFLICT"


def test_rename(client, admin_headers, make_category):
    cat = make_category("Wrk")
    r = client.put(f"/categories/{cat['id']}", json={"name": " Work "}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["name"] == "Work"
    assert r.json()["id"] == cat["id"]


def test_rename_to_own_name_is_allowed(client, admin_headers, make_category):
    cat = make_category("Work")
    r = client.put(f"/categories/{cat['id']}", json={"name": "Work"}, headers=admin_headers)
    assert r.status_code == 200


def test_rename_to_taken_name_leaves_both_unchanged(client, admin_headers, make_category):
    a = make_category("Alpha")
    b = make_category("Beta")
    r = client.put(f"/categories/{b['id']}", json={"name": "Alpha"}, headers=admin_headers)
    assert r.status_code == 409
    names = {c["id"]: c["name"] for c in client.get("/categories").json()}
    assert names == {a["id"]: "Alpha", b["id"]: "Beta"}


def test_rename_missing_and_empty(client, admin_headers, make_category):
    r = client.put("/categories/9999", json={"name": "X"}, headers=admin_headers)
    assert r.status_code == 404

    cat = make_category("Work")
    r = client.put(f"/categories/{cat['id']}", json={"name": " "}, headers=admin_headers)
    assert r.status_code == 400


def test_mutations_require_admin(client, alice_headers, make_category):
    assert client.post("/categories", json={"name": "X"}).status_code == 401
    r = client.post("/categories", json={"name": "X"}, headers=alice_headers)
    assert r.status_code == 403
    assert r.json()["code"] == "FORBIDDEN"

    cat = make_category("Work")
    r = client.put(f"/categories/{cat['id']}", json={"name": "Y"}, headers=alice_headers)
    assert r.status_code == 403
