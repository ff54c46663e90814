import pytest


def test_set_rating_returns_full_note(client, users, make_note, admin_headers, bob_headers):
    note = make_note()
    client.post(
        f"/notes/{note['id']}/comments",
        json={"content": "nice", "authorId": users["bob"].id},
        headers=bob_headers,
    )
    r = client.put(f"/notes/{note['id']}/rating", json={"rating": 4}, headers=admin_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["rating"] == 4
    assert body["author"]["username"] == "alice"
    assert [c["content"] for c in body["comments"]] == ["nice"]


@pytest.mark.parametrize("value", [0, 5])
def test_rating_bounds_are_inclusive(client, make_note, admin_headers, value):
    note = make_note()
    r = client.put(f"/notes/{note['id']}/rating", json={"rating": value}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["rating"] == value


@pytest.mark.parametrize("value", [-1, 6, "3", 2.5, True, None])
def test_invalid_rating_is_rejected_and_unchanged(client, make_note, admin_headers, value):
    note = make_note()
    client.put(f"/notes/{note['id']}/rating", json={"rating": 2}, headers=admin_headers)

    r = client.put(f"/notes/{note['id']}/rating", json={"rating": value}, headers=admin_headers)
    assert r.status_code == 400
    assert client.get(f"/notes/{note['id']}").json()["rating"] == 2


def test_rating_missing_note(client, admin_headers):
    r = client.put("/notes/404/rating", json={"rating": 3}, headers=admin_headers)
    assert r.status_code == 404


def test_rating_is_admin_only(client, make_note, alice_headers):
    note = make_note()
    r = client.put(f"/notes/{note['id']}/rating", json={"rating": 3}, headers=alice_headers)
    assert r.status_code == 403
