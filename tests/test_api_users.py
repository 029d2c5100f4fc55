import pytest

from command_center.models import User
from command_center.security import verify_password


def _create(client, username="ops", password="s3cret"):
    response = client.post("/api/users", json={"username": username, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


def _assert_sanitized(user):
    assert "password" not in user
    assert "passwordHash" not in user
    assert "password_hash" not in user


def test_create_user_hides_password_and_stores_hash(client, db_session):
    created = _create(client)

    _assert_sanitized(created)
    assert created["username"] == "ops"
    stored = db_session.get(User, created["id"])
    assert stored.password_hash != "s3cret"
    assert verify_password("s3cret", stored.password_hash)


def test_list_users_never_includes_passwords(client):
    _create(client, "a")
    _create(client, "b")

    users = client.get("/api/users").json()

    assert [u["username"] for u in users] == ["a", "b"]
    for user in users:
        _assert_sanitized(user)


def test_duplicate_username_is_400(client):
    _create(client)

    assert client.post("/api/users", json={"username": "ops", "password": "x"}).status_code == 400


@pytest.mark.parametrize("body", [{"username": "solo"}, {"password": "x"}, {"username": "", "password": "x"}])
def test_create_user_validation(client, body):
    assert client.post("/api/users", json=body).status_code == 400


def test_patch_user_rehashes_password(client, db_session):
    created = _create(client)

    response = client.patch(f"/api/users/{created['id']}", json={"password": "rotated", "username": "ops2"})

    assert response.status_code == 200
    _assert_sanitized(response.json())
    assert response.json()["username"] == "ops2"
    stored = db_session.get(User, created["id"])
    db_session.refresh(stored)
    assert verify_password("rotated", stored.password_hash)
    assert not verify_password("s3cret", stored.password_hash)


def test_patch_missing_user_is_404(client):
    assert client.patch("/api/users/does-not-exist", json={"username": "x"}).status_code == 404


def test_deleted_user_is_gone_from_listing(client):
    keep = _create(client, "keep")
    drop = _create(client, "drop")

    assert client.delete(f"/api/users/{drop['id']}").status_code == 204

    ids = [u["id"] for u in client.get("/api/users").json()]
    assert drop["id"] not in ids
    assert keep["id"] in ids


def test_verify_password_rejects_malformed_hash():
    assert verify_password("s3cret", "not-a-bcrypt-hash") is False
