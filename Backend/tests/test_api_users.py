import pytest

from helpers import TEST_PASSWORD, auth_headers


@pytest.mark.asyncio
async def test_register_and_login(client):
    response = await client.post(
        "/api/users",
        json={"username": "dubfan", "password": "hunter22", "email": "dubfan@example.com"},
    )
    assert response.status_code == 201
    user = response.json()
    assert user["username"] == "dubfan"
    assert user["is_admin"] is False
    assert "password" not in user and "password_hash" not in user

    response = await client.post("/api/auth/login", json={"username": "dubfan", "password": "hunter22"})
    assert response.status_code == 200
    token = response.json()
    assert token["token_type"] == "bearer"

    me = await client.get("/api/users/me", headers={"Authorization": f"Bearer {token['access_token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == user["id"]


@pytest.mark.asyncio
async def test_duplicate_username(client, make_user):
    await make_user("taken")
    response = await client.post("/api/users", json={"username": "taken", "password": "hunter22"})
    assert response.status_code == 400
    assert "already exists" in response.json()["detail"]


@pytest.mark.parametrize(
    "payload",
    [
        {"username": "ab", "password": "hunter22"},
        {"username": "dubfan", "password": "short"},
        {"username": "dubfan", "password": "hunter22", "email": "not-an-email"},
    ],
)
@pytest.mark.asyncio
async def test_registration_validation(client, payload):
    response = await client.post("/api/users", json=payload)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_wrong_password(client, make_user):
    await make_user("dubfan")
    response = await client.post("/api/auth/login", json={"username": "dubfan", "password": "wrong-one"})
    assert response.status_code == 401
    response = await client.post("/api/auth/login", json={"username": "nobody", "password": TEST_PASSWORD})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_requires_valid_token(client):
    assert (await client.get("/api/users/me")).status_code == 401
    response = await client.get("/api/users/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_public_profile(client, make_user):
    user = await make_user("dubfan")
    response = await client.get(f"/api/users/{user.id}", headers=auth_headers(user))
    assert response.json() == {"id": str(user.id), "username": "dubfan"}
    missing = await client.get("/api/users/00000000-0000-0000-0000-000000000000")
    assert missing.status_code == 404
