from datetime import timedelta

from app.core.security import SecurityUtils


async def register(client, email="writer@vinpet.vn", password="secret123"):
    return await client.post("/api/v1/auth/register", json={"email": email, "password": password})


async def test_register_returns_token_and_user(client):
    response = await register(client, email="Writer@Vinpet.vn")

    assert response.status_code == 201
    body = response.json()
    assert body["user"]["email"] == "writer@vinpet.vn"
    assert body["user"]["role"] == "user"
    assert "password_hash" not in body["user"]
    assert body["tokens"]["token_type"] == "bearer"


async def test_register_duplicate_email_is_conflict(client):
    await register(client)
    response = await register(client)

    assert response.status_code == 409
    assert response.json()["error_code"] == "DUPLICATE_RESOURCE"


async def test_register_short_password_is_rejected(client):
    response = await register(client, password="123")
    assert response.status_code == 422


async def test_login_and_me(client):
    await register(client)

    login = await client.post(
        "/api/v1/auth/login", json={"email": "writer@vinpet.vn", "password": "secret123"}
    )
    token = login.json()["tokens"]["access_token"]
    me = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert login.status_code == 200
    assert me.status_code == 200
    assert me.json()["email"] == "writer@vinpet.vn"
    assert me.json()["last_login"] is not None


async def test_login_with_wrong_password(client):
    await register(client)

    response = await client.post(
        "/api/v1/auth/login", json={"email": "writer@vinpet.vn", "password": "wrong-pass"}
    )

    assert response.status_code == 401
    assert response.json()["error_code"] == "INVALID_CREDENTIALS"


async def test_invalid_and_expired_tokens_are_rejected(client):
    expired = SecurityUtils.create_access_token({"sub": "x"}, expires_delta=timedelta(minutes=-1))

    garbage = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"})
    stale = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {expired}"})

    assert garbage.status_code == 401
    assert stale.status_code == 401


async def test_update_profile(client, auth_headers):
    response = await client.put(
        "/api/v1/users/profile",
        json={"last_name": "Nguyen", "bio": "Editor"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["first_name"] == "Lan"
    assert response.json()["last_name"] == "Nguyen"
    assert response.json()["bio"] == "Editor"


async def test_update_profile_email_conflict(client, auth_headers):
    await register(client, email="taken@vinpet.vn")

    response = await client.put(
        "/api/v1/users/profile", json={"email": "taken@vinpet.vn"}, headers=auth_headers
    )

    assert response.status_code == 409


async def test_password_hashing_roundtrip():
    hashed = SecurityUtils.hash_password("secret123")

    assert hashed != "secret123"
    assert SecurityUtils.verify_password("secret123", hashed)
    assert not SecurityUtils.verify_password("other", hashed)


async def test_service_endpoints(client):
    root = await client.get("/")
    health = await client.get("/health")

    assert root.json()["docs"] == "/api/docs"
    assert health.json()["status"] == "healthy"
    assert root.headers["X-Content-Type-Options"] == "nosniff"
