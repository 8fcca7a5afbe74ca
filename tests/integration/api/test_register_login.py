import pytest

from tests.fixtures.accounts import create_account


@pytest.mark.asyncio
async def test_register(client):
    response = await client.post(
        "/auth/register",
        json={"email": "new@x.com", "password": "secret1", "full_name": "New User"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Registration successful"
    assert isinstance(body["account_id"], int)


@pytest.mark.asyncio
async def test_register_duplicate_email(client, session_factory):
    await create_account(session_factory, email="a@x.com")

    response = await client.post(
        "/auth/register",
        json={"email": "a@x.com", "password": "secret1", "full_name": "Again"},
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"email": "not-an-email", "password": "secret1", "full_name": "X"},
        {"email": "b@x.com", "password": "abc", "full_name": "X"},
        {"email": "b@x.com", "password": "secret1", "full_name": ""},
        {"email": "b@x.com", "password": "secret1"},
    ],
)
async def test_register_validation(client, payload):
    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_register_then_login(client):
    await client.post(
        "/auth/register",
        json={"email": "new@x.com", "password": "secret1", "full_name": "New User"},
    )

    response = await client.post(
        "/auth/login", json={"email": "new@x.com", "password": "secret1"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["token_type"] == "bearer"
    assert body["access_token"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email, password", [("a@x.com", "wrongpass"), ("nobody@x.com", "oldpass1")]
)
async def test_login_rejected(client, session_factory, email, password):
    await create_account(session_factory, email="a@x.com", password="oldpass1")

    response = await client.post("/auth/login", json={"email": email, "password": password})

    assert response.status_code == 401
    assert response.json()["error"] == {
        "code": "INVALID_CREDENTIALS",
        "message": "Invalid username or password",
    }
