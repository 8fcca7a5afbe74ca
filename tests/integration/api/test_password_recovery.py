"""
Password recovery endpoints end to end.

OTPs are read from the recording notifier; background delivery has
finished by the time the ASGI client returns the response.
"""

from datetime import timedelta

import pytest
from sqlalchemy import update

from src.domain.base import utcnow
from src.domain.entities import RecoveryChallenge
from tests.fixtures.accounts import create_account, load_challenges
from tests.fixtures.notifiers import FailingOtpNotifier

GENERIC = {
    "status": "sent",
    "message": "If the email is registered, an OTP has been sent to it.",
}


async def request_otp(client, notifier, email="a@x.com"):
    response = await client.post("/auth/forgot-password", json={"email": email})
    assert response.status_code == 200
    return notifier.last_code_for(email)


@pytest.mark.asyncio
async def test_forgot_password_sends_code(client, notifier, session_factory):
    account_id = await create_account(session_factory, email="a@x.com")

    response = await client.post("/auth/forgot-password", json={"email": "a@x.com"})

    assert response.status_code == 200
    assert response.json() == GENERIC
    [(destination, code)] = notifier.sent
    assert destination == "a@x.com"
    assert len(code) == 6 and code.isdigit()
    assert code not in response.text

    [challenge] = await load_challenges(session_factory, account_id)
    assert challenge.otp == code


@pytest.mark.asyncio
async def test_forgot_password_unknown_email(client, notifier, session_factory):
    await create_account(session_factory, email="a@x.com")

    response = await client.post("/auth/forgot-password", json={"email": "nobody@x.com"})

    assert response.status_code == 200
    assert response.json() == GENERIC
    assert notifier.sent == []


@pytest.mark.asyncio
async def test_forgot_password_invalid_email(client):
    response = await client.post("/auth/forgot-password", json={"email": "not-an-email"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_full_recovery_flow(client, notifier, session_factory):
    await create_account(session_factory, email="a@x.com", password="oldpass1")
    code = await request_otp(client, notifier)

    verify = await client.post("/auth/verify-otp", json={"email": "a@x.com", "otp": code})
    assert verify.status_code == 200
    assert verify.json() == {"status": "verified", "message": "OTP verified successfully."}

    reset = await client.post(
        "/auth/reset-password",
        json={"email": "a@x.com", "otp": code, "new_password": "newpass1"},
    )
    assert reset.status_code == 200
    assert reset.json() == {
        "status": "success",
        "message": "Password has been reset successfully.",
    }

    new_login = await client.post(
        "/auth/login", json={"email": "a@x.com", "password": "newpass1"}
    )
    old_login = await client.post(
        "/auth/login", json={"email": "a@x.com", "password": "oldpass1"}
    )
    assert new_login.status_code == 200
    assert old_login.status_code == 401


@pytest.mark.asyncio
async def test_verify_wrong_code(client, notifier, session_factory):
    await create_account(session_factory, email="a@x.com")
    code = await request_otp(client, notifier)
    wrong = "000000" if code != "000000" else "111111"

    response = await client.post("/auth/verify-otp", json={"email": "a@x.com", "otp": wrong})

    assert response.status_code == 400
    assert response.json()["error"] == {"code": "INVALID_CODE", "message": "Invalid OTP."}


@pytest.mark.asyncio
async def test_verify_unknown_email_looks_like_wrong_code(client):
    response = await client.post(
        "/auth/verify-otp", json={"email": "nobody@x.com", "otp": "123456"}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_CODE"


@pytest.mark.asyncio
async def test_verify_twice(client, notifier, session_factory):
    await create_account(session_factory, email="a@x.com")
    code = await request_otp(client, notifier)
    payload = {"email": "a@x.com", "otp": code}

    first = await client.post("/auth/verify-otp", json=payload)
    second = await client.post("/auth/verify-otp", json=payload)

    assert first.status_code == 200
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "OTP_ALREADY_USED"


@pytest.mark.asyncio
async def test_expired_code(client, notifier, session_factory):
    account_id = await create_account(session_factory, email="a@x.com")
    code = await request_otp(client, notifier)

    async with session_factory() as session:
        await session.execute(
            update(RecoveryChallenge)
            .where(RecoveryChallenge.account_id == account_id)
            .values(expiration_time=utcnow() - timedelta(minutes=1))
        )
        await session.commit()

    response = await client.post("/auth/verify-otp", json={"email": "a@x.com", "otp": code})

    assert response.status_code == 400
    assert response.json()["error"] == {
        "code": "OTP_EXPIRED",
        "message": "OTP has expired. Please request a new one.",
    }
    assert await load_challenges(session_factory, account_id) == []


@pytest.mark.asyncio
async def test_reset_without_verification(client, notifier, session_factory):
    await create_account(session_factory, email="a@x.com")
    code = await request_otp(client, notifier)

    response = await client.post(
        "/auth/reset-password",
        json={"email": "a@x.com", "otp": code, "new_password": "newpass1"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "OTP_NOT_VERIFIED"


@pytest.mark.asyncio
async def test_reset_twice(client, notifier, session_factory):
    await create_account(session_factory, email="a@x.com")
    code = await request_otp(client, notifier)
    await client.post("/auth/verify-otp", json={"email": "a@x.com", "otp": code})
    payload = {"email": "a@x.com", "otp": code, "new_password": "newpass1"}

    first = await client.post("/auth/reset-password", json=payload)
    second = await client.post("/auth/reset-password", json=payload)

    assert first.status_code == 200
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "INVALID_CODE"


@pytest.mark.asyncio
async def test_reset_short_password(client):
    response = await client.post(
        "/auth/reset-password",
        json={"email": "a@x.com", "otp": "123456", "new_password": "abc"},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_delivery_failure_keeps_challenge(session_factory):
    from httpx import ASGITransport, AsyncClient

    from config import ApplicationConfig
    from src.api.app import create_app

    account_id = await create_account(session_factory, email="a@x.com")
    notifier = FailingOtpNotifier()
    app = create_app(ApplicationConfig, session_factory=session_factory, otp_notifier=notifier)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.post("/auth/forgot-password", json={"email": "a@x.com"})

    assert response.status_code == 200
    assert response.json() == GENERIC
    assert notifier.attempts == 1
    assert len(await load_challenges(session_factory, account_id)) == 1
