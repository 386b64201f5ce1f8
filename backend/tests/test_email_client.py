import asyncio
import json
import time

import httpx
import pytest
from pydantic import SecretStr

from mailer.domain import SubscriberEmail
from mailer.email_client import EmailClient, EmailSendError
from mailer.schemas import OutboundEmail

BASE_URL = "http://provider.test"


def make_client(handler, timeout: float = 0.2) -> EmailClient:
    return EmailClient(
        BASE_URL,
        SubscriberEmail.parse("sender@example.com"),
        SecretStr("super-secret-token"),
        timeout,
        transport=httpx.MockTransport(handler),
    )


def recipient() -> SubscriberEmail:
    return SubscriberEmail.parse("subscriber@example.com")


def has_mandatory_fields(body: dict) -> bool:
    try:
        return bool(
            body["personalizations"][0]["to"][0]["email"]
            and body["from"]["email"]
            and body["subject"]
            and body["content"]
        )
    except (KeyError, IndexError, TypeError):
        return False


@pytest.mark.asyncio
async def test_send_email_fires_a_request_to_base_url():
    received = []

    def handler(request: httpx.Request) -> httpx.Response:
        received.append(request)
        return httpx.Response(200)

    async with make_client(handler) as client:
        await client.send_email(recipient(), "Subject", "Some content")

    assert len(received) == 1
    req = received[0]
    assert req.method == "POST"
    assert req.url.path == "/email"
    assert req.headers["Authorization"] == "super-secret-token"
    assert req.headers["Content-Type"] == "application/json"
    body = json.loads(req.content)
    assert has_mandatory_fields(body)
    assert body["personalizations"][0]["to"][0]["email"] == "subscriber@example.com"
    assert body["from"]["email"] == "sender@example.com"


@pytest.mark.asyncio
async def test_base_url_is_used_verbatim():
    received = []

    def handler(request: httpx.Request) -> httpx.Response:
        received.append(str(request.url))
        return httpx.Response(202)

    client = EmailClient(
        "http://provider.test/v3",
        SubscriberEmail.parse("sender@example.com"),
        SecretStr("t"),
        0.2,
        transport=httpx.MockTransport(handler),
    )
    await client.send(OutboundEmail(recipient(), "Subject", "Body"))
    await client.aclose()

    assert received == ["http://provider.test/v3/email"]


@pytest.mark.asyncio
async def test_send_email_fails_if_the_server_returns_500():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500, text="internal error")

    async with make_client(handler) as client:
        with pytest.raises(EmailSendError) as exc_info:
            await client.send_email(recipient(), "Subject", "Some content")

    assert exc_info.value.status_code == 500
    assert exc_info.value.response_text == "internal error"
    # no retry
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_send_email_fails_on_client_error_status():
    async with make_client(lambda request: httpx.Response(401)) as client:
        with pytest.raises(EmailSendError) as exc_info:
            await client.send_email(recipient(), "Subject", "Some content")

    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_send_email_fails_on_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as client:
        with pytest.raises(EmailSendError) as exc_info:
            await client.send_email(recipient(), "Subject", "Some content")

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_send_email_times_out_if_the_server_takes_too_long():
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(180)
        return httpx.Response(200)

    async with make_client(handler, timeout=0.2) as client:
        started = time.monotonic()
        with pytest.raises(EmailSendError):
            await client.send_email(recipient(), "Subject", "Some content")
        elapsed = time.monotonic() - started

    assert elapsed < 5


@pytest.mark.asyncio
async def test_concurrent_clients_use_their_own_timeouts():
    async def slow(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(0.5)
        return httpx.Response(200)

    short = make_client(slow, timeout=0.1)
    long = make_client(slow, timeout=5.0)

    results = await asyncio.gather(
        short.send_email(recipient(), "Subject", "Body"),
        long.send_email(recipient(), "Subject", "Body"),
        return_exceptions=True,
    )
    await short.aclose()
    await long.aclose()

    assert isinstance(results[0], EmailSendError)
    assert results[1] is None


@pytest.mark.asyncio
async def test_token_is_not_exposed_in_repr():
    client = make_client(lambda request: httpx.Response(200))
    assert "super-secret-token" not in repr(client)
    await client.aclose()
