# mailer/email_client.py
from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx
from pydantic import SecretStr

from .domain import SubscriberEmail
from .schemas import Address, OutboundEmail, build_send_email_request

logger = logging.getLogger(__name__)

MAX_ERROR_BODY_CHARS = 500


class EmailSendError(Exception):
    """Raised when the provider could not be reached, timed out, or answered non-2xx."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text


class EmailClient:
    """
    Sends single-recipient plain-text emails through the provider's
    `POST {base_url}/email` endpoint.

    One instance is meant to be shared by the whole process. The timeout bounds
    the full request/response round trip and cannot be changed per call.
    """

    def __init__(
        self,
        base_url: str,
        sender: SubscriberEmail,
        authorization_token: SecretStr,
        timeout: float,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.sender = sender
        self.authorization_token = authorization_token
        self.timeout = timeout
        self.http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    def __repr__(self) -> str:
        return (
            f"EmailClient(base_url={self.base_url!r}, sender={str(self.sender)!r}, "
            f"authorization_token={self.authorization_token!r}, timeout={self.timeout!r})"
        )

    async def __aenter__(self) -> "EmailClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http_client.aclose()

    async def send(self, msg: OutboundEmail) -> None:
        await self.send_email(msg.recipient, msg.subject, msg.text)

    async def send_email(self, recipient: Address, subject: str, text_content: str) -> None:
        url = f"{self.base_url}/email"
        request_body = build_send_email_request(recipient, self.sender, subject, text_content)

        try:
            r = await asyncio.wait_for(
                self.http_client.post(
                    url,
                    headers={
                        "Authorization": self.authorization_token.get_secret_value(),
                        "Content-Type": "application/json",
                    },
                    content=request_body.to_json(),
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            logger.warning("email to %s timed out after %ss", recipient, self.timeout)
            raise EmailSendError(f"Email provider did not respond within {self.timeout}s.") from e
        except httpx.HTTPError as e:
            logger.warning("email to %s failed: %s", recipient, e)
            raise EmailSendError(f"Email provider request failed: {e}") from e

        if not r.is_success:
            text = r.text[:MAX_ERROR_BODY_CHARS]
            logger.warning("email to %s rejected: status=%s", recipient, r.status_code)
            raise EmailSendError(
                f"Email provider returned {r.status_code}.",
                status_code=r.status_code,
                response_text=text,
            )

        logger.info("email sent to %s status=%s", recipient, r.status_code)
