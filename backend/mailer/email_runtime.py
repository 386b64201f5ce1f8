# mailer/email_runtime.py
from __future__ import annotations
from typing import Optional

from pydantic import SecretStr

from . import config
from .domain import SubscriberEmail
from .email_client import EmailClient

_email_client: Optional[EmailClient] = None


def build_email_client() -> EmailClient:
    if not config.EMAIL_AUTHORIZATION_TOKEN:
        raise RuntimeError("EMAIL_AUTHORIZATION_TOKEN is missing.")
    if not config.EMAIL_BASE_URL:
        raise RuntimeError("EMAIL_BASE_URL is missing.")
    if config.EMAIL_TIMEOUT_MILLISECONDS <= 0:
        raise RuntimeError("EMAIL_TIMEOUT_MILLISECONDS must be positive.")
    try:
        sender = SubscriberEmail.parse(config.EMAIL_SENDER)
    except ValueError as e:
        raise RuntimeError(f"EMAIL_SENDER is invalid: {e}") from e

    return EmailClient(
        base_url=config.EMAIL_BASE_URL,
        sender=sender,
        authorization_token=SecretStr(config.EMAIL_AUTHORIZATION_TOKEN),
        timeout=config.EMAIL_TIMEOUT_MILLISECONDS / 1000,
    )


def get_email_client() -> EmailClient:
    global _email_client
    if _email_client is None:
        _email_client = build_email_client()
    return _email_client


async def close_email_client() -> None:
    global _email_client
    if _email_client is not None:
        await _email_client.aclose()
        _email_client = None
