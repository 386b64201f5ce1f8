# mailer/domain.py
from __future__ import annotations

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

FORBIDDEN_NAME_CHARS = frozenset('/()"<>\\{}')
MAX_NAME_LENGTH = 256


@dataclass(frozen=True)
class SubscriberEmail:
    value: str

    @classmethod
    def parse(cls, raw: str) -> "SubscriberEmail":
        try:
            validate_email(raw or "", check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"{raw!r} is not a valid subscriber email.") from e
        return cls(raw)

    def as_str(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SubscriberName:
    value: str

    @classmethod
    def parse(cls, raw: str) -> "SubscriberName":
        """
        Rejects empty/whitespace names, names over 256 characters and names
        carrying characters commonly used in markup or injection payloads.
        """
        s = raw or ""
        if not s.strip():
            raise ValueError("Subscriber name is empty.")
        if len(s) > MAX_NAME_LENGTH:
            raise ValueError("Subscriber name is too long.")
        if any(c in FORBIDDEN_NAME_CHARS for c in s):
            raise ValueError(f"{raw!r} is not a valid subscriber name.")
        return cls(s)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NewSubscriber:
    email: SubscriberEmail
    name: SubscriberName
