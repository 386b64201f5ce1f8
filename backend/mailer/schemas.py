# mailer/schemas.py
"""
Wire format of the provider's send endpoint:

{
    "personalizations": [{"to": [{"email": "<recipient>"}]}],
    "from": {"email": "<sender>"},
    "subject": "<subject>",
    "content": [{"type": "text/plain", "value": "<body>"}]
}

Only one recipient and one plain-text part are ever sent, so the arrays are
modeled as one-element tuples.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .domain import SubscriberEmail

Address = Union[SubscriberEmail, str]


class EmailAddress(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: str


class Personalization(BaseModel):
    model_config = ConfigDict(frozen=True)

    to: Tuple[EmailAddress]


class Content(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["text/plain"] = "text/plain"
    value: str


class SendEmailRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    personalizations: Tuple[Personalization]
    from_: EmailAddress = Field(..., alias="from")
    subject: str
    content: Tuple[Content]

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


@dataclass(frozen=True)
class OutboundEmail:
    recipient: Address
    subject: str
    text: str


def build_send_email_request(
    recipient: Address,
    sender: Address,
    subject: str,
    text_content: str,
) -> SendEmailRequest:
    return SendEmailRequest(
        personalizations=(Personalization(to=(EmailAddress(email=str(recipient)),)),),
        from_=EmailAddress(email=str(sender)),
        subject=subject,
        content=(Content(value=text_content),),
    )
