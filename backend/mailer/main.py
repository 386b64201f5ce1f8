# mailer/main.py
import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .config import ALLOWED_ORIGINS, APP_BASE_URL, LOG_LEVEL
from .domain import NewSubscriber, SubscriberEmail, SubscriberName
from .email_client import EmailClient, EmailSendError
from .email_runtime import close_email_client, get_email_client
from .email_templates import render_subscription_confirmation
from .logging_setup import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(LOG_LEVEL)
    yield
    await close_email_client()


app = FastAPI(title="Newsletter API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in ALLOWED_ORIGINS],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class SubscribeRequest(BaseModel):
    name: str
    email: str


@app.get("/health_check")
def health_check():
    return Response(status_code=200)


@app.post("/subscriptions")
async def subscribe(
    request: SubscribeRequest,
    email_client: EmailClient = Depends(get_email_client),
):
    try:
        subscriber = NewSubscriber(
            email=SubscriberEmail.parse(request.email),
            name=SubscriberName.parse(request.name),
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    token = uuid.uuid4().hex
    link = f"{APP_BASE_URL}/subscriptions/confirm?subscription_token={token}"
    subject, text = render_subscription_confirmation(str(subscriber.name), link)

    try:
        await email_client.send_email(subscriber.email, subject, text)
    except EmailSendError as e:
        logger.error("confirmation email to %s failed: %s", subscriber.email, e)
        raise HTTPException(status_code=500, detail="Failed to send confirmation email.")

    return {"status": "ok"}
