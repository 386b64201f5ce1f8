# mailer/email_templates.py


def render_subscription_confirmation(name: str, confirmation_link: str) -> tuple[str, str]:
    subject = "Welcome! Please confirm your subscription"
    body = (
        f"Hi {name},\n\n"
        "Thanks for subscribing to our newsletter.\n"
        "Please confirm your subscription by visiting the link below:\n\n"
        f"{confirmation_link}\n\n"
        "If you did not sign up, you can ignore this message.\n"
    )
    return subject, body
