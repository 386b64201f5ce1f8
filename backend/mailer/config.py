# mailer/config.py
import os
from dotenv import load_dotenv

load_dotenv()

# Email provider
EMAIL_BASE_URL = os.getenv("EMAIL_BASE_URL", "http://localhost:8025")
EMAIL_SENDER = os.getenv("EMAIL_SENDER", "noreply@example.com")
EMAIL_AUTHORIZATION_TOKEN = os.getenv("EMAIL_AUTHORIZATION_TOKEN")  # required only when the client is built
EMAIL_TIMEOUT_MILLISECONDS = int(os.getenv("EMAIL_TIMEOUT_MILLISECONDS", "10000"))

# Public URL used to build confirmation links
APP_BASE_URL = os.getenv("APP_BASE_URL", "http://localhost:8000")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",")
