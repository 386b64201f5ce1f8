import os
import sys
from pathlib import Path

# Add /backend to sys.path so "import mailer" works in tests
BACKEND_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BACKEND_DIR))

os.environ.setdefault("EMAIL_AUTHORIZATION_TOKEN", "test-token")
os.environ.setdefault("EMAIL_SENDER", "sender@example.com")
