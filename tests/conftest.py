"""Shared fixtures: a throwaway SQLite database and a fake SMTP server.

The environment is prepared before any application module is imported so
the engines in `database.database` bind to the temporary file.
"""
import os
import smtplib
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="nutripath-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP_DIR, "test.db")
os.environ["LOG_DIR"] = _TMP_DIR
for _var in ("READ_DATABASE_URL", "SMTP_HOST", "SMTP_USERNAME", "MAIL_FROM_ADDRESS", "ADMIN_EMAIL"):
    os.environ.pop(_var, None)

import pytest

from core.config import Settings
from database import WriteSessionLocal, write_engine
from database.models import Base


@pytest.fixture(autouse=True)
def fresh_schema():
    """Recreate every table so each test starts from an empty store."""
    Base.metadata.drop_all(bind=write_engine)
    Base.metadata.create_all(bind=write_engine)
    yield


@pytest.fixture
def db():
    session = WriteSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def amara_form():
    """A complete, valid questionnaire."""
    return {
        "name": "Amara",
        "email": "amara@example.com",
        "age": "29",
        "gender": "F",
        "meals_per_day": "3",
        "skip_breakfast": "No",
        "foods_avoid": "none",
        "water_intake": "2L",
        "activity_level": "moderate",
        "sleep_hours": "7",
        "smoke": "No",
        "alcohol": "No",
        "stress_level": "low",
        "primary_goal": "weight loss",
        "timeframe": "3 months",
        "additional_info": "none",
        "on_medication": "No",
        "conditions": ["asthma", ""],
        "foods": ["peanuts"],
    }


class FakeSMTP:
    """Stand-in for `smtplib.SMTP` that records messages instead of sending them."""

    def __init__(self, outbox, failing_recipients, host, port, timeout=None):
        self.outbox = outbox
        self.failing_recipients = failing_recipients
        self.host = host
        self.port = port
        self.tls = False
        self.logged_in_as = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def starttls(self):
        self.tls = True

    def login(self, user, password):
        self.logged_in_as = user

    def send_message(self, message):
        if any(r in message["To"] for r in self.failing_recipients):
            raise smtplib.SMTPRecipientsRefused({message["To"]: (550, b"mailbox unavailable")})
        self.outbox.append({
            "to": message["To"],
            "from": message["From"],
            "subject": message["Subject"],
            "html": message.get_body(preferencelist=("html",)).get_content(),
            "tls": self.tls,
            "user": self.logged_in_as,
        })


@pytest.fixture
def smtp_outbox():
    """Return (outbox, failing_recipients, factory) for building an `EmailNotifier`."""
    outbox = []
    failing = set()

    def factory(host, port, timeout=None):
        return FakeSMTP(outbox, failing, host, port, timeout=timeout)

    return outbox, failing, factory


@pytest.fixture
def mail_settings():
    return Settings(
        database_url=os.environ["DATABASE_URL"],
        smtp_host="smtp.example.com",
        smtp_port=587,
        smtp_username="mailer@example.com",
        smtp_password="secret",
        mail_from_address="mailer@example.com",
        admin_email="admin@example.com",
    )
