"""Application configuration.

Settings are read from environment variables (and a local `.env` file when
present). Nothing here carries credentials; every secret comes from the
environment.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the questionnaire service.

    Attributes:
        database_url: Connection string for the write store.
        read_database_url: Connection string for reads (defaults to the write store).
        smtp_host: Mail server host. Notifications are skipped when unset.
        smtp_port: Mail server port.
        smtp_username: SMTP login user, login is skipped when unset.
        smtp_password: SMTP login password.
        smtp_use_tls: Upgrade the connection with STARTTLS.
        smtp_timeout: Socket timeout in seconds for the SMTP client.
        mail_from_address: Sender address.
        mail_from_name: Sender display name.
        admin_email: Recipient of new-submission notifications.
        admin_name: Display name of the admin recipient.
    """

    database_url: str = "sqlite:///nutripath.db"
    read_database_url: Optional[str] = None
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_use_tls: bool = True
    smtp_timeout: float = 10.0
    mail_from_address: Optional[str] = None
    mail_from_name: str = "NutriPath Team"
    admin_email: Optional[str] = None
    admin_name: str = "NutriPath Admin"

    @property
    def mail_enabled(self) -> bool:
        return bool(self.smtp_host and self.mail_from_address)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment."""
        database_url = os.getenv("DATABASE_URL", cls.database_url)
        smtp_username = os.getenv("SMTP_USERNAME") or None
        return cls(
            database_url=database_url,
            read_database_url=os.getenv("READ_DATABASE_URL") or database_url,
            smtp_host=os.getenv("SMTP_HOST") or None,
            smtp_port=int(os.getenv("SMTP_PORT", cls.smtp_port)),
            smtp_username=smtp_username,
            smtp_password=os.getenv("SMTP_PASSWORD") or None,
            smtp_use_tls=_env_bool("SMTP_USE_TLS", cls.smtp_use_tls),
            smtp_timeout=float(os.getenv("SMTP_TIMEOUT", cls.smtp_timeout)),
            mail_from_address=os.getenv("MAIL_FROM_ADDRESS") or smtp_username,
            mail_from_name=os.getenv("MAIL_FROM_NAME", cls.mail_from_name),
            admin_email=os.getenv("ADMIN_EMAIL") or None,
            admin_name=os.getenv("ADMIN_NAME", cls.admin_name),
        )


@lru_cache()
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return Settings.from_env()
