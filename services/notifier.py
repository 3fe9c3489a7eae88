"""Best-effort email notifications for accepted submissions.

Two HTML messages go out after a submission is stored: a confirmation to
the submitter and a notification to the admin address. Delivery failures
are logged and never propagate to the caller.
"""

import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from html import escape
from typing import Callable, Dict, Optional

from core.config import Settings, get_settings
from core.exceptions import NotificationError
from core.logger import get_logger, mask_email

logger = get_logger("services.notifier")

CONFIRMATION_SUBJECT = "Thank you for completing the NutriPath Questionnaire"
ADMIN_SUBJECT = "New NutriPath Submission"


def confirmation_body(name: str) -> str:
    return (
        f"Hi {escape(name)},<br><br>Thanks for completing the NutriPath questionnaire. "
        "Our team will analyze your answers and send you a personalized diet recommendation "
        "based on affordable, local foods. Stay healthy!"
    )


def admin_body(name: str, email: str) -> str:
    return (
        f"A new questionnaire has been submitted by {escape(name)} ({escape(email)}). "
        "Please check the database for details."
    )


class EmailNotifier:
    """Sends questionnaire emails over authenticated SMTP.

    Args:
        settings: Mail server, credentials and sender identity.
        smtp_factory: Callable returning an `smtplib.SMTP`-compatible client;
            tests pass a fake.
    """

    def __init__(self, settings: Settings, smtp_factory: Callable[..., smtplib.SMTP] = smtplib.SMTP):
        self.settings = settings
        self.smtp_factory = smtp_factory

    def build_message(self, to_address: str, to_name: Optional[str], subject: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = formataddr((self.settings.mail_from_name, self.settings.mail_from_address))
        message["To"] = formataddr((to_name or "", to_address))
        message.set_content("This message requires an HTML-capable email client.")
        message.add_alternative(html, subtype="html")
        return message

    def send(self, to_address: str, to_name: Optional[str], subject: str, html: str) -> None:
        """Deliver one HTML message.

        Raises:
            NotificationError: If mail is not configured or the transport fails.
        """
        if not self.settings.mail_enabled:
            raise NotificationError(to_address, "SMTP is not configured")

        s = self.settings
        try:
            message = self.build_message(to_address, to_name, subject, html)
            with self.smtp_factory(s.smtp_host, s.smtp_port, timeout=s.smtp_timeout) as client:
                if s.smtp_use_tls:
                    client.starttls()
                if s.smtp_username:
                    client.login(s.smtp_username, s.smtp_password or "")
                client.send_message(message)
        except (smtplib.SMTPException, OSError, ValueError) as exc:
            # ValueError covers unencodable addresses and CR/LF in header values
            raise NotificationError(to_address, str(exc)) from exc
        logger.info("Sent '%s' to %s", subject, mask_email(to_address))

    def send_confirmation(self, name: str, email: str) -> None:
        self.send(email, name, CONFIRMATION_SUBJECT, confirmation_body(name))

    def send_admin_notification(self, name: str, email: str) -> None:
        if not self.settings.admin_email:
            raise NotificationError("admin", "ADMIN_EMAIL is not configured")
        self.send(self.settings.admin_email, self.settings.admin_name, ADMIN_SUBJECT, admin_body(name, email))

    def notify_submission(self, name: str, email: str) -> Dict[str, bool]:
        """Send both messages independently, logging and swallowing failures.

        Returns:
            Delivery status keyed by ``"confirmation"`` and ``"admin"``.
        """
        results = {}
        for key, send in (
            ("confirmation", self.send_confirmation),
            ("admin", self.send_admin_notification),
        ):
            try:
                send(name, email)
                results[key] = True
            except NotificationError as exc:
                logger.error("Mailer error (%s): %s", key, exc.reason)
                results[key] = False
            except Exception:
                logger.exception("Unexpected mailer error (%s)", key)
                results[key] = False
        return results


def get_notifier() -> EmailNotifier:
    """FastAPI dependency returning a notifier bound to the process settings."""
    return EmailNotifier(get_settings())
