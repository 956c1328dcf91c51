"""Email delivery for account notifications."""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from evstations.config import Settings, get_settings

logger = logging.getLogger(__name__)


class EmailService:
    """Send plain-text emails over SMTP."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def send(self, to_email: str, subject: str, body: str) -> bool:
        """Send an email. Returns True if the SMTP server accepted it."""
        if not self.settings.smtp_configured:
            logger.warning(f"SMTP not configured, cannot send email to {to_email}")
            return False

        message = MIMEMultipart()
        message["From"] = self.settings.email_from
        message["To"] = to_email
        message["Subject"] = subject
        message.attach(MIMEText(body, "plain"))

        try:
            with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port, timeout=30) as server:
                if self.settings.smtp_use_tls:
                    server.starttls()
                if self.settings.smtp_username and self.settings.smtp_password:
                    server.login(self.settings.smtp_username, self.settings.smtp_password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to_email}: {e}")
            return False

        logger.info(f"Email sent to {to_email}: {subject}")
        return True

    def send_password_reset(self, to_email: str, reset_url: str) -> bool:
        """Email a password reset link."""
        minutes = self.settings.reset_token_expiration_minutes
        body = f"""You are receiving this email because you (or someone else) requested a password reset.

Open the link below to choose a new password:

{reset_url}

The link expires in {minutes} minutes. If you did not request this, ignore this email.
"""
        return self.send(to_email, "Password reset", body)
