"""Outbound mail over SMTP (STARTTLS). One attempt per call."""

import html
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from jobportal.config import settings
from jobportal.core.errors import MailDeliveryError

logger = logging.getLogger(__name__)


class SmtpMailer:
    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        user: str | None = None,
        password: str | None = None,
        from_addr: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.host = (host if host is not None else settings.smtp_host).strip()
        self.port = port if port is not None else settings.smtp_port
        self.user = (user if user is not None else settings.smtp_user).strip()
        self.password = password if password is not None else settings.smtp_password
        self.from_addr = (from_addr if from_addr is not None else settings.mail_from).strip() or self.user
        self.timeout = timeout if timeout is not None else settings.smtp_timeout_seconds

    @property
    def configured(self) -> bool:
        return bool(self.host and self.user and self.password)

    def _build(self, to_addr: str, subject: str, html: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.from_addr
        msg["To"] = to_addr
        msg.attach(MIMEText(html, "html"))
        return msg

    def send(self, to_addr: str, subject: str, html: str) -> None:
        if not self.configured:
            raise MailDeliveryError("SMTP not configured (set SMTP_HOST, SMTP_USER, SMTP_PASSWORD)")
        msg = self._build(to_addr, subject, html)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.starttls()
                server.login(self.user, self.password)
                server.sendmail(self.from_addr, [to_addr], msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            logger.warning("SMTP send to %s failed: %s", to_addr, e)
            raise MailDeliveryError(str(e)) from e
        logger.info("Mail sent to %s: %s", to_addr, subject)


def reset_password_email(reset_url: str) -> tuple[str, str]:
    return (
        "Password Reset Request",
        f'<p>You requested a password reset.</p><p>Click this <a href="{html.escape(reset_url)}">link</a> '
        "to reset your password. The link expires in one hour.</p>",
    )


def verification_email(name: str, verify_url: str) -> tuple[str, str]:
    return (
        "Verify your email address",
        f"<p>Hi {html.escape(name)},</p><p>Confirm your email address by opening this "
        f'<a href="{html.escape(verify_url)}">link</a>.</p>',
    )
