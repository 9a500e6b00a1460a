"""
Email adapter for the CMS backend.

The default implementation uses SMTP, reading credentials from Settings.
"""

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
import logging
import smtplib
import ssl

from .config import Settings, get_settings

logger = logging.getLogger(__name__)


def _connect(settings: Settings) -> smtplib.SMTP:
    port = settings.smtp_port or 587
    if port == 465:
        server = smtplib.SMTP_SSL(settings.smtp_host, port, context=ssl.create_default_context())
    else:
        server = smtplib.SMTP(settings.smtp_host, port)
    try:
        if port != 465:
            server.ehlo()
            server.starttls(context=ssl.create_default_context())
        server.login(settings.smtp_user, settings.smtp_password)
    except Exception:
        server.close()
        raise
    return server


def send_email(subject: str, to_email: str, html_body: str, text_body: str | None = None) -> bool:
    """
    Send an email with the SMTP credentials from the environment.
    Returns False without sending when the transport is not configured.
    """
    settings = get_settings()
    if not (settings.smtp_configured and settings.smtp_from and to_email):
        logger.warning("SMTP configuration missing; skipping email to %r", to_email)
        return False
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = settings.smtp_from
    msg["To"] = to_email
    plain = text_body or html_body
    msg.attach(MIMEText(plain, "plain", "utf-8"))
    msg.attach(MIMEText(html_body, "html", "utf-8"))
    try:
        with _connect(settings) as server:
            server.sendmail(settings.smtp_from, [to_email], msg.as_string())
        return True
    except (smtplib.SMTPException, OSError) as exc:
        logger.error("Failed to send email to %s: %s", to_email, exc)
        return False


def check_connection() -> bool:
    """Open and authenticate an SMTP session once, logging whether the transport is usable."""
    settings = get_settings()
    if not settings.smtp_configured:
        logger.warning("SMTP configuration missing; contact notifications are disabled")
        return False
    try:
        with _connect(settings) as server:
            server.noop()
    except (smtplib.SMTPException, OSError) as exc:
        logger.error("SMTP connection error: %s", exc)
        return False
    logger.info("SMTP server is ready to take messages")
    return True
