from __future__ import annotations

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

from ..core.exceptions import ExternalServiceError
from ..settings import SmtpSettings

logger = logging.getLogger(__name__)


class SmtpMailer:
    """Send HTML mail through one SMTP session per message."""

    def __init__(self, settings: SmtpSettings):
        self._settings = settings

    def _connect(self) -> smtplib.SMTP:
        s = self._settings
        if s.port == 465:
            return smtplib.SMTP_SSL(s.host, s.port, timeout=s.timeout)
        server = smtplib.SMTP(s.host, s.port, timeout=s.timeout)
        if s.use_tls:
            try:
                server.ehlo()
                server.starttls()
                server.ehlo()
            except (smtplib.SMTPException, OSError):
                server.close()
                raise
        return server

    def send_html(self, *, to_email: str, to_name: str, subject: str, html_body: str) -> None:
        s = self._settings
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = formataddr((s.sender_name, s.sender or s.username))
        msg["To"] = formataddr((to_name, to_email))
        msg.attach(MIMEText(html_body, "html", "utf-8"))

        logger.info("smtp send host=%s:%s to=%s", s.host, s.port, to_email)
        try:
            with self._connect() as server:
                if s.username:
                    server.login(s.username, s.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("smtp send failed to=%s: %s", to_email, e)
            raise ExternalServiceError(f"Email 發送失敗: {e}") from e
