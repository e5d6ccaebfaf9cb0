"""SMTP email delivery."""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from .config import MailConfig

logger = logging.getLogger(__name__)


class Mailer:
    """Thin wrapper around smtplib for HTML emails."""

    def __init__(self, config: MailConfig | None = None) -> None:
        self.config = config or MailConfig()
        self.config.validate()

    def send(
        self,
        to: list[str],
        subject: str,
        html_body: str,
        cc: list[str] | None = None,
    ) -> None:
        """Send an HTML email.

        Args:
            to: Primary recipients
            subject: Subject line
            html_body: HTML body
            cc: Carbon-copy recipients
        """
        cc = cc or []
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.config.from_addr
        msg["To"] = ", ".join(to)
        if cc:
            msg["Cc"] = ", ".join(cc)
        msg.attach(MIMEText(html_body, "html"))

        with smtplib.SMTP(self.config.host, self.config.port) as server:
            if self.config.starttls:
                server.starttls()
            if self.config.user and self.config.password:
                server.login(self.config.user, self.config.password)
            server.sendmail(self.config.from_addr, to + cc, msg.as_string())

        logger.info("Sent '%s' to %d recipients", subject, len(to) + len(cc))
