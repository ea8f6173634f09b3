"""SMTP mail relay client for feedback notifications."""

import asyncio
import os
import smtplib
import ssl
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from src.lib.exceptions import MailDeliveryError


@dataclass(frozen=True)
class MailMessage:
    """A single outbound email."""
    sender: str
    to: str
    subject: str
    text: str
    html: Optional[str] = None

    def to_mime(self):
        """Build the MIME message, multipart/alternative when HTML is present."""
        if self.html is None:
            msg = MIMEText(self.text, "plain", "utf-8")
        else:
            msg = MIMEMultipart("alternative")
            msg.attach(MIMEText(self.text, "plain", "utf-8"))
            msg.attach(MIMEText(self.html, "html", "utf-8"))

        msg["Subject"] = self.subject
        msg["From"] = self.sender
        msg["To"] = self.to
        return msg


class MailTransport:
    """Authenticated client for the outbound mail relay (Gmail SMTP by default)."""

    def __init__(
        self,
        user: Optional[str] = None,
        password: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the transport, falling back to environment variables."""
        self.user = user or os.getenv("GMAIL_USER")
        self.password = password or os.getenv("GMAIL_APP_PASSWORD")
        self.host = host or os.getenv("SMTP_HOST", "smtp.gmail.com")
        self.port = int(port or os.getenv("SMTP_PORT", "465"))
        self.timeout = float(timeout or os.getenv("SMTP_TIMEOUT", "30"))

        if not self.user:
            raise ValueError("GMAIL_USER environment variable not set")
        if not self.password:
            raise ValueError("GMAIL_APP_PASSWORD environment variable not set")

    def _connect(self) -> smtplib.SMTP:
        context = ssl.create_default_context()
        if self.port == 465:
            return smtplib.SMTP_SSL(self.host, self.port, context=context, timeout=self.timeout)

        server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        server.starttls(context=context)
        return server

    def send_sync(self, message: MailMessage) -> None:
        """
        Deliver a message over a fresh SMTP session.

        Args:
            message: Message to deliver

        Raises:
            MailDeliveryError: If connecting, authenticating or sending fails
        """
        try:
            server = self._connect()
            try:
                server.login(self.user, self.password)
                server.sendmail(message.sender, [message.to], message.to_mime().as_string())
            finally:
                server.quit()
        except (smtplib.SMTPException, OSError) as e:
            raise MailDeliveryError(
                str(e) or e.__class__.__name__,
                details={"to": message.to, "host": self.host}
            ) from e

    async def send(self, message: MailMessage) -> None:
        """
        Deliver a message without blocking the event loop.

        Raises:
            MailDeliveryError: If delivery fails
        """
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self.send_sync, message)
