"""SMTP delivery of finished briefs."""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from typing import List, Optional, Sequence

from config import BriefConfig
from errors import ConfigurationError, DeliveryError

logger = logging.getLogger(__name__)


class BriefMailer:
    """Send a DOCX brief to the fixed recipient list (plus bcc)."""

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        sender: Optional[str] = None,
        recipients: Optional[Sequence[str]] = None,
        bcc: Optional[Sequence[str]] = None,
        timeout: Optional[float] = None,
        starttls: Optional[bool] = None,
        smtp_factory=smtplib.SMTP,
    ):
        self.host = host or BriefConfig.SMTP_HOST
        self.port = port or BriefConfig.SMTP_PORT
        self.user = user if user is not None else BriefConfig.SMTP_USER
        self.password = password if password is not None else BriefConfig.SMTP_PASSWORD
        self.sender = sender or BriefConfig.MAIL_FROM or self.user
        self.recipients: List[str] = list(recipients if recipients is not None else BriefConfig.RECIPIENTS)
        self.bcc: List[str] = list(bcc if bcc is not None else BriefConfig.BCC)
        self.timeout = timeout or BriefConfig.SMTP_TIMEOUT
        self.starttls = BriefConfig.SMTP_STARTTLS if starttls is None else starttls
        self._smtp_factory = smtp_factory

    def build_message(self, subject: str, attachment: bytes, filename: str) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = ", ".join(self.recipients)
        msg.set_content(BriefConfig.EMAIL_BODY)
        maintype, subtype = BriefConfig.DOCX_MIME_TYPE.split("/", 1)
        msg.add_attachment(attachment, maintype=maintype, subtype=subtype, filename=filename)
        return msg

    def send(self, subject: str, attachment: bytes, filename: str) -> None:
        if not self.recipients:
            raise ConfigurationError("BRIEF_RECIPIENTS is empty; nowhere to send the brief")
        if not self.sender:
            raise ConfigurationError("No sender address; set SMTP_USER or BRIEF_MAIL_FROM")

        msg = self.build_message(subject, attachment, filename)
        # Bcc stays out of the headers; it only joins the envelope.
        envelope = self.recipients + [addr for addr in self.bcc if addr not in self.recipients]
        try:
            with self._smtp_factory(self.host, self.port, timeout=self.timeout) as smtp:
                if self.starttls:
                    smtp.starttls()
                if self.user and self.password:
                    smtp.login(self.user, self.password)
                smtp.send_message(msg, from_addr=self.sender, to_addrs=envelope)
        except (smtplib.SMTPException, OSError) as exc:
            raise DeliveryError(f"Could not send '{subject}' via {self.host}:{self.port}: {exc}") from exc
        logger.info("Sent '%s' to %d recipient(s)", subject, len(envelope))
