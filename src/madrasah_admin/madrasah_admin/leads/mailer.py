from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr
from typing import Mapping

from ..core.exceptions import MailDeliveryError
from .repository import Mailer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SmtpConfig:
    host: str
    port: int
    username: str
    password: str
    from_address: str
    use_tls: bool = True
    timeout: int = 15

    @classmethod
    def from_mapping(cls, smtp_config: Mapping) -> "SmtpConfig":
        username = str(smtp_config.get("username", ""))
        return cls(
            host=str(smtp_config.get("host", "localhost")),
            port=int(smtp_config.get("port", 587)),
            username=username,
            # App passwords are often pasted with spaces.
            password=str(smtp_config.get("password", "")).replace(" ", ""),
            from_address=str(smtp_config.get("from_address") or username or "no-reply@localhost"),
            use_tls=bool(smtp_config.get("use_tls", True)),
            timeout=int(smtp_config.get("timeout", 15)),
        )

    def describe(self) -> str:
        return f"{self.username or '-'}@{self.host}:{self.port}"


class SmtpMailer(Mailer):
    """Delivers plain-text mail through an SMTP relay, one connection per message."""

    def __init__(self, config: SmtpConfig, *, smtp_factory=smtplib.SMTP):
        self._config = config
        self._smtp_factory = smtp_factory

    @property
    def config(self) -> SmtpConfig:
        return self._config

    def build_message(self, *, to: str, subject: str, text: str, sender_name: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = formataddr((sender_name, self._config.from_address))
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(text)
        return msg

    def send(self, *, to: str, subject: str, text: str, sender_name: str) -> None:
        msg = self.build_message(to=to, subject=subject, text=text, sender_name=sender_name)
        cfg = self._config
        try:
            with self._smtp_factory(cfg.host, cfg.port, timeout=cfg.timeout) as server:
                if cfg.use_tls:
                    server.starttls()
                if cfg.username:
                    server.login(cfg.username, cfg.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s via %s: %s", to, cfg.describe(), e)
            raise MailDeliveryError(f"Could not deliver email to {to}") from e

        logger.info("Email sent to %s: %s", to, subject)
