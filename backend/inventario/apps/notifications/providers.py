from __future__ import annotations

import logging
import os
import smtplib
from email.message import EmailMessage
from typing import Tuple

from . import models

logger = logging.getLogger(__name__)


class EmailProvider:
    def send(
        self,
        *,
        template_key: str,
        recipient: str,
        subject: str,
        context: dict,
        correlation_id: str | None,
    ) -> None:
        raise NotImplementedError


class NoopProvider(EmailProvider):
    def send(
        self,
        *,
        template_key: str,
        recipient: str,
        subject: str,
        context: dict,
        correlation_id: str | None,
    ) -> None:
        return None


def render_body(template_key: str, context: dict) -> str:
    """
    Plain-text body for a template key.

    Unknown keys fall back to a `key: value` dump of the context.
    """
    if template_key == models.TEMPLATE_LOW_STOCK:
        return (
            f"El material '{context.get('material')}' (ID {context.get('materia_id')}) "
            f"tiene {context.get('cantidad')} {context.get('unidad') or ''} en stock, "
            f"por debajo del minimo de {context.get('stock_minimo')}."
        )
    lines = [f"{key}: {value}" for key, value in sorted((context or {}).items())]
    return "\n".join(lines)


class SmtpProvider(EmailProvider):
    """
    Plain SMTP delivery.

    Env expected:
      SMTP_HOST, SMTP_PORT, SMTP_USER, SMTP_PASS, SMTP_FROM
      SMTP_STARTTLS (default true)
    """

    def __init__(
        self,
        *,
        host: str,
        port: int,
        sender: str,
        user: str | None = None,
        password: str | None = None,
        starttls: bool = True,
    ) -> None:
        self.host = host
        self.port = port
        self.sender = sender
        self.user = user
        self.password = password
        self.starttls = starttls

    def send(
        self,
        *,
        template_key: str,
        recipient: str,
        subject: str,
        context: dict,
        correlation_id: str | None,
    ) -> None:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = recipient
        msg["Subject"] = subject
        if correlation_id:
            msg["X-Correlation-ID"] = correlation_id
        msg.set_content(render_body(template_key, context))

        with smtplib.SMTP(self.host, self.port, timeout=15) as s:
            if self.starttls:
                s.starttls()
            if self.user and self.password:
                s.login(self.user, self.password)
            s.send_message(msg)
        logger.info("Sent %s email to %s", template_key, recipient)


def _smtp_from_env() -> SmtpProvider | None:
    host = os.getenv("SMTP_HOST")
    port = os.getenv("SMTP_PORT")
    sender = os.getenv("SMTP_FROM")
    if not (host and port and sender):
        return None
    return SmtpProvider(
        host=host,
        port=int(port),
        sender=sender,
        user=os.getenv("SMTP_USER"),
        password=os.getenv("SMTP_PASS"),
        starttls=os.getenv("SMTP_STARTTLS", "true").strip().lower() not in {"0", "false", "no"},
    )


def get_email_provider() -> Tuple[EmailProvider, bool]:
    provider_name = (
        os.getenv("NOTIFICATIONS_EMAIL_PROVIDER")
        or os.getenv("EMAIL_PROVIDER")
        or ""
    ).strip().lower()
    if not provider_name or provider_name in {"none", "noop", "disabled"}:
        return NoopProvider(), False
    if provider_name == "smtp":
        provider = _smtp_from_env()
        if provider is None:
            logger.warning("SMTP provider selected but SMTP_HOST/SMTP_PORT/SMTP_FROM are not set")
            return NoopProvider(), False
        return provider, True
    raise ValueError(f"Unsupported email provider: {provider_name}")
