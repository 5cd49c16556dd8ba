"""
Outbound email delivery over SMTP.
"""

import logging
import smtplib
from dataclasses import dataclass
from datetime import datetime, timezone
from email.message import EmailMessage
from email.utils import formataddr, make_msgid
from html import escape
from typing import Callable, Optional, Sequence

from app.config import Settings, settings as default_settings
from app.exceptions import EmailDeliveryError

logger = logging.getLogger("nutritrack.services.email")

DEFAULT_BODY = (
    "Tu profesional de confianza ha preparado un plan personalizado "
    "especialmente para ti."
)


@dataclass(frozen=True)
class EmailAttachment:
    filename: str
    content: bytes
    content_type: str = "application/pdf"


@dataclass(frozen=True)
class EmailReceipt:
    message_id: str
    recipient: str
    timestamp: datetime


def render_plan_email(body_message: Optional[str], patient_name: Optional[str] = None) -> str:
    greeting = f"Hola {escape(patient_name)}," if patient_name else "Hola,"
    body = escape(body_message) if body_message else DEFAULT_BODY
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>NutriTrack Pro - Tu Plan Personalizado</title></head>
<body style="font-family: Arial, sans-serif; color: #333;">
  <h1 style="color: #059669;">NutriTrack Pro</h1>
  <h2>Tu Plan Personalizado</h2>
  <p>{greeting}</p>
  <p>{body}</p>
  <p><strong>Adjunto:</strong> Encontrarás tu plan completo en formato PDF listo para descargar e imprimir.</p>
  <p>Si tienes alguna duda sobre tu plan, no dudes en contactar con tu profesional.</p>
  <p>Saludos cordiales,<br><strong>El equipo de NutriTrack Pro</strong></p>
</body>
</html>
"""


class EmailService:
    """
    Sends plan emails through the configured SMTP relay.

    smtp_factory builds the client connection; tests pass a fake in its place.
    """

    def __init__(
        self,
        config: Settings = default_settings,
        smtp_factory: Callable[..., smtplib.SMTP] = smtplib.SMTP,
    ):
        self.config = config
        self.smtp_factory = smtp_factory

    @property
    def is_configured(self) -> bool:
        return self.config.email_configured()

    def send_plan_email(
        self,
        to: str,
        subject: str,
        body_message: Optional[str] = None,
        attachments: Sequence[EmailAttachment] = (),
        patient_name: Optional[str] = None,
    ) -> EmailReceipt:
        """
        Raises:
            EmailDeliveryError: SMTP is not configured or the relay refused the message
        """
        if not self.is_configured:
            raise EmailDeliveryError("Email service is not configured")

        sender = self.config.smtp_username
        message = EmailMessage()
        message["From"] = formataddr((self.config.email_from_name, sender))
        message["To"] = to
        message["Subject"] = subject
        message_id = make_msgid(domain=sender.split("@")[-1])
        message["Message-ID"] = message_id
        message.set_content(body_message or DEFAULT_BODY)
        message.add_alternative(render_plan_email(body_message, patient_name), subtype="html")
        for attachment in attachments:
            maintype, _, subtype = attachment.content_type.partition("/")
            message.add_attachment(
                attachment.content,
                maintype=maintype,
                subtype=subtype,
                filename=attachment.filename,
            )

        try:
            with self.smtp_factory(
                self.config.smtp_host,
                self.config.smtp_port,
                timeout=self.config.smtp_timeout_sec,
            ) as smtp:
                if self.config.smtp_use_tls:
                    smtp.starttls()
                smtp.login(sender, self.config.smtp_password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(f"email_send_failed recipient={to} error={exc}")
            raise EmailDeliveryError(details={"reason": str(exc)}) from exc

        receipt = EmailReceipt(
            message_id=message_id,
            recipient=to,
            timestamp=datetime.now(timezone.utc),
        )
        logger.info(f"email_sent recipient={to} message_id={message_id}")
        return receipt
