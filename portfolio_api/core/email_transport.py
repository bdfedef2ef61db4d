"""
Email transports used to relay contact submissions to the site owner.

A transport exposes a single coroutine, send(message), which either
returns normally or raises DeliveryError. The provider is picked from
EMAIL_SERVICE:

- well-known SMTP services (gmail, outlook, yahoo, ...) and "smtp" for a
  custom EMAIL_HOST/EMAIL_PORT go through aiosmtplib
- "resend" goes through the Resend HTTP API with httpx
"""

import logging
import re
from email.message import EmailMessage
from email.utils import formatdate
from typing import Dict, Optional, Protocol, Tuple

import aiosmtplib
import httpx

from portfolio_api.core.config import Settings
from portfolio_api.core.errors import DeliveryError
from portfolio_api.models.contact import OutboundEmail

# Set up logger
logger = logging.getLogger(__name__)

# service name -> (host, port, implicit TLS)
WELL_KNOWN_SMTP_SERVICES: Dict[str, Tuple[str, int, bool]] = {
    "gmail": ("smtp.gmail.com", 465, True),
    "outlook": ("smtp-mail.outlook.com", 587, False),
    "hotmail": ("smtp-mail.outlook.com", 587, False),
    "office365": ("smtp.office365.com", 587, False),
    "yahoo": ("smtp.mail.yahoo.com", 465, True),
    "icloud": ("smtp.mail.me.com", 587, False),
    "zoho": ("smtp.zoho.com", 465, True),
    "sendgrid": ("smtp.sendgrid.net", 587, False),
    "mailgun": ("smtp.mailgun.org", 465, True),
}

RESEND_API_URL = "https://api.resend.com/emails"


class EmailTransport(Protocol):
    """Capability to deliver one OutboundEmail."""

    async def send(self, message: OutboundEmail) -> None:
        """Deliver the message or raise DeliveryError."""
        ...


def html_to_text(html: str) -> str:
    """Plain-text fallback for clients that do not render HTML."""
    text = re.sub(r"<[^>]+>", "", html)
    text = text.replace("&nbsp;", " ")
    return re.sub(r"\s+", " ", text.strip())


def build_mime_message(message: OutboundEmail) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = message.sender
    msg["To"] = message.recipient
    msg["Reply-To"] = message.reply_to
    msg["Subject"] = message.subject
    msg["Date"] = formatdate(localtime=True)

    msg.set_content(html_to_text(message.html), charset="utf-8")
    msg.add_alternative(message.html, subtype="html", charset="utf-8")
    return msg


class SMTPTransport:
    """
    Sends mail through an SMTP server with aiosmtplib.

    A new connection is opened for every message; submissions are rare and
    independent, so nothing is pooled.
    """

    def __init__(
        self,
        hostname: str,
        port: int,
        username: Optional[str],
        password: Optional[str],
        use_tls: bool = False,
        timeout: float = 10.0,
    ):
        self.hostname = hostname
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    async def send(self, message: OutboundEmail) -> None:
        if not self.username or not self.password:
            raise DeliveryError("SMTP username and password are required for authentication")

        msg = build_mime_message(message)

        try:
            async with aiosmtplib.SMTP(
                hostname=self.hostname,
                port=self.port,
                use_tls=self.use_tls,
                start_tls=False if self.use_tls else True,
                timeout=self.timeout,
            ) as smtp:
                await smtp.login(self.username, self.password)
                errors, response = await smtp.send_message(msg)

        except aiosmtplib.SMTPAuthenticationError as e:
            raise DeliveryError(f"SMTP authentication failed: {e}") from e
        except aiosmtplib.SMTPException as e:
            raise DeliveryError(f"SMTP error: {e}") from e
        except OSError as e:
            raise DeliveryError(f"SMTP connection failed: {e}") from e

        if errors:
            details = "; ".join(f"{addr}: {error}" for addr, error in errors.items())
            raise DeliveryError(f"Recipient refused: {details}")

        logger.debug(f"SMTP server response from {self.hostname}: {response}")


class ResendTransport:
    """Sends mail through the Resend HTTP API."""

    def __init__(self, api_key: Optional[str], timeout: float = 10.0, url: str = RESEND_API_URL):
        self.api_key = api_key
        self.timeout = timeout
        self.url = url

    async def send(self, message: OutboundEmail) -> None:
        if not self.api_key:
            raise DeliveryError("Resend API key is not configured")

        payload = {
            "from": message.sender,
            "to": [message.recipient],
            "reply_to": message.reply_to,
            "subject": message.subject,
            "html": message.html,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.url,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Accept": "application/json",
                    },
                    json=payload,
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            raise DeliveryError(f"Resend request failed: {e}") from e

        if not response.is_success:
            raise DeliveryError(f"Resend API error {response.status_code}: {response.text}")


class UnavailableTransport:
    """Stands in for a transport that cannot be built from the current settings."""

    def __init__(self, reason: str):
        self.reason = reason

    async def send(self, message: OutboundEmail) -> None:
        raise DeliveryError(self.reason)


def build_transport(settings: Settings) -> EmailTransport:
    """
    Create the transport configured by EMAIL_SERVICE.

    Misconfiguration does not raise here. It surfaces as a DeliveryError on
    send, after the submission has been validated.

    Args:
        settings: Application settings

    Returns:
        EmailTransport: SMTPTransport, ResendTransport or UnavailableTransport
    """
    service = settings.email_service.strip().lower()

    if service == "resend":
        return ResendTransport(api_key=settings.email_pass, timeout=settings.email_timeout)

    if service in WELL_KNOWN_SMTP_SERVICES:
        host, port, secure = WELL_KNOWN_SMTP_SERVICES[service]
    elif service == "smtp":
        if not settings.email_host:
            return UnavailableTransport("EMAIL_HOST is required when EMAIL_SERVICE is 'smtp'")
        host, port, secure = settings.email_host, 587, False
    else:
        return UnavailableTransport(f"Unknown email service '{settings.email_service}'")

    # Explicit host settings win over the well-known table
    host = settings.email_host or host
    port = settings.email_port or port
    if settings.email_secure is not None:
        secure = settings.email_secure
    elif settings.email_port:
        secure = port == 465

    return SMTPTransport(
        hostname=host,
        port=port,
        username=settings.email_user,
        password=settings.email_pass,
        use_tls=secure,
        timeout=settings.email_timeout,
    )
