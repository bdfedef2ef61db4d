"""
Contact form submission pipeline.

validate_submission and render_contact_email are pure; submit() wires them
to an EmailTransport and performs the single delivery attempt for a
request. Nothing is retried or stored.
"""

import asyncio
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from portfolio_api.core.config import Settings
from portfolio_api.core.email_transport import EmailTransport
from portfolio_api.core.errors import DeliveryError, InvalidEmailError, MissingFieldsError
from portfolio_api.models.contact import ContactSubmission, OutboundEmail

# Set up logger
logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

SUBJECT_PREFIX = "Portfolio Contact: Message from "
SUCCESS_MESSAGE = "Message sent successfully! I'll get back to you soon."


def validate_submission(submission: ContactSubmission) -> ContactSubmission:
    """
    Check presence of all fields, then the email shape.

    Args:
        submission: Raw contact form body

    Returns:
        ContactSubmission: The same submission, now known to be valid

    Raises:
        MissingFieldsError: If name, email or message is absent or empty
        InvalidEmailError: If email does not look like local@domain.tld
    """
    missing = {
        "name": not submission.name,
        "email": not submission.email,
        "message": not submission.message,
    }
    if any(missing.values()):
        raise MissingFieldsError(missing)

    if not EMAIL_PATTERN.fullmatch(submission.email):
        raise InvalidEmailError()

    return submission


def render_contact_email(
    submission: ContactSubmission,
    sender: str,
    recipient: str,
    received_at: datetime,
) -> OutboundEmail:
    """
    Build the owner-facing email for a validated submission.

    User text is embedded as-is; the only reader is the site owner's inbox.
    """
    received = received_at.strftime("%d %b %Y, %H:%M:%S %Z").strip()
    # Header values cannot carry line breaks
    subject_name = " ".join(submission.name.splitlines())

    html = f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px; border: 1px solid #e0e0e0; border-radius: 10px;">
          <h2 style="color: #8A2BE2; border-bottom: 2px solid #00E7FF; padding-bottom: 10px;">
            New Contact Form Submission
          </h2>

          <div style="margin: 20px 0;">
            <p style="margin: 10px 0;">
              <strong style="color: #333;">Name:</strong>
              <span style="color: #666;">{submission.name}</span>
            </p>
            <p style="margin: 10px 0;">
              <strong style="color: #333;">Email:</strong>
              <span style="color: #666;">{submission.email}</span>
            </p>
          </div>

          <div style="background-color: #f9f9f9; padding: 15px; border-radius: 5px; margin: 20px 0;">
            <strong style="color: #333;">Message:</strong>
            <p style="color: #666; line-height: 1.6; margin-top: 10px;">
              {submission.message}
            </p>
          </div>

          <div style="margin-top: 30px; padding-top: 20px; border-top: 1px solid #e0e0e0; text-align: center; color: #999; font-size: 12px;">
            <p>This email was sent from your portfolio website contact form.</p>
            <p>Received at: {received}</p>
          </div>
        </div>
    """

    return OutboundEmail(
        sender=sender,
        recipient=recipient,
        reply_to=submission.email,
        subject=f"{SUBJECT_PREFIX}{subject_name}",
        html=html,
    )


async def submit(
    submission: ContactSubmission,
    transport: EmailTransport,
    settings: Settings,
    received_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Validate a submission and relay it to the site owner.

    Args:
        submission: Contact form body
        transport: Delivery capability (SMTP, HTTP API or a test stub)
        settings: Sender identity, recipient and delivery timeout
        received_at: Receipt time, defaults to now (UTC)

    Returns:
        dict: Success payload for the HTTP response

    Raises:
        ValidationError: Before any delivery is attempted
        DeliveryError: If the transport fails or times out
    """
    validate_submission(submission)

    sender = settings.email_user
    recipient = settings.effective_recipient
    if not sender or not recipient:
        logger.error("Contact form submission rejected: EMAIL_USER is not configured")
        raise DeliveryError("Email account is not configured (EMAIL_USER)")

    received_at = received_at or datetime.now(timezone.utc)
    outbound = render_contact_email(submission, sender, recipient, received_at)

    try:
        await asyncio.wait_for(transport.send(outbound), timeout=settings.email_timeout)
    except asyncio.TimeoutError as e:
        logger.error(f"Error sending email: delivery timed out after {settings.email_timeout}s")
        raise DeliveryError(f"Email delivery timed out after {settings.email_timeout} seconds") from e
    except DeliveryError as e:
        logger.error(f"Error sending email: {e}")
        raise
    except Exception as e:
        logger.error(f"Error sending email: {str(e)}", exc_info=True)
        raise DeliveryError(str(e)) from e

    logger.info(f"Contact form submission from {submission.email} - {received_at.isoformat()}")

    return {
        "success": True,
        "message": SUCCESS_MESSAGE,
    }
