"""
Contact form endpoint.

POST /api/contact validates the submission and relays it to the site
owner's inbox through the configured email transport.
"""

from fastapi import APIRouter, Depends, status
from typing import Any, Dict, Optional
from portfolio_api.api.dependencies import get_app_settings, get_transport
from portfolio_api.core.config import Settings
from portfolio_api.core.contact_service import submit
from portfolio_api.core.email_transport import EmailTransport
from portfolio_api.models.contact import ContactErrorResponse, ContactResponse, ContactSubmission

router = APIRouter()


@router.post(
    "/contact",
    status_code=status.HTTP_200_OK,
    response_model=ContactResponse,
    responses={400: {"model": ContactErrorResponse}, 500: {"model": ContactErrorResponse}},
)
async def send_contact_email(
    submission: Optional[ContactSubmission] = None,
    settings: Settings = Depends(get_app_settings),
    transport: EmailTransport = Depends(get_transport),
) -> Dict[str, Any]:
    """
    Send a contact form submission to the site owner.

    Args:
        submission: JSON body with name, email and message

    Returns:
        dict: {"success": True, "message": ...}

    Validation failures are answered with 400 and delivery failures with 500
    by the PortfolioError handler in main.py.
    """
    return await submit(submission or ContactSubmission(), transport, settings)
