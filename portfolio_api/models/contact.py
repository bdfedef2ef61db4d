from pydantic import BaseModel
from typing import Dict, Optional


class ContactSubmission(BaseModel):
    # Optional so absent fields reach the presence check instead of a 422
    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None


class OutboundEmail(BaseModel):
    """Email relayed to the site owner for one valid submission"""
    sender: str
    recipient: str
    reply_to: str
    subject: str
    html: str


class ContactResponse(BaseModel):
    success: bool = True
    message: str


class ContactErrorResponse(BaseModel):
    error: str
    missing: Optional[Dict[str, bool]] = None
    details: Optional[str] = None
