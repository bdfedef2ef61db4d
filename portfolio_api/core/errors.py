"""
Error taxonomy for the portfolio backend.

Endpoints raise these and the exception handler registered in main.py turns
them into the JSON error contract. The underlying detail is only exposed
when the app runs in development mode.
"""

from typing import Any, Dict, Optional


class PortfolioError(Exception):
    """Base class for errors rendered as structured JSON responses."""

    status_code = 500
    error = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.error)
        self.detail = detail

    def to_body(self, include_details: bool = False) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if include_details and self.detail:
            body["details"] = self.detail
        return body


class ValidationError(PortfolioError):
    """Client-caused problem with a submission. Always HTTP 400."""

    status_code = 400
    kind = "Validation"


class MissingFieldsError(ValidationError):
    kind = "MissingFields"
    error = "All fields are required"

    def __init__(self, missing: Dict[str, bool]):
        super().__init__()
        self.missing = missing

    def to_body(self, include_details: bool = False) -> Dict[str, Any]:
        return {"error": self.error, "missing": dict(self.missing)}


class InvalidEmailError(ValidationError):
    kind = "InvalidEmail"
    error = "Invalid email format"


class InvalidBodyError(ValidationError):
    kind = "InvalidBody"
    error = "Invalid request body"


class DeliveryError(PortfolioError):
    """The email transport rejected the message or could not be reached."""

    status_code = 500
    error = "Failed to send message. Please try again later."


class NotFoundError(PortfolioError):
    status_code = 404
    error = "Resume file not found"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self, include_details: bool = False) -> Dict[str, Any]:
        return {"error": self.error, "message": self.message}


class ResumeDownloadError(PortfolioError):
    status_code = 500
    error = "Failed to download resume"
