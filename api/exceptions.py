"""Custom exceptions for the academy REST API client."""

from typing import Optional


class AcademyError(Exception):
    """Base exception for BaseLine Academy errors."""
    pass


class AcademyAPIError(AcademyError):
    """API request failed."""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class AcademyAuthError(AcademyAPIError):
    """Authentication failed or the session lacks permission."""
    pass


class AcademyConnectionError(AcademyError):
    """Connection to the academy API failed."""
    pass


class RequestCancelled(AcademyError):
    """The caller cancelled the request before its result was used."""
    pass
