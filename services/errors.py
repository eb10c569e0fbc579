"""
BaseLine Academy - Service Errors
Failures raised by the services before or instead of a network call
"""

from typing import List

from api.exceptions import AcademyError


class ValidationError(AcademyError):
    """Form input rejected before submission."""

    def __init__(self, messages: List[str]):
        super().__init__("; ".join(messages))
        self.messages = list(messages)


class NothingToExport(AcademyError):
    """The tournament has no registrations to export."""
    pass


class InvalidTransition(AcademyError):
    """The requested status change is not allowed from the current status."""
    pass
