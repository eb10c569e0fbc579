"""
BaseLine Academy REST API Package
Thin client for the academy backend plus its error types
"""

from .client import AcademyAPIClient, CancelToken
from .exceptions import (
    AcademyError,
    AcademyAPIError,
    AcademyAuthError,
    AcademyConnectionError,
    RequestCancelled,
)

__all__ = [
    'AcademyAPIClient',
    'CancelToken',
    'AcademyError',
    'AcademyAPIError',
    'AcademyAuthError',
    'AcademyConnectionError',
    'RequestCancelled',
]
