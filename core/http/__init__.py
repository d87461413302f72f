"""
HTTP Client Module

requests-backed HTTP client used for explorer API calls.
"""

from .client import HttpClient, HttpError, HttpResponse

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpResponse",
]
