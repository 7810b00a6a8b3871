"""
Typed errors raised by CatalogApiClient.

Callers branch on CatalogClientError.kind instead of inspecting messages.
"""

from __future__ import annotations

import enum
from typing import Optional


class ErrorKind(str, enum.Enum):
    """What went wrong talking to the catalog API."""

    NETWORK = "network"
    HTTP = "http"
    DECODE = "decode"

    def __str__(self) -> str:
        return self.value


class CatalogClientError(Exception):
    """
    Base class for client-side catalog failures.

    Attributes:
        message: Human-readable description
        kind: ErrorKind tag
        status_code: HTTP status for ErrorKind.HTTP, else None
    """

    kind: ErrorKind = ErrorKind.HTTP

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    @property
    def is_retryable(self) -> bool:
        """Network failures and server-side errors may succeed on retry."""
        if self.kind == ErrorKind.NETWORK:
            return True
        return self.status_code is not None and self.status_code >= 500


class NetworkError(CatalogClientError):
    """The server could not be reached (connection refused, DNS, timeout)."""

    kind = ErrorKind.NETWORK


class ApiResponseError(CatalogClientError):
    """The server answered with a non-2xx status."""

    kind = ErrorKind.HTTP


class DecodeError(CatalogClientError):
    """The server answered 2xx with a body that isn't the expected JSON."""

    kind = ErrorKind.DECODE
