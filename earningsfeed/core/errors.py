"""
Error types for the EarningsFeed client.

Every failure surfaced by the client is exactly one of the classes below.
Classified server responses derive from ``APIError``; transport failures
derive from ``NetworkError`` so callers can tell "the API said no" apart from
"we never got an answer".
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Tag identifying which failure variant an error represents."""

    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    VALIDATION = "validation"
    SERVER_ERROR = "server_error"
    NETWORK = "network"
    DECODE = "decode"


TRANSIENT_KINDS = frozenset({ErrorKind.RATE_LIMIT, ErrorKind.SERVER_ERROR, ErrorKind.NETWORK})


class EarningsFeedError(Exception):
    """Base class for all client errors.

    Args:
        message: Human-readable error message.
        details: Optional machine-readable diagnostic payload.
    """

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}

    def __str__(self) -> str:
        return self.message

    @property
    def retryable(self) -> bool:
        """Whether the retry policy treats this failure as transient."""
        return self.kind in TRANSIENT_KINDS


class ConfigurationError(EarningsFeedError, ValueError):
    """Raised when the client is constructed with invalid configuration."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"configuration error: {message}", details=details)


class APIError(EarningsFeedError):
    """Base class for errors classified from an HTTP response."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.status = status
        if status is not None:
            self.details.setdefault("status", status)


class AuthenticationError(APIError):
    """API key is missing, invalid or lacks access (HTTP 401/403)."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(self, *, status: int = 401, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            "authentication failed: invalid or missing API key",
            status=status,
            details=details,
        )


class NotFoundError(APIError):
    """Requested resource does not exist (HTTP 404)."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, path: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"resource not found: {path}", status=404, details=details)
        self.path = path
        self.details.setdefault("path", path)


class RateLimitError(APIError):
    """Rate limit exceeded (HTTP 429).

    ``reset_at`` is the moment the limit resets, taken from the server's
    reset hint when one was sent.
    """

    kind = ErrorKind.RATE_LIMIT

    def __init__(
        self,
        reset_at: Optional[datetime] = None,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        when = reset_at.isoformat() if reset_at is not None else "unknown"
        super().__init__(f"rate limit exceeded (resets at: {when})", status=429, details=details)
        self.reset_at = reset_at
        self.details.setdefault("reset_at", reset_at)


class ValidationError(APIError):
    """Server rejected the request parameters (HTTP 400/422)."""

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        status: int = 400,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"validation error: {message}", status=status, details=details)
        self.field = field
        self.reason = message
        self.details.setdefault("field", field)


class ServerError(APIError):
    """Server failed, or answered with a status the client does not understand."""

    kind = ErrorKind.SERVER_ERROR

    def __init__(
        self,
        status: int,
        message: str = "Unknown error",
        *,
        code: Optional[str] = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"API error ({status}): {message}", status=status, details=details)
        self.code = code
        self.reason = message
        if code is not None:
            self.details.setdefault("code", code)


class DecodeError(APIError):
    """A successful response body could not be decoded into the expected shape."""

    kind = ErrorKind.DECODE

    def __init__(
        self,
        cause: Exception | str,
        *,
        status: Optional[int] = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"decode error: {cause}", status=status, details=details)
        self.cause = cause


class NetworkError(EarningsFeedError):
    """The request never produced an HTTP response (DNS, socket, protocol)."""

    kind = ErrorKind.NETWORK

    def __init__(
        self,
        cause: Exception | str,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"network error: {cause}", details=details)
        self.cause = cause


class RequestTimeoutError(NetworkError):
    """The request exceeded the configured timeout."""

    def __init__(
        self,
        timeout: float,
        cause: Exception | str | None = None,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(cause or "timed out", details=details)
        self.message = f"request timeout after {timeout:g}s"
        self.timeout = timeout
        self.details.setdefault("timeout_s", timeout)
