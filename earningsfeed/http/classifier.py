"""
Response classification.

Maps an HTTP outcome (status, headers, body) to either the decoded JSON
payload or exactly one ``APIError``. Rules are checked in order; any status
the rules do not cover is treated as a server error so nothing unexpected is
ever reported as success.
"""
import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

from earningsfeed.core.errors import (
    AuthenticationError,
    DecodeError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
)

logger = logging.getLogger(__name__)

RATE_LIMIT_RESET_HEADER = "X-RateLimit-Reset"
RETRY_AFTER_HEADER = "Retry-After"


def classify(
    status: int,
    headers: Mapping[str, str],
    body: bytes,
    *,
    path: str,
    now: Optional[datetime] = None,
) -> Any:
    """
    Classify a response into a decoded payload or an error.

    Args:
        status: HTTP status code
        headers: Response headers
        body: Raw response body
        path: Request path, reported by NotFoundError
        now: Reference time for relative rate-limit hints (defaults to current UTC time)

    Returns:
        The decoded JSON payload for 2xx responses

    Raises:
        AuthenticationError: 401/403
        NotFoundError: 404
        RateLimitError: 429
        ValidationError: 400/422 with a structured error body
        ServerError: 5xx, unstructured 400/422, or any other status
        DecodeError: 2xx whose body is not valid JSON
    """
    if status in (401, 403):
        raise AuthenticationError(status=status, details={"path": path})

    if status == 404:
        raise NotFoundError(path)

    if status == 429:
        reset_at = parse_reset_at(headers, now=now)
        raise RateLimitError(reset_at, details={"path": path})

    if status in (400, 422):
        payload = _try_json(body)
        validation = _extract_validation(payload)
        if validation is None:
            logger.debug(f"Unstructured {status} body for {path}, reporting as server error")
            raise ServerError(status, "Invalid request", details={"path": path})
        field, message = validation
        raise ValidationError(message, field=field, status=status, details={"path": path})

    if 200 <= status < 300:
        try:
            return json.loads(body)
        except (ValueError, UnicodeDecodeError) as e:
            raise DecodeError(e, status=status, details={"path": path}) from e

    # 5xx and anything else
    payload = _try_json(body)
    message = "Unknown error"
    code = None
    if isinstance(payload, dict):
        if isinstance(payload.get("error"), str):
            message = payload["error"]
        elif isinstance(payload.get("message"), str):
            message = payload["message"]
        if isinstance(payload.get("code"), str):
            code = payload["code"]
    raise ServerError(status, message, code=code, details={"path": path})


def parse_reset_at(headers: Mapping[str, str], now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Work out when a rate limit resets.

    ``X-RateLimit-Reset`` carries a Unix timestamp in seconds. When it is
    missing, a numeric ``Retry-After`` is taken relative to ``now``.
    Unparseable values are ignored.
    """
    reset = _header(headers, RATE_LIMIT_RESET_HEADER)
    if reset is not None:
        try:
            return datetime.fromtimestamp(float(reset), tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            logger.debug(f"Ignoring unparseable {RATE_LIMIT_RESET_HEADER}: {reset!r}")

    retry_after = _header(headers, RETRY_AFTER_HEADER)
    if retry_after is not None:
        try:
            seconds = max(0.0, float(retry_after))
        except ValueError:
            return None
        return (now or datetime.now(timezone.utc)) + timedelta(seconds=seconds)

    return None


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def _try_json(body: bytes) -> Any:
    try:
        return json.loads(body)
    except (ValueError, UnicodeDecodeError):
        return None


def _extract_validation(payload: Any) -> Optional[tuple[Optional[str], str]]:
    """Pull ``(field, message)`` out of a structured error body, if it is one."""
    if not isinstance(payload, dict):
        return None

    errors = payload.get("errors")
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        first = errors[0]
        message = first.get("message") or first.get("error")
        if isinstance(message, str):
            field = first.get("field")
            return (field if isinstance(field, str) else None), message

    for key in ("error", "message"):
        message = payload.get(key)
        if isinstance(message, str):
            field = payload.get("field")
            return (field if isinstance(field, str) else None), message

    return None
