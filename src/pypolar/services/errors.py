"""
Error taxonomy for the Polar API client.

Every expected failure (HTTP error status, transport failure, undecodable
body) is described by an ApiError and returned inside a failed Result.
Only PolarApiError is an exception, raised on explicit request through
Result.value_or_raise().
"""

from __future__ import annotations
import json
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from enum import Enum
from typing import Any, List, Mapping, Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    PERMISSION = "permission"
    TRANSPORT = "transport"
    DECODE = "decode"
    UNKNOWN = "unknown"


DEFAULT_MESSAGES = {
    400: "The request was invalid or malformed.",
    401: "Authentication failed or was not provided.",
    403: "Access to the requested resource is forbidden.",
    404: "The requested resource was not found.",
    405: "The HTTP method is not allowed for this endpoint.",
    409: "The request conflicts with the current state of the resource.",
    422: "The request payload failed validation.",
    429: "Rate limit exceeded. Please try again later.",
    500: "An internal server error occurred.",
    502: "The server received an invalid response.",
    503: "The service is temporarily unavailable.",
    504: "The gateway timed out.",
}

_MESSAGE_FIELDS = ("detail", "message", "error", "description")
_TYPE_FIELDS = ("type", "error", "code", "error_type")


@dataclass(frozen=True)
class FieldError:
    """One field-level validation problem reported by the server."""

    loc: tuple
    msg: str
    type: Optional[str] = None

    @property
    def field(self) -> str:
        # drop the leading "body"/"query" segment the API prefixes locations with
        parts = [str(p) for p in self.loc]
        if parts and parts[0] in ("body", "query", "path"):
            parts = parts[1:]
        return ".".join(parts)

    def __str__(self) -> str:
        return f"{self.field}: {self.msg}" if self.field else self.msg


@dataclass(frozen=True)
class ApiError:
    """
    Describes why an operation failed.

    kind is always set and message is never empty; status_code is None for
    failures that happened before a response was received.
    """

    message: str
    kind: ErrorKind = ErrorKind.UNKNOWN
    status_code: Optional[int] = None
    error_type: Optional[str] = None
    details: List[FieldError] = field(default_factory=list)
    response_body: Optional[str] = None
    retry_after: Optional[float] = None

    def __post_init__(self):
        if not self.message or not str(self.message).strip():
            fallback = DEFAULT_MESSAGES.get(self.status_code or 0, "An unknown error occurred.")
            object.__setattr__(self, "message", fallback)
        if not isinstance(self.kind, ErrorKind):
            object.__setattr__(self, "kind", ErrorKind(self.kind))

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == 429

    @property
    def is_server_error(self) -> bool:
        return self.status_code is not None and self.status_code >= 500

    @classmethod
    def not_found(cls, message: str = "Resource not found") -> ApiError:
        return cls(message=message, kind=ErrorKind.NOT_FOUND, status_code=404)

    @classmethod
    def validation(
        cls, message: str, details: Optional[List[FieldError]] = None
    ) -> ApiError:
        return cls(
            message=message,
            kind=ErrorKind.VALIDATION,
            error_type="ValidationError",
            details=list(details or []),
        )

    @classmethod
    def transport(cls, message: str, cause: Optional[str] = None) -> ApiError:
        return cls(message=message, kind=ErrorKind.TRANSPORT, error_type=cause)

    @classmethod
    def decode(cls, message: str, response_body: Optional[str] = None) -> ApiError:
        return cls(
            message=message, kind=ErrorKind.DECODE, response_body=response_body
        )

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.status_code}: {self.message}"
        return self.message


class PolarApiError(Exception):
    """Raised only by Result.value_or_raise() to turn a failure into an exception."""

    def __init__(self, error: ApiError):
        super().__init__(str(error))
        self.error = error


def kind_for_status(status_code: int) -> ErrorKind:
    if status_code == 404:
        return ErrorKind.NOT_FOUND
    if status_code in (400, 422):
        return ErrorKind.VALIDATION
    if status_code in (401, 403):
        return ErrorKind.PERMISSION
    return ErrorKind.UNKNOWN


def error_from_response(
    status_code: int, text: str, headers: Optional[Mapping[str, str]] = None
) -> ApiError:
    """
    Build an ApiError from a non-2xx response.

    JSON bodies are searched for the usual message/type fields, FastAPI style
    `detail` lists become field errors. Anything else falls back to a default
    message for the status code.
    """
    lowered = {k.lower(): v for k, v in (headers or {}).items()}
    retry_after = _parse_retry_after(lowered.get("retry-after"))
    kind = kind_for_status(status_code)

    message = ""
    error_type = None
    details: List[FieldError] = []

    try:
        body = json.loads(text) if text else None
    except ValueError:
        body = None

    if isinstance(body, dict):
        detail = body.get("detail")
        if isinstance(detail, list):
            details = _field_errors(detail)
            message = "; ".join(str(d) for d in details)
        for key in _MESSAGE_FIELDS:
            if message:
                break
            value = body.get(key)
            if isinstance(value, str):
                message = value
            elif isinstance(value, (int, float)):
                message = str(value)
        if not message and isinstance(body.get("errors"), list):
            message = "; ".join(
                e["message"]
                for e in body["errors"]
                if isinstance(e, dict) and isinstance(e.get("message"), str)
            )
        for key in _TYPE_FIELDS:
            value = body.get(key)
            if isinstance(value, str) and value != message:
                error_type = value
                break

    if not message:
        message = DEFAULT_MESSAGES.get(status_code, f"HTTP {status_code}: {text}")

    if status_code == 429:
        if retry_after is not None:
            message = f"{message} Retry after {retry_after:.0f} seconds."

    return ApiError(
        message=message,
        kind=kind,
        status_code=status_code,
        error_type=error_type,
        details=details,
        response_body=text or None,
        retry_after=retry_after,
    )


def _field_errors(entries: List[Any]) -> List[FieldError]:
    errors = []
    for entry in entries:
        if not isinstance(entry, dict):
            errors.append(FieldError(loc=(), msg=str(entry)))
            continue
        errors.append(
            FieldError(
                loc=tuple(entry.get("loc") or ()),
                msg=str(entry.get("msg", "Invalid value")),
                type=entry.get("type"),
            )
        )
    return errors


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        if not math.isfinite(seconds):
            return None
        return max(seconds, 0.0)
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max((when - datetime.now(timezone.utc)).total_seconds(), 0.0)


class TransportError(Exception):
    """
    Raised by the session when no HTTP response was received.
    `cause` is either "timeout" or "connection".
    """

    def __init__(self, cause: str, message: str):
        super().__init__(message)
        self.cause = cause
        self.message = message

    def to_api_error(self) -> ApiError:
        return ApiError.transport(self.message, cause=self.cause)
