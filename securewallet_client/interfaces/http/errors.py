"""Tagged failures raised at the gateway boundary."""

from __future__ import annotations

from typing import Any, Optional

import httpx
from pydantic import ValidationError as SchemaValidationError

from securewallet_client.schemas import ApiEnvelope

VALIDATION_ERROR_CODE = "VALIDATION_ERROR"


class GatewayError(Exception):
    """Base class for every failure surfaced by the gateway."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.__class__.__name__)
        self.message = message


class NetworkError(GatewayError):
    """No usable response was received: connection failures, timeouts, undecodable bodies."""


class HttpError(GatewayError):
    """The server answered with an error status or a ``success: false`` envelope."""

    def __init__(
        self,
        status: int,
        message: Optional[str] = None,
        error_code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.error_code = error_code

    def __str__(self) -> str:
        return f"{self.status} {self.error_code or ''} {self.message or ''}".strip()


class ValidationError(HttpError):
    """Request rejected by server-side field validation."""

    def __init__(
        self,
        status: int,
        message: Optional[str] = None,
        error_code: Optional[str] = VALIDATION_ERROR_CODE,
        fields: Optional[dict[str, str]] = None,
    ) -> None:
        super().__init__(status, message, error_code)
        self.fields = fields or {}


class ServerError(HttpError):
    """5xx answer; its text is not meant for end users."""


class SessionExpiredError(HttpError):
    """Authorization could not be restored; the stored credentials were dropped."""

    def __init__(self, message: Optional[str] = None, error_code: Optional[str] = None) -> None:
        super().__init__(401, message, error_code)


def _parse_envelope(response: httpx.Response) -> Optional[ApiEnvelope[Any]]:
    try:
        return ApiEnvelope[Any].model_validate_json(response.content)
    except SchemaValidationError:
        return None


def error_from_response(response: httpx.Response) -> HttpError:
    """Build the tagged error for a failed response, reading its envelope when present."""
    envelope = _parse_envelope(response)
    message = envelope.message if envelope else None
    error_code = envelope.error_code if envelope else None
    status = response.status_code

    if status >= 500:
        return ServerError(status, message, error_code)
    if error_code == VALIDATION_ERROR_CODE:
        fields = envelope.data if envelope and isinstance(envelope.data, dict) else {}
        return ValidationError(status, message, error_code, {str(k): str(v) for k, v in fields.items()})
    return HttpError(status, message, error_code)


def describe(error: Exception, fallback: str) -> str:
    """User-facing message for ``error``: the server's message or ``fallback``."""
    if isinstance(error, HttpError) and not isinstance(error, ServerError) and error.message:
        return error.message
    return fallback


__all__ = [
    "GatewayError",
    "NetworkError",
    "HttpError",
    "ValidationError",
    "ServerError",
    "SessionExpiredError",
    "error_from_response",
    "describe",
]
