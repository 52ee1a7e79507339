"""HTTP gateway and endpoint clients."""

from .errors import (
    GatewayError,
    HttpError,
    NetworkError,
    ServerError,
    SessionExpiredError,
    ValidationError,
    describe,
)
from .gateway import ApiRequest, GatewayClient, decode_envelope

__all__ = [
    "ApiRequest",
    "GatewayClient",
    "GatewayError",
    "HttpError",
    "NetworkError",
    "ServerError",
    "SessionExpiredError",
    "ValidationError",
    "decode_envelope",
    "describe",
]
