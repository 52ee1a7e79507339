"""Session orchestration exports."""

from .service import (
    FETCH_USER_FAILED,
    LOGIN_FAILED,
    REGISTRATION_FAILED,
    SessionOrchestrator,
)

__all__ = [
    "FETCH_USER_FAILED",
    "LOGIN_FAILED",
    "REGISTRATION_FAILED",
    "SessionOrchestrator",
]
