"""SQLAlchemy-backed repository implementations."""

from .credential_repository import SqlCredentialRepository

__all__ = ["SqlCredentialRepository"]
