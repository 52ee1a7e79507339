"""Credential storage exports."""

from .models import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, CredentialPair
from .repository import CredentialRepository, MemoryCredentialRepository
from .service import CredentialStore

__all__ = [
    "ACCESS_TOKEN_KEY",
    "REFRESH_TOKEN_KEY",
    "CredentialPair",
    "CredentialRepository",
    "MemoryCredentialRepository",
    "CredentialStore",
]
