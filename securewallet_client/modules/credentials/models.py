"""Domain models for stored credentials."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from securewallet_client.core.tokens import expires_at

ACCESS_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"


@dataclass(frozen=True, slots=True)
class CredentialPair:
    access_token: str = field(repr=False)
    refresh_token: Optional[str] = field(default=None, repr=False)

    @property
    def access_expires_at(self) -> Optional[datetime]:
        return expires_at(self.access_token)

    @property
    def can_renew(self) -> bool:
        return bool(self.refresh_token)
