"""Helpers for inspecting bearer tokens issued by the ledger service.

The client never verifies signatures: it has no key material. Claims are read
only to learn when an access token stops being useful.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt


def read_claims(token: str) -> dict[str, Any]:
    """Return the unverified claims of ``token`` or an empty dict for opaque tokens."""
    try:
        return jwt.get_unverified_claims(token)
    except JWTError:
        return {}


def expires_at(token: str) -> Optional[datetime]:
    exp = read_claims(token).get("exp")
    if exp is None:
        return None
    try:
        return datetime.fromtimestamp(int(exp), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError):
        return None


def expires_within(token: str, seconds: int, now: Optional[datetime] = None) -> bool:
    """True when ``token`` carries an ``exp`` claim that falls inside the next ``seconds``."""
    expiry = expires_at(token)
    if expiry is None:
        return False
    current = now or datetime.now(timezone.utc)
    return expiry - current <= timedelta(seconds=seconds)
