"""Session slice and its transitions.

Each transition takes the current slice and returns a new one; nothing here
touches the network or the credential store.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from securewallet_client.domain import User


@dataclass(frozen=True, slots=True)
class SessionState:
    identity: Optional[User] = None
    is_authenticated: bool = False
    is_loading: bool = False
    error: Optional[str] = None


def pending(state: SessionState) -> SessionState:
    return replace(state, is_loading=True, error=None)


def rejected(state: SessionState, message: str) -> SessionState:
    return replace(state, is_loading=False, error=message)


def login_fulfilled(state: SessionState, user: Optional[User]) -> SessionState:
    return replace(state, identity=user, is_authenticated=True, is_loading=False, error=None)


def login_rejected(state: SessionState, message: str) -> SessionState:
    return replace(state, is_authenticated=False, is_loading=False, error=message)


def register_fulfilled(state: SessionState) -> SessionState:
    return replace(state, is_loading=False)


def identity_fulfilled(state: SessionState, user: User) -> SessionState:
    return replace(state, identity=user, is_loading=False)


def restored(state: SessionState) -> SessionState:
    return replace(state, is_authenticated=True)


def signed_out(state: SessionState) -> SessionState:
    return SessionState()


def clear_error(state: SessionState) -> SessionState:
    return replace(state, error=None)
