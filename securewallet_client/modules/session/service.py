"""Session orchestrator: login, registration, logout and identity."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Optional

from securewallet_client.domain import Outcome, RegistrationInput, User
from securewallet_client.interfaces.http import GatewayError, describe
from securewallet_client.interfaces.http.endpoints import AuthEndpoints, UserEndpoints
from securewallet_client.modules.credentials import CredentialStore
from securewallet_client.store import StateStore
from securewallet_client.store import session as transitions

logger = logging.getLogger(__name__)

LOGIN_FAILED = "Login failed"
REGISTRATION_FAILED = "Registration failed"
FETCH_USER_FAILED = "Failed to fetch user"

Navigator = Callable[[], Any]


class SessionOrchestrator:
    """Drives :class:`~securewallet_client.store.SessionState`; operations never raise."""

    def __init__(
        self,
        store: StateStore,
        credentials: CredentialStore,
        auth: AuthEndpoints,
        users: UserEndpoints,
        navigator: Optional[Navigator] = None,
    ) -> None:
        self._store = store
        self._credentials = credentials
        self._auth = auth
        self._users = users
        self._navigator = navigator

    async def login(self, email: str, password: str) -> Outcome[User]:
        self._store.update("session", transitions.pending)
        try:
            result = await self._auth.login(email, password)
        except GatewayError as exc:
            message = describe(exc, LOGIN_FAILED)
            logger.info("Login rejected for %s: %s", email, message)
            self._store.update("session", transitions.login_rejected, message)
            return Outcome.rejected(message)

        await self._credentials.set(result.credentials)
        self._store.update("session", transitions.login_fulfilled, result.user)
        logger.info("Signed in as %s", email)
        if result.user is None:
            return await self.fetch_current_identity()
        return Outcome.fulfilled(result.user)

    async def register(self, profile: RegistrationInput) -> Outcome[User]:
        self._store.update("session", transitions.pending)
        try:
            user = await self._auth.register(profile)
        except GatewayError as exc:
            message = describe(exc, REGISTRATION_FAILED)
            self._store.update("session", transitions.rejected, message)
            return Outcome.rejected(message)

        self._store.update("session", transitions.register_fulfilled)
        logger.info("Registered %s", profile.email)
        return Outcome.fulfilled(user)

    async def logout(self) -> Outcome[None]:
        self._store.update("session", transitions.pending)
        try:
            await self._auth.logout()
        except GatewayError as exc:
            logger.warning("Logout call failed, clearing the local session anyway: %s", exc)
        finally:
            await self._credentials.clear()
            self._store.update("session", transitions.signed_out)
        logger.info("Signed out")
        return Outcome.fulfilled()

    async def fetch_current_identity(self) -> Outcome[User]:
        self._store.update("session", transitions.pending)
        try:
            user = await self._users.current_user()
        except GatewayError as exc:
            message = describe(exc, FETCH_USER_FAILED)
            self._store.update("session", transitions.rejected, message)
            return Outcome.rejected(message)

        self._store.update("session", transitions.identity_fulfilled, user)
        return Outcome.fulfilled(user)

    def clear_error(self) -> None:
        self._store.update("session", transitions.clear_error)

    async def restore(self) -> Outcome[Optional[User]]:
        """Resume a session persisted by a previous process, if any."""
        if await self._credentials.get() is None:
            return Outcome.fulfilled(None)
        self._store.update("session", transitions.restored)
        logger.info("Restored stored session")
        return await self.fetch_current_identity()

    async def handle_session_expired(self) -> None:
        logger.info("Session expired, returning to login")
        self._store.update("session", transitions.signed_out)
        if self._navigator is not None:
            result = self._navigator()
            if inspect.isawaitable(result):
                await result
