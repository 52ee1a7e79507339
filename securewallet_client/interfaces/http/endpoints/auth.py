"""Authentication endpoints.

Login, registration and renewal are public calls: they go out without a
bearer credential and a 401 from them is never answered with a renewal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from securewallet_client.domain import RegistrationInput, User
from securewallet_client.modules.credentials import CredentialPair
from securewallet_client.schemas import AuthPayload, LoginRequest, RegisterRequest, UserPayload

from ..gateway import ApiRequest, GatewayClient
from .users import to_user


@dataclass(frozen=True, slots=True)
class AuthResult:
    credentials: CredentialPair
    user: Optional[User]
    expires_in: Optional[int] = None


@dataclass(slots=True)
class AuthEndpoints:
    gateway: GatewayClient

    async def login(self, email: str, password: str) -> AuthResult:
        request = ApiRequest(
            "POST",
            "/auth/login",
            body=LoginRequest(email=email, password=password).to_wire(),
            authenticated=False,
        )
        envelope = await self.gateway.request_json(request, AuthPayload)
        payload: AuthPayload = envelope.data
        return AuthResult(
            credentials=CredentialPair(access_token=payload.access_token, refresh_token=payload.refresh_token),
            user=to_user(payload.user) if payload.user else None,
            expires_in=payload.expires_in,
        )

    async def register(self, profile: RegistrationInput) -> User:
        body = RegisterRequest(
            email=profile.email,
            password=profile.password,
            first_name=profile.first_name,
            last_name=profile.last_name,
            phone_number=profile.phone_number,
        ).to_wire()
        request = ApiRequest("POST", "/auth/register", body=body, authenticated=False)
        envelope = await self.gateway.request_json(request, UserPayload)
        return to_user(envelope.data)

    async def logout(self) -> None:
        await self.gateway.request_json(ApiRequest("POST", "/auth/logout"), Any)
