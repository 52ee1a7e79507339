"""User endpoints."""

from __future__ import annotations

from dataclasses import dataclass

from securewallet_client.domain import User
from securewallet_client.schemas import UserPayload

from ..gateway import ApiRequest, GatewayClient


def to_user(payload: UserPayload) -> User:
    return User(
        id=payload.id,
        email=payload.email,
        first_name=payload.first_name,
        last_name=payload.last_name,
        status=payload.status,
        email_verified=payload.email_verified,
        roles=tuple(payload.roles),
        phone_number=payload.phone_number,
        created_at=payload.created_at,
    )


@dataclass(slots=True)
class UserEndpoints:
    gateway: GatewayClient

    async def current_user(self) -> User:
        envelope = await self.gateway.request_json(ApiRequest("GET", "/users/me"), UserPayload)
        return to_user(envelope.data)
