"""Credential store used by the gateway and the session orchestrator."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from securewallet_client.infrastructure.database.repositories.credential_repository import (
    SqlCredentialRepository,
)

from .models import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, CredentialPair
from .repository import CredentialRepository

logger = logging.getLogger(__name__)

_KEYS = (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY)


class CredentialStore:
    """get/set/clear over a durable repository; last writer wins."""

    def __init__(self, repository: CredentialRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session_factory(cls, factory: async_sessionmaker[AsyncSession]) -> "CredentialStore":
        return cls(SqlCredentialRepository(factory))

    async def get(self) -> Optional[CredentialPair]:
        values = await self._repository.get_values(_KEYS)
        access_token = values.get(ACCESS_TOKEN_KEY)
        if not access_token:
            return None
        return CredentialPair(access_token=access_token, refresh_token=values.get(REFRESH_TOKEN_KEY))

    async def set(self, pair: CredentialPair) -> None:
        values = {ACCESS_TOKEN_KEY: pair.access_token}
        if pair.refresh_token:
            values[REFRESH_TOKEN_KEY] = pair.refresh_token
        await self._repository.put_values(values)
        if not pair.refresh_token:
            await self._repository.delete_values([REFRESH_TOKEN_KEY])
        logger.debug("Stored credentials (renewable=%s)", pair.can_renew)

    async def clear(self) -> None:
        await self._repository.delete_values(_KEYS)
        logger.debug("Cleared stored credentials")
