"""SQLAlchemy implementation of the credential repository."""

from __future__ import annotations

from typing import Iterable, Mapping

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from securewallet_client.infrastructure.database.models import StoredCredential


class SqlCredentialRepository:
    """Credential rows keyed by name; each call runs in its own transaction."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_values(self, keys: Iterable[str]) -> dict[str, str]:
        stmt = select(StoredCredential).where(StoredCredential.key.in_(list(keys)))
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return {row.key: row.value for row in result.scalars().all()}

    async def put_values(self, values: Mapping[str, str]) -> None:
        async with self._session_factory() as session, session.begin():
            for key, value in values.items():
                await session.merge(StoredCredential(key=key, value=value))

    async def delete_values(self, keys: Iterable[str]) -> None:
        stmt = delete(StoredCredential).where(StoredCredential.key.in_(list(keys)))
        async with self._session_factory() as session, session.begin():
            await session.execute(stmt)
