"""Simple dependency container for wiring the client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx
from sqlalchemy.ext.asyncio import AsyncEngine

from securewallet_client.core.config import Settings, get_settings
from securewallet_client.infrastructure.database import build_engine, build_session_factory, init_storage
from securewallet_client.interfaces.http import GatewayClient
from securewallet_client.interfaces.http.endpoints import (
    AuthEndpoints,
    TransactionEndpoints,
    UserEndpoints,
    WalletEndpoints,
)
from securewallet_client.modules.credentials import CredentialStore, MemoryCredentialRepository
from securewallet_client.modules.ledger import LedgerOrchestrator
from securewallet_client.modules.session import SessionOrchestrator
from securewallet_client.modules.session.service import Navigator
from securewallet_client.store import StateStore


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    store: StateStore
    credentials: CredentialStore
    gateway: GatewayClient
    session: SessionOrchestrator
    ledger: LedgerOrchestrator
    engine: Optional[AsyncEngine] = None

    async def init_infrastructure(self) -> None:
        """Ensure durable storage tables exist."""
        if self.engine is not None:
            await init_storage(self.engine)

    async def aclose(self) -> None:
        await self.ledger.aclose()
        await self.gateway.aclose()
        if self.engine is not None:
            await self.engine.dispose()


def build_container(
    settings: Optional[Settings] = None,
    *,
    navigator: Optional[Navigator] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    credentials: Optional[CredentialStore] = None,
) -> ApplicationContainer:
    settings = settings or get_settings()

    engine: Optional[AsyncEngine] = None
    if credentials is None:
        if settings.storage.backend == "memory":
            credentials = CredentialStore(MemoryCredentialRepository())
        else:
            engine = build_engine(settings)
            credentials = CredentialStore.with_session_factory(build_session_factory(engine))

    http = httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=settings.api.timeout,
        headers={"Accept": "application/json"},
        transport=transport,
    )
    gateway = GatewayClient(
        http,
        credentials,
        single_flight=settings.renewal.single_flight,
        proactive=settings.renewal.proactive,
        leeway_seconds=settings.renewal.leeway_seconds,
    )

    store = StateStore()
    session = SessionOrchestrator(
        store,
        credentials,
        AuthEndpoints(gateway),
        UserEndpoints(gateway),
        navigator=navigator,
    )
    gateway.on_session_expired(session.handle_session_expired)
    ledger = LedgerOrchestrator(
        store,
        WalletEndpoints(gateway),
        TransactionEndpoints(gateway),
        refresh_page_size=settings.refresh_page_size,
    )

    return ApplicationContainer(
        settings=settings,
        store=store,
        credentials=credentials,
        gateway=gateway,
        session=session,
        ledger=ledger,
        engine=engine,
    )


__all__ = ["ApplicationContainer", "build_container"]
