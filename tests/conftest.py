from __future__ import annotations

from typing import Any, Callable, Optional

import httpx
import pytest
import pytest_asyncio

from securewallet_client.core.config import ApiSettings, RenewalSettings, Settings, StorageSettings
from securewallet_client.core.container import ApplicationContainer, build_container
from securewallet_client.modules.credentials import CredentialStore

from tests.fake_ledger import FakeLedger

ALICE_EMAIL = "alice@example.com"
ALICE_PASSWORD = "secret123"


def make_settings(**renewal: Any) -> Settings:
    return Settings(
        api=ApiSettings(base_url="http://testserver"),
        storage=StorageSettings(backend="memory"),
        renewal=RenewalSettings(**renewal),
    )


@pytest.fixture
def ledger_server() -> FakeLedger:
    server = FakeLedger()
    alice = server.add_user(ALICE_EMAIL, ALICE_PASSWORD)
    server.add_wallet(alice, "Savings", "100.00")
    server.add_wallet(alice, "Checking", "250.00", "CHECKING")
    return server


@pytest.fixture
def navigations() -> list[str]:
    return []


@pytest_asyncio.fixture
async def container_factory(ledger_server: FakeLedger, navigations: list[str]):
    """Build containers wired to the fake ledger; all are closed on teardown."""
    built: list[ApplicationContainer] = []

    def factory(
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        credentials: Optional[CredentialStore] = None,
        **renewal: Any,
    ) -> ApplicationContainer:
        container = build_container(
            make_settings(**renewal),
            navigator=lambda: navigations.append("login"),
            transport=transport or httpx.ASGITransport(app=ledger_server.app),
            credentials=credentials,
        )
        built.append(container)
        return container

    yield factory

    for container in built:
        await container.aclose()


@pytest_asyncio.fixture
async def container(container_factory: Callable[..., ApplicationContainer]) -> ApplicationContainer:
    return container_factory()


@pytest_asyncio.fixture
async def signed_in(container: ApplicationContainer) -> ApplicationContainer:
    outcome = await container.session.login(ALICE_EMAIL, ALICE_PASSWORD)
    assert outcome.ok, outcome.error
    return container
