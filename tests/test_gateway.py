import asyncio
from datetime import timedelta

import httpx
import pytest

from securewallet_client.interfaces.http import (
    ApiRequest,
    HttpError,
    NetworkError,
    SessionExpiredError,
)
from securewallet_client.modules.credentials import CredentialPair

from tests.conftest import ALICE_EMAIL, ALICE_PASSWORD


@pytest.mark.asyncio
async def test_expired_access_token_is_renewed_and_request_replayed(signed_in, ledger_server, navigations):
    before = await signed_in.credentials.get()
    ledger_server.expire_access_tokens()

    outcome = await signed_in.ledger.fetch_wallets()

    assert outcome.ok
    assert [wallet.name for wallet in outcome.value] == ["Savings", "Checking"]
    assert ledger_server.count("GET", "/wallets") == 2
    assert ledger_server.count("POST", "/auth/refresh") == 1

    after = await signed_in.credentials.get()
    assert after.access_token != before.access_token
    assert after.refresh_token != before.refresh_token
    assert ledger_server.seen[-1].authorization == f"Bearer {after.access_token}"
    assert signed_in.store.session.is_authenticated
    assert navigations == []


@pytest.mark.asyncio
async def test_failed_renewal_clears_credentials_and_forces_logout(signed_in, ledger_server, navigations):
    ledger_server.fail_refresh = True
    ledger_server.expire_access_tokens()

    outcome = await signed_in.ledger.fetch_wallets()

    assert not outcome.ok
    assert await signed_in.credentials.get() is None
    assert not signed_in.store.session.is_authenticated
    assert signed_in.store.session.identity is None
    assert navigations == ["login"]

    calls = ledger_server.count("GET", "/wallets")
    again = await signed_in.ledger.fetch_wallets()
    assert again.error == "Not signed in"
    assert ledger_server.count("GET", "/wallets") == calls


@pytest.mark.asyncio
async def test_401_on_replay_is_returned_without_second_renewal(container_factory, navigations):
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        if request.url.path.endswith("/auth/refresh"):
            return httpx.Response(
                200,
                json={"success": True, "data": {"accessToken": "renewed", "refreshToken": "next"}},
            )
        return httpx.Response(401, json={"success": False, "message": "Access denied", "errorCode": "UNAUTHORIZED"})

    container = container_factory(transport=httpx.MockTransport(handler))
    await container.credentials.set(CredentialPair("stale", "refresh"))

    with pytest.raises(HttpError) as excinfo:
        await container.gateway.request_json(ApiRequest("GET", "/wallets"))

    assert excinfo.value.status == 401
    assert not isinstance(excinfo.value, SessionExpiredError)
    assert calls == ["/api/v1/wallets", "/api/v1/auth/refresh", "/api/v1/wallets"]
    assert await container.credentials.get() == CredentialPair("renewed", "next")
    assert navigations == []


@pytest.mark.asyncio
async def test_401_without_refresh_credential_ends_session(container_factory, navigations):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"success": False, "message": "Token expired", "errorCode": "UNAUTHORIZED"})

    container = container_factory(transport=httpx.MockTransport(handler))
    await container.credentials.set(CredentialPair("only-access"))

    with pytest.raises(SessionExpiredError, match="Token expired"):
        await container.gateway.send(ApiRequest("GET", "/users/me"))

    assert await container.credentials.get() is None
    assert navigations == ["login"]


@pytest.mark.asyncio
async def test_concurrent_expiries_share_one_renewal(signed_in, ledger_server, navigations):
    ledger_server.refresh_delay = 0.05
    ledger_server.expire_access_tokens()

    results = await asyncio.gather(
        signed_in.gateway.request_json(ApiRequest("GET", "/wallets")),
        signed_in.gateway.request_json(ApiRequest("GET", "/users/me")),
        signed_in.gateway.request_json(ApiRequest("GET", "/transactions")),
    )

    assert all(envelope.success for envelope in results)
    assert ledger_server.count("POST", "/auth/refresh") == 1
    assert await signed_in.credentials.get() is not None
    assert signed_in.store.session.is_authenticated
    assert navigations == []


@pytest.mark.asyncio
async def test_per_request_renewal_loses_the_race_for_a_single_use_refresh_token(
    container_factory, ledger_server, navigations
):
    container = container_factory(single_flight=False)
    assert (await container.session.login(ALICE_EMAIL, ALICE_PASSWORD)).ok
    ledger_server.refresh_delay = 0.05
    ledger_server.expire_access_tokens()

    results = await asyncio.gather(
        container.gateway.request_json(ApiRequest("GET", "/wallets")),
        container.gateway.request_json(ApiRequest("GET", "/users/me")),
        return_exceptions=True,
    )

    assert ledger_server.count("POST", "/auth/refresh") == 2
    assert sum(isinstance(result, SessionExpiredError) for result in results) == 1
    assert not container.store.session.is_authenticated
    assert navigations == ["login"]


@pytest.mark.asyncio
async def test_proactive_renewal_avoids_the_401_round_trip(container_factory, ledger_server):
    ledger_server.access_ttl = timedelta(seconds=10)
    container = container_factory(proactive=True, leeway_seconds=30)
    assert (await container.session.login(ALICE_EMAIL, ALICE_PASSWORD)).ok

    outcome = await container.ledger.fetch_wallets()

    assert outcome.ok
    assert ledger_server.count("POST", "/auth/refresh") == 1
    assert ledger_server.count("GET", "/wallets") == 1


@pytest.mark.asyncio
async def test_public_calls_carry_no_bearer_header(container, ledger_server):
    await container.credentials.set(CredentialPair("left-over", "refresh"))

    outcome = await container.session.login(ALICE_EMAIL, ALICE_PASSWORD)

    assert outcome.ok
    login = next(seen for seen in ledger_server.seen if seen.path.endswith("/auth/login"))
    assert login.authorization is None


@pytest.mark.asyncio
async def test_transport_failure_is_a_network_error(container_factory):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    container = container_factory(transport=httpx.MockTransport(handler))
    await container.credentials.set(CredentialPair("access", "refresh"))

    with pytest.raises(NetworkError):
        await container.gateway.send(ApiRequest("GET", "/wallets"))

    outcome = await container.ledger.fetch_wallets()
    assert outcome.error == "Failed to fetch wallets"
    assert await container.credentials.get() is not None


@pytest.mark.asyncio
async def test_undecodable_body_is_a_network_error(container_factory):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            headers={"content-encoding": "gzip"},
            stream=httpx.ByteStream(b"not gzip at all"),
        )

    container = container_factory(transport=httpx.MockTransport(handler))
    await container.credentials.set(CredentialPair("access", "refresh"))

    with pytest.raises(NetworkError):
        await container.gateway.send(ApiRequest("GET", "/wallets"))

    outcome = await container.ledger.fetch_wallets()
    assert outcome.error == "Failed to fetch wallets"
    assert container.store.ledger.error == "Failed to fetch wallets"
