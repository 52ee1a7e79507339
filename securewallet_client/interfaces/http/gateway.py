"""Gateway client: bearer credentials, expiry detection and single-use renewal.

Every outbound call goes through :meth:`GatewayClient.send`. A 401 on a
first attempt triggers a renewal with the stored refresh token followed by
exactly one replay of the original request. Concurrent renewals are
coalesced into one in-flight call unless ``single_flight`` is disabled.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

import httpx
from pydantic import ValidationError as SchemaValidationError

from securewallet_client.core.tokens import expires_within
from securewallet_client.modules.credentials import CredentialPair, CredentialStore
from securewallet_client.schemas import ApiEnvelope, AuthPayload, RefreshTokenRequest

from .errors import (
    GatewayError,
    HttpError,
    NetworkError,
    SessionExpiredError,
    error_from_response,
)

logger = logging.getLogger(__name__)

REFRESH_PATH = "/auth/refresh"

SessionExpiredHandler = Callable[[], Union[Awaitable[None], None]]


@dataclass(frozen=True, slots=True)
class ApiRequest:
    """Immutable description of one call; replays are new values."""

    method: str
    path: str
    params: Optional[Mapping[str, Any]] = None
    body: Optional[Any] = None
    authenticated: bool = True
    attempt: int = 0

    def replay(self) -> "ApiRequest":
        return replace(self, attempt=self.attempt + 1)


class GatewayClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        credentials: CredentialStore,
        *,
        single_flight: bool = True,
        proactive: bool = False,
        leeway_seconds: int = 30,
    ) -> None:
        self._http = http
        self._credentials = credentials
        self._single_flight = single_flight
        self._proactive = proactive
        self._leeway_seconds = leeway_seconds
        self._renewal: Optional[asyncio.Future[CredentialPair]] = None
        self._expired_handlers: list[SessionExpiredHandler] = []

    @property
    def credentials(self) -> CredentialStore:
        return self._credentials

    def on_session_expired(self, handler: SessionExpiredHandler) -> None:
        """Register a callback run after credentials are dropped for good."""
        self._expired_handlers.append(handler)

    async def send(self, request: ApiRequest) -> httpx.Response:
        pair = await self._credentials.get() if request.authenticated else None
        if request.authenticated and pair is None:
            raise SessionExpiredError("Not signed in")

        if (
            self._proactive
            and request.attempt == 0
            and pair is not None
            and pair.can_renew
            and expires_within(pair.access_token, self._leeway_seconds)
        ):
            logger.debug("Access credential about to expire, renewing before %s %s", request.method, request.path)
            pair = await self._renew(pair)

        response = await self._dispatch(request, pair)
        if response.status_code != 401 or not request.authenticated or request.attempt > 0:
            return response

        replay = request.replay()
        current = await self._credentials.get()
        if (
            self._single_flight
            and current is not None
            and current.access_token != pair.access_token
        ):
            logger.debug("Credential already renewed, replaying %s %s", request.method, request.path)
            return await self._dispatch(replay, current)

        if current is None or not current.can_renew:
            logger.info("Authorization failed without a refresh credential, ending session")
            await self._expire_session()
            failure = error_from_response(response)
            raise SessionExpiredError(failure.message, failure.error_code)

        renewed = await self._renew(current)
        return await self._dispatch(replay, renewed)

    async def request_json(self, request: ApiRequest, data_type: Any = Any) -> ApiEnvelope[Any]:
        """Send ``request`` and decode its envelope, raising tagged errors on failure."""
        response = await self.send(request)
        return decode_envelope(response, data_type)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _dispatch(self, request: ApiRequest, pair: Optional[CredentialPair]) -> httpx.Response:
        headers: dict[str, str] = {}
        if pair is not None:
            headers["Authorization"] = f"Bearer {pair.access_token}"
        logger.debug("%s %s (attempt %d)", request.method, request.path, request.attempt)
        try:
            return await self._http.request(
                request.method,
                request.path,
                params=dict(request.params) if request.params else None,
                json=request.body,
                headers=headers,
            )
        except httpx.RequestError as exc:
            raise NetworkError(str(exc) or exc.__class__.__name__) from exc

    async def _renew(self, pair: CredentialPair) -> CredentialPair:
        if not self._single_flight:
            return await self._perform_renewal(pair)

        if self._renewal is None:
            renewal = asyncio.ensure_future(self._perform_renewal(pair))
            renewal.add_done_callback(self._renewal_done)
            self._renewal = renewal
        else:
            logger.debug("Joining in-flight credential renewal")
        return await asyncio.shield(self._renewal)

    def _renewal_done(self, future: asyncio.Future[CredentialPair]) -> None:
        if self._renewal is future:
            self._renewal = None
        if not future.cancelled():
            # waiters may all be gone; consume the result so it is never reported as unretrieved
            future.exception()

    async def _perform_renewal(self, pair: CredentialPair) -> CredentialPair:
        request = ApiRequest(
            "POST",
            REFRESH_PATH,
            body=RefreshTokenRequest(refresh_token=pair.refresh_token or "").to_wire(),
            authenticated=False,
        )
        try:
            envelope = decode_envelope(await self._dispatch(request, None), AuthPayload)
        except GatewayError as exc:
            logger.warning("Credential renewal failed: %s", exc)
            await self._expire_session()
            error_code = exc.error_code if isinstance(exc, HttpError) else None
            raise SessionExpiredError(exc.message or "Session expired", error_code) from exc

        payload: AuthPayload = envelope.data
        renewed = CredentialPair(access_token=payload.access_token, refresh_token=payload.refresh_token)
        await self._credentials.set(renewed)
        logger.info("Access credential renewed")
        return renewed

    async def _expire_session(self) -> None:
        await self._credentials.clear()
        for handler in list(self._expired_handlers):
            result = handler()
            if inspect.isawaitable(result):
                await result


def decode_envelope(response: httpx.Response, data_type: Any = Any) -> ApiEnvelope[Any]:
    """Validate a response body against ``ApiEnvelope[data_type]``."""
    if response.is_error:
        raise error_from_response(response)
    try:
        envelope = ApiEnvelope[data_type].model_validate_json(response.content)
    except SchemaValidationError as exc:
        raise HttpError(response.status_code, "Malformed response from server") from exc
    if not envelope.success:
        raise error_from_response(response)
    if envelope.data is None and data_type is not Any and data_type is not type(None):
        raise HttpError(response.status_code, envelope.message or "Empty response from server", envelope.error_code)
    return envelope


__all__ = ["ApiRequest", "GatewayClient", "REFRESH_PATH", "decode_envelope"]
