"""Wallet endpoints."""

from __future__ import annotations

from dataclasses import dataclass

from securewallet_client.domain import Wallet, WalletBalance, WalletType
from securewallet_client.schemas import BalancePayload, CreateWalletRequest, WalletPayload

from ..gateway import ApiRequest, GatewayClient


@dataclass(slots=True)
class WalletEndpoints:
    gateway: GatewayClient

    async def list_wallets(self) -> list[Wallet]:
        envelope = await self.gateway.request_json(ApiRequest("GET", "/wallets"), list[WalletPayload])
        return [self._to_wallet(item) for item in envelope.data]

    async def get_wallet(self, wallet_id: int) -> Wallet:
        envelope = await self.gateway.request_json(ApiRequest("GET", f"/wallets/{wallet_id}"), WalletPayload)
        return self._to_wallet(envelope.data)

    async def create_wallet(self, name: str, wallet_type: WalletType) -> Wallet:
        body = CreateWalletRequest(name=name, wallet_type=wallet_type).to_wire()
        envelope = await self.gateway.request_json(ApiRequest("POST", "/wallets", body=body), WalletPayload)
        return self._to_wallet(envelope.data)

    async def get_balance(self, wallet_id: int) -> WalletBalance:
        envelope = await self.gateway.request_json(
            ApiRequest("GET", f"/wallets/{wallet_id}/balance"),
            BalancePayload,
        )
        payload: BalancePayload = envelope.data
        return WalletBalance(
            wallet_id=payload.wallet_id,
            wallet_name=payload.wallet_name,
            balance=payload.balance,
            available_balance=payload.available_balance,
            currency=payload.currency,
        )

    @staticmethod
    def _to_wallet(payload: WalletPayload) -> Wallet:
        return Wallet(
            id=payload.id,
            wallet_number=payload.wallet_number,
            name=payload.name,
            wallet_type=payload.wallet_type,
            balance=payload.balance,
            available_balance=payload.available_balance,
            minimum_balance=payload.minimum_balance,
            daily_transaction_limit=payload.daily_transaction_limit,
            currency=payload.currency,
            status=payload.status,
            created_at=payload.created_at,
        )
