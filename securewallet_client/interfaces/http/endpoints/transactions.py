"""Transaction endpoints."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Optional

from securewallet_client.domain import Transaction, TransactionFilter, TransactionPage
from securewallet_client.schemas import (
    DepositRequest,
    PagePayload,
    TransactionPayload,
    TransactionQuery,
    TransferRequest,
    WithdrawRequest,
)

from ..gateway import ApiRequest, GatewayClient


@dataclass(slots=True)
class TransactionEndpoints:
    gateway: GatewayClient

    async def list_transactions(self, query: Optional[TransactionFilter] = None) -> TransactionPage:
        params = TransactionQuery(**asdict(query or TransactionFilter())).to_wire()
        envelope = await self.gateway.request_json(
            ApiRequest("GET", "/transactions", params=params),
            PagePayload[TransactionPayload],
        )
        page: PagePayload[TransactionPayload] = envelope.data
        return TransactionPage(
            content=tuple(self._to_transaction(item) for item in page.content),
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            size=page.size,
            number=page.number,
            first=page.first,
            last=page.last,
        )

    async def get_transaction(self, transaction_id: int) -> Transaction:
        envelope = await self.gateway.request_json(
            ApiRequest("GET", f"/transactions/{transaction_id}"),
            TransactionPayload,
        )
        return self._to_transaction(envelope.data)

    async def deposit(self, wallet_id: int, amount: Decimal, description: Optional[str] = None) -> Transaction:
        body = DepositRequest(wallet_id=wallet_id, amount=amount, description=description).to_wire()
        return await self._post("/transactions/deposit", body)

    async def withdraw(self, wallet_id: int, amount: Decimal, description: Optional[str] = None) -> Transaction:
        body = WithdrawRequest(wallet_id=wallet_id, amount=amount, description=description).to_wire()
        return await self._post("/transactions/withdraw", body)

    async def transfer(
        self,
        source_wallet_id: int,
        destination_wallet_id: int,
        amount: Decimal,
        description: Optional[str] = None,
    ) -> Transaction:
        body = TransferRequest(
            source_wallet_id=source_wallet_id,
            destination_wallet_id=destination_wallet_id,
            amount=amount,
            description=description,
        ).to_wire()
        return await self._post("/transactions/transfer", body)

    async def _post(self, path: str, body: dict) -> Transaction:
        envelope = await self.gateway.request_json(ApiRequest("POST", path, body=body), TransactionPayload)
        return self._to_transaction(envelope.data)

    @staticmethod
    def _to_transaction(payload: TransactionPayload) -> Transaction:
        return Transaction(
            id=payload.id,
            reference_number=payload.reference_number,
            amount=payload.amount,
            fee=payload.fee,
            type=payload.type,
            status=payload.status,
            source_wallet_id=payload.source_wallet_id,
            source_wallet_name=payload.source_wallet_name,
            destination_wallet_id=payload.destination_wallet_id,
            destination_wallet_name=payload.destination_wallet_name,
            description=payload.description,
            created_at=payload.created_at,
            completed_at=payload.completed_at,
        )
