"""Ledger orchestrator: wallet and transaction operations over cached state.

Mutations never patch cached balances or prepend transactions. A successful
deposit, withdrawal or transfer bumps the ledger generation and schedules a
wallet re-fetch plus a re-fetch of the most recent transactions; the
mutation's own outcome resolves before those complete.
"""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal
from typing import Awaitable, Callable, Optional

from securewallet_client.domain import (
    Outcome,
    Transaction,
    TransactionFilter,
    TransactionPage,
    Wallet,
    WalletBalance,
    WalletType,
)
from securewallet_client.interfaces.http import GatewayError, describe
from securewallet_client.interfaces.http.endpoints import TransactionEndpoints, WalletEndpoints
from securewallet_client.store import LedgerState, StateStore
from securewallet_client.store import ledger as transitions

logger = logging.getLogger(__name__)

FETCH_WALLETS_FAILED = "Failed to fetch wallets"
FETCH_WALLET_FAILED = "Failed to fetch wallet"
FETCH_BALANCE_FAILED = "Failed to fetch balance"
CREATE_WALLET_FAILED = "Failed to create wallet"
FETCH_TRANSACTIONS_FAILED = "Failed to fetch transactions"
FETCH_TRANSACTION_FAILED = "Failed to fetch transaction"
DEPOSIT_FAILED = "Deposit failed"
WITHDRAWAL_FAILED = "Withdrawal failed"
TRANSFER_FAILED = "Transfer failed"


class LedgerOrchestrator:
    def __init__(
        self,
        store: StateStore,
        wallets: WalletEndpoints,
        transactions: TransactionEndpoints,
        refresh_page_size: int = 20,
    ) -> None:
        self._store = store
        self._wallets = wallets
        self._transactions = transactions
        self._refresh_page_size = refresh_page_size
        self._refresh_tasks: set[asyncio.Task[None]] = set()

    async def fetch_wallets(self) -> Outcome[list[Wallet]]:
        return await self._load_wallets()

    async def fetch_transactions(self, query: Optional[TransactionFilter] = None) -> Outcome[TransactionPage]:
        return await self._load_transactions(query or TransactionFilter())

    async def fetch_wallet(self, wallet_id: int) -> Outcome[Wallet]:
        return await self._lookup(self._wallets.get_wallet(wallet_id), FETCH_WALLET_FAILED)

    async def fetch_balance(self, wallet_id: int) -> Outcome[WalletBalance]:
        return await self._lookup(self._wallets.get_balance(wallet_id), FETCH_BALANCE_FAILED)

    async def fetch_transaction(self, transaction_id: int) -> Outcome[Transaction]:
        return await self._lookup(self._transactions.get_transaction(transaction_id), FETCH_TRANSACTION_FAILED)

    async def create_wallet(self, name: str, wallet_type: WalletType) -> Outcome[Wallet]:
        self._store.update("ledger", transitions.pending)
        try:
            wallet = await self._wallets.create_wallet(name, wallet_type)
        except GatewayError as exc:
            return self._reject(exc, CREATE_WALLET_FAILED)
        self._store.update("ledger", transitions.wallet_created, wallet)
        logger.info("Created wallet %s (%s)", wallet.wallet_number, wallet.wallet_type.value)
        return Outcome.fulfilled(wallet)

    async def deposit(
        self,
        wallet_id: int,
        amount: Decimal,
        description: Optional[str] = None,
    ) -> Outcome[Transaction]:
        return await self._mutate(
            "deposit",
            lambda: self._transactions.deposit(wallet_id, amount, description),
            DEPOSIT_FAILED,
        )

    async def withdraw(
        self,
        wallet_id: int,
        amount: Decimal,
        description: Optional[str] = None,
    ) -> Outcome[Transaction]:
        return await self._mutate(
            "withdrawal",
            lambda: self._transactions.withdraw(wallet_id, amount, description),
            WITHDRAWAL_FAILED,
        )

    async def transfer(
        self,
        source_wallet_id: int,
        destination_wallet_id: int,
        amount: Decimal,
        description: Optional[str] = None,
    ) -> Outcome[Transaction]:
        return await self._mutate(
            "transfer",
            lambda: self._transactions.transfer(source_wallet_id, destination_wallet_id, amount, description),
            TRANSFER_FAILED,
        )

    def select_wallet(self, wallet: Optional[Wallet]) -> None:
        self._store.update("ledger", transitions.select_wallet, wallet)

    def clear_error(self) -> None:
        self._store.update("ledger", transitions.clear_error)

    async def wait_until_consistent(self, generation: Optional[int] = None) -> LedgerState:
        """Wait for the re-fetches scheduled up to ``generation`` (default: latest) to settle."""
        target = self._store.ledger.generation if generation is None else generation
        return await self._store.wait_for("ledger", lambda state: state.synced_generation >= target)

    async def aclose(self) -> None:
        """Let scheduled re-fetches finish."""
        if self._refresh_tasks:
            await asyncio.gather(*list(self._refresh_tasks), return_exceptions=True)

    async def _load_wallets(self, generation: Optional[int] = None) -> Outcome[list[Wallet]]:
        self._store.update("ledger", transitions.pending)
        try:
            wallets = await self._wallets.list_wallets()
        except GatewayError as exc:
            return self._reject(exc, FETCH_WALLETS_FAILED, generation)
        if self._superseded(generation):
            logger.debug("Dropping wallet refresh for superseded generation %s", generation)
            self._store.update("ledger", transitions.settled)
        else:
            self._store.update("ledger", transitions.wallets_fetched, wallets)
        return Outcome.fulfilled(wallets)

    async def _load_transactions(
        self,
        query: TransactionFilter,
        generation: Optional[int] = None,
    ) -> Outcome[TransactionPage]:
        self._store.update("ledger", transitions.pending)
        try:
            page = await self._transactions.list_transactions(query)
        except GatewayError as exc:
            return self._reject(exc, FETCH_TRANSACTIONS_FAILED, generation)
        if self._superseded(generation):
            logger.debug("Dropping transaction refresh for superseded generation %s", generation)
            self._store.update("ledger", transitions.settled)
        else:
            self._store.update("ledger", transitions.transactions_fetched, page)
        return Outcome.fulfilled(page)

    def _superseded(self, generation: Optional[int]) -> bool:
        return generation is not None and self._store.ledger.generation != generation

    async def _lookup(self, call: Awaitable, fallback: str) -> Outcome:
        try:
            return Outcome.fulfilled(await call)
        except GatewayError as exc:
            return Outcome.rejected(describe(exc, fallback))

    async def _mutate(
        self,
        label: str,
        call: Callable[[], Awaitable[Transaction]],
        fallback: str,
    ) -> Outcome[Transaction]:
        try:
            transaction = await call()
        except GatewayError as exc:
            message = describe(exc, fallback)
            logger.warning("%s rejected: %s", label.capitalize(), message)
            self._store.update("ledger", transitions.mutation_rejected, message)
            return Outcome.rejected(message)

        state = self._store.update("ledger", transitions.mutation_committed)
        logger.info("%s %s committed, refreshing ledger (generation %d)", label.capitalize(),
                    transaction.reference_number, state.generation)
        self._schedule_refresh(state.generation)
        return Outcome.fulfilled(transaction)

    def _schedule_refresh(self, generation: int) -> None:
        task = asyncio.create_task(self._refresh(generation))
        self._refresh_tasks.add(task)
        task.add_done_callback(self._refresh_tasks.discard)

    async def _refresh(self, generation: int) -> None:
        try:
            wallets, page = await asyncio.gather(
                self._load_wallets(generation),
                self._load_transactions(TransactionFilter(size=self._refresh_page_size), generation),
            )
            if not (wallets.ok and page.ok):
                logger.warning(
                    "Ledger refresh for generation %d incomplete: %s",
                    generation,
                    wallets.error or page.error,
                )
        finally:
            self._store.update("ledger", transitions.synced, generation)

    def _reject(self, exc: GatewayError, fallback: str, generation: Optional[int] = None) -> Outcome:
        message = describe(exc, fallback)
        if self._superseded(generation):
            logger.debug("Ignoring failed refresh for superseded generation %s: %s", generation, message)
            self._store.update("ledger", transitions.settled)
        else:
            self._store.update("ledger", transitions.rejected, message)
        return Outcome.rejected(message)
