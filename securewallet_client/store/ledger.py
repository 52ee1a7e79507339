"""Ledger slice and its transitions.

``wallets`` and ``transactions`` are caches of the last successful fetch.
``generation`` counts committed mutations and ``synced_generation`` records
the newest generation whose follow-up re-fetches have settled.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable, Optional

from securewallet_client.domain import Transaction, TransactionPage, Wallet


@dataclass(frozen=True, slots=True)
class LedgerState:
    wallets: tuple[Wallet, ...] = ()
    selected_wallet: Optional[Wallet] = None
    transactions: tuple[Transaction, ...] = ()
    total_transactions: int = 0
    is_loading: bool = False
    error: Optional[str] = None
    generation: int = 0
    synced_generation: int = 0

    @property
    def is_stale(self) -> bool:
        return self.synced_generation < self.generation

    @property
    def total_balance(self) -> Decimal:
        """Display-only sum of cached wallet balances."""
        return sum((wallet.balance for wallet in self.wallets), Decimal("0"))


def pending(state: LedgerState) -> LedgerState:
    return replace(state, is_loading=True, error=None)


def rejected(state: LedgerState, message: str) -> LedgerState:
    return replace(state, is_loading=False, error=message)


def settled(state: LedgerState) -> LedgerState:
    return replace(state, is_loading=False)


def wallets_fetched(state: LedgerState, wallets: Iterable[Wallet]) -> LedgerState:
    fresh = tuple(wallets)
    selected = state.selected_wallet
    if selected is not None:
        selected = next((wallet for wallet in fresh if wallet.id == selected.id), None)
    return replace(state, wallets=fresh, selected_wallet=selected, is_loading=False)


def wallet_created(state: LedgerState, wallet: Wallet) -> LedgerState:
    return replace(state, wallets=state.wallets + (wallet,), is_loading=False)


def transactions_fetched(state: LedgerState, page: TransactionPage) -> LedgerState:
    return replace(
        state,
        transactions=tuple(page.content),
        total_transactions=page.total_elements,
        is_loading=False,
    )


def mutation_rejected(state: LedgerState, message: str) -> LedgerState:
    return replace(state, error=message)


def mutation_committed(state: LedgerState) -> LedgerState:
    return replace(state, generation=state.generation + 1)


def synced(state: LedgerState, generation: int) -> LedgerState:
    return replace(state, synced_generation=max(state.synced_generation, generation))


def select_wallet(state: LedgerState, wallet: Optional[Wallet]) -> LedgerState:
    return replace(state, selected_wallet=wallet)


def clear_error(state: LedgerState) -> LedgerState:
    return replace(state, error=None)
