"""Ledger orchestration exports."""

from .service import (
    CREATE_WALLET_FAILED,
    DEPOSIT_FAILED,
    FETCH_TRANSACTIONS_FAILED,
    FETCH_WALLETS_FAILED,
    TRANSFER_FAILED,
    WITHDRAWAL_FAILED,
    LedgerOrchestrator,
)

__all__ = [
    "CREATE_WALLET_FAILED",
    "DEPOSIT_FAILED",
    "FETCH_TRANSACTIONS_FAILED",
    "FETCH_WALLETS_FAILED",
    "TRANSFER_FAILED",
    "WITHDRAWAL_FAILED",
    "LedgerOrchestrator",
]
