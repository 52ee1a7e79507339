"""Domain values shared by the gateway, the state store and the orchestrators."""

from .ledger import (
    Transaction,
    TransactionFilter,
    TransactionPage,
    TransactionStatus,
    TransactionType,
    Wallet,
    WalletBalance,
    WalletStatus,
    WalletType,
)
from .outcome import Outcome
from .users import RegistrationInput, User, UserStatus

__all__ = [
    "Outcome",
    "RegistrationInput",
    "Transaction",
    "TransactionFilter",
    "TransactionPage",
    "TransactionStatus",
    "TransactionType",
    "User",
    "UserStatus",
    "Wallet",
    "WalletBalance",
    "WalletStatus",
    "WalletType",
]
