"""Typed clients for the ledger service REST surface."""

from .auth import AuthEndpoints, AuthResult
from .transactions import TransactionEndpoints
from .users import UserEndpoints, to_user
from .wallets import WalletEndpoints

__all__ = [
    "AuthEndpoints",
    "AuthResult",
    "TransactionEndpoints",
    "UserEndpoints",
    "WalletEndpoints",
    "to_user",
]
