"""Domain models for wallets and transactions.

Amounts are ``Decimal`` values copied verbatim from the server. Nothing here
performs balance arithmetic.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class WalletType(str, Enum):
    SAVINGS = "SAVINGS"
    CHECKING = "CHECKING"
    INVESTMENT = "INVESTMENT"
    MERCHANT = "MERCHANT"


class WalletStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    FROZEN = "FROZEN"
    CLOSED = "CLOSED"


class TransactionType(str, Enum):
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    TRANSFER = "TRANSFER"
    PAYMENT = "PAYMENT"
    REFUND = "REFUND"


class TransactionStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    REVERSED = "REVERSED"


@dataclass(frozen=True, slots=True)
class Wallet:
    id: int
    wallet_number: str
    name: str
    wallet_type: WalletType
    balance: Decimal
    available_balance: Decimal
    minimum_balance: Decimal
    daily_transaction_limit: Decimal
    currency: str
    status: WalletStatus
    created_at: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class WalletBalance:
    wallet_id: int
    wallet_name: str
    balance: Decimal
    available_balance: Decimal
    currency: str


@dataclass(frozen=True, slots=True)
class Transaction:
    id: int
    reference_number: str
    amount: Decimal
    fee: Decimal
    type: TransactionType
    status: TransactionStatus
    source_wallet_id: Optional[int] = None
    source_wallet_name: Optional[str] = None
    destination_wallet_id: Optional[int] = None
    destination_wallet_name: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class TransactionPage:
    content: tuple[Transaction, ...]
    total_elements: int
    total_pages: int = 0
    size: int = 0
    number: int = 0
    first: bool = True
    last: bool = True


@dataclass(frozen=True, slots=True)
class TransactionFilter:
    wallet_id: Optional[int] = None
    type: Optional[TransactionType] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    page: Optional[int] = None
    size: Optional[int] = None
