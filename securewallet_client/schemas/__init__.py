"""Pydantic schemas for the ledger service wire format (camelCase JSON)."""
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from securewallet_client.domain import (
    TransactionStatus,
    TransactionType,
    UserStatus,
    WalletStatus,
    WalletType,
)

DataT = TypeVar("DataT")


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ApiEnvelope(WireModel, Generic[DataT]):
    success: bool
    message: Optional[str] = None
    error_code: Optional[str] = None
    data: Optional[DataT] = None
    timestamp: Optional[datetime] = None


class LoginRequest(WireModel):
    email: str
    password: str


class RegisterRequest(WireModel):
    email: str
    password: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None


class RefreshTokenRequest(WireModel):
    refresh_token: str


class UserPayload(WireModel):
    id: int
    email: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None
    status: UserStatus
    email_verified: bool = False
    roles: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class AuthPayload(WireModel):
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: Optional[int] = None
    user: Optional[UserPayload] = None


class CreateWalletRequest(WireModel):
    name: str
    wallet_type: WalletType


class WalletPayload(WireModel):
    id: int
    wallet_number: str
    name: str
    wallet_type: WalletType
    balance: Decimal
    available_balance: Decimal
    minimum_balance: Decimal = Decimal("0")
    daily_transaction_limit: Decimal = Decimal("0")
    currency: str
    status: WalletStatus
    created_at: Optional[datetime] = None


class BalancePayload(WireModel):
    wallet_id: int
    wallet_name: str
    balance: Decimal
    available_balance: Decimal
    currency: str


class TransactionPayload(WireModel):
    id: int
    reference_number: str
    source_wallet_id: Optional[int] = None
    source_wallet_name: Optional[str] = None
    destination_wallet_id: Optional[int] = None
    destination_wallet_name: Optional[str] = None
    amount: Decimal
    fee: Decimal = Decimal("0")
    type: TransactionType
    status: TransactionStatus
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class PagePayload(WireModel, Generic[DataT]):
    content: list[DataT] = Field(default_factory=list)
    total_elements: int = 0
    total_pages: int = 0
    size: int = 0
    number: int = 0
    first: bool = True
    last: bool = True


class DepositRequest(WireModel):
    wallet_id: int
    amount: Decimal
    description: Optional[str] = None


class WithdrawRequest(WireModel):
    wallet_id: int
    amount: Decimal
    description: Optional[str] = None


class TransferRequest(WireModel):
    source_wallet_id: int
    destination_wallet_id: int
    amount: Decimal
    description: Optional[str] = None


class TransactionQuery(WireModel):
    wallet_id: Optional[int] = None
    type: Optional[TransactionType] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    page: Optional[int] = None
    size: Optional[int] = None
