from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


# --- Auth Models ---
# Fields are optional so missing values produce the API's own 400 message instead of a schema error.
class RegisterRequest(BaseModel):
    email: str | None = None
    password: str | None = None
    name: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class AuthResponse(BaseModel):
    message: str
    user: dict[str, Any] | None = None
    session: dict[str, Any] | None = None


# --- Financial Snapshot ---
class Balances(BaseModel):
    current: float | None = None
    available: float | None = None
    limit: float | None = None
    iso_currency_code: str | None = None


class AccountSummary(BaseModel):
    name: str
    balances: Balances = Field(default_factory=Balances)


class RecentTransaction(BaseModel):
    name: str
    amount: float


class FinancialSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_balance: float | None = Field(None, alias="totalBalance")
    accounts: list[AccountSummary] = Field(default_factory=list)
    recent_transactions: list[RecentTransaction] = Field(default_factory=list, alias="recentTransactions")
    spending_by_category: dict[str, float] | None = Field(None, alias="spendingByCategory")


# --- Chat Models ---
class ChatMessage(BaseModel):
    sender: Literal["user", "bot"]
    text: str
    timestamp: datetime | None = None


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str | None = None
    conversation_history: list[ChatMessage] = Field(default_factory=list, alias="conversationHistory")
    financial_data: FinancialSnapshot | None = Field(None, alias="financialData")


class ChatResponse(BaseModel):
    message: str
    insights: list[str]
    timestamp: datetime


class HealthResponse(BaseModel):
    status: str
    configured: bool
    model: str


# --- Demo Data Models ---
class Transaction(BaseModel):
    id: int
    user_id: str
    amount: float
    type: Literal["income", "expense"]
    category: str
    description: str
    date: datetime
    is_manual: bool = False
    created_at: datetime


class Account(BaseModel):
    account_id: str
    name: str
    official_name: str
    type: str
    subtype: str
    mask: str
    balances: Balances
