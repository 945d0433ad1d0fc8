"""
Core Data Models for Money Manager

These models define the schema of the single state document the app
persists, plus the typed requests the ledger engine accepts.

DESIGN DECISION: Stored models are lenient (they must load backups written
by older versions of the app), request models are strict (they guard what
new user input may look like). Field names are snake_case in Python and
camelCase on the wire, so exported JSON matches the browser app's format.
"""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Annotated, Any, Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
)
from pydantic.alias_generators import to_camel


OTHER_CATEGORY = "Other"


def _money_to_json(value: Decimal) -> Any:
    """Write whole amounts as JSON integers, everything else as floats."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


Money = Annotated[
    Decimal,
    PlainSerializer(_money_to_json, return_type=Any, when_used="json"),
]


def _new_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    str_strip_whitespace=True,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class AccountType(str, Enum):
    """
    Supported account types.

    DESIGN DECISION: Every type except CREDIT and INVESTMENT is a liquid,
    cash-type account. CREDIT drives the sign flip on creation, INVESTMENT
    drives the investment sub-total. Both are checked against this enum,
    never against raw strings.
    """
    BANK = "bank"
    CASH = "cash"
    WALLET = "wallet"
    SAVINGS = "savings"
    CREDIT = "credit"
    INVESTMENT = "investment"

    @property
    def is_liquid(self) -> bool:
        """Can money be spent from (or moved out of) this account freely?"""
        return self not in (AccountType.CREDIT, AccountType.INVESTMENT)


class TransactionType(str, Enum):
    """Direction of a transaction. The amount itself is always unsigned."""
    INCOME = "income"
    EXPENSE = "expense"


class Theme(str, Enum):
    """Display theme flag stored alongside the ledger."""
    LIGHT = "light"
    DARK = "dark"


# =============================================================================
# STORED ENTITIES
# =============================================================================

class Account(BaseModel):
    """
    An account as stored in the document.

    `balance` is the value BEFORE any transaction is applied. The running
    balance is always recomputed by the engine and never written back here.
    Credit accounts store the outstanding debt as a negative balance.
    """
    model_config = _WIRE_CONFIG

    id: str = Field(default_factory=_new_id)
    name: str
    type: AccountType = AccountType.BANK
    balance: Money = Decimal("0")
    limit: Optional[Money] = Field(
        default=None,
        description="Credit ceiling (credit accounts only, display-only)"
    )

    @field_validator("type", mode="before")
    @classmethod
    def unknown_type_is_bank(cls, v: Any) -> Any:
        """Older documents may carry free-form types; treat those as plain bank accounts."""
        if isinstance(v, AccountType) or not isinstance(v, str):
            return v
        try:
            return AccountType(v.strip().lower())
        except ValueError:
            return AccountType.BANK


class Transaction(BaseModel):
    """
    A single income or expense posting against one account.

    Older backups have no `category`; it defaults to "Other" on load.
    """
    model_config = _WIRE_CONFIG

    id: str = Field(default_factory=_new_id)
    type: TransactionType
    amount: Annotated[Money, Field(ge=0)]
    category: str = OTHER_CATEGORY
    description: str = ""
    account_id: str
    date: datetime = Field(
        default_factory=_utcnow,
        description="Creation timestamp, never changed afterwards"
    )

    @field_validator("category", mode="before")
    @classmethod
    def default_blank_category(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return OTHER_CATEGORY
        return v


class Emi(BaseModel):
    """
    A recurring monthly obligation.

    EMIs are never posted as transactions. They only feed the EMI burden
    figure in the aggregate totals.
    """
    model_config = _WIRE_CONFIG

    id: str = Field(default_factory=_new_id)
    description: str = ""
    amount: Annotated[Money, Field(ge=0)]
    account_id: str


class Preset(BaseModel):
    """Category shortcut. Not involved in any financial computation."""
    model_config = _WIRE_CONFIG

    name: str = Field(..., min_length=1, max_length=50)
    icon: str = ""
    type: TransactionType


class LedgerState(BaseModel):
    """
    The aggregate root: the whole document is the unit of persistence
    and of export/import.

    `transactions` is an append-only log; "newest first" is produced by
    reversing it at read time.
    """
    model_config = _WIRE_CONFIG

    accounts: list[Account] = Field(default_factory=list)
    transactions: list[Transaction] = Field(default_factory=list)
    emis: list[Emi] = Field(default_factory=list)
    custom_presets: list[Preset] = Field(default_factory=list)
    theme: Theme = Theme.DARK


# =============================================================================
# DERIVED FIGURES
# =============================================================================

class LedgerTotals(BaseModel):
    """Aggregate figures derived from the full document."""
    model_config = _WIRE_CONFIG

    spendable: Money
    net_worth: Money
    investments: Money
    debt: Money
    emis: Money


class AccountBalance(BaseModel):
    """An account paired with its running balance."""
    model_config = _WIRE_CONFIG

    account: Account
    balance: Money


class FeedEntry(BaseModel):
    """One row of the newest-first transaction feed."""
    model_config = _WIRE_CONFIG

    transaction: Transaction
    account_name: str
    signed_amount: Money


class CashFlow(BaseModel):
    """Overall income and expense across every transaction."""
    model_config = _WIRE_CONFIG

    income: Money
    expense: Money
    balance: Money = Field(
        ...,
        description="Sum of every account's running balance"
    )


# =============================================================================
# REQUESTS - what callers hand to the engine
# =============================================================================

class NewAccount(BaseModel):
    """
    Request to open an account.

    For CREDIT accounts `balance` is the outstanding amount as the user
    typed it (a positive number); the engine stores its negation.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    type: AccountType = AccountType.BANK
    balance: Decimal = Decimal("0")
    limit: Optional[Decimal] = Field(default=None, ge=0)

    @field_validator("balance", mode="before")
    @classmethod
    def unparsable_balance_is_zero(cls, v: Any) -> Decimal:
        """Blank or garbage input opens the account at zero."""
        if v is None or isinstance(v, bool):
            return Decimal("0")
        try:
            amount = Decimal(str(v).strip())
        except (InvalidOperation, ValueError):
            return Decimal("0")
        if not amount.is_finite():
            return Decimal("0")
        return amount


class NewTransaction(BaseModel):
    """Request to record an income or expense."""
    model_config = ConfigDict(str_strip_whitespace=True)

    type: TransactionType
    amount: Decimal = Field(..., ge=0)
    category: Optional[str] = None
    description: str = Field(default="", max_length=200)
    account_id: str


class NewEmi(BaseModel):
    """Request to track a monthly installment."""
    model_config = ConfigDict(str_strip_whitespace=True)

    description: str = Field(..., min_length=1, max_length=200)
    amount: Decimal = Field(..., ge=0)
    account_id: str


class Repayment(BaseModel):
    """
    Request to pay down a credit account from a liquid account.

    The amount is deliberately unconstrained here: a non-positive amount
    is a precondition failure reported by the engine, not a schema error.
    """
    credit_account_id: str
    source_account_id: str
    amount: Decimal
