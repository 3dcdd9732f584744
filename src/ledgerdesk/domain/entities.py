"""Domain model entities for ledgerdesk.

These are pure data classes representing business concepts, independent of
database schema. The ledger store maps its own rows onto them, so the balance
logic stays the same whichever store sits behind the ``Ledger`` interface.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class AccountKind(str, Enum):
    """Which side of the business an account sits on."""

    CLIENT = "client"
    SUPPLIER = "supplier"


class BalanceSign(str, Enum):
    """Direction of an account's net position.

    CREDIT: the account is owed money or has overpaid (signed value >= 0).
    DEBIT: the account owes money (signed value < 0).
    """

    CREDIT = "credit"
    DEBIT = "debit"


class TransactionType(str, Enum):
    """Kinds of ledger events."""

    INVOICE = "invoice"
    PAYMENT = "payment"
    RETURN = "return"
    INITIAL_BALANCE = "initial_balance"


class PaymentMethod(str, Enum):
    """Recognized payment methods."""

    CASH = "cash"
    CHEQUE = "cheque"
    TRANSFER = "transfer"

    @classmethod
    def parse(cls, value: Union[str, "PaymentMethod", None]) -> Optional["PaymentMethod"]:
        """Parse a method name, accepting English and French spellings.

        Returns None for empty or unrecognized input.
        """
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        return _METHOD_ALIASES.get(key)


_METHOD_ALIASES = {
    "cash": PaymentMethod.CASH,
    "especes": PaymentMethod.CASH,
    "espèces": PaymentMethod.CASH,
    "cheque": PaymentMethod.CHEQUE,
    "chèque": PaymentMethod.CHEQUE,
    "check": PaymentMethod.CHEQUE,
    "transfer": PaymentMethod.TRANSFER,
    "virement": PaymentMethod.TRANSFER,
}

ACCOUNT_CODE_PREFIXES = {
    AccountKind.CLIENT: "CL",
    AccountKind.SUPPLIER: "FR",
}


@dataclass(frozen=True)
class Account:
    """Client or supplier account domain entity."""

    id: int
    kind: AccountKind
    last_name: str
    first_name: Optional[str]
    company_name: Optional[str]
    balance_magnitude: Decimal
    balance_sign: BalanceSign
    total_paid: Decimal
    created_at: datetime

    @property
    def display_name(self) -> str:
        """Name shown on screens and receipts.

        Suppliers are shown by company name; clients as "last first".
        """
        if self.kind == AccountKind.SUPPLIER and self.company_name:
            return self.company_name.strip()
        parts = [self.last_name or "", self.first_name or ""]
        name = " ".join(p.strip() for p in parts if p and p.strip())
        return name or (self.company_name or "").strip()

    @property
    def code(self) -> str:
        """Printable account code, e.g. CL-0007 or CL-00012."""
        return f"{ACCOUNT_CODE_PREFIXES[self.kind]}-000{self.id}"


@dataclass(frozen=True)
class Transaction:
    """Ledger transaction domain entity.

    ``amount`` is always a positive magnitude; ``balance_after`` is the
    account's signed balance immediately after this transaction.
    ``debit`` and ``credit`` split the same movement into ledger columns:
    charges and debtor opening balances are debits, everything else credits.
    """

    id: int
    account_id: int
    type: TransactionType
    amount: Decimal
    date: date
    method: Optional[PaymentMethod]
    note: Optional[str]
    reference: Optional[str]
    balance_after: Decimal
    created_at: datetime
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")

    @property
    def signed_delta(self) -> Decimal:
        """Effect of this transaction on the signed balance.

        An opening balance is measured from zero, so its delta is the
        balance it sets.
        """
        if self.type in (TransactionType.PAYMENT, TransactionType.RETURN):
            return self.amount
        if self.type == TransactionType.INVOICE:
            return -self.amount
        return self.balance_after


@dataclass(frozen=True)
class PaymentRequest:
    """Payment form input."""

    amount: Optional[Decimal]
    date: Optional[date]
    method: Optional[PaymentMethod]
    note: Optional[str] = None
    reference: Optional[str] = None


@dataclass(frozen=True)
class PaymentRecord:
    """What the ledger reports back after persisting a payment."""

    id: int
    balance_after: Optional[Decimal] = None


@dataclass(frozen=True)
class PaymentResult:
    """Outcome of a recorded payment, ready for display and printing.

    ``previous_balance`` and ``new_balance`` are unsigned magnitudes. The new
    balance is a provisional projection computed locally; ``ledger_balance_after``
    is the signed value the ledger reported, if any.
    """

    transaction_id: Optional[int]
    account_id: int
    amount: Decimal
    date: date
    method: PaymentMethod
    note: Optional[str]
    reference: Optional[str]
    previous_balance: Decimal
    previous_balance_sign: BalanceSign
    new_balance: Decimal
    new_balance_sign: BalanceSign
    ledger_balance_after: Optional[Decimal]
    display_date: str


class SnapshotSource(str, Enum):
    """Where a balance snapshot came from."""

    LEDGER = "ledger"
    CACHED = "cached"


@dataclass(frozen=True)
class BalanceSnapshot:
    """Previous/new balance pair around one payment."""

    previous_balance: Decimal
    new_balance: Decimal
    new_balance_sign: BalanceSign
    transaction_id: Optional[int] = None
    source: SnapshotSource = SnapshotSource.CACHED


@dataclass(frozen=True)
class PaymentTarget:
    """Identifies a payment to locate in an account's ledger."""

    amount: Decimal
    date: date
    transaction_id: Optional[int] = None


@dataclass(frozen=True)
class HistoricalPayment:
    """A past payment and its reconciled balances, as a receipt source."""

    transaction: Transaction
    snapshot: BalanceSnapshot


@dataclass(frozen=True)
class PaymentHistory:
    """Filtered list of an account's payments."""

    account_id: int
    payments: tuple[Transaction, ...]
    total_amount: Decimal


@dataclass(frozen=True)
class Receipt:
    """Immutable print/preview snapshot of one payment."""

    account_code: str
    account_name: str
    account_kind: AccountKind
    paid_amount: Decimal
    method: Optional[PaymentMethod]
    previous_balance: Decimal
    new_balance: Decimal
    new_balance_sign: BalanceSign
    sequence_number: str
    formatted_date: str
    print_timestamp: datetime
    language: str
