"""Balance reconciliation engine.

Signed balances follow one convention throughout: negative means the account
owes money (debtor), zero or positive means it is settled or in credit.
Accounts and receipts store the magnitude and the sign separately.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Sequence

from ledgerdesk.domain.entities import (
    Account,
    BalanceSign,
    BalanceSnapshot,
    PaymentTarget,
    SnapshotSource,
    Transaction,
    TransactionType,
)
from ledgerdesk.domain.errors import InvalidAmountError, ValidationError

logger = logging.getLogger(__name__)

# A fully settled account (signed balance exactly zero) is labelled credit,
# never debtor.
ZERO_BALANCE_SIGN = BalanceSign.CREDIT

# Ledger amounts are stored at two decimal places.
AMOUNT_EPSILON = Decimal("0.005")


def sign_for(signed: Decimal) -> BalanceSign:
    """Classify a signed balance as credit or debit."""
    if signed == 0:
        return ZERO_BALANCE_SIGN
    return BalanceSign.CREDIT if signed > 0 else BalanceSign.DEBIT


def compute_signed_balance(account: Account) -> Decimal:
    """Return the account's balance as a signed value."""
    magnitude = Decimal(account.balance_magnitude)
    if account.balance_sign == BalanceSign.DEBIT:
        return -magnitude
    return magnitude


def require_positive_amount(amount) -> Decimal:
    """Convert a payment or charge amount to Decimal and check it is usable.

    Raises:
        ValidationError: If amount is missing or not a number
        InvalidAmountError: If amount is NaN, infinite, zero or negative
    """
    if amount is None:
        raise ValidationError("amount", "Amount is required")
    try:
        value = Decimal(amount)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("amount", f"Amount is not a number (got {amount!r})") from None
    if not value.is_finite() or value <= 0:
        raise InvalidAmountError(amount)
    return value


def apply_payment(current_signed: Decimal, paid_amount: Decimal) -> Decimal:
    """Apply a payment to a signed balance.

    A payment always reduces debt or increases credit.

    Raises:
        InvalidAmountError: If paid_amount is not a positive finite number
    """
    return current_signed + require_positive_amount(paid_amount)


def derive_magnitude_and_sign(signed: Decimal) -> tuple[Decimal, BalanceSign]:
    """Split a signed balance into (magnitude, sign)."""
    return abs(signed), sign_for(signed)


def estimate_around_payment(current_signed: Decimal, amount: Decimal) -> BalanceSnapshot:
    """Estimate previous/new balance for a payment already applied to current_signed.

    Used when the ledger cannot locate the payment and the only known value
    is the account's present balance.
    """
    new_magnitude, new_sign = derive_magnitude_and_sign(current_signed)
    return BalanceSnapshot(
        previous_balance=abs(current_signed - amount),
        new_balance=new_magnitude,
        new_balance_sign=new_sign,
        source=SnapshotSource.CACHED,
    )


def snapshot_from_transaction(transaction: Transaction) -> BalanceSnapshot:
    """Recover the balances around a persisted payment from its balance_after."""
    balance_after = Decimal(transaction.balance_after)
    new_magnitude, new_sign = derive_magnitude_and_sign(balance_after)
    return BalanceSnapshot(
        previous_balance=abs(balance_after - transaction.amount),
        new_balance=new_magnitude,
        new_balance_sign=new_sign,
        transaction_id=transaction.id,
        source=SnapshotSource.LEDGER,
    )


def find_payment_candidates(
    transactions: Iterable[Transaction], target: PaymentTarget
) -> list[Transaction]:
    """Return payments matching the target's amount (within epsilon) and date."""
    return [
        txn
        for txn in transactions
        if txn.type == TransactionType.PAYMENT
        and abs(Decimal(txn.amount) - Decimal(target.amount)) <= AMOUNT_EPSILON
        and txn.date == target.date
    ]


def reconcile_from_ledger(
    transactions: Sequence[Transaction],
    target: PaymentTarget,
    fallback: BalanceSnapshot,
) -> BalanceSnapshot:
    """Locate a payment in the ledger and recover the balances around it.

    An exact transaction id match wins. Without one, the payment is searched by
    amount and date; a single candidate is used, while zero or several
    candidates count as a miss. A miss returns ``fallback`` and never raises,
    so a receipt can always be printed.

    Args:
        transactions: The account's ledger entries
        target: Payment to locate
        fallback: Balances to use when the ledger lookup misses

    Returns:
        BalanceSnapshot with source LEDGER on a hit, CACHED on a miss
    """
    if target.transaction_id is not None:
        for txn in transactions:
            if txn.id == target.transaction_id:
                if txn.type != TransactionType.PAYMENT:
                    logger.warning(
                        "Transaction %s is a %s, not a payment; using cached balances",
                        txn.id,
                        txn.type.value,
                    )
                    return _as_cached(fallback)
                return snapshot_from_transaction(txn)

    candidates = find_payment_candidates(transactions, target)
    if len(candidates) == 1:
        return snapshot_from_transaction(candidates[0])

    if candidates:
        logger.warning(
            "%d payments of %s on %s match; cannot tell which one, using cached balances",
            len(candidates),
            target.amount,
            target.date,
        )
    else:
        logger.debug(
            "No ledger payment of %s on %s; using cached balances", target.amount, target.date
        )
    return _as_cached(fallback)


def _as_cached(snapshot: BalanceSnapshot) -> BalanceSnapshot:
    if snapshot.source == SnapshotSource.CACHED:
        return snapshot
    return BalanceSnapshot(
        previous_balance=snapshot.previous_balance,
        new_balance=snapshot.new_balance,
        new_balance_sign=snapshot.new_balance_sign,
        transaction_id=snapshot.transaction_id,
        source=SnapshotSource.CACHED,
    )


def replay_balance(transactions: Iterable[Transaction]) -> Decimal:
    """Signed balance obtained by applying every transaction from zero, in order."""
    running = Decimal("0")
    for txn in transactions:
        if txn.type == TransactionType.INITIAL_BALANCE:
            running = Decimal(txn.balance_after)
        else:
            running += txn.signed_delta
    return running


def verify_chain(transactions: Iterable[Transaction]) -> list[int]:
    """Check the running-balance invariant over transactions in persisted order.

    Each entry's balance_after must equal the previous entry's balance_after
    plus its own signed delta. An opening balance restarts the chain and must
    agree with its own amount.

    Returns:
        IDs of transactions that break the chain (empty when consistent)
    """
    broken: list[int] = []
    previous: Optional[Decimal] = None
    for txn in transactions:
        balance_after = Decimal(txn.balance_after)
        if txn.type == TransactionType.INITIAL_BALANCE:
            if abs(balance_after) != Decimal(txn.amount):
                broken.append(txn.id)
        else:
            expected = (previous or Decimal("0")) + txn.signed_delta
            if abs(expected - balance_after) > AMOUNT_EPSILON:
                broken.append(txn.id)
        previous = balance_after
    return broken
