"""Payment recording domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerdesk.database.base import Ledger
from ledgerdesk.domain.balance import (
    apply_payment,
    compute_signed_balance,
    derive_magnitude_and_sign,
    estimate_around_payment,
    reconcile_from_ledger,
    require_positive_amount,
)
from ledgerdesk.domain.entities import (
    Account,
    BalanceSnapshot,
    HistoricalPayment,
    PaymentHistory,
    PaymentMethod,
    PaymentRecord,
    PaymentRequest,
    PaymentResult,
    PaymentTarget,
    SnapshotSource,
    Transaction,
    TransactionType,
)
from ledgerdesk.domain.errors import (
    NotFoundError,
    PersistenceError,
    SubmissionInProgressError,
    ValidationError,
    ledger_write_failed,
    transaction_not_found,
)
from ledgerdesk.domain.events import AccountChanged, EventBus
from ledgerdesk.domain.receipt import format_receipt_date

logger = logging.getLogger(__name__)


class PaymentService:
    """Service for recording payments against client and supplier accounts."""

    def __init__(self, ledger: Ledger, events: Optional[EventBus] = None, language: str = "fr"):
        """Initialize payment service.

        Args:
            ledger: Ledger instance that persists transactions
            events: Event bus receiving AccountChanged notifications
            language: Language used for display dates
        """
        self.ledger = ledger
        self.events = events if events is not None else EventBus()
        self.language = language
        self._in_flight = False

    def validate(self, account: Optional[Account], request: PaymentRequest) -> None:
        """Check a payment request before anything is sent to the ledger.

        Raises:
            ValidationError: Tagged with the first offending field
        """
        if account is None or account.id is None:
            raise ValidationError("account", "Account is required")
        require_positive_amount(request.amount)
        if request.date is None:
            raise ValidationError("date", "Date is required")
        if not isinstance(request.method, PaymentMethod):
            raise ValidationError("method", "Payment method is required")

    def submit_payment(self, account: Account, request: PaymentRequest) -> PaymentResult:
        """Validate and record a payment.

        Identical requests are recorded as separate ledger entries; duplicate
        detection is left to the ledger.

        Args:
            account: Account snapshot as currently displayed
            request: Payment form input

        Returns:
            PaymentResult with the ledger transaction id and projected balances

        Raises:
            ValidationError: If the request is invalid
            SubmissionInProgressError: If another submission has not finished
            PersistenceError: If the ledger could not store the payment
        """
        self.validate(account, request)
        if self._in_flight:
            raise SubmissionInProgressError("A payment is already being recorded")

        self._in_flight = True
        try:
            response = self.ledger.create_payment(
                account_id=account.id,
                amount=Decimal(request.amount),
                date=request.date,
                method=request.method,
                note=request.note,
                reference=request.reference,
            )
            if not response.success:
                logger.error(
                    "Ledger rejected payment of %s for account %s: %s",
                    request.amount,
                    account.id,
                    response.error,
                )
                raise PersistenceError(ledger_write_failed(response.error))

            record: Optional[PaymentRecord] = response.data
            current_signed = compute_signed_balance(account)
            new_signed = apply_payment(current_signed, Decimal(request.amount))
            new_magnitude, new_sign = derive_magnitude_and_sign(new_signed)

            result = PaymentResult(
                transaction_id=record.id if record is not None else None,
                account_id=account.id,
                amount=Decimal(request.amount),
                date=request.date,
                method=request.method,
                note=request.note,
                reference=request.reference,
                previous_balance=account.balance_magnitude,
                previous_balance_sign=account.balance_sign,
                new_balance=new_magnitude,
                new_balance_sign=new_sign,
                ledger_balance_after=record.balance_after if record is not None else None,
                display_date=format_receipt_date(request.date, self.language),
            )
        finally:
            self._in_flight = False

        logger.info(
            "Recorded payment %s of %s for account %s (new balance %s %s)",
            result.transaction_id,
            result.amount,
            account.id,
            result.new_balance,
            result.new_balance_sign.value,
        )
        self.events.publish(AccountChanged(account_id=account.id))
        return result

    def get_transactions(self, account_id: int) -> list[Transaction]:
        """Get an account's ledger entries in persisted order.

        Raises:
            PersistenceError: If the ledger read fails
        """
        response = self.ledger.get_transactions_for_account(account_id)
        if not response.success:
            raise PersistenceError(response.error or "Could not read ledger")
        return list(response.data or [])

    def confirm_against_ledger(self, result: PaymentResult) -> bool:
        """Check a provisional payment result against the ledger's record.

        Returns:
            True if the ledger confirms the projected new balance
        """
        fallback = BalanceSnapshot(
            previous_balance=result.previous_balance,
            new_balance=result.new_balance,
            new_balance_sign=result.new_balance_sign,
            transaction_id=result.transaction_id,
        )
        target = PaymentTarget(
            amount=result.amount, date=result.date, transaction_id=result.transaction_id
        )
        snapshot = reconcile_from_ledger(self.get_transactions(result.account_id), target, fallback)
        if snapshot.source != SnapshotSource.LEDGER:
            logger.warning(
                "Payment %s not found in ledger for account %s",
                result.transaction_id,
                result.account_id,
            )
            return False

        converged = (
            snapshot.new_balance == result.new_balance
            and snapshot.new_balance_sign == result.new_balance_sign
        )
        if not converged:
            logger.warning(
                "Balance drift on account %s: projected %s %s, ledger %s %s",
                result.account_id,
                result.new_balance,
                result.new_balance_sign.value,
                snapshot.new_balance,
                snapshot.new_balance_sign.value,
            )
        return converged

    def historical_payment(self, account: Account, transaction_id: int) -> HistoricalPayment:
        """Reconcile a past payment for reprinting its receipt.

        If the ledger entry cannot be matched, balances are estimated from the
        account's current balance instead.

        Raises:
            NotFoundError: If the account has no payment with this ID
        """
        transactions = self.get_transactions(account.id)
        txn = next((t for t in transactions if t.id == transaction_id), None)
        if txn is None or txn.type != TransactionType.PAYMENT:
            raise NotFoundError(transaction_not_found(transaction_id, account.id))

        fallback = estimate_around_payment(compute_signed_balance(account), txn.amount)
        target = PaymentTarget(amount=txn.amount, date=txn.date, transaction_id=txn.id)
        snapshot = reconcile_from_ledger(transactions, target, fallback)
        return HistoricalPayment(transaction=txn, snapshot=snapshot)

    def payment_history(
        self,
        account_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        search: Optional[str] = None,
    ) -> PaymentHistory:
        """List an account's payments, newest first.

        Args:
            account_id: Account ID
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
            search: Optional case-insensitive text matched against amount,
                note, reference and method

        Returns:
            PaymentHistory with matching payments and their total
        """
        payments = [
            txn for txn in self.get_transactions(account_id) if txn.type == TransactionType.PAYMENT
        ]
        if start_date is not None:
            payments = [txn for txn in payments if txn.date >= start_date]
        if end_date is not None:
            payments = [txn for txn in payments if txn.date <= end_date]
        if search:
            needle = search.strip().lower()
            payments = [txn for txn in payments if _matches(txn, needle)]

        payments.sort(key=lambda txn: (txn.date, txn.id), reverse=True)
        total = sum((txn.amount for txn in payments), Decimal("0"))
        return PaymentHistory(account_id=account_id, payments=tuple(payments), total_amount=total)


def _matches(txn: Transaction, needle: str) -> bool:
    haystack = [
        f"{txn.amount:.2f}",
        txn.note or "",
        txn.reference or "",
        txn.method.value if txn.method else "",
    ]
    return any(needle in field.lower() for field in haystack)
