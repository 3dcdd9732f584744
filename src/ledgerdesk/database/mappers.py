"""Mapper functions to convert SQLAlchemy models into domain entities.

Keeping the conversion here means the balance logic never sees ORM rows.
"""

from decimal import Decimal

from ledgerdesk.domain import entities as domain
from ledgerdesk.database.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        kind=domain.AccountKind(orm_account.kind),
        last_name=orm_account.last_name,
        first_name=orm_account.first_name,
        company_name=orm_account.company_name,
        balance_magnitude=Decimal(orm_account.balance or 0),
        balance_sign=domain.BalanceSign(orm_account.balance_sign),
        total_paid=Decimal(orm_account.total_paid or 0),
        created_at=orm_account.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    method = orm_transaction.method
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        type=domain.TransactionType(orm_transaction.type),
        amount=Decimal(orm_transaction.amount),
        date=orm_transaction.date,
        method=domain.PaymentMethod(method) if method else None,
        note=orm_transaction.note,
        reference=orm_transaction.reference,
        balance_after=Decimal(orm_transaction.balance_after),
        created_at=orm_transaction.created_at,
        debit=Decimal(orm_transaction.debit or 0),
        credit=Decimal(orm_transaction.credit or 0),
    )
