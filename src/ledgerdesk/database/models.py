"""SQLAlchemy models for the ledgerdesk database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Client or supplier account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    kind = Column(String, nullable=False, default="client")
    last_name = Column(String, nullable=False)
    first_name = Column(String, nullable=True)
    company_name = Column(String, nullable=True)
    balance = Column(Numeric(12, 2), nullable=False, default=0)
    balance_sign = Column(String, nullable=False, default="credit")
    total_paid = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    transactions = relationship(
        "Transaction", back_populates="account", order_by="Transaction.id"
    )


class Transaction(Base):
    """Ledger transaction model. Rows are only ever inserted."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    type = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    debit = Column(Numeric(12, 2), nullable=False, default=0)
    credit = Column(Numeric(12, 2), nullable=False, default=0)
    balance_after = Column(Numeric(12, 2), nullable=False, default=0)
    method = Column(String, nullable=True)
    reference = Column(String, nullable=True)
    note = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
