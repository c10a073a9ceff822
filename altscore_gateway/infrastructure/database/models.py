"""SQLAlchemy ORM models for accounts, their ledger and computed scores"""

import secrets
from sqlalchemy import Column, String, Float, DateTime, Integer, ForeignKey, Text, JSON
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


def generate_id() -> str:
    """24 hex character identifier"""
    return secrets.token_hex(12)


class BusinessAccount(Base):
    """Small-business account being scored"""

    __tablename__ = "business_account"

    id = Column(String(24), primary_key=True, default=generate_id)
    name = Column(Text, nullable=False)
    account_number = Column(Text, nullable=False, unique=True)
    business_type = Column(Text, nullable=True)
    account_age_months = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    transactions = relationship(
        "LedgerTransaction",
        back_populates="account",
        cascade="all, delete-orphan",
        order_by="LedgerTransaction.date",
    )
    credit_scores = relationship("CreditScoreRecord", back_populates="account", cascade="all, delete-orphan")


class LedgerTransaction(Base):
    """Single ledger entry for an account"""

    __tablename__ = "ledger_transaction"

    id = Column(String(24), primary_key=True, default=generate_id)
    account_id = Column(String(24), ForeignKey("business_account.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    type = Column(Text, nullable=False)  # credit | debit
    amount = Column(Float, nullable=False)
    category = Column(Text, nullable=False)
    balance = Column(Float, nullable=False)
    description = Column(Text, nullable=True)

    account = relationship("BusinessAccount", back_populates="transactions")


class CreditScoreRecord(Base):
    """Persisted result of one scoring run"""

    __tablename__ = "credit_score"

    id = Column(String(24), primary_key=True, default=generate_id)
    account_id = Column(String(24), ForeignKey("business_account.id", ondelete="CASCADE"), nullable=False, index=True)
    score = Column(Integer, nullable=False, index=True)
    grade = Column(Text, nullable=False)
    risk_level = Column(Text, nullable=False)
    transaction_score = Column(Integer, nullable=False)
    cash_flow_score = Column(Integer, nullable=False)
    stability_score = Column(Integer, nullable=False)
    behavior_score = Column(Integer, nullable=False)
    recommendations = Column(JSON, nullable=False, default=list)
    version = Column(Text, nullable=False)
    calculated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    account = relationship("BusinessAccount", back_populates="credit_scores")
