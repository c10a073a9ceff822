"""Pytest fixtures for testing"""

import os

TEST_DATABASE_URL = "sqlite:///./test.db"
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)

import pytest
from datetime import datetime, timezone
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker, Session
from altscore_gateway.api.main import create_app
from altscore_gateway.api.dependencies import get_reference_time
from altscore_gateway.infrastructure.database.models import Base, BusinessAccount
from altscore_gateway.infrastructure.database.repositories import AccountRepository
from altscore_gateway.infrastructure.database.session import build_engine, get_db
from altscore_gateway.domain.models import Transaction


# Test database
engine = build_engine(TEST_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed "now" for every scoring request made through the test client
REFERENCE_TIME = datetime(2024, 7, 1, tzinfo=timezone.utc)


def build_even_ledger() -> list[Transaction]:
    """
    60 transactions, 10 per month from January to June 2024.

    Credits (14,000) and debits (10,000) alternate, so income is 1.4x
    expenses and the balance never goes negative.
    """
    transactions = []
    for month in range(1, 7):
        for i in range(10):
            is_credit = i % 2 == 0
            transactions.append(
                Transaction(
                    date=datetime(2024, month, 1 + 3 * i, 12, 0, tzinfo=timezone.utc),
                    type="credit" if is_credit else "debit",
                    amount=14_000 if is_credit else 10_000,
                    category="sales" if is_credit else "supplies",
                    balance=50_000,
                    description="Card sales" if is_credit else "Stock purchase",
                )
            )
    return transactions


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and pinned reference time"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_reference_time] = lambda: REFERENCE_TIME
    return TestClient(app)


@pytest.fixture
def even_ledger() -> list[Transaction]:
    return build_even_ledger()


@pytest.fixture
def established_account(db: Session, even_ledger: list[Transaction]) -> BusinessAccount:
    """Two-year-old retail account with a steady six-month ledger"""
    repo = AccountRepository(db)
    account = repo.create_account(
        name="Corner Bakery",
        account_number="ACC-000001",
        business_type="retail",
        account_age_months=24,
    )
    repo.add_transactions(account.id, even_ledger)
    db.commit()
    return account
