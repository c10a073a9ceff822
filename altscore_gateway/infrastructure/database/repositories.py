"""Data access layer for accounts, ledger transactions and credit scores"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional
from sqlalchemy.orm import Session
from altscore_gateway.infrastructure.database.models import BusinessAccount, LedgerTransaction, CreditScoreRecord
from altscore_gateway.domain.models import AccountProfile, CreditScoreResult, Transaction


class AccountRepository:
    """Repository for business accounts and their ledgers"""

    def __init__(self, db: Session):
        self.db = db

    def create_account(
        self,
        name: str,
        account_number: str,
        business_type: Optional[str] = None,
        account_age_months: Optional[int] = None,
    ) -> BusinessAccount:
        db_account = BusinessAccount(
            name=name,
            account_number=account_number,
            business_type=business_type,
            account_age_months=account_age_months,
        )
        self.db.add(db_account)
        self.db.flush()
        return db_account

    def add_transactions(self, account_id: str, transactions: Iterable[Transaction]) -> None:
        """Append domain transactions to an account's ledger"""
        for txn in transactions:
            self.db.add(
                LedgerTransaction(
                    account_id=account_id,
                    date=txn.date,
                    type=txn.type,
                    amount=txn.amount,
                    category=txn.category,
                    balance=txn.balance,
                    description=txn.description,
                )
            )
        self.db.flush()

    def get_account(self, account_id: str) -> Optional[BusinessAccount]:
        """Fetch account; its transactions load in ascending date order"""
        return (
            self.db.query(BusinessAccount)
            .filter(BusinessAccount.id == account_id)
            .first()
        )

    @staticmethod
    def to_profile(account: BusinessAccount) -> AccountProfile:
        return AccountProfile(
            account_id=account.id,
            name=account.name,
            account_number=account.account_number,
            business_type=account.business_type,
            account_age_months=account.account_age_months,
        )

    @staticmethod
    def to_transactions(account: BusinessAccount) -> List[Transaction]:
        return [
            Transaction(
                date=txn.date,
                type=txn.type,
                amount=txn.amount,
                category=txn.category,
                balance=txn.balance,
                transaction_id=txn.id,
                description=txn.description,
            )
            for txn in account.transactions
        ]


class CreditScoreRepository:
    """Repository for computed credit scores"""

    def __init__(self, db: Session):
        self.db = db

    def create_score(
        self,
        account_id: str,
        result: CreditScoreResult,
        version: str,
        calculated_at: datetime,
    ) -> CreditScoreRecord:
        """Persist a scoring result"""
        db_score = CreditScoreRecord(
            account_id=account_id,
            score=result.score,
            grade=result.grade.value,
            risk_level=result.risk_level.value,
            transaction_score=result.breakdown.transaction,
            cash_flow_score=result.breakdown.cash_flow,
            stability_score=result.breakdown.stability,
            behavior_score=result.breakdown.behavior,
            recommendations=list(result.recommendations),
            version=version,
            calculated_at=calculated_at,
        )
        self.db.add(db_score)
        self.db.flush()  # Get ID without committing
        return db_score

    def get_history(self, account_id: str, limit: int = 10) -> List[CreditScoreRecord]:
        """Fetch most recent scores for an account, newest first"""
        return (
            self.db.query(CreditScoreRecord)
            .filter(CreditScoreRecord.account_id == account_id)
            .order_by(CreditScoreRecord.calculated_at.desc())
            .limit(limit)
            .all()
        )

    def get_eligible(self, min_score: int) -> List[CreditScoreRecord]:
        """Latest score per account, kept when it reaches min_score, best first"""
        records = (
            self.db.query(CreditScoreRecord)
            .order_by(CreditScoreRecord.calculated_at.desc())
            .all()
        )

        latest: Dict[str, CreditScoreRecord] = {}
        for record in records:
            latest.setdefault(record.account_id, record)

        eligible = [r for r in latest.values() if r.score >= min_score]
        return sorted(eligible, key=lambda r: r.score, reverse=True)
