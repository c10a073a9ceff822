"""GET /v1/eligible-accounts - Accounts whose latest score clears a threshold"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from altscore_gateway.api.v1.schemas import AccountSummary, EligibleAccount, EligibleAccountsResponse
from altscore_gateway.config import settings
from altscore_gateway.infrastructure.database.session import get_db
from altscore_gateway.infrastructure.database.repositories import CreditScoreRepository

router = APIRouter()


@router.get("/eligible-accounts", response_model=EligibleAccountsResponse)
def get_eligible_accounts(
    min_score: int = Query(settings.eligible_min_score, ge=300, le=850, description="Minimum latest score"),
    db: Session = Depends(get_db),
):
    score_repo = CreditScoreRepository(db)
    records = score_repo.get_eligible(min_score)

    eligible = [
        EligibleAccount(
            account=AccountSummary(
                id=r.account.id,
                name=r.account.name,
                account_number=r.account.account_number,
                business_type=r.account.business_type,
            ),
            score=r.score,
            grade=r.grade,
            risk_level=r.risk_level,
            last_calculated=r.calculated_at,
        )
        for r in records
    ]

    return EligibleAccountsResponse(count=len(eligible), min_score=min_score, eligible_accounts=eligible)
