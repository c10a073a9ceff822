"""GET /v1/score/{account_id}/history - Fetch an account's score history"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from altscore_gateway.api.v1.schemas import BreakdownSchema, HistoryResponse, HistoryItem
from altscore_gateway.api.dependencies import valid_account_id
from altscore_gateway.config import settings
from altscore_gateway.infrastructure.database.session import get_db
from altscore_gateway.infrastructure.database.repositories import CreditScoreRepository

router = APIRouter()


@router.get("/score/{account_id}/history", response_model=HistoryResponse)
def get_score_history(
    account_id: str = Depends(valid_account_id),
    db: Session = Depends(get_db),
):
    """
    Retrieve recent credit scores for an account.

    Returns:
        Up to history_limit stored scores, newest first
    """
    score_repo = CreditScoreRepository(db)
    records = score_repo.get_history(account_id, limit=settings.history_limit)

    history_items = [
        HistoryItem(
            score_id=r.id,
            score=r.score,
            grade=r.grade,
            risk_level=r.risk_level,
            breakdown=BreakdownSchema(
                transaction=r.transaction_score,
                cash_flow=r.cash_flow_score,
                stability=r.stability_score,
                behavior=r.behavior_score,
            ),
            recommendations=list(r.recommendations or []),
            version=r.version,
            calculated_at=r.calculated_at,
        )
        for r in records
    ]

    return HistoryResponse(account_id=account_id, history=history_items)
