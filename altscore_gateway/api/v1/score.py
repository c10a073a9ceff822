"""POST /v1/score/{account_id} - compute and store an account's credit score"""

import time
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from altscore_gateway.api.v1.schemas import AccountSummary, BreakdownSchema, CreditScoreSchema, ScoreResponse
from altscore_gateway.api.dependencies import get_reference_time, get_request_id, valid_account_id
from altscore_gateway.config import settings
from altscore_gateway.infrastructure.database.session import get_db
from altscore_gateway.infrastructure.database.repositories import AccountRepository, CreditScoreRepository
from altscore_gateway.domain.scoring import compute_credit_score
from altscore_gateway.domain.exceptions import AccountNotFoundError, InsufficientDataError, InvalidInputError
from altscore_gateway.infrastructure.observability.metrics import record_score, insufficient_history_counter
from altscore_gateway.infrastructure.observability.logging import log_score

router = APIRouter()


@router.post("/score/{account_id}", response_model=ScoreResponse)
def create_score(
    request: Request,
    account_id: str = Depends(valid_account_id),
    db: Session = Depends(get_db),
    reference_time: datetime = Depends(get_reference_time),
):
    """
    Compute a credit score from the account's transaction ledger.

    Flow:
    1. Load account and its transactions (ascending by date)
    2. Reject accounts below the minimum transaction count
    3. Run the scoring engine anchored at reference_time
    4. Persist the result and return it
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        account_repo = AccountRepository(db)
        account = account_repo.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(f"Account {account_id} not found")

        transactions = account_repo.to_transactions(account)
        if len(transactions) < settings.min_transaction_count:
            raise InsufficientDataError(
                f"Minimum {settings.min_transaction_count} transactions required for scoring, "
                f"found {len(transactions)}"
            )

        profile = account_repo.to_profile(account)
        result = compute_credit_score(profile, transactions, reference_time)

        score_repo = CreditScoreRepository(db)
        record = score_repo.create_score(
            account_id=account.id,
            result=result,
            version=settings.score_version,
            calculated_at=reference_time,
        )
        db.commit()

        duration_ms = (time.time() - start_time) * 1000
        record_score(result.score, result.grade.value, result.risk_level.value)
        log_score(request_id, account.id, result.score, result.grade.value, result.risk_level.value, duration_ms)

        return ScoreResponse(
            account=AccountSummary(
                id=account.id,
                name=account.name,
                account_number=account.account_number,
                business_type=account.business_type,
            ),
            credit_score=CreditScoreSchema(
                score=record.score,
                grade=record.grade,
                risk_level=record.risk_level,
                calculated_at=record.calculated_at,
            ),
            breakdown=BreakdownSchema(
                transaction=record.transaction_score,
                cash_flow=record.cash_flow_score,
                stability=record.stability_score,
                behavior=record.behavior_score,
            ),
            recommendations=list(record.recommendations),
        )

    except AccountNotFoundError as e:
        db.rollback()
        logging.warning(f"Account not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="Account not found")

    except InsufficientDataError as e:
        db.rollback()
        insufficient_history_counter.inc()
        logging.warning(f"Insufficient data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except InvalidInputError as e:
        db.rollback()
        logging.error(f"Invalid scoring input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
