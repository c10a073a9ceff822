"""Pydantic schemas for API responses"""

from datetime import datetime
from pydantic import BaseModel, Field
from typing import List, Optional


class AccountSummary(BaseModel):
    """Display fields of the scored account"""

    id: str
    name: str
    account_number: str
    business_type: Optional[str] = None


class CreditScoreSchema(BaseModel):
    score: int = Field(..., ge=300, le=850)
    grade: str
    risk_level: str
    calculated_at: datetime


class BreakdownSchema(BaseModel):
    """Component scores, each 0-100"""

    transaction: int = Field(..., ge=0, le=100)
    cash_flow: int = Field(..., ge=0, le=100)
    stability: int = Field(..., ge=0, le=100)
    behavior: int = Field(..., ge=0, le=100)


class ScoreResponse(BaseModel):
    """Response for POST /v1/score/{account_id}"""

    account: AccountSummary
    credit_score: CreditScoreSchema
    breakdown: BreakdownSchema
    recommendations: List[str] = Field(default_factory=list, max_length=5)


class HistoryItem(BaseModel):
    """Single stored score in history"""

    score_id: str
    score: int
    grade: str
    risk_level: str
    breakdown: BreakdownSchema
    recommendations: List[str]
    version: str
    calculated_at: datetime


class HistoryResponse(BaseModel):
    """Response for GET /v1/score/{account_id}/history"""

    account_id: str
    history: List[HistoryItem]


class EligibleAccount(BaseModel):
    account: AccountSummary
    score: int
    grade: str
    risk_level: str
    last_calculated: datetime


class EligibleAccountsResponse(BaseModel):
    """Response for GET /v1/eligible-accounts"""

    count: int
    min_score: int
    eligible_accounts: List[EligibleAccount]
