"""Domain models - immutable dataclasses representing scoring inputs and outputs"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class Grade(str, Enum):
    """Letter grade, best first"""

    A_PLUS = "A+"
    A = "A"
    B_PLUS = "B+"
    B = "B"
    C_PLUS = "C+"
    C = "C"
    D = "D"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class Transaction:
    """Ledger transaction supplied by the persistence layer"""

    date: datetime
    type: str  # "credit" or "debit"
    amount: float
    category: str
    balance: float  # account balance after the transaction, may be negative
    transaction_id: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class AccountProfile:
    """Business account; only account_age_months affects the score"""

    account_id: Optional[str] = None
    name: Optional[str] = None
    account_number: Optional[str] = None
    business_type: Optional[str] = None
    account_age_months: Optional[int] = None


@dataclass(frozen=True)
class ScoreBreakdown:
    """Component scores, each in [0, 100]"""

    transaction: int
    cash_flow: int
    stability: int
    behavior: int


@dataclass(frozen=True)
class CreditScoreResult:
    """Output of a single scoring run"""

    score: int
    grade: Grade
    risk_level: RiskLevel
    breakdown: ScoreBreakdown
    recommendations: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ComponentWeights:
    transaction: float
    cash_flow: float
    stability: float
    behavior: float

    def __post_init__(self) -> None:
        if not math.isclose(math.fsum(self.as_tuple()), 1.0):
            raise ValueError(f"Component weights must sum to 1.0, got {self.as_tuple()}")

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.transaction, self.cash_flow, self.stability, self.behavior)


@dataclass(frozen=True)
class ScoringConfig:
    """Fixed scoring policy: weights, window, scale and classification breakpoints"""

    weights: ComponentWeights = field(
        default_factory=lambda: ComponentWeights(
            transaction=0.30,
            cash_flow=0.35,
            stability=0.20,
            behavior=0.15,
        )
    )
    window_months: int = 6
    min_score: int = 300
    max_score: int = 850
    # (threshold, grade), checked in order, first match wins
    grade_breakpoints: Tuple[Tuple[int, Grade], ...] = (
        (800, Grade.A_PLUS),
        (750, Grade.A),
        (700, Grade.B_PLUS),
        (650, Grade.B),
        (600, Grade.C_PLUS),
        (550, Grade.C),
    )
    risk_breakpoints: Tuple[Tuple[int, RiskLevel], ...] = (
        (700, RiskLevel.LOW),
        (600, RiskLevel.MEDIUM),
    )
    max_recommendations: int = 5
    recommendation_threshold: int = 70
    established_account_months: int = 12


SCORING_CONFIG = ScoringConfig()
