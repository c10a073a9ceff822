"""Alternative credit scoring engine - core business logic for small-business accounts"""

import math
import statistics
from datetime import datetime
from typing import Callable, Dict, List, Sequence

from altscore_gateway.domain.models import (
    AccountProfile,
    CreditScoreResult,
    Grade,
    RiskLevel,
    ScoreBreakdown,
    Transaction,
    SCORING_CONFIG,
)
from altscore_gateway.domain.validation import (
    validate_profile,
    validate_reference_time,
    validate_transactions,
)
from altscore_gateway.utils.date_utils import month_key, subtract_months, to_utc

SAVINGS_CATEGORIES = frozenset({"savings", "investment"})
LOAN_REPAYMENT_CATEGORY = "loan_repayment"

TRANSACTION_TIPS = (
    "Increase transaction frequency - aim for 30+ transactions monthly",
    "Diversify income sources across different categories",
)
CASH_FLOW_TIPS = (
    "Improve profit margins - aim for 30%+ income over expenses",
    "Maintain positive account balance consistently",
)
STABILITY_TIPS = (
    "Build longer account history - consistency over 12+ months helps",
    "Maintain regular monthly transaction patterns",
)
BEHAVIOR_TIPS = (
    "Avoid overdrafts and negative balances",
    "Start saving 10-15% of monthly income",
)
ACCOUNT_AGE_TIP = "Continue building account history - scores improve after 12 months"


def _clamp(value: float, low: int = 0, high: int = 100) -> int:
    return int(max(low, min(value, high)))


def _account_age(profile: AccountProfile) -> int:
    return profile.account_age_months or 0


def filter_window(
    transactions: Sequence[Transaction],
    reference_time: datetime,
    months: int = SCORING_CONFIG.window_months,
) -> List[Transaction]:
    """Keep transactions dated on or after reference_time minus `months` calendar months"""
    cutoff = subtract_months(to_utc(reference_time), months)
    return [t for t in transactions if to_utc(t.date) >= cutoff]


def group_by_month(transactions: Sequence[Transaction]) -> Dict[str, List[Transaction]]:
    """Bucket transactions by "YYYY-MM", preserving order within each month"""
    monthly: Dict[str, List[Transaction]] = {}
    for txn in transactions:
        monthly.setdefault(month_key(txn.date), []).append(txn)
    return monthly


def calculate_volume_growth(transactions: Sequence[Transaction]) -> float:
    """
    Relative change in volume between the first and second half of the history.

    The split is by index at n // 2 (at least one element in the first half),
    so the input must be in chronological order.
    """
    half = len(transactions) // 2 or 1
    first_volume = sum(t.amount for t in transactions[:half])
    last_volume = sum(t.amount for t in transactions[half:])
    return (last_volume - first_volume) / max(first_volume, 1)


def count_negative_balance_months(transactions: Sequence[Transaction]) -> int:
    monthly = group_by_month(transactions)
    return sum(1 for txns in monthly.values() if any(t.balance < 0 for t in txns))


def calculate_consistency(monthly: Dict[str, List[Transaction]]) -> float:
    """1 - coefficient of variation of monthly transaction counts; 0 with no months"""
    counts = [len(txns) for txns in monthly.values()]
    if not counts:
        return 0.0
    mean = statistics.fmean(counts)
    return 1 - statistics.pstdev(counts) / (mean or 1)


def is_late_payment(transaction: Transaction) -> bool:
    """
    Late-payment policy hook.

    Ledger transactions carry no due date yet, so nothing is ever late.
    Swap in a real policy through score_behavior(is_late=...) once they do.
    """
    return False


def score_transaction_activity(transactions: Sequence[Transaction]) -> int:
    """
    Transaction activity score (0-100).

    - Average monthly count: >=50 +40, >=30 +30, >=15 +20, >=5 +10
    - Volume growth: >0.2 +30, >0.1 +20, >0 +10
    - Distinct categories: >=5 +30, >=3 +20, >=2 +10
    """
    score = 0

    avg_per_month = len(transactions) / SCORING_CONFIG.window_months
    if avg_per_month >= 50:
        score += 40
    elif avg_per_month >= 30:
        score += 30
    elif avg_per_month >= 15:
        score += 20
    elif avg_per_month >= 5:
        score += 10

    volume_growth = calculate_volume_growth(transactions)
    if volume_growth > 0.2:
        score += 30
    elif volume_growth > 0.1:
        score += 20
    elif volume_growth > 0:
        score += 10

    categories = len({t.category for t in transactions})
    if categories >= 5:
        score += 30
    elif categories >= 3:
        score += 20
    elif categories >= 2:
        score += 10

    return _clamp(score)


def score_cash_flow(transactions: Sequence[Transaction]) -> int:
    """
    Cash flow score (0-100).

    - Income/expense ratio: >=1.5 +50, >=1.3 +40, >=1.15 +30, >=1.0 +20
    - Months with a negative balance: 0 +30, 1 +15
    - Average monthly income: >=500k +20, >=200k +15, >=100k +10, >=50k +5
    """
    score = 0

    total_income = sum(t.amount for t in transactions if t.type == "credit")
    total_expenses = sum(t.amount for t in transactions if t.type == "debit")

    ratio = total_income / max(total_expenses, 1)
    if ratio >= 1.5:
        score += 50
    elif ratio >= 1.3:
        score += 40
    elif ratio >= 1.15:
        score += 30
    elif ratio >= 1.0:
        score += 20

    negative_months = count_negative_balance_months(transactions)
    if negative_months == 0:
        score += 30
    elif negative_months == 1:
        score += 15

    avg_monthly_income = total_income / SCORING_CONFIG.window_months
    if avg_monthly_income >= 500_000:
        score += 20
    elif avg_monthly_income >= 200_000:
        score += 15
    elif avg_monthly_income >= 100_000:
        score += 10
    elif avg_monthly_income >= 50_000:
        score += 5

    return _clamp(score)


def score_stability(profile: AccountProfile, transactions: Sequence[Transaction]) -> int:
    """
    Stability score (0-100).

    - Account age: >=24 months +40, >=12 +30, >=6 +20, >=3 +10
    - Monthly consistency: >=0.8 +60, >=0.6 +40, >=0.4 +20
    """
    score = 0

    age = _account_age(profile)
    if age >= 24:
        score += 40
    elif age >= 12:
        score += 30
    elif age >= 6:
        score += 20
    elif age >= 3:
        score += 10

    consistency = calculate_consistency(group_by_month(transactions))
    if consistency >= 0.8:
        score += 60
    elif consistency >= 0.6:
        score += 40
    elif consistency >= 0.4:
        score += 20

    return _clamp(score)


def score_behavior(
    transactions: Sequence[Transaction],
    is_late: Callable[[Transaction], bool] = is_late_payment,
) -> int:
    """
    Behavior score (0-100), starting from 100.

    - Overdrafts (balance < 0): >5 -30, >2 -15, >0 -5
    - Late loan repayments: >3 -40, >1 -20, >0 -10
    - Savings/investment transactions: >=10 +30, >=5 +15
    """
    score = 100

    overdrafts = sum(1 for t in transactions if t.balance < 0)
    if overdrafts > 5:
        score -= 30
    elif overdrafts > 2:
        score -= 15
    elif overdrafts > 0:
        score -= 5

    late_payments = sum(
        1 for t in transactions
        if t.category == LOAN_REPAYMENT_CATEGORY and is_late(t)
    )
    if late_payments > 3:
        score -= 40
    elif late_payments > 1:
        score -= 20
    elif late_payments > 0:
        score -= 10

    savings = sum(1 for t in transactions if t.category in SAVINGS_CATEGORIES)
    if savings >= 10:
        score += 30
    elif savings >= 5:
        score += 15

    return _clamp(score)


def calculate_raw_score(breakdown: ScoreBreakdown) -> float:
    """Weighted combination of the component scores on a 0-100 scale"""
    weights = SCORING_CONFIG.weights
    return (
        breakdown.transaction * weights.transaction
        + breakdown.cash_flow * weights.cash_flow
        + breakdown.stability * weights.stability
        + breakdown.behavior * weights.behavior
    )


def scale_score(raw: float) -> int:
    """Map a 0-100 raw score onto 300-850, rounding halves up"""
    low, high = SCORING_CONFIG.min_score, SCORING_CONFIG.max_score
    scaled = low + (raw / 100) * (high - low)
    return int(min(max(math.floor(scaled + 0.5), low), high))


def calculate_grade(score: int) -> Grade:
    for threshold, grade in SCORING_CONFIG.grade_breakpoints:
        if score >= threshold:
            return grade
    return Grade.D


def classify_risk(score: int) -> RiskLevel:
    for threshold, risk_level in SCORING_CONFIG.risk_breakpoints:
        if score >= threshold:
            return risk_level
    return RiskLevel.HIGH


def generate_recommendations(breakdown: ScoreBreakdown, profile: AccountProfile) -> List[str]:
    """
    Improvement tips in fixed precedence order, capped at max_recommendations.

    Rules are evaluated transaction, cash flow, stability, behavior, then
    account age. Tips from later rules are dropped once the cap is reached.
    """
    threshold = SCORING_CONFIG.recommendation_threshold
    tips: List[str] = []

    if breakdown.transaction < threshold:
        tips.extend(TRANSACTION_TIPS)
    if breakdown.cash_flow < threshold:
        tips.extend(CASH_FLOW_TIPS)
    if breakdown.stability < threshold:
        tips.extend(STABILITY_TIPS)
    if breakdown.behavior < threshold:
        tips.extend(BEHAVIOR_TIPS)
    if _account_age(profile) < SCORING_CONFIG.established_account_months:
        tips.append(ACCOUNT_AGE_TIP)

    return tips[: SCORING_CONFIG.max_recommendations]


def compute_credit_score(
    profile: AccountProfile,
    transactions: Sequence[Transaction],
    reference_time: datetime,
) -> CreditScoreResult:
    """
    Main entry point: score an account from its transaction history.

    Transactions are expected in ascending date order; they are stably
    re-sorted anyway since volume growth depends on it. No minimum history
    is enforced here - an empty window yields the degenerate floor scores.

    Raises:
        InvalidInputError: if profile, transactions or reference_time break the contract
    """
    validate_profile(profile)
    validate_transactions(transactions)
    validate_reference_time(reference_time)

    ordered = sorted(transactions, key=lambda t: to_utc(t.date))
    window = filter_window(ordered, reference_time)

    breakdown = ScoreBreakdown(
        transaction=score_transaction_activity(window),
        cash_flow=score_cash_flow(window),
        stability=score_stability(profile, window),
        behavior=score_behavior(window),
    )

    score = scale_score(calculate_raw_score(breakdown))

    return CreditScoreResult(
        score=score,
        grade=calculate_grade(score),
        risk_level=classify_risk(score),
        breakdown=breakdown,
        recommendations=tuple(generate_recommendations(breakdown, profile)),
    )
