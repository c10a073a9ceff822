"""Prometheus metrics for monitoring score distribution and request latency"""

from prometheus_client import Counter, Histogram

# Scoring metrics
score_grade_counter = Counter(
    "altscore_scores_total",
    "Credit scores computed, by grade",
    ["grade"],  # A+ | A | B+ | B | C+ | C | D
)

score_risk_counter = Counter(
    "altscore_risk_level_total",
    "Credit scores computed, by risk tier",
    ["risk_level"],  # Low | Medium | High
)

score_value_histogram = Histogram(
    "altscore_score_value",
    "Distribution of final credit scores",
    buckets=[300, 550, 600, 650, 700, 750, 800, 850],
)

insufficient_history_counter = Counter(
    "altscore_insufficient_history_total",
    "Scoring requests rejected for too few transactions",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_score(score: int, grade: str, risk_level: str) -> None:
    """Record score metrics for monitoring grade and risk distribution"""
    score_grade_counter.labels(grade=grade).inc()
    score_risk_counter.labels(risk_level=risk_level).inc()
    score_value_histogram.observe(score)
