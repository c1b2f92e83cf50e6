"""Prometheus metrics for monitoring score distribution, investment outcomes, and subscription leakage"""

from prometheus_client import Counter, Histogram

# Scoring metrics
analysis_counter = Counter(
    "autovest_analysis_total",
    "Total financial health scores computed",
    ["risk_profile"],  # aggressive | moderate | conservative | minimal
)

health_score_histogram = Histogram(
    "autovest_health_score",
    "Distribution of financial health scores",
    buckets=[20, 40, 60, 80, 100],
)

investment_decision_counter = Counter(
    "autovest_investment_decision_total",
    "Investment decisions made",
    ["outcome"],  # invest | hold
)

subscriptions_flagged_counter = Counter(
    "autovest_subscriptions_flagged_total",
    "Subscriptions recommended for cancellation",
)

# Prediction API metrics
prediction_failures_counter = Counter(
    "autovest_prediction_failures_total",
    "Failed prediction API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_health_score(total_score: int, risk_profile: str) -> None:
    analysis_counter.labels(risk_profile=risk_profile).inc()
    health_score_histogram.observe(total_score)


def record_investment_decision(should_invest: bool) -> None:
    outcome = "invest" if should_invest else "hold"
    investment_decision_counter.labels(outcome=outcome).inc()


def record_flagged_subscriptions(count: int) -> None:
    if count > 0:
        subscriptions_flagged_counter.inc(count)
