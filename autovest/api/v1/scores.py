"""Scoring endpoints - health score, subscription health, investment decision, full analysis"""

import logging
import time
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from autovest.api.dependencies import get_now, get_request_id
from autovest.api.v1.schemas import (
    AnalysisRequest,
    AnalysisResponse,
    DetectRequest,
    DetectResponse,
    ExplanationsSchema,
    HealthScoreResponse,
    InvestmentDecisionResponse,
    InvestmentRequest,
    ProfileSchema,
    SpareChangeRequest,
    SpareChangeResponse,
    SubscriptionHealthResponse,
    SubscriptionSchema,
)
from autovest.config import settings
from autovest.domain.exceptions import InvalidInputError, InvalidProfileError
from autovest.domain.explanations import (
    generate_dashboard_summary,
    generate_health_score_explanation,
    generate_investment_explanation,
    generate_subscription_explanation,
    get_health_score_label,
    get_investment_mode_label,
)
from autovest.domain.investment import calculate_total_spare_change, determine_investment_mode
from autovest.domain.scoring import calculate_financial_health_score, calculate_subscription_health_score
from autovest.domain.subscriptions import detect_subscriptions
from autovest.infrastructure.observability.logging import log_analysis
from autovest.infrastructure.observability.metrics import (
    record_flagged_subscriptions,
    record_health_score,
    record_investment_decision,
)
from autovest.utils.stats import calculate_spare_change, round_half_up

router = APIRouter()


def _reject(error: Exception, request_id: str) -> HTTPException:
    logging.warning(f"Invalid scoring input: {error}", extra={"request_id": request_id})
    return HTTPException(status_code=422, detail=str(error))


@router.post("/health-score", response_model=HealthScoreResponse)
def score_financial_health(
    profile: ProfileSchema,
    request_id: str = Depends(get_request_id),
    now: datetime = Depends(get_now),
):
    """Financial Health Score (0-100) with weighted breakdown and risk profile"""
    start_time = time.time()
    try:
        score = calculate_financial_health_score(profile.to_domain(), now=now)
    except InvalidProfileError as e:
        raise _reject(e, request_id)

    record_health_score(score.total_score, score.risk_profile.value)
    log_analysis(
        request_id,
        "health_score",
        score.total_score,
        score.risk_profile.value,
        (time.time() - start_time) * 1000,
    )
    return HealthScoreResponse.model_validate(score)


@router.post("/subscriptions/detect", response_model=DetectResponse)
def detect(request_body: DetectRequest, now: datetime = Depends(get_now)):
    """Infer subscriptions from recurring-flagged transactions"""
    subscriptions = detect_subscriptions([t.to_domain() for t in request_body.transactions], now=now)
    return DetectResponse(subscriptions=[SubscriptionSchema.model_validate(s) for s in subscriptions])


@router.post("/subscriptions/health", response_model=SubscriptionHealthResponse)
def score_subscription_health(
    profile: ProfileSchema,
    request_id: str = Depends(get_request_id),
    now: datetime = Depends(get_now),
):
    """Per-subscription health, cancellation advice and monthly waste"""
    try:
        health = calculate_subscription_health_score(profile.to_domain(), now=now, currency=settings.currency_symbol)
    except InvalidProfileError as e:
        raise _reject(e, request_id)

    record_flagged_subscriptions(sum(1 for a in health.subscriptions if a.should_cancel))
    return SubscriptionHealthResponse.model_validate(health)


@router.post("/investment/decision", response_model=InvestmentDecisionResponse)
def decide_investment(
    request_body: InvestmentRequest,
    request_id: str = Depends(get_request_id),
    now: datetime = Depends(get_now),
):
    """Invest/hold decision and aggression multiplier for available spare change"""
    try:
        decision = determine_investment_mode(
            request_body.health_score,
            request_body.spare_change,
            request_body.profile.to_domain(),
            now=now,
        )
    except (InvalidProfileError, InvalidInputError) as e:
        raise _reject(e, request_id)

    record_investment_decision(decision.should_invest)
    return InvestmentDecisionResponse.model_validate(decision)


@router.post("/spare-change", response_model=SpareChangeResponse)
def spare_change(request_body: SpareChangeRequest, request_id: str = Depends(get_request_id)):
    """Round-up spare change per amount for the chosen cap"""
    try:
        per_amount = [calculate_spare_change(amount, request_body.round_up_cap) for amount in request_body.amounts]
    except InvalidInputError as e:
        raise _reject(e, request_id)

    return SpareChangeResponse(
        round_up_cap=request_body.round_up_cap,
        spare_change=per_amount,
        total=round_half_up(sum(per_amount, 0.0), 2),
    )


@router.post("/analysis", response_model=AnalysisResponse)
def analyze(
    request_body: AnalysisRequest,
    request_id: str = Depends(get_request_id),
    now: datetime = Depends(get_now),
):
    """
    Run every engine over one profile.

    Flow:
    1. Financial health score
    2. Subscription health
    3. Spare change (given, or derived from transactions with the round-up cap)
    4. Investment decision driven by the health score
    5. Explanation text for each result
    """
    start_time = time.time()
    currency = settings.currency_symbol

    try:
        profile = request_body.profile.to_domain()

        health = calculate_financial_health_score(profile, now=now)
        subscription_health = calculate_subscription_health_score(profile, now=now, currency=currency)

        available_spare_change = request_body.spare_change
        if available_spare_change is None:
            cap = request_body.round_up_cap or settings.default_round_up_cap
            available_spare_change = calculate_total_spare_change(profile.transactions, cap)

        investment = determine_investment_mode(health.total_score, available_spare_change, profile, now=now)

    except (InvalidProfileError, InvalidInputError) as e:
        raise _reject(e, request_id)

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_health_score(health.total_score, health.risk_profile.value)
    record_flagged_subscriptions(sum(1 for a in subscription_health.subscriptions if a.should_cancel))
    record_investment_decision(investment.should_invest)
    log_analysis(
        request_id,
        "analysis",
        health.total_score,
        health.risk_profile.value,
        duration_ms,
        should_invest=investment.should_invest,
    )

    return AnalysisResponse(
        health_score=HealthScoreResponse.model_validate(health),
        subscription_health=SubscriptionHealthResponse.model_validate(subscription_health),
        investment=InvestmentDecisionResponse.model_validate(investment),
        health_label=get_health_score_label(health.total_score),
        investment_mode=get_investment_mode_label(investment.risk_level),
        explanations=ExplanationsSchema(
            health=generate_health_score_explanation(health),
            subscriptions=generate_subscription_explanation(subscription_health, currency),
            investment=generate_investment_explanation(investment, health.total_score, currency),
            dashboard_summary=generate_dashboard_summary(health, subscription_health, investment, currency),
        ),
    )
