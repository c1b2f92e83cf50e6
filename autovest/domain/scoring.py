"""Scoring engines - financial health and subscription health"""

import logging
import math
import warnings
from typing import List, Optional

from autovest.domain.exceptions import EmptyInputWarning, InvalidProfileError
from autovest.domain.models import (
    DateLike,
    EmergencyBuffer,
    FinancialBehaviorScore,
    MarketRisk,
    RiskProfile,
    ScoreBreakdown,
    SpendingStability,
    SubscriptionAnalysis,
    SubscriptionBurden,
    SubscriptionHealthScore,
    UserFinancialProfile,
)
from autovest.domain.subscriptions import detect_subscriptions
from autovest.utils.stats import (
    coefficient_of_variation,
    mean,
    monthly_spending,
    normalize_score,
    round_half_up,
)

logger = logging.getLogger(__name__)

SPENDING_STABILITY_WEIGHT = 0.30
EMERGENCY_BUFFER_WEIGHT = 0.35
SUBSCRIPTION_BURDEN_WEIGHT = 0.20
MARKET_RISK_WEIGHT = 0.15

# Subscriptions idle longer than this are treated as unused
INACTIVITY_DAYS = 60


def validate_profile(profile: UserFinancialProfile) -> None:
    """
    Reject profiles that would divide by zero or leak NaN/Infinity into scores.

    Raises:
        InvalidProfileError: Non-positive income/expenses or non-finite fields
    """
    fields = {
        "monthly_income": profile.monthly_income,
        "monthly_expenses": profile.monthly_expenses,
        "liquid_savings": profile.liquid_savings,
        "market_volatility": profile.market_volatility,
    }
    for name, value in fields.items():
        if value is None or not math.isfinite(value):
            raise InvalidProfileError(f"{name} must be a finite number, got {value}")

    if profile.monthly_income <= 0:
        raise InvalidProfileError(f"monthly_income must be positive, got {profile.monthly_income}")
    if profile.monthly_expenses <= 0:
        raise InvalidProfileError(f"monthly_expenses must be positive, got {profile.monthly_expenses}")
    if any(not math.isfinite(t.amount) for t in profile.transactions):
        raise InvalidProfileError("Transaction amounts must be finite")


def get_risk_profile(score: float) -> RiskProfile:
    """
    Map a 0-100 score to the shared risk bands.

    Lower bounds are inclusive: 80 is aggressive, 79.9 is moderate.
    """
    if score >= 80:
        return RiskProfile.AGGRESSIVE
    elif score >= 60:
        return RiskProfile.MODERATE
    elif score >= 40:
        return RiskProfile.CONSERVATIVE
    else:
        return RiskProfile.MINIMAL


def calculate_financial_health_score(
    profile: UserFinancialProfile,
    now: Optional[DateLike] = None,
) -> FinancialBehaviorScore:
    """
    Calculate Financial Health Score (0-100).

    Formula: FHS = (SS × 0.30) + (EB × 0.35) + (SB × 0.20) + (MR × 0.15)

    - SS Spending stability: 100 - CV(monthly totals) × 100
    - EB Emergency buffer: months of expenses saved × 25 (4 months = 100)
    - SB Subscription burden: 100 - (subscription cost % of income) × 2
    - MR Market risk: 100 - volatility × 500

    Sub-scores are rounded before weighting, so the total matches the
    displayed breakdown. Fewer than 2 months of history gives CV 0 and a
    perfect stability score.

    Raises:
        InvalidProfileError: See validate_profile
    """
    validate_profile(profile)
    transactions = profile.transactions
    if not transactions:
        warnings.warn("Profile has no transactions; using neutral defaults", EmptyInputWarning, stacklevel=2)
        logger.warning("Scoring profile with no transactions", extra={"step": "financial_health"})

    # 1. Spending stability (30%)
    cv = coefficient_of_variation(monthly_spending(transactions))
    stability_score = round_half_up(normalize_score(100 - cv * 100))

    # 2. Emergency buffer (35%)
    months_of_expenses = profile.liquid_savings / profile.monthly_expenses
    buffer_score = round_half_up(normalize_score(months_of_expenses * 25))

    # 3. Subscription burden (20%)
    subscriptions = detect_subscriptions(transactions, now=now)
    total_subscription_cost = sum((s.amount for s in subscriptions), 0.0)
    subscription_percentage = (total_subscription_cost / profile.monthly_income) * 100
    burden_score = round_half_up(normalize_score(100 - subscription_percentage * 2))

    # 4. Market risk (15%)
    volatility = profile.market_volatility
    market_score = round_half_up(normalize_score(100 - volatility * 500))

    weighted = (
        stability_score * SPENDING_STABILITY_WEIGHT
        + buffer_score * EMERGENCY_BUFFER_WEIGHT
        + burden_score * SUBSCRIPTION_BURDEN_WEIGHT
        + market_score * MARKET_RISK_WEIGHT
    )
    total_score = round_half_up(normalize_score(weighted))

    recommendations: List[str] = []
    if stability_score < 60:
        recommendations.append("Consider creating a monthly budget to stabilize spending patterns")
    if buffer_score < 50:
        recommendations.append("Build emergency fund to at least 2 months of expenses")
    if burden_score < 70:
        recommendations.append("Review and cancel unused subscriptions to reduce financial burden")
    if market_score < 60:
        recommendations.append("Consider more conservative investments during high volatility")

    breakdown = ScoreBreakdown(
        spending_stability=SpendingStability(
            score=stability_score,
            weight=SPENDING_STABILITY_WEIGHT,
            coefficient_of_variation=cv,
            interpretation=_stability_interpretation(cv),
        ),
        emergency_buffer=EmergencyBuffer(
            score=buffer_score,
            weight=EMERGENCY_BUFFER_WEIGHT,
            months_of_expenses=months_of_expenses,
            liquid_savings=profile.liquid_savings,
            interpretation=_buffer_interpretation(months_of_expenses),
        ),
        subscription_burden=SubscriptionBurden(
            score=burden_score,
            weight=SUBSCRIPTION_BURDEN_WEIGHT,
            percentage_of_income=subscription_percentage,
            total_subscription_cost=total_subscription_cost,
            interpretation=_burden_interpretation(subscription_percentage),
        ),
        market_risk=MarketRisk(
            score=market_score,
            weight=MARKET_RISK_WEIGHT,
            volatility_index=volatility,
            interpretation=_market_interpretation(volatility),
        ),
    )

    return FinancialBehaviorScore(
        total_score=total_score,
        breakdown=breakdown,
        risk_profile=get_risk_profile(total_score),
        recommendations=recommendations,
    )


def _stability_interpretation(cv: float) -> str:
    if cv < 0.2:
        return "Very stable"
    elif cv < 0.4:
        return "Moderately stable"
    return "Unstable"


def _buffer_interpretation(months_of_expenses: float) -> str:
    if months_of_expenses >= 3:
        return "Excellent"
    elif months_of_expenses >= 2:
        return "Good"
    return "Needs improvement"


def _burden_interpretation(percentage_of_income: float) -> str:
    if percentage_of_income < 10:
        return "Healthy"
    elif percentage_of_income < 20:
        return "Moderate"
    return "High burden"


def _market_interpretation(volatility: float) -> str:
    if volatility < 0.15:
        return "Low risk"
    elif volatility < 0.25:
        return "Moderate risk"
    return "High risk"


def affordability_factor(amount: float) -> int:
    """Step heuristic: cheap subscriptions are easy to justify"""
    if amount < 20:
        return 100
    elif amount < 50:
        return 70
    return 50


def calculate_subscription_health_score(
    profile: UserFinancialProfile,
    now: Optional[DateLike] = None,
    currency: str = "₹",
) -> SubscriptionHealthScore:
    """
    Score each detected subscription and estimate monthly leakage.

    Per subscription:
        health = usage × 0.40 + cost burden × 0.35 + affordability × 0.25

    A subscription is flagged for cancellation when health < 40 OR it has
    been idle for more than 60 days; either condition alone is enough.
    With no subscriptions detected the portfolio scores a perfect 100.
    """
    validate_profile(profile)
    if not profile.transactions:
        warnings.warn("Profile has no transactions; using neutral defaults", EmptyInputWarning, stacklevel=2)

    subscriptions = detect_subscriptions(profile.transactions, now=now)

    analyses = []
    for sub in subscriptions:
        days_since_use = sub.days_since_last_use

        usage_confidence = 0 if days_since_use > INACTIVITY_DAYS else normalize_score(100 - days_since_use)

        cost_percentage = (sub.amount / profile.monthly_income) * 100
        cost_burden = normalize_score(100 - cost_percentage * 5)

        health_score = round_half_up(
            normalize_score(
                usage_confidence * 0.40
                + cost_burden * 0.35
                + affordability_factor(sub.amount) * 0.25
            )
        )

        should_cancel = health_score < 40 or days_since_use > INACTIVITY_DAYS
        cancel_confidence = round_half_up(normalize_score(100 - health_score)) if should_cancel else 0

        if days_since_use > INACTIVITY_DAYS:
            reasoning = f"No activity detected in {days_since_use} days - likely unused"
        elif cost_percentage > 5:
            reasoning = f"High cost burden ({cost_percentage:.1f}% of income)"
        elif health_score > 70:
            reasoning = "Actively used and affordable"
        else:
            reasoning = "Monitor usage patterns"

        analyses.append(
            SubscriptionAnalysis(
                subscription=sub,
                health_score=health_score,
                usage_confidence=round_half_up(usage_confidence),
                cost_burden=round_half_up(cost_burden),
                should_cancel=should_cancel,
                cancel_confidence=cancel_confidence,
                reasoning=reasoning,
                potential_savings=sub.amount if should_cancel else 0.0,
            )
        )

    total_score = round_half_up(mean([a.health_score for a in analyses])) if analyses else 100
    total_monthly_waste = sum((a.potential_savings for a in analyses if a.should_cancel), 0.0)

    recommendations: List[str] = []
    if total_monthly_waste > 0:
        recommendations.append(f"Cancel unused subscriptions to save {currency}{total_monthly_waste:.2f}/month")
    if any(a.cost_burden < 50 for a in analyses):
        recommendations.append("Consider cheaper alternatives for high-cost subscriptions")
    if total_score < 60:
        recommendations.append("Review all subscriptions for usage and value")

    return SubscriptionHealthScore(
        total_score=total_score,
        subscriptions=analyses,
        total_monthly_waste=total_monthly_waste,
        recommendations=recommendations,
    )
