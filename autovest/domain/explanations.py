"""Natural-language explanations for scores and investment decisions (formatting only)"""

import math
from typing import Optional

from autovest.domain.models import (
    FinancialBehaviorScore,
    InvestmentDecision,
    RiskProfile,
    SubscriptionHealthScore,
)
from autovest.utils.stats import round_half_up

MAX_FLAGGED_LISTED = 3


def get_health_score_label(score: float) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Poor"


def get_investment_mode_label(risk_level: RiskProfile) -> str:
    """Display name of the investment mode; moderate is shown as Balanced"""
    if risk_level == RiskProfile.MODERATE:
        return "Balanced"
    return risk_level.value.capitalize()


def generate_health_score_explanation(score: FinancialBehaviorScore) -> str:
    total = score.total_score
    breakdown = score.breakdown

    if total >= 80:
        explanation = f"🎯 Excellent financial health! Your score of {total}/100 indicates strong financial discipline and stability. "
    elif total >= 60:
        explanation = f"✅ Good financial position. Your score of {total}/100 shows solid fundamentals with room for optimization. "
    elif total >= 40:
        explanation = f"⚠️ Fair financial health. Your score of {total}/100 suggests some areas need attention. "
    else:
        explanation = f"🚨 Financial health needs improvement. Your score of {total}/100 indicates significant risk factors. "

    areas = [
        ("spending stability", breakdown.spending_stability.score),
        ("emergency buffer", breakdown.emergency_buffer.score),
        ("subscription management", breakdown.subscription_burden.score),
        ("market risk tolerance", breakdown.market_risk.score),
    ]
    # max/min keep the first area on ties
    strongest_name, strongest_score = max(areas, key=lambda area: area[1])
    weakest_name, weakest_score = min(areas, key=lambda area: area[1])

    explanation += f"Your strongest area is {strongest_name} ({strongest_score}/100). "
    if weakest_score < 60:
        explanation += f"Consider improving your {weakest_name} ({weakest_score}/100) for better overall health. "

    months = breakdown.emergency_buffer.months_of_expenses
    if months < 2:
        explanation += (
            f"\n\n💡 Priority: Build your emergency fund to at least 2 months of expenses "
            f"(currently {months:.1f} months)."
        )

    if breakdown.spending_stability.coefficient_of_variation > 0.4:
        explanation += (
            "\n\n📊 Insight: Your spending varies significantly month-to-month. "
            "Creating a budget could improve stability."
        )

    subscription_pct = breakdown.subscription_burden.percentage_of_income
    if subscription_pct > 15:
        explanation += (
            f"\n\n💳 Alert: Subscriptions consume {subscription_pct:.1f}% of your income. "
            "Review for unused services."
        )

    explanation += f"\n\nInvestment Profile: {score.risk_profile.value.capitalize()}"
    return explanation


def generate_subscription_explanation(health: SubscriptionHealthScore, currency: str = "₹") -> str:
    total = health.total_score

    if total >= 80:
        explanation = "✨ Healthy subscription portfolio! All your subscriptions appear to be actively used and well-managed. "
    elif total >= 60:
        explanation = "👍 Decent subscription health. Most subscriptions are justified, but some optimization possible. "
    elif total >= 40:
        explanation = "⚠️ Subscription leakage detected. Several subscriptions may not be providing value. "
    else:
        explanation = "🚨 High subscription waste! Multiple unused subscriptions are draining your finances. "

    at_risk = [a for a in health.subscriptions if a.should_cancel]
    if not at_risk:
        return explanation + f"All {len(health.subscriptions)} subscriptions are actively used and affordable."

    plural = "s" if len(at_risk) > 1 else ""
    explanation += f"\n\n{len(at_risk)} subscription{plural} flagged for review:\n"
    for analysis in at_risk[:MAX_FLAGGED_LISTED]:
        sub = analysis.subscription
        explanation += f"\n• {sub.merchant} ({currency}{sub.amount:g}/month) - {analysis.reasoning}"

    waste = health.total_monthly_waste
    if waste > 0:
        explanation += (
            f"\n\n💰 Potential savings: {currency}{waste:.2f}/month ({currency}{waste * 12:.2f}/year)"
        )
    return explanation


def generate_investment_explanation(
    decision: InvestmentDecision,
    health_score: float,
    currency: str = "₹",
) -> str:
    score_text = f"{health_score:g}"

    if not decision.should_invest:
        return (
            f"🛡️ Investment paused for safety. Your current financial health ({score_text}/100) "
            "suggests focusing on building emergency reserves before investing. "
            "\n\nOnce your emergency fund reaches 2+ months of expenses, we'll automatically resume investments."
        )

    risk_level = decision.risk_level
    if risk_level == RiskProfile.AGGRESSIVE:
        explanation = f"🚀 Aggressive investment mode active! Your strong financial health ({score_text}/100) allows for maximum investment potential. "
    elif risk_level == RiskProfile.MODERATE:
        explanation = f"⚖️ Balanced investment approach. Your good financial position ({score_text}/100) supports moderate investment activity. "
    elif risk_level == RiskProfile.CONSERVATIVE:
        explanation = f"🛡️ Conservative investment mode. Given your current health score ({score_text}/100), we're taking a cautious approach. "
    else:
        explanation = f"🐌 Minimal investment mode. Your financial health ({score_text}/100) requires careful, limited investing. "

    multiplier = decision.aggression_multiplier
    investment_rate = round_half_up(multiplier * 100)
    explanation += (
        f"\n\nCurrent transaction: Investing {currency}{decision.amount:.2f} "
        f"({investment_rate}% of {currency}{decision.spare_change:.2f} spare change)"
    )

    if multiplier > 0.8:
        explanation += "\n\n✨ Confidence boost applied! Your excellent financial discipline earned bonus investment allocation."
    elif multiplier < 0.5:
        explanation += "\n\n⚠️ Reduced allocation to protect your financial stability. Focus on improving health score for better returns."

    if health_score < 70:
        explanation += "\n\n📈 Growth potential: Improve your health score to unlock higher investment rates and better returns."

    return explanation


def generate_dashboard_summary(
    health: FinancialBehaviorScore,
    subscription_health: SubscriptionHealthScore,
    investment: InvestmentDecision,
    currency: str = "₹",
) -> str:
    if health.total_score >= 70 and subscription_health.total_score >= 70:
        summary = "🌟 Strong financial position! Your disciplined approach is paying off. "
    elif health.total_score >= 50:
        summary = "📊 Steady progress. You're on the right track with room for optimization. "
    else:
        summary = "🎯 Focus mode activated. Let's work on strengthening your financial foundation. "

    summary += f"Health score: {health.total_score}/100 ({health.risk_profile.value})"

    buffer = health.breakdown.emergency_buffer
    if buffer.score < 50:
        target_months = math.ceil(buffer.months_of_expenses + 1)
        summary += f"\n\nTop Priority: Build emergency fund to {target_months} months of expenses."
    elif subscription_health.total_monthly_waste > 50:
        summary += (
            f"\n\nQuick Win: Cancel unused subscriptions to save "
            f"{currency}{subscription_health.total_monthly_waste:.0f}/month."
        )
    elif investment.should_invest and investment.aggression_multiplier < 0.6:
        summary += "\n\nOpportunity: Improve stability to unlock higher investment rates."

    return summary


def generate_trend_text(current_score: float, previous_score: Optional[float] = None) -> str:
    if not previous_score:
        return "New metric"

    diff = current_score - previous_score
    if diff > 5:
        return f"↑ Up {diff:.0f} points"
    if diff < -5:
        return f"↓ Down {abs(diff):.0f} points"
    return "→ Stable"


def generate_confidence_explanation(confidence: float) -> str:
    if confidence >= 90:
        return "Very high confidence - strong data pattern"
    if confidence >= 70:
        return "High confidence - reliable prediction"
    if confidence >= 50:
        return "Moderate confidence - monitor closely"
    return "Low confidence - needs more data"
