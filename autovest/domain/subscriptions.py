"""Subscription detection from recurring transaction patterns"""

import re
from typing import Dict, List, Optional

from autovest.domain.models import DateLike, Frequency, Subscription, Transaction
from autovest.utils.date_utils import add_days, as_datetime, days_between, utc_now
from autovest.utils.stats import mean

# Nominal length of one billing period, used to project the next charge
PERIOD_DAYS = {
    Frequency.DAILY: 1,
    Frequency.WEEKLY: 7,
    Frequency.MONTHLY: 30,
    Frequency.YEARLY: 365,
}


def classify_frequency(avg_gap_days: float) -> Frequency:
    """
    Map the average gap between charges to a billing frequency.

    Gaps between 36 and 300 days have no band of their own and fall back
    to monthly.
    """
    if avg_gap_days <= 7:
        return Frequency.WEEKLY
    if avg_gap_days <= 35:
        return Frequency.MONTHLY
    if avg_gap_days > 300:
        return Frequency.YEARLY
    return Frequency.MONTHLY


def subscription_id_for(merchant: str) -> str:
    return "sub-" + re.sub(r"\s", "-", merchant.lower())


def detect_subscriptions(
    transactions: List[Transaction],
    now: Optional[DateLike] = None,
) -> List[Subscription]:
    """
    Group recurring-flagged transactions by merchant and infer subscriptions.

    Requirements:
    - Only transactions with is_recurring set are considered
    - Merchant match is exact and case-sensitive
    - At least 2 charges are needed to infer a pattern
    - detected_pattern = min(100, charges * 30), a saturating heuristic
      rather than a statistical confidence

    Args:
        transactions: Caller-owned history (never mutated)
        now: Evaluation time for recency; defaults to the naive UTC wall clock

    Returns:
        Subscriptions in first-seen merchant order
    """
    if now is None:
        now = utc_now()

    by_merchant: Dict[str, List[Transaction]] = {}
    for txn in transactions:
        if txn.is_recurring:
            by_merchant.setdefault(txn.merchant, []).append(txn)

    subscriptions = []
    for merchant, charges in by_merchant.items():
        if len(charges) < 2:
            continue

        avg_amount = mean([t.amount for t in charges])

        dates = sorted((t.date for t in charges), key=as_datetime)
        gaps = [days_between(prev, curr) for prev, curr in zip(dates, dates[1:])]
        frequency = classify_frequency(mean(gaps))

        last_charge = dates[-1]

        subscriptions.append(
            Subscription(
                subscription_id=subscription_id_for(merchant),
                merchant=merchant,
                amount=avg_amount,
                frequency=frequency,
                last_charge=last_charge,
                detected_pattern=min(100, len(charges) * 30),
                days_since_last_use=days_between(last_charge, now),
                estimated_next_charge=add_days(last_charge, PERIOD_DAYS[frequency]),
            )
        )

    return subscriptions
