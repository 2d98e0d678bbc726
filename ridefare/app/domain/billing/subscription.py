"""
Driver subscription access.

Decides whether a driver may use the app and how close the subscription
is to its end date. Days are counted up (a subscription ending in five
hours has 1 day left) and go negative once end_date has passed.
"""

import math
from datetime import datetime
from typing import Iterable

from ridefare.app.domain.billing.balance import align_timezones
from ridefare.app.models.subscriptions import (
    DriverSubscription, SubscriptionStatus, SubscriptionState, SubscriptionSummary
)

EXPIRING_SOON_DAYS = 3

_SECONDS_PER_DAY = 24 * 60 * 60


def subscription_days_remaining(end_date: datetime, now: datetime) -> int:
    end_date, now = align_timezones(end_date, now)
    return math.ceil((end_date - now).total_seconds() / _SECONDS_PER_DAY)


def has_active_access(subscription: DriverSubscription) -> bool:
    """Active subscriptions and pending renewals keep access; expired or blocked ones do not."""
    return subscription.status.grants_access


def is_expired(subscription: DriverSubscription, now: datetime) -> bool:
    return (
        subscription.status is SubscriptionStatus.EXPIRED
        or subscription_days_remaining(subscription.end_date, now) < 0
    )


def is_expiring_soon(subscription: DriverSubscription, now: datetime) -> bool:
    """Active and ending within EXPIRING_SOON_DAYS, the last day included."""
    if subscription.status is not SubscriptionStatus.ACTIVE:
        return False
    return 0 <= subscription_days_remaining(subscription.end_date, now) <= EXPIRING_SOON_DAYS


def subscription_state(subscription: DriverSubscription, now: datetime) -> SubscriptionState:
    if subscription.status is SubscriptionStatus.BLOCKED:
        return SubscriptionState.BLOCKED
    if is_expired(subscription, now):
        return SubscriptionState.EXPIRED
    if subscription_days_remaining(subscription.end_date, now) <= EXPIRING_SOON_DAYS:
        return SubscriptionState.EXPIRING
    return SubscriptionState.ACTIVE


def summarize_subscriptions(subscriptions: Iterable[DriverSubscription], now: datetime) -> SubscriptionSummary:
    """Count subscriptions per display state for the admin dashboard."""
    counts = {state: 0 for state in SubscriptionState}
    total = 0
    for subscription in subscriptions:
        counts[subscription_state(subscription, now)] += 1
        total += 1
    return SubscriptionSummary(
        total=total,
        active=counts[SubscriptionState.ACTIVE],
        expiring=counts[SubscriptionState.EXPIRING],
        expired=counts[SubscriptionState.EXPIRED],
        blocked=counts[SubscriptionState.BLOCKED],
    )
