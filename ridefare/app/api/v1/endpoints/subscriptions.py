"""
Driver Subscription API Endpoints.

Access checks for a driver's subscription and the admin summary.
"""

from datetime import datetime, timezone
from fastapi import APIRouter

from ridefare.app.domain.billing.subscription import (
    subscription_days_remaining,
    has_active_access,
    is_expiring_soon,
    is_expired,
    subscription_state,
    summarize_subscriptions,
)
from ridefare.app.models.subscriptions import SubscriptionSummary
from ridefare.app.schemas.billing import (
    SubscriptionStatusRequest, SubscriptionStatusResponse, SubscriptionSummaryRequest
)

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.post("/status", response_model=SubscriptionStatusResponse)
async def subscription_status(request: SubscriptionStatusRequest):
    """
    Whether the driver keeps access, and how close the subscription is to ending.
    """
    subscription = request.subscription
    now = request.now or datetime.now(timezone.utc)
    return SubscriptionStatusResponse(
        state=subscription_state(subscription, now),
        days_remaining=subscription_days_remaining(subscription.end_date, now),
        has_active_access=has_active_access(subscription),
        expiring_soon=is_expiring_soon(subscription, now),
        expired=is_expired(subscription, now),
    )


@router.post("/summary", response_model=SubscriptionSummary)
async def subscription_summary(request: SubscriptionSummaryRequest):
    return summarize_subscriptions(request.subscriptions, request.now or datetime.now(timezone.utc))
