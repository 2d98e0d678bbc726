"""
Driver Balance API Endpoints.

Balances are derived from the snapshot sent in the request; nothing is
stored. Callers re-read rides and requests before a withdrawal.
"""

from datetime import datetime, timezone
from fastapi import APIRouter

from ridefare.app.core.config import settings
from ridefare.app.core.currency import format_brl
from ridefare.app.domain.billing.balance import (
    compute_balance_from_records,
    can_request_withdrawal,
    compute_fee_request_eligibility,
    fee_urgency,
    deadline_progress,
    WithdrawalCheck,
)
from ridefare.app.schemas.billing import (
    BalanceRequest, BalanceResponse,
    WithdrawalCheckRequest,
    FeeEligibilityRequest, FeeEligibilityResponse,
)

router = APIRouter(prefix="/balances", tags=["Driver - Balances"])


@router.post("", response_model=BalanceResponse)
async def compute_driver_balance(snapshot: BalanceRequest):
    """
    Compute total, reserved and available balance.
    """
    balance = compute_balance_from_records(
        snapshot.completed_ride_amounts,
        payouts=snapshot.payouts,
        fees=snapshot.fees,
    )
    return BalanceResponse(balance=balance, formatted_available=format_brl(balance.available))


@router.post("/withdrawal-check", response_model=WithdrawalCheck)
async def check_withdrawal(request: WithdrawalCheckRequest):
    """
    Check whether a withdrawal may be requested.

    A refusal is a normal result with a reason, not an error.
    """
    return can_request_withdrawal(
        available=request.available,
        requested_amount=request.requested_amount,
        fee_type=request.fee_type,
        fee_value=request.fee_value,
    )


@router.post("/fee-eligibility", response_model=FeeEligibilityResponse)
async def check_fee_eligibility(request: FeeEligibilityRequest):
    """
    Check whether a driver may still request to pay the mandatory fee.
    """
    deadline_days = request.deadline_days
    if deadline_days is None:
        deadline_days = settings.fee_request_deadline_days
    now = request.now or datetime.now(timezone.utc)

    eligibility = compute_fee_request_eligibility(
        registration_date=request.registration_date,
        now=now,
        has_active_fee_request=request.has_active_fee_request,
        deadline_days=deadline_days,
    )
    return FeeEligibilityResponse(
        can_request=eligibility.can_request,
        days_remaining=eligibility.days_remaining,
        expired=eligibility.expired,
        reason=eligibility.reason.value if eligibility.reason else None,
        urgency=fee_urgency(eligibility.days_remaining),
        progress_percent=deadline_progress(eligibility.days_remaining, deadline_days),
    )
