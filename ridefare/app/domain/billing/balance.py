"""
Balance Reconciliation.

Derives a driver's financial position from a snapshot of completed rides
and payout/fee requests, and decides withdrawal and fee-request
eligibility. Nothing is cached: callers pass lists read at the same
point in time and re-read before any monetary decision.
"""

import enum
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Tuple, Union
from pydantic import BaseModel

from ridefare.app.core.currency import Number, to_decimal, to_money
from ridefare.app.domain.billing.service_fee import compute_service_fee
from ridefare.app.models.pricing_enums import ServiceFeeType
from ridefare.app.models.request_enums import PayoutStatus, FeeStatus
from ridefare.app.models.requests import DriverBalance, PayoutRequest, FeePayment

MINIMUM_NET_WITHDRAWAL = Decimal("10.00")
DEFAULT_FEE_DEADLINE_DAYS = 2

_ZERO = Decimal("0")


class WithdrawalDenialReason(str, enum.Enum):
    NON_POSITIVE_AMOUNT = "NON_POSITIVE_AMOUNT"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    BELOW_MINIMUM_NET = "BELOW_MINIMUM_NET"


class FeeRequestDenialReason(str, enum.Enum):
    ACTIVE_FEE_REQUEST = "ACTIVE_FEE_REQUEST"
    DEADLINE_EXPIRED = "DEADLINE_EXPIRED"


class UrgencyLevel(str, enum.Enum):
    CRITICAL = "critical"  # last day or past the deadline
    WARNING = "warning"  # one day left
    NORMAL = "normal"


class WithdrawalCheck(BaseModel):
    allowed: bool
    requested_amount: Decimal
    charged_amount: Decimal
    net_amount: Decimal
    reason: Optional[WithdrawalDenialReason] = None


class FeeRequestEligibility(BaseModel):
    can_request: bool
    days_remaining: int  # floored at 0 for display
    expired: bool
    reason: Optional[FeeRequestDenialReason] = None


def _sum(amounts: Iterable[Number]) -> Decimal:
    # Negative items count as 0 so they cannot cancel real amounts
    return sum((max(to_decimal(amount), _ZERO) for amount in amounts), _ZERO)


def compute_balance(
    completed_ride_amounts: Iterable[Number],
    paid_payout_amounts: Iterable[Number],
    pending_or_approved_amounts: Iterable[Number],
) -> DriverBalance:
    total_earnings = max(_ZERO, _sum(completed_ride_amounts) - _sum(paid_payout_amounts))
    reserved = max(_ZERO, _sum(pending_or_approved_amounts))
    available = max(_ZERO, total_earnings - reserved)
    return DriverBalance(
        total_earnings=to_money(total_earnings),
        reserved=to_money(reserved),
        available=to_money(available),
    )


def compute_balance_from_records(
    completed_ride_amounts: Iterable[Number],
    payouts: Iterable[PayoutRequest] = (),
    fees: Iterable[FeePayment] = (),
) -> DriverBalance:
    """
    Balance from raw records, filtered by their current status.

    Paid payouts and paid fees have left the balance. Pending/approved
    payouts and pending fees are reserved. Every other status is released.
    """
    paid = []
    reserved = []
    for payout in payouts:
        if payout.status is PayoutStatus.PAID:
            paid.append(payout.amount)
        elif payout.status.is_reserving:
            reserved.append(payout.amount)
    for fee in fees:
        if fee.status is FeeStatus.PAID:
            paid.append(fee.amount)
        elif fee.status.is_reserving:
            reserved.append(fee.amount)
    return compute_balance(completed_ride_amounts, paid, reserved)


def can_request_withdrawal(
    available: Number,
    requested_amount: Number,
    fee_type: ServiceFeeType,
    fee_value: Number,
    minimum_net: Number = MINIMUM_NET_WITHDRAWAL,
) -> WithdrawalCheck:
    """
    Check a withdrawal request against the balance and the minimum net.

    Insufficient balance is reported before a too-small net amount.
    """
    requested = to_decimal(requested_amount)
    breakdown = compute_service_fee(fee_type, fee_value, requested)

    reason = None
    if requested <= _ZERO:
        reason = WithdrawalDenialReason.NON_POSITIVE_AMOUNT
    elif requested > to_decimal(available):
        reason = WithdrawalDenialReason.INSUFFICIENT_BALANCE
    elif breakdown.net_amount < to_decimal(minimum_net):
        reason = WithdrawalDenialReason.BELOW_MINIMUM_NET

    return WithdrawalCheck(
        allowed=reason is None,
        requested_amount=to_money(max(requested, _ZERO)),
        charged_amount=breakdown.charged_amount,
        net_amount=breakdown.net_amount,
        reason=reason,
    )


def align_timezones(start: datetime, end: datetime) -> Tuple[datetime, datetime]:
    """Give a naive datetime the timezone of the other side, when only one has one."""
    if start.tzinfo is None and end.tzinfo is not None:
        start = start.replace(tzinfo=end.tzinfo)
    elif end.tzinfo is None and start.tzinfo is not None:
        end = end.replace(tzinfo=start.tzinfo)
    return start, end


def whole_days_between(start: Union[date, datetime], end: Union[date, datetime]) -> int:
    """
    Whole days elapsed from start to end, floored.

    Dates and datetimes may be mixed, and so may naive and aware datetimes.
    """
    if isinstance(start, datetime) != isinstance(end, datetime):
        start = start.date() if isinstance(start, datetime) else start
        end = end.date() if isinstance(end, datetime) else end
    elif isinstance(start, datetime):
        start, end = align_timezones(start, end)
    return (end - start).days


def compute_fee_request_eligibility(
    registration_date: Union[date, datetime],
    now: Union[date, datetime],
    has_active_fee_request: bool,
    deadline_days: int = DEFAULT_FEE_DEADLINE_DAYS,
) -> FeeRequestEligibility:
    """
    Whether a driver may still request to pay the mandatory fee.

    The deadline day itself counts: 0 days remaining is still allowed.
    """
    remaining = deadline_days - whole_days_between(registration_date, now)
    expired = remaining < 0

    reason = None
    if has_active_fee_request:
        reason = FeeRequestDenialReason.ACTIVE_FEE_REQUEST
    elif expired:
        reason = FeeRequestDenialReason.DEADLINE_EXPIRED

    return FeeRequestEligibility(
        can_request=reason is None,
        days_remaining=max(0, remaining),
        expired=expired,
        reason=reason,
    )


def fee_urgency(days_remaining: int) -> UrgencyLevel:
    if days_remaining <= 0:
        return UrgencyLevel.CRITICAL
    if days_remaining == 1:
        return UrgencyLevel.WARNING
    return UrgencyLevel.NORMAL


def deadline_progress(days_remaining: int, deadline_days: int = DEFAULT_FEE_DEADLINE_DAYS) -> float:
    """Share of the deadline window still left, as a 0-100 percentage."""
    if deadline_days <= 0:
        return 0.0
    return min(100.0, max(0.0, days_remaining / deadline_days * 100))
