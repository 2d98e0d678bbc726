"""
Billing Schemas.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional, List

from ridefare.app.models.pricing_enums import ServiceFeeType
from ridefare.app.models.request_enums import PayoutStatus, FeeStatus
from ridefare.app.models.requests import DriverBalance, PayoutRequest, FeePayment, ServiceFeeBreakdown
from ridefare.app.models.subscriptions import DriverSubscription, SubscriptionState
from ridefare.app.domain.billing.balance import UrgencyLevel


class ServiceFeeRequest(BaseModel):
    """Schema for computing a service fee."""
    fee_type: ServiceFeeType
    fee_value: Decimal
    gross_amount: Decimal


class ServiceFeeResponse(BaseModel):
    breakdown: ServiceFeeBreakdown
    minimum_gross_for_net: Optional[Decimal] = None


class BalanceRequest(BaseModel):
    """
    A consistent snapshot of a driver's rides and requests.

    All lists must come from the same read.
    """
    completed_ride_amounts: List[Decimal] = Field(default_factory=list)
    payouts: List[PayoutRequest] = Field(default_factory=list)
    fees: List[FeePayment] = Field(default_factory=list)


class BalanceResponse(BaseModel):
    balance: DriverBalance
    formatted_available: str


class WithdrawalCheckRequest(BaseModel):
    available: Decimal
    requested_amount: Decimal
    fee_type: ServiceFeeType
    fee_value: Decimal


class FeeEligibilityRequest(BaseModel):
    registration_date: datetime
    now: Optional[datetime] = None
    has_active_fee_request: bool = False
    deadline_days: Optional[int] = Field(default=None, ge=0)


class FeeEligibilityResponse(BaseModel):
    can_request: bool
    days_remaining: int
    expired: bool
    reason: Optional[str] = None
    urgency: UrgencyLevel
    progress_percent: float


class DunningRequest(BaseModel):
    fees: List[FeePayment]
    now: Optional[datetime] = None


class PayoutTransitionRequest(BaseModel):
    """Schema for an admin moving a payout request to a new status."""
    request: PayoutRequest
    target_status: PayoutStatus
    reason: Optional[str] = None


class FeeTransitionRequest(BaseModel):
    """Schema for an admin moving a fee payment to a new status."""
    request: FeePayment
    target_status: FeeStatus
    reason: Optional[str] = None


class SubscriptionStatusRequest(BaseModel):
    subscription: DriverSubscription
    now: Optional[datetime] = None


class SubscriptionStatusResponse(BaseModel):
    state: SubscriptionState
    days_remaining: int
    has_active_access: bool
    expiring_soon: bool
    expired: bool


class SubscriptionSummaryRequest(BaseModel):
    subscriptions: List[DriverSubscription]
    now: Optional[datetime] = None
