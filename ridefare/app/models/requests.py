"""
Driver money models: balances, fee breakdowns, payout and fee requests.

Records are immutable snapshots of what the ledger returned; status
changes produce new records (see domain.billing.lifecycle).
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field

from ridefare.app.models.pricing_enums import ServiceFeeType
from ridefare.app.models.request_enums import PayoutStatus, FeeStatus


class ServiceFeeBreakdown(BaseModel):
    """Fee charged against a gross amount. net_amount = gross_amount - charged_amount."""
    type: ServiceFeeType
    value: Decimal
    charged_amount: Decimal
    gross_amount: Decimal
    net_amount: Decimal

    class Config:
        frozen = True


class DriverBalance(BaseModel):
    """Derived view of a driver's money. Valid only for the snapshot it was computed from."""
    total_earnings: Decimal = Field(..., ge=0)
    reserved: Decimal = Field(..., ge=0)
    available: Decimal = Field(..., ge=0)

    class Config:
        frozen = True


class PayoutRequest(BaseModel):
    """Driver withdrawal request."""
    id: str
    driver_id: Optional[str] = None
    amount: Decimal = Field(..., ge=0)
    status: PayoutStatus = PayoutStatus.PENDING
    created_at: datetime
    due_date: Optional[date] = None
    service_fee: Optional[ServiceFeeBreakdown] = None
    admin_notes: Optional[str] = None
    approved_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None

    class Config:
        frozen = True


class FeePayment(BaseModel):
    """Mandatory service fee owed by a driver."""
    id: str
    driver_id: Optional[str] = None
    amount: Decimal = Field(..., ge=0)
    status: FeeStatus = FeeStatus.NOT_REQUESTED
    created_at: datetime
    initial_due_date: Optional[datetime] = None  # deadline to request payment
    payment_due_date: Optional[datetime] = None  # deadline to pay once requested
    paid_at: Optional[datetime] = None
    canceled_at: Optional[datetime] = None
    canceled_reason: Optional[str] = None

    class Config:
        frozen = True

    @property
    def due_date(self) -> Optional[datetime]:
        if self.status is FeeStatus.NOT_REQUESTED:
            return self.initial_due_date
        return self.payment_due_date
