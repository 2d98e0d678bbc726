"""
Driver subscription models.

A driver pays a plan to keep access to the app. The stored status is
set by admins and by the renewal flow; the display state also depends
on how many days are left before end_date.
"""

import enum
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class SubscriptionStatus(str, enum.Enum):
    """Stored subscription status."""
    ACTIVE = "ativa"
    EXPIRED = "vencida"
    RENEWAL_REQUESTED = "renovacao_solicitada"  # Keeps access until payment is confirmed
    BLOCKED = "bloqueada"

    @property
    def grants_access(self) -> bool:
        return self in (SubscriptionStatus.ACTIVE, SubscriptionStatus.RENEWAL_REQUESTED)


class SubscriptionState(str, enum.Enum):
    """State shown to admins, derived from status and end date."""
    ACTIVE = "active"
    EXPIRING = "expiring"
    EXPIRED = "expired"
    BLOCKED = "blocked"


class DriverSubscription(BaseModel):
    id: str
    driver_id: Optional[str] = None
    plan_name: Optional[str] = None
    duration_days: Optional[int] = Field(default=None, ge=1)
    price_cents: Optional[int] = Field(default=None, ge=0)
    status: SubscriptionStatus
    start_date: Optional[datetime] = None
    end_date: datetime

    class Config:
        frozen = True


class SubscriptionSummary(BaseModel):
    total: int
    active: int
    expiring: int
    expired: int
    blocked: int
