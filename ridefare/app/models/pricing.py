"""
Pricing domain models.

PricingConfiguration is the admin-managed rule for one service type.
AvailabilityRule says when and where a service type is offered, and
with which surge multiplier.
"""

import re
from decimal import Decimal
from typing import Any, Optional, FrozenSet
from pydantic import BaseModel, Field, field_validator, model_validator

from ridefare.app.models.pricing_enums import ServiceType, ServiceFeeType, AvailabilityReason

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _drop_nulls(data: Any) -> Any:
    # Store columns are nullable; a null falls back to the field default
    if isinstance(data, dict):
        return {key: value for key, value in data.items() if value is not None}
    return data


class PricingConfiguration(BaseModel):
    """
    Pricing rule for one service type.

    A fixed price, when active and set, wins over the per-km rate.
    Both modes may be disabled; the engine then uses its fallback formula.
    """
    service_type: ServiceType = ServiceType.MOTO_TAXI
    price_per_km: Decimal = Field(default=Decimal("0"), ge=0)
    price_per_km_active: bool = False
    fixed_price: Optional[Decimal] = Field(default=None, ge=0)
    fixed_price_active: bool = False
    service_fee_type: ServiceFeeType = ServiceFeeType.FIXED
    service_fee_value: Decimal = Field(default=Decimal("0"), ge=0)
    updated_by: Optional[str] = None

    class Config:
        frozen = True

    @model_validator(mode="before")
    @classmethod
    def fill_null_columns(cls, data: Any) -> Any:
        return _drop_nulls(data)

    @property
    def has_active_pricing(self) -> bool:
        return (self.fixed_price_active and self.fixed_price is not None) or self.price_per_km_active


class AvailabilityRule(BaseModel):
    """When and where a service type is offered."""
    id: Optional[str] = None
    service_type: ServiceType
    region: str = Field(..., min_length=1)
    weekday_mask: FrozenSet[int]  # ISO weekdays, 1=Monday .. 7=Sunday
    time_start: str
    time_end: str
    active: bool = True
    surge_multiplier: Decimal = Field(default=Decimal("1.0"), ge=1)
    notes: Optional[str] = None

    class Config:
        frozen = True

    @model_validator(mode="before")
    @classmethod
    def fill_null_columns(cls, data: Any) -> Any:
        return _drop_nulls(data)

    @field_validator("weekday_mask")
    @classmethod
    def validate_weekdays(cls, value: FrozenSet[int]) -> FrozenSet[int]:
        if not value:
            raise ValueError("weekday_mask must not be empty")
        if any(day < 1 or day > 7 for day in value):
            raise ValueError("weekday_mask days must be between 1 and 7")
        return value

    @field_validator("time_start", "time_end", mode="before")
    @classmethod
    def validate_time(cls, value: str) -> str:
        # Database time columns come back as HH:MM:SS
        if isinstance(value, str) and len(value) == 8 and value[5] == ":":
            value = value[:5]
        if not isinstance(value, str) or not _TIME_PATTERN.match(value):
            raise ValueError("time must be formatted as HH:MM")
        return value

    @model_validator(mode="after")
    def validate_window(self) -> "AvailabilityRule":
        # Zero-padded HH:MM strings order the same as the times they encode
        if self.time_start >= self.time_end:
            raise ValueError("time_start must be before time_end")
        return self


class AvailabilityResult(BaseModel):
    """Outcome of an availability check for one service type."""
    available: bool
    reason: Optional[AvailabilityReason] = None
    surge_multiplier: Decimal = Decimal("1.0")


class RideQuote(BaseModel):
    """Price estimate for one ride request. Computed fresh, never stored."""
    service_type: ServiceType
    distance_km: Decimal
    estimated_price: Decimal
    estimated_duration_min: int
    surge_multiplier: Decimal
    used_fallback: bool = False

    class Config:
        frozen = True
