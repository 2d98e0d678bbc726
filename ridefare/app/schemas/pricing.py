"""
Pricing Schemas.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional, List

from ridefare.app.models.pricing import RideQuote
from ridefare.app.models.pricing_enums import ServiceType, ServiceFeeType, AvailabilityReason


class QuoteRequest(BaseModel):
    """Schema for requesting a ride quote."""
    service_type: ServiceType
    distance_km: Decimal
    region: Optional[str] = None
    at: Optional[datetime] = None  # defaults to now


class QuoteResponse(BaseModel):
    available: bool
    reason: Optional[AvailabilityReason] = None
    quote: Optional[RideQuote] = None
    formatted_price: Optional[str] = None
    formatted_eta: Optional[str] = None


class AvailableService(BaseModel):
    service_type: ServiceType
    surge_multiplier: Decimal


class AvailableServicesResponse(BaseModel):
    region: str
    services: List[AvailableService]


class PricingConfigurationUpdate(BaseModel):
    """Schema for an admin editing the pricing of a service type."""
    price_per_km: Decimal = Field(..., ge=0)
    price_per_km_active: bool
    fixed_price: Optional[Decimal] = Field(default=None, ge=0)
    fixed_price_active: bool = False
    service_fee_type: ServiceFeeType = ServiceFeeType.FIXED
    service_fee_value: Decimal = Field(default=Decimal("0"), ge=0)
    updated_by: Optional[str] = None


class PricePreviewResponse(BaseModel):
    """Price the admin editor shows next to the form."""
    service_type: ServiceType
    distance_km: Decimal
    price: Decimal
    formatted_price: str
