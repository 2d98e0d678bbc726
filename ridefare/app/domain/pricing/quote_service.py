"""
Quote Service.

Resolves the pricing configuration and surge for a ride request through
an injected configuration provider, then prices it with the engine.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple
from pydantic import BaseModel

from ridefare.app.core.currency import Number
from ridefare.app.domain.pricing.availability import check_availability, available_services
from ridefare.app.domain.pricing.pricing_engine import build_quote
from ridefare.app.models.pricing import PricingConfiguration, RideQuote
from ridefare.app.models.pricing_enums import ServiceType, AvailabilityReason
from ridefare.app.services.pricing_config_provider import PricingConfigProvider


class QuoteResult(BaseModel):
    """Quote for an available service, or the reason it is not offered."""
    available: bool
    reason: Optional[AvailabilityReason] = None
    quote: Optional[RideQuote] = None


class QuoteService:

    def __init__(self, provider: PricingConfigProvider):
        self.provider = provider

    async def quote(
        self,
        service_type: ServiceType,
        region: str,
        distance_km: Number,
        at: datetime,
    ) -> QuoteResult:
        """
        Price a ride request.

        A missing pricing configuration is not an error: the engine falls
        back to its default formula and flags the quote.
        """
        rules = await self.provider.list_availability_rules(service_type=service_type, region=region)
        availability = check_availability(rules, service_type, region, at)
        if not availability.available:
            return QuoteResult(available=False, reason=availability.reason)

        config = await self.provider.get_pricing(service_type)
        if config is None:
            config = PricingConfiguration(service_type=service_type)

        return QuoteResult(
            available=True,
            quote=build_quote(config, distance_km, availability.surge_multiplier),
        )

    async def available_services(self, region: str, at: datetime) -> List[Tuple[ServiceType, Decimal]]:
        rules = await self.provider.list_availability_rules(region=region)
        return available_services(rules, region, at)
