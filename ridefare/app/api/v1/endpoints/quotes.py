"""
Quote API Endpoints.

Passenger-facing price estimates and the list of service types offered
in a region.
"""

from datetime import datetime
from fastapi import APIRouter, Depends, Query
from typing import Optional

from ridefare.app.core.config import settings
from ridefare.app.core.currency import format_brl, format_eta
from ridefare.app.core.dependencies import get_quote_service
from ridefare.app.domain.pricing.quote_service import QuoteService
from ridefare.app.schemas.pricing import (
    QuoteRequest, QuoteResponse, AvailableService, AvailableServicesResponse
)

router = APIRouter(prefix="/quotes", tags=["Quotes"])


@router.post("", response_model=QuoteResponse)
async def create_quote(
    request: QuoteRequest,
    quote_service: QuoteService = Depends(get_quote_service)
):
    """
    Price a ride request.

    Returns available=false with a reason when the service is not offered
    in the region at that time.
    """
    result = await quote_service.quote(
        service_type=request.service_type,
        region=request.region or settings.default_region,
        distance_km=request.distance_km,
        at=request.at or datetime.now(),
    )
    if not result.available:
        return QuoteResponse(available=False, reason=result.reason)

    return QuoteResponse(
        available=True,
        quote=result.quote,
        formatted_price=format_brl(result.quote.estimated_price),
        formatted_eta=format_eta(result.quote.estimated_duration_min),
    )


@router.get("/services", response_model=AvailableServicesResponse)
async def list_available_services(
    region: Optional[str] = Query(None, description="Region, defaults to the configured one"),
    at: Optional[datetime] = Query(None, description="Instant to check, defaults to now"),
    quote_service: QuoteService = Depends(get_quote_service)
):
    """
    List service types selectable by a passenger.
    """
    region = region or settings.default_region
    services = await quote_service.available_services(region, at or datetime.now())
    return AvailableServicesResponse(
        region=region,
        services=[
            AvailableService(service_type=service_type, surge_multiplier=surge)
            for service_type, surge in services
        ],
    )
