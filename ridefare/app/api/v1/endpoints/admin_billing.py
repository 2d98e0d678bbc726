"""
Admin Billing API Endpoints.

Handles pricing configuration, availability rules and the status
workflow of payout and fee requests.
"""

import logging
from decimal import Decimal
from fastapi import APIRouter, Depends, Path, Query, status
from typing import List, Optional

from ridefare.app.core.currency import format_brl
from ridefare.app.core.dependencies import get_config_provider
from ridefare.app.core.exceptions import ResourceNotFoundError
from ridefare.app.domain.billing.lifecycle import transition
from ridefare.app.domain.pricing.pricing_engine import compute_price
from ridefare.app.models.pricing import PricingConfiguration, AvailabilityRule
from ridefare.app.models.pricing_enums import ServiceType
from ridefare.app.models.requests import PayoutRequest, FeePayment
from ridefare.app.schemas.billing import PayoutTransitionRequest, FeeTransitionRequest
from ridefare.app.schemas.pricing import PricingConfigurationUpdate, PricePreviewResponse
from ridefare.app.services.pricing_config_provider import PricingConfigProvider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin - Billing"])


@router.get("/pricing", response_model=List[PricingConfiguration])
async def list_pricing(provider: PricingConfigProvider = Depends(get_config_provider)):
    """
    List pricing configuration of every service type.
    """
    return await provider.list_pricing()


@router.get("/pricing/{service_type}", response_model=PricingConfiguration)
async def get_pricing(
    service_type: ServiceType = Path(..., description="Service type"),
    provider: PricingConfigProvider = Depends(get_config_provider)
):
    config = await provider.get_pricing(service_type)
    if config is None:
        raise ResourceNotFoundError("Pricing configuration", service_type.value)
    return config


@router.put("/pricing/{service_type}", response_model=PricingConfiguration)
async def update_pricing(
    update: PricingConfigurationUpdate,
    service_type: ServiceType = Path(..., description="Service type"),
    provider: PricingConfigProvider = Depends(get_config_provider)
):
    """
    Create or replace the pricing of a service type.
    """
    config = PricingConfiguration(service_type=service_type, **update.model_dump())
    saved = await provider.save_pricing(config)

    if not saved.has_active_pricing:
        logger.warning("Pricing for %s saved with no active pricing mode", service_type.value)
    logger.info(
        "Pricing updated for %s", service_type.value,
        extra={"service_type": service_type.value, "updated_by": update.updated_by},
    )
    return saved


@router.get("/pricing/{service_type}/preview", response_model=PricePreviewResponse)
async def preview_price(
    service_type: ServiceType = Path(..., description="Service type"),
    distance_km: Decimal = Query(Decimal("10"), description="Distance to price"),
    provider: PricingConfigProvider = Depends(get_config_provider)
):
    """
    Price a sample distance with the current configuration.
    """
    config = await provider.get_pricing(service_type)
    price = compute_price(config, distance_km)
    return PricePreviewResponse(
        service_type=service_type,
        distance_km=distance_km,
        price=price,
        formatted_price=format_brl(price),
    )


@router.get("/availability-rules", response_model=List[AvailabilityRule])
async def list_availability_rules(
    service_type: Optional[ServiceType] = Query(None),
    region: Optional[str] = Query(None),
    provider: PricingConfigProvider = Depends(get_config_provider)
):
    return await provider.list_availability_rules(service_type=service_type, region=region)


@router.post("/availability-rules", response_model=AvailabilityRule, status_code=status.HTTP_201_CREATED)
async def save_availability_rule(
    rule: AvailabilityRule,
    provider: PricingConfigProvider = Depends(get_config_provider)
):
    """
    Create an availability rule, or replace one when its id is given.
    """
    saved = await provider.save_availability_rule(rule)
    logger.info(
        "Availability rule %s saved for %s in %s", saved.id, saved.service_type.value, saved.region
    )
    return saved


@router.delete("/availability-rules/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_availability_rule(
    rule_id: str = Path(..., description="Rule ID"),
    provider: PricingConfigProvider = Depends(get_config_provider)
):
    await provider.delete_availability_rule(rule_id)
    logger.info("Availability rule %s deleted", rule_id)


@router.post("/payout-requests/transition", response_model=PayoutRequest)
async def transition_payout_request(request: PayoutTransitionRequest):
    """
    Approve, reject, cancel or mark a payout request as paid.

    Returns 409 when the request cannot reach the target status.
    """
    return transition(request.request, request.target_status, reason=request.reason)


@router.post("/fee-payments/transition", response_model=FeePayment)
async def transition_fee_payment(request: FeeTransitionRequest):
    """
    Mark a fee payment as paid, cancel it, or expire it.
    """
    return transition(request.request, request.target_status, reason=request.reason)
