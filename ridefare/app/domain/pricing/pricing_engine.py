"""
Pricing Engine.

Turns a pricing configuration and a trip distance into a price.
Precedence:
1. Fixed price (when active and set), independent of distance
2. Per-kilometer rate (when active)
3. Fallback formula, so a quote always has a price

The result is multiplied by the surge and rounded half-up to cents.
Out-of-range inputs are clamped, never rejected.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ridefare.app.core.currency import Number, to_decimal, to_money
from ridefare.app.models.pricing import PricingConfiguration, RideQuote

logger = logging.getLogger(__name__)

FALLBACK_BASE_FARE = Decimal("5")
FALLBACK_RATE_PER_KM = Decimal("2.5")
MINUTES_PER_KM = Decimal("2")

_ONE = Decimal("1")
_ZERO = Decimal("0")


def clamp_distance(distance_km: Number) -> Decimal:
    distance = to_decimal(distance_km)
    if not distance.is_finite():
        logger.debug("Non-finite distance %s clamped to 0", distance)
        return _ZERO
    if distance < _ZERO:
        logger.debug("Negative distance %s clamped to 0", distance)
        return _ZERO
    return distance


def clamp_surge(surge_multiplier: Number) -> Decimal:
    surge = to_decimal(surge_multiplier)
    if not surge.is_finite():
        logger.debug("Non-finite surge multiplier %s clamped to 1.0", surge)
        return _ONE
    if surge < _ONE:
        logger.debug("Surge multiplier %s clamped to 1.0", surge)
        return _ONE
    return surge


def base_price(config: Optional[PricingConfiguration], distance_km: Decimal) -> Optional[Decimal]:
    """Base price before surge, or None when no pricing mode is active."""
    if config is None:
        return None
    if config.fixed_price_active and config.fixed_price is not None:
        return config.fixed_price
    if config.price_per_km_active:
        return config.price_per_km * distance_km
    return None


def _fallback_price(config: Optional[PricingConfiguration], distance_km: Decimal) -> Decimal:
    # No active pricing means the admin has not finished setting up this service
    logger.warning(
        "No active pricing for %s; using fallback formula",
        config.service_type.value if config else "unknown service",
        extra={"distance_km": str(distance_km)},
    )
    return FALLBACK_BASE_FARE + distance_km * FALLBACK_RATE_PER_KM


def compute_price(
    config: Optional[PricingConfiguration],
    distance_km: Number,
    surge_multiplier: Number = Decimal("1.0"),
) -> Decimal:
    """
    Compute the price of a ride.

    Args:
        config: Pricing rule for the service type, or None if missing
        distance_km: Trip distance; negative values are treated as 0
        surge_multiplier: Demand factor; values below 1.0 are treated as 1.0

    Returns:
        Price in reais, rounded to cents
    """
    distance = clamp_distance(distance_km)
    surge = clamp_surge(surge_multiplier)

    base = base_price(config, distance)
    if base is None:
        base = _fallback_price(config, distance)

    return to_money(base * surge)


def estimate_duration_min(distance_km: Number) -> int:
    """Rough trip duration: two minutes per kilometer, at least one minute for any trip."""
    distance = clamp_distance(distance_km)
    if distance == _ZERO:
        return 0
    minutes = int((distance * MINUTES_PER_KM).quantize(_ONE, rounding=ROUND_HALF_UP))
    return max(1, minutes)


def build_quote(
    config: PricingConfiguration,
    distance_km: Number,
    surge_multiplier: Number = Decimal("1.0"),
) -> RideQuote:
    """Build the quote shown to a passenger for one request."""
    distance = clamp_distance(distance_km)
    surge = clamp_surge(surge_multiplier)
    return RideQuote(
        service_type=config.service_type,
        distance_km=distance,
        estimated_price=compute_price(config, distance, surge),
        estimated_duration_min=estimate_duration_min(distance),
        surge_multiplier=surge,
        used_fallback=not config.has_active_pricing,
    )
