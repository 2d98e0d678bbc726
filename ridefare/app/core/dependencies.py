"""
Dependencies for FastAPI routes.

The configuration provider is created once per process. Tests replace
it through app.dependency_overrides.
"""

import logging
from typing import Optional
from fastapi import Depends

from ridefare.app.core.config import settings
from ridefare.app.core.reliability import CircuitBreaker
from ridefare.app.domain.pricing.quote_service import QuoteService
from ridefare.app.services.pricing_config_provider import (
    PricingConfigProvider,
    InMemoryPricingConfigProvider,
    RemotePricingConfigProvider,
)

logger = logging.getLogger(__name__)

_provider: Optional[PricingConfigProvider] = None


def build_config_provider() -> PricingConfigProvider:
    """Remote store when configured, in-memory defaults otherwise."""
    if settings.pricing_store_url:
        logger.info("Using remote pricing store at %s", settings.pricing_store_url)
        return RemotePricingConfigProvider.from_url(
            settings.pricing_store_url,
            api_key=settings.pricing_store_api_key,
            timeout=settings.pricing_store_timeout_seconds,
            circuit_breaker=CircuitBreaker(
                failure_threshold=settings.pricing_store_failure_threshold,
                reset_timeout=settings.pricing_store_reset_timeout,
            ),
        )
    logger.info("Using in-memory pricing configuration for region %s", settings.default_region)
    return InMemoryPricingConfigProvider.with_defaults(settings.default_region)


def get_config_provider() -> PricingConfigProvider:
    global _provider
    if _provider is None:
        _provider = build_config_provider()
    return _provider


async def close_config_provider() -> None:
    global _provider
    if isinstance(_provider, RemotePricingConfigProvider):
        await _provider.aclose()
    _provider = None


def get_quote_service(provider: PricingConfigProvider = Depends(get_config_provider)) -> QuoteService:
    return QuoteService(provider)
