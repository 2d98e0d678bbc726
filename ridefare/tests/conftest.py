"""
Centralized Test Configuration.
"""

from datetime import datetime
from decimal import Decimal

import pytest
from httpx import AsyncClient, ASGITransport

from ridefare.app.main import app
from ridefare.app.core.dependencies import get_config_provider
from ridefare.app.models.pricing import PricingConfiguration, AvailabilityRule
from ridefare.app.models.pricing_enums import ServiceType, ServiceFeeType
from ridefare.app.services.pricing_config_provider import InMemoryPricingConfigProvider

REGION = "sao_paulo"

# Wednesday
WEEKDAY_NOON = datetime(2024, 5, 15, 12, 0)
WEEKDAY_NIGHT = datetime(2024, 5, 15, 23, 30)


@pytest.fixture
def per_km_config():
    return PricingConfiguration(
        service_type=ServiceType.MOTO_TAXI,
        price_per_km=Decimal("2.50"),
        price_per_km_active=True,
        service_fee_type=ServiceFeeType.PERCENT,
        service_fee_value=Decimal("10"),
    )


@pytest.fixture
def fixed_config():
    return PricingConfiguration(
        service_type=ServiceType.PASSENGER_CAR,
        price_per_km=Decimal("3.00"),
        price_per_km_active=True,
        fixed_price=Decimal("15.00"),
        fixed_price_active=True,
    )


@pytest.fixture
def business_hours_rule():
    return AvailabilityRule(
        id="rule-day",
        service_type=ServiceType.MOTO_TAXI,
        region=REGION,
        weekday_mask=frozenset({1, 2, 3, 4, 5}),
        time_start="06:00",
        time_end="22:00",
    )


@pytest.fixture
def provider(per_km_config, fixed_config, business_hours_rule):
    """In-memory provider with moto-taxi per km and car at a fixed price."""
    car_rule = AvailabilityRule(
        id="rule-car",
        service_type=ServiceType.PASSENGER_CAR,
        region=REGION,
        weekday_mask=frozenset(range(1, 8)),
        time_start="00:00",
        time_end="23:59",
        surge_multiplier=Decimal("1.5"),
    )
    return InMemoryPricingConfigProvider(
        pricing=[per_km_config, fixed_config],
        rules=[business_hours_rule, car_rule],
    )


@pytest.fixture(autouse=True)
def apply_overrides(provider):
    """Inject the in-memory provider into the app for each test."""
    app.dependency_overrides[get_config_provider] = lambda: provider
    yield
    app.dependency_overrides = {}


@pytest.fixture
async def client():
    """Async client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
