"""
Tests for the Pricing Engine.

Covers precedence between fixed price, per-km rate and the fallback
formula, surge, clamping and rounding.
"""

import logging
from decimal import Decimal

import pytest

from ridefare.app.domain.pricing.pricing_engine import (
    compute_price, estimate_duration_min, build_quote
)
from ridefare.app.models.pricing import PricingConfiguration
from ridefare.app.models.pricing_enums import ServiceType


@pytest.mark.parametrize("distance", ["0", "1", "7.3", "250"])
def test_fixed_price_ignores_distance(fixed_config, distance):
    """Fixed price wins over the per-km rate, whatever the distance."""
    assert compute_price(fixed_config, Decimal(distance)) == Decimal("15.00")
    assert compute_price(fixed_config, Decimal(distance), Decimal("1.5")) == Decimal("22.50")


def test_per_km_price_is_linear(per_km_config):
    surge = Decimal("1.2")
    slope = per_km_config.price_per_km * surge
    for distance in (Decimal("0"), Decimal("4"), Decimal("10"), Decimal("12.5")):
        assert compute_price(per_km_config, distance, surge) == (slope * distance).quantize(Decimal("0.01"))


def test_fixed_price_active_without_value_uses_per_km():
    config = PricingConfiguration(
        price_per_km=Decimal("2"),
        price_per_km_active=True,
        fixed_price=None,
        fixed_price_active=True,
    )
    assert compute_price(config, 5) == Decimal("10.00")


def test_fallback_when_nothing_active(caplog):
    config = PricingConfiguration(price_per_km=Decimal("9"), fixed_price=Decimal("40"))

    with caplog.at_level(logging.WARNING):
        price = compute_price(config, Decimal("10"))

    assert price == Decimal("30.00")  # 5 + 10 * 2.5
    assert "fallback" in caplog.text


def test_fallback_when_configuration_missing():
    assert compute_price(None, 2) == Decimal("10.00")


def test_surge_below_one_is_clamped(per_km_config):
    assert compute_price(per_km_config, 10, Decimal("0.5")) == compute_price(per_km_config, 10)


def test_negative_distance_is_clamped(per_km_config):
    assert compute_price(per_km_config, Decimal("-3")) == Decimal("0.00")


def test_rounding_is_half_up():
    config = PricingConfiguration(price_per_km=Decimal("1.005"), price_per_km_active=True)
    assert compute_price(config, 1) == Decimal("1.01")


def test_float_inputs_are_accepted(per_km_config):
    assert compute_price(per_km_config, 3.3, 1.1) == Decimal("9.08")  # 8.25 * 1.1 = 9.075


def test_estimate_duration():
    assert estimate_duration_min(0) == 0
    assert estimate_duration_min(Decimal("0.1")) == 1
    assert estimate_duration_min(Decimal("12.3")) == 25


def test_build_quote(per_km_config):
    quote = build_quote(per_km_config, Decimal("8"), Decimal("1.25"))

    assert quote.service_type == ServiceType.MOTO_TAXI
    assert quote.estimated_price == Decimal("25.00")
    assert quote.estimated_duration_min == 16
    assert quote.surge_multiplier == Decimal("1.25")
    assert quote.used_fallback is False


def test_build_quote_flags_fallback():
    quote = build_quote(PricingConfiguration(service_type=ServiceType.DELIVERY_CAR), 4)

    assert quote.used_fallback is True
    assert quote.estimated_price == Decimal("15.00")


@pytest.mark.parametrize("distance", [float("nan"), float("inf"), Decimal("NaN"), Decimal("-Infinity")])
def test_non_finite_distance_is_clamped(per_km_config, distance):
    assert compute_price(per_km_config, distance) == Decimal("0.00")
    assert estimate_duration_min(distance) == 0


@pytest.mark.parametrize("surge", [float("nan"), Decimal("Infinity")])
def test_non_finite_surge_is_clamped(per_km_config, surge):
    assert compute_price(per_km_config, 10, surge) == Decimal("25.00")
