"""
Tests for service availability and surge resolution.
"""

from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from ridefare.app.domain.pricing.availability import check_availability, available_services, rule_covers
from ridefare.app.models.pricing import AvailabilityRule
from ridefare.app.models.pricing_enums import ServiceType, AvailabilityReason

REGION = "sao_paulo"
WEDNESDAY_NOON = datetime(2024, 5, 15, 12, 0)
SUNDAY_NOON = datetime(2024, 5, 19, 12, 0)


def make_rule(**overrides):
    values = dict(
        service_type=ServiceType.MOTO_TAXI,
        region=REGION,
        weekday_mask=frozenset({1, 2, 3, 4, 5}),
        time_start="06:00",
        time_end="22:00",
    )
    values.update(overrides)
    return AvailabilityRule(**values)


def test_available_inside_window(business_hours_rule):
    result = check_availability([business_hours_rule], ServiceType.MOTO_TAXI, REGION, WEDNESDAY_NOON)

    assert result.available is True
    assert result.surge_multiplier == Decimal("1.0")


def test_no_rule_for_region(business_hours_rule):
    result = check_availability([business_hours_rule], ServiceType.MOTO_TAXI, "rio", WEDNESDAY_NOON)

    assert result.available is False
    assert result.reason == AvailabilityReason.UNAVAILABLE_REGION


def test_inactive_rule_is_ignored():
    result = check_availability([make_rule(active=False)], ServiceType.MOTO_TAXI, REGION, WEDNESDAY_NOON)
    assert result.reason == AvailabilityReason.UNAVAILABLE_REGION


def test_out_of_schedule(business_hours_rule):
    result = check_availability([business_hours_rule], ServiceType.MOTO_TAXI, REGION, SUNDAY_NOON)

    assert result.available is False
    assert result.reason == AvailabilityReason.OUT_OF_SCHEDULE


def test_window_bounds_are_inclusive(business_hours_rule):
    assert rule_covers(business_hours_rule, datetime(2024, 5, 15, 6, 0))
    assert rule_covers(business_hours_rule, datetime(2024, 5, 15, 22, 0))
    assert not rule_covers(business_hours_rule, datetime(2024, 5, 15, 22, 1))


def test_highest_surge_wins():
    rules = [
        make_rule(surge_multiplier=Decimal("1.2")),
        make_rule(time_start="11:00", time_end="14:00", surge_multiplier=Decimal("1.8")),
        make_rule(time_start="18:00", time_end="20:00", surge_multiplier=Decimal("2.5")),
    ]
    result = check_availability(rules, ServiceType.MOTO_TAXI, REGION, WEDNESDAY_NOON)

    assert result.surge_multiplier == Decimal("1.8")


def test_available_services_in_enum_order():
    rules = [
        make_rule(service_type=ServiceType.DELIVERY_CAR, surge_multiplier=Decimal("1.3")),
        make_rule(service_type=ServiceType.MOTO_TAXI),
        make_rule(service_type=ServiceType.PASSENGER_CAR, weekday_mask=frozenset({7})),
    ]

    services = available_services(rules, REGION, WEDNESDAY_NOON)

    assert services == [
        (ServiceType.MOTO_TAXI, Decimal("1.0")),
        (ServiceType.DELIVERY_CAR, Decimal("1.3")),
    ]


@pytest.mark.parametrize("overrides", [
    {"weekday_mask": frozenset()},
    {"weekday_mask": frozenset({0, 3})},
    {"time_start": "22:00", "time_end": "06:00"},
    {"time_start": "10:00", "time_end": "10:00"},
    {"time_start": "25:00"},
    {"surge_multiplier": Decimal("0.8")},
])
def test_invalid_rules_are_rejected(overrides):
    with pytest.raises(ValidationError):
        make_rule(**overrides)


def test_database_time_format_is_accepted():
    rule = make_rule(time_start="06:00:00", time_end="22:00:00")
    assert (rule.time_start, rule.time_end) == ("06:00", "22:00")
