"""
Service availability.

A service type is available in a region at an instant when at least one
active rule for that service and region covers the ISO weekday and the
local time of day. Among matching rules the highest surge wins.
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Tuple

from ridefare.app.models.pricing import AvailabilityRule, AvailabilityResult
from ridefare.app.models.pricing_enums import ServiceType, AvailabilityReason


def rule_covers(rule: AvailabilityRule, at: datetime) -> bool:
    """True when the rule's weekday mask and time window include the instant (both ends inclusive)."""
    time_of_day = at.strftime("%H:%M")
    return at.isoweekday() in rule.weekday_mask and rule.time_start <= time_of_day <= rule.time_end


def check_availability(
    rules: Iterable[AvailabilityRule],
    service_type: ServiceType,
    region: str,
    at: datetime,
) -> AvailabilityResult:
    candidates = [
        rule for rule in rules
        if rule.active and rule.service_type == service_type and rule.region == region
    ]
    if not candidates:
        return AvailabilityResult(available=False, reason=AvailabilityReason.UNAVAILABLE_REGION)

    matching = [rule for rule in candidates if rule_covers(rule, at)]
    if not matching:
        return AvailabilityResult(available=False, reason=AvailabilityReason.OUT_OF_SCHEDULE)

    surge = max(rule.surge_multiplier for rule in matching)
    return AvailabilityResult(available=True, surge_multiplier=surge)


def available_services(
    rules: Iterable[AvailabilityRule],
    region: str,
    at: datetime,
) -> List[Tuple[ServiceType, Decimal]]:
    """Service types offered in a region at an instant, with their surge, in ServiceType order."""
    rules = list(rules)
    offered = []
    for service_type in ServiceType:
        result = check_availability(rules, service_type, region, at)
        if result.available:
            offered.append((service_type, result.surge_multiplier))
    return offered
