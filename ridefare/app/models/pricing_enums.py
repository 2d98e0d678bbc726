"""
Pricing-related enumerations.
"""

import enum


class ServiceType(str, enum.Enum):
    """Service type enumeration."""
    MOTO_TAXI = "moto_taxi"
    PASSENGER_CAR = "passenger_car"
    DELIVERY_BIKE = "delivery_bike"
    DELIVERY_CAR = "delivery_car"


class ServiceFeeType(str, enum.Enum):
    """How a service fee value is read."""
    FIXED = "fixed"  # Currency amount
    PERCENT = "percent"  # Percentage points, 0-100


class AvailabilityReason(str, enum.Enum):
    """Why a service type cannot be offered."""
    UNAVAILABLE_REGION = "UNAVAILABLE_REGION"  # No active rule for service/region
    OUT_OF_SCHEDULE = "OUT_OF_SCHEDULE"  # Rules exist, none covers the instant
