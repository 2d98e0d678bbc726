"""
Service Fee Calculator.

Computes the fee charged against a gross amount, either the mandatory
periodic fee or the fee deducted from a withdrawal.
"""

from decimal import Decimal, ROUND_CEILING
from typing import Optional

from ridefare.app.core.currency import CENT, Number, to_decimal, to_money
from ridefare.app.models.pricing_enums import ServiceFeeType
from ridefare.app.models.requests import ServiceFeeBreakdown

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def _percent_rate(value: Decimal) -> Decimal:
    return min(max(value, _ZERO), _HUNDRED) / _HUNDRED


def compute_service_fee(fee_type: ServiceFeeType, value: Number, gross_amount: Number) -> ServiceFeeBreakdown:
    """
    Compute charged and net amounts.

    A fixed fee never exceeds the gross amount, so net is never negative.
    Rounding happens once, on the charged amount; net is derived from it.
    """
    fee_value = max(to_decimal(value), _ZERO)
    gross = max(to_decimal(gross_amount), _ZERO)

    if fee_type is ServiceFeeType.FIXED:
        charged = min(fee_value, gross)
    else:
        charged = gross * _percent_rate(fee_value)

    charged = to_money(charged)
    net = max(_ZERO, to_money(gross - charged))

    return ServiceFeeBreakdown(
        type=fee_type,
        value=fee_value,
        charged_amount=charged,
        gross_amount=to_money(gross),
        net_amount=net,
    )


def minimum_gross_for_net(fee_type: ServiceFeeType, value: Number, minimum_net: Number) -> Optional[Decimal]:
    """
    Smallest gross withdrawal whose net reaches minimum_net.

    Returns None for a 100% fee, where no gross amount leaves anything.
    """
    fee_value = max(to_decimal(value), _ZERO)
    target = to_decimal(minimum_net)

    if fee_type is ServiceFeeType.FIXED:
        return to_money(target + fee_value)

    rate = _percent_rate(fee_value)
    if rate >= 1:
        return None
    return (target / (1 - rate)).quantize(CENT, rounding=ROUND_CEILING)
