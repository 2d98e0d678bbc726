"""
Payout and fee request lifecycle.

Transitions are one-directional; terminal statuses never change again.
Records are immutable, so a transition returns an updated copy.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Union, overload

from ridefare.app.core.exceptions import InvalidStatusTransitionError
from ridefare.app.models.request_enums import (
    PayoutStatus, FeeStatus, PAYOUT_TRANSITIONS, FEE_TRANSITIONS
)
from ridefare.app.models.requests import PayoutRequest, FeePayment

logger = logging.getLogger(__name__)

# Days a driver has to pay a fee once payment was requested
PAYMENT_WINDOW_DAYS = 2


def can_transition(current: Union[PayoutStatus, FeeStatus], target: Union[PayoutStatus, FeeStatus]) -> bool:
    if isinstance(current, PayoutStatus):
        return isinstance(target, PayoutStatus) and target in PAYOUT_TRANSITIONS[current]
    return isinstance(target, FeeStatus) and target in FEE_TRANSITIONS[current]


def _check(current, target) -> None:
    if not can_transition(current, target):
        raise InvalidStatusTransitionError(current.value, getattr(target, "value", str(target)))


@overload
def transition(record: PayoutRequest, target: PayoutStatus, at: Optional[datetime] = None,
               reason: Optional[str] = None) -> PayoutRequest: ...


@overload
def transition(record: FeePayment, target: FeeStatus, at: Optional[datetime] = None,
               reason: Optional[str] = None) -> FeePayment: ...


def transition(record, target, at=None, reason=None):
    """
    Move a payout or fee record to a new status.

    Raises:
        InvalidStatusTransitionError: If the target is not reachable from the current status.
    """
    _check(record.status, target)
    at = at or datetime.now(timezone.utc)
    update = {"status": target}

    if isinstance(record, PayoutRequest):
        if target is PayoutStatus.APPROVED:
            update["approved_at"] = at
        elif target is PayoutStatus.PAID:
            update["paid_at"] = at
        else:
            update["closed_at"] = at
        if reason:
            update["admin_notes"] = reason
    else:
        if target is FeeStatus.PENDING:
            update["payment_due_date"] = at + timedelta(days=PAYMENT_WINDOW_DAYS)
        elif target is FeeStatus.PAID:
            update["paid_at"] = at
        elif target is FeeStatus.CANCELED:
            update["canceled_at"] = at
            update["canceled_reason"] = reason

    logger.info(
        "Request %s moved from %s to %s", record.id, record.status.value, target.value,
        extra={"request_id": record.id, "from_status": record.status.value, "to_status": target.value},
    )
    return record.model_copy(update=update)
