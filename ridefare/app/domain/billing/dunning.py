"""
Fee dunning.

Daily pass over fee payments: expires the ones past their deadline and
classifies the rest into reminder kinds (due tomorrow, due today, overdue)
for both deadlines a fee has. Delivering the reminders is not done here.
"""

import enum
import logging
from collections import Counter
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional
from pydantic import BaseModel

from ridefare.app.domain.billing.lifecycle import transition
from ridefare.app.models.request_enums import FeeStatus
from ridefare.app.models.requests import FeePayment

logger = logging.getLogger(__name__)


class ReminderKind(str, enum.Enum):
    PAYMENT_D1 = "payment_d1"
    PAYMENT_D = "payment_d"
    PAYMENT_OVERDUE = "payment_overdue"
    REQUEST_D1 = "request_d1"
    REQUEST_D = "request_d"
    REQUEST_OVERDUE = "request_overdue"


class DunningReport(BaseModel):
    timestamp: datetime
    fees: List[FeePayment]
    expired_payment_fees: int
    expired_request_fees: int
    reminders: Dict[ReminderKind, int]

    @property
    def total_reminders(self) -> int:
        return sum(self.reminders.values())


def _day_of(moment: datetime, now: datetime) -> date:
    # Compare calendar days in the reference instant's timezone
    if moment.tzinfo is not None and now.tzinfo is not None:
        moment = moment.astimezone(now.tzinfo)
    return moment.date()


def _days_until(deadline: Optional[datetime], now: datetime) -> Optional[int]:
    if deadline is None:
        return None
    return (_day_of(deadline, now) - now.date()).days


def expire_overdue_fees(fees: Iterable[FeePayment], now: datetime) -> List[FeePayment]:
    """
    Expire fees whose deadline day has passed.

    Pending fees expire after their payment deadline; fees never requested
    expire after their initial request deadline.
    """
    updated = []
    for fee in fees:
        if fee.status is FeeStatus.PENDING:
            days_left = _days_until(fee.payment_due_date, now)
        elif fee.status is FeeStatus.NOT_REQUESTED:
            days_left = _days_until(fee.initial_due_date, now)
        else:
            days_left = None

        if days_left is not None and days_left < 0:
            fee = transition(fee, FeeStatus.EXPIRED, at=now)
        updated.append(fee)
    return updated


def reminder_kind(fee: FeePayment, now: datetime) -> Optional[ReminderKind]:
    """Reminder a fee deserves at the given instant, if any."""
    if fee.status is FeeStatus.PENDING or (
        fee.status is FeeStatus.EXPIRED and fee.payment_due_date is not None
    ):
        days_left = _days_until(fee.payment_due_date, now)
        if days_left is None:
            return None
        if days_left < 0:
            return ReminderKind.PAYMENT_OVERDUE
        if fee.status is FeeStatus.PENDING and days_left == 0:
            return ReminderKind.PAYMENT_D
        if fee.status is FeeStatus.PENDING and days_left == 1:
            return ReminderKind.PAYMENT_D1
        return None

    if fee.status in (FeeStatus.NOT_REQUESTED, FeeStatus.EXPIRED):
        days_left = _days_until(fee.initial_due_date, now)
        if days_left is None:
            return None
        if days_left < 0:
            return ReminderKind.REQUEST_OVERDUE
        if fee.status is FeeStatus.NOT_REQUESTED and days_left == 0:
            return ReminderKind.REQUEST_D
        if fee.status is FeeStatus.NOT_REQUESTED and days_left == 1:
            return ReminderKind.REQUEST_D1
    return None


def run_dunning(fees: Iterable[FeePayment], now: datetime) -> DunningReport:
    fees = list(fees)
    updated = expire_overdue_fees(fees, now)

    expired_payment = expired_request = 0
    for before, after in zip(fees, updated):
        if before.status is not after.status:
            if before.status is FeeStatus.PENDING:
                expired_payment += 1
            else:
                expired_request += 1

    counts = Counter(kind for kind in (reminder_kind(fee, now) for fee in updated) if kind)
    reminders = {kind: counts.get(kind, 0) for kind in ReminderKind}

    logger.info(
        "Dunning run: %d payment fees expired, %d request fees expired, %d reminders",
        expired_payment, expired_request, sum(reminders.values()),
    )
    return DunningReport(
        timestamp=now,
        fees=updated,
        expired_payment_fees=expired_payment,
        expired_request_fees=expired_request,
        reminders=reminders,
    )
