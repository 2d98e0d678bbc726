"""
Payout and fee request enumerations.

Each status enum carries its allowed transitions. Terminal statuses
have no outgoing transitions.
"""

import enum
from typing import Dict, FrozenSet


class PayoutStatus(str, enum.Enum):
    """Withdrawal request status enumeration."""
    PENDING = "pending"  # Created by driver, amount reserved
    APPROVED = "approved"  # Approved by admin, still reserved
    REJECTED = "rejected"  # Refused by admin
    PAID = "paid"  # Money transferred
    CANCELED = "canceled"  # Withdrawn before approval
    EXPIRED = "expired"  # Timed out

    @property
    def is_terminal(self) -> bool:
        return not PAYOUT_TRANSITIONS[self]

    @property
    def is_reserving(self) -> bool:
        return self in (PayoutStatus.PENDING, PayoutStatus.APPROVED)


class FeeStatus(str, enum.Enum):
    """Mandatory service fee payment status enumeration."""
    NOT_REQUESTED = "not_requested"  # Fee exists, driver has not asked to pay yet
    PENDING = "pending"  # Requested, amount reserved until paid
    PAID = "paid"
    CANCELED = "canceled"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return not FEE_TRANSITIONS[self]

    @property
    def is_reserving(self) -> bool:
        return self is FeeStatus.PENDING


PAYOUT_TRANSITIONS: Dict[PayoutStatus, FrozenSet[PayoutStatus]] = {
    PayoutStatus.PENDING: frozenset({
        PayoutStatus.APPROVED, PayoutStatus.REJECTED,
        PayoutStatus.CANCELED, PayoutStatus.EXPIRED,
    }),
    PayoutStatus.APPROVED: frozenset({PayoutStatus.PAID, PayoutStatus.REJECTED}),
    PayoutStatus.REJECTED: frozenset(),
    PayoutStatus.PAID: frozenset(),
    PayoutStatus.CANCELED: frozenset(),
    PayoutStatus.EXPIRED: frozenset(),
}

FEE_TRANSITIONS: Dict[FeeStatus, FrozenSet[FeeStatus]] = {
    FeeStatus.NOT_REQUESTED: frozenset({FeeStatus.PENDING, FeeStatus.EXPIRED}),
    FeeStatus.PENDING: frozenset({FeeStatus.PAID, FeeStatus.CANCELED, FeeStatus.EXPIRED}),
    FeeStatus.PAID: frozenset(),
    FeeStatus.CANCELED: frozenset(),
    FeeStatus.EXPIRED: frozenset(),
}
