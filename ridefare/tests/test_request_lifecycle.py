"""
Tests for the payout and fee request state machine.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from ridefare.app.core.exceptions import InvalidStatusTransitionError
from ridefare.app.domain.billing.lifecycle import transition, can_transition
from ridefare.app.models.request_enums import (
    PayoutStatus, FeeStatus, PAYOUT_TRANSITIONS, FEE_TRANSITIONS
)
from ridefare.app.models.requests import PayoutRequest, FeePayment

NOW = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def pending_payout():
    return PayoutRequest(id="payout-1", amount=Decimal("50"), created_at=NOW - timedelta(days=1))


@pytest.fixture
def unrequested_fee():
    return FeePayment(
        id="fee-1",
        amount=Decimal("25"),
        created_at=NOW - timedelta(days=1),
        initial_due_date=NOW + timedelta(days=1),
    )


def test_payout_happy_path(pending_payout):
    approved = transition(pending_payout, PayoutStatus.APPROVED, at=NOW)
    paid = transition(approved, PayoutStatus.PAID, at=NOW + timedelta(hours=2))

    assert pending_payout.status == PayoutStatus.PENDING  # original untouched
    assert approved.approved_at == NOW
    assert paid.status == PayoutStatus.PAID
    assert paid.paid_at == NOW + timedelta(hours=2)


def test_payout_rejection_keeps_notes(pending_payout):
    rejected = transition(pending_payout, PayoutStatus.REJECTED, at=NOW, reason="Chave PIX inválida")

    assert rejected.status == PayoutStatus.REJECTED
    assert rejected.closed_at == NOW
    assert rejected.admin_notes == "Chave PIX inválida"


def test_pending_payout_cannot_be_paid_directly(pending_payout):
    with pytest.raises(InvalidStatusTransitionError):
        transition(pending_payout, PayoutStatus.PAID)


@pytest.mark.parametrize("status", [s for s in PayoutStatus if s.is_terminal])
def test_terminal_payout_never_changes(status):
    record = PayoutRequest(id="p", amount=Decimal("1"), status=status, created_at=NOW)
    for target in PayoutStatus:
        with pytest.raises(InvalidStatusTransitionError):
            transition(record, target)


@pytest.mark.parametrize("status", [s for s in FeeStatus if s.is_terminal])
def test_terminal_fee_never_changes(status):
    record = FeePayment(id="f", amount=Decimal("1"), status=status, created_at=NOW)
    for target in FeeStatus:
        with pytest.raises(InvalidStatusTransitionError):
            transition(record, target)


def test_fee_request_sets_payment_deadline(unrequested_fee):
    pending = transition(unrequested_fee, FeeStatus.PENDING, at=NOW)

    assert pending.status == FeeStatus.PENDING
    assert pending.payment_due_date == NOW + timedelta(days=2)
    assert pending.due_date == pending.payment_due_date


def test_fee_cancel_records_reason(unrequested_fee):
    pending = transition(unrequested_fee, FeeStatus.PENDING, at=NOW)
    canceled = transition(pending, FeeStatus.CANCELED, at=NOW, reason="Pago em dinheiro")

    assert canceled.canceled_at == NOW
    assert canceled.canceled_reason == "Pago em dinheiro"


def test_statuses_of_different_kinds_never_mix():
    assert can_transition(PayoutStatus.PENDING, PayoutStatus.APPROVED)
    assert not can_transition(PayoutStatus.PENDING, FeeStatus.PAID)
    assert not can_transition(FeeStatus.PENDING, PayoutStatus.PAID)


def test_every_status_has_a_transition_entry():
    assert set(PAYOUT_TRANSITIONS) == set(PayoutStatus)
    assert set(FEE_TRANSITIONS) == set(FeeStatus)


def test_transition_error_details(pending_payout):
    with pytest.raises(InvalidStatusTransitionError) as exc_info:
        transition(pending_payout, PayoutStatus.PAID)

    assert exc_info.value.status_code == 409
    assert exc_info.value.error_code == "ERR_STATUS_001"
    assert exc_info.value.details == {"current_status": "pending", "requested_status": "paid"}
