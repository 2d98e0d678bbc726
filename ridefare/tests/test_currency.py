"""
Tests for BRL currency helpers.
"""

from decimal import Decimal

import pytest

from ridefare.app.core.currency import (
    to_money,
    format_brl,
    format_brl_cents,
    parse_brl_to_cents,
    cents_to_reais,
    reais_to_cents,
    clamp_negotiation_minimum,
    step_offer,
    format_eta,
    NEGOTIATION_MIN_VALUE_CENTS,
)


def test_to_money_rounds_half_up():
    assert to_money("2.345") == Decimal("2.35")
    assert to_money(0.125) == Decimal("0.13")
    assert to_money(7) == Decimal("7.00")


@pytest.mark.parametrize("amount,expected", [
    (Decimal("1234.56"), "R$ 1.234,56"),
    (Decimal("0"), "R$ 0,00"),
    (Decimal("14.7"), "R$ 14,70"),
    (Decimal("1000000"), "R$ 1.000.000,00"),
    (Decimal("-5.5"), "-R$ 5,50"),
])
def test_format_brl(amount, expected):
    assert format_brl(amount) == expected


def test_format_brl_cents():
    assert format_brl_cents(1470) == "R$ 14,70"


@pytest.mark.parametrize("text,expected", [
    ("50", 5000),
    ("50,9", 5090),
    ("50.00", 5000),
    ("R$ 50,00", 5000),
    ("14,70", 1470),
    ("50,123", 5012),
    (",5", 50),
    ("", None),
    ("abc", None),
    ("1.234,56", None),
    (None, None),
])
def test_parse_brl_to_cents(text, expected):
    assert parse_brl_to_cents(text) == expected


def test_cents_conversion():
    assert cents_to_reais(1470) == Decimal("14.70")
    assert reais_to_cents(Decimal("14.705")) == 1471
    assert reais_to_cents(3) == 300


def test_negotiation_offer_steps():
    assert clamp_negotiation_minimum(100) == NEGOTIATION_MIN_VALUE_CENTS
    assert clamp_negotiation_minimum(1470) == 1470
    assert step_offer(1470, 1) == 1570
    assert step_offer(1470, -1) == 1370
    assert step_offer(350, -1) == NEGOTIATION_MIN_VALUE_CENTS


@pytest.mark.parametrize("minutes,expected", [
    (0, "0 min"),
    (45, "45 min"),
    (60, "1h"),
    (65, "1h 5min"),
    (130, "2h 10min"),
])
def test_format_eta(minutes, expected):
    assert format_eta(minutes) == expected
