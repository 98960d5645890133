"""Tests for money helpers and creation-time GST."""

from decimal import Decimal

import pytest

from biztracker.domain.errors import ConfigurationError
from biztracker.domain.money import (
    GST_RATE,
    apply_gst,
    format_money,
    format_net_gst,
    round2,
    validate_rate,
)


def test_gst_rate_constant():
    assert GST_RATE == Decimal("0.18")


@pytest.mark.parametrize(
    "base", ["0", "0.01", "1", "10.03", "99.99", "100", "1234.56", "0.05"]
)
def test_apply_gst_matches_rounded_product(base):
    amount = Decimal(base)
    assert apply_gst(amount, True) == round2(amount * Decimal("0.18"))


@pytest.mark.parametrize("base", ["0", "1", "1234.56"])
def test_apply_gst_not_applicable_is_zero(base):
    assert apply_gst(Decimal(base), False) == 0


def test_round2_rounds_half_up():
    assert round2(Decimal("0.125")) == Decimal("0.13")
    assert round2(Decimal("2.675")) == Decimal("2.68")
    assert round2(Decimal("-1.005")) == Decimal("-1.01")


def test_apply_gst_with_custom_rate():
    assert apply_gst(Decimal("100"), True, rate=Decimal("0.05")) == Decimal("5.00")


@pytest.mark.parametrize("rate", [None, "abc", Decimal("-0.1"), Decimal("1"), Decimal("NaN")])
def test_invalid_rate_raises_configuration_error(rate):
    with pytest.raises(ConfigurationError):
        validate_rate(rate)


def test_format_money():
    assert format_money(Decimal("5")) == "$5.00"
    assert format_money(Decimal("1234.5")) == "$1234.50"
    assert format_money(Decimal("-3.456")) == "-$3.46"


def test_format_net_gst_liability():
    assert format_net_gst(Decimal("130")) == "$130.00"


def test_format_net_gst_refund():
    assert format_net_gst(Decimal("-13.55")) == "$13.55 (Refund)"
