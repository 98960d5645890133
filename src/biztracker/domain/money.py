"""Money helpers: rounding, GST and presentation formatting.

Amounts are ``Decimal`` throughout. Sums keep full precision and are only
rounded to cents when a value is presented or when GST is fixed on a new
record.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

from biztracker.domain.errors import ConfigurationError

CENT = Decimal("0.01")
ZERO = Decimal("0")

# Shared by expense and invoice creation.
GST_RATE = Decimal("0.18")

CURRENCY_PREFIX = "$"


def validate_rate(rate) -> Decimal:
    """Validate a tax rate and return it as a Decimal.

    Raises:
        ConfigurationError: If the rate is missing, not finite or outside [0, 1)
    """
    if rate is None:
        raise ConfigurationError("GST rate is not configured")
    try:
        value = rate if isinstance(rate, Decimal) else Decimal(str(rate))
    except (InvalidOperation, ValueError) as e:
        raise ConfigurationError(f"GST rate {rate!r} is not a number") from e
    if not value.is_finite() or value < 0 or value >= 1:
        raise ConfigurationError(f"GST rate must be in [0, 1) (got {rate!r})")
    return value


def round2(value: Decimal) -> Decimal:
    """Round to two decimal places, halves away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def apply_gst(amount_base: Decimal, applicable: bool, rate: Decimal = GST_RATE) -> Decimal:
    """Return the GST due on ``amount_base``.

    Args:
        amount_base: Taxable amount
        applicable: Whether GST applies to this amount
        rate: GST rate, defaults to GST_RATE

    Returns:
        round2(amount_base * rate) when applicable, otherwise zero
    """
    if not applicable:
        return ZERO
    return round2(amount_base * validate_rate(rate))


def format_money(value: Decimal) -> str:
    """Format a value with the currency prefix and exactly two decimals."""
    rounded = round2(value)
    if rounded < 0:
        return f"-{CURRENCY_PREFIX}{-rounded:.2f}"
    return f"{CURRENCY_PREFIX}{rounded:.2f}"


def format_net_gst(net_gst: Decimal) -> str:
    """Format a net GST position; refunds show the magnitude with a marker."""
    if net_gst < 0:
        return f"{format_money(-net_gst)} (Refund)"
    return format_money(net_gst)
