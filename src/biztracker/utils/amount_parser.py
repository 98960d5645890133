"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from biztracker.domain.errors import InvalidRecordError, negative_value, not_a_number


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        InvalidRecordError: If amount string cannot be parsed to a finite number
    """
    if not amount_str or not amount_str.strip():
        raise InvalidRecordError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[$€£¥₹]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise InvalidRecordError(f"Could not parse amount '{amount_str}': {e}") from e
    if not amount.is_finite():
        raise InvalidRecordError(not_a_number("amount", amount_str))
    return -amount if is_negative else amount


def to_decimal(value, field: str, allow_negative: bool = False) -> Decimal:
    """Coerce a record field to a finite Decimal.

    Floats go through ``str()`` so 0.1 stays 0.1.

    Raises:
        InvalidRecordError: If the value is missing, not finite, or negative
            where a non-negative value is required
    """
    if isinstance(value, bool) or value is None:
        raise InvalidRecordError(not_a_number(field, value))
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        amount = parse_amount(value)
    else:
        raise InvalidRecordError(not_a_number(field, value))

    if not amount.is_finite():
        raise InvalidRecordError(not_a_number(field, value))
    if not allow_negative and amount < 0:
        raise InvalidRecordError(negative_value(field, amount))
    return amount


def to_count(value, field: str, minimum: int = 0) -> int:
    """Coerce a record field to an integer no smaller than ``minimum``.

    Raises:
        InvalidRecordError: If the value is not a whole number or below minimum
    """
    if isinstance(value, bool):
        raise InvalidRecordError(not_a_number(field, value))
    if isinstance(value, int):
        count = value
    else:
        amount = to_decimal(value, field, allow_negative=True)
        if amount != amount.to_integral_value():
            raise InvalidRecordError(f"{field} must be a whole number (got {value!r})")
        count = int(amount)
    if count < minimum:
        raise InvalidRecordError(f"{field} must be at least {minimum} (got {count})")
    return count
