"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and thousands separators
    amount_str = re.sub(r"[$€£¥]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def to_minor_units(amount: Decimal, decimals: int = 2) -> int:
    """Convert a major-unit amount to integer minor units.

    Rounds half away from zero to the currency's precision, e.g.
    Decimal("12.345") with 2 decimals becomes 1235.
    """
    return int((amount.scaleb(decimals)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def parse_minor_units(amount_str: str, decimals: int = 2) -> int:
    """Parse a major-unit amount string straight into minor units."""
    return to_minor_units(parse_amount(amount_str), decimals)
