"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENT = Decimal("0.01")

_CURRENCY = re.compile(r"(?i)dzd|da|eur|usd|[$€£]")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal rounded to cents.

    Handles the formats typed at the till:
    - "1500" / "1500.50"
    - "1 500,50" (French grouping and decimal comma)
    - "1,500.50"
    - "1500 DA" / "DZD 1500"
    - "-250" (only meaningful for opening balances)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount with two decimal places

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = _CURRENCY.sub("", amount_str)
    cleaned = re.sub(r"\s", "", cleaned)

    if "," in cleaned and "." in cleaned:
        # Whichever separator comes last is the decimal point
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")
    elif cleaned.count(",") > 1:
        cleaned = cleaned.replace(",", "")
    elif "," in cleaned:
        # A single comma is a decimal comma
        cleaned = cleaned.replace(",", ".")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)
