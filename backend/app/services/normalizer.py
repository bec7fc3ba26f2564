"""
Data normalization service - coerces raw movement input into well-typed values.
"""
import logging
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Labels used when a grouping field is empty
DESTINATION_FALLBACK = "Not Informed"
PRODUCT_FALLBACK = "No Description"

CURRENCY_SYMBOLS = ["R$", "$"]

# "1,234" or "1,234,567.89"; any other comma makes the amount non-numeric
THOUSANDS_GROUPED = re.compile(r"^\d{1,3}(,\d{3})+(\.\d+)?$")


def safe_amount(val: Any, places: Optional[int] = None, max_digits: Optional[int] = None) -> Decimal:
    """
    Safely convert a weight or value to a non-negative Decimal.

    Handles common spreadsheet formats like:
    - "1,234.56"
    - "$1,234.56" / "R$ 1,234.56"

    A comma is only accepted as a thousands separator ("1,5" is not a number).
    With ``places`` the amount is rounded half-up to that many decimals; with
    ``max_digits`` as well, amounts that do not fit ``Numeric(max_digits, places)``
    are out of range. Anything that is missing, non-numeric, non-finite,
    negative or out of range becomes 0.
    """
    if val is None or isinstance(val, bool):
        return ZERO
    raw = val
    try:
        if isinstance(val, str):
            s = val.strip()
            # Remove currency symbols
            for symbol in CURRENCY_SYMBOLS:
                s = s.replace(symbol, "")
            s = s.strip()
            if not s:
                return ZERO
            if "," in s:
                if not THOUSANDS_GROUPED.match(s):
                    raise ValueError(f"ambiguous separators in {raw!r}")
                s = s.replace(",", "")
            val = s
        amount = Decimal(str(val))
    except (InvalidOperation, ValueError, TypeError):
        logger.debug("Coercing non-numeric amount %r to 0", raw)
        return ZERO

    if not amount.is_finite() or amount < 0:
        logger.debug("Coercing out-of-range amount %r to 0", raw)
        return ZERO
    if places is None:
        return amount

    try:
        amount = amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # More digits than the decimal context holds
        logger.debug("Coercing out-of-range amount %r to 0", raw)
        return ZERO
    if max_digits is not None and amount >= Decimal(10) ** (max_digits - places):
        logger.debug("Coercing amount %r above Numeric(%d, %d) to 0", raw, max_digits, places)
        return ZERO
    return amount


def norm_text(val: Any) -> str:
    """Normalize text: None becomes empty, surrounding whitespace stripped."""
    if val is None:
        return ""
    return str(val).strip()


def destination_label(destination: str) -> str:
    return destination or DESTINATION_FALLBACK


def product_label(description: str) -> str:
    return description or PRODUCT_FALLBACK
