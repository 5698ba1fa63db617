"""Parsing of user-entered numeric values."""

import logging
from decimal import Decimal, InvalidOperation

logger = logging.getLogger(__name__)


def parse_decimal_input(value: str | int | float | Decimal | None) -> Decimal:
    """Parse a value typed by the user into a Decimal.

    Accepts a comma as decimal separator ("1234,56"). Blank or
    unparseable input yields ``Decimal("0")``, as do NaN and infinities.

    Examples:
        >>> parse_decimal_input("1234,56")
        Decimal('1234.56')
        >>> parse_decimal_input("abc")
        Decimal('0')
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    else:
        text = value.strip().replace(",", ".", 1)
        if not text:
            return Decimal("0")
        try:
            result = Decimal(text)
        except InvalidOperation:
            logger.debug("Unparseable numeric input %r, using 0", value)
            return Decimal("0")

    if not result.is_finite():
        return Decimal("0")
    return result
