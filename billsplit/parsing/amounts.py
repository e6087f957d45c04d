"""
Amount Parsing and Formatting

Users type amounts the way they see them on a bank statement:
"R$ 1.234,56", "1234,56", "2.000" or "1,234.56". This module turns that
text into Decimal amounts the allocation engine can use, and turns
amounts back into currency strings for messages.

IMPORTANT BOUNDARIES:
1. Parsing NEVER guesses silently on garbage: text without digits is an error
2. Negative amounts are rejected here, before they reach the engine
3. Blank input means zero (an empty optional salary field)
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from billsplit.allocation.engine import round2
from billsplit.config import CurrencySettings, get_settings


ZERO_CENTS = Decimal("0.00")

# Anything that is not a digit, sign or candidate separator is decoration
# (currency symbols, letters, quotes)
_DECORATION = re.compile(r"[^\d,.\- ]")


class AmountParseError(ValueError):
    """Text could not be read as an amount."""

    def __init__(self, raw_value: str, message: str):
        self.raw_value = raw_value
        super().__init__(message)


class NegativeAmountError(AmountParseError):
    """Text is a valid number, but below zero."""
    pass


def _currency_settings(settings: Optional[CurrencySettings]) -> CurrencySettings:
    return settings or get_settings().currency


def _split_number(
    raw: str,
    body: str,
    decimal_separator: str,
    thousands_separator: str,
) -> tuple[str, str]:
    """Split digits and separators into (whole, cents) digit strings."""
    has_decimal = decimal_separator in body
    has_thousands = thousands_separator in body

    if has_decimal and body.count(decimal_separator) > 1:
        raise AmountParseError(raw, f"Too many decimal separators in {raw!r}")

    if has_decimal:
        whole, _, cents = body.partition(decimal_separator)
        if thousands_separator in cents:
            raise AmountParseError(raw, f"Misplaced thousands separator in {raw!r}")
        return whole.replace(thousands_separator, ""), cents

    if has_thousands:
        groups = body.split(thousands_separator)
        if 1 <= len(groups[0]) <= 3 and all(len(group) == 3 for group in groups[1:]):
            return "".join(groups), ""
        if len(groups) == 2:
            # "10.5" with "," configured as decimal: read it the other way round
            return groups[0], groups[1]
        raise AmountParseError(raw, f"Cannot read digit grouping in {raw!r}")

    return body, ""


def parse_amount(
    text: Optional[str],
    decimal_separator: Optional[str] = None,
    thousands_separator: Optional[str] = None,
    settings: Optional[CurrencySettings] = None,
) -> Decimal:
    """
    Parse user-typed text into a non-negative amount rounded to cents.

    Separators default to the configured currency settings.

    Raises:
        AmountParseError: text has no digits or an impossible layout
        NegativeAmountError: text is a negative number
    """
    if text is None or not str(text).strip():
        return ZERO_CENTS

    currency = _currency_settings(settings)
    decimal_separator = decimal_separator or currency.decimal_separator
    thousands_separator = thousands_separator or currency.thousands_separator

    raw = str(text)
    cleaned = _DECORATION.sub("", raw.replace("\u00a0", " ")).strip()
    if thousands_separator != " ":
        cleaned = cleaned.replace(" ", "")

    negative = cleaned.startswith("-")
    body = cleaned[1:] if negative else cleaned
    if "-" in body:
        raise AmountParseError(raw, f"Misplaced minus sign in {raw!r}")

    whole, cents = _split_number(raw, body.strip(), decimal_separator, thousands_separator)
    if not (whole + cents) or not (whole + cents).isdigit():
        raise AmountParseError(raw, f"{raw!r} is not an amount")

    try:
        value = Decimal(f"{whole or '0'}.{cents or '0'}")
    except InvalidOperation:
        raise AmountParseError(raw, f"{raw!r} is not an amount")

    if negative and value != 0:
        raise NegativeAmountError(raw, f"Amount cannot be negative: {raw.strip()}")

    return round2(value)


def format_currency(
    value: Decimal,
    settings: Optional[CurrencySettings] = None,
) -> str:
    """
    Format an amount as currency, e.g. "R$ 1.234,56".
    """
    currency = _currency_settings(settings)
    value = round2(Decimal(value))

    digits = f"{abs(value):,.2f}".translate(str.maketrans({
        ",": currency.thousands_separator,
        ".": currency.decimal_separator,
    }))
    sign = "-" if value < 0 else ""
    return f"{sign}{currency.symbol} {digits}"


def format_percentage(value: Decimal, places: int = 1) -> str:
    """Format a percentage for display, e.g. 50.0%."""
    return f"{Decimal(value):.{places}f}%"
