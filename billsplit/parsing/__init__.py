"""Amount parsing and formatting package."""

from billsplit.parsing.amounts import (
    AmountParseError,
    NegativeAmountError,
    format_currency,
    format_percentage,
    parse_amount,
)

__all__ = [
    "AmountParseError",
    "NegativeAmountError",
    "format_currency",
    "format_percentage",
    "parse_amount",
]
