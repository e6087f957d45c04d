"""Allocation engine package."""

from billsplit.allocation.engine import (
    CENT,
    FIELD_LABELS,
    MAX_AMOUNT,
    allocate,
    allocate_simple,
    floor2,
    percentages_for_result,
    percentages_of,
    round2,
    validate,
)

__all__ = [
    "CENT",
    "FIELD_LABELS",
    "MAX_AMOUNT",
    "allocate",
    "allocate_simple",
    "floor2",
    "percentages_for_result",
    "percentages_of",
    "round2",
    "validate",
]
