"""
Main Orchestrator for Bill Split

This module ties together the components a caller needs to split a bill:
1. Read amounts (typed text → Decimal)
2. Allocate (engine)
3. Derive percentages
4. Audit request and outcome

DESIGN DECISION: The orchestrator enforces the boundaries:
- The engine only ever sees parsed, numeric amounts
- A failed split is returned, never raised, and never shows partial payments
- Every calculation is audited under one correlation ID
"""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from billsplit.allocation import (
    FIELD_LABELS,
    MAX_AMOUNT,
    allocate,
    percentages_for_result,
)
from billsplit.audit import AuditLogger, configure_logging, create_correlation_id
from billsplit.config import CurrencySettings, get_settings
from billsplit.models.allocation import (
    ZERO,
    AllocationErrorKind,
    AllocationInput,
    AllocationResult,
    BillSplitSummary,
)
from billsplit.parsing import AmountParseError, NegativeAmountError, parse_amount


class BillSplitFlow:
    """
    Orchestrates one bill split.

    Flow:
    1. Parse → text fields become amounts (calculate_from_text only)
    2. Allocate → salary 1 first, remainder proportional
    3. Percentages → share of each salary used, on success only
    4. Summarize → one object with everything a screen renders
    """

    def __init__(
        self,
        currency_settings: Optional[CurrencySettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._currency = currency_settings or get_settings().currency
        self._audit_logger = audit_logger

    def calculate(
        self,
        allocation_input: AllocationInput,
        correlation_id: Optional[UUID] = None,
    ) -> BillSplitSummary:
        """
        Split a bill given already-parsed amounts.
        """
        correlation_id = correlation_id or create_correlation_id()

        if self._audit_logger:
            self._audit_logger.log_allocation_requested(
                allocation_input=allocation_input,
                correlation_id=correlation_id,
            )

        try:
            result = allocate(allocation_input)
            percentages = percentages_for_result(allocation_input, result)
        except Exception as e:
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={"stage": "allocation"},
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            self._audit_logger.log_allocation_result(
                result=result,
                correlation_id=correlation_id,
            )

        total_salaries = ZERO
        remainder = ZERO
        # Totals of unsupported amounts would overflow the default context
        if all(
            value.is_finite() and value.copy_abs() <= MAX_AMOUNT
            for value in allocation_input.amounts.values()
        ):
            total_salaries = allocation_input.total_salaries
            remainder = allocation_input.remainder_after_priority

        return BillSplitSummary(
            correlation_id=correlation_id,
            allocation_input=allocation_input,
            result=result,
            percentages=percentages,
            total_salaries=total_salaries,
            remainder_after_priority=remainder,
        )

    def calculate_from_text(
        self,
        salary1: Optional[str],
        salary2: Optional[str],
        salary3: Optional[str] = None,
        bill_amount: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> BillSplitSummary:
        """
        Split a bill from amounts as the user typed them.

        Blank fields count as zero. Text that cannot be read as an
        amount produces a failed summary naming the field.
        """
        correlation_id = correlation_id or create_correlation_id()

        raw_values = {
            "salary1": salary1,
            "salary2": salary2,
            "salary3": salary3,
            "bill_amount": bill_amount,
        }
        amounts: dict[str, Decimal] = {}

        for field, raw in raw_values.items():
            try:
                amounts[field] = parse_amount(raw, settings=self._currency)
            except AmountParseError as e:
                if self._audit_logger:
                    self._audit_logger.log_amount_parse_failed(
                        field=field,
                        raw_value=e.raw_value,
                        error_message=str(e),
                        correlation_id=correlation_id,
                    )
                kind = (
                    AllocationErrorKind.NEGATIVE_AMOUNT
                    if isinstance(e, NegativeAmountError)
                    else AllocationErrorKind.INVALID_AMOUNT
                )
                return BillSplitSummary(
                    correlation_id=correlation_id,
                    result=AllocationResult.failure(f"{FIELD_LABELS[field]}: {e}", kind),
                )

        return self.calculate(AllocationInput(**amounts), correlation_id=correlation_id)


def create_bill_split_flow(audit: bool = True) -> BillSplitFlow:
    """
    Factory function to create a configured bill split flow.

    Args:
        audit: Whether to log calculations. Set to False for quiet use.
    """
    settings = get_settings()
    audit_logger = None

    if audit:
        configure_logging(settings.app.effective_log_level)
        audit_logger = AuditLogger()

    return BillSplitFlow(
        currency_settings=settings.currency,
        audit_logger=audit_logger,
    )
