"""
Allocation Models for Bill Split

These models carry the numbers in and out of the allocation engine.
They are designed to:
1. Be immutable value records (frozen) that live for a single call
2. Accept loosely typed numbers from callers (int, float, str, Decimal)
3. Keep money in Decimal so cents are exact

DESIGN DECISION: AllocationInput does NOT reject negative or non-finite
amounts. Those are reported by the engine's validate() as a failed result,
so that allocate() never raises for numeric input.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)


ZERO = Decimal("0")


# =============================================================================
# ENUMS
# =============================================================================

class AllocationErrorKind(str, Enum):
    """
    Why an allocation failed.

    Every failure the engine reports is tagged with exactly one of these.
    """
    INVALID_AMOUNT = "invalid_amount"          # NaN / Infinity or unparseable text
    NEGATIVE_AMOUNT = "negative_amount"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    NO_FUNDS_AVAILABLE = "no_funds_available"  # all-zero salaries with something left to pay


# =============================================================================
# INPUT
# =============================================================================

class AllocationInput(BaseModel):
    """
    The salaries available and the bill to cover.

    Salary 1 is the priority payer. Salary 3 is optional and defaults to 0.
    """
    model_config = ConfigDict(frozen=True)

    salary1: Decimal = Field(
        ...,
        allow_inf_nan=True,
        description="Priority salary, used in full before any other"
    )
    salary2: Decimal = Field(
        ...,
        allow_inf_nan=True,
        description="Second salary, shares the remainder proportionally"
    )
    salary3: Decimal = Field(
        default=ZERO,
        allow_inf_nan=True,
        description="Third salary (optional), shares the remainder proportionally"
    )
    bill_amount: Decimal = Field(
        ...,
        allow_inf_nan=True,
        description="Amount of the bill to split"
    )

    @field_validator('salary1', 'salary2', 'salary3', 'bill_amount', mode='before')
    @classmethod
    def coerce_amount(cls, v, info: ValidationInfo):
        """Convert numbers to Decimal without picking up binary float noise."""
        if v is None and info.field_name == "salary3":
            return ZERO
        if isinstance(v, bool):
            raise ValueError("Amount must be a number, not a boolean")
        if isinstance(v, float):
            # str() of a float is its shortest round-tripping form: 0.1 -> "0.1"
            return Decimal(str(v))
        if isinstance(v, int):
            return Decimal(v)
        return v

    @property
    def amounts(self) -> dict[str, Decimal]:
        """All four amounts keyed by field name, in validation order."""
        return {
            "salary1": self.salary1,
            "salary2": self.salary2,
            "salary3": self.salary3,
            "bill_amount": self.bill_amount,
        }

    @property
    def total_salaries(self) -> Decimal:
        return self.salary1 + self.salary2 + self.salary3

    @property
    def remainder_after_priority(self) -> Decimal:
        """
        How much of the bill is left once salary 1 is used up.

        Zero when salary 1 alone covers the bill.
        """
        if self.bill_amount <= self.salary1:
            return ZERO
        return self.bill_amount - self.salary1


# =============================================================================
# OUTPUTS
# =============================================================================

class ValidationOutcome(BaseModel):
    """Result of validating an AllocationInput."""
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    error_message: Optional[str] = None
    error_kind: Optional[AllocationErrorKind] = None
    field: Optional[str] = Field(
        default=None,
        description="Input field that failed, if a single field is to blame"
    )

    @classmethod
    def valid(cls) -> 'ValidationOutcome':
        return cls(is_valid=True)

    @classmethod
    def invalid(
        cls,
        message: str,
        kind: AllocationErrorKind,
        field: Optional[str] = None,
    ) -> 'ValidationOutcome':
        return cls(
            is_valid=False,
            error_message=message,
            error_kind=kind,
            field=field,
        )


class AllocationResult(BaseModel):
    """
    Who pays what.

    When success is True, total_distributed equals the bill to the cent
    and no payment exceeds its salary. When success is False every
    payment is zero and error_message says why.
    """
    model_config = ConfigDict(frozen=True)

    salary1_payment: Decimal = Field(default=ZERO, ge=0)
    salary2_payment: Decimal = Field(default=ZERO, ge=0)
    salary3_payment: Decimal = Field(default=ZERO, ge=0)
    total_distributed: Decimal = Field(default=ZERO, ge=0)

    success: bool
    error_message: Optional[str] = None
    error_kind: Optional[AllocationErrorKind] = None

    @classmethod
    def failure(
        cls,
        message: str,
        kind: AllocationErrorKind,
    ) -> 'AllocationResult':
        """A failed result: nothing allocated."""
        return cls(success=False, error_message=message, error_kind=kind)

    @classmethod
    def nothing_to_pay(cls) -> 'AllocationResult':
        """A successful result for a zero bill."""
        return cls(success=True)

    def as_tuple(self) -> tuple[Decimal, Decimal, Decimal]:
        """Payments as (salary1, salary2, salary3)."""
        return (self.salary1_payment, self.salary2_payment, self.salary3_payment)


class ContributionPercentages(BaseModel):
    """
    Share of each salary that goes to the bill.

    Values are full precision; round them only for display.
    """
    model_config = ConfigDict(frozen=True)

    salary1_percentage: Decimal = ZERO
    salary2_percentage: Decimal = ZERO
    salary3_percentage: Decimal = ZERO


class BillSplitSummary(BaseModel):
    """
    Everything a screen needs to show one bill split.

    allocation_input is None when the typed amounts could not be read.
    """
    model_config = ConfigDict(frozen=True)

    correlation_id: UUID
    allocation_input: Optional[AllocationInput] = None
    result: AllocationResult
    percentages: Optional[ContributionPercentages] = None

    total_salaries: Decimal = ZERO
    remainder_after_priority: Decimal = ZERO

    @property
    def success(self) -> bool:
        return self.result.success

    @property
    def salary1_exhausted(self) -> bool:
        """True when salary 1 went entirely to the bill and others had to help."""
        return (
            self.result.success
            and self.remainder_after_priority > 0
            and self.result.salary2_payment + self.result.salary3_payment > 0
        )
