"""
Allocation Engine

Splits a bill across up to three salaries.

POLICY:
1. Salary 1 is the priority payer: it covers the bill up to its full value
2. Whatever salary 1 cannot cover is shared by salaries 2 and 3 in
   proportion to their size, so both give up the same share of their salary
3. Shares are rounded to cents and the rounding residue goes to the larger
   of salaries 2 and 3 (salary 2 on a tie), so the payments add up to the
   bill exactly

DESIGN DECISION: The engine is pure. It does no I/O, keeps no state and
never raises for numeric input. Every failure comes back as an
AllocationResult with success=False and an error_kind.

Money is handled as Decimal. After validation the bill is rounded to cents
(ROUND_HALF_UP) and the salaries are truncated to whole cents, so no payment
can exceed the salary it comes from. The rest of the computation works on
cents.
Checks that validate() already guarantees are repeated where the
arithmetic depends on them, and fail with a result rather than an assert.
"""

from decimal import (
    ROUND_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import Optional, Union

from billsplit.models.allocation import (
    ZERO,
    AllocationErrorKind,
    AllocationInput,
    AllocationResult,
    ContributionPercentages,
    ValidationOutcome,
)


CENT = Decimal("0.01")
HUNDRED = Decimal("100")

# Keeps every cent-quantized amount well inside the context precision
MAX_AMOUNT = Decimal("1e15")

FIELD_LABELS = {
    "salary1": "Salary 1",
    "salary2": "Salary 2",
    "salary3": "Salary 3",
    "bill_amount": "Bill amount",
}

# Results must not depend on whatever decimal context the caller has set
_CONTEXT = Context(
    prec=28,
    rounding=ROUND_HALF_EVEN,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

Number = Union[int, float, str, Decimal]


def round2(value: Decimal) -> Decimal:
    """Round to cents, halves away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def floor2(value: Decimal) -> Decimal:
    """Truncate to whole cents; a salary never gains a fraction of a cent."""
    return value.quantize(CENT, rounding=ROUND_DOWN)


def _money(value: Decimal) -> str:
    return f"{round2(value):.2f}"


def insufficient_funds_message(total_salaries: Decimal, bill_amount: Decimal) -> str:
    return (
        f"The sum of salaries ({_money(total_salaries)}) is insufficient "
        f"to cover the bill ({_money(bill_amount)})"
    )


def validate(allocation_input: AllocationInput) -> ValidationOutcome:
    """
    Check that an allocation can be attempted.

    Checks, in order:
    - every amount is a finite number no larger than MAX_AMOUNT
    - no amount is negative
    - the salaries together cover the bill

    Zero salaries and a zero bill are valid.
    """
    amounts = allocation_input.amounts

    with localcontext(_CONTEXT):
        for field, value in amounts.items():
            if not value.is_finite():
                return ValidationOutcome.invalid(
                    f"{FIELD_LABELS[field]} must be a finite number",
                    AllocationErrorKind.INVALID_AMOUNT,
                    field,
                )
            # copy_abs() is exact; abs() would overflow on huge exponents
            if value.copy_abs() > MAX_AMOUNT:
                return ValidationOutcome.invalid(
                    f"{FIELD_LABELS[field]} exceeds the largest supported amount",
                    AllocationErrorKind.INVALID_AMOUNT,
                    field,
                )

        for field, value in amounts.items():
            if value < 0:
                return ValidationOutcome.invalid(
                    f"{FIELD_LABELS[field]} cannot be negative",
                    AllocationErrorKind.NEGATIVE_AMOUNT,
                    field,
                )

        total_salaries = allocation_input.total_salaries
        if allocation_input.bill_amount > total_salaries:
            return ValidationOutcome.invalid(
                insufficient_funds_message(total_salaries, allocation_input.bill_amount),
                AllocationErrorKind.INSUFFICIENT_FUNDS,
            )

    return ValidationOutcome.valid()


def allocate(allocation_input: AllocationInput) -> AllocationResult:
    """
    Work out how much each salary pays towards the bill.

    Example:
        salary1=2000, salary2=1000, salary3=500, bill_amount=2750
        -> salary 1 pays 2000 (all of it)
        -> the remaining 750 is split 500 / 250,
           50% of salary 2 and 50% of salary 3
    """
    validation = validate(allocation_input)
    if not validation.is_valid:
        return AllocationResult.failure(validation.error_message, validation.error_kind)

    with localcontext(_CONTEXT):
        salary1 = floor2(allocation_input.salary1)
        salary2 = floor2(allocation_input.salary2)
        salary3 = floor2(allocation_input.salary3)
        bill_amount = round2(allocation_input.bill_amount)

        if bill_amount == 0:
            return AllocationResult.nothing_to_pay()

        total_salaries = salary1 + salary2 + salary3
        if total_salaries == 0:
            return AllocationResult.failure(
                "No salaries available to cover the bill",
                AllocationErrorKind.NO_FUNDS_AVAILABLE,
            )

        # Priority phase
        salary1_payment = min(bill_amount, salary1)
        remaining = bill_amount - salary1_payment

        # Proportional phase
        salary2_payment = ZERO
        salary3_payment = ZERO
        if remaining > 0:
            pool = salary2 + salary3

            if pool == 0:
                return AllocationResult.failure(
                    "Salary 2 and salary 3 are insufficient to cover the remainder of the bill",
                    AllocationErrorKind.NO_FUNDS_AVAILABLE,
                )
            if remaining > pool:
                return AllocationResult.failure(
                    insufficient_funds_message(total_salaries, bill_amount),
                    AllocationErrorKind.INSUFFICIENT_FUNDS,
                )

            factor = remaining / pool
            salary2_payment = round2(salary2 * factor)
            salary3_payment = round2(salary3 * factor)

            # Reconciliation
            difference = round2(remaining - (salary2_payment + salary3_payment))
            if difference != 0:
                if salary2 >= salary3:
                    salary2_payment += difference
                else:
                    salary3_payment += difference

        salary1_payment = round2(salary1_payment)

        return AllocationResult(
            salary1_payment=salary1_payment,
            salary2_payment=salary2_payment,
            salary3_payment=salary3_payment,
            total_distributed=round2(salary1_payment + salary2_payment + salary3_payment),
            success=True,
        )


def allocate_simple(
    salary1: Number,
    salary2: Number,
    salary3: Number = 0,
    *,
    bill_amount: Number,
) -> Optional[tuple[Decimal, Decimal, Decimal]]:
    """
    Shortcut returning (payment1, payment2, payment3), or None on failure.

    bill_amount is keyword-only so it can never be mistaken for salary 3.
    """
    result = allocate(AllocationInput(
        salary1=salary1,
        salary2=salary2,
        salary3=salary3,
        bill_amount=bill_amount,
    ))
    if not result.success:
        return None
    return result.as_tuple()


def _percentage(payment: Decimal, salary: Decimal) -> Decimal:
    if salary > 0:
        return payment / salary * HUNDRED
    return ZERO


def percentages_of(allocation_input: AllocationInput) -> Optional[ContributionPercentages]:
    """
    Share of each salary taken by the bill, as a percentage.

    Returns None when the allocation fails, so callers can tell a
    rejected split apart from a zero bill (all percentages 0).
    """
    return percentages_for_result(allocation_input, allocate(allocation_input))


def percentages_for_result(
    allocation_input: AllocationInput,
    result: AllocationResult,
) -> Optional[ContributionPercentages]:
    """
    Percentages for a result allocate() already produced from allocation_input.

    Computed against the whole-cent salaries the engine allocated from,
    and not rounded.
    """
    if not result.success:
        return None

    with localcontext(_CONTEXT):
        return ContributionPercentages(
            salary1_percentage=_percentage(result.salary1_payment, floor2(allocation_input.salary1)),
            salary2_percentage=_percentage(result.salary2_payment, floor2(allocation_input.salary2)),
            salary3_percentage=_percentage(result.salary3_payment, floor2(allocation_input.salary3)),
        )
