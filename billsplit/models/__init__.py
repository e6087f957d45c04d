"""
Data Models Package

This package contains all Pydantic models used by Bill Split.
All data flowing through the system must conform to these schemas.
"""

from billsplit.models.allocation import (
    AllocationErrorKind,
    AllocationInput,
    AllocationResult,
    BillSplitSummary,
    ContributionPercentages,
    ValidationOutcome,
)
from billsplit.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Allocation models
    "AllocationErrorKind",
    "AllocationInput",
    "AllocationResult",
    "BillSplitSummary",
    "ContributionPercentages",
    "ValidationOutcome",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
