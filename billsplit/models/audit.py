"""
Audit Models for Bill Split

Every bill split calculation is logged for audit purposes.
This provides:
1. Traceability of who was asked to pay what
2. Debugging information when a split is rejected
3. A record of the exact inputs behind each result

DESIGN DECISION: Audit events are append-only and carry amounts as
strings so nothing is lost to float conversion in the log.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from billsplit.models.allocation import AllocationInput, AllocationResult


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Allocation
    ALLOCATION_REQUESTED = "allocation_requested"
    ALLOCATION_SUCCEEDED = "allocation_succeeded"
    ALLOCATION_FAILED = "allocation_failed"

    # Input handling
    AMOUNT_PARSE_FAILED = "amount_parse_failed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., request and outcome of one split)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


def _amounts(values: dict[str, Decimal]) -> dict[str, str]:
    return {name: str(value) for name, value in values.items()}


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.allocation_requested(allocation_input, correlation_id)
        event = AuditEventBuilder.allocation_failed(result, correlation_id)
    """

    @staticmethod
    def allocation_requested(
        allocation_input: AllocationInput,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ALLOCATION_REQUESTED,
            correlation_id=correlation_id,
            description=f"Bill split requested for {allocation_input.bill_amount}",
            details=_amounts(allocation_input.amounts),
            is_user_action=True,
        )

    @staticmethod
    def allocation_succeeded(
        result: AllocationResult,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ALLOCATION_SUCCEEDED,
            correlation_id=correlation_id,
            description=f"Bill split: {result.total_distributed} distributed",
            details=_amounts({
                "salary1_payment": result.salary1_payment,
                "salary2_payment": result.salary2_payment,
                "salary3_payment": result.salary3_payment,
                "total_distributed": result.total_distributed,
            }),
        )

    @staticmethod
    def allocation_failed(
        result: AllocationResult,
        correlation_id: UUID
    ) -> AuditEvent:
        kind = result.error_kind.value if result.error_kind else None
        return AuditEvent(
            event_type=AuditEventType.ALLOCATION_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description="Bill split rejected",
            error_code=kind,
            error_message=result.error_message,
        )

    @staticmethod
    def amount_parse_failed(
        field: str,
        raw_value: str,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.AMOUNT_PARSE_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Could not read amount for {field}",
            details={
                "field": field,
                "raw_value": raw_value,
            },
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
