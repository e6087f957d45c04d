"""
Audit Logger

DESIGN DECISION: Every bill split calculation is logged.
This provides:
1. Traceability of each split and the inputs behind it
2. Debugging capability when users report a surprising split

The audit logger:
- Writes structured JSON through structlog
- Never raises: a logging failure must not break a calculation
- Supports correlation IDs to tie a request to its outcome
"""

import logging
from typing import Any, Optional
from uuid import UUID, uuid4

import structlog

from billsplit.models.allocation import AllocationInput, AllocationResult
from billsplit.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(log_level: str = "INFO") -> None:
    """Route structlog output to stderr at the given level."""
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper(), logging.INFO),
    )


class AuditLogger:
    """
    Central audit logging service.

    Events are logged locally only; bill splits are never persisted.
    """

    def __init__(self, logger: Optional[Any] = None):
        """
        Initialize audit logger.

        Args:
            logger: structlog-compatible logger. Defaults to the
                    module's configured structlog logger.
        """
        self._logger = logger or structlog.get_logger("billsplit.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event at its severity.

        Returns False if the event could not be written.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity.value in ("error", "critical"):
                self._logger.error("audit_event", **log_dict)
            elif event.severity.value == "warning":
                self._logger.warning("audit_event", **log_dict)
            elif event.severity.value == "debug":
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            # Logging must never break a calculation
            return False

        return True

    def log_allocation_requested(
        self,
        allocation_input: AllocationInput,
        correlation_id: UUID,
    ) -> None:
        """Log a split request."""
        event = AuditEventBuilder.allocation_requested(
            allocation_input=allocation_input,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_allocation_result(
        self,
        result: AllocationResult,
        correlation_id: UUID,
    ) -> None:
        """Log the outcome of a split, success or failure."""
        if result.success:
            event = AuditEventBuilder.allocation_succeeded(
                result=result,
                correlation_id=correlation_id,
            )
        else:
            event = AuditEventBuilder.allocation_failed(
                result=result,
                correlation_id=correlation_id,
            )
        self.log(event)

    def log_amount_parse_failed(
        self,
        field: str,
        raw_value: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        """Log text that could not be read as an amount."""
        event = AuditEventBuilder.amount_parse_failed(
            field=field,
            raw_value=raw_value,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use one per calculation and pass it to every log call it makes.
    """
    return uuid4()
