"""LoggerProtocol definition for structured logging.

Implementations MUST emit structured logs (event name + key-value context)
and never log secrets (passwords, tokens).

Log Levels:
    - DEBUG: Detailed diagnostic info (dev only)
    - INFO: Normal operational events
    - WARNING: Denied or degraded operations
    - ERROR: Operation failed, system continues
    - CRITICAL: System-wide failure

Usage:
    from src.core.container import get_logger

    logger: LoggerProtocol = get_logger()
    logger.info("impersonation_started", impersonator_id=str(admin.id))

    request_logger = logger.bind(trace_id=trace_id)
    request_logger.warning("authorization_denied", permission="UserPolicy.destroy")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message.

        Args:
            message: Event name (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name.
            error: Optional exception instance; implementations add
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message for catastrophic failures."""
        ...

    def bind(self, **context: Any) -> "LoggerProtocol":
        """Return new logger with permanently bound context.

        The original logger is unchanged.

        Example:
            request_logger = logger.bind(trace_id=trace_id, user_id=str(user_id))
            request_logger.info("request_started")
        """
        ...

    def with_context(self, **context: Any) -> "LoggerProtocol":
        """Alias for bind()."""
        ...
