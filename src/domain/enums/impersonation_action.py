"""Impersonation audit log actions."""

from enum import Enum


class ImpersonationAction(str, Enum):
    """Action recorded on an impersonation audit log entry.

    A log is created with START. The remaining values describe how a session
    was closed and are kept for compatibility with historical rows.
    """

    START = "start"
    END = "end"
    TIMEOUT = "timeout"
    FORCED_END = "forced_end"

    @classmethod
    def values(cls) -> list[str]:
        """Get all action values as strings."""
        return [action.value for action in cls]


class ImpersonationEndReason(str, Enum):
    """Why an impersonation session was ended.

    Stored under ``metadata["end_reason"]`` on the audit log.
    """

    MANUAL = "manual"
    NEW_SESSION_STARTED = "new_session_started"
    TIMEOUT = "timeout"
    IP_CHANGE = "ip_change"
    INVALID_SESSION = "invalid_session"
