"""Impersonation domain errors.

Error constants for starting, stopping and validating impersonation
sessions. Messages are shown to administrators as-is.

Usage:
    from src.domain.errors import ImpersonationError
    from src.core.result import Failure

    if not log.is_active():
        return Failure(error=ImpersonationError.NOT_IMPERSONATING)
"""


class ImpersonationError:
    """Impersonation error constants.

    Used in Result types for impersonation failures.
    These are NOT exceptions - they are error value constants
    used in railway-oriented programming pattern.
    """

    # -------------------------------------------------------------------------
    # Start/Stop Errors
    # -------------------------------------------------------------------------

    USER_NOT_FOUND = "User not found"
    """Target user of the impersonation does not exist."""

    NOT_IMPERSONATING = "You are not currently impersonating anyone"
    """Stop was requested without an impersonation in progress."""

    CANNOT_IMPERSONATE = "You cannot impersonate this user"
    """Actor is not an administrator, or the target is the actor or an administrator."""

    # -------------------------------------------------------------------------
    # Session Validation Errors
    # -------------------------------------------------------------------------

    INVALID_SESSION = "Impersonation session invalid. Please start again."
    """Audit log missing, already ended, or not matching the token."""

    SESSION_TIMED_OUT = "Impersonation session expired after 4 hours."
    """Session exceeded the impersonation timeout."""

    IP_CHANGED = "Impersonation session ended due to IP address change."
    """Request came from a different address than the one recorded at start."""

    # -------------------------------------------------------------------------
    # Audit Log Validation Errors
    # -------------------------------------------------------------------------

    IP_ADDRESS_REQUIRED = "IP address is required"
    USER_AGENT_REQUIRED = "User agent is required"
    SESSION_ID_REQUIRED = "Session ID is required"
    INVALID_ACTION = "Action is not a known impersonation action"
