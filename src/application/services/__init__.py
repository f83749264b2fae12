"""Application services shared by command and query handlers."""

from src.application.services.policy_enforcer import PolicyEnforcer, validation_failed
from src.application.services.session_closer import close_session

__all__ = ["PolicyEnforcer", "close_session", "validation_failed"]
