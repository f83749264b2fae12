"""Impersonation token claims value object.

An impersonation access token is an ordinary access token for the
impersonated user (``sub``) that additionally carries these claims. Their
presence is what marks a request as impersonated.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class ImpersonationClaims:
    """Claims describing an impersonation session.

    Attributes:
        impersonator_id: Administrator acting as the token subject.
        audit_log_id: Audit log recording the session.
        ip_address: Client address at session start.
        started_at: Session start (UTC).
    """

    impersonator_id: UUID
    audit_log_id: UUID
    ip_address: str
    started_at: datetime

    def to_claims(self) -> dict[str, str | int]:
        """Serialize into JWT claims (started_at as a unix timestamp)."""
        return {
            "impersonator_id": str(self.impersonator_id),
            "audit_log_id": str(self.audit_log_id),
            "impersonation_ip": self.ip_address,
            "impersonation_started_at": int(self.started_at.timestamp()),
        }

    @classmethod
    def from_claims(cls, payload: dict[str, Any]) -> "ImpersonationClaims | None":
        """Parse claims from a decoded token payload.

        Returns:
            ImpersonationClaims | None: None when the token is not an
            impersonation token or the claims are malformed.
        """
        if "impersonator_id" not in payload:
            return None
        try:
            return cls(
                impersonator_id=UUID(str(payload["impersonator_id"])),
                audit_log_id=UUID(str(payload["audit_log_id"])),
                ip_address=str(payload["impersonation_ip"]),
                started_at=datetime.fromtimestamp(
                    int(payload["impersonation_started_at"]), tz=UTC
                ),
            )
        except (KeyError, TypeError, ValueError):
            return None
