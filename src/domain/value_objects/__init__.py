"""Domain value objects (immutable, no identity)."""

from src.domain.value_objects.impersonation_claims import ImpersonationClaims

__all__ = ["ImpersonationClaims"]
