"""Base record-level authorization policy.

A policy is constructed for one actor and one record and exposes boolean
query methods (index, show, create, ...). Subclasses override the queries
their resource needs and list every public query in ``queries`` so that
authorize() can refuse names that are not predicates.

Actor:
    The authenticated User, or None for an anonymous request. While an
    administrator impersonates someone, the actor is the administrator.

Record:
    A record instance, a record class (for collection actions such as
    index or create), or None.
"""

from typing import Any, ClassVar

from src.domain.entities.user import User
from src.domain.policies.scope import ScopeFilter


class ApplicationPolicy:
    """Default policy applied to records without a dedicated policy.

    Defaults:
        - index, create, new: signed-in actor
        - show, update, edit, destroy: signed-in and (owner or admin)
        - admin_access, manage: admin only
    """

    queries: ClassVar[frozenset[str]] = frozenset(
        {
            "index",
            "show",
            "create",
            "new",
            "update",
            "edit",
            "destroy",
            "admin_access",
            "manage",
        }
    )

    def __init__(self, user: User | None, record: Any = None) -> None:
        self.user = user
        self.record = record

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def index(self) -> bool:
        return self.user_signed_in()

    def show(self) -> bool:
        return self.user_signed_in() and (self.owner() or self.admin())

    def create(self) -> bool:
        return self.user_signed_in()

    def new(self) -> bool:
        return self.create()

    def update(self) -> bool:
        return self.user_signed_in() and (self.owner() or self.admin())

    def edit(self) -> bool:
        return self.update()

    def destroy(self) -> bool:
        return self.user_signed_in() and (self.owner() or self.admin())

    def admin_access(self) -> bool:
        return self.admin()

    def manage(self) -> bool:
        return self.admin()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def user_signed_in(self) -> bool:
        return self.user is not None

    def admin(self) -> bool:
        return self.user is not None and self.user.system_admin

    def owner(self) -> bool:
        """Whether the record belongs to the actor.

        A record is owned when its ``user_id`` equals the actor id or, when
        it has no ``user_id``, when its ``user`` is the actor.
        """
        if self.user is None or self.record is None or isinstance(self.record, type):
            return False
        if hasattr(self.record, "user_id"):
            return self.record.user_id == self.user.id
        if hasattr(self.record, "user"):
            return self.record.user == self.user
        return False

    def same_user(self) -> bool:
        """Whether the record is the actor itself (identity comparison)."""
        if self.user is None or self.record is None or isinstance(self.record, type):
            return False
        return self.record == self.user

    class Scope:
        """Default scope: admins see everything, users see what they own."""

        def __init__(self, user: User | None, scope: Any = None) -> None:
            self.user = user
            self.scope = scope

        def resolve(self) -> ScopeFilter:
            if self.admin():
                return ScopeFilter.all()
            if self.user_signed_in():
                return ScopeFilter.by_owner(self.user.id)  # type: ignore[union-attr]
            return ScopeFilter.none()

        def user_signed_in(self) -> bool:
            return self.user is not None

        def admin(self) -> bool:
            return self.user is not None and self.user.system_admin
