"""User management authorization policy.

Administrators manage every account. Everybody else may only read and edit
their own record. Role changes never apply to the acting administrator.
"""

from typing import ClassVar

from src.domain.entities.user import User
from src.domain.policies.application_policy import ApplicationPolicy
from src.domain.policies.impersonation_policy import ImpersonationPolicy
from src.domain.policies.scope import ScopeFilter

ADMIN_PERMITTED_ATTRIBUTES: tuple[str, ...] = (
    "first_name",
    "last_name",
    "email",
    "password",
    "password_confirmation",
    "role",
)
SELF_PERMITTED_ATTRIBUTES: tuple[str, ...] = tuple(
    attribute for attribute in ADMIN_PERMITTED_ATTRIBUTES if attribute != "role"
)


class UserPolicy(ApplicationPolicy):
    """Policy for User records.

    Query summary:
        - index, create, manage_roles, view_admin_panel: admin
        - show, update, edit, edit_profile, change_password, reset_password:
          same user or admin
        - destroy, promote_to_admin: admin and not the same user
        - demote_from_admin: admin, not the same user, target is an admin
        - impersonate: delegates to ImpersonationPolicy.start
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
            "promote_to_admin",
            "demote_from_admin",
            "manage_roles",
            "edit_profile",
            "change_password",
            "reset_password",
            "impersonate",
            "view_admin_panel",
        }
    )

    def index(self) -> bool:
        return self.admin()

    def show(self) -> bool:
        return self.same_user() or self.admin()

    def create(self) -> bool:
        return self.admin()

    def update(self) -> bool:
        return self.same_user() or self.admin()

    def destroy(self) -> bool:
        return self.admin() and not self.same_user()

    def promote_to_admin(self) -> bool:
        return self.admin() and not self.same_user()

    def demote_from_admin(self) -> bool:
        return (
            self.admin()
            and not self.same_user()
            and isinstance(self.record, User)
            and self.record.system_admin
        )

    def manage_roles(self) -> bool:
        return self.admin()

    def edit_profile(self) -> bool:
        return self.same_user() or self.admin()

    def change_password(self) -> bool:
        return self.same_user() or self.admin()

    def reset_password(self) -> bool:
        return self.same_user() or self.admin()

    def impersonate(self) -> bool:
        return ImpersonationPolicy(self.user, self.record).start()

    def view_admin_panel(self) -> bool:
        return self.admin()

    def permitted_attributes(self) -> list[str]:
        """Attributes the actor may change on the record.

        Returns:
            list[str]: Every attribute for admins, every attribute except
            ``role`` for the user themselves, nothing otherwise.
        """
        if self.admin():
            return list(ADMIN_PERMITTED_ATTRIBUTES)
        if self.same_user():
            return list(SELF_PERMITTED_ATTRIBUTES)
        return []

    class Scope(ApplicationPolicy.Scope):
        """Admins see all users; anyone else sees only their own record."""

        def resolve(self) -> ScopeFilter:
            if self.admin():
                return ScopeFilter.all()
            if self.user_signed_in():
                return ScopeFilter.by_id(self.user.id)  # type: ignore[union-attr]
            return ScopeFilter.none()


def can_index(actor: User | None) -> bool:
    return UserPolicy(actor, User).index()


def can_show(actor: User | None, target: User) -> bool:
    """True iff actor is the target or an admin."""
    return UserPolicy(actor, target).show()


def can_update(actor: User | None, target: User) -> bool:
    """True iff actor is the target or an admin."""
    return UserPolicy(actor, target).update()


def can_destroy(actor: User | None, target: User) -> bool:
    """True iff actor is an admin other than the target."""
    return UserPolicy(actor, target).destroy()


def can_promote(actor: User | None, target: User) -> bool:
    return UserPolicy(actor, target).promote_to_admin()


def can_demote(actor: User | None, target: User) -> bool:
    """Like can_promote, and the target must currently be an admin."""
    return UserPolicy(actor, target).demote_from_admin()


def can_manage_roles(actor: User | None) -> bool:
    return UserPolicy(actor, User).manage_roles()


def can_impersonate(actor: User | None, target: User) -> bool:
    return UserPolicy(actor, target).impersonate()


def can_reset_password(actor: User | None, target: User) -> bool:
    return UserPolicy(actor, target).reset_password()


def can_view_admin_panel(actor: User | None) -> bool:
    return UserPolicy(actor, User).view_admin_panel()
