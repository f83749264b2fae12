"""UpdateUser command handler.

Flow:
1. Load actor and target, authorize UserPolicy.update
2. Reject attributes outside UserPolicy.permitted_attributes (FORBIDDEN)
3. Validate the remaining changes
4. Role changes additionally require promote_to_admin/demote_from_admin and
   emit the AdminRolePromotion*/AdminRoleDemotion* events
5. Apply the changes and emit UserUpdated with the names of the changed fields
"""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from src.application.commands.user_commands import UpdateUser
from src.application.dtos import UserResult
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.application.services import PolicyEnforcer, validation_failed
from src.core.result import Failure, Result, Success
from src.domain.entities.user import User
from src.domain.enums.user_role import UserRole
from src.domain.errors import UserError
from src.domain.events.base_event import DomainEvent
from src.domain.events.user_events import (
    AdminRoleDemotionAttempted,
    AdminRoleDemotionFailed,
    AdminRoleDemotionSucceeded,
    AdminRolePromotionAttempted,
    AdminRolePromotionFailed,
    AdminRolePromotionSucceeded,
    UserUpdated,
)
from src.domain.policies import UserPolicy
from src.domain.protocols import (
    EventBusProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
    UserRepository,
)
from src.domain.validators import validate_email, validate_password, validate_role


class UpdateUserHandler:
    """Handler for UpdateUser command.

    Dependencies (injected via constructor):
        - UserRepository: For actor/target lookup and persistence
        - PasswordHashingProtocol: For password changes
        - EventBusProtocol: For domain events
        - LoggerProtocol: For structured logging
    """

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service
        self._event_bus = event_bus
        self._logger = logger
        self._enforcer = PolicyEnforcer(user_repo)

    async def handle(self, cmd: UpdateUser) -> Result[UserResult, ApplicationError]:
        """Handle UpdateUser command.

        Args:
            cmd: UpdateUser command.

        Returns:
            Success(UserResult): Updated user.
            Failure(ApplicationError): UNAUTHORIZED, NOT_FOUND, FORBIDDEN,
            COMMAND_VALIDATION_FAILED or CONFLICT.
        """
        actor_result = await self._enforcer.load_actor(cmd.actor_id)
        if isinstance(actor_result, Failure):
            return actor_result
        actor = actor_result.value

        target_result = await self._enforcer.load_user(cmd.user_id)
        if isinstance(target_result, Failure):
            return target_result
        user = target_result.value

        allowed = self._enforcer.authorize(actor, user, "update", UserPolicy)
        if isinstance(allowed, Failure):
            return allowed

        permitted = set(UserPolicy(actor, user).permitted_attributes())
        rejected = sorted(set(cmd.changes) - permitted)
        if rejected:
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.FORBIDDEN,
                    message=UserError.ATTRIBUTE_NOT_PERMITTED,
                    details={"attributes": ", ".join(rejected)},
                )
            )

        changed = await self._apply_changes(actor, user, cmd.changes)
        if isinstance(changed, Failure):
            return changed
        changed_fields = changed.value

        if changed_fields:
            user.updated_at = datetime.now(UTC)
            await self._user_repo.update(user)
            if "role" in changed_fields:
                promoted = user.role == UserRole.SYSTEM_ADMIN
                await self._event_bus.publish(
                    _role_succeeded(promoted, user.id, actor.id)
                )
            await self._event_bus.publish(
                UserUpdated(
                    user_id=user.id,
                    updated_by=actor.id,
                    changed_fields=changed_fields,
                )
            )
            self._logger.info(
                "user_updated",
                user_id=str(user.id),
                updated_by=str(actor.id),
                changed_fields=list(changed_fields),
            )

        return Success(value=UserResult.from_entity(user))

    async def _apply_changes(
        self,
        actor: User,
        user: User,
        changes: dict[str, Any],
    ) -> Result[tuple[str, ...], ApplicationError]:
        """Validate every change, then mutate the user.

        Nothing is applied unless every change is valid.
        """
        updates: dict[str, Any] = {}

        for name in ("first_name", "last_name"):
            if name in changes:
                value = (changes[name] or "").strip() or None
                if value != getattr(user, name):
                    updates[name] = value

        if "email" in changes:
            try:
                email = validate_email(str(changes["email"] or ""))
            except ValueError as e:
                return validation_failed(str(e), field="email")
            if email != user.email:
                if await self._user_repo.exists_by_email(email):
                    return Failure(
                        error=ApplicationError(
                            code=ApplicationErrorCode.CONFLICT,
                            message=UserError.EMAIL_ALREADY_EXISTS,
                            details={"field": "email"},
                        )
                    )
                updates["email"] = email

        password = changes.get("password")
        if password:
            try:
                validate_password(password)
            except ValueError as e:
                return validation_failed(str(e), field="password")
            confirmation = changes.get("password_confirmation")
            if confirmation is not None and confirmation != password:
                return validation_failed(
                    UserError.PASSWORD_CONFIRMATION_MISMATCH,
                    field="password_confirmation",
                )
            updates["password_hash"] = self._password_service.hash_password(password)

        if "role" in changes:
            try:
                role = UserRole(validate_role(str(changes["role"])))
            except ValueError:
                return validation_failed(UserError.INVALID_ROLE, field="role")
            if role != user.role:
                promoting = role == UserRole.SYSTEM_ADMIN
                query = "promote_to_admin" if promoting else "demote_from_admin"
                await self._event_bus.publish(
                    _role_attempted(promoting, user.id, actor.id)
                )
                allowed = self._enforcer.authorize(actor, user, query, UserPolicy)
                if isinstance(allowed, Failure):
                    await self._event_bus.publish(
                        _role_failed(promoting, user.id, actor.id, "not_authorized")
                    )
                    return allowed
                updates["role"] = role

        for name, value in updates.items():
            setattr(user, name, value)

        changed_fields = tuple(
            "password" if name == "password_hash" else name for name in updates
        )
        return Success(value=changed_fields)


def _role_attempted(promoting: bool, user_id: UUID, actor_id: UUID) -> DomainEvent:
    if promoting:
        return AdminRolePromotionAttempted(user_id=user_id, promoted_by=actor_id)
    return AdminRoleDemotionAttempted(user_id=user_id, demoted_by=actor_id)


def _role_succeeded(promoting: bool, user_id: UUID, actor_id: UUID) -> DomainEvent:
    if promoting:
        return AdminRolePromotionSucceeded(user_id=user_id, promoted_by=actor_id)
    return AdminRoleDemotionSucceeded(user_id=user_id, demoted_by=actor_id)


def _role_failed(
    promoting: bool, user_id: UUID, actor_id: UUID, reason: str
) -> DomainEvent:
    if promoting:
        return AdminRolePromotionFailed(
            user_id=user_id, promoted_by=actor_id, reason=reason
        )
    return AdminRoleDemotionFailed(user_id=user_id, demoted_by=actor_id, reason=reason)
