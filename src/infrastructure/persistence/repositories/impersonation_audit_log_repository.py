"""ImpersonationAuditLogRepository - SQLAlchemy implementation.

Maps between domain ImpersonationAuditLog entities and the
impersonation_audit_logs table.
"""

from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.impersonation_audit_log import ImpersonationAuditLog
from src.domain.enums.impersonation_action import ImpersonationAction
from src.infrastructure.persistence.base import ensure_utc
from src.infrastructure.persistence.models.impersonation_audit_log import (
    ImpersonationAuditLog as ImpersonationAuditLogModel,
)


class ImpersonationAuditLogRepository:
    """SQLAlchemy implementation of ImpersonationAuditLogRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, log_id: UUID) -> ImpersonationAuditLog | None:
        stmt = select(ImpersonationAuditLogModel).where(
            ImpersonationAuditLogModel.id == log_id
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def find_active_for_user(
        self, impersonated_user_id: UUID
    ) -> list[ImpersonationAuditLog]:
        """Return every active (not ended) log impersonating this user."""
        stmt = (
            select(ImpersonationAuditLogModel)
            .where(
                ImpersonationAuditLogModel.impersonated_user_id == impersonated_user_id,
                ImpersonationAuditLogModel.ended_at.is_(None),
            )
            .order_by(ImpersonationAuditLogModel.started_at.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def save(self, log: ImpersonationAuditLog) -> None:
        self.session.add(self._to_model(log))
        await self.session.commit()

    async def update(self, log: ImpersonationAuditLog) -> None:
        """Persist ended_at and metadata changes.

        Raises:
            NoResultFound: If the log doesn't exist.
        """
        stmt = select(ImpersonationAuditLogModel).where(
            ImpersonationAuditLogModel.id == log.id
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one()

        model.action = log.action.value
        model.ended_at = log.ended_at
        model.metadata_ = dict(log.metadata)

        await self.session.commit()

    async def list_logs(
        self,
        *,
        active_only: bool = False,
        limit: int = 25,
        offset: int = 0,
    ) -> list[ImpersonationAuditLog]:
        """List logs newest first (by started_at)."""
        stmt = self._filtered(select(ImpersonationAuditLogModel), active_only)
        stmt = (
            stmt.order_by(
                ImpersonationAuditLogModel.started_at.desc(),
                ImpersonationAuditLogModel.id.desc(),
            )
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def count_logs(self, *, active_only: bool = False) -> int:
        stmt = self._filtered(
            select(func.count()).select_from(ImpersonationAuditLogModel), active_only
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    @staticmethod
    def _filtered(stmt: Select, active_only: bool) -> Select:
        if active_only:
            stmt = stmt.where(ImpersonationAuditLogModel.ended_at.is_(None))
        return stmt

    def _to_domain(self, model: ImpersonationAuditLogModel) -> ImpersonationAuditLog:
        return ImpersonationAuditLog(
            id=model.id,
            impersonator_id=model.impersonator_id,
            impersonated_user_id=model.impersonated_user_id,
            action=ImpersonationAction(model.action),
            reason=model.reason,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            session_id=model.session_id,
            started_at=ensure_utc(model.started_at),
            ended_at=ensure_utc(model.ended_at),
            metadata=dict(model.metadata_ or {}),
            created_at=ensure_utc(model.created_at),
        )

    def _to_model(self, log: ImpersonationAuditLog) -> ImpersonationAuditLogModel:
        return ImpersonationAuditLogModel(
            id=log.id,
            impersonator_id=log.impersonator_id,
            impersonated_user_id=log.impersonated_user_id,
            action=log.action.value,
            reason=log.reason,
            ip_address=log.ip_address,
            user_agent=log.user_agent,
            session_id=log.session_id,
            started_at=log.started_at,
            ended_at=log.ended_at,
            metadata_=dict(log.metadata),
            created_at=log.created_at,
        )
