"""Initial administrator seeder.

Creates the first system administrator from ADMIN_EMAIL / ADMIN_PASSWORD
so that a fresh database has someone who can create the other users.
Idempotent via an existence check - safe to run on every migration.
"""

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

from src.core.config import settings
from src.domain.enums import UserRole
from src.infrastructure.persistence.models import User
from src.infrastructure.security import BcryptPasswordService

logger = structlog.get_logger(__name__)


async def seed_admin_user(session: AsyncSession) -> None:
    """Create the administrator unless a user with that email exists.

    Skipped when ADMIN_PASSWORD is not set.

    Args:
        session: Async database session.
    """
    if not settings.admin_password:
        logger.info("admin_seed_skipped", reason="admin_password_not_set")
        return

    email = settings.admin_email.strip().lower()
    existing = await session.execute(
        select(User.id).where(func.lower(User.email) == email)
    )
    if existing.scalar_one_or_none() is not None:
        logger.info("admin_seed_skipped", reason="already_exists", email=email)
        return

    password_service = BcryptPasswordService(cost_factor=settings.bcrypt_rounds)
    session.add(
        User(
            id=uuid7(),
            email=email,
            password_hash=password_service.hash_password(settings.admin_password),
            first_name="Admin",
            last_name="User",
            role=UserRole.SYSTEM_ADMIN.value,
            is_active=True,
        )
    )
    await session.flush()
    logger.info("admin_seeded", email=email)
