"""Integration tests for ImpersonationAuditLogRepository.

Tests cover:
- Save and find with metadata
- Ending a session (update)
- Active sessions per impersonated user
- Listing newest first, active filter, counts
"""

from datetime import UTC, datetime, timedelta

import pytest
from uuid_extensions import uuid7

from src.infrastructure.persistence.repositories import (
    ImpersonationAuditLogRepository,
)
from tests.utils.factories import create_test_audit_log


async def _seed(database, *logs):
    async with database.get_session() as session:
        repo = ImpersonationAuditLogRepository(session=session)
        for log in logs:
            await repo.save(log)


@pytest.mark.integration
class TestAuditLogPersistence:
    """Round trips through the impersonation_audit_logs table."""

    async def test_save_and_find(self, test_database):
        log = create_test_audit_log(metadata={"ticket": "42"})
        await _seed(test_database, log)

        async with test_database.get_session() as session:
            found = await ImpersonationAuditLogRepository(session=session).find_by_id(
                log.id
            )

        assert found is not None
        assert found.impersonator_id == log.impersonator_id
        assert found.impersonated_user_id == log.impersonated_user_id
        assert found.reason == "Support ticket 42"
        assert found.session_id == "session-1"
        assert found.metadata == {"ticket": "42"}
        assert found.is_active() is True

    async def test_find_missing_returns_none(self, test_database):
        async with test_database.get_session() as session:
            repo = ImpersonationAuditLogRepository(session=session)
            assert await repo.find_by_id(uuid7()) is None

    async def test_update_records_end(self, test_database):
        started = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)
        log = create_test_audit_log(started_at=started, metadata={"ticket": "42"})
        await _seed(test_database, log)

        log.end_impersonation(reason="timeout", now=started + timedelta(hours=4))
        async with test_database.get_session() as session:
            await ImpersonationAuditLogRepository(session=session).update(log)

        async with test_database.get_session() as session:
            found = await ImpersonationAuditLogRepository(session=session).find_by_id(
                log.id
            )

        assert found.is_active() is False
        assert found.ended_at == started + timedelta(hours=4)
        assert found.end_reason == "timeout"
        assert found.metadata["duration"] == 14400.0
        assert found.metadata["ticket"] == "42"
        assert found.duration_in_words() == "4 hours"


@pytest.mark.integration
class TestAuditLogQueries:
    """Active lookups and listing."""

    async def test_active_for_user(self, test_database):
        target = uuid7()
        base = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)
        older = create_test_audit_log(impersonated_user_id=target, started_at=base)
        newer = create_test_audit_log(
            impersonated_user_id=target, started_at=base + timedelta(minutes=5)
        )
        ended = create_test_audit_log(
            impersonated_user_id=target,
            started_at=base,
            ended_at=base + timedelta(minutes=1),
        )
        other = create_test_audit_log(started_at=base)
        await _seed(test_database, older, newer, ended, other)

        async with test_database.get_session() as session:
            active = await ImpersonationAuditLogRepository(
                session=session
            ).find_active_for_user(target)

        assert [log.id for log in active] == [newer.id, older.id]

    async def test_list_newest_first_with_filter(self, test_database):
        base = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)
        first = create_test_audit_log(
            started_at=base, ended_at=base + timedelta(minutes=3)
        )
        second = create_test_audit_log(started_at=base + timedelta(hours=1))
        third = create_test_audit_log(started_at=base + timedelta(hours=2))
        await _seed(test_database, first, second, third)

        async with test_database.get_session() as session:
            repo = ImpersonationAuditLogRepository(session=session)
            everything = await repo.list_logs()
            active = await repo.list_logs(active_only=True)
            total = await repo.count_logs()
            active_total = await repo.count_logs(active_only=True)
            second_page = await repo.list_logs(limit=2, offset=2)

        assert [log.id for log in everything] == [third.id, second.id, first.id]
        assert [log.id for log in active] == [third.id, second.id]
        assert total == 3
        assert active_total == 2
        assert [log.id for log in second_page] == [first.id]
