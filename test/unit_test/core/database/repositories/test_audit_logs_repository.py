"""Unit tests for the audit log repository."""

from __future__ import annotations

from datetime import timedelta

from dbchat_ai.core.database.base import utc_now
from dbchat_ai.core.database.entities import AuditLog
from dbchat_ai.core.database.repositories import AuditLogRepository


class TestBuildConditions:
    def test_no_filters(self):
        assert AuditLogRepository.build_conditions() == []

    def test_all_filters(self):
        now = utc_now()

        conditions = AuditLogRepository.build_conditions(now - timedelta(days=1), now, "u1", "QUERY_EXECUTED")

        assert len(conditions) == 4

    def test_empty_strings_are_ignored(self):
        assert AuditLogRepository.build_conditions(user_id="", action="") == []


class TestSearch:
    async def _add(self, repos, action: str, user_id: str, age: timedelta) -> AuditLog:
        entry = await repos.audit_logs.create(AuditLog(action=action, entity_name="DatabaseConnection", user_id=user_id))
        entry.created_at = utc_now() - age
        return await repos.audit_logs.update(entry)

    async def test_newest_first(self, repos):
        await self._add(repos, "CONNECTION_CREATED", "u1", timedelta(hours=3))
        await self._add(repos, "CONNECTION_UPDATED", "u1", timedelta(hours=1))
        await self._add(repos, "CONNECTION_DELETED", "u1", timedelta(hours=2))

        page = await repos.audit_logs.search()

        assert [entry.action for entry in page.items] == [
            "CONNECTION_UPDATED",
            "CONNECTION_DELETED",
            "CONNECTION_CREATED",
        ]
        assert page.total_count == 3

    async def test_filters(self, repos):
        await self._add(repos, "QUERY_EXECUTED", "u1", timedelta(days=3))
        await self._add(repos, "QUERY_EXECUTED", "u2", timedelta(hours=1))
        await self._add(repos, "QUERY_FAILED", "u2", timedelta(hours=1))

        by_user = await repos.audit_logs.search(user_id="u2")
        by_action = await repos.audit_logs.search(action="QUERY_EXECUTED")
        recent = await repos.audit_logs.search(from_date=utc_now() - timedelta(days=1))
        old = await repos.audit_logs.search(to_date=utc_now() - timedelta(days=1))

        assert by_user.total_count == 2
        assert by_action.total_count == 2
        assert recent.total_count == 2
        assert old.total_count == 1

    async def test_paging(self, repos):
        for hours in range(5):
            await self._add(repos, "SCHEMA_REFRESHED", "u1", timedelta(hours=hours))

        page = await repos.audit_logs.search(page=3, page_size=2)

        assert page.total_count == 5
        assert page.total_pages == 3
        assert len(page.items) == 1
