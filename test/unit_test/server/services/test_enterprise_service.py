"""Unit tests for EnterpriseService: audit trail, user sessions and system configuration."""

import json
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from dbchat_ai.core.database.base import utc_now
from dbchat_ai.server.services.enterprise import (
    EnterpriseService,
    client_address,
    client_user_agent,
    to_audit_json,
)


@pytest.fixture
def service(repos) -> EnterpriseService:
    return EnterpriseService(repos, session_expiry_hours=24)


@pytest.fixture
def fake_request():
    request = MagicMock()
    request.client.host = "10.0.0.7"
    request.headers = {"user-agent": "pytest-agent"}
    return request


class TestRequestHelpers:
    def test_without_request(self):
        assert client_address(None) is None
        assert client_user_agent(None) is None

    def test_request_without_client(self):
        request = MagicMock()
        request.client = None
        assert client_address(request) is None

    def test_with_request(self, fake_request):
        assert client_address(fake_request) == "10.0.0.7"
        assert client_user_agent(fake_request) == "pytest-agent"

    def test_to_audit_json(self):
        assert to_audit_json(None) is None
        assert json.loads(to_audit_json({"count": 2, "at": utc_now()}))["count"] == 2


class TestAuditTrail:
    async def test_log_audit_event(self, service, fake_request):
        entry = await service.log_audit_event(
            "CONNECTION_CREATED",
            "DatabaseConnection",
            user_id="u-1",
            user_name="Ada",
            new_values='{"name": "sales"}',
            request=fake_request,
        )

        assert entry.id is not None
        assert entry.action == "CONNECTION_CREATED"
        assert entry.ip_address == "10.0.0.7"
        assert entry.user_agent == "pytest-agent"
        assert entry.new_values == '{"name": "sales"}'

    async def test_get_audit_logs_filters_and_orders(self, service):
        await service.log_audit_event("CONNECTION_CREATED", "DatabaseConnection", user_id="u-1")
        await service.log_audit_event("QUERY_EXECUTED", "QueryHistory", user_id="u-1")
        await service.log_audit_event("QUERY_EXECUTED", "QueryHistory", user_id="u-2")

        page = await service.get_audit_logs(action="QUERY_EXECUTED")
        assert page.total_count == 2
        assert {entry.user_id for entry in page.items} == {"u-1", "u-2"}

        page = await service.get_audit_logs(user_id="u-1", page=1, page_size=1)
        assert page.total_count == 2
        assert page.total_pages == 2
        assert len(page.items) == 1
        assert page.items[0].action == "QUERY_EXECUTED"

    async def test_get_audit_logs_date_range(self, service):
        await service.log_audit_event("SCHEMA_REFRESHED", "DatabaseSchema")

        now = utc_now()
        assert (await service.get_audit_logs(from_date=now - timedelta(minutes=5))).total_count == 1
        assert (await service.get_audit_logs(to_date=now - timedelta(minutes=5))).total_count == 0


class TestUserSessions:
    async def test_create_user_session_uses_request_details(self, service, fake_request):
        user_session = await service.create_user_session("s-1", user_id="u-1", request=fake_request)

        assert user_session.session_id == "s-1"
        assert user_session.is_active is True
        assert user_session.ip_address == "10.0.0.7"
        assert user_session.user_agent == "pytest-agent"

    async def test_create_user_session_explicit_details_win(self, service, fake_request):
        user_session = await service.create_user_session(
            "s-2", ip_address="192.168.1.1", user_agent="cli", request=fake_request
        )
        assert user_session.ip_address == "192.168.1.1"
        assert user_session.user_agent == "cli"

    async def test_update_user_session(self, service):
        created = await service.create_user_session("s-1", user_id="u-1", user_name="Ada")
        before = created.last_activity

        updated = await service.update_user_session("s-1", user_name="Ada L.")

        assert updated.user_id == "u-1"
        assert updated.user_name == "Ada L."
        assert updated.last_activity >= before

    async def test_update_missing_session(self, service):
        with pytest.raises(LookupError):
            await service.update_user_session("missing")

    async def test_validate_fresh_session(self, service):
        await service.create_user_session("s-1")
        assert await service.validate_user_session("s-1") is True

    async def test_validate_unknown_session(self, service):
        assert await service.validate_user_session("missing") is False

    async def test_validate_inactive_session(self, service, repos):
        user_session = await service.create_user_session("s-1")
        user_session.is_active = False
        await repos.user_sessions.update(user_session)

        assert await service.validate_user_session("s-1") is False

    async def test_validate_expired_session_is_not_touched(self, service, repos):
        user_session = await service.create_user_session("s-1")
        stale = utc_now() - timedelta(hours=25)
        user_session.last_activity = stale
        await repos.user_sessions.update(user_session)

        assert await service.validate_user_session("s-1") is False
        reloaded = await repos.user_sessions.get_by_session_id("s-1")
        assert reloaded.last_activity == stale

    async def test_validate_touches_last_activity(self, service, repos):
        user_session = await service.create_user_session("s-1")
        earlier = utc_now() - timedelta(hours=2)
        user_session.last_activity = earlier
        await repos.user_sessions.update(user_session)

        assert await service.validate_user_session("s-1") is True
        reloaded = await repos.user_sessions.get_by_session_id("s-1")
        assert reloaded.last_activity > earlier

    def test_default_expiry_comes_from_settings(self, repos):
        from dbchat_ai.server.core.config import settings

        assert EnterpriseService(repos).session_expiry_hours == settings.enterprise.session_expiry_hours


class TestSystemConfiguration:
    async def test_set_creates_entry(self, service):
        entry = await service.set_system_configuration("max_rows", "1000", category="query", description="Row cap")

        assert entry.key == "max_rows"
        assert entry.value == "1000"
        assert (await service.get_system_configuration("max_rows")).id == entry.id

    async def test_set_replaces_value_and_keeps_metadata(self, service):
        created = await service.set_system_configuration("max_rows", "1000", category="query", description="Row cap")

        updated = await service.set_system_configuration("max_rows", "500")

        assert updated.id == created.id
        assert updated.value == "500"
        assert updated.category == "query"
        assert updated.description == "Row cap"

    async def test_list_by_category(self, service):
        await service.set_system_configuration("max_rows", "1000", category="query")
        await service.set_system_configuration("theme", "dark", category="ui")

        assert [entry.key for entry in await service.get_system_configurations("ui")] == ["theme"]
        assert len(await service.get_system_configurations()) == 2

    async def test_missing_key(self, service):
        assert await service.get_system_configuration("missing") is None
