"""Unit tests for the user session and system configuration repositories."""

from __future__ import annotations

from dbchat_ai.core.database.entities import SystemConfiguration, UserSession


class TestUserSessionRepository:
    async def test_get_by_session_id(self, repos):
        await repos.user_sessions.create(UserSession(session_id="abc", user_id="u1"))

        found = await repos.user_sessions.get_by_session_id("abc")

        assert found is not None
        assert found.user_id == "u1"
        assert found.is_active is True

    async def test_get_by_session_id_missing(self, repos):
        assert await repos.user_sessions.get_by_session_id("nope") is None


class TestSystemConfigurationRepository:
    async def test_get_by_key(self, repos):
        await repos.system_configurations.create(SystemConfiguration(key="theme", value="dark", category="ui"))

        found = await repos.system_configurations.get_by_key("theme")

        assert found.value == "dark"

    async def test_list_by_category(self, repos):
        await repos.system_configurations.create(SystemConfiguration(key="b", value="1", category="ui"))
        await repos.system_configurations.create(SystemConfiguration(key="a", value="2", category="ui"))
        await repos.system_configurations.create(SystemConfiguration(key="c", value="3", category="ai"))

        ui_entries = await repos.system_configurations.list_by_category("ui")
        all_entries = await repos.system_configurations.list_by_category()

        assert [e.key for e in ui_entries] == ["a", "b"]
        assert [e.key for e in all_entries] == ["a", "b", "c"]
