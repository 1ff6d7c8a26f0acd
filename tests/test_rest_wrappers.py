"""Tests for a sample of the REST wrappers."""

from unittest.mock import AsyncMock, patch

import pytest

from conftest import FakeResponse
from discordapi.rest import (
    channel,
    embed,
    errors,
    guild,
    guild_scheduled_event,
    message,
    permissions,
    poll,
    user,
    webhook,
)
from discordapi.rest.http import BASE_URL
from discordapi.rest.permissions import Permissions, compute_base_permissions


# -------------------------------------------------------------------
# Messages
# -------------------------------------------------------------------

@pytest.mark.asyncio
async def test_send_message_returns_created_message(fake_session):
    session = fake_session(FakeResponse(200, {"id": "77", "content": "hi"}))
    result = await message.send_message(session, "tok", "5", "hi")
    assert result["id"] == "77"
    assert session.last["url"] == f"{BASE_URL}/channels/5/messages"
    assert session.last["json"] == {"content": "hi"}


@pytest.mark.asyncio
async def test_send_error_message_prefixes_text(fake_session):
    session = fake_session(FakeResponse(200, {}))
    await errors.send_error_message(session, "tok", "5", "boom")
    assert session.last["json"] == {"content": "Error: boom"}


@pytest.mark.asyncio
async def test_send_embed_message(fake_session):
    session = fake_session(FakeResponse(200, {}))
    await embed.send_embed_message(session, "tok", "5", "Title", "Body")
    assert session.last["json"] == {
        "embeds": [{"title": "Title", "description": "Body", "color": embed.DEFAULT_COLOR}]
    }


def test_embed_includes_fields_when_present():
    data = embed.Embed(title="t", fields=[embed.EmbedField(name="a", value="b")]).to_json()
    assert data["fields"] == [{"name": "a", "value": "b", "inline": False}]
    assert "description" not in data


@pytest.mark.asyncio
async def test_reaction_emoji_is_percent_encoded(fake_session):
    session = fake_session()
    await channel.create_reaction(session, "tok", "1", "2", "👍")
    assert session.last["method"] == "PUT"
    assert session.last["url"] == f"{BASE_URL}/channels/1/messages/2/reactions/%F0%9F%91%8D/@me"


# -------------------------------------------------------------------
# Polls
# -------------------------------------------------------------------

@pytest.mark.asyncio
async def test_answer_voters_query_string(fake_session):
    session = fake_session(FakeResponse(200, {"users": []}))
    await poll.get_answer_voters(session, "tok", "1", "2", "3", after="100", limit=25)
    assert session.last["url"] == f"{BASE_URL}/channels/1/polls/2/answers/3"
    assert session.last["params"] == {"after": "100", "limit": "25"}


@pytest.mark.asyncio
async def test_answer_voters_omits_unset_params(fake_session):
    session = fake_session(FakeResponse(200, {"users": []}))
    await poll.get_answer_voters(session, "tok", "1", "2", "3")
    assert session.last["params"] == {}


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", [0, 101])
async def test_answer_voters_rejects_bad_limit(fake_session, limit):
    session = fake_session()
    with pytest.raises(ValueError):
        await poll.get_answer_voters(session, "tok", "1", "2", "3", limit=limit)
    assert session.calls == []


@pytest.mark.asyncio
async def test_end_poll(fake_session):
    session = fake_session(FakeResponse(200, {"id": "2"}))
    await poll.end_poll(session, "tok", "1", "2")
    assert (session.last["method"], session.last["url"]) == ("POST", f"{BASE_URL}/channels/1/polls/2/expire")


# -------------------------------------------------------------------
# Webhooks, guilds, users
# -------------------------------------------------------------------

@pytest.mark.asyncio
async def test_execute_webhook_is_unauthenticated(fake_session):
    session = fake_session()
    await webhook.execute_webhook(session, "10", "secret", {"content": "hi"})
    assert session.last["url"] == f"{BASE_URL}/webhooks/10/secret"
    assert "Authorization" not in session.last["headers"]


@pytest.mark.asyncio
async def test_widget_image_returns_bytes(fake_session):
    session = fake_session(FakeResponse(200, b"\x89PNG"))
    assert await guild.get_guild_widget_image(session, "tok", "1") == b"\x89PNG"
    assert "Authorization" not in session.last["headers"]


@pytest.mark.asyncio
async def test_ban_user_sends_reason_in_body_and_header(fake_session):
    session = fake_session()
    await user.ban_user(session, "tok", "1", "2", delete_message_days=1, reason="spam")
    call = session.last
    assert call["method"] == "PUT"
    assert call["url"] == f"{BASE_URL}/guilds/1/bans/2"
    assert call["json"] == {"delete_message_days": 1, "reason": "spam"}
    assert call["headers"]["X-Audit-Log-Reason"] == "spam"


@pytest.mark.asyncio
async def test_list_scheduled_events(fake_session):
    session = fake_session(FakeResponse(200, []))
    assert await guild_scheduled_event.list_scheduled_events(session, "tok", "1") == []
    assert session.last["url"] == f"{BASE_URL}/guilds/1/scheduled-events"


@pytest.mark.asyncio
async def test_update_scheduled_event_status_maps_name(fake_session):
    session = fake_session(FakeResponse(200, {"status": 2}))
    await guild_scheduled_event.update_scheduled_event_status(session, "tok", "1", "9", "active")
    assert session.last["method"] == "PATCH"
    assert session.last["json"] == {"status": 2}


@pytest.mark.asyncio
async def test_update_scheduled_event_status_rejects_unknown(fake_session):
    with pytest.raises(ValueError):
        await guild_scheduled_event.update_scheduled_event_status(fake_session(), "tok", "1", "9", "paused")


# -------------------------------------------------------------------
# Permissions
# -------------------------------------------------------------------

GUILD = {
    "id": "1",
    "owner_id": "100",
    "roles": [
        {"id": "1", "permissions": str(int(Permissions.VIEW_CHANNEL | Permissions.SEND_MESSAGES))},
        {"id": "20", "permissions": str(int(Permissions.MANAGE_MESSAGES))},
        {"id": "30", "permissions": str(int(Permissions.ADMINISTRATOR))},
    ],
}


def test_everyone_role_applies_to_all_members():
    perms = compute_base_permissions(GUILD, {"user": {"id": "5"}, "roles": []})
    assert Permissions.SEND_MESSAGES in perms
    assert Permissions.MANAGE_MESSAGES not in perms


def test_member_roles_are_combined():
    perms = compute_base_permissions(GUILD, {"user": {"id": "5"}, "roles": ["20"]})
    assert Permissions.MANAGE_MESSAGES in perms
    assert Permissions.BAN_MEMBERS not in perms


def test_owner_and_administrator_have_everything():
    owner = compute_base_permissions(GUILD, {"user": {"id": "100"}, "roles": []})
    admin = compute_base_permissions(GUILD, {"user": {"id": "5"}, "roles": ["30"]})
    assert Permissions.BAN_MEMBERS in owner
    assert Permissions.BAN_MEMBERS in admin


@pytest.mark.asyncio
async def test_check_permission_by_name():
    member = {"user": {"id": "5"}, "roles": ["20"]}
    with patch.object(permissions, "get_guild_member", AsyncMock(return_value=member)), \
            patch.object(permissions, "get_guild", AsyncMock(return_value=GUILD)):
        assert await permissions.check_permission(None, "tok", "1", "5", "manage_messages") is True
        assert await permissions.check_permission(None, "tok", "1", "5", Permissions.KICK_MEMBERS) is False


@pytest.mark.asyncio
async def test_check_permission_unknown_name():
    with pytest.raises(ValueError, match="unknown permission"):
        await permissions.check_permission(None, "tok", "1", "5", "fly")
