"""Channel, reaction, pin, invite, and thread endpoints."""

from typing import Any, List, Mapping
from urllib.parse import quote

import aiohttp

from .http import Route, request


def _emoji(emoji: str) -> str:
    # Unicode emoji and ``name:id`` custom emoji must be percent-encoded in paths.
    return quote(emoji, safe="")


async def fetch_channel_info(session: aiohttp.ClientSession, token: str, channel_id: str) -> Any:
    """Fetch a channel object."""
    return await request(session, token, Route("GET", "/channels/{channel_id}", channel_id=channel_id))


async def modify_channel(
    session: aiohttp.ClientSession, token: str, channel_id: str, settings: Mapping[str, Any]
) -> None:
    """Update a channel's settings (name, topic, nsfw, ...)."""
    await request(
        session, token, Route("PATCH", "/channels/{channel_id}", channel_id=channel_id), json=settings
    )


async def delete_channel(session: aiohttp.ClientSession, token: str, channel_id: str) -> None:
    """Delete a channel, or close a DM."""
    await request(session, token, Route("DELETE", "/channels/{channel_id}", channel_id=channel_id))


async def get_channel_messages(session: aiohttp.ClientSession, token: str, channel_id: str) -> Any:
    return await request(
        session, token, Route("GET", "/channels/{channel_id}/messages", channel_id=channel_id)
    )


async def get_channel_message(
    session: aiohttp.ClientSession, token: str, channel_id: str, message_id: str
) -> Any:
    return await request(
        session,
        token,
        Route(
            "GET",
            "/channels/{channel_id}/messages/{message_id}",
            channel_id=channel_id,
            message_id=message_id,
        ),
    )


async def crosspost_message(
    session: aiohttp.ClientSession, token: str, channel_id: str, message_id: str
) -> None:
    """Publish a message in an announcement channel to following channels."""
    await request(
        session,
        token,
        Route(
            "POST",
            "/channels/{channel_id}/messages/{message_id}/crosspost",
            channel_id=channel_id,
            message_id=message_id,
        ),
    )


# --- Reactions ---

async def create_reaction(
    session: aiohttp.ClientSession, token: str, channel_id: str, message_id: str, emoji: str
) -> None:
    """React to a message as the current user."""
    await request(
        session,
        token,
        Route(
            "PUT",
            "/channels/{channel_id}/messages/{message_id}/reactions/{emoji}/@me",
            channel_id=channel_id,
            message_id=message_id,
            emoji=_emoji(emoji),
        ),
    )


async def delete_own_reaction(
    session: aiohttp.ClientSession, token: str, channel_id: str, message_id: str, emoji: str
) -> None:
    await request(
        session,
        token,
        Route(
            "DELETE",
            "/channels/{channel_id}/messages/{message_id}/reactions/{emoji}/@me",
            channel_id=channel_id,
            message_id=message_id,
            emoji=_emoji(emoji),
        ),
    )


async def delete_user_reaction(
    session: aiohttp.ClientSession,
    token: str,
    channel_id: str,
    message_id: str,
    emoji: str,
    user_id: str,
) -> None:
    await request(
        session,
        token,
        Route(
            "DELETE",
            "/channels/{channel_id}/messages/{message_id}/reactions/{emoji}/{user_id}",
            channel_id=channel_id,
            message_id=message_id,
            emoji=_emoji(emoji),
            user_id=user_id,
        ),
    )


async def get_reactions(
    session: aiohttp.ClientSession, token: str, channel_id: str, message_id: str
) -> Any:
    return await request(
        session,
        token,
        Route(
            "GET",
            "/channels/{channel_id}/messages/{message_id}/reactions",
            channel_id=channel_id,
            message_id=message_id,
        ),
    )


async def delete_all_reactions(
    session: aiohttp.ClientSession, token: str, channel_id: str, message_id: str
) -> None:
    await request(
        session,
        token,
        Route(
            "DELETE",
            "/channels/{channel_id}/messages/{message_id}/reactions",
            channel_id=channel_id,
            message_id=message_id,
        ),
    )


async def delete_all_reactions_for_emoji(
    session: aiohttp.ClientSession, token: str, channel_id: str, message_id: str, emoji: str
) -> None:
    await request(
        session,
        token,
        Route(
            "DELETE",
            "/channels/{channel_id}/messages/{message_id}/reactions/{emoji}",
            channel_id=channel_id,
            message_id=message_id,
            emoji=_emoji(emoji),
        ),
    )


# --- Messages ---

async def edit_message(
    session: aiohttp.ClientSession, token: str, channel_id: str, message_id: str, new_content: str
) -> None:
    await request(
        session,
        token,
        Route(
            "PATCH",
            "/channels/{channel_id}/messages/{message_id}",
            channel_id=channel_id,
            message_id=message_id,
        ),
        json={"content": new_content},
    )


async def delete_message(
    session: aiohttp.ClientSession, token: str, channel_id: str, message_id: str
) -> None:
    await request(
        session,
        token,
        Route(
            "DELETE",
            "/channels/{channel_id}/messages/{message_id}",
            channel_id=channel_id,
            message_id=message_id,
        ),
    )


async def bulk_delete_messages(
    session: aiohttp.ClientSession, token: str, channel_id: str, message_ids: List[str]
) -> None:
    """Delete 2-100 messages in one call."""
    await request(
        session,
        token,
        Route("POST", "/channels/{channel_id}/messages/bulk-delete", channel_id=channel_id),
        json={"messages": list(message_ids)},
    )


# --- Permissions and invites ---

async def edit_channel_permissions(
    session: aiohttp.ClientSession,
    token: str,
    channel_id: str,
    overwrite_id: str,
    permissions: Mapping[str, Any],
) -> None:
    await request(
        session,
        token,
        Route(
            "PUT",
            "/channels/{channel_id}/permissions/{overwrite_id}",
            channel_id=channel_id,
            overwrite_id=overwrite_id,
        ),
        json=permissions,
    )


async def delete_channel_permission(
    session: aiohttp.ClientSession, token: str, channel_id: str, overwrite_id: str
) -> None:
    await request(
        session,
        token,
        Route(
            "DELETE",
            "/channels/{channel_id}/permissions/{overwrite_id}",
            channel_id=channel_id,
            overwrite_id=overwrite_id,
        ),
    )


async def get_channel_invites(session: aiohttp.ClientSession, token: str, channel_id: str) -> Any:
    return await request(
        session, token, Route("GET", "/channels/{channel_id}/invites", channel_id=channel_id)
    )


async def create_channel_invite(
    session: aiohttp.ClientSession, token: str, channel_id: str, invite_settings: Mapping[str, Any]
) -> Any:
    return await request(
        session,
        token,
        Route("POST", "/channels/{channel_id}/invites", channel_id=channel_id),
        json=invite_settings,
    )


async def follow_announcement_channel(
    session: aiohttp.ClientSession, token: str, channel_id: str, webhook_channel_id: str
) -> Any:
    """Follow an announcement channel into ``webhook_channel_id``."""
    return await request(
        session,
        token,
        Route("POST", "/channels/{channel_id}/followers", channel_id=channel_id),
        json={"webhook_channel_id": webhook_channel_id},
    )


async def trigger_typing_indicator(session: aiohttp.ClientSession, token: str, channel_id: str) -> None:
    await request(session, token, Route("POST", "/channels/{channel_id}/typing", channel_id=channel_id))


# --- Pins ---

async def get_pinned_messages(session: aiohttp.ClientSession, token: str, channel_id: str) -> Any:
    return await request(session, token, Route("GET", "/channels/{channel_id}/pins", channel_id=channel_id))


async def pin_message(
    session: aiohttp.ClientSession, token: str, channel_id: str, message_id: str
) -> None:
    await request(
        session,
        token,
        Route(
            "PUT", "/channels/{channel_id}/pins/{message_id}", channel_id=channel_id, message_id=message_id
        ),
    )


async def unpin_message(
    session: aiohttp.ClientSession, token: str, channel_id: str, message_id: str
) -> None:
    await request(
        session,
        token,
        Route(
            "DELETE",
            "/channels/{channel_id}/pins/{message_id}",
            channel_id=channel_id,
            message_id=message_id,
        ),
    )


# --- Group DMs ---

async def group_dm_add_recipient(
    session: aiohttp.ClientSession,
    token: str,
    channel_id: str,
    user_id: str,
    access_token: str,
    nick: str,
) -> None:
    """Add a user to a group DM using their OAuth2 access token."""
    await request(
        session,
        token,
        Route(
            "PUT", "/channels/{channel_id}/recipients/{user_id}", channel_id=channel_id, user_id=user_id
        ),
        json={"access_token": access_token, "nick": nick},
    )


async def group_dm_remove_recipient(
    session: aiohttp.ClientSession, token: str, channel_id: str, user_id: str
) -> None:
    await request(
        session,
        token,
        Route(
            "DELETE",
            "/channels/{channel_id}/recipients/{user_id}",
            channel_id=channel_id,
            user_id=user_id,
        ),
    )


# --- Threads ---

async def start_thread_from_message(
    session: aiohttp.ClientSession,
    token: str,
    channel_id: str,
    message_id: str,
    thread_settings: Mapping[str, Any],
) -> Any:
    return await request(
        session,
        token,
        Route(
            "POST",
            "/channels/{channel_id}/messages/{message_id}/threads",
            channel_id=channel_id,
            message_id=message_id,
        ),
        json=thread_settings,
    )


async def start_thread_without_message(
    session: aiohttp.ClientSession, token: str, channel_id: str, thread_settings: Mapping[str, Any]
) -> Any:
    return await request(
        session,
        token,
        Route("POST", "/channels/{channel_id}/threads", channel_id=channel_id),
        json=thread_settings,
    )


async def join_thread(session: aiohttp.ClientSession, token: str, channel_id: str) -> None:
    await request(
        session, token, Route("PUT", "/channels/{channel_id}/thread-members/@me", channel_id=channel_id)
    )


async def add_thread_member(
    session: aiohttp.ClientSession, token: str, channel_id: str, user_id: str
) -> None:
    await request(
        session,
        token,
        Route(
            "PUT",
            "/channels/{channel_id}/thread-members/{user_id}",
            channel_id=channel_id,
            user_id=user_id,
        ),
    )


async def remove_thread_member(
    session: aiohttp.ClientSession, token: str, channel_id: str, user_id: str
) -> None:
    await request(
        session,
        token,
        Route(
            "DELETE",
            "/channels/{channel_id}/thread-members/{user_id}",
            channel_id=channel_id,
            user_id=user_id,
        ),
    )


async def get_thread_member(
    session: aiohttp.ClientSession, token: str, channel_id: str, user_id: str
) -> Any:
    return await request(
        session,
        token,
        Route(
            "GET",
            "/channels/{channel_id}/thread-members/{user_id}",
            channel_id=channel_id,
            user_id=user_id,
        ),
    )


async def list_thread_members(session: aiohttp.ClientSession, token: str, channel_id: str) -> Any:
    return await request(
        session, token, Route("GET", "/channels/{channel_id}/thread-members", channel_id=channel_id)
    )


async def list_public_archived_threads(session: aiohttp.ClientSession, token: str, channel_id: str) -> Any:
    return await request(
        session,
        token,
        Route("GET", "/channels/{channel_id}/threads/archived/public", channel_id=channel_id),
    )


async def list_private_archived_threads(session: aiohttp.ClientSession, token: str, channel_id: str) -> Any:
    return await request(
        session,
        token,
        Route("GET", "/channels/{channel_id}/threads/archived/private", channel_id=channel_id),
    )


async def list_joined_private_archived_threads(
    session: aiohttp.ClientSession, token: str, channel_id: str
) -> Any:
    return await request(
        session,
        token,
        Route(
            "GET",
            "/channels/{channel_id}/users/@me/threads/archived/private",
            channel_id=channel_id,
        ),
    )
