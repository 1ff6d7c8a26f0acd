"""User endpoints, plus the kick/ban shortcuts used by moderation commands."""

from typing import Any, List, Mapping, Optional

import aiohttp

from .http import Route, request


async def get_current_user(session: aiohttp.ClientSession, token: str) -> Any:
    return await request(session, token, Route("GET", "/users/@me"))


async def get_user(session: aiohttp.ClientSession, token: str, user_id: str) -> Any:
    return await request(session, token, Route("GET", "/users/{user_id}", user_id=user_id))


async def modify_current_user(session: aiohttp.ClientSession, token: str, settings: Mapping[str, Any]) -> Any:
    return await request(session, token, Route("PATCH", "/users/@me"), json=settings)


async def get_current_user_guilds(session: aiohttp.ClientSession, token: str) -> Any:
    return await request(session, token, Route("GET", "/users/@me/guilds"))


async def get_current_user_guild_member(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(
        session, token, Route("GET", "/users/@me/guilds/{guild_id}/member", guild_id=guild_id)
    )


async def leave_guild(session: aiohttp.ClientSession, token: str, guild_id: str) -> None:
    await request(session, token, Route("DELETE", "/users/@me/guilds/{guild_id}", guild_id=guild_id))


async def create_dm(session: aiohttp.ClientSession, token: str, recipient_id: str) -> Any:
    """Open (or fetch) the DM channel with a user."""
    return await request(
        session, token, Route("POST", "/users/@me/channels"), json={"recipient_id": recipient_id}
    )


async def create_group_dm(
    session: aiohttp.ClientSession,
    token: str,
    access_tokens: List[str],
    nicks: Mapping[str, str],
) -> Any:
    """Create a group DM from users' OAuth2 access tokens.

    Args:
        access_tokens: Tokens of users that granted ``gdm.join``.
        nicks: Mapping of user ID to nickname.
    """
    return await request(
        session,
        token,
        Route("POST", "/users/@me/channels"),
        json={"access_tokens": list(access_tokens), "nicks": dict(nicks)},
    )


async def get_current_user_connections(session: aiohttp.ClientSession, token: str) -> Any:
    return await request(session, token, Route("GET", "/users/@me/connections"))


async def get_current_user_application_role_connection(
    session: aiohttp.ClientSession, token: str, application_id: str
) -> Any:
    return await request(
        session,
        token,
        Route(
            "GET",
            "/users/@me/applications/{application_id}/role-connection",
            application_id=application_id,
        ),
    )


async def update_current_user_application_role_connection(
    session: aiohttp.ClientSession,
    token: str,
    application_id: str,
    role_connection: Mapping[str, Any],
) -> Any:
    return await request(
        session,
        token,
        Route(
            "PUT",
            "/users/@me/applications/{application_id}/role-connection",
            application_id=application_id,
        ),
        json=role_connection,
    )


async def kick_user(session: aiohttp.ClientSession, token: str, guild_id: str, user_id: str) -> None:
    await request(
        session,
        token,
        Route("DELETE", "/guilds/{guild_id}/members/{user_id}", guild_id=guild_id, user_id=user_id),
    )


async def ban_user(
    session: aiohttp.ClientSession,
    token: str,
    guild_id: str,
    user_id: str,
    delete_message_days: int = 0,
    reason: Optional[str] = None,
) -> None:
    """Ban a user, optionally deleting 0-7 days of their messages.

    The reason is sent both in the body and as the audit log reason.
    """
    body: dict = {"delete_message_days": delete_message_days}
    if reason:
        body["reason"] = reason
    await request(
        session,
        token,
        Route("PUT", "/guilds/{guild_id}/bans/{user_id}", guild_id=guild_id, user_id=user_id),
        json=body,
        reason=reason or None,
    )
