"""Guild endpoints: settings, channels, members, bans, roles, and widgets."""

from typing import Any, List, Mapping

import aiohttp

from .http import Route, request


# --- Guild ---

async def create_guild(session: aiohttp.ClientSession, token: str, guild_settings: Mapping[str, Any]) -> Any:
    return await request(session, token, Route("POST", "/guilds"), json=guild_settings)


async def get_guild(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(session, token, Route("GET", "/guilds/{guild_id}", guild_id=guild_id))


async def get_guild_preview(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(session, token, Route("GET", "/guilds/{guild_id}/preview", guild_id=guild_id))


async def modify_guild(
    session: aiohttp.ClientSession, token: str, guild_id: str, settings: Mapping[str, Any]
) -> None:
    await request(session, token, Route("PATCH", "/guilds/{guild_id}", guild_id=guild_id), json=settings)


async def delete_guild(session: aiohttp.ClientSession, token: str, guild_id: str) -> None:
    """Delete a guild. The bot must own it."""
    await request(session, token, Route("DELETE", "/guilds/{guild_id}", guild_id=guild_id))


# --- Channels and threads ---

async def get_guild_channels(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(session, token, Route("GET", "/guilds/{guild_id}/channels", guild_id=guild_id))


async def create_guild_channel(
    session: aiohttp.ClientSession, token: str, guild_id: str, channel_settings: Mapping[str, Any]
) -> Any:
    return await request(
        session,
        token,
        Route("POST", "/guilds/{guild_id}/channels", guild_id=guild_id),
        json=channel_settings,
    )


async def modify_guild_channel_positions(
    session: aiohttp.ClientSession, token: str, guild_id: str, positions: List[Mapping[str, Any]]
) -> None:
    """Reorder channels. ``positions`` is a list of ``{"id", "position"}`` objects."""
    await request(
        session,
        token,
        Route("PATCH", "/guilds/{guild_id}/channels", guild_id=guild_id),
        json=positions,
    )


async def list_active_guild_threads(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(
        session, token, Route("GET", "/guilds/{guild_id}/threads/active", guild_id=guild_id)
    )


# --- Members ---

async def get_guild_member(session: aiohttp.ClientSession, token: str, guild_id: str, user_id: str) -> Any:
    return await request(
        session,
        token,
        Route("GET", "/guilds/{guild_id}/members/{user_id}", guild_id=guild_id, user_id=user_id),
    )


async def list_guild_members(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(session, token, Route("GET", "/guilds/{guild_id}/members", guild_id=guild_id))


async def search_guild_members(session: aiohttp.ClientSession, token: str, guild_id: str, query: str) -> Any:
    """Members whose username or nickname starts with ``query``."""
    return await request(
        session,
        token,
        Route("GET", "/guilds/{guild_id}/members/search", guild_id=guild_id),
        params={"query": query},
    )


async def add_guild_member(
    session: aiohttp.ClientSession,
    token: str,
    guild_id: str,
    user_id: str,
    member_settings: Mapping[str, Any],
) -> Any:
    """Add a user to the guild. ``member_settings`` must include their OAuth2 ``access_token``."""
    return await request(
        session,
        token,
        Route("PUT", "/guilds/{guild_id}/members/{user_id}", guild_id=guild_id, user_id=user_id),
        json=member_settings,
    )


async def modify_guild_member(
    session: aiohttp.ClientSession,
    token: str,
    guild_id: str,
    user_id: str,
    settings: Mapping[str, Any],
) -> None:
    await request(
        session,
        token,
        Route("PATCH", "/guilds/{guild_id}/members/{user_id}", guild_id=guild_id, user_id=user_id),
        json=settings,
    )


async def modify_current_member(
    session: aiohttp.ClientSession, token: str, guild_id: str, settings: Mapping[str, Any]
) -> None:
    await request(
        session,
        token,
        Route("PATCH", "/guilds/{guild_id}/members/@me", guild_id=guild_id),
        json=settings,
    )


async def modify_current_user_nick(session: aiohttp.ClientSession, token: str, guild_id: str, nick: str) -> None:
    await request(
        session,
        token,
        Route("PATCH", "/guilds/{guild_id}/members/@me/nick", guild_id=guild_id),
        json={"nick": nick},
    )


async def add_guild_member_role(
    session: aiohttp.ClientSession, token: str, guild_id: str, user_id: str, role_id: str
) -> None:
    await request(
        session,
        token,
        Route(
            "PUT",
            "/guilds/{guild_id}/members/{user_id}/roles/{role_id}",
            guild_id=guild_id,
            user_id=user_id,
            role_id=role_id,
        ),
    )


async def remove_guild_member_role(
    session: aiohttp.ClientSession, token: str, guild_id: str, user_id: str, role_id: str
) -> None:
    await request(
        session,
        token,
        Route(
            "DELETE",
            "/guilds/{guild_id}/members/{user_id}/roles/{role_id}",
            guild_id=guild_id,
            user_id=user_id,
            role_id=role_id,
        ),
    )


async def remove_guild_member(session: aiohttp.ClientSession, token: str, guild_id: str, user_id: str) -> None:
    """Kick a member."""
    await request(
        session,
        token,
        Route("DELETE", "/guilds/{guild_id}/members/{user_id}", guild_id=guild_id, user_id=user_id),
    )


# --- Bans ---

async def get_guild_bans(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(session, token, Route("GET", "/guilds/{guild_id}/bans", guild_id=guild_id))


async def get_guild_ban(session: aiohttp.ClientSession, token: str, guild_id: str, user_id: str) -> Any:
    return await request(
        session,
        token,
        Route("GET", "/guilds/{guild_id}/bans/{user_id}", guild_id=guild_id, user_id=user_id),
    )


async def create_guild_ban(
    session: aiohttp.ClientSession,
    token: str,
    guild_id: str,
    user_id: str,
    ban_settings: Mapping[str, Any],
) -> None:
    await request(
        session,
        token,
        Route("PUT", "/guilds/{guild_id}/bans/{user_id}", guild_id=guild_id, user_id=user_id),
        json=ban_settings,
    )


async def remove_guild_ban(session: aiohttp.ClientSession, token: str, guild_id: str, user_id: str) -> None:
    await request(
        session,
        token,
        Route("DELETE", "/guilds/{guild_id}/bans/{user_id}", guild_id=guild_id, user_id=user_id),
    )


async def bulk_guild_ban(session: aiohttp.ClientSession, token: str, guild_id: str, user_ids: List[str]) -> None:
    await request(
        session,
        token,
        Route("POST", "/guilds/{guild_id}/bans", guild_id=guild_id),
        json={"user_ids": list(user_ids)},
    )


# --- Roles ---

async def get_guild_roles(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(session, token, Route("GET", "/guilds/{guild_id}/roles", guild_id=guild_id))


async def create_guild_role(
    session: aiohttp.ClientSession, token: str, guild_id: str, role_settings: Mapping[str, Any]
) -> Any:
    return await request(
        session,
        token,
        Route("POST", "/guilds/{guild_id}/roles", guild_id=guild_id),
        json=role_settings,
    )


async def modify_guild_role_positions(
    session: aiohttp.ClientSession, token: str, guild_id: str, positions: List[Mapping[str, Any]]
) -> None:
    await request(
        session,
        token,
        Route("PATCH", "/guilds/{guild_id}/roles", guild_id=guild_id),
        json=positions,
    )


async def modify_guild_role(
    session: aiohttp.ClientSession,
    token: str,
    guild_id: str,
    role_id: str,
    settings: Mapping[str, Any],
) -> None:
    await request(
        session,
        token,
        Route("PATCH", "/guilds/{guild_id}/roles/{role_id}", guild_id=guild_id, role_id=role_id),
        json=settings,
    )


async def delete_guild_role(session: aiohttp.ClientSession, token: str, guild_id: str, role_id: str) -> None:
    await request(
        session,
        token,
        Route("DELETE", "/guilds/{guild_id}/roles/{role_id}", guild_id=guild_id, role_id=role_id),
    )


async def modify_guild_mfa_level(session: aiohttp.ClientSession, token: str, guild_id: str, level: int) -> None:
    await request(
        session,
        token,
        Route("POST", "/guilds/{guild_id}/mfa", guild_id=guild_id),
        json={"level": level},
    )


# --- Prune ---

async def get_guild_prune_count(session: aiohttp.ClientSession, token: str, guild_id: str, days: int) -> Any:
    """How many members a prune of ``days`` of inactivity would remove."""
    return await request(
        session,
        token,
        Route("GET", "/guilds/{guild_id}/prune", guild_id=guild_id),
        params={"days": days},
    )


async def begin_guild_prune(session: aiohttp.ClientSession, token: str, guild_id: str, days: int) -> Any:
    return await request(
        session,
        token,
        Route("POST", "/guilds/{guild_id}/prune", guild_id=guild_id),
        json={"days": days},
    )


# --- Regions, invites, integrations ---

async def get_guild_voice_regions(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(session, token, Route("GET", "/guilds/{guild_id}/regions", guild_id=guild_id))


async def get_guild_invites(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(session, token, Route("GET", "/guilds/{guild_id}/invites", guild_id=guild_id))


async def get_guild_integrations(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(
        session, token, Route("GET", "/guilds/{guild_id}/integrations", guild_id=guild_id)
    )


async def delete_guild_integration(
    session: aiohttp.ClientSession, token: str, guild_id: str, integration_id: str
) -> None:
    await request(
        session,
        token,
        Route(
            "DELETE",
            "/guilds/{guild_id}/integrations/{integration_id}",
            guild_id=guild_id,
            integration_id=integration_id,
        ),
    )


# --- Widget, vanity URL, welcome screen, onboarding ---

async def get_guild_widget_settings(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(session, token, Route("GET", "/guilds/{guild_id}/widget", guild_id=guild_id))


async def modify_guild_widget_settings(
    session: aiohttp.ClientSession, token: str, guild_id: str, settings: Mapping[str, Any]
) -> None:
    await request(
        session,
        token,
        Route("PATCH", "/guilds/{guild_id}/widget", guild_id=guild_id),
        json=settings,
    )


async def get_guild_widget(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(session, token, Route("GET", "/guilds/{guild_id}/widget.json", guild_id=guild_id))


async def get_guild_vanity_url(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(session, token, Route("GET", "/guilds/{guild_id}/vanity-url", guild_id=guild_id))


async def get_guild_widget_image(session: aiohttp.ClientSession, token: str, guild_id: str) -> bytes:
    """Fetch the PNG widget image. The endpoint is public, so no token is sent."""
    return await request(
        session,
        None,
        Route("GET", "/guilds/{guild_id}/widget.png", guild_id=guild_id),
        raw=True,
    )


async def get_guild_welcome_screen(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(
        session, token, Route("GET", "/guilds/{guild_id}/welcome-screen", guild_id=guild_id)
    )


async def modify_guild_welcome_screen(
    session: aiohttp.ClientSession, token: str, guild_id: str, settings: Mapping[str, Any]
) -> None:
    await request(
        session,
        token,
        Route("PATCH", "/guilds/{guild_id}/welcome-screen", guild_id=guild_id),
        json=settings,
    )


async def get_guild_onboarding(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(session, token, Route("GET", "/guilds/{guild_id}/onboarding", guild_id=guild_id))


async def modify_guild_onboarding(
    session: aiohttp.ClientSession, token: str, guild_id: str, settings: Mapping[str, Any]
) -> None:
    await request(
        session,
        token,
        Route("PUT", "/guilds/{guild_id}/onboarding", guild_id=guild_id),
        json=settings,
    )


# --- Voice state ---

async def modify_current_user_voice_state(
    session: aiohttp.ClientSession, token: str, guild_id: str, settings: Mapping[str, Any]
) -> None:
    await request(
        session,
        token,
        Route("PATCH", "/guilds/{guild_id}/voice-states/@me", guild_id=guild_id),
        json=settings,
    )


async def modify_user_voice_state(
    session: aiohttp.ClientSession,
    token: str,
    guild_id: str,
    user_id: str,
    settings: Mapping[str, Any],
) -> None:
    await request(
        session,
        token,
        Route(
            "PATCH",
            "/guilds/{guild_id}/voice-states/{user_id}",
            guild_id=guild_id,
            user_id=user_id,
        ),
        json=settings,
    )
