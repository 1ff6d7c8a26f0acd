"""Role assignment shortcuts."""

from typing import Any

import aiohttp

from .http import Route, request


async def add_role(
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


async def remove_role(
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


async def fetch_role_info(session: aiohttp.ClientSession, token: str, guild_id: str, role_id: str) -> Any:
    return await request(
        session,
        token,
        Route("GET", "/guilds/{guild_id}/roles/{role_id}", guild_id=guild_id, role_id=role_id),
    )
