"""Sticker endpoints."""

from typing import Any, Mapping

import aiohttp

from .http import Route, request


async def get_sticker(session: aiohttp.ClientSession, token: str, sticker_id: str) -> Any:
    return await request(session, token, Route("GET", "/stickers/{sticker_id}", sticker_id=sticker_id))


async def list_sticker_packs(session: aiohttp.ClientSession, token: str) -> Any:
    return await request(session, token, Route("GET", "/sticker-packs"))


async def list_guild_stickers(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(session, token, Route("GET", "/guilds/{guild_id}/stickers", guild_id=guild_id))


async def get_guild_sticker(session: aiohttp.ClientSession, token: str, guild_id: str, sticker_id: str) -> Any:
    return await request(
        session,
        token,
        Route("GET", "/guilds/{guild_id}/stickers/{sticker_id}", guild_id=guild_id, sticker_id=sticker_id),
    )


async def create_guild_sticker(
    session: aiohttp.ClientSession, token: str, guild_id: str, sticker_data: Mapping[str, Any]
) -> Any:
    return await request(
        session,
        token,
        Route("POST", "/guilds/{guild_id}/stickers", guild_id=guild_id),
        json=sticker_data,
    )


async def modify_guild_sticker(
    session: aiohttp.ClientSession,
    token: str,
    guild_id: str,
    sticker_id: str,
    sticker_data: Mapping[str, Any],
) -> Any:
    return await request(
        session,
        token,
        Route("PATCH", "/guilds/{guild_id}/stickers/{sticker_id}", guild_id=guild_id, sticker_id=sticker_id),
        json=sticker_data,
    )


async def delete_guild_sticker(session: aiohttp.ClientSession, token: str, guild_id: str, sticker_id: str) -> None:
    await request(
        session,
        token,
        Route("DELETE", "/guilds/{guild_id}/stickers/{sticker_id}", guild_id=guild_id, sticker_id=sticker_id),
    )
