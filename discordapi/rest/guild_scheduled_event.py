"""Guild scheduled event endpoints."""

from typing import Any, Mapping

import aiohttp

from .http import Route, request

# Values accepted by update_scheduled_event_status.
EVENT_STATUSES = {"SCHEDULED": 1, "ACTIVE": 2, "COMPLETED": 3, "CANCELED": 4}


async def list_scheduled_events(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(
        session, token, Route("GET", "/guilds/{guild_id}/scheduled-events", guild_id=guild_id)
    )


async def create_scheduled_event(
    session: aiohttp.ClientSession, token: str, guild_id: str, event_settings: Mapping[str, Any]
) -> Any:
    return await request(
        session,
        token,
        Route("POST", "/guilds/{guild_id}/scheduled-events", guild_id=guild_id),
        json=event_settings,
    )


async def get_scheduled_event(session: aiohttp.ClientSession, token: str, guild_id: str, event_id: str) -> Any:
    return await request(
        session,
        token,
        Route(
            "GET",
            "/guilds/{guild_id}/scheduled-events/{event_id}",
            guild_id=guild_id,
            event_id=event_id,
        ),
    )


async def modify_scheduled_event(
    session: aiohttp.ClientSession,
    token: str,
    guild_id: str,
    event_id: str,
    event_settings: Mapping[str, Any],
) -> Any:
    return await request(
        session,
        token,
        Route(
            "PATCH",
            "/guilds/{guild_id}/scheduled-events/{event_id}",
            guild_id=guild_id,
            event_id=event_id,
        ),
        json=event_settings,
    )


async def delete_scheduled_event(
    session: aiohttp.ClientSession, token: str, guild_id: str, event_id: str
) -> None:
    await request(
        session,
        token,
        Route(
            "DELETE",
            "/guilds/{guild_id}/scheduled-events/{event_id}",
            guild_id=guild_id,
            event_id=event_id,
        ),
    )


async def get_scheduled_event_users(
    session: aiohttp.ClientSession, token: str, guild_id: str, event_id: str
) -> Any:
    return await request(
        session,
        token,
        Route(
            "GET",
            "/guilds/{guild_id}/scheduled-events/{event_id}/users",
            guild_id=guild_id,
            event_id=event_id,
        ),
    )


async def update_scheduled_event_status(
    session: aiohttp.ClientSession, token: str, guild_id: str, event_id: str, status: str
) -> Any:
    """Move an event to a new status.

    ``status`` is one of the EVENT_STATUSES names (case-insensitive);
    Discord expects the numeric value on the wire.

    Raises:
        ValueError: Unknown status name.
    """
    try:
        value = EVENT_STATUSES[status.upper()]
    except KeyError:
        raise ValueError(f"unknown scheduled event status: {status!r}") from None
    return await modify_scheduled_event(session, token, guild_id, event_id, {"status": value})
