"""Message endpoints most command handlers need."""

from typing import Any

import aiohttp

from .http import Route, request


async def send_message(session: aiohttp.ClientSession, token: str, channel_id: str, content: str) -> Any:
    """Post a plain-text message and return the created message object."""
    return await request(
        session,
        token,
        Route("POST", "/channels/{channel_id}/messages", channel_id=channel_id),
        json={"content": content},
    )


async def edit_message(
    session: aiohttp.ClientSession, token: str, channel_id: str, message_id: str, new_content: str
) -> Any:
    return await request(
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


async def delete_message(session: aiohttp.ClientSession, token: str, channel_id: str, message_id: str) -> None:
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


async def pin_message(session: aiohttp.ClientSession, token: str, channel_id: str, message_id: str) -> None:
    await request(
        session,
        token,
        Route("PUT", "/channels/{channel_id}/pins/{message_id}", channel_id=channel_id, message_id=message_id),
    )


async def unpin_message(session: aiohttp.ClientSession, token: str, channel_id: str, message_id: str) -> None:
    await request(
        session,
        token,
        Route("DELETE", "/channels/{channel_id}/pins/{message_id}", channel_id=channel_id, message_id=message_id),
    )
