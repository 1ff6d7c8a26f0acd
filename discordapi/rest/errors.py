"""Reporting failures back into a channel."""

from typing import Any

import aiohttp

from .message import send_message


async def send_error_message(
    session: aiohttp.ClientSession, token: str, channel_id: str, error_message: str
) -> Any:
    """Post ``Error: <error_message>`` to the channel."""
    return await send_message(session, token, channel_id, f"Error: {error_message}")
