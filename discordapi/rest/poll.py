"""Poll endpoints."""

from typing import Any, Optional

import aiohttp

from .http import Route, request


async def get_answer_voters(
    session: aiohttp.ClientSession,
    token: str,
    channel_id: str,
    message_id: str,
    answer_id: str,
    after: Optional[str] = None,
    limit: Optional[int] = None,
) -> Any:
    """Fetch users who voted for one answer of a poll.

    Args:
        after: Only return users with an ID after this one.
        limit: Max number of users to return (1-100).

    ``after`` and ``limit`` are only put on the query string when given.

    Raises:
        ValueError: ``limit`` is outside 1-100.
    """
    if limit is not None and not 1 <= limit <= 100:
        raise ValueError(f"limit must be between 1 and 100, got {limit}")

    return await request(
        session,
        token,
        Route(
            "GET",
            "/channels/{channel_id}/polls/{message_id}/answers/{answer_id}",
            channel_id=channel_id,
            message_id=message_id,
            answer_id=answer_id,
        ),
        params={"after": after, "limit": limit},
    )


async def end_poll(session: aiohttp.ClientSession, token: str, channel_id: str, message_id: str) -> Any:
    """Close a poll early. Returns the updated message."""
    return await request(
        session,
        token,
        Route(
            "POST",
            "/channels/{channel_id}/polls/{message_id}/expire",
            channel_id=channel_id,
            message_id=message_id,
        ),
    )
