"""Webhook endpoints.

The ``*_with_token`` variants and the execute/message calls authenticate
with the webhook token in the URL path and send no Authorization header.
"""

from typing import Any, Mapping

import aiohttp

from .http import Route, request


async def create_webhook(
    session: aiohttp.ClientSession, token: str, channel_id: str, webhook_settings: Mapping[str, Any]
) -> Any:
    return await request(
        session,
        token,
        Route("POST", "/channels/{channel_id}/webhooks", channel_id=channel_id),
        json=webhook_settings,
    )


async def get_channel_webhooks(session: aiohttp.ClientSession, token: str, channel_id: str) -> Any:
    return await request(
        session, token, Route("GET", "/channels/{channel_id}/webhooks", channel_id=channel_id)
    )


async def get_guild_webhooks(session: aiohttp.ClientSession, token: str, guild_id: str) -> Any:
    return await request(session, token, Route("GET", "/guilds/{guild_id}/webhooks", guild_id=guild_id))


async def get_webhook(session: aiohttp.ClientSession, token: str, webhook_id: str) -> Any:
    return await request(session, token, Route("GET", "/webhooks/{webhook_id}", webhook_id=webhook_id))


async def get_webhook_with_token(session: aiohttp.ClientSession, webhook_id: str, webhook_token: str) -> Any:
    return await request(
        session,
        None,
        Route(
            "GET",
            "/webhooks/{webhook_id}/{webhook_token}",
            webhook_id=webhook_id,
            webhook_token=webhook_token,
        ),
    )


async def modify_webhook(
    session: aiohttp.ClientSession, token: str, webhook_id: str, settings: Mapping[str, Any]
) -> Any:
    return await request(
        session,
        token,
        Route("PATCH", "/webhooks/{webhook_id}", webhook_id=webhook_id),
        json=settings,
    )


async def modify_webhook_with_token(
    session: aiohttp.ClientSession,
    webhook_id: str,
    webhook_token: str,
    settings: Mapping[str, Any],
) -> Any:
    return await request(
        session,
        None,
        Route(
            "PATCH",
            "/webhooks/{webhook_id}/{webhook_token}",
            webhook_id=webhook_id,
            webhook_token=webhook_token,
        ),
        json=settings,
    )


async def delete_webhook(session: aiohttp.ClientSession, token: str, webhook_id: str) -> None:
    await request(session, token, Route("DELETE", "/webhooks/{webhook_id}", webhook_id=webhook_id))


async def delete_webhook_with_token(session: aiohttp.ClientSession, webhook_id: str, webhook_token: str) -> None:
    await request(
        session,
        None,
        Route(
            "DELETE",
            "/webhooks/{webhook_id}/{webhook_token}",
            webhook_id=webhook_id,
            webhook_token=webhook_token,
        ),
    )


async def execute_webhook(
    session: aiohttp.ClientSession, webhook_id: str, webhook_token: str, payload: Mapping[str, Any]
) -> None:
    """Post a message through a webhook (``content``, ``embeds``, ``username``, ...)."""
    await request(
        session,
        None,
        Route(
            "POST",
            "/webhooks/{webhook_id}/{webhook_token}",
            webhook_id=webhook_id,
            webhook_token=webhook_token,
        ),
        json=payload,
    )


async def execute_slack_compatible_webhook(
    session: aiohttp.ClientSession, webhook_id: str, webhook_token: str, payload: Mapping[str, Any]
) -> None:
    await request(
        session,
        None,
        Route(
            "POST",
            "/webhooks/{webhook_id}/{webhook_token}/slack",
            webhook_id=webhook_id,
            webhook_token=webhook_token,
        ),
        json=payload,
    )


async def execute_github_compatible_webhook(
    session: aiohttp.ClientSession, webhook_id: str, webhook_token: str, payload: Mapping[str, Any]
) -> None:
    await request(
        session,
        None,
        Route(
            "POST",
            "/webhooks/{webhook_id}/{webhook_token}/github",
            webhook_id=webhook_id,
            webhook_token=webhook_token,
        ),
        json=payload,
    )


async def get_webhook_message(
    session: aiohttp.ClientSession, webhook_id: str, webhook_token: str, message_id: str
) -> Any:
    return await request(
        session,
        None,
        Route(
            "GET",
            "/webhooks/{webhook_id}/{webhook_token}/messages/{message_id}",
            webhook_id=webhook_id,
            webhook_token=webhook_token,
            message_id=message_id,
        ),
    )


async def edit_webhook_message(
    session: aiohttp.ClientSession,
    webhook_id: str,
    webhook_token: str,
    message_id: str,
    new_content: Mapping[str, Any],
) -> Any:
    return await request(
        session,
        None,
        Route(
            "PATCH",
            "/webhooks/{webhook_id}/{webhook_token}/messages/{message_id}",
            webhook_id=webhook_id,
            webhook_token=webhook_token,
            message_id=message_id,
        ),
        json=new_content,
    )


async def delete_webhook_message(
    session: aiohttp.ClientSession, webhook_id: str, webhook_token: str, message_id: str
) -> None:
    await request(
        session,
        None,
        Route(
            "DELETE",
            "/webhooks/{webhook_id}/{webhook_token}/messages/{message_id}",
            webhook_id=webhook_id,
            webhook_token=webhook_token,
            message_id=message_id,
        ),
    )
