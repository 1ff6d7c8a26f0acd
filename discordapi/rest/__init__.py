"""Thin wrappers over the Discord REST API.

One coroutine per endpoint, grouped by resource. Every call takes the
shared aiohttp session and the bot token first, makes exactly one
request, and returns the decoded JSON (or None). Failures raise
discordapi.exceptions.HTTPException; nothing is retried.
"""

from . import (
    channel,
    embed,
    errors,
    guild,
    guild_scheduled_event,
    message,
    permissions,
    poll,
    role,
    sticker,
    user,
    webhook,
)
from .http import BASE_URL, Route, request

__all__ = [
    "BASE_URL",
    "Route",
    "request",
    "channel",
    "embed",
    "errors",
    "guild",
    "guild_scheduled_event",
    "message",
    "permissions",
    "poll",
    "role",
    "sticker",
    "user",
    "webhook",
]
