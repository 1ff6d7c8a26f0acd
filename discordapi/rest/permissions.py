"""Guild-level permission checks.

Key classes:
    Permissions: IntFlag of Discord permission bits.

Key functions:
    compute_base_permissions: Fold a member's roles into one bitset.
    check_permission: Whether a guild member holds a permission.
"""

from enum import IntFlag
from typing import Any, Mapping, Union

import aiohttp

from .guild import get_guild, get_guild_member


class Permissions(IntFlag):
    CREATE_INSTANT_INVITE = 1 << 0
    KICK_MEMBERS = 1 << 1
    BAN_MEMBERS = 1 << 2
    ADMINISTRATOR = 1 << 3
    MANAGE_CHANNELS = 1 << 4
    MANAGE_GUILD = 1 << 5
    ADD_REACTIONS = 1 << 6
    VIEW_AUDIT_LOG = 1 << 7
    PRIORITY_SPEAKER = 1 << 8
    STREAM = 1 << 9
    VIEW_CHANNEL = 1 << 10
    SEND_MESSAGES = 1 << 11
    SEND_TTS_MESSAGES = 1 << 12
    MANAGE_MESSAGES = 1 << 13
    EMBED_LINKS = 1 << 14
    ATTACH_FILES = 1 << 15
    READ_MESSAGE_HISTORY = 1 << 16
    MENTION_EVERYONE = 1 << 17
    USE_EXTERNAL_EMOJIS = 1 << 18
    VIEW_GUILD_INSIGHTS = 1 << 19
    CONNECT = 1 << 20
    SPEAK = 1 << 21
    MUTE_MEMBERS = 1 << 22
    DEAFEN_MEMBERS = 1 << 23
    MOVE_MEMBERS = 1 << 24
    USE_VAD = 1 << 25
    CHANGE_NICKNAME = 1 << 26
    MANAGE_NICKNAMES = 1 << 27
    MANAGE_ROLES = 1 << 28
    MANAGE_WEBHOOKS = 1 << 29
    MANAGE_GUILD_EXPRESSIONS = 1 << 30
    USE_APPLICATION_COMMANDS = 1 << 31
    REQUEST_TO_SPEAK = 1 << 32
    MANAGE_EVENTS = 1 << 33
    MANAGE_THREADS = 1 << 34
    CREATE_PUBLIC_THREADS = 1 << 35
    CREATE_PRIVATE_THREADS = 1 << 36
    USE_EXTERNAL_STICKERS = 1 << 37
    SEND_MESSAGES_IN_THREADS = 1 << 38
    USE_EMBEDDED_ACTIVITIES = 1 << 39
    MODERATE_MEMBERS = 1 << 40
    SEND_POLLS = 1 << 49


def _as_permission(permission: Union[str, Permissions]) -> Permissions:
    if isinstance(permission, Permissions):
        return permission
    try:
        return Permissions[permission.upper()]
    except KeyError:
        raise ValueError(f"unknown permission: {permission!r}") from None


def compute_base_permissions(guild: Mapping[str, Any], member: Mapping[str, Any]) -> Permissions:
    """Guild-wide permissions of ``member`` (channel overwrites not applied).

    The guild owner and any holder of ADMINISTRATOR get every bit.
    """
    all_bits = Permissions(0)
    for flag in Permissions:
        all_bits |= flag

    user = member.get("user") or {}
    if user.get("id") is not None and user.get("id") == guild.get("owner_id"):
        return all_bits

    roles = {role["id"]: int(role.get("permissions", 0)) for role in guild.get("roles", [])}
    # The @everyone role shares the guild's ID.
    bits = roles.get(guild.get("id"), 0)
    for role_id in member.get("roles", []):
        bits |= roles.get(role_id, 0)

    permissions = Permissions(bits & int(all_bits))
    if Permissions.ADMINISTRATOR in permissions:
        return all_bits
    return permissions


async def check_permission(
    session: aiohttp.ClientSession,
    token: str,
    guild_id: str,
    user_id: str,
    permission: Union[str, Permissions],
) -> bool:
    """Whether the member holds ``permission`` guild-wide.

    Args:
        permission: A Permissions flag or its name (e.g. "manage_messages").

    Raises:
        ValueError: Unknown permission name.
    """
    wanted = _as_permission(permission)
    member = await get_guild_member(session, token, guild_id, user_id)
    guild = await get_guild(session, token, guild_id)
    return wanted in compute_base_permissions(guild, member)
