"""Base classes for the command handler framework.

Defines the abstractions for registering and dispatching chat
commands. Each command is a Command subclass with a single async
``execute`` method; a HandlerRegistry maps command names (``!ping``)
to shared Command instances and routes incoming message text to them.

Key classes:
    Command: ABC that every command handler implements.
    HandlerRegistry: Maps command names to handlers and dispatches.

Key functions:
    split_command: Split message text into (command, args).
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

import aiohttp
import structlog

logger = structlog.get_logger("discordapi.router")


def split_command(content: str) -> Tuple[str, str]:
    """Split message text at the first space.

    Returns:
        (command, args). ``args`` is everything after the first space,
        or an empty string when the text has no space.
    """
    command, _, args = content.partition(" ")
    return command, args


class Command(ABC):
    """Abstract base class for a chat command.

    Handlers hold no per-call state: one instance is shared by the
    registry and every concurrent dispatch. Failures are reported by
    raising; the registry never catches them.
    """

    @abstractmethod
    async def execute(
        self,
        session: aiohttp.ClientSession,
        token: str,
        channel_id: str,
        args: str,
    ) -> None:
        """Run the command.

        Args:
            session: Shared HTTP session used for REST calls.
            token: Bot token for authentication.
            channel_id: ID of the channel the command was invoked in.
            args: Text following the command name (may be empty).
        """
        ...


class HandlerRegistry:
    """Maps command names to Command instances.

    Reads never lock: dispatch grabs the current mapping, which is
    never mutated once published. register() copies the mapping,
    inserts, and swaps the reference under a lock, so concurrent
    writers cannot lose each other's entries.
    """

    def __init__(self):
        self._handlers: Mapping[str, Command] = MappingProxyType({})
        self._write_lock = threading.Lock()

    def register(self, name: str, handler: Command) -> None:
        """Register ``handler`` under ``name``, replacing any previous one.

        Args:
            name: Command name including its prefix (e.g. "!ping").
            handler: Shared handler instance.
        """
        with self._write_lock:
            previous = self._handlers.get(name)
            if previous is not None and previous is not handler:
                logger.warning(
                    "command_handler_replaced",
                    command=name,
                    previous=type(previous).__name__,
                    handler=type(handler).__name__,
                )
            updated = dict(self._handlers)
            updated[name] = handler
            self._handlers = MappingProxyType(updated)
        logger.debug("command_registered", command=name, handler=type(handler).__name__)

    def get(self, name: str) -> Optional[Command]:
        """Look up the handler for a command name."""
        return self._handlers.get(name)

    @property
    def command_names(self) -> frozenset:
        """All registered command names."""
        return frozenset(self._handlers.keys())

    def __len__(self) -> int:
        return len(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    async def dispatch(
        self,
        session: aiohttp.ClientSession,
        token: str,
        channel_id: str,
        content: str,
    ) -> None:
        """Route message text to its command handler.

        Text whose first token is not a registered command is logged and
        ignored; most chat messages are not commands. Exceptions raised
        by the handler propagate to the caller unchanged.
        """
        command_name, args = split_command(content)

        handler = self._handlers.get(command_name)
        if handler is None:
            logger.info("command_not_found", command=command_name)
            return

        await handler.execute(session, token, channel_id, args)
