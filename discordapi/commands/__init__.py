"""Command handler framework for discordapi.

Provides the Command ABC, the HandlerRegistry that maps ``!name``
prefixes to handlers, and small helpers for message text.
"""

from .arguments import parse_arguments
from .base import Command, HandlerRegistry, split_command

__all__ = [
    "Command",
    "HandlerRegistry",
    "split_command",
    "parse_arguments",
]
