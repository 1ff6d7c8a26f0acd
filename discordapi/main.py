"""Main entry points for discordapi.

Initializes logging in two phases (defaults then config-driven), loads
the command directory into a HandlerRegistry, and routes message text
read line by line from stdin to it. Each line is dispatched as its own
task so a slow command never holds up the next one. Shuts down
gracefully on SIGTERM/SIGINT or end of input.

Key functions:
    main: Async entry point for the ``discordapi`` console script.
    serve: Dispatch every line of an async line source concurrently.
    run: Synchronous wrapper that calls asyncio.run(main()).
    run_generate: Entry point for the ``discordapi-gen`` console script.
"""

import argparse
import asyncio
import signal
import sys
from pathlib import Path
from typing import AsyncIterator, List, Optional, Set

import aiohttp
import structlog

from . import __version__
from .logging_config import setup_logging

logger = structlog.get_logger("discordapi.bot")
command_logger = structlog.get_logger("discordapi.commands")


def build_registry(commands_dir: Path, package: Optional[str] = None):
    """Create a registry holding every handler under ``commands_dir``."""
    from .command_loader import CommandLoader
    from .commands import HandlerRegistry

    registry = HandlerRegistry()
    CommandLoader(commands_dir, package).load_into(registry)
    return registry


async def dispatch_logged(registry, session, token: str, channel_id: str, content: str) -> None:
    """Dispatch one message, logging any handler failure instead of raising."""
    try:
        await registry.dispatch(session, token, channel_id, content)
    except asyncio.CancelledError:
        raise
    except Exception as e:
        command_logger.error(
            "command_failed",
            command=content.partition(" ")[0],
            error=str(e),
            exc_info=True,
        )


async def serve(
    registry,
    session: aiohttp.ClientSession,
    token: str,
    channel_id: str,
    lines: AsyncIterator[str],
) -> int:
    """Dispatch each non-blank line as an independent task.

    Waits for in-flight dispatches once the line source is exhausted.

    Returns:
        Number of lines dispatched.
    """
    pending: Set[asyncio.Task] = set()
    count = 0
    try:
        async for line in lines:
            content = line.rstrip("\r\n")
            if not content.strip():
                continue
            task = asyncio.create_task(
                dispatch_logged(registry, session, token, channel_id, content)
            )
            pending.add(task)
            task.add_done_callback(pending.discard)
            count += 1
        if pending:
            await asyncio.gather(*pending)
    finally:
        for task in pending:
            task.cancel()
    return count


async def stdin_lines() -> AsyncIterator[str]:
    """Yield lines from stdin without blocking the event loop."""
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader()
    try:
        await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(reader), sys.stdin)
    except (ValueError, NotImplementedError):
        # Regular files and Windows consoles can't be read as pipes.
        reader = None

    while reader is not None:
        data = await reader.readline()
        if not data:
            return
        yield data.decode("utf-8", errors="replace")

    while True:
        line = await loop.run_in_executor(None, sys.stdin.readline)
        if not line:
            return
        yield line


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="discordapi",
        description="Route chat commands read from stdin to their handlers.",
    )
    parser.add_argument("--channel", help="Channel ID replies are sent to")
    parser.add_argument("--commands-dir", type=Path, help="Command directory to load")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    """Main async entry point. Returns the process exit status."""
    args = _parser().parse_args(argv)

    # Phase 1: defaults, cache_logger_on_first_use=False
    setup_logging()
    logger.info("discordapi_starting", version=__version__)

    # Import here to ensure logging is configured first
    from .config import get_config
    from .exceptions import CommandLoadError, ConfigurationError

    config = get_config()
    config.validate()

    # Phase 2: reconfigure with real config, cache_logger_on_first_use=True
    setup_logging(config)

    try:
        token = config.discord_token
    except ConfigurationError as e:
        logger.error("startup_failed", error=str(e))
        return 1

    channel_id = args.channel or config.default_channel_id
    if not channel_id:
        logger.error("startup_failed", error="no channel configured; pass --channel")
        return 1

    commands_dir = args.commands_dir or config.commands_dir
    try:
        registry = build_registry(commands_dir, config.commands_package)
    except CommandLoadError as e:
        logger.error("startup_failed", error=str(e))
        return 1

    # Setup graceful shutdown
    loop = asyncio.get_running_loop()
    shutdown_event = asyncio.Event()

    def handle_shutdown(sig):
        logger.info("shutdown_signal_received", signal=sig.name)
        shutdown_event.set()

    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, handle_shutdown, sig)
        except NotImplementedError:
            # Windows: add_signal_handler not supported.
            # Fall back to signal.signal for SIGINT (Ctrl+C).
            if sig == signal.SIGINT:
                signal.signal(
                    signal.SIGINT,
                    lambda s, f: handle_shutdown(signal.SIGINT),
                )

    timeout = aiohttp.ClientTimeout(total=config.request_timeout)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        serve_task = asyncio.create_task(
            serve(registry, session, token, channel_id, stdin_lines())
        )
        shutdown_task = asyncio.create_task(shutdown_event.wait())
        try:
            await asyncio.wait(
                {serve_task, shutdown_task},
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            for task in (serve_task, shutdown_task):
                task.cancel()
            for task in (serve_task, shutdown_task):
                try:
                    await task
                except asyncio.CancelledError:
                    pass
            for sig in (signal.SIGTERM, signal.SIGINT):
                try:
                    loop.remove_signal_handler(sig)
                except NotImplementedError:
                    pass

    logger.info("discordapi_stopped")
    return 0


def run():
    """Synchronous entry point for the ``discordapi`` console script."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        pass


def run_generate(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``discordapi-gen`` console script.

    Writes a module defining ``register_commands(registry)`` for every
    handler in the command directory.
    """
    parser = argparse.ArgumentParser(
        prog="discordapi-gen",
        description="Generate the command registration module.",
    )
    parser.add_argument("--commands-dir", type=Path, help="Command directory to scan")
    parser.add_argument(
        "--output",
        type=Path,
        help="File to write (default: command_registrations.py beside the command directory)",
    )
    parser.add_argument("--package", help="Module name handlers are imported under")
    args = parser.parse_args(argv)

    setup_logging()

    from .command_loader import write_registrations
    from .config import get_config
    from .exceptions import CommandLoadError

    commands_dir = args.commands_dir
    package = args.package
    if commands_dir is None:
        config = get_config()
        commands_dir = config.commands_dir
        package = package or config.commands_package
    output = args.output or commands_dir.parent / "command_registrations.py"

    try:
        write_registrations(commands_dir, output, package)
    except (CommandLoadError, OSError) as e:
        logger.error("generate_failed", error=str(e))
        return 1
    return 0


if __name__ == "__main__":
    run()
