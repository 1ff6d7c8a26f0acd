"""Logging configuration for discordapi.

Every event goes to the console, to the combined ``discordapi.log``, and
to the file of the subsystem that emitted it (``router.log``,
``rest.log``, ...). Bot and webhook tokens are scrubbed before rendering.
"""

import logging
import logging.handlers
import re
import sys
from pathlib import Path
from typing import Any, Dict

import structlog

SUBSYSTEMS = ("bot", "router", "loader", "rest", "commands")

LOGGER_PREFIX = "discordapi"

# ---------------------------------------------------------------------------
# Secret sanitization
# ---------------------------------------------------------------------------

_SECRET_PATTERNS = [
    # Authorization header values
    re.compile(r"(?:Bot|Bearer)\s+[A-Za-z0-9_.\-]{20,}"),
    # Bare bot tokens: three dot-separated base64url segments
    re.compile(r"[A-Za-z0-9_\-]{20,}\.[A-Za-z0-9_\-]{4,}\.[A-Za-z0-9_\-]{20,}"),
    # Webhook tokens embedded in URLs
    re.compile(r"(?<=/webhooks/)(\d+)/[A-Za-z0-9_\-]{20,}"),
]

_REDACTED = "***REDACTED***"


def _scrub_value(value: str) -> str:
    """Scrub tokens from a single string value."""
    for pattern in _SECRET_PATTERNS:
        value = pattern.sub(_REDACTED, value)
    return value


def sanitize_secrets(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """structlog processor that scrubs bot and webhook tokens.

    Walks all string values in the event dict (one level into lists,
    tuples, and dicts) and replaces token-shaped substrings.
    """
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = _scrub_value(value)
        elif isinstance(value, (list, tuple)):
            event_dict[key] = type(value)(
                _scrub_value(v) if isinstance(v, str) else v
                for v in value
            )
        elif isinstance(value, dict):
            event_dict[key] = {
                k: _scrub_value(v) if isinstance(v, str) else v
                for k, v in value.items()
            }
    return event_dict


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def _file_handler(path: Path, level: int, formatter: logging.Formatter,
                  max_bytes: int, backup_count: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _level(name: str, default: int) -> int:
    return getattr(logging, name.upper(), default) if name else default


def setup_logging(config=None) -> None:
    """Configure structlog on top of stdlib logging.

    Called twice at startup: once with no config so early events have
    somewhere to go, then again with the loaded Config, which also turns
    on logger caching.

    Args:
        config: Optional Config instance supplying the log directory,
            levels, and rotation settings.
    """
    if config is not None:
        log_dir = config.log_dir
        root_level = _level(config.logging_level, logging.INFO)
        subsystem_levels = config.logging_subsystem_levels
        max_bytes = config.logging_max_file_size_mb * 1024 * 1024
        backup_count = config.logging_backup_count
    else:
        log_dir = Path(__file__).parent.parent / "logs"
        root_level = logging.INFO
        subsystem_levels = {}
        max_bytes = 10 * 1024 * 1024
        backup_count = 5

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        write_files = True
    except OSError as exc:
        print(
            f"WARNING: Cannot create log directory {log_dir}: {exc}. "
            "Falling back to console-only logging.",
            file=sys.stderr,
        )
        write_files = False

    file_formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()
    # stdout carries piped message input/output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(root_level)
    console_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    root_logger.addHandler(console_handler)

    pkg_logger = logging.getLogger(LOGGER_PREFIX)
    pkg_logger.setLevel(logging.DEBUG)
    pkg_logger.handlers.clear()
    pkg_logger.propagate = True
    if write_files:
        pkg_logger.addHandler(_file_handler(
            log_dir / f"{LOGGER_PREFIX}.log", root_level, file_formatter, max_bytes, backup_count
        ))

    for subsystem in SUBSYSTEMS:
        sub_logger = logging.getLogger(f"{LOGGER_PREFIX}.{subsystem}")
        sub_level = _level(subsystem_levels.get(subsystem, ""), root_level)
        sub_logger.setLevel(sub_level)
        sub_logger.handlers.clear()
        sub_logger.propagate = True
        if write_files:
            sub_logger.addHandler(_file_handler(
                log_dir / f"{subsystem}.log", sub_level, file_formatter, max_bytes, backup_count
            ))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            sanitize_secrets,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=config is not None,
    )
