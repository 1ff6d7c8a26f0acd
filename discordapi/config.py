"""Configuration management for discordapi.

Loads YAML settings (settings.yaml) and environment variables (.env)
into a Config object. Property getters provide access with defaults
for the command directory, HTTP timeout, and logging; the bot token is
required and its absence is fatal at startup.

Key classes:
    Config: Central configuration manager.

Key functions:
    get_env_var: Required environment lookup.
    get_config: Singleton accessor for the global Config instance.
"""

import os
import re
from pathlib import Path
from typing import Optional

import structlog
import yaml
from dotenv import load_dotenv

from .exceptions import ConfigurationError

logger = structlog.get_logger("discordapi.bot")

# Discord bot tokens are three dot-separated base64url segments.
_TOKEN_SHAPE = re.compile(r"^[\w-]{20,}\.[\w-]{4,}\.[\w-]{20,}$")


def get_env_var(key: str) -> str:
    """Return a required environment variable.

    Raises:
        ConfigurationError: The variable is unset or empty.
    """
    value = os.environ.get(key)
    if not value:
        raise ConfigurationError(
            f"Expected environment variable {key}", setting_name=key
        )
    return value


class Config:
    """Central configuration manager for discordapi.

    Loads .env and settings.yaml from the config directory once, at
    construction. Environment variables always win over settings.yaml.

    Args:
        config_dir: Path to the config directory. Defaults to
            ``<repo_root>/config/``.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            config_dir = Path(__file__).parent.parent / "config"
        self.config_dir = config_dir

        env_file = config_dir / ".env"
        if env_file.exists():
            load_dotenv(env_file)

        self.settings = self._load_yaml("settings.yaml")

    def _load_yaml(self, filename: str) -> dict:
        """Load a YAML configuration file."""
        filepath = self.config_dir / filename
        if filepath.exists():
            with open(filepath, "r") as f:
                return yaml.safe_load(f) or {}
        return {}

    @property
    def discord_token(self) -> str:
        """Bot token from DISCORD_TOKEN. Required."""
        return get_env_var("DISCORD_TOKEN")

    @property
    def default_channel_id(self) -> Optional[str]:
        """Channel commands reply to when the host doesn't supply one."""
        channel = os.environ.get("DISCORD_CHANNEL_ID") or self.settings.get("channel_id")
        return str(channel) if channel else None

    @property
    def commands_dir(self) -> Path:
        """Root of the command handler tree.

        Resolution order: DISCORD_COMMANDS_DIR env var, ``commands_dir``
        in settings.yaml, then ``<repo_root>/commands``.
        """
        configured = os.environ.get("DISCORD_COMMANDS_DIR") or self.settings.get("commands_dir")
        if configured:
            return Path(configured).expanduser()
        return Path(self.config_dir).parent / "commands"

    @property
    def commands_package(self) -> str:
        """Module name command files are imported under (default: directory name)."""
        return self.settings.get("commands_package") or self.commands_dir.name

    @property
    def request_timeout(self) -> float:
        """Total timeout for one REST call in seconds (default 30)."""
        value = self.settings.get("request_timeout", 30)
        try:
            timeout = float(value)
        except (ValueError, TypeError):
            logger.warning("config_invalid_request_timeout", value=value)
            return 30.0
        if timeout <= 0:
            # aiohttp treats a zero total as "no timeout"
            logger.warning("config_invalid_request_timeout", value=value)
            return 30.0
        return timeout

    @property
    def log_dir(self) -> Path:
        """Get log directory path."""
        configured = self.settings.get("log_dir")
        if configured:
            return Path(configured).expanduser()
        return Path(self.config_dir).parent / "logs"

    @property
    def logging_level(self) -> str:
        """Global log level (default INFO). Controls console and combined file."""
        log_config = self.settings.get("logging", {})
        return log_config.get("level", "INFO")

    @property
    def logging_subsystem_levels(self) -> dict:
        """Per-subsystem log level overrides. E.g. {"router": "DEBUG"}."""
        log_config = self.settings.get("logging", {})
        return log_config.get("subsystem_levels", {})

    @property
    def logging_max_file_size_mb(self) -> int:
        """Max size per log file in MB before rotation (default 10)."""
        log_config = self.settings.get("logging", {})
        return log_config.get("max_file_size_mb", 10)

    @property
    def logging_backup_count(self) -> int:
        """Number of rotated log files to keep (default 5)."""
        log_config = self.settings.get("logging", {})
        return log_config.get("backup_count", 5)

    def validate(self):
        """Check settings at startup.

        Logs warnings/errors but never raises; the token itself is
        enforced when it is read.
        """
        token = os.environ.get("DISCORD_TOKEN", "")
        if not token:
            logger.error("discord_token_missing", env_var="DISCORD_TOKEN")
        elif not _TOKEN_SHAPE.match(token.split(" ", 1)[-1]):
            logger.warning("discord_token_unexpected_format")

        channel = self.default_channel_id
        if channel is not None and not channel.isdigit():
            logger.error("config_invalid_value", key="channel_id", value=channel)

        timeout = self.settings.get("request_timeout")
        if timeout is not None and (not isinstance(timeout, (int, float)) or timeout <= 0):
            logger.error(
                "config_invalid_value",
                key="request_timeout",
                value=timeout,
                valid="> 0",
            )

        if not self.commands_dir.is_dir():
            logger.info("commands_dir_missing", path=str(self.commands_dir))


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config
