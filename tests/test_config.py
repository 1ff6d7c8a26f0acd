"""Tests for Config loading and defaults."""

from pathlib import Path

import pytest
from structlog.testing import capture_logs

from discordapi.config import Config, get_env_var
from discordapi.exceptions import ConfigurationError

_ENV_VARS = ("DISCORD_TOKEN", "DISCORD_CHANNEL_ID", "DISCORD_COMMANDS_DIR")

VALID_TOKEN = "MTExMTExMTExMTExMTExMTEx.GaBcDe.abcdefghijklmnopqrstuvwxyz0123"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # setenv first so monkeypatch restores "unset" even if .env loading sets them
    for name in _ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def _config(tmp_path, settings=None, env=None):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    if settings is not None:
        (config_dir / "settings.yaml").write_text(settings)
    if env is not None:
        (config_dir / ".env").write_text(env)
    return Config(config_dir=config_dir)


def test_defaults_without_files(tmp_path):
    config = _config(tmp_path)
    assert config.settings == {}
    assert config.default_channel_id is None
    assert config.commands_dir == tmp_path / "commands"
    assert config.commands_package == "commands"
    assert config.request_timeout == 30.0
    assert config.log_dir == tmp_path / "logs"
    assert config.logging_level == "INFO"
    assert config.logging_subsystem_levels == {}
    assert config.logging_max_file_size_mb == 10
    assert config.logging_backup_count == 5


def test_missing_token_raises(tmp_path):
    config = _config(tmp_path)
    with pytest.raises(ConfigurationError) as excinfo:
        config.discord_token
    assert excinfo.value.setting_name == "DISCORD_TOKEN"


def test_token_from_dotenv(tmp_path):
    config = _config(tmp_path, env=f"DISCORD_TOKEN={VALID_TOKEN}\n")
    assert config.discord_token == VALID_TOKEN


def test_environment_beats_dotenv(tmp_path, monkeypatch):
    monkeypatch.setenv("DISCORD_TOKEN", "from-env")
    config = _config(tmp_path, env="DISCORD_TOKEN=from-file\n")
    assert config.discord_token == "from-env"


def test_settings_yaml_values(tmp_path):
    config = _config(
        tmp_path,
        settings=(
            "channel_id: 123\n"
            "commands_dir: /srv/bot/handlers\n"
            "commands_package: handlers_pkg\n"
            "request_timeout: 5\n"
            "logging:\n"
            "  level: DEBUG\n"
            "  subsystem_levels:\n"
            "    rest: WARNING\n"
        ),
    )
    assert config.default_channel_id == "123"
    assert config.commands_dir == Path("/srv/bot/handlers")
    assert config.commands_package == "handlers_pkg"
    assert config.request_timeout == 5.0
    assert config.logging_level == "DEBUG"
    assert config.logging_subsystem_levels == {"rest": "WARNING"}


def test_env_overrides_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("DISCORD_CHANNEL_ID", "999")
    monkeypatch.setenv("DISCORD_COMMANDS_DIR", str(tmp_path / "elsewhere"))
    config = _config(tmp_path, settings="channel_id: 123\ncommands_dir: /nope\n")
    assert config.default_channel_id == "999"
    assert config.commands_dir == tmp_path / "elsewhere"
    assert config.commands_package == "elsewhere"


def test_invalid_timeout_falls_back(tmp_path):
    config = _config(tmp_path, settings="request_timeout: soon\n")
    assert config.request_timeout == 30.0


@pytest.mark.parametrize("value", [0, -5])
def test_non_positive_timeout_falls_back(tmp_path, value):
    config = _config(tmp_path, settings=f"request_timeout: {value}\n")
    with capture_logs() as logs:
        assert config.request_timeout == 30.0
    assert any(e["event"] == "config_invalid_request_timeout" for e in logs)


def test_empty_settings_file(tmp_path):
    assert _config(tmp_path, settings="").settings == {}


def test_validate_logs_problems_without_raising(tmp_path):
    config = _config(tmp_path, settings="channel_id: general\nrequest_timeout: -1\n")
    with capture_logs() as logs:
        config.validate()
    events = [e["event"] for e in logs]
    assert "discord_token_missing" in events
    assert events.count("config_invalid_value") == 2


def test_validate_quiet_for_good_config(tmp_path, monkeypatch):
    monkeypatch.setenv("DISCORD_TOKEN", VALID_TOKEN)
    (tmp_path / "commands").mkdir()
    config = _config(tmp_path, settings="channel_id: 123\n")
    with capture_logs() as logs:
        config.validate()
    assert logs == []


def test_get_env_var(monkeypatch):
    monkeypatch.setenv("DISCORD_TOKEN", "abc")
    assert get_env_var("DISCORD_TOKEN") == "abc"
    with pytest.raises(ConfigurationError, match="DISCORD_CHANNEL_ID"):
        get_env_var("DISCORD_CHANNEL_ID")
