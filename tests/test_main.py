"""Tests for the console entry points."""

from unittest.mock import AsyncMock, MagicMock, PropertyMock, patch

import pytest
from structlog.testing import capture_logs

from discordapi import main as main_module
from discordapi.commands import Command, HandlerRegistry
from discordapi.exceptions import ConfigurationError


class Recorder(Command):
    def __init__(self):
        self.args = []

    async def execute(self, session, token, channel_id, args):
        self.args.append(args)


class Boom(Command):
    async def execute(self, session, token, channel_id, args):
        raise RuntimeError("kaboom")


async def _lines(*items):
    for item in items:
        yield item


@pytest.mark.asyncio
async def test_serve_dispatches_each_line():
    registry = HandlerRegistry()
    echo = Recorder()
    registry.register("!echo", echo)

    count = await main_module.serve(
        registry, None, "tok", "42", _lines("!echo a\n", "\n", "!echo b\r\n", "hello\n")
    )

    assert count == 3
    assert sorted(echo.args) == ["a", "b"]


@pytest.mark.asyncio
async def test_handler_failure_is_logged_and_serving_continues():
    registry = HandlerRegistry()
    echo = Recorder()
    registry.register("!boom", Boom())
    registry.register("!echo", echo)

    with capture_logs() as logs:
        await main_module.serve(registry, None, "tok", "42", _lines("!boom now", "!echo still here"))

    assert echo.args == ["still here"]
    failed = [e for e in logs if e["event"] == "command_failed"]
    assert len(failed) == 1
    assert failed[0]["command"] == "!boom"
    assert failed[0]["log_level"] == "error"


@pytest.mark.asyncio
async def test_main_exits_with_status_one_without_token():
    config = MagicMock()
    type(config).discord_token = PropertyMock(
        side_effect=ConfigurationError("Expected environment variable DISCORD_TOKEN", setting_name="DISCORD_TOKEN")
    )
    with patch.object(main_module, "setup_logging"), \
            patch("discordapi.config.get_config", return_value=config), \
            capture_logs() as logs:
        status = await main_module.main([])

    assert status == 1
    assert any(e["event"] == "startup_failed" for e in logs)


@pytest.mark.asyncio
async def test_main_requires_a_channel():
    config = MagicMock()
    config.discord_token = "tok"
    config.default_channel_id = None
    with patch.object(main_module, "setup_logging"), \
            patch("discordapi.config.get_config", return_value=config):
        assert await main_module.main([]) == 1


@pytest.mark.asyncio
async def test_main_serves_stdin_until_eof(tmp_path):
    config = MagicMock()
    config.discord_token = "tok"
    config.commands_package = "main_test_cmds"
    config.request_timeout = 5
    served = AsyncMock(return_value=0)
    with patch.object(main_module, "setup_logging"), \
            patch("discordapi.config.get_config", return_value=config), \
            patch.object(main_module, "serve", served):
        status = await main_module.main(["--channel", "77", "--commands-dir", str(tmp_path / "none")])

    assert status == 0
    args = served.await_args.args
    assert args[2:4] == ("tok", "77")
    assert len(args[0]) == 0


def test_run_generate_writes_module(tmp_path):
    commands = tmp_path / "cmds"
    commands.mkdir()
    (commands / "ping.py").write_text(
        "from discordapi.commands import Command\n\n\n"
        "class Ping(Command):\n"
        "    async def execute(self, session, token, channel_id, args):\n"
        "        pass\n"
    )
    output = tmp_path / "registrations.py"

    with patch.object(main_module, "setup_logging"):
        status = main_module.run_generate(
            ["--commands-dir", str(commands), "--output", str(output), "--package", "mycmds"]
        )

    assert status == 0
    assert 'registry.register("!ping", mycmds.ping.Ping())' in output.read_text()


def test_run_generate_reports_bad_names(tmp_path):
    commands = tmp_path / "cmds"
    commands.mkdir()
    (commands / "bad-name.py").write_text("")

    with patch.object(main_module, "setup_logging"):
        status = main_module.run_generate(
            ["--commands-dir", str(commands), "--output", str(tmp_path / "out.py")]
        )

    assert status == 1
    assert not (tmp_path / "out.py").exists()
