"""Tests for command discovery, loading, and registration-module output."""

import sys

import pytest
from structlog.testing import capture_logs

from discordapi.command_loader import (
    CommandLoader,
    capitalize_first,
    discover_commands,
    render_registrations,
    write_registrations,
)
from discordapi.commands import HandlerRegistry
from discordapi.exceptions import CommandLoadError

HANDLER_SOURCE = (
    "from discordapi.commands import Command\n"
    "\n"
    "\n"
    "class {cls}(Command):\n"
    "    async def execute(self, session, token, channel_id, args):\n"
    "        pass\n"
)


def _write_command(directory, relpath, cls=None, source=None):
    path = directory / relpath
    path.parent.mkdir(parents=True, exist_ok=True)
    if source is None:
        source = HANDLER_SOURCE.format(cls=cls or capitalize_first(path.stem))
    path.write_text(source)
    return path


@pytest.fixture
def commands_dir(tmp_path):
    """A command tree with one top-level and one nested handler."""
    root = tmp_path / "cmds"
    _write_command(root, "ping.py")
    _write_command(root, "mod/__init__.py", source="")
    _write_command(root, "mod/deep.py")
    return root


@pytest.fixture(autouse=True)
def _forget_loaded_modules():
    before = set(sys.modules)
    yield
    for name in set(sys.modules) - before:
        del sys.modules[name]


def test_capitalize_first():
    assert capitalize_first("ping") == "Ping"
    assert capitalize_first("endPoll") == "EndPoll"
    assert capitalize_first("x") == "X"
    assert capitalize_first("") == ""


def test_discover_walks_nested_namespaces(commands_dir):
    specs = discover_commands(commands_dir)
    assert [(s.name, s.qualified_name) for s in specs] == [
        ("!deep", "mod.Deep"),
        ("!ping", "Ping"),
    ]
    assert specs[0].module_path("cmds") == "cmds.mod.deep"


def test_discover_skips_hidden_and_non_python(commands_dir):
    (commands_dir / "README.md").write_text("docs")
    (commands_dir / ".hidden.py").write_text("")
    (commands_dir / "__pycache__").mkdir()
    (commands_dir / "__pycache__" / "ping.py").write_text("")
    assert {s.name for s in discover_commands(commands_dir)} == {"!deep", "!ping"}


def test_missing_directory_yields_nothing(tmp_path):
    with capture_logs() as logs:
        assert discover_commands(tmp_path / "absent") == []
    assert any(e["event"] == "commands_dir_missing" for e in logs)


def test_loader_registers_every_handler(commands_dir):
    registry = HandlerRegistry()
    loader = CommandLoader(commands_dir)

    assert loader.load_into(registry) == 2
    assert registry.command_names == frozenset({"!ping", "!deep"})
    assert type(registry.get("!deep")).__name__ == "Deep"
    assert "cmds.mod.deep" in sys.modules
    assert [s.name for s in loader.loaded] == ["!deep", "!ping"]


def test_loader_on_missing_directory_registers_nothing(tmp_path):
    registry = HandlerRegistry()
    assert CommandLoader(tmp_path / "absent").load_into(registry) == 0
    assert len(registry) == 0


@pytest.mark.asyncio
async def test_loaded_handler_dispatches(tmp_path):
    root = tmp_path / "live"
    _write_command(
        root,
        "hello.py",
        source=(
            "from discordapi.commands import Command\n"
            "\n"
            "SEEN = []\n"
            "\n"
            "\n"
            "class Hello(Command):\n"
            "    async def execute(self, session, token, channel_id, args):\n"
            "        SEEN.append(args)\n"
        ),
    )
    registry = HandlerRegistry()
    CommandLoader(root).load_into(registry)

    await registry.dispatch(None, "tok", "1", "!hello there")

    assert sys.modules["live.hello"].SEEN == ["there"]


def test_missing_class_raises(tmp_path):
    root = tmp_path / "bad"
    _write_command(root, "ping.py", cls="Pong")
    with pytest.raises(CommandLoadError) as excinfo:
        CommandLoader(root).load_into(HandlerRegistry())
    assert excinfo.value.expected == "Ping"
    assert excinfo.value.path.endswith("ping.py")


def test_class_must_be_a_command(tmp_path):
    root = tmp_path / "bad"
    _write_command(root, "ping.py", source="class Ping:\n    pass\n")
    with pytest.raises(CommandLoadError, match="not a Command subclass"):
        CommandLoader(root).load_into(HandlerRegistry())


def test_abstract_handler_cannot_be_instantiated(tmp_path):
    root = tmp_path / "bad"
    _write_command(
        root,
        "ping.py",
        source="from discordapi.commands import Command\n\n\nclass Ping(Command):\n    pass\n",
    )
    with pytest.raises(CommandLoadError, match="cannot instantiate"):
        CommandLoader(root).load_into(HandlerRegistry())


def test_import_error_is_wrapped_and_module_forgotten(tmp_path):
    root = tmp_path / "bad"
    _write_command(root, "ping.py", source="def broken(:\n")
    with pytest.raises(CommandLoadError, match="failed to import"):
        CommandLoader(root).load_into(HandlerRegistry())
    assert "bad.ping" not in sys.modules


def test_nested_unit_can_import_from_its_namespace(tmp_path):
    root = tmp_path / "relcmds"
    _write_command(root, "mod/__init__.py", source="PREFIX = 'deep:'\n")
    _write_command(
        root,
        "mod/deep.py",
        source=(
            "from discordapi.commands import Command\n"
            "\n"
            "from . import PREFIX\n"
            "from .helpers import shout\n"
            "\n"
            "\n"
            "class Deep(Command):\n"
            "    async def execute(self, session, token, channel_id, args):\n"
            "        pass\n"
        ),
    )
    _write_command(root, "mod/helpers/__init__.py", source="def shout(text):\n    return text.upper()\n")

    registry = HandlerRegistry()
    assert CommandLoader(root).load_into(registry) == 1
    assert "!deep" in registry
    assert sys.modules["relcmds.mod"].PREFIX == "deep:"
    assert sys.modules["relcmds.mod"].deep is sys.modules["relcmds.mod.deep"]
    assert sys.modules["relcmds"].__path__ == [str(root)]


def test_failing_namespace_init_is_wrapped_and_forgotten(tmp_path):
    root = tmp_path / "badns"
    _write_command(root, "mod/__init__.py", source="raise RuntimeError('init failed')\n")
    _write_command(root, "mod/deep.py")

    with pytest.raises(CommandLoadError, match="init failed"):
        CommandLoader(root).load_into(HandlerRegistry())
    assert not any(name.startswith("badns") for name in sys.modules)


def test_runtime_and_generated_registration_agree(tmp_path, monkeypatch):
    root = tmp_path / "samecmds"
    _write_command(root, "ping.py")
    _write_command(root, "mod/__init__.py", source="PREFIX = 'deep:'\n")
    _write_command(
        root,
        "mod/deep.py",
        source=HANDLER_SOURCE.format(cls="Deep").replace(
            "from discordapi.commands import Command\n",
            "from discordapi.commands import Command\n\nfrom . import PREFIX\n",
        ),
    )

    runtime = HandlerRegistry()
    CommandLoader(root).load_into(runtime)
    for name in [n for n in sys.modules if n.startswith("samecmds")]:
        del sys.modules[name]

    output = tmp_path / "registrations.py"
    write_registrations(root, output)
    monkeypatch.syspath_prepend(str(tmp_path))
    namespace = {}
    exec(compile(output.read_text(), str(output), "exec"), namespace)
    generated = HandlerRegistry()
    namespace["register_commands"](generated)

    assert runtime.command_names == generated.command_names == frozenset({"!ping", "!deep"})


def test_render_lists_every_registration(commands_dir):
    source = render_registrations(discover_commands(commands_dir), "cmds")

    assert "import cmds.mod.deep\nimport cmds.ping\n" in source
    assert 'registry.register("!deep", cmds.mod.deep.Deep())' in source
    assert 'registry.register("!ping", cmds.ping.Ping())' in source
    assert "def register_commands(registry):" in source
    compile(source, "<generated>", "exec")


def test_render_with_no_commands():
    source = render_registrations([], "cmds")
    assert "import" not in source
    assert source.rstrip().endswith("def register_commands(registry):\n    pass")


def test_render_rejects_non_identifier_names(tmp_path):
    root = tmp_path / "cmds"
    _write_command(root, "my-cmd.py", cls="Whatever")
    with pytest.raises(CommandLoadError, match="not a valid Python identifier"):
        render_registrations(discover_commands(root), "cmds")


def test_generated_module_registers_handlers(tmp_path, monkeypatch):
    root = tmp_path / "gen_cmds_pkg"
    _write_command(root, "ping.py")
    _write_command(root, "mod/deep.py")
    output = tmp_path / "out" / "registrations.py"

    assert write_registrations(root, output) == 2

    monkeypatch.syspath_prepend(str(tmp_path))
    namespace = {}
    exec(compile(output.read_text(), str(output), "exec"), namespace)
    registry = HandlerRegistry()
    namespace["register_commands"](registry)

    assert registry.command_names == frozenset({"!ping", "!deep"})


def test_write_registrations_for_missing_directory(tmp_path):
    output = tmp_path / "registrations.py"
    assert write_registrations(tmp_path / "absent", output) == 0
    assert "pass" in output.read_text()
