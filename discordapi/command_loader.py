"""Command discovery, loading, and registration-module generation.

A command directory holds one handler per ``.py`` file. Sub-directories
become nested namespaces, and ``__init__.py`` marks a namespace root
rather than a command. For a file ``<dir>/mod/deep.py``:

    command name   ``!deep``
    handler class  ``Deep`` (first character upper-cased)
    module         ``<package>.mod.deep``

Two ways of turning that tree into registry entries share the same
discovery step:

    CommandLoader.load_into: import every unit at startup and register
        one shared instance of its handler class.
    write_registrations: emit a Python module whose
        ``register_commands(registry)`` lists every registration
        explicitly, for projects that prefer a checked-in list.

A missing command directory means "no commands" and is not an error.
"""

import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import List, Optional, Tuple

import structlog
from pydantic import BaseModel

from .commands.base import Command, HandlerRegistry
from .exceptions import CommandLoadError

logger = structlog.get_logger("discordapi.loader")

COMMAND_PREFIX = "!"
NAMESPACE_MARKER = "__init__.py"


def capitalize_first(name: str) -> str:
    """Upper-case the first character and leave the rest untouched."""
    return name[:1].upper() + name[1:]


class CommandSpec(BaseModel):
    """One handler unit found in a command directory."""

    name: str
    module: str
    namespace: Tuple[str, ...] = ()
    class_name: str
    path: Path

    @property
    def qualified_name(self) -> str:
        """Handler class path relative to the command package, e.g. ``mod.Deep``."""
        return ".".join((*self.namespace, self.class_name))

    def module_path(self, package: str) -> str:
        """Dotted import path of the unit under ``package``."""
        return ".".join((package, *self.namespace, self.module))


def discover_commands(commands_dir: Path) -> List[CommandSpec]:
    """Walk ``commands_dir`` and describe every handler unit in it.

    Entries are visited in sorted order so the result (and anything
    generated from it) is stable across filesystems.
    """
    if not commands_dir.is_dir():
        logger.info("commands_dir_missing", path=str(commands_dir))
        return []

    specs: List[CommandSpec] = []
    _collect(commands_dir, (), specs)
    return specs


def _collect(directory: Path, namespace: Tuple[str, ...], specs: List[CommandSpec]) -> None:
    for entry in sorted(directory.iterdir()):
        if entry.name.startswith(".") or entry.name == "__pycache__":
            continue
        if entry.is_dir():
            _collect(entry, namespace + (entry.name,), specs)
        elif entry.suffix == ".py" and entry.name != NAMESPACE_MARKER:
            base = entry.stem
            specs.append(
                CommandSpec(
                    name=COMMAND_PREFIX + base,
                    module=base,
                    namespace=namespace,
                    class_name=capitalize_first(base),
                    path=entry,
                )
            )


class CommandLoader:
    """Imports handler units from a command directory into a registry.

    Args:
        commands_dir: Root of the command tree.
        package: Top-level module name the units are imported under.
            Defaults to the directory name.
    """

    def __init__(self, commands_dir: Path, package: Optional[str] = None):
        self.commands_dir = commands_dir
        self.package = package or commands_dir.name
        self.loaded: List[CommandSpec] = []

    def load_into(self, registry: HandlerRegistry) -> int:
        """Register every discovered handler. Returns the number registered.

        Raises:
            CommandLoadError: A unit failed to import or does not follow
                the naming convention. Nothing after it is registered.
        """
        specs = discover_commands(self.commands_dir)
        for spec in specs:
            handler = self._instantiate(spec)
            registry.register(spec.name, handler)
            self.loaded.append(spec)

        logger.info(
            "command_loader_complete",
            path=str(self.commands_dir),
            commands=len(specs),
        )
        return len(specs)

    def _namespace(self, name: str, directory: Path) -> ModuleType:
        """Create the package module for one level of the command tree."""
        init_path = directory / NAMESPACE_MARKER
        if not init_path.is_file():
            module = ModuleType(name)
            module.__path__ = [str(directory)]
            return module

        file_spec = importlib.util.spec_from_file_location(
            name, init_path, submodule_search_locations=[str(directory)]
        )
        module = importlib.util.module_from_spec(file_spec)
        sys.modules[name] = module
        file_spec.loader.exec_module(module)
        return module

    def _import(self, spec: CommandSpec) -> ModuleType:
        module_name = spec.module_path(self.package)
        file_spec = importlib.util.spec_from_file_location(module_name, spec.path)
        if file_spec is None or file_spec.loader is None:
            raise CommandLoadError(
                f"cannot import {spec.path}",
                path=str(spec.path),
                expected=spec.qualified_name,
            )

        # Parent packages must exist so relative imports inside the unit resolve.
        created: List[str] = []
        parent: Optional[ModuleType] = None
        name, directory = self.package, self.commands_dir
        try:
            for part in (None, *spec.namespace):
                if part is not None:
                    name, directory = f"{name}.{part}", directory / part
                package = sys.modules.get(name)
                if package is None:
                    created.append(name)
                    package = self._namespace(name, directory)
                    sys.modules[name] = package
                    if parent is not None:
                        setattr(parent, part, package)
                parent = package

            module = importlib.util.module_from_spec(file_spec)
            created.append(module_name)
            sys.modules[module_name] = module
            file_spec.loader.exec_module(module)
        except Exception as e:
            for created_name in reversed(created):
                sys.modules.pop(created_name, None)
            raise CommandLoadError(
                f"failed to import {spec.path}: {e}",
                path=str(spec.path),
                expected=spec.qualified_name,
            ) from e

        setattr(parent, spec.module, module)
        return module

    def _instantiate(self, spec: CommandSpec) -> Command:
        module = self._import(spec)

        handler_cls = getattr(module, spec.class_name, None)
        if handler_cls is None:
            raise CommandLoadError(
                f"{spec.path.name} must define a class named {spec.class_name}",
                path=str(spec.path),
                expected=spec.qualified_name,
            )
        if not (isinstance(handler_cls, type) and issubclass(handler_cls, Command)):
            raise CommandLoadError(
                f"{spec.qualified_name} is not a Command subclass",
                path=str(spec.path),
                expected=spec.qualified_name,
            )

        try:
            return handler_cls()
        except Exception as e:
            raise CommandLoadError(
                f"cannot instantiate {spec.qualified_name}: {e}",
                path=str(spec.path),
                expected=spec.qualified_name,
            ) from e


# ---------------------------------------------------------------------------
# Registration module generation
# ---------------------------------------------------------------------------

_HEADER = '''"""Command registrations generated by discordapi-gen.

Do not edit by hand; rerun discordapi-gen after adding or removing
files in the command directory.
"""
'''


def render_registrations(specs: List[CommandSpec], package: str) -> str:
    """Render the source of a module defining ``register_commands(registry)``."""
    for spec in specs:
        for part in spec.module_path(package).split(".") + [spec.class_name]:
            if not part.isidentifier():
                raise CommandLoadError(
                    f"{part!r} is not a valid Python identifier",
                    path=str(spec.path),
                    expected=spec.qualified_name,
                )

    lines = [_HEADER]
    for module_path in sorted({spec.module_path(package) for spec in specs}):
        lines.append(f"import {module_path}")
    if specs:
        lines.append("")
    lines.append("")
    lines.append("def register_commands(registry):")
    if not specs:
        lines.append("    pass")
    for spec in specs:
        lines.append(
            f'    registry.register("{spec.name}", '
            f"{spec.module_path(package)}.{spec.class_name}())"
        )
    return "\n".join(lines) + "\n"


def write_registrations(
    commands_dir: Path, destination: Path, package: Optional[str] = None
) -> int:
    """Write the registration module for ``commands_dir`` to ``destination``.

    Returns:
        Number of registrations written (0 when the directory is missing).
    """
    specs = discover_commands(commands_dir)
    source = render_registrations(specs, package or commands_dir.name)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(source, encoding="utf-8")
    logger.info(
        "registrations_written",
        path=str(destination),
        commands=len(specs),
    )
    return len(specs)
