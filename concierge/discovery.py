# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Filesystem command discovery.

Every Python file found under a directory is imported and its factory is
called with the `Concierge` instance, letting each file register its own
commands:

    # commands/deploy.py
    def register(cli):
        cli.add_command("deploy <env>", deploy, description="Deploy the app")

The factory is the module-level `register` callable, or `default` when
`register` is missing. Directories are walked breadth-first and entries are
visited in sorted order so registration order is stable across platforms.
"""
from __future__ import annotations

import hashlib
import importlib.util
from collections import deque
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Any, Callable

from concierge.exceptions import ConfigurationError
from concierge.logger import logger

if TYPE_CHECKING:
    from concierge.concierge import Concierge

FACTORY_NAMES = ("register", "default")


def find_command_files(
    starting_path: Path | str, recursive: bool = True, pattern: str = "*.py"
) -> list[Path]:
    root = Path(starting_path).resolve()
    if not root.is_dir():
        raise ConfigurationError(f"Command directory not found: {starting_path}")

    queue: deque[Path] = deque([root])
    command_files: list[Path] = []
    while queue:
        current = queue.popleft()
        for entry in sorted(current.iterdir()):
            if entry.is_dir() and recursive and not entry.name.startswith(("_", ".")):
                queue.append(entry)
            elif entry.is_file() and entry.match(pattern) and entry.name != "__init__.py":
                command_files.append(entry)
    return command_files


def import_file(path: Path) -> ModuleType:
    digest = hashlib.sha1(str(path).encode("UTF-8")).hexdigest()[:12]
    module_name = f"concierge_commands_{path.stem}_{digest}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ConfigurationError(f"Cannot import command file: {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def get_factory(module: ModuleType) -> Callable[[Any], Any]:
    for name in FACTORY_NAMES:
        factory = getattr(module, name, None)
        if callable(factory):
            return factory
    raise ConfigurationError(
        f"Command file '{module.__file__}' must define a callable "
        f"{' or '.join(repr(name) for name in FACTORY_NAMES)}"
    )


def discover(
    concierge: Concierge,
    starting_path: Path | str,
    recursive: bool = True,
    pattern: str = "*.py",
) -> list[Path]:
    """
    Import every command file below `starting_path` and run its factory.

    Returns:
        list[Path]: The files that were loaded, in load order.
    """
    command_files = find_command_files(starting_path, recursive, pattern)
    for path in command_files:
        logger.debug("[Discovery] Loading commands from %s", path)
        get_factory(import_file(path))(concierge)
    logger.info(
        "[Discovery] Loaded %d command file(s) from %s", len(command_files), starting_path
    )
    return command_files
