# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import logging
import os
import re
import shutil
import sys
from pathlib import Path
from typing import Sequence

import pythonjsonlogger.json
from rich.logging import RichHandler

_WORD_REGEXP = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")
_CONTAINER_MARKERS = ("docker", "kubepods", "containerd", "podman")
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
LOG_MODES = ("cli", "json")


def camel_case(name: str) -> str:
    """
    Convert a name into camelCase, splitting on separators, case changes and
    digit runs.

    `dry-run` -> `dryRun`, `fileName` -> `fileName`, `FILE_NAME` -> `fileName`,
    `XMLHttp` -> `xmlHttp`, `item` -> `item`.
    """
    words = _WORD_REGEXP.findall(name)
    if not words:
        return ""
    head, *tail = words
    return head.lower() + "".join(word[:1].upper() + word[1:].lower() for word in tail)


def env_key(name: str) -> str:
    """
    Key used in the invocation environment for an option, argument or
    validator name. Single letters (short options) are kept as typed, every
    other name is camel-cased.
    """
    if len(name) == 1:
        return name
    return camel_case(name) or name


def oxford_join(items: Sequence[str]) -> str:
    """Join items as `a`, `a, and b` or `a, b, and c`."""
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return f"{', '.join(items[:-1])}, and {items[-1]}"


def get_program_invocation() -> str:
    """Name to show in usage lines when the caller gives none."""
    script = sys.argv[0] if sys.argv and sys.argv[0] else "concierge"
    if shutil.which(script):
        return Path(script).name
    if "python" in Path(sys.executable).name:
        return f"python {Path(script).name}"
    return script


def running_in_container() -> bool:
    try:
        cgroup = Path("/proc/1/cgroup").read_text(encoding="UTF-8")
    except OSError:
        return False
    return any(marker in cgroup for marker in _CONTAINER_MARKERS)


def _json_formatter() -> logging.Formatter:
    return pythonjsonlogger.json.JsonFormatter(LOG_FORMAT)


def _console_handler(mode: str) -> logging.Handler:
    if mode == "cli":
        return RichHandler(
            rich_tracebacks=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    if mode == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(_json_formatter())
        return handler
    raise ValueError(f"Invalid log mode: {mode}. Must be one of: {', '.join(LOG_MODES)}")


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
):
    """
    Install the console (and optional file) handlers on the root logger.

    Args:
        mode (str | None): "cli" for Rich console output or "json" for one JSON
            object per line. Falls back to `CONCIERGE_LOG_MODE`, then to "json"
            inside containers and "cli" elsewhere.
        log_filename (str | None): Also append records to this file.
        json_log_to_file (bool): Write the file records as JSON.
        file_log_level (int): Threshold of the file handler.
        console_log_level (int): Threshold of the console handler.

    Raises:
        ValueError: If `mode` is not a known log mode.
    """
    mode = mode or os.getenv("CONCIERGE_LOG_MODE")
    if not mode:
        mode = "json" if running_in_container() else "cli"
    console_handler = _console_handler(mode)
    console_handler.setLevel(console_log_level)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()
    root.addHandler(console_handler)

    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        file_handler.setLevel(file_log_level)
        file_handler.setFormatter(
            _json_formatter()
            if json_log_to_file
            else logging.Formatter(
                "%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root.addHandler(file_handler)

    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.getLogger("concierge").debug("Logging initialized in '%s' mode.", mode)
