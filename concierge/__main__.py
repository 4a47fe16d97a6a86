"""
Concierge CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging
import os
import sys
from pathlib import Path
from typing import NoReturn, Sequence

from concierge.config import load_config
from concierge.console import console
from concierge.utils import setup_logging


def find_concierge_config() -> Path | None:
    candidates = [
        Path.cwd() / "concierge.yaml",
        Path.cwd() / "concierge.toml",
        Path.cwd() / ".concierge.yaml",
        Path.cwd() / ".concierge.toml",
        Path(os.environ.get("CONCIERGE_CONFIG", "concierge.yaml")),
    ]
    return next((p for p in candidates if p.is_file()), None)


def bootstrap(config_path: Path | None = None) -> Path | None:
    config_path = config_path or find_concierge_config()
    if config_path and str(config_path.parent.resolve()) not in sys.path:
        sys.path.insert(0, str(config_path.parent.resolve()))
    return config_path


def split_config_flag(argv: Sequence[str]) -> tuple[Path | None, list[str]]:
    """Peel a leading `--config FILE` or `--config=FILE` off the command line."""
    argv = list(argv)
    if argv and argv[0].startswith("--config="):
        return Path(argv[0].partition("=")[2]), argv[1:]
    if len(argv) >= 2 and argv[0] == "--config":
        return Path(argv[1]), argv[2:]
    return None, argv


def main(argv: Sequence[str] | None = None) -> NoReturn:
    setup_logging(
        console_log_level=(
            logging.DEBUG if os.getenv("CONCIERGE_DEBUG") else logging.WARNING
        )
    )
    config_path, rest = split_config_flag(sys.argv[1:] if argv is None else argv)
    config_path = bootstrap(config_path)
    if not config_path:
        console.print(
            "[error]No Concierge config found.[/error] Create a concierge.yaml or "
            "concierge.toml, or point CONCIERGE_CONFIG at one."
        )
        sys.exit(1)
    cli = load_config(config_path)
    cli.run_exit(argv0=cli.program or "concierge", argv=rest)


if __name__ == "__main__":
    main()
