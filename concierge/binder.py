# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Binds leftover positional tokens to argument names and fills option defaults.

Binding order for the locked command:
1. required arguments, in declaration order (a shortfall is a usage error),
2. optional arguments, while tokens remain (unfilled names stay unset),
3. the spread argument, which receives every remaining token as a list;
   without a spread, any remaining token is a usage error.

Defaults are applied last: command-local options first, then global options,
each only when its environment key is still missing.
"""
from __future__ import annotations

from typing import Any, Iterable

from concierge.command import Command
from concierge.exceptions import UsageError
from concierge.option import Option
from concierge.utils import env_key


def bind_arguments(command: Command, rest: list[str], env: dict[str, Any]) -> None:
    remaining = list(rest)

    for name in command.required_arguments:
        if not remaining:
            raise UsageError(f'Missing required argument "{name}"')
        env[env_key(name)] = remaining.pop(0)

    for name in command.optional_arguments:
        if not remaining:
            break
        env[env_key(name)] = remaining.pop(0)

    if command.spread:
        env[env_key(command.spread)] = remaining
    elif remaining:
        raise UsageError(f"Too many arguments: {' '.join(remaining)}")


def fill_defaults(options: Iterable[Option], env: dict[str, Any]) -> set[str]:
    """Set the initial value of every absent option and return the keys it set."""
    defaulted: set[str] = set()
    for option in options:
        if option.env_name not in env:
            env[option.env_name] = option.initial_value
            defaulted.add(option.env_name)
    return defaulted
