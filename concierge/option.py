# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Option` dataclass used to describe a single command-line flag.

Options are produced by the pattern compiler (`concierge.pattern.parse`) and
live either in the global scope of a `Concierge` instance or locally on a
`Command`. The resolution engine only ever reads them.

Key Attributes:
- `short_name`: single letter used as `-x`
- `long_name`: kebab-case word used as `--xxx`
- `argument_name`: placeholder shown in usage; its presence means the option
  takes a value
- `initial_value`: default bound into the environment when the option is absent
- `max_value`: turns the option into a repeatable counter capped at this value
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from concierge.exceptions import ConfigurationError
from concierge.utils import env_key


@dataclass(frozen=True)
class Option:
    """
    Represents a command-line option.

    Attributes:
        short_name (str | None): Single letter flag (`v` for `-v`).
        long_name (str | None): Long flag without dashes (`dry-run`).
        argument_name (str | None): Value placeholder; set for valued options.
        initial_value (Any): Default value when the option is not given.
        max_value (int | None): Upper bound for counter options (`-vvv`).
    """

    short_name: str | None = None
    long_name: str | None = None
    argument_name: str | None = None
    initial_value: Any = False
    max_value: int | None = None

    def __post_init__(self) -> None:
        if not self.short_name and not self.long_name:
            raise ConfigurationError("An option needs at least a short or a long name")

    @property
    def takes_argument(self) -> bool:
        return self.argument_name is not None

    @property
    def is_counter(self) -> bool:
        return self.max_value is not None

    @property
    def env_name(self) -> str:
        """Key used for this option in the invocation environment."""
        return env_key(self.long_name or self.short_name or "")

    @property
    def names(self) -> list[str]:
        return [name for name in (self.short_name, self.long_name) if name]

    @property
    def display_name(self) -> str:
        return self.long_name or self.short_name or ""

    @property
    def disable_prefix(self) -> str:
        if self.long_name and self.long_name.startswith("with-"):
            return "--without"
        return "--no"

    @property
    def disable_flag(self) -> str | None:
        """The negated spelling of the long flag, e.g. `--no-color`."""
        if not self.long_name:
            return None
        if self.long_name.startswith("with-"):
            return f"--without-{self.long_name[len('with-'):]}"
        return f"--no-{self.long_name}"

    def get_flags_text(self) -> str:
        flags = []
        if self.short_name:
            flags.append(f"-{self.short_name}")
        if self.long_name:
            if self.initial_value is True:
                flags.append(self.disable_flag)
            else:
                flags.append(f"--{self.long_name}")
        return ",".join(flags)

    def __str__(self) -> str:
        return f"Option({self.get_flags_text()})"
