# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""command.py

Defines the Command class for Concierge CLI.

A Command is one leaf of the command tree: a non-empty path of literal
segments, the positional arguments it accepts, its local options, a set of
behavior flags and the action to run once the command line has been resolved.

Commands are created once by `Concierge.add_command()` from a compiled
pattern and are treated as immutable afterwards; their consistency is checked
lazily at the start of every run.
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from concierge.exceptions import ConfigurationError
from concierge.flags import CommandFlag
from concierge.logger import logger
from concierge.option import Option
from concierge.pattern import Definition
from concierge.utils import env_key

Action = Callable[[dict[str, Any]], Any] | Callable[[dict[str, Any]], Awaitable[Any]]


def find_name_conflicts(options: list[Option] | tuple[Option, ...]) -> list[str]:
    """Return every short or long name declared more than once."""
    seen: set[str] = set()
    conflicts: list[str] = []
    for option in options:
        for name in option.names:
            if name in seen and name not in conflicts:
                conflicts.append(name)
            seen.add(name)
    return conflicts


class Command(BaseModel):
    """
    Represents a registered subcommand.

    Attributes:
        path (list[str]): Literal path segments (`["remote", "add"]`).
        required_arguments (list[str]): Names bound first, in order.
        optional_arguments (list[str]): Names bound while tokens remain.
        spread (str | None): Name collecting every leftover positional.
        options (list[Option]): Options local to this command.
        flags (CommandFlag): DEFAULT / PROXY / HIDDEN bit-set.
        description (str): One-line summary shown in the command listing.
        details (str): Longer text shown in the command usage.
        validators (dict[str, Any]): Validation rules keyed by env name.
        action (Callable | None): Sync or async callable receiving the env.
    """

    path: list[str]
    required_arguments: list[str] = Field(default_factory=list)
    optional_arguments: list[str] = Field(default_factory=list)
    spread: str | None = None
    options: list[Option] = Field(default_factory=list)
    flags: CommandFlag = CommandFlag.NONE
    description: str = ""
    details: str = ""
    validators: dict[str, Any] = Field(default_factory=dict)
    action: Action | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("path")
    @classmethod
    def check_path(cls, path: list[str]) -> list[str]:
        if not path:
            raise ConfigurationError(
                "A command pattern cannot have an empty command path; "
                "use top_level() instead"
            )
        return path

    @field_validator("flags", mode="plain")
    @classmethod
    def coerce_flags(cls, flags: Any) -> CommandFlag:
        if isinstance(flags, (list, tuple, set)):
            return CommandFlag.from_names(flags)
        return CommandFlag(flags)

    @field_validator("validators")
    @classmethod
    def normalize_validator_names(cls, validators: dict[str, Any]) -> dict[str, Any]:
        return {env_key(name): rule for name, rule in validators.items()}

    @classmethod
    def from_definition(cls, definition: Definition, **kwargs: Any) -> Command:
        return cls(
            path=list(definition.path),
            required_arguments=list(definition.required_arguments),
            optional_arguments=list(definition.optional_arguments),
            spread=definition.spread,
            options=list(definition.options),
            **kwargs,
        )

    @property
    def name(self) -> str:
        return " ".join(self.path)

    @property
    def is_default(self) -> bool:
        return bool(self.flags & CommandFlag.DEFAULT)

    @property
    def is_proxy(self) -> bool:
        return bool(self.flags & CommandFlag.PROXY)

    @property
    def is_hidden(self) -> bool:
        return bool(self.flags & CommandFlag.HIDDEN)

    def find_short_option(self, letter: str) -> Option | None:
        return next(
            (option for option in self.options if option.short_name == letter), None
        )

    def find_long_option(self, name: str) -> Option | None:
        return next((option for option in self.options if option.long_name == name), None)

    def add_validator(self, name: str, rule: Any) -> Command:
        self.validators[env_key(name)] = rule
        return self

    def check(self, global_names: list[str] | None = None) -> None:
        """
        Verify that no two local options share a name.

        Local options may shadow global ones; the command scope wins while the
        command is selected.
        """
        conflicts = find_name_conflicts(self.options)
        if conflicts:
            raise ConfigurationError(
                f"Command '{self.name}' has conflicting option names: "
                f"{', '.join(conflicts)}"
            )
        shadowed = sorted(
            set(global_names or []).intersection(
                name for option in self.options for name in option.names
            )
        )
        if shadowed:
            logger.debug(
                "[Command:%s] Local options shadow global options: %s",
                self.name,
                ", ".join(shadowed),
            )

    def run(self, env: dict[str, Any]) -> Any:
        """Call the action; the result may be a plain value or an awaitable."""
        if self.action is None:
            logger.warning("[Command:%s] No action registered.", self.name)
            return None
        return self.action(env)

    def __str__(self) -> str:
        return f"Command(path='{self.name}', description='{self.description}')"
