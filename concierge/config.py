# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Declarative YAML/TOML loader for Concierge command-line interfaces."""
from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Callable

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from concierge.concierge import Concierge
from concierge.exceptions import ConfigurationError
from concierge.flags import CommandFlag
from concierge.logger import logger

RULES: dict[str, type] = {"str": str, "int": int, "float": float, "bool": bool}


def import_action(dotted_path: str) -> Callable[..., Any]:
    """
    Import a callable from a dotted path like `my.module.func` or `my.module:func`.

    Raises:
        ConfigurationError: If the module or attribute cannot be found, or if
            the attribute is not callable.
    """
    if ":" in dotted_path:
        module_path, _, attr = dotted_path.partition(":")
    else:
        module_path, _, attr = dotted_path.rpartition(".")
    if not module_path or not attr:
        raise ConfigurationError(f"Invalid action path: '{dotted_path}'")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise ConfigurationError(
            f"Could not import '{dotted_path}': {error}. Ensure the module is "
            "installed and discoverable via PYTHONPATH."
        ) from error
    try:
        action = getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        raise ConfigurationError(
            f"Module '{module_path}' has no attribute '{attr}'"
        ) from error
    if not callable(action):
        raise ConfigurationError(f"Action '{dotted_path}' is not callable")
    return action


def _check_rules(value: dict[str, str]) -> dict[str, str]:
    for name, rule in value.items():
        if rule not in RULES:
            raise ValueError(
                f"Invalid validator rule '{rule}' for '{name}'. "
                f"Must be one of: {', '.join(RULES)}"
            )
    return value


class RawCommand(BaseModel):
    """Raw command entry of a Concierge config file."""

    pattern: str
    action: str
    description: str = ""
    details: str = ""
    flags: list[str] = Field(default_factory=list)
    validators: dict[str, str] = Field(default_factory=dict)

    @field_validator("flags")
    @classmethod
    def validate_flags(cls, value: list[str]) -> list[str]:
        CommandFlag.from_names(value)
        return value

    @field_validator("validators")
    @classmethod
    def validate_rules(cls, value: dict[str, str]) -> dict[str, str]:
        return _check_rules(value)


class ConciergeConfig(BaseModel):
    """Concierge config file model."""

    program: str | None = None
    top_level: str = ""
    validators: dict[str, str] = Field(default_factory=dict)
    commands: list[RawCommand] = Field(default_factory=list)

    @field_validator("validators")
    @classmethod
    def validate_rules(cls, value: dict[str, str]) -> dict[str, str]:
        return _check_rules(value)

    def to_concierge(self) -> Concierge:
        concierge = Concierge(self.program)
        if self.top_level:
            concierge.top_level(self.top_level)
        for name, rule in self.validators.items():
            concierge.add_validator(name, RULES[rule])
        for raw_command in self.commands:
            concierge.add_command(
                raw_command.pattern,
                import_action(raw_command.action),
                description=raw_command.description,
                details=raw_command.details,
                flags=CommandFlag.from_names(raw_command.flags),
                validators={
                    name: RULES[rule] for name, rule in raw_command.validators.items()
                },
            )
        return concierge


def load_config(file_path: Path | str) -> Concierge:
    """
    Load a Concierge CLI from a YAML or TOML file.

    Example (YAML):
        program: todo
        top_level: "[-v,--verbose]"
        commands:
          - pattern: "add <item>"
            action: todo.commands.add
            description: Add an item
          - pattern: "list [... filters]"
            action: "todo.commands:list_items"
            flags: [default]
            validators:
              limit: int

    Args:
        file_path (Path | str): Path to the config file.

    Returns:
        Concierge: An instance with every command registered.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the file format is unsupported, its content is
            invalid, or an action cannot be imported.
    """
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            raw_config = yaml.safe_load(config_file)
        elif suffix == ".toml":
            raw_config = toml.load(config_file)
        else:
            raise ConfigurationError(f"Unsupported config format: {suffix}")

    if not isinstance(raw_config, dict):
        raise ConfigurationError(
            "Configuration file must contain a dictionary with a list of commands.\n"
            "Example:\n"
            "program: 'todo'\n"
            "commands:\n"
            "  - pattern: 'add <item>'\n"
            "    action: 'my_module.add'"
        )

    try:
        config = ConciergeConfig.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(f"Invalid config file '{path}':\n{error}") from error

    logger.debug("Loaded %d command(s) from %s", len(config.commands), path)
    return config.to_concierge()
