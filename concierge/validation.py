# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Validation and coercion of the invocation environment.

Rules are plain pydantic-compatible annotations keyed by environment name:

    cli.add_validator("port", int)
    cli.add_validator("level", Literal["debug", "info"])
    cli.add_validator("retries", Annotated[int, Field(ge=0, le=10)])

`validate()` checks every key that has a rule and is present in the
environment, passing all other keys through unchanged. A key whose value is a
`None` default (an absent valued option) is left alone, so a rule only
applies to what was actually given on the command line. `apply_validators()`
turns the collected violations into a single `UsageError`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Collection, Mapping

from pydantic import TypeAdapter, ValidationError

from concierge.exceptions import UsageError
from concierge.logger import logger
from concierge.utils import oxford_join


@dataclass
class ValidationResult:
    value: dict[str, Any]
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@lru_cache(maxsize=None)
def _cached_adapter(rule: Any) -> TypeAdapter:
    return TypeAdapter(rule)


def get_adapter(rule: Any) -> TypeAdapter:
    try:
        return _cached_adapter(rule)
    except TypeError:
        # unhashable rule
        return TypeAdapter(rule)


def format_error(name: str, error: ValidationError) -> list[str]:
    messages = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ()))
        target = f"{name}.{location}" if location else name
        message = detail["msg"]
        messages.append(f'"{target}" is invalid ({message[:1].lower()}{message[1:]})')
    return messages


def validate(
    env: Mapping[str, Any],
    rules: Mapping[str, Any],
    defaulted: Collection[str] = (),
) -> ValidationResult:
    """
    Validate and coerce `env` against `rules`.

    Args:
        env (Mapping[str, Any]): The accumulated environment.
        rules (Mapping[str, Any]): Annotation per environment key.
        defaulted (Collection[str]): Keys filled from option defaults; those
            holding `None` are skipped.

    Returns:
        ValidationResult: The coerced environment and one message per violation.
    """
    value = dict(env)
    errors: list[str] = []
    for name, rule in rules.items():
        if name not in value:
            continue
        if name in defaulted and value[name] is None:
            continue
        try:
            value[name] = get_adapter(rule).validate_python(value[name])
        except ValidationError as error:
            errors.extend(format_error(name, error))
    return ValidationResult(value=value, errors=errors)


def apply_validators(
    env: dict[str, Any],
    rules: Mapping[str, Any],
    defaulted: Collection[str] = (),
) -> dict[str, Any]:
    """Return the coerced environment, or raise a `UsageError` listing every violation."""
    if not rules:
        return env
    result = validate(env, rules, defaulted)
    if not result.ok:
        logger.debug("[Validation] %d violation(s): %s", len(result.errors), result.errors)
        raise UsageError(f"Validation failed because {oxford_join(result.errors)}")
    return result.value
