# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Registry of the callbacks run around every command invocation.

A hook receives the invocation environment, the very dict the command action
gets, so a `before_each` hook can inject values for the action and for later
hooks. Hooks may be plain or coroutine functions; the dispatcher runs them in
registration order.

    hooks = HookManager()
    hooks.register("before", load_profile)
    hooks.get(HookType.BEFORE_EACH)  # [load_profile]
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Awaitable, Callable, Union

from concierge.exceptions import ConfigurationError

Hook = Union[
    Callable[[dict[str, Any]], Any], Callable[[dict[str, Any]], Awaitable[Any]]
]

_ALIASES = {"before": "before_each", "after": "after_each"}


class HookType(Enum):
    """
    Stage a hook runs at. `"before"` and `"after"` are accepted as aliases,
    case and dashes are ignored (`"Before-Each"`).
    """

    BEFORE_EACH = "before_each"
    AFTER_EACH = "after_each"

    @classmethod
    def _missing_(cls, value: object) -> HookType:
        if isinstance(value, str):
            normalized = value.strip().lower().replace("-", "_")
            normalized = _ALIASES.get(normalized, normalized)
            for member in cls:
                if member.value == normalized:
                    return member
        raise ValueError(
            f"Invalid {cls.__name__}: {value!r}. "
            f"Must be one of: {', '.join(member.value for member in cls)}"
        )

    def __str__(self) -> str:
        return self.value


class HookManager:
    """Hooks of a `Concierge` instance, grouped by `HookType`."""

    def __init__(self) -> None:
        self._hooks: dict[HookType, list[Hook]] = {stage: [] for stage in HookType}

    def register(self, hook_type: HookType | str, hook: Hook) -> None:
        """
        Append `hook` to the hooks of `hook_type`.

        Raises:
            ValueError: If the hook type is unknown.
            ConfigurationError: If the hook is not callable.
        """
        stage = HookType(hook_type)
        if not callable(hook):
            raise ConfigurationError(f"Hook for '{stage}' must be callable.")
        self._hooks[stage].append(hook)

    def get(self, hook_type: HookType | str) -> list[Hook]:
        return list(self._hooks[HookType(hook_type)])

    def clear(self, hook_type: HookType | str | None = None) -> None:
        stages = [HookType(hook_type)] if hook_type else list(HookType)
        for stage in stages:
            self._hooks[stage].clear()

    def __str__(self) -> str:
        lines = ["<HookManager>"]
        for stage, hooks in self._hooks.items():
            names = ", ".join(getattr(hook, "__name__", repr(hook)) for hook in hooks)
            lines.append(f"  {stage}: {names or '-'}")
        return "\n".join(lines)
