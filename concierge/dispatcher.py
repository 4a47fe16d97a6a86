# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Runs an ordered list of steps that may each be synchronous or asynchronous.

Each step is a zero-argument callable. A step that returns an awaitable is
awaited in place before the next step starts, so the sequence is strictly
ordered no matter which steps suspend. The result of the whole sequence is the
result of one designated step (the command action), not of the last step.

An exception raised by any step stops the sequence; later steps do not run.
"""
from __future__ import annotations

import inspect
from typing import Any, Callable, Sequence

from concierge.command import Command
from concierge.hook_manager import Hook
from concierge.logger import logger

Step = Callable[[], Any]


async def run_steps(steps: Sequence[Step], return_index: int) -> Any:
    """
    Run `steps` in order and return the result of `steps[return_index]`.

    Args:
        steps (Sequence[Step]): Zero-argument callables.
        return_index (int): Index of the step whose result is returned.
    """
    results: list[Any] = [None] * len(steps)
    for index, step in enumerate(steps):
        result = step()
        if inspect.isawaitable(result):
            result = await result
        results[index] = result
    return results[return_index]


def _bind(callback: Callable[[dict[str, Any]], Any], env: dict[str, Any]) -> Step:
    return lambda: callback(env)


async def dispatch(
    command: Command,
    env: dict[str, Any],
    before_each: Sequence[Hook] = (),
    after_each: Sequence[Hook] = (),
) -> Any:
    """Run the before-each hooks, the command action, then the after-each hooks."""
    steps = [
        *(_bind(hook, env) for hook in before_each),
        _bind(command.run, env),
        *(_bind(hook, env) for hook in after_each),
    ]
    logger.debug(
        "[Dispatcher] Running '%s' with %d before / %d after hook(s)",
        command.name,
        len(before_each),
        len(after_each),
    )
    return await run_steps(steps, len(before_each))
