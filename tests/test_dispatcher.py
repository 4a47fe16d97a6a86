import pytest

from concierge.command import Command
from concierge.dispatcher import dispatch, run_steps
from concierge.pattern import parse


@pytest.mark.asyncio
async def test_run_steps_returns_selected_result():
    calls = []

    async def slow():
        calls.append("slow")
        return "slow"

    def fast():
        calls.append("fast")
        return "fast"

    assert await run_steps([slow, fast, slow], 1) == "fast"
    assert calls == ["slow", "fast", "slow"]


@pytest.mark.asyncio
async def test_dispatch_runs_hooks_in_order_and_shares_env():
    calls = []

    async def before(env):
        calls.append("before")
        env["user"] = "root"

    def action(env):
        calls.append(f"action:{env['user']}")
        return 42

    def after(env):
        calls.append("after")
        return "ignored"

    command = Command.from_definition(parse("whoami"), action=action)
    result = await dispatch(command, {}, before_each=[before], after_each=[after])
    assert result == 42
    assert calls == ["before", "action:root", "after"]


@pytest.mark.asyncio
async def test_dispatch_awaits_async_action():
    async def action(env):
        return env["value"] * 2

    command = Command.from_definition(parse("double"), action=action)
    assert await dispatch(command, {"value": 21}) == 42


@pytest.mark.asyncio
async def test_failing_before_hook_skips_action_and_after_hooks():
    calls = []

    def before(env):
        raise RuntimeError("nope")

    command = Command.from_definition(parse("x"), action=lambda env: calls.append("action"))
    with pytest.raises(RuntimeError, match="nope"):
        await dispatch(command, {}, before_each=[before], after_each=[lambda env: calls.append("after")])
    assert calls == []


@pytest.mark.asyncio
async def test_command_without_action_returns_none():
    command = Command.from_definition(parse("noop"))
    assert await dispatch(command, {}) is None
