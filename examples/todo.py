import asyncio
import logging
from typing import Annotated

from pydantic import Field

from concierge import Concierge, CommandFlag, UsageError
from concierge.utils import setup_logging

setup_logging(console_log_level=logging.WARNING)

ITEMS: list[str] = []

cli = Concierge("todo").top_level("[-v,--verbose]")
cli.add_validator("limit", Annotated[int, Field(ge=1)])


def load(env):
    env["items"] = ITEMS


cli.before_each(load)


@cli.command("add <item> [... more]")
def add(env):
    """Add one or more items"""
    env["items"].extend([env["item"], *env["more"]])
    if env["verbose"]:
        print(f"{len(env['items'])} item(s)")


@cli.command("list [limit]", flags=CommandFlag.DEFAULT)
async def list_items(env):
    """Show the items"""
    await asyncio.sleep(0)
    for item in env["items"][: env.get("limit")]:
        print(f"- {item}")


@cli.command("remove <item>")
def remove(env):
    """Remove an item"""
    if env["item"] not in env["items"]:
        raise UsageError(f'No item named "{env["item"]}"')
    env["items"].remove(env["item"])


def pop(env):
    position = env.get("position", -1)
    if not -len(env["items"]) <= position < len(env["items"]):
        raise UsageError(f"No item at position {position}")
    print(env["items"].pop(position))


cli.add_command("pop [position]", pop, description="Remove the item at a position").add_validator(
    "position", int
)


if __name__ == "__main__":
    asyncio.run(cli.shell(prompt="todo> "))
