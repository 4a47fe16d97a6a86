from io import StringIO

import pytest
from rich.console import Console

from concierge.command import Command
from concierge.exceptions import UsageError
from concierge.flags import CommandFlag
from concierge.option import Option
from concierge.pattern import parse
from concierge.themes import get_theme
from concierge.usage import (
    get_command_usage,
    get_option_string,
    get_top_level_usage,
    render_error,
    render_usage,
)

HELP = Option(short_name="h", long_name="help")


@pytest.fixture
def console():
    return Console(file=StringIO(), width=200, soft_wrap=True)


def output(console: Console) -> str:
    return console.file.getvalue()


def make(pattern: str, **kwargs) -> Command:
    return Command.from_definition(parse(pattern), **kwargs)


def test_option_string_groups_short_booleans():
    options = parse("[-a] [-b] [-n,--name NAME] [--no-color] [-vvv]").options
    assert get_option_string(options) == "[-abv] [-n,--name NAME] [--no-color]"


def test_command_usage():
    command = make("cp <source> [target] [... extra] [-f,--force]")
    assert (
        get_command_usage("prog", [HELP], command)
        == "prog [-h,--help] cp <source> [target] [... extra] [-f,--force]"
    )


def test_top_level_usage():
    assert get_top_level_usage("prog", [HELP]) == "prog [-h,--help] <command>"


def test_render_command_usage_with_details(console):
    command = make("cp <source> [target]", description="Copy", details="Copy a file.")
    render_usage("prog", [HELP], [command], command=command, console=console)
    text = output(console)
    assert "Usage: prog [-h,--help] cp <source> [target]" in text
    assert "Copy a file." in text


def test_render_command_usage_with_error_hides_details(console):
    command = make("cp <source>", description="Copy")
    render_usage(
        "prog",
        [HELP],
        [command],
        command=command,
        error=UsageError('Missing required argument "source"'),
        console=console,
    )
    text = output(console)
    assert 'Error: Missing required argument "source"' in text
    assert "Usage: prog [-h,--help] cp <source>" in text
    assert "Copy" not in text


def test_render_top_level_listing_skips_hidden(console):
    commands = [
        make("add <item>", description="Add an item"),
        make("remove <item>", description="Remove an item"),
        make("debug", description="Internal", flags=CommandFlag.HIDDEN),
    ]
    render_usage("prog", [HELP], commands, console=console)
    text = output(console)
    assert "Usage: prog [-h,--help] <command>" in text
    assert "Where <command> is one of:" in text
    assert "add     Add an item" in text
    assert "remove  Remove an item" in text
    assert "debug" not in text


def test_render_error_for_unexpected_exception(console):
    render_error(RuntimeError("boom"), console)
    assert "Error: RuntimeError: boom" in output(console)


def test_render_top_level_listing_dims_descriptions():
    themed = Console(
        file=StringIO(),
        width=200,
        theme=get_theme(),
        force_terminal=True,
        color_system="truecolor",
    )
    render_usage("prog", [HELP], [make("add <item>", description="Add an item")], console=themed)
    # COMMENT_GREY (#7F848E) as a truecolor foreground
    assert "38;2;127;132;142mAdd an item" in output(themed)
