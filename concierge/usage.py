# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Usage and error rendering for Concierge, using Rich output.

Two layouts exist:
- command usage: `Usage: prog [global options] path <required> [optional] [command options]`
  followed by the command details when no error is being reported;
- top-level usage: `Usage: prog [global options] <command>` followed by the
  list of every non-hidden command with its description.

Option lists are rendered compactly: short-only boolean flags are grouped into
a single `[-abc]` block, every other option gets its own `[-n,--name ARG]`
block, and options enabled by default display their disabling spelling.
"""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterable, Sequence

from rich.console import Console
from rich.markup import escape

from concierge.console import console as default_console
from concierge.exceptions import UsageError
from concierge.option import Option

if TYPE_CHECKING:
    from concierge.command import Command


def get_option_string(options: Iterable[Option]) -> str:
    basic_options: list[Option] = []
    complex_options: list[Option] = []
    for option in options:
        if option.short_name and not option.long_name and not option.takes_argument:
            basic_options.append(option)
        else:
            complex_options.append(option)

    parts = []
    if basic_options:
        parts.append(f"[-{''.join(option.short_name or '' for option in basic_options)}]")
    for option in complex_options:
        if option.takes_argument:
            parts.append(f"[{option.get_flags_text()} {option.argument_name}]")
        else:
            parts.append(f"[{option.get_flags_text()}]")
    return " ".join(parts)


def _collapse(text: str) -> str:
    return re.sub(r" +", " ", text).strip()


def get_command_usage(
    program: str, global_options: Sequence[Option], command: Command
) -> str:
    """Plain-text usage line for a single command."""
    required = " ".join(f"<{name}>" for name in command.required_arguments)
    optional = " ".join(f"[{name}]" for name in command.optional_arguments)
    spread = f"[... {command.spread}]" if command.spread else ""
    return _collapse(
        " ".join(
            [
                program,
                get_option_string(global_options),
                command.name,
                required,
                optional,
                spread,
                get_option_string(command.options),
            ]
        )
    )


def get_top_level_usage(program: str, global_options: Sequence[Option]) -> str:
    return _collapse(f"{program} {get_option_string(global_options)} <command>")


def render_error(error: BaseException, console: Console | None = None) -> None:
    console = console or default_console
    if isinstance(error, UsageError):
        console.print(f"[error]Error[/error][bold]:[/bold] {escape(str(error))}")
    else:
        console.print(
            f"[error]Error[/error][bold]:[/bold] "
            f"{escape(type(error).__name__)}: {escape(str(error))}"
        )


def render_usage(
    program: str,
    global_options: Sequence[Option],
    commands: Sequence[Command],
    command: Command | None = None,
    error: BaseException | None = None,
    console: Console | None = None,
) -> None:
    """
    Print the usage for `command`, or the top-level listing when it is None.

    Args:
        program (str): The name the program was invoked as.
        global_options (Sequence[Option]): Options shared by every command.
        commands (Sequence[Command]): Every registered command.
        command (Command | None): The command to describe.
        error (BaseException | None): Error to report above the usage line.
        console (Console | None): Target console; the shared one by default.
    """
    console = console or default_console

    if error is not None:
        render_error(error, console)
        console.print()

    if command is not None:
        usage = get_command_usage(program, global_options, command)
        console.print(f"[usage]Usage:[/usage] {escape(usage)}")
        if error is None and (command.details or command.description):
            console.print()
            console.print(escape(command.details or command.description))
        return

    console.print(f"[usage]Usage:[/usage] {escape(get_top_level_usage(program, global_options))}")

    visible = [candidate for candidate in commands if not candidate.is_hidden]
    if not visible:
        return

    console.print()
    console.print("[bold]Where <command> is one of:[/bold]")
    console.print()
    width = max(len(candidate.name) for candidate in visible)
    for candidate in visible:
        console.print(
            f"  [command]{escape(candidate.name.ljust(width))}[/command]  "
            f"[hint]{escape(candidate.description)}[/hint]"
        )
