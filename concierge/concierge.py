# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Main class for declaring and running Concierge command-line interfaces.

A `Concierge` instance is a builder during setup (commands, global options,
validators and hooks accumulate through chained calls) and is treated as
read-only once `run()` begins. Every run re-checks the configuration before
looking at a single token, so a misconfigured CLI always fails loudly.

Pipeline of one invocation:

    argv -> Resolver (tokenize, match the command path, bind options)
         -> bind_arguments / fill_defaults
         -> apply_validators
         -> dispatch (before_each hooks, command action, after_each hooks)

Usage errors are rendered next to the usage of the best known command and
turned into exit status 1. Any other exception is logged and re-raised.

Example:
    cli = Concierge("todo").top_level("[-v,--verbose]")

    @cli.command("add <item>", description="Add an item")
    def add(env):
        print(f"added {env['item']}")

    cli.run_exit()
"""
from __future__ import annotations

import asyncio
import shlex
import sys
from pathlib import Path
from typing import Any, Callable, NoReturn, Sequence

from prompt_toolkit import PromptSession
from rich.console import Console

from concierge.binder import bind_arguments, fill_defaults
from concierge.command import Action, Command, find_name_conflicts
from concierge.completer import ConciergeCompleter
from concierge.console import console as default_console
from concierge.discovery import discover
from concierge.dispatcher import dispatch
from concierge.exceptions import ConfigurationError, UsageError
from concierge.flags import CommandFlag
from concierge.hook_manager import Hook, HookManager, HookType
from concierge.logger import logger
from concierge.option import Option
from concierge.pattern import parse
from concierge.resolver import Resolution, Resolver
from concierge.usage import render_error, render_usage
from concierge.utils import env_key, get_program_invocation
from concierge.validation import apply_validators

HELP_OPTION = Option(short_name="h", long_name="help")


class Concierge:
    """
    Registry and entry point of a command-line interface.

    Args:
        program (str | None): Name shown in usage lines when `argv0` is not
            given to `run()`. Defaults to the detected program invocation.
        console (Console | None): Rich console for usage and error output.

    Methods:
        top_level(pattern): Declare the global options.
        add_command(pattern, action, ...): Register a command.
        command(pattern, ...): Decorator form of `add_command`.
        add_validator(name, rule): Register a global validation rule.
        before_each(hook) / after_each(hook): Register dispatch hooks.
        directory(path): Load commands from every file in a directory.
        check(): Verify the configuration.
        resolve(argv): Resolve a command line without running it.
        run(argv0, argv): Resolve and dispatch, returning the exit status.
        run_exit(argv0, argv): `run` then terminate the process.
        shell(argv0): Interactive loop with completion.
    """

    def __init__(self, program: str | None = None, *, console: Console | None = None) -> None:
        self.program: str | None = program
        self.console: Console = console or default_console
        self.commands: list[Command] = []
        self.options: list[Option] = [HELP_OPTION]
        self.validators: dict[str, Any] = {}
        self.hooks: HookManager = HookManager()

    def top_level(self, pattern: str) -> Concierge:
        """
        Declare the global options from a pattern such as `[-v,--verbose] [--cwd PATH]`.

        Raises:
            ConfigurationError: If the pattern declares a path or arguments.
        """
        definition = parse(pattern)
        if definition.path:
            raise ConfigurationError(
                "The top-level pattern cannot have a command path; use add_command() instead"
            )
        if definition.required_arguments:
            raise ConfigurationError(
                "The top-level pattern cannot have required arguments; "
                "use add_command() instead"
            )
        if definition.optional_arguments or definition.spread:
            raise ConfigurationError(
                "The top-level pattern cannot have optional arguments; "
                "use add_command() instead"
            )
        self.options = [HELP_OPTION, *definition.options]
        return self

    def add_command(
        self,
        pattern: str,
        action: Action | None = None,
        *,
        description: str = "",
        details: str = "",
        flags: CommandFlag = CommandFlag.NONE,
        validators: dict[str, Any] | None = None,
    ) -> Command:
        """
        Register a command from its pattern.

        Raises:
            PatternError: If the pattern is malformed.
            ConfigurationError: If the pattern has no command path.
        """
        definition = parse(pattern)
        if not definition.path:
            raise ConfigurationError(
                "A command pattern cannot have an empty command path; "
                "use top_level() instead"
            )
        command = Command.from_definition(
            definition,
            description=description,
            details=details,
            flags=flags,
            validators=validators or {},
            action=action,
        )
        self.commands.append(command)
        logger.debug("Registered command '%s'", command.name)
        return command

    def command(
        self,
        pattern: str,
        *,
        description: str = "",
        details: str = "",
        flags: CommandFlag = CommandFlag.NONE,
        validators: dict[str, Any] | None = None,
    ) -> Callable[[Action], Action]:
        """Decorator registering the decorated function as a command action."""

        def decorator(action: Action) -> Action:
            self.add_command(
                pattern,
                action,
                description=description or (action.__doc__ or "").strip().split("\n")[0],
                details=details,
                flags=flags,
                validators=validators,
            )
            return action

        return decorator

    def add_validator(self, name: str, rule: Any) -> Concierge:
        self.validators[env_key(name)] = rule
        return self

    def before_each(self, hook: Hook) -> Concierge:
        self.hooks.register(HookType.BEFORE_EACH, hook)
        return self

    def after_each(self, hook: Hook) -> Concierge:
        self.hooks.register(HookType.AFTER_EACH, hook)
        return self

    def directory(
        self, starting_path: Path | str, recursive: bool = True, pattern: str = "*.py"
    ) -> Concierge:
        discover(self, starting_path, recursive=recursive, pattern=pattern)
        return self

    def check(self) -> None:
        """
        Verify the configuration.

        Raises:
            ConfigurationError: If several commands are flagged as default, if
                two global options share a name, or if two options of the same
                command share a name.
        """
        defaults = [command.name for command in self.commands if command.is_default]
        if len(defaults) > 1:
            raise ConfigurationError(
                f"Multiple commands have been flagged as default command: {', '.join(defaults)}"
            )

        conflicts = find_name_conflicts(self.options)
        if conflicts:
            raise ConfigurationError(
                f"Some top-level option names are conflicting together: {', '.join(conflicts)}"
            )

        global_names = [name for option in self.options for name in option.names]
        for command in self.commands:
            command.check(global_names)

    def get_program(self, argv0: str | Sequence[str] | None = None) -> str:
        if argv0:
            return argv0 if isinstance(argv0, str) else " ".join(argv0)
        return self.program or get_program_invocation()

    def _seed_env(
        self, argv0: str | Sequence[str] | None, initial_env: dict[str, Any] | None
    ) -> dict[str, Any]:
        env: dict[str, Any] = {"argv0": argv0}
        if not initial_env:
            return env
        for option in self.options:
            for key in (option.long_name, option.env_name, option.short_name):
                if key and key in initial_env:
                    env[option.env_name] = initial_env[key]
                    break
        return env

    def _finish(self, resolver: Resolver, argv: Sequence[str]) -> Resolution:
        resolution = resolver.resolve(argv)
        command = resolution.command
        if resolution.env.get("help"):
            # usage only, positionals are neither bound nor validated
            fill_defaults([*command.options, *self.options], resolution.env)
            return resolution
        bind_arguments(command, resolution.rest, resolution.env)
        defaulted = fill_defaults([*command.options, *self.options], resolution.env)
        resolution.env = apply_validators(
            resolution.env,
            {**self.validators, **command.validators},
            defaulted=defaulted,
        )
        return resolution

    def resolve(
        self,
        argv: Sequence[str],
        initial_env: dict[str, Any] | None = None,
        argv0: str | Sequence[str] | None = None,
    ) -> Resolution:
        """
        Resolve a command line into its command and final environment, without
        dispatching.

        Raises:
            ConfigurationError: If `check()` fails.
            UsageError: If the command line is invalid.
        """
        self.check()
        resolver = Resolver(self.commands, self.options, self._seed_env(argv0, initial_env))
        return self._finish(resolver, argv)

    def usage(
        self,
        argv0: str | Sequence[str] | None = None,
        command: Command | None = None,
        error: BaseException | None = None,
    ) -> None:
        render_usage(
            self.get_program(argv0),
            self.options,
            self.commands,
            command=command,
            error=error,
            console=self.console,
        )

    def error(self, error: BaseException) -> None:
        render_error(error, self.console)

    async def run(
        self,
        argv0: str | Sequence[str] | None,
        argv: Sequence[str],
        initial_env: dict[str, Any] | None = None,
    ) -> Any:
        """
        Resolve `argv` and run the selected command.

        Returns:
            Any: The action's result, `0` when help was printed, or `1` when a
                usage error was reported.

        Raises:
            ConfigurationError: If the configuration is inconsistent.
            Exception: Any non-usage error raised by a hook or an action.
        """
        self.check()
        resolver = Resolver(self.commands, self.options, self._seed_env(argv0, initial_env))
        try:
            resolution = self._finish(resolver, argv)
            env = resolution.env
            if env.get("help"):
                self.usage(
                    argv0, command=resolution.command if resolution.command_path else None
                )
                return 0
            logger.info("Running command '%s'", resolution.command.name)
            return await dispatch(
                resolution.command,
                env,
                before_each=self.hooks.get(HookType.BEFORE_EACH),
                after_each=self.hooks.get(HookType.AFTER_EACH),
            )
        except UsageError as error:
            logger.debug("Usage error: %s", error)
            self.usage(argv0, command=resolver.selected_command, error=error)
            return 1
        except Exception as error:
            logger.error(
                "Unexpected %s while running %s: %s",
                type(error).__name__,
                list(argv),
                error,
                exc_info=True,
            )
            raise

    def run_exit(
        self, argv0: str | Sequence[str] | None = None, argv: Sequence[str] | None = None
    ) -> NoReturn:
        """Run the command line (defaults to `sys.argv[1:]`) and exit with its status."""
        if argv is None:
            argv = sys.argv[1:]
        try:
            status = asyncio.run(self.run(argv0, argv))
        except KeyboardInterrupt:
            logger.info("Interrupted. <- Exiting run.")
            sys.exit(130)
        except Exception as error:
            self.error(error)
            self.console.print_exception()
            sys.exit(1)
        if isinstance(status, bool) or not isinstance(status, int):
            sys.exit(0)
        sys.exit(status)

    async def shell(self, argv0: str | Sequence[str] | None = None, prompt: str = "> ") -> None:
        """
        Read command lines interactively and run each one.

        Ends on EOF (Ctrl-D) or Ctrl-C. Errors are reported and the loop goes on.
        """
        session: PromptSession = PromptSession(
            message=prompt, completer=ConciergeCompleter(self)
        )
        logger.info("Starting shell: %s", self.get_program(argv0))
        while True:
            try:
                line = await session.prompt_async()
            except (EOFError, KeyboardInterrupt):
                logger.info("EOF or KeyboardInterrupt. Exiting shell.")
                break
            if not line.strip():
                continue
            try:
                argv = shlex.split(line)
            except ValueError as error:
                self.error(UsageError(str(error)))
                continue
            try:
                await self.run(argv0, argv)
            except Exception as error:
                self.error(error)

