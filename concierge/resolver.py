# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements the argument resolution engine.

`Resolver` walks the tokenized command line once, left to right, with one
token of lookahead. While walking it:

- narrows the set of candidate commands one path segment at a time (the
  registered paths are indexed in a `CommandTrie`),
- binds each option to its owner: the options of the currently selected
  command take precedence over the global options,
- locks the selected command as soon as nothing is left to disambiguate, after
  which every plain string is a positional argument,
- passes tokens through untouched after `--` or once a proxy command is
  followed by an option-like token.

The resolver only fills option values into the environment. Mapping the
leftover positionals onto argument names and filling defaults is done by
`concierge.binder`.

Example:
    resolver = Resolver(commands, global_options)
    resolution = resolver.resolve(["--verbose", "add", "widget"])
    resolution.command.path == ["add"]
    resolution.rest == ["widget"]
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Sequence

from concierge.command import Command
from concierge.exceptions import UsageError
from concierge.logger import logger
from concierge.option import Option
from concierge.tokenizer import Token, TokenType, tokenize_all

SHORT_OPTION_LIST_REGEXP = re.compile(r"^[a-zA-Z]*$")


@dataclass
class TrieNode:
    """A path segment in the command tree."""

    children: dict[str, TrieNode] = field(default_factory=dict)
    commands: list[Command] = field(default_factory=list)
    size: int = 0


class CommandTrie:
    """
    Index of command paths by segment.

    `size` counts every command whose path passes through (or ends at) a node,
    which is what the resolver needs to know whether any candidate is left.
    """

    def __init__(self, commands: Sequence[Command]) -> None:
        self.root = TrieNode()
        for command in commands:
            self.insert(command)

    def insert(self, command: Command) -> None:
        node = self.root
        node.size += 1
        for segment in command.path:
            node = node.children.setdefault(segment, TrieNode())
            node.size += 1
        node.commands.append(command)


@dataclass
class Resolution:
    """Outcome of the resolution walk, before arguments are bound."""

    command: Command
    command_path: list[str]
    rest: list[str]
    env: dict[str, Any]


class Resolver:
    """
    Stateful single-use walker over one command line.

    Args:
        commands (Sequence[Command]): Every registered command.
        global_options (Sequence[Option]): Options valid for every command.
        env (dict | None): Environment to fill; created when omitted.

    Attributes:
        selected_command (Command | None): Best match so far. Starts as the
            DEFAULT command, if any, so error reports can still show its usage.
        command_buffer (list[str]): Plain strings seen before the lock.
        command_path (list[str]): The buffer at the time of the last selection.
        is_command_locked (bool): Whether the command is final.
        rest (list[str]): Leftover positional tokens.
    """

    def __init__(
        self,
        commands: Sequence[Command],
        global_options: Sequence[Option],
        env: dict[str, Any] | None = None,
    ) -> None:
        self.commands = list(commands)
        self.global_options = list(global_options)
        self.env: dict[str, Any] = env if env is not None else {}
        self.trie = CommandTrie(self.commands)
        self.selected_command: Command | None = next(
            (command for command in self.commands if command.is_default), None
        )
        self.candidates: TrieNode | None = self.trie.root
        self.command_buffer: list[str] = []
        self.command_path: list[str] = []
        self.is_command_locked: bool = False
        self.rest: list[str] = []

    def lock_command(self) -> None:
        if self.is_command_locked:
            return
        if self.selected_command is None:
            raise UsageError("No commands match the arguments you've provided")
        self.rest = self.command_buffer[len(self.command_path) :]
        self.is_command_locked = True
        logger.debug(
            "[Resolver] Locked command '%s' with leftovers %s",
            self.selected_command.name,
            self.rest,
        )

    def _find_short_option(self, letter: str) -> Option | None:
        option = (
            self.selected_command.find_short_option(letter)
            if self.selected_command
            else None
        )
        if option:
            self.lock_command()
            return option
        return next(
            (option for option in self.global_options if option.short_name == letter),
            None,
        )

    def _find_long_option(self, name: str) -> Option | None:
        option = (
            self.selected_command.find_long_option(name)
            if self.selected_command
            else None
        )
        if option:
            self.lock_command()
            return option
        return next(
            (option for option in self.global_options if option.long_name == name),
            None,
        )

    def _increment(self, option: Option) -> int:
        assert option.max_value is not None
        current = self.env.get(option.env_name) or option.initial_value or 0
        return min(current + 1, option.max_value)

    def _pass_through(self, tokens: list[Token], start: int) -> int:
        """Lock, then copy every token from `start` verbatim into `rest`."""
        self.lock_command()
        self.rest.extend(token.literal for token in tokens[start:])
        return len(tokens)

    def _handle_short_option(self, token: Token, lookahead: Token | None) -> int:
        assert token.leading is not None, "short options always have a leading letter"
        leading_option = self._find_short_option(token.leading)
        if leading_option is None:
            raise UsageError(f'Unknown option "{token.leading}"')

        if leading_option.takes_argument:
            consumed = 1
            value = token.value or token.rest or None
            if value is None and lookahead is not None and lookahead.is_raw:
                value = lookahead.literal
                consumed = 2
            if value is None:
                raise UsageError(
                    f'Option "{leading_option.short_name}" cannot be used without argument'
                )
            self.env[leading_option.env_name] = value
            return consumed

        if token.value:
            raise UsageError(
                f'Option "{leading_option.short_name}" doesn\'t expect any argument'
            )
        if not SHORT_OPTION_LIST_REGEXP.match(token.rest):
            raise UsageError(f'Malformed option list "{token.literal}"')

        for letter in token.leading + token.rest:
            option = self._find_short_option(letter)
            if option is None:
                raise UsageError(f'Unknown option "{letter}"')
            if option.takes_argument:
                raise UsageError(
                    f'Option "{letter}" cannot be placed in an option list, '
                    "because it expects an argument"
                )
            if option.is_counter:
                self.env[option.env_name] = self._increment(option)
            else:
                self.env[option.env_name] = not option.initial_value
        return 1

    def _handle_long_option(self, token: Token, lookahead: Token | None) -> int:
        assert token.name is not None, "long options always have a name"
        option = self._find_long_option(token.name)
        if option is None:
            raise UsageError(f'Unknown option "{token.name}"')

        consumed = 1
        value: Any
        if option.takes_argument:
            if not token.enabled and token.value is not None:
                raise UsageError(
                    f'Option "{option.long_name}" cannot have an argument '
                    f"when used with {option.disable_prefix}"
                )
            if not token.enabled:
                value = None
            elif token.value is not None:
                value = token.value
            elif lookahead is not None and lookahead.is_raw:
                value = lookahead.literal
                consumed = 2
            else:
                raise UsageError(
                    f'Option "{option.long_name}" cannot be used without argument. '
                    f'Use "{option.disable_flag}" instead'
                )
        else:
            if token.value is not None:
                raise UsageError(
                    f'Option "{option.display_name}" doesn\'t expect any argument'
                )
            if option.is_counter:
                value = self._increment(option) if token.enabled else 0
            else:
                value = token.enabled

        self.env[option.env_name] = value
        return consumed

    def _handle_raw_string(
        self, tokens: list[Token], index: int, lookahead: Token | None
    ) -> int:
        literal = tokens[index].literal
        if self.is_command_locked:
            self.rest.append(literal)
            return 1

        self.command_buffer.append(literal)
        node = self.candidates.children.get(literal) if self.candidates else None
        self.candidates = node

        remaining = 0
        if node is not None:
            remaining = node.size
            if node.commands:
                self.selected_command = node.commands[0]
                self.command_path = list(self.command_buffer)
                remaining -= 1
                logger.debug(
                    "[Resolver] Selected command '%s'", self.selected_command.name
                )

        if (
            self.selected_command is not None
            and self.selected_command.is_proxy
            and lookahead is not None
            and not lookahead.is_raw
        ):
            logger.debug(
                "[Resolver] Proxy command '%s' takes over the remaining arguments",
                self.selected_command.name,
            )
            return self._pass_through(tokens, index + 1) - index
        if remaining == 0:
            self.lock_command()
        return 1

    def resolve(self, argv: Sequence[str]) -> Resolution:
        """
        Walk the command line and return the locked command with its leftovers.

        Raises:
            UsageError: On malformed or unknown options, option misuse, or when
                no command matches.
        """
        tokens = tokenize_all(list(argv))
        index = 0
        while index < len(tokens):
            token = tokens[index]
            lookahead = tokens[index + 1] if index + 1 < len(tokens) else None

            if token.type is TokenType.MALFORMED_OPTION:
                raise UsageError(f'Malformed option "{token.literal}"')
            elif token.type is TokenType.STOP:
                index = self._pass_through(tokens, index + 1)
            elif token.type is TokenType.SHORT_OPTION:
                index += self._handle_short_option(token, lookahead)
            elif token.type is TokenType.LONG_OPTION:
                index += self._handle_long_option(token, lookahead)
            else:
                index += self._handle_raw_string(tokens, index, lookahead)

        self.lock_command()
        assert self.selected_command is not None
        return Resolution(
            command=self.selected_command,
            command_path=list(self.command_path),
            rest=self.rest,
            env=self.env,
        )
