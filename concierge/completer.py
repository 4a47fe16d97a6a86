# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `ConciergeCompleter`, the Prompt Toolkit completer used by
`Concierge.shell()`.

Completions are computed from the registered command tree:
- while the typed words still follow a registered path, the next path
  segments are suggested,
- a word starting with `-` completes to the options of the deepest command
  matched so far, followed by the global options.
"""
from __future__ import annotations

import shlex
from typing import TYPE_CHECKING, Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from concierge.command import Command
from concierge.resolver import CommandTrie, TrieNode

if TYPE_CHECKING:
    from concierge import Concierge


class ConciergeCompleter(Completer):
    """
    Prompt Toolkit completer for Concierge command lines.

    Args:
        concierge (Concierge): The instance providing commands and options.
    """

    def __init__(self, concierge: "Concierge"):
        self.concierge = concierge

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        text = document.text_before_cursor
        try:
            tokens = shlex.split(text)
        except ValueError:
            return
        cursor_at_end_of_token = not text or text.endswith((" ", "\t"))
        words = tokens if cursor_at_end_of_token else tokens[:-1]
        stub = "" if cursor_at_end_of_token else tokens[-1]

        node, command = self._walk(words)
        if stub.startswith("-"):
            suggestions = self._suggest_options(command, stub)
        elif node is not None:
            suggestions = sorted(
                segment for segment in node.children if segment.startswith(stub)
            )
        else:
            return

        for suggestion in suggestions:
            yield Completion(suggestion, start_position=-len(stub))

    def _walk(self, words: list[str]) -> tuple[TrieNode | None, Command | None]:
        """Follow the typed words down the command tree, skipping option-like words."""
        node: TrieNode | None = CommandTrie(self.concierge.commands).root
        command = next(
            (candidate for candidate in self.concierge.commands if candidate.is_default),
            None,
        )
        for word in words:
            if word == "--" or node is None:
                break
            if word.startswith("-"):
                continue
            node = node.children.get(word)
            if node is not None and node.commands:
                command = node.commands[0]
        return node, command

    def _suggest_options(self, command: Command | None, stub: str) -> list[str]:
        options = [*(command.options if command else []), *self.concierge.options]
        flags: list[str] = []
        for option in options:
            if option.long_name:
                if option.initial_value is True and not option.takes_argument:
                    flags.append(option.disable_flag or f"--{option.long_name}")
                else:
                    flags.append(f"--{option.long_name}")
            if option.short_name:
                flags.append(f"-{option.short_name}")
        return [flag for flag in dict.fromkeys(flags) if flag.startswith(stub)]
