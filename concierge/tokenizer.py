# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Classifies raw command-line arguments into lexical tokens.

Every argument string maps to exactly one `TokenType`, independently of the
tokens around it:

- STOP: the literal `--`; everything after it is raw text.
- LONG_OPTION: `--name`, `--name=value`, `--no-name`, `--without-name`.
  `--without-x` is stored under the canonical name `with-x`.
- SHORT_OPTION: `-x`, `-x=value`, `-xvalue`, `-abc`.
- MALFORMED_OPTION: starts with a dash but fits neither option shape.
- RAW_STRING: anything else (command path segment, positional, option value).
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

LONG_OPTION_REGEXP = re.compile(
    r"^--(?:(no|without)-)?([a-z][a-z0-9]*(?:-[a-z][a-z0-9]*)*)(?:(=)(.*))?$"
)
SHORT_OPTION_REGEXP = re.compile(r"^-([a-zA-Z])(?:=(.*))?(.*)$")


class TokenType(Enum):
    LONG_OPTION = "long_option"
    SHORT_OPTION = "short_option"
    STOP = "stop"
    MALFORMED_OPTION = "malformed_option"
    RAW_STRING = "raw_string"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """
    A classified argument.

    Attributes:
        type (TokenType): The lexical category.
        literal (str): The original argument string.
        name (str | None): Canonical long option name.
        enabled (bool): False for `--no-x` / `--without-x`.
        leading (str | None): First letter of a short option.
        value (str | None): Inline `=value`, if one was given.
        rest (str): Trailing text of a short option (`-abc` -> `bc`).
    """

    type: TokenType
    literal: str
    name: str | None = None
    enabled: bool = True
    leading: str | None = None
    value: str | None = None
    rest: str = ""

    @property
    def is_raw(self) -> bool:
        return self.type is TokenType.RAW_STRING


def tokenize(literal: str) -> Token:
    """Classify a single raw argument."""
    if literal == "--":
        return Token(TokenType.STOP, literal)

    if literal.startswith("--"):
        match = LONG_OPTION_REGEXP.match(literal)
        if not match:
            return Token(TokenType.MALFORMED_OPTION, literal)
        prefix, name, equals, value = match.groups()
        return Token(
            TokenType.LONG_OPTION,
            literal,
            name=f"with-{name}" if prefix == "without" else name,
            enabled=prefix is None,
            value=(value or "") if equals else None,
        )

    if literal.startswith("-"):
        match = SHORT_OPTION_REGEXP.match(literal)
        if not match:
            return Token(TokenType.MALFORMED_OPTION, literal)
        leading, value, rest = match.groups()
        return Token(
            TokenType.SHORT_OPTION,
            literal,
            leading=leading,
            value=value,
            rest=rest,
        )

    return Token(TokenType.RAW_STRING, literal)


def tokenize_all(argv: list[str]) -> list[Token]:
    return [tokenize(literal) for literal in argv]
