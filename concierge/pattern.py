# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Compiles declarative command patterns into structured `Definition` objects.

A pattern is a whitespace separated list of pieces:

    remote add <name> <url> [branch] [... refspecs] [-f,--fetch] [--tags MODE] [-vvv]

Pieces:
- `word`                 path segment (must precede every argument)
- `<name>`               required argument
- `[name]`               optional argument
- `[... name]`           spread argument, collects the leftover positionals
- `[-v]`, `[--verbose]`, `[-v,--verbose]`
                         boolean option, `False` unless given
- `[--no-color]`         boolean option named `color` that defaults to `True`
- `[--without-cache]`    boolean option named `with-cache` that defaults to `True`
- `[-n,--name NAME]`     valued option, `None` unless given
- `[-vvv]`               counter option capped at the number of repetitions
- `[-abc]`               shorthand for `[-a] [-b] [-c]`

Example:
    definition = parse("install <package> [-D,--dev]")
    definition.path == ("install",)
    definition.required_arguments == ("package",)
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from concierge.exceptions import PatternError
from concierge.option import Option

PIECE_REGEXP = re.compile(r"\[[^\]]*\]|<[^>]*>|\S+")
SEGMENT_REGEXP = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9_.:-]*$")
NAME_REGEXP = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*$")
LONG_FLAG_REGEXP = re.compile(r"^--([a-z][a-z0-9]*(?:-[a-z][a-z0-9]*)*)$")
SHORT_FLAG_REGEXP = re.compile(r"^-([a-zA-Z]+)$")
SPREAD_REGEXP = re.compile(r"^\.\.\.\s*(\S+)$")


@dataclass(frozen=True)
class Definition:
    """The compiled form of a command or top-level pattern."""

    path: tuple[str, ...] = ()
    required_arguments: tuple[str, ...] = ()
    optional_arguments: tuple[str, ...] = ()
    spread: str | None = None
    options: tuple[Option, ...] = ()

    @property
    def has_arguments(self) -> bool:
        return bool(self.required_arguments or self.optional_arguments or self.spread)


def _parse_name(name: str, pattern: str) -> str:
    if not NAME_REGEXP.match(name):
        raise PatternError(f"Invalid argument name '{name}' in pattern '{pattern}'")
    return name


def _parse_short_flags(letters: str, pattern: str) -> tuple[str, int | None]:
    """Return the short letter and the counter cap (None unless repeated)."""
    if len(letters) == 1:
        return letters, None
    if len(set(letters)) == 1:
        return letters[0], len(letters)
    raise PatternError(
        f"Short flag list '-{letters}' cannot be combined with other names "
        f"in pattern '{pattern}'"
    )


def _parse_option_group(body: str, pattern: str) -> list[Option]:
    parts = body.split()
    if not parts or len(parts) > 2:
        raise PatternError(f"Malformed option '[{body}]' in pattern '{pattern}'")
    flags_text, *argument = parts
    argument_name = argument[0] if argument else None
    flags = [flag.strip() for flag in flags_text.split(",") if flag.strip()]

    short_flags: list[str] = []
    long_flags: list[str] = []
    for flag in flags:
        if flag.startswith("--"):
            long_flags.append(flag)
        elif flag.startswith("-"):
            short_flags.append(flag)
        else:
            raise PatternError(f"Malformed option '[{body}]' in pattern '{pattern}'")

    if len(short_flags) > 1 or len(long_flags) > 1:
        raise PatternError(
            f"Option '[{body}]' may declare at most one short and one long name "
            f"in pattern '{pattern}'"
        )

    short_letters = ""
    if short_flags:
        match = SHORT_FLAG_REGEXP.match(short_flags[0])
        if not match:
            raise PatternError(
                f"Malformed short option '{short_flags[0]}' in pattern '{pattern}'"
            )
        short_letters = match.group(1)

    # `[-abc]`: a bundle of independent boolean flags
    if len(set(short_letters)) > 1:
        if long_flags or argument_name or len(set(short_letters)) != len(short_letters):
            raise PatternError(
                f"Short flag list '-{short_letters}' cannot be combined with other "
                f"names in pattern '{pattern}'"
            )
        return [Option(short_name=letter) for letter in short_letters]

    short_name: str | None = None
    max_value: int | None = None
    if short_letters:
        short_name, max_value = _parse_short_flags(short_letters, pattern)

    long_name: str | None = None
    negated = False
    if long_flags:
        match = LONG_FLAG_REGEXP.match(long_flags[0])
        if not match:
            raise PatternError(
                f"Malformed long option '{long_flags[0]}' in pattern '{pattern}'"
            )
        long_name = match.group(1)
        if long_name.startswith("no-"):
            long_name = long_name[len("no-") :]
            negated = True
        elif long_name.startswith("without-"):
            long_name = f"with-{long_name[len('without-'):]}"
            negated = True

    if argument_name is not None:
        if negated:
            raise PatternError(
                f"Negated option '{long_flags[0]}' cannot take an argument "
                f"in pattern '{pattern}'"
            )
        if max_value is not None:
            raise PatternError(
                f"Counter option '[{body}]' cannot take an argument in pattern '{pattern}'"
            )
        return [
            Option(
                short_name=short_name,
                long_name=long_name,
                argument_name=argument_name,
                initial_value=None,
            )
        ]

    if max_value is not None:
        if negated:
            raise PatternError(
                f"Counter option '[{body}]' cannot be negated in pattern '{pattern}'"
            )
        return [
            Option(
                short_name=short_name,
                long_name=long_name,
                initial_value=0,
                max_value=max_value,
            )
        ]

    return [Option(short_name=short_name, long_name=long_name, initial_value=negated)]


def parse(pattern: str) -> Definition:
    """
    Compile a pattern string into a `Definition`.

    Args:
        pattern (str): The declarative pattern.

    Returns:
        Definition: Path segments, argument names, spread name and options.

    Raises:
        PatternError: If the pattern is malformed.
    """
    if not isinstance(pattern, str):
        raise PatternError(f"Pattern must be a string, got {type(pattern).__name__}")

    path: list[str] = []
    required: list[str] = []
    optional: list[str] = []
    spread: str | None = None
    options: list[Option] = []

    for match in PIECE_REGEXP.finditer(pattern):
        piece = match.group(0)
        has_arguments = bool(required or optional or spread)

        if piece.startswith("<"):
            if not piece.endswith(">"):
                raise PatternError(f"Unterminated '{piece}' in pattern '{pattern}'")
            if optional or spread:
                raise PatternError(
                    f"Required argument '{piece}' cannot follow optional arguments "
                    f"in pattern '{pattern}'"
                )
            required.append(_parse_name(piece[1:-1].strip(), pattern))
        elif piece.startswith("["):
            if not piece.endswith("]"):
                raise PatternError(f"Unterminated '{piece}' in pattern '{pattern}'")
            body = piece[1:-1].strip()
            if body.startswith("-"):
                options.extend(_parse_option_group(body, pattern))
                continue
            if spread:
                raise PatternError(
                    f"Nothing may follow the spread argument '{spread}' "
                    f"in pattern '{pattern}'"
                )
            spread_match = SPREAD_REGEXP.match(body)
            if spread_match:
                spread = _parse_name(spread_match.group(1), pattern)
            else:
                optional.append(_parse_name(body, pattern))
        elif SEGMENT_REGEXP.match(piece):
            if has_arguments:
                raise PatternError(
                    f"Path segment '{piece}' must come before every argument "
                    f"in pattern '{pattern}'"
                )
            path.append(piece)
        else:
            raise PatternError(f"Unexpected '{piece}' in pattern '{pattern}'")

    names = [*required, *optional, *([spread] if spread else [])]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise PatternError(
            f"Duplicate argument names {duplicates} in pattern '{pattern}'"
        )

    return Definition(
        path=tuple(path),
        required_arguments=tuple(required),
        optional_arguments=tuple(optional),
        spread=spread,
        options=tuple(options),
    )
