# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `CommandFlag`, the bit-set of behaviors a command can opt into.

- DEFAULT: selected when no input token matches a registered path.
- PROXY: once selected, every remaining token is passed through unparsed.
- HIDDEN: omitted from the top-level usage listing.

Flags combine with `|` (`CommandFlag.DEFAULT | CommandFlag.HIDDEN`) and can be
built from config-friendly names with `CommandFlag.from_names(["proxy"])`.
"""
from __future__ import annotations

from enum import IntFlag
from typing import Iterable


class CommandFlag(IntFlag):
    NONE = 0
    DEFAULT = 1
    PROXY = 2
    HIDDEN = 4

    @classmethod
    def from_names(cls, names: Iterable[str]) -> CommandFlag:
        result = cls.NONE
        for name in names:
            try:
                result |= cls[name.strip().upper()]
            except KeyError:
                valid = ", ".join(
                    member.name.lower() for member in cls if member is not cls.NONE
                )
                raise ValueError(
                    f"Invalid {cls.__name__}: '{name}'. Must be one of: {valid}"
                ) from None
        return result
