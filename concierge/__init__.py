"""
Concierge CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .command import Command
from .concierge import Concierge
from .exceptions import ConciergeError, ConfigurationError, PatternError, UsageError
from .flags import CommandFlag
from .logger import logger
from .option import Option
from .pattern import Definition, parse
from .resolver import Resolution
from .utils import setup_logging
from .validation import validate
from .version import __version__

__all__ = [
    "Concierge",
    "Command",
    "CommandFlag",
    "Option",
    "Definition",
    "Resolution",
    "parse",
    "validate",
    "setup_logging",
    "logger",
    "ConciergeError",
    "ConfigurationError",
    "PatternError",
    "UsageError",
    "__version__",
]
