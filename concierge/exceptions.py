# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used in the Concierge CLI framework.

Two families of failures exist. Configuration errors are programmer mistakes
(conflicting option names, several default commands, malformed patterns) and
are raised eagerly at registration or consistency-check time. Usage errors are
caused by the person typing the command line; `Concierge.run` catches them,
renders the usage text next to the error, and reports exit status 1.

Exception Hierarchy:
- ConciergeError
    ├── ConfigurationError
    │     └── PatternError
    └── UsageError

Anything that is not a `ConciergeError` is treated as a defect and re-raised
to the caller after being logged.
"""


class ConciergeError(Exception):
    """Base exception for the Concierge framework."""


class ConfigurationError(ConciergeError):
    """Exception raised when the registered commands or options are inconsistent."""


class PatternError(ConfigurationError):
    """Exception raised when a command pattern string cannot be compiled."""


class UsageError(ConciergeError):
    """Exception raised when the command line does not match any valid invocation."""
