"""
This module contains all the extra exception classes and handling
defined by mlevels

Copyright © 2024 The mlevels authors.
"""

from typing import Optional


class MLevelsError(Exception):
    """Base class for all errors raised by mlevels."""


class SiteParseError(MLevelsError, ValueError):
    """
    Raised when a line of a counts file cannot be parsed into a site.

    Attributes:
        line: the offending line
        reason: why the line was rejected
    """

    def __init__(self, line: str, reason: Optional[str] = None):
        self.line = line
        self.reason = reason
        msg = f"failed parsing site: {line}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class SiteContextError(MLevelsError, ValueError):
    """
    Raised when a parsed site matches none of the known context classes.

    Attributes:
        line: the offending line in counts format
        context: the unrecognized context string
    """

    def __init__(self, line: str, context: str):
        self.line = line
        self.context = context
        super().__init__(f"bad site type: {line}")


class ConfigError(MLevelsError):
    """Raised when a configuration file or value is invalid."""


class CountsFileError(MLevelsError):
    """Raised when a counts file cannot be decoded as text."""
