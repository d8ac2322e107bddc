"""Logging setup for mlevels.

Copyright © 2024 The mlevels authors.
"""

import logging
import sys
import traceback
import typing
from pathlib import Path

import click

from mlevels.types import PathType

mlevels_root_logger = logging.getLogger("mlevels")


# ------------------------------------------------------------
# Click logging
# ------------------------------------------------------------


class StyleDict(typing.TypedDict):
    """Style dictionary for kwargs to `click.style`."""

    fg: str


class ColorFormatter(logging.Formatter):
    """Click formatter with colored levels."""

    colors: dict[str, StyleDict] = {
        "debug": StyleDict(fg="blue"),
        "info": StyleDict(fg="green"),
        "warning": StyleDict(fg="yellow"),
        "error": StyleDict(fg="red"),
        "exception": StyleDict(fg="red"),
        "critical": StyleDict(fg="red"),
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format a record with colored level.

        :param record: The record to format.
        :returns str: A formatted log record.
        """
        if not record.exc_info:
            level = record.levelname.lower()
            msg = record.getMessage()
            if level in self.colors:
                timestamp = self.formatTime(record, self.datefmt)
                colored_level = click.style(
                    f"{level.upper():<10}", **self.colors[level]
                )
                prefix = f"{timestamp} [{colored_level}]  "
                msg = "\n".join(prefix + x for x in msg.splitlines())
            return msg
        return logging.Formatter.format(self, record)


class DefaultCliFormatter(logging.Formatter):
    """Click formatter with plain levels."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a record for CLI output."""
        if not record.exc_info:
            level = record.levelname.lower()
            msg = record.getMessage()

            if level == "info":
                return msg

            return f"{level.upper()}: {msg}"
        return logging.Formatter.format(self, record)


class ClickHandler(logging.Handler):
    """Click logging handler.

    Messages are forwarded to stderr using `click.echo`.
    """

    def __init__(self, level: int = 0, use_stderr: bool = True):
        """Initialize the click handler.

        :param level: The logging level.
        :param use_stderr: Log to sys.stderr instead of sys.stdout.
        """
        super().__init__(level=level)
        self._use_stderr = use_stderr

    def emit(self, record: logging.LogRecord) -> None:
        """Do whatever it takes to actually log the specified logging record.

        :param record: The record to log.
        """
        try:
            msg = self.format(record)
            click.echo(msg, err=self._use_stderr)
        except Exception:
            self.handleError(record)


class LoggingSetup:
    """Logging setup for mlevels.

    Console messages go through click, and all messages are also written to
    `log_file` when one is given. The previous handlers and level of the
    configured logger are restored when the setup is closed.
    """

    def __init__(
        self, log_file: PathType | None = None, verbose: bool = False, logger=None
    ):
        """Initialize the logging setup.

        :param log_file: the filename of the log output
        :param verbose: enable verbose logging and console output
        :param logger: the logger to configure, default is the root logger
        """
        self.log_file = Path(log_file) if log_file is not None else None
        self.verbose = verbose
        self._root_logger = logger or logging.getLogger()
        self._handlers: list[logging.Handler] = []
        self._previous_handlers: list[logging.Handler] = []
        self._previous_level = self._root_logger.level

    def initialize(self):
        """Configure the console and file handlers."""
        self._previous_handlers = list(self._root_logger.handlers)
        self._previous_level = self._root_logger.level

        console_handler = ClickHandler()
        if self.verbose:
            console_handler.setFormatter(ColorFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
        else:
            console_handler.setFormatter(DefaultCliFormatter())
        self._handlers.append(console_handler)

        if self.log_file:
            file_handler = logging.FileHandler(str(self.log_file), mode="w")
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s %(name)s %(levelname)-8s %(message)s")
            )
            self._handlers.append(file_handler)

        self._root_logger.handlers = list(self._handlers)
        self._root_logger.setLevel(logging.DEBUG if self.verbose else logging.INFO)

    def __enter__(self):
        """Enter the context manager.

        This will initialize the logging setup.
        """
        self.initialize()
        return self

    def close(self):
        """Close the handlers and restore the previous logging configuration."""
        for handler in self._handlers:
            handler.close()
        self._handlers = []
        self._root_logger.handlers = self._previous_handlers
        self._root_logger.setLevel(self._previous_level)

    def __exit__(self, exc_type, exc_value, traceback_obj):
        """Exit the context manager.

        Unexpected exceptions are written to the log before the handlers
        are closed.
        """

        def log_exception(exc_type, exc_value, traceback_obj):
            if issubclass(exc_type, click.exceptions.ClickException) or issubclass(
                exc_type, click.exceptions.Exit
            ):
                # Click exceptions are reported by click itself
                return False

            if issubclass(exc_type, SystemExit):
                return False

            self._root_logger.critical(
                "Unhandled exception of type: {}".format(exc_type.__name__)
            )
            self._root_logger.critical("Exception message was: {}".format(exc_value))
            for item in traceback.format_exception(exc_type, exc_value, traceback_obj):
                for line in item.splitlines():
                    self._root_logger.critical(line)

        try:
            if exc_type is not None:
                log_exception(exc_type, exc_value, traceback_obj)
        finally:
            self.close()

        # Reraise exception higher up the stack
        return False


def handle_unhandled_exception(exc_type, exc_value, exc_traceback):
    """Handle "unhandled" exceptions."""
    if issubclass(exc_type, KeyboardInterrupt):
        # Will call default excepthook
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return

    # Create a critical level log message with info from the except hook.
    mlevels_root_logger.critical(
        "Unhandled exception", exc_info=(exc_type, exc_value, exc_traceback)
    )


# Assign the excepthook to the handler
sys.excepthook = handle_unhandled_exception
