"""
Console script for mlevels (common functions)

Copyright © 2024 The mlevels authors.
"""

import collections
import functools
import logging
from typing import Dict, Mapping, Optional

import click

logger = logging.getLogger("mlevels.cli")


# code snippet obtained from
# https://stackoverflow.com/questions/47972638/how-can-i-define-the-order-of-click-sub-commands-in-help
# the purpose is to order subcommands in order of addition
class OrderedGroup(click.Group):
    """Custom click.Group that keeps insertion order for subcommands."""

    def __init__(  # noqa: D107
        self,
        name: Optional[str] = None,
        commands: Optional[Dict[str, click.Command]] = None,
        **kwargs,
    ):
        super(OrderedGroup, self).__init__(name, commands, **kwargs)
        self.commands = commands or collections.OrderedDict()

    def list_commands(  # type: ignore
        self, ctx: click.Context
    ) -> Mapping[str, click.Command]:
        """Return a list of subcommands."""
        return self.commands


def output_option(func):
    """Wrap a Click entrypoint to add the --output option."""

    @click.option(
        "-o",
        "--output",
        required=True,
        type=click.Path(exists=False, dir_okay=False),
        help=(
            "The path of the report file (intermediate directories are created if"
            " they do not exist)"
        ),
    )
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return func(*args, **kwargs)

    return wrapper


def _alpha_validator(ctx, param, value):
    if value is None:
        return None
    if not 0.0 < value < 1.0:
        raise click.BadParameter("--alpha must be strictly between 0 and 1")
    return value


def alpha_option(func):
    """Decorate a click command and add the --alpha option."""

    @click.option(
        "--alpha",
        default=None,
        required=False,
        type=click.FLOAT,
        callback=_alpha_validator,
        help=(
            "The significance level of the confidence interval used to call sites."
            " Overrides the value in --config. Default: 0.05"
        ),
    )
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return func(*args, **kwargs)

    return wrapper
