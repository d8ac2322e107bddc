"""Main console script for mlevels.

Copyright © 2024 The mlevels authors.
"""

import sys

import click

from mlevels import __version__
from mlevels.cli.common import OrderedGroup, logger
from mlevels.cli.levels import levels
from mlevels.logging import LoggingSetup


@click.group(cls=OrderedGroup, name="mlevels")
@click.version_option(__version__)
@click.option(
    "-v",
    "--verbose",
    type=click.BOOL,
    default=False,
    is_flag=True,
    help="Show extended messages during execution",
)
@click.option(
    "--log-file",
    required=False,
    default=None,
    type=click.Path(exists=False, dir_okay=False),
    help="The path to the log file (it is created if it does not exist)",
)
@click.pass_context
def main_cli(ctx, verbose: bool, log_file: str):
    """Run the main CLI entrypoint for mlevels."""
    # Pass arguments to other commands
    ctx.ensure_object(dict)

    # This registers the logger with it's context manager,
    # so that it is clean-up properly when the command is done.
    ctx.obj["LOGGER"] = ctx.with_resource(LoggingSetup(log_file, verbose=verbose))
    ctx.obj["VERBOSE"] = verbose

    if verbose:
        logger.info("Running in VERBOSE mode")
    return 0


main_cli.add_command(levels)


if __name__ == "__main__":
    sys.exit(main_cli())  # pragma: no cover
