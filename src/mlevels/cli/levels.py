"""Console script for computing methylation levels.

Copyright © 2024 The mlevels authors.
"""

import sys

import click

from mlevels.cli.common import alpha_option, output_option
from mlevels.config import LevelsConfig, load_config
from mlevels.exception import MLevelsError
from mlevels.levels import run_mlevels
from mlevels.utils import log_step_start, timer


@click.command(
    "levels",
    short_help="compute methylation level statistics from a counts file",
    options_metavar="<options>",
)
@click.option(
    "-c",
    "--counts",
    required=True,
    type=click.Path(exists=False, dir_okay=False),
    help="The counts file, sorted by chromosome and position",
)
@output_option
@alpha_option
@click.option(
    "--config",
    "config_file",
    required=False,
    default=None,
    type=click.Path(exists=False, dir_okay=False),
    help="A yaml file with the statistical settings (alpha, call_threshold)",
)
@click.option(
    "--format",
    "output_format",
    default="yaml",
    required=False,
    show_default=True,
    type=click.Choice(["yaml", "json"]),
    help="The format of the report",
)
@click.pass_context
@timer
def levels(ctx, counts, output, alpha, config_file, output_format):
    """Compute coverage and methylation levels for each cytosine context."""
    verbose = bool(ctx.obj.get("VERBOSE")) if ctx.obj else False

    log_step_start(
        "levels",
        input_files=counts,
        output=output,
        alpha=alpha,
        config=config_file,
        format=output_format,
    )

    try:
        config = load_config(config_file) if config_file else LevelsConfig()
        config = config.with_overrides(alpha=alpha)
        run_mlevels(
            verbose,
            counts,
            output,
            config=config,
            output_format=output_format,
        )
    except (OSError, MLevelsError) as exc:
        raise click.ClickException(str(exc)) from exc


if __name__ == "__main__":
    sys.exit(levels())
