"""Top-level package for mlevels.

Copyright © 2024 The mlevels authors.
"""

from importlib import metadata

__version__ = "0.0.0"

try:
    __version__ = metadata.version("mlevels")
except metadata.PackageNotFoundError:
    pass


from mlevels.config import LevelsConfig  # noqa
from mlevels.levels import compute_levels, run_mlevels
from mlevels.site import MethSite, parse_site

__all__ = ["LevelsConfig", "MethSite", "compute_levels", "parse_site", "run_mlevels"]
